"""Resolution models.

Source tags, strategy outcomes and the response bodies returned to callers.
"""

from enum import Enum, IntEnum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

RESOLVE_FAILURE_MESSAGE = "Failed to resolve address"
UNKNOWN_ERROR_DETAILS = "Unknown error"


class ResolutionSource(str, Enum):
    """Names the strategy that produced a resolved address."""

    direct = "direct"
    nameservice = "nameservice"
    domain_registry = "domain-registry"
    wallet_profile = "wallet-profile"


class StrategyOutcome(IntEnum):
    """Outcome of running a single strategy.

    not_applicable means the strategy's predicate did not match and nothing was tried.
    soft_miss means the strategy tried and declined, and the chain should continue.
    """

    matched = 1
    not_applicable = 2
    soft_miss = 3


class StrategyResult(BaseModel):
    outcome: StrategyOutcome
    address: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def matched(cls, address: str) -> "StrategyResult":
        return cls(outcome=StrategyOutcome.matched, address=address)

    @classmethod
    def not_applicable(cls) -> "StrategyResult":
        return cls(outcome=StrategyOutcome.not_applicable)

    @classmethod
    def soft_miss(cls, reason: Optional[str] = None) -> "StrategyResult":
        return cls(outcome=StrategyOutcome.soft_miss, reason=reason)


class ResolvedAddress(BaseModel):
    """A canonical address and the strategy that produced it.

    resolve_time is the elapsed milliseconds since resolution started.
    """

    address: str
    source: ResolutionSource
    resolve_time: float = Field(ge=0, serialization_alias="resolveTime")

    def response_body(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class ResolutionFailure(BaseModel):
    """Returned when no strategy produced an address or a strategy faulted."""

    error: str = RESOLVE_FAILURE_MESSAGE
    details: str = UNKNOWN_ERROR_DETAILS
    resolve_time: float = Field(ge=0, serialization_alias="resolveTime")

    def response_body(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
