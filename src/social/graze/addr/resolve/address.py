"""Solana address resolution.

Drives an ordered chain of resolution strategies, returning the address produced by the first one
that matches, along with the strategy's source tag and the elapsed time.
"""

import logging
from time import perf_counter
from typing import List, Optional, Sequence, Union

from aiohttp import ClientSession
import sentry_sdk

from social.graze.addr.resolve.exceptions import (
    InvalidIdentifierException,
    ResolutionException,
)
from social.graze.addr.resolve.model import (
    UNKNOWN_ERROR_DETAILS,
    ResolutionFailure,
    ResolvedAddress,
    StrategyOutcome,
)
from social.graze.addr.resolve.strategy import (
    DEFAULT_DOMAIN_REGISTRY_URL,
    DEFAULT_NAME_SERVICE_SUFFIX,
    DEFAULT_NAME_SERVICE_URL,
    DEFAULT_WALLET_PROFILE_ADDRESS_KEY,
    DEFAULT_WALLET_PROFILE_URL,
    DirectAddressStrategy,
    DomainRegistryStrategy,
    NameServiceStrategy,
    ResolutionStrategy,
    WalletProfileStrategy,
)

logger = logging.getLogger(__name__)


def default_strategies(
    name_service_url: str = DEFAULT_NAME_SERVICE_URL,
    name_service_suffix: str = DEFAULT_NAME_SERVICE_SUFFIX,
    domain_registry_url: str = DEFAULT_DOMAIN_REGISTRY_URL,
    wallet_profile_url: str = DEFAULT_WALLET_PROFILE_URL,
    wallet_profile_address_key: str = DEFAULT_WALLET_PROFILE_ADDRESS_KEY,
) -> List[ResolutionStrategy]:
    """Default strategy chain in priority order."""
    return [
        DirectAddressStrategy(),
        NameServiceStrategy(name_service_url, name_service_suffix),
        DomainRegistryStrategy(domain_registry_url),
        WalletProfileStrategy(wallet_profile_url, wallet_profile_address_key),
    ]


def elapsed_millis(start: float) -> float:
    return max(0.0, (perf_counter() - start) * 1000.0)


class AddressResolver:
    """Resolves identifiers to Solana addresses using an ordered strategy chain.

    Stateless: a single resolver is shared by every request, and each call to resolve is
    independent of every other.
    """

    def __init__(self, strategies: Optional[Sequence[ResolutionStrategy]] = None):
        if strategies is not None:
            self.strategies = list(strategies)
        else:
            self.strategies = default_strategies()

    async def resolve(
        self, session: ClientSession, identifier: Optional[str]
    ) -> Union[ResolvedAddress, ResolutionFailure]:
        """Resolve an identifier to a canonical address.

        Strategies run strictly one after another. The first strategy that matches returns the
        result. A soft miss moves on to the next strategy. Any exception raised by a strategy ends
        the resolution and is returned as a ResolutionFailure.

        Args:
            session: HTTP client session used by network-backed strategies
            identifier: Raw address, domain or profile handle

        Returns:
            ResolvedAddress on success, ResolutionFailure on any fault

        Raises:
            InvalidIdentifierException: If identifier is missing or empty
        """
        if not identifier:
            raise InvalidIdentifierException.missing()

        start = perf_counter()
        try:
            for strategy in self.strategies:
                result = await strategy.run(session, identifier)

                if result.outcome == StrategyOutcome.matched and result.address:
                    resolved = ResolvedAddress(
                        address=result.address,
                        source=strategy.source,
                        resolve_time=elapsed_millis(start),
                    )
                    logger.info(
                        "Resolved %s via %s in %.2fms",
                        identifier,
                        resolved.source.value,
                        resolved.resolve_time,
                    )
                    return resolved

                if result.outcome == StrategyOutcome.soft_miss:
                    logger.info(
                        "Strategy %s declined %s: %s",
                        strategy.source.value,
                        identifier,
                        result.reason,
                    )

            raise ResolutionException.exhausted()
        except Exception as e:
            sentry_sdk.capture_exception(e)
            logger.warning(
                "Failed to resolve %s: %s: %s", identifier, type(e).__name__, e
            )
            return ResolutionFailure(
                details=str(e) or UNKNOWN_ERROR_DETAILS,
                resolve_time=elapsed_millis(start),
            )


async def resolve_address(
    session: ClientSession, identifier: Optional[str]
) -> Union[ResolvedAddress, ResolutionFailure]:
    """Resolve an identifier with the default strategy chain."""
    return await AddressResolver().resolve(session, identifier)
