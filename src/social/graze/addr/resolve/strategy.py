"""Resolution strategies.

Each strategy pairs a predicate over the raw identifier with a way of turning that identifier into a
Solana address. Strategies are evaluated in order by the AddressResolver.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Final
from urllib.parse import quote

import base58
from aiohttp import ClientSession

from social.graze.addr.resolve.exceptions import ResolutionException
from social.graze.addr.resolve.model import ResolutionSource, StrategyResult

logger = logging.getLogger(__name__)

SOLANA_ADDRESS_BYTES: Final = 32

DEFAULT_NAME_SERVICE_URL: Final = (
    "https://sns-sdk-proxy.bonfida.workers.dev/resolve/{identifier}"
)
DEFAULT_NAME_SERVICE_SUFFIX: Final = ".sol"
DEFAULT_DOMAIN_REGISTRY_URL: Final = (
    "https://alldomains.id/api/domain-owner/{identifier}"
)
DEFAULT_WALLET_PROFILE_URL: Final = (
    "https://api.phantom.app/user/v1/profiles/{identifier}"
)
DEFAULT_WALLET_PROFILE_ADDRESS_KEY: Final = "solana:101"


def is_valid_address(value: str) -> bool:
    """Check if value is a well-formed Solana address.

    A Solana address is base58 text that decodes to exactly 32 bytes.

    Args:
        value: String to check

    Returns:
        True if value decodes to a 32 byte public key
    """
    if not value or value != value.strip():
        return False
    try:
        decoded = base58.b58decode(value)
    except ValueError:
        return False
    return len(decoded) == SOLANA_ADDRESS_BYTES


def upstream_url(template: str, identifier: str) -> str:
    """Place the identifier into a URL template as a single path segment."""
    return template.format(identifier=quote(identifier, safe=""))


async def fetch_json(session: ClientSession, url: str) -> Dict[str, Any]:
    """GET a URL and decode its body as a JSON object.

    The status code is not checked; upstream services describe failures in the body.

    Raises:
        ResolutionException: If the body decodes to something other than an object
    """
    async with session.get(url) as resp:
        logger.debug("GET %s returned %s", url, resp.status)
        body = await resp.json(content_type=None)
    if not isinstance(body, dict):
        raise ResolutionException.unexpected_body(url)
    return body


class ResolutionStrategy(ABC):
    """One way of turning an identifier into an address.

    Subclasses provide the predicate and the attempt. Callers use run, which skips the attempt when
    the predicate does not match.
    """

    source: ResolutionSource

    @abstractmethod
    def matches(self, identifier: str) -> bool: ...

    @abstractmethod
    async def attempt(
        self, session: ClientSession, identifier: str
    ) -> StrategyResult: ...

    async def run(self, session: ClientSession, identifier: str) -> StrategyResult:
        if not self.matches(identifier):
            return StrategyResult.not_applicable()
        return await self.attempt(session, identifier)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.source.value})"


class DirectAddressStrategy(ResolutionStrategy):
    """Returns identifiers that already are addresses, without network I/O."""

    source = ResolutionSource.direct

    def matches(self, identifier: str) -> bool:
        return is_valid_address(identifier)

    async def attempt(
        self, session: ClientSession, identifier: str
    ) -> StrategyResult:
        return StrategyResult.matched(identifier)


class NameServiceStrategy(ResolutionStrategy):
    """Resolves .sol names through the name-service proxy.

    The proxy answers {"s": "ok", "result": "<address>"}. Unknown names come back with "s" set to
    "error" and the message in "result", which is treated as a fault.
    """

    source = ResolutionSource.nameservice

    def __init__(
        self,
        url_template: str = DEFAULT_NAME_SERVICE_URL,
        suffix: str = DEFAULT_NAME_SERVICE_SUFFIX,
    ) -> None:
        self.url_template = url_template
        self.suffix = suffix.lower()

    def matches(self, identifier: str) -> bool:
        return identifier.lower().endswith(self.suffix)

    async def attempt(
        self, session: ClientSession, identifier: str
    ) -> StrategyResult:
        body = await fetch_json(session, upstream_url(self.url_template, identifier))

        status = body.get("s", None)
        if status is not None and status != "ok":
            raise ResolutionException.upstream_error(
                "name-service", str(body.get("result", status))
            )

        address = body.get("result", None)
        if not address:
            raise ResolutionException.missing_field("name-service", "result")
        return StrategyResult.matched(address)


class DomainRegistryStrategy(ResolutionStrategy):
    """Looks up the owner of a dotted domain in the domain-owner registry.

    A registry answer other than a successful one with an owner is a soft miss, so the identifier
    moves on to the next strategy. Network and decoding faults are not recovered.
    """

    source = ResolutionSource.domain_registry

    def __init__(self, url_template: str = DEFAULT_DOMAIN_REGISTRY_URL) -> None:
        self.url_template = url_template

    def matches(self, identifier: str) -> bool:
        return "." in identifier

    async def attempt(
        self, session: ClientSession, identifier: str
    ) -> StrategyResult:
        body = await fetch_json(session, upstream_url(self.url_template, identifier))

        status = body.get("status", None)
        owner = body.get("owner", None)
        if status == "success" and owner:
            return StrategyResult.matched(owner)
        return StrategyResult.soft_miss(f"registry status {status!r}")


class WalletProfileStrategy(ResolutionStrategy):
    """Looks up a wallet profile by the raw identifier.

    The profile lists addresses keyed by chain and network, e.g. "solana:101" for Solana mainnet.
    This strategy matches every identifier and is meant to be last in the chain.
    """

    source = ResolutionSource.wallet_profile

    def __init__(
        self,
        url_template: str = DEFAULT_WALLET_PROFILE_URL,
        address_key: str = DEFAULT_WALLET_PROFILE_ADDRESS_KEY,
    ) -> None:
        self.url_template = url_template
        self.address_key = address_key

    def matches(self, identifier: str) -> bool:
        return True

    async def attempt(
        self, session: ClientSession, identifier: str
    ) -> StrategyResult:
        body = await fetch_json(session, upstream_url(self.url_template, identifier))

        addresses = body.get("addresses", None)
        if not isinstance(addresses, dict):
            raise ResolutionException.missing_field("wallet-profile", "addresses")

        address = addresses.get(self.address_key, None)
        if not address:
            raise ResolutionException.missing_field(
                "wallet-profile", f"addresses[{self.address_key}]"
            )
        return StrategyResult.matched(address)
