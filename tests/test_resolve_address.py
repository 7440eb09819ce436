"""
Unit tests for the strategy chain in social.graze.addr.resolve.address

Tests cover strategy ordering, the domain registry fallthrough, fault handling at the single catch
boundary, validation of the identifier, and the response models.
"""

import pytest
from unittest.mock import AsyncMock, patch
from aiohttp import ClientConnectionError

from social.graze.addr.resolve.address import (
    AddressResolver,
    default_strategies,
    resolve_address,
)
from social.graze.addr.resolve.exceptions import InvalidIdentifierException
from social.graze.addr.resolve.model import (
    RESOLVE_FAILURE_MESSAGE,
    ResolutionFailure,
    ResolutionSource,
    ResolvedAddress,
    StrategyResult,
)
from social.graze.addr.resolve.strategy import (
    DirectAddressStrategy,
    DomainRegistryStrategy,
    NameServiceStrategy,
    ResolutionStrategy,
    WalletProfileStrategy,
)

from conftest import (
    DOMAIN_REGISTRY_URL,
    NAME_SERVICE_URL,
    SYSTEM_PROGRAM_ADDRESS,
    WALLET_PROFILE_URL,
    make_session,
)


class TestDefaultStrategies:
    """Test suite for the default strategy chain."""

    def test_default_order(self):
        strategies = default_strategies()
        assert [type(s) for s in strategies] == [
            DirectAddressStrategy,
            NameServiceStrategy,
            DomainRegistryStrategy,
            WalletProfileStrategy,
        ]

    def test_resolver_uses_default_chain(self):
        resolver = AddressResolver()
        assert [s.source for s in resolver.strategies] == [
            ResolutionSource.direct,
            ResolutionSource.nameservice,
            ResolutionSource.domain_registry,
            ResolutionSource.wallet_profile,
        ]


class TestAddressResolver:
    """Test suite for AddressResolver.resolve."""

    @pytest.mark.asyncio
    async def test_direct_address(self):
        session = make_session({})

        result = await AddressResolver().resolve(session, SYSTEM_PROGRAM_ADDRESS)

        assert isinstance(result, ResolvedAddress)
        assert result.address == SYSTEM_PROGRAM_ADDRESS
        assert result.source == ResolutionSource.direct
        assert result.resolve_time >= 0
        session.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_direct_address_is_idempotent(self):
        resolver = AddressResolver()
        session = make_session({})

        first = await resolver.resolve(session, SYSTEM_PROGRAM_ADDRESS)
        second = await resolver.resolve(session, SYSTEM_PROGRAM_ADDRESS)

        assert (first.address, first.source) == (second.address, second.source)

    @pytest.mark.asyncio
    async def test_name_service(self):
        session = make_session({f"{NAME_SERVICE_URL}example.sol": {"result": "ABC123"}})

        result = await AddressResolver().resolve(session, "example.sol")

        assert isinstance(result, ResolvedAddress)
        assert result.address == "ABC123"
        assert result.source == ResolutionSource.nameservice
        assert session.get.call_count == 1

    @pytest.mark.asyncio
    async def test_name_service_uppercase_suffix(self):
        session = make_session({f"{NAME_SERVICE_URL}Example.SOL": {"result": "ABC123"}})

        result = await AddressResolver().resolve(session, "Example.SOL")

        assert result.source == ResolutionSource.nameservice

    @pytest.mark.asyncio
    async def test_domain_registry(self):
        session = make_session(
            {f"{DOMAIN_REGISTRY_URL}example.com": {"status": "success", "owner": "XYZ789"}}
        )

        result = await AddressResolver().resolve(session, "example.com")

        assert isinstance(result, ResolvedAddress)
        assert result.address == "XYZ789"
        assert result.source == ResolutionSource.domain_registry

    @pytest.mark.asyncio
    async def test_domain_registry_falls_through_to_wallet_profile(self):
        session = make_session(
            {
                f"{DOMAIN_REGISTRY_URL}example.com": {"status": "error"},
                f"{WALLET_PROFILE_URL}example.com": {
                    "addresses": {"solana:101": "DEF456"}
                },
            }
        )

        result = await AddressResolver().resolve(session, "example.com")

        assert isinstance(result, ResolvedAddress)
        assert result.address == "DEF456"
        assert result.source == ResolutionSource.wallet_profile
        assert [c.args[0] for c in session.get.call_args_list] == [
            f"{DOMAIN_REGISTRY_URL}example.com",
            f"{WALLET_PROFILE_URL}example.com",
        ]

    @pytest.mark.asyncio
    async def test_undotted_identifier_goes_to_wallet_profile(self):
        session = make_session(
            {f"{WALLET_PROFILE_URL}phantomuser": {"addresses": {"solana:101": "DEF456"}}}
        )

        result = await AddressResolver().resolve(session, "phantomuser")

        assert result.source == ResolutionSource.wallet_profile
        assert session.get.call_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("identifier", ["", None])
    async def test_missing_identifier(self, identifier):
        session = make_session({})

        with pytest.raises(InvalidIdentifierException, match="Address parameter is required"):
            await AddressResolver().resolve(session, identifier)

        session.get.assert_not_called()

    @pytest.mark.asyncio
    @patch("social.graze.addr.resolve.address.sentry_sdk")
    async def test_name_service_fault_does_not_fall_back(self, mock_sentry):
        session = make_session(
            {f"{NAME_SERVICE_URL}example.sol": ClientConnectionError("connection reset")}
        )

        result = await AddressResolver().resolve(session, "example.sol")

        assert isinstance(result, ResolutionFailure)
        assert result.error == RESOLVE_FAILURE_MESSAGE
        assert result.details == "connection reset"
        assert result.resolve_time >= 0
        assert session.get.call_count == 1
        mock_sentry.capture_exception.assert_called_once()

    @pytest.mark.asyncio
    async def test_domain_registry_fault_is_fatal(self):
        session = make_session(
            {f"{DOMAIN_REGISTRY_URL}example.com": ClientConnectionError("refused")}
        )

        result = await AddressResolver().resolve(session, "example.com")

        assert isinstance(result, ResolutionFailure)
        assert result.details == "refused"
        assert session.get.call_count == 1

    @pytest.mark.asyncio
    async def test_wallet_profile_missing_field(self):
        session = make_session({f"{WALLET_PROFILE_URL}phantomuser": {"addresses": {}}})

        result = await AddressResolver().resolve(session, "phantomuser")

        assert isinstance(result, ResolutionFailure)
        assert "solana:101" in result.details

    @pytest.mark.asyncio
    async def test_fault_without_message_uses_placeholder(self):
        session = make_session({f"{WALLET_PROFILE_URL}phantomuser": TimeoutError()})

        result = await AddressResolver().resolve(session, "phantomuser")

        assert isinstance(result, ResolutionFailure)
        assert result.details == "Unknown error"

    @pytest.mark.asyncio
    async def test_exhausted_chain(self):
        """Test a chain without a last resort reports that nothing matched."""
        session = make_session({})
        resolver = AddressResolver([DirectAddressStrategy()])

        result = await resolver.resolve(session, "phantomuser")

        assert isinstance(result, ResolutionFailure)
        assert "no strategy produced an address" in result.details

    @pytest.mark.asyncio
    async def test_custom_strategy_extends_chain(self):
        """Test a fifth source can be added without changing the driver."""

        class StaticStrategy(ResolutionStrategy):
            source = ResolutionSource.wallet_profile

            def matches(self, identifier: str) -> bool:
                return identifier.startswith("@")

            async def attempt(self, session, identifier):
                return StrategyResult.matched("STATIC1")

        session = make_session({})
        resolver = AddressResolver([DirectAddressStrategy(), StaticStrategy()])

        result = await resolver.resolve(session, "@someone")

        assert isinstance(result, ResolvedAddress)
        assert result.address == "STATIC1"

    @pytest.mark.asyncio
    async def test_soft_miss_then_match_reports_later_source(self):
        declining = AsyncMock(spec=ResolutionStrategy)
        declining.source = ResolutionSource.domain_registry
        declining.run.return_value = StrategyResult.soft_miss("no owner")

        accepting = AsyncMock(spec=ResolutionStrategy)
        accepting.source = ResolutionSource.wallet_profile
        accepting.run.return_value = StrategyResult.matched("DEF456")

        session = make_session({})
        result = await AddressResolver([declining, accepting]).resolve(
            session, "example.com"
        )

        assert result.source == ResolutionSource.wallet_profile
        declining.run.assert_awaited_once_with(session, "example.com")
        accepting.run.assert_awaited_once_with(session, "example.com")

    @pytest.mark.asyncio
    async def test_resolve_address_uses_default_chain(self):
        result = await resolve_address(make_session({}), SYSTEM_PROGRAM_ADDRESS)
        assert result.source == ResolutionSource.direct


class TestResponseModels:
    """Test suite for the response body shapes."""

    def test_resolved_address_body(self):
        resolved = ResolvedAddress(
            address="ABC123", source=ResolutionSource.domain_registry, resolve_time=1.5
        )
        assert resolved.response_body() == {
            "address": "ABC123",
            "source": "domain-registry",
            "resolveTime": 1.5,
        }

    def test_resolution_failure_body(self):
        failure = ResolutionFailure(details="boom", resolve_time=2.0)
        assert failure.response_body() == {
            "error": "Failed to resolve address",
            "details": "boom",
            "resolveTime": 2.0,
        }

    def test_negative_resolve_time_rejected(self):
        with pytest.raises(ValueError):
            ResolvedAddress(
                address="ABC123", source=ResolutionSource.direct, resolve_time=-1
            )
