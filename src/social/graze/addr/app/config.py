"""
Configuration Module for the ADDR Service

This module defines the configuration for the address resolution service, using Pydantic settings
for validation and aiohttp AppKeys for dependency injection.

Settings are loaded from environment variables with defaults that point at the public upstream
services, so the service runs without any configuration. All handlers access settings and shared
resources through the typed AppKeys defined at the bottom of this module.

Key configuration areas include:
- Service networking and debugging
- Error reporting and metrics
- Upstream resolution service endpoints
"""

from typing import Final, Optional
import logging
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from aiohttp import web
from aiohttp import ClientSession

from social.graze.addr.app.metrics import MetricsClient
from social.graze.addr.resolve.address import AddressResolver, default_strategies
from social.graze.addr.resolve.strategy import (
    DEFAULT_DOMAIN_REGISTRY_URL,
    DEFAULT_NAME_SERVICE_SUFFIX,
    DEFAULT_NAME_SERVICE_URL,
    DEFAULT_WALLET_PROFILE_ADDRESS_KEY,
    DEFAULT_WALLET_PROFILE_URL,
)


logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings for the ADDR service.

    Environment variables are mapped to fields by name, e.g. NAME_SERVICE_URL sets
    name_service_url. URL templates must contain a single {identifier} placeholder, which is
    replaced with the percent-encoded identifier being resolved.
    """

    debug: bool = False
    """
    Enable debug mode for verbose logging of outbound requests.
    Set with DEBUG=true environment variable.
    """

    http_port: int = Field(alias="port", default=5100)
    """
    HTTP port for the service to listen on.
    Set with PORT environment variable.
    """

    sentry_dsn: Optional[str] = None
    """
    Sentry DSN for error reporting. Optional, no error reporting if not set.
    Set with SENTRY_DSN environment variable.
    """

    metrics_backend: str = "telegraf"
    """
    Metrics backend, either 'telegraf' or 'none'.
    Set with METRICS_BACKEND environment variable.
    """

    statsd_host: str = Field(alias="TELEGRAF_HOST", default="telegraf")
    """
    StatsD/Telegraf host for metrics collection.
    Set with TELEGRAF_HOST environment variable.
    """

    statsd_port: int = Field(alias="TELEGRAF_PORT", default=8125)
    """
    StatsD/Telegraf port for metrics collection.
    Set with TELEGRAF_PORT environment variable.
    """

    statsd_prefix: str = "addr"
    """
    Prefix for all StatsD metrics from this service.
    Set with STATSD_PREFIX environment variable.
    """

    upstream_timeout: Optional[float] = None
    """
    Total timeout in seconds for each upstream request. No timeout if not set.
    Set with UPSTREAM_TIMEOUT environment variable.
    """

    name_service_url: str = DEFAULT_NAME_SERVICE_URL
    """URL template for resolving name-service (.sol) names"""

    name_service_suffix: str = DEFAULT_NAME_SERVICE_SUFFIX
    """Top-level suffix routed to the name-service, matched case-insensitively"""

    domain_registry_url: str = DEFAULT_DOMAIN_REGISTRY_URL
    """URL template for looking up the owner of other dotted domains"""

    wallet_profile_url: str = DEFAULT_WALLET_PROFILE_URL
    """URL template for looking up wallet profiles"""

    wallet_profile_address_key: str = DEFAULT_WALLET_PROFILE_ADDRESS_KEY
    """Chain and network key of the address entry used from a wallet profile"""

    @field_validator(
        "name_service_url", "domain_registry_url", "wallet_profile_url"
    )
    @classmethod
    def validate_url_template(cls, v: str) -> str:
        """
        Ensure an upstream URL template has an {identifier} placeholder.

        Raises:
            ValueError: If the placeholder is missing
        """
        if "{identifier}" not in v:
            raise ValueError("URL template must contain an {identifier} placeholder")
        return v

    @field_validator("metrics_backend")
    @classmethod
    def validate_metrics_backend(cls, v: str) -> str:
        v = v.lower()
        if v not in ("telegraf", "none"):
            raise ValueError("metrics_backend must be 'telegraf' or 'none'")
        return v

    def address_resolver(self) -> AddressResolver:
        """Build the default strategy chain from these settings."""
        return AddressResolver(
            default_strategies(
                name_service_url=self.name_service_url,
                name_service_suffix=self.name_service_suffix,
                domain_registry_url=self.domain_registry_url,
                wallet_profile_url=self.wallet_profile_url,
                wallet_profile_address_key=self.wallet_profile_address_key,
            )
        )


# Application context keys for dependency injection
SettingsAppKey: Final = web.AppKey("settings", Settings)
"""AppKey for accessing the application settings"""

SessionAppKey: Final = web.AppKey("http_session", ClientSession)
"""AppKey for accessing the shared aiohttp client session"""

MetricsClientAppKey: Final = web.AppKey("metrics_client", MetricsClient)
"""AppKey for accessing the metrics client"""

AddressResolverAppKey: Final = web.AppKey("address_resolver", AddressResolver)
"""AppKey for accessing the shared address resolver"""
