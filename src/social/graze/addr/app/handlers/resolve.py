import logging
from aiohttp import web

from social.graze.addr.app.config import (
    AddressResolverAppKey,
    MetricsClientAppKey,
    SessionAppKey,
)
from social.graze.addr.resolve.exceptions import InvalidIdentifierException
from social.graze.addr.resolve.model import ResolvedAddress

logger = logging.getLogger(__name__)


async def handle_resolve(request: web.Request) -> web.Response:
    """Resolve the address query parameter to a canonical Solana address.

    Responds 200 with {address, source, resolveTime} on success, 400 when the parameter is missing
    and 500 with {error, details, resolveTime} when resolution fails.
    """
    metrics_client = request.app[MetricsClientAppKey]
    resolver = request.app[AddressResolverAppKey]

    identifier = request.query.get("address", "")

    try:
        result = await resolver.resolve(request.app[SessionAppKey], identifier)
    except InvalidIdentifierException as e:
        metrics_client.increment("resolve.invalid", 1)
        return web.json_response(status=400, data={"error": str(e)})

    metrics_client.timer("resolve.time", result.resolve_time / 1000.0)

    if isinstance(result, ResolvedAddress):
        metrics_client.increment(
            "resolve.count", 1, tag_dict={"source": result.source.value}
        )
        return web.json_response(status=200, data=result.response_body())

    metrics_client.increment("resolve.failed", 1)
    return web.json_response(status=500, data=result.response_body())
