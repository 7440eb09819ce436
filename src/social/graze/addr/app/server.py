import logging
from time import time
from typing import (
    Optional,
)
from aiohttp import web
import aiohttp
import sentry_sdk
from sentry_sdk.integrations.aiohttp import AioHttpIntegration

from social.graze.addr.app.config import (
    AddressResolverAppKey,
    MetricsClientAppKey,
    SessionAppKey,
    Settings,
    SettingsAppKey,
)
from social.graze.addr.app.cors import apply_cors_headers, get_cors_headers
from social.graze.addr.app.handlers.internal import (
    handle_internal_alive,
    handle_internal_ready,
)
from social.graze.addr.app.handlers.resolve import handle_resolve
from social.graze.addr.app.metrics import create_metrics_client

logger = logging.getLogger(__name__)


async def http_resources(app):
    logger.info("Starting up")
    settings: Settings = app[SettingsAppKey]

    trace_config = aiohttp.TraceConfig()

    if settings.debug:

        async def on_request_start(
            session, trace_config_ctx, params: aiohttp.TraceRequestStartParams
        ):
            logging.info("Starting request: %s %s", params.method, params.url)

        async def on_request_end(
            session, trace_config_ctx, params: aiohttp.TraceRequestEndParams
        ):
            logging.info(
                "Ending request: %s %s %s",
                params.method,
                params.url,
                params.response.status,
            )

        trace_config.on_request_start.append(on_request_start)
        trace_config.on_request_end.append(on_request_end)

    app[SessionAppKey] = aiohttp.ClientSession(
        timeout=aiohttp.ClientTimeout(total=settings.upstream_timeout),
        trace_configs=[trace_config],
    )

    await app[MetricsClientAppKey].connect()

    logger.info("Startup complete")

    yield

    logger.info("Shutting down")

    await app[SessionAppKey].close()
    await app[MetricsClientAppKey].close()


@web.middleware
async def cors_middleware(request: web.Request, handler):
    try:
        response = await handler(request)
    except web.HTTPException as e:
        e.headers.update(get_cors_headers())
        raise e
    except Exception as e:
        logger.exception("Unhandled error serving %s %s", request.method, request.path)
        response = web.json_response(
            status=500,
            data={"error": "Internal Server Error", "error_type": type(e).__name__},
        )
    return apply_cors_headers(response)


@web.middleware
async def sentry_middleware(request: web.Request, handler):
    try:
        response = await handler(request)
        return response
    except web.HTTPException:
        raise
    except Exception as e:
        sentry_sdk.capture_exception(e)
        raise e


@web.middleware
async def statsd_middleware(request: web.Request, handler):
    metrics_client = request.app[MetricsClientAppKey]
    request_method: str = request.method
    request_path = request.path

    start_time: float = time()
    response_status_code = 0

    try:
        response = await handler(request)
        response_status_code = response.status
        return response
    except web.HTTPException as e:
        response_status_code = e.status
        raise e
    except Exception as e:
        metrics_client.increment(
            "server.request.exception",
            1,
            tag_dict={
                "exception": type(e).__name__,
                "path": request_path,
                "method": request_method,
            },
        )
        raise e
    finally:
        metrics_client.timer(
            "server.request.time",
            time() - start_time,
            tag_dict={"path": request_path, "method": request_method},
        )
        metrics_client.increment(
            "server.request.count",
            1,
            tag_dict={
                "path": request_path,
                "method": request_method,
                "status": response_status_code,
            },
        )


async def start_web_server(settings: Optional[Settings] = None):

    if settings is None:
        settings = Settings()  # type: ignore
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            send_default_pii=True,
            integrations=[AioHttpIntegration()],
        )
    app = web.Application(
        middlewares=[cors_middleware, statsd_middleware, sentry_middleware]
    )

    app[SettingsAppKey] = settings
    app[AddressResolverAppKey] = settings.address_resolver()
    app[MetricsClientAppKey] = create_metrics_client(
        settings.metrics_backend,
        host=settings.statsd_host,
        port=settings.statsd_port,
        prefix=settings.statsd_prefix,
        debug=settings.debug,
    )

    app.add_routes([web.get("/api", handle_resolve)])

    app.add_routes(
        [
            web.get("/internal/alive", handle_internal_alive),
            web.get("/internal/ready", handle_internal_ready),
        ]
    )

    app.cleanup_ctx.append(http_resources)

    return app
