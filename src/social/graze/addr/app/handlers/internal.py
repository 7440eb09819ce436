from aiohttp import web

from social.graze.addr.app.config import SessionAppKey


async def handle_internal_ready(request: web.Request):
    session = request.app.get(SessionAppKey)
    if session is not None and not session.closed:
        return web.Response(status=200)
    return web.Response(status=503)


async def handle_internal_alive(request: web.Request):
    return web.Response(status=200)
