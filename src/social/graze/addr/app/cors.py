from typing import Dict

from aiohttp import web

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET",
    "Access-Control-Allow-Headers": "Content-Type",
}


def get_cors_headers() -> Dict[str, str]:
    """Return the CORS headers attached to every response.

    The resolver is public, so any origin may call it.
    """
    return dict(CORS_HEADERS)


def apply_cors_headers(response: web.StreamResponse) -> web.StreamResponse:
    if not response.prepared:
        response.headers.update(get_cors_headers())
    return response
