"""HTTP caching utilities: Cache-Control, ETags, conditional requests, CORS."""

import hashlib
import json
from typing import Any, Mapping, Optional

from aiohttp import web

from techbadges.config.constants import CACHE_CONFIG, CacheConfig

SVG_CONTENT_TYPE = "image/svg+xml; charset=utf-8"
JSON_CONTENT_TYPE = "application/json; charset=utf-8"


def cache_control_header(config: CacheConfig) -> str:
    """Build a Cache-Control value from a cache policy."""
    parts = ["public", f"max-age={config.max_age}"]

    if config.stale_while_revalidate is not None:
        parts.append(f"stale-while-revalidate={config.stale_while_revalidate}")

    if config.immutable:
        parts.append("immutable")

    return ", ".join(parts)


def generate_etag(content: str) -> str:
    """Strong ETag for a response body."""
    digest = hashlib.sha256(content.encode("utf-8")).hexdigest()[:16]
    return f'"{digest}"'


def has_matching_etag(headers: Mapping[str, str], etag: str) -> bool:
    """Check whether a request's If-None-Match equals etag."""
    return headers.get("If-None-Match") == etag


def cache_headers(content_type: str, config: CacheConfig, etag: Optional[str] = None) -> dict:
    """Response headers for a cacheable body."""
    headers = {
        "Content-Type": content_type,
        "Cache-Control": cache_control_header(config),
        "Vary": "Accept-Encoding",
    }
    if etag:
        headers["ETag"] = etag
    return headers


def cached_icon_response(svg: str, request: web.Request) -> web.Response:
    """SVG response with caching headers, or 304 when the client copy is current."""
    etag = generate_etag(svg)

    if has_matching_etag(request.headers, etag):
        return web.Response(status=304)

    headers = cache_headers(SVG_CONTENT_TYPE, CACHE_CONFIG["icons"], etag)
    headers["Access-Control-Allow-Origin"] = "*"
    return web.Response(text=svg, headers=headers)


def cached_json_response(
    data: Any,
    config: CacheConfig = CACHE_CONFIG["api_icons"],
    request: Optional[web.Request] = None,
) -> web.Response:
    """JSON response with caching and CORS headers, honouring If-None-Match."""
    body = json.dumps(data, separators=(",", ":"))
    etag = generate_etag(body)

    if request is not None and has_matching_etag(request.headers, etag):
        return web.Response(status=304)

    headers = cache_headers(JSON_CONTENT_TYPE, config, etag)
    headers["Access-Control-Allow-Origin"] = "*"
    headers["Access-Control-Allow-Methods"] = "GET, OPTIONS"
    headers["Access-Control-Max-Age"] = "86400"
    return web.Response(text=body, headers=headers)


def cors_preflight_response() -> web.Response:
    """Response to an OPTIONS preflight request."""
    return web.Response(
        status=204,
        headers={
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Methods": "GET, OPTIONS",
            "Access-Control-Allow-Headers": "Content-Type, If-None-Match",
            "Access-Control-Max-Age": "86400",
        },
    )
