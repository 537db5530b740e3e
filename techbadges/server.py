"""HTTP server for badge grids and the icon registry API."""

import errno
import logging
import time
from datetime import datetime, timezone
from typing import Optional

from aiohttp import web

from techbadges import __version__
from techbadges.analytics import AnalyticsBackend, AnalyticsTracker
from techbadges.cache import SvgCache, with_cache
from techbadges.config.constants import CACHE_CONFIG
from techbadges.config.settings import ServerConfig
from techbadges.errors import ErrorKind, NotFoundError, ValidationError, error_response
from techbadges.http_cache import cached_icon_response, cached_json_response, cors_preflight_response
from techbadges.registry import IconRegistry
from techbadges.resolver import resolve_icon_names, validate_per_line, validate_theme
from techbadges.svg import generate_svg

logger = logging.getLogger(__name__)

SERVICE_INFO = {
    "name": "TechBadges",
    "version": __version__,
    "description": "Showcase your tech stack on your GitHub or resume",
    "documentation": "https://github.com/santosr2/techbadges",
    "attribution": {
        "original": "skill-icons",
        "author": "tandpfun",
        "url": "https://github.com/tandpfun/skill-icons",
    },
    "endpoints": {
        "icons": "/icons?i=js,ts,react",
        "apiIcons": "/api/icons",
        "apiSvgs": "/api/svgs",
        "health": "/health",
    },
}


class BadgeServer:
    """aiohttp application serving SVG badge grids.

    The registry is built once by the caller and shared by every request.
    """

    def __init__(
        self,
        registry: IconRegistry,
        config: Optional[ServerConfig] = None,
        svg_cache: Optional[SvgCache] = None,
        analytics: Optional[AnalyticsBackend] = None,
    ):
        """Initialize the server.

        Args:
            registry: Icon registry to serve
            config: Server configuration (defaults if omitted)
            svg_cache: Optional cache of generated documents
            analytics: Optional analytics backend
        """
        self.registry = registry
        self.config = config or ServerConfig()
        self.svg_cache = svg_cache
        self.analytics = analytics
        self._runner: Optional[web.AppRunner] = None
        self._site: Optional[web.TCPSite] = None

    def create_app(self) -> web.Application:
        """Build the aiohttp application with all routes."""
        app = web.Application(middlewares=[self._error_middleware])
        routes = {
            "/": self._handle_index,
            "/icons": self._handle_icons,
            "/api/icons": self._handle_api_icons,
            "/api/svgs": self._handle_api_svgs,
            "/health": self._handle_health,
        }
        for path, handler in routes.items():
            app.router.add_get(path, handler)
            if path != "/":
                app.router.add_get(path + "/", handler)

        app.on_cleanup.append(self._on_cleanup)
        return app

    async def start(self, port: Optional[int] = None, max_retries: int = 10) -> int:
        """Start serving in the running event loop.

        Args:
            port: Preferred port (defaults to config.port)
            max_retries: Number of consecutive ports to try if it is taken

        Returns:
            The port actually bound

        Raises:
            OSError: If no available port was found
        """
        port = self.config.port if port is None else port
        self._runner = web.AppRunner(self.create_app())
        await self._runner.setup()

        actual_port = port
        last_error = None
        for attempt in range(max_retries):
            try:
                self._site = web.TCPSite(self._runner, self.config.host, actual_port)
                await self._site.start()
                if actual_port != port:
                    logger.warning("Port %d was in use, using port %d instead", port, actual_port)
                break
            except OSError as e:
                if e.errno == errno.EADDRINUSE:
                    last_error = e
                    actual_port = port + attempt + 1
                else:
                    await self._runner.cleanup()
                    raise
        else:
            await self._runner.cleanup()
            raise OSError(
                f"Could not find available port after {max_retries} attempts "
                f"(tried {port}-{port + max_retries - 1}). Last error: {last_error}"
            )

        logger.info("Serving %d icons on http://%s:%d", len(self.registry), self.config.host, actual_port)
        return actual_port

    async def stop(self) -> None:
        """Stop the server and release the cache connection."""
        if self._runner:
            await self._runner.cleanup()
            self._runner = None
            self._site = None

    async def _on_cleanup(self, app: web.Application) -> None:
        if self.svg_cache is not None:
            await self.svg_cache.backend.close()

    @web.middleware
    async def _error_middleware(self, request: web.Request, handler) -> web.StreamResponse:
        """Answer CORS preflights and turn every failure into a JSON error."""
        if request.method == "OPTIONS":
            return cors_preflight_response()

        try:
            return await handler(request)
        except web.HTTPNotFound:
            path = request.path.strip("/")
            return error_response(NotFoundError(f"Endpoint not found: /{path}"), self.config.is_dev)
        except web.HTTPException:
            raise
        except Exception as e:
            return error_response(e, self.config.is_dev)

    async def _handle_index(self, request: web.Request) -> web.Response:
        """Service description."""
        return web.json_response(
            SERVICE_INFO,
            headers={"Cache-Control": "public, max-age=3600"},
        )

    async def _handle_icons(self, request: web.Request) -> web.Response:
        """Render a badge grid.

        Query parameters:
        - i or icons: comma-separated icon names (required), or "all"
        - t or theme: "dark" or "light" (default dark)
        - perline: icons per row, 1-50 (default from config)
        """
        started = time.perf_counter()
        tracker = AnalyticsTracker(self.analytics)
        query = request.query

        try:
            icon_param = query.get("i", query.get("icons"))
            if not icon_param:
                raise ValidationError(ErrorKind.EMPTY_INPUT)

            index = self.registry.index
            effective_param = index.all_icons_param() if icon_param == "all" else icon_param

            theme = validate_theme(query.get("t", query.get("theme")))
            per_line = validate_per_line(query.get("perline"), self.config.per_line)

            icon_names = resolve_icon_names(
                effective_param, theme, index.available_icons, index.themed_icons
            )
            if not icon_names:
                raise ValidationError(ErrorKind.NO_VALID_ICONS)

            svg, cached = await with_cache(
                self.svg_cache,
                icon_param,
                theme,
                per_line,
                lambda: generate_svg(icon_names, self.registry.icons, per_line),
            )

            properties = {
                "icon_count": len(icon_names),
                "icons": icon_param,
                "theme": theme,
                "per_line": per_line,
            }
            if self.svg_cache is not None:
                if cached:
                    tracker.track_cache_hit(**properties)
                else:
                    tracker.track_cache_miss(**properties)
            tracker.track_icon_request(
                response_time=round((time.perf_counter() - started) * 1000, 2),
                cached=cached,
                **properties,
            )
            logger.debug("Rendered %d icons (cached=%s)", len(icon_names), cached)

            return cached_icon_response(svg, request)
        except Exception as e:
            tracker.track_error(e, icons=(query.get("i") or query.get("icons") or "")[:200])
            raise
        finally:
            tracker.flush()

    async def _handle_api_icons(self, request: web.Request) -> web.Response:
        """JSON array of every icon base name."""
        return cached_json_response(
            list(self.registry.index.icon_name_list), CACHE_CONFIG["api_icons"], request
        )

    async def _handle_api_svgs(self, request: web.Request) -> web.Response:
        """JSON object of every icon key and its markup."""
        return cached_json_response(dict(self.registry.icons), CACHE_CONFIG["api_svgs"], request)

    async def _handle_health(self, request: web.Request) -> web.Response:
        """Health check; degraded when no icons are loaded."""
        icon_count = len(self.registry)
        status = "ok" if icon_count > 0 else "degraded"
        return web.json_response(
            {
                "status": status,
                "version": __version__,
                "iconCount": icon_count,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
            status=200 if status == "ok" else 503,
            headers={"Cache-Control": "no-store"},
        )
