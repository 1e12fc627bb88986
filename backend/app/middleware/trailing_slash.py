"""
Catalog Backend - Trailing Slash Middleware
============================================

What:  Serves `/api/services/` exactly like `/api/services`.
How:   Pure ASGI: strips one or more trailing slashes from the path before
       routing, instead of letting the router answer with a 307 redirect.
       The root path `/` is left alone.
"""

from starlette.types import ASGIApp, Receive, Scope, Send


def strip_trailing_slash(path: str) -> str:
    stripped = path.rstrip("/")
    return stripped or "/"


class TrailingSlashMiddleware:
    """Normalizes the request path so routes match with or without `/`."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = scope["path"]
        normalized = strip_trailing_slash(path)
        if normalized != path:
            scope = dict(scope)
            scope["path"] = normalized
            raw_path = scope.get("raw_path")
            if raw_path:
                scope["raw_path"] = raw_path.rstrip(b"/") or b"/"

        await self.app(scope, receive, send)
