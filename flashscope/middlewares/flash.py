from __future__ import annotations

from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from flashscope.flash.scope import FlashScope, StarletteSession
from flashscope.flash.store import FLASH_SESSION_KEY


class FlashMiddleware(BaseHTTPMiddleware):
    """Gives every request its own ``FlashScope`` on ``request.state.flash``.

    Must sit inside ``SessionMiddleware``: the flash is written back into
    ``request.session`` before the session cookie is serialized.
    """

    def __init__(self, app: ASGIApp, session_key: str = FLASH_SESSION_KEY):
        super().__init__(app)
        self.session_key = session_key

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if "session" not in request.scope:
            return await call_next(request)

        flash = FlashScope(StarletteSession(request.session), key=self.session_key)
        request.state.flash = flash
        flash.on_request_start()
        try:
            return await call_next(request)
        finally:
            flash.on_request_end()
