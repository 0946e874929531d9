from __future__ import annotations

from fastapi import Request

from flashscope.flash.scope import FlashScope


def get_flash(request: Request) -> FlashScope:
    flash: FlashScope | None = getattr(request.state, "flash", None)
    if flash is None:
        raise RuntimeError(
            "FlashMiddleware is not installed (or runs outside SessionMiddleware)"
        )
    return flash
