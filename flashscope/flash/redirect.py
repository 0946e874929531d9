from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from fastapi.responses import RedirectResponse

from flashscope.flash.scope import FlashScope


def apply_redirect_flash(scope: FlashScope, options: dict[str, Any]) -> dict[str, Any]:
    """Move ``alert``, ``notice`` and ``flash`` out of ``options`` into the flash.

    ``options`` is modified in place and returned.
    """
    alert = options.pop("alert", None)
    if alert is not None:
        scope.set_alert(alert)

    notice = options.pop("notice", None)
    if notice is not None:
        scope.set_notice(notice)

    other_flashes = options.pop("flash", None)
    if other_flashes is not None:
        if not isinstance(other_flashes, Mapping):
            raise TypeError("flash must be a mapping of extra entries")
        scope.current().update(other_flashes)

    return options


def redirect_to(scope: FlashScope, url: str, /, **options: Any) -> RedirectResponse:
    """RedirectResponse that carries flash messages to the next request.

        return redirect_to(flash, "/messages", notice="Saved", flash={"warning": "..."})
    """
    options = apply_redirect_flash(scope, options)
    options.setdefault("status_code", 303)
    return RedirectResponse(url, **options)
