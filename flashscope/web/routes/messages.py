from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from flashscope.deps import get_flash
from flashscope.flash.redirect import redirect_to
from flashscope.flash.scope import FlashScope
from flashscope.schemas.flash import FlashKeyIn, FlashMessageIn, FlashOut, FlashRedirectIn
from flashscope.web.templating import render

router = APIRouter(prefix="/messages", tags=["messages"])

Flash = Annotated[FlashScope, Depends(get_flash)]


def _snapshot(flash: FlashScope) -> FlashOut:
    return FlashOut(
        flash=flash.current().to_dict(),
        alert=flash.alert,
        notice=flash.notice,
    )


@router.get("", response_class=HTMLResponse, name="messages_page")
def messages_page(request: Request):
    return render(request, "pages/messages.html", {})


@router.get("/current", response_model=FlashOut)
def current_messages(flash: Flash):
    return _snapshot(flash)


@router.post("", name="messages_set")
def set_message(payload: FlashMessageIn, flash: Flash):
    flash.current()[payload.key] = payload.message
    return redirect_to(flash, "/messages/current")


@router.post("/now", response_model=FlashOut)
def set_message_now(payload: FlashMessageIn, flash: Flash):
    flash.current().now[payload.key] = payload.message
    return _snapshot(flash)


@router.post("/keep", response_model=FlashOut)
def keep_messages(payload: FlashKeyIn, flash: Flash):
    flash.current().keep(payload.key)
    return _snapshot(flash)


@router.post("/discard", response_model=FlashOut)
def discard_messages(payload: FlashKeyIn, flash: Flash):
    flash.current().discard(payload.key)
    return _snapshot(flash)


@router.post("/redirect")
def redirect_with_messages(payload: FlashRedirectIn, flash: Flash):
    return redirect_to(
        flash,
        payload.url,
        alert=payload.alert,
        notice=payload.notice,
        flash=payload.flash,
    )


@router.post("/reset", response_model=FlashOut)
def reset_session(flash: Flash):
    flash.reset_session()
    return _snapshot(flash)
