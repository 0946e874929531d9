from __future__ import annotations

from collections.abc import MutableMapping
from enum import Enum
from typing import Any, Protocol

from flashscope.core.logging import get_logger
from flashscope.flash.store import FLASH_SESSION_KEY, FlashStore


class SessionBackend(Protocol):
    def read(self, slot: str) -> Any: ...

    def write(self, slot: str, value: Any) -> None: ...

    def remove(self, slot: str) -> None: ...

    def clear(self) -> None: ...


class StarletteSession:
    """Adapts ``request.session`` (a plain dict) to ``SessionBackend``."""

    def __init__(self, session: MutableMapping[str, Any]):
        self._session = session

    def read(self, slot: str) -> Any:
        return self._session.get(slot)

    def write(self, slot: str, value: Any) -> None:
        self._session[slot] = value

    def remove(self, slot: str) -> None:
        self._session.pop(slot, None)

    def clear(self) -> None:
        self._session.clear()


class MessageAccessors(Protocol):
    """Shortcuts for the two well-known keys, ``alert`` and ``notice``."""

    def get_alert(self) -> Any: ...

    def set_alert(self, message: Any) -> None: ...

    def get_notice(self) -> Any: ...

    def set_notice(self, message: Any) -> None: ...


class FlashState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADED = "loaded"
    PERSISTED = "persisted"
    DISCARDED = "discarded"


class FlashScope:
    """Owns the flash of one request.

    The store is loaded from the session and swept on first access, written
    back by ``on_request_end``. One scope is created per request and handed to
    handlers explicitly (see ``flashscope.deps.get_flash``).
    """

    def __init__(self, session: SessionBackend, key: str = FLASH_SESSION_KEY):
        self.session = session
        self.key = key
        self._flash: FlashStore | None = None
        self.state = FlashState.UNINITIALIZED
        self.log = get_logger("flashscope.flash", slot=key)

    @property
    def loaded(self) -> bool:
        return self._flash is not None

    def current(self) -> FlashStore:
        if self._flash is None:
            flash = FlashStore.from_session(self.session.read(self.key))
            kept, removed = flash.sweep()
            self.log.debug("flash.loaded", keys=len(flash), kept=kept, removed=removed)
            self._flash = flash
            self.state = FlashState.LOADED
        return self._flash

    @property
    def flash(self) -> FlashStore:
        return self.current()

    def on_request_start(self) -> None:
        self._flash = None
        self.state = FlashState.UNINITIALIZED

    def on_request_end(self) -> None:
        if self._flash is None:
            return
        try:
            if self._flash.store(self.session, self.key):
                self.state = FlashState.PERSISTED
                self.log.debug("flash.persisted", keys=len(self._flash.survivors()))
            else:
                # emptied by the sweep or never populated: same outcome
                self.session.remove(self.key)
                self.state = FlashState.DISCARDED
                self.log.debug("flash.discarded")
        finally:
            self._flash = None

    def on_session_reset(self) -> None:
        self._flash = None
        self.state = FlashState.DISCARDED
        self.log.debug("flash.session_reset")

    def reset_session(self) -> None:
        self.session.clear()
        self.on_session_reset()

    # --- MessageAccessors
    def get_alert(self) -> Any:
        return self.current()["alert"]

    def set_alert(self, message: Any) -> None:
        self.current()["alert"] = message

    def get_notice(self) -> Any:
        return self.current()["notice"]

    def set_notice(self, message: Any) -> None:
        self.current()["notice"] = message

    alert = property(get_alert, set_alert)
    notice = property(get_notice, set_notice)
