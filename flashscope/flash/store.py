from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import Any, Generic, Protocol, TypeVar, Union

# Values must survive the session cookie, which Starlette encodes as JSON.
JSONValue = Union[str, int, float, bool, None, list[Any], dict[str, Any]]

V = TypeVar("V", bound=JSONValue)

FLASH_SESSION_KEY = "flash"


def flash_key(key: object) -> str:
    """JSON object keys are strings: ``flash[1]`` is stored as ``"1"``."""
    return key if isinstance(key, str) else str(key)


class SessionSink(Protocol):
    def write(self, slot: str, value: Any) -> None: ...


class FlashNow(Generic[V]):
    """Write-through view: entries written here are visible to the current
    request only.

        flash.now["error"] = "Bad input"
    """

    def __init__(self, flash: FlashStore[V]):
        self._flash = flash

    def __setitem__(self, key: object, value: V) -> None:
        self.set(key, value)

    def __getitem__(self, key: object) -> V | None:
        return self._flash.get(key)

    def set(self, key: object, value: V) -> V:
        self._flash.set(key, value)
        self._flash.discard(key)
        return value

    def get(self, key: object, default: V | None = None) -> V | None:
        return self._flash.get(key, default)


class FlashStore(Generic[V]):
    """Messages passed from one request to the next.

    Every key carries a "used" marker. A used key is removed by the next
    ``sweep``; an unused one survives it and becomes used. ``set`` clears the
    marker, so a value written during request N is still there after the
    sweep that opens request N+1 and gone after the one that opens N+2.

    Keys are strings; any other key is converted with ``str`` on the way in
    and on lookup, so it reads back the same after a trip through the session.
    """

    def __init__(self, entries: Mapping[object, V] | None = None):
        self._entries: dict[str, V] = _str_keys(entries or {})
        self._used: set[str] = set()

    @classmethod
    def from_session(cls, value: Any) -> FlashStore:
        """Rebuild a store from what ``store`` wrote into the session."""
        if not isinstance(value, Mapping):
            return cls()
        return cls(value)

    # --- reads
    def get(self, key: object, default: V | None = None) -> V | None:
        return self._entries.get(flash_key(key), default)

    def __getitem__(self, key: object) -> V | None:
        return self._entries.get(flash_key(key))

    def __contains__(self, key: object) -> bool:
        return flash_key(key) in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FlashStore):
            return self._entries == other._entries
        if isinstance(other, Mapping):
            return self._entries == _str_keys(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"FlashStore({self._entries!r}, used={sorted(self._used)!r})"

    def keys(self) -> list[str]:
        return list(self._entries)

    def values(self) -> list[V]:
        return list(self._entries.values())

    def items(self) -> list[tuple[str, V]]:
        return list(self._entries.items())

    def to_dict(self) -> dict[str, V]:
        return dict(self._entries)

    def used(self, key: object) -> bool:
        """True when ``key`` will be dropped by the next sweep."""
        return flash_key(key) in self._used

    # --- writes
    def set(self, key: object, value: V) -> V:
        key = flash_key(key)
        self.keep(key)
        self._entries[key] = value
        return value

    def __setitem__(self, key: object, value: V) -> None:
        self.set(key, value)

    def update(self, other: Mapping[object, V] | None = None, **kwargs: V) -> FlashStore[V]:
        incoming = _str_keys(other or {})
        incoming.update(kwargs)
        for key in incoming:
            self.keep(key)
        self._entries.update(incoming)
        return self

    merge = update

    def replace(self, other: Mapping[object, V]) -> FlashStore[V]:
        self._used = set()
        self._entries = _str_keys(other)
        return self

    @property
    def now(self) -> FlashNow[V]:
        """Set a flash that is only available to the current request.

        Entries written through ``now`` are read back the ordinary way,
        ``flash["key"]``.
        """
        return FlashNow(self)

    def keep(self, key: object | None = None):
        """Keep the whole flash, or one entry, for one more request."""
        return self._use(key, False)

    def discard(self, key: object | None = None):
        """Drop the whole flash, or one entry, at the next sweep."""
        return self._use(key, True)

    # --- removals outside the set path
    def pop(self, key: object, default: V | None = None) -> V | None:
        key = flash_key(key)
        self._used.discard(key)
        return self._entries.pop(key, default)

    def delete(self, key: object) -> V | None:
        return self.pop(key)

    def reject(self, predicate: Callable[[str, V], bool]) -> FlashStore[V]:
        for key, value in list(self._entries.items()):
            if predicate(key, value):
                self.pop(key)
        return self

    def clear(self) -> None:
        self._entries.clear()
        self._used.clear()

    # --- lifecycle
    def sweep(self) -> tuple[int, int]:
        """Mark unused entries as used and delete the ones already used.

        Called once per request when the flash is loaded. Returns the number
        of entries kept and removed.
        """
        kept = removed = 0
        for key in list(self._entries):
            if key not in self._used:
                self._used.add(key)
                kept += 1
            else:
                del self._entries[key]
                self._used.discard(key)
                removed += 1

        # markers left behind by keys removed straight from the mapping
        self._used.intersection_update(self._entries)
        return kept, removed

    def survivors(self) -> dict[str, V]:
        """Entries the next request will see: everything not marked used."""
        return {k: v for k, v in self._entries.items() if k not in self._used}

    def store(self, session: SessionSink, key: str = FLASH_SESSION_KEY) -> bool:
        """Write the surviving entries into ``session``.

        Returns False without touching the session when nothing survives.
        """
        payload = self.survivors()
        if not payload:
            return False
        session.write(key, payload)
        return True

    def _use(self, key: object | None, used: bool):
        # No key means a snapshot of the current keys, not a standing policy.
        targets = list(self._entries) if key is None else [flash_key(key)]
        for k in targets:
            if used:
                self._used.add(k)
            else:
                self._used.discard(k)
        return self if key is None else self.get(key)


def _str_keys(entries: Mapping[object, V]) -> dict[str, V]:
    return {flash_key(k): v for k, v in entries.items()}
