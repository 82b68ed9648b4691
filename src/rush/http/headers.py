"""Case-insensitive HTTP headers.

``Headers`` is the read-only view a transport hands to a ``Request``: it
stores raw byte pairs and decodes on access. ``MutableHeaders`` is the
settable header bag of a ``ResponseWriter``.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive request headers.

    ``__getitem__`` returns the first matching value.
    ``get_list`` returns all values for a header.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        object.__setattr__(self, "_raw", raw)

    @classmethod
    def from_dict(cls, headers: Mapping[str, str]) -> Headers:
        """Build headers from a plain ``str`` mapping (test clients, adapters)."""
        return cls(
            tuple(
                (name.lower().encode("latin-1"), value.encode("latin-1"))
                for name, value in headers.items()
            )
        )

    def __getitem__(self, key: str) -> str:
        key_lower = key.lower().encode("latin-1")
        for name, value in self._raw:
            if name.lower() == key_lower:
                return value.decode("latin-1")
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        key_lower = key.lower().encode("latin-1")
        return any(name.lower() == key_lower for name, _ in self._raw)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for name, _ in self._raw:
            key = name.decode("latin-1").lower()
            if key not in seen:
                seen.add(key)
                yield key

    def __len__(self) -> int:
        return len(set(self))

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"Headers({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        try:
            return self[key]
        except KeyError:
            return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        key_lower = key.lower().encode("latin-1")
        return [value.decode("latin-1") for name, value in self._raw if name.lower() == key_lower]

    @property
    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        """Access raw header byte pairs for ASGI compatibility."""
        return self._raw


class MutableHeaders(MutableMapping[str, str]):
    """Settable, case-insensitive response headers.

    Keys are stored lowercased; ``set`` replaces, ``add`` appends another
    value for the same name (e.g. multiple ``Set-Cookie``).
    """

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: dict[str, list[str]] = {}

    def __getitem__(self, key: str) -> str:
        return self._items[key.lower()][0]

    def __setitem__(self, key: str, value: str) -> None:
        self._items[key.lower()] = [value]

    def __delitem__(self, key: str) -> None:
        del self._items[key.lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"MutableHeaders({self._items!r})"

    def set(self, key: str, value: str) -> None:
        """Replace every value of *key* with *value*."""
        self[key] = value

    def add(self, key: str, value: str) -> None:
        """Append *value* to *key* without dropping existing values."""
        self._items.setdefault(key.lower(), []).append(value)

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._items.get(key.lower(), ()))

    def raw(self) -> list[tuple[bytes, bytes]]:
        """Encode as ASGI header byte pairs."""
        return [
            (name.encode("latin-1"), value.encode("latin-1"))
            for name, values in self._items.items()
            for value in values
        ]
