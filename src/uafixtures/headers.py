"""Request header containers and the delimited header-string codec."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

DELIMITER_HEADER = "{{::==::}}"
DELIMITER_HEADER_ROW = "::::"


class HeaderMap(Mapping[str, str]):
    """Ordered header mapping with case-insensitive lookup.

    Names are stored lower-cased; insertion order of the first occurrence is
    kept and later duplicates overwrite the value.
    """

    __slots__ = ("_items",)

    def __init__(self, headers: Mapping[str, Any] | None = None) -> None:
        items: dict[str, str] = {}
        for name, value in (headers or {}).items():
            items[str(name).lower()] = "" if value is None else str(value)
        self._items = items

    def __getitem__(self, name: str) -> str:
        return self._items[name.lower()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"HeaderMap({self._items!r})"

    def to_dict(self) -> dict[str, str]:
        return dict(self._items)


class UserAgent:
    """A header set that can be serialized into a single delimited string.

    The string form is used as a compact cache key, so both delimiters are
    part of the stored format and must not change.
    """

    __slots__ = ("_headers",)

    def __init__(self, headers: Mapping[str, str] | None = None) -> None:
        self._headers = dict(headers or {})

    def __str__(self) -> str:
        return DELIMITER_HEADER.join(
            f"{name}{DELIMITER_HEADER_ROW}{value}" for name, value in self._headers.items()
        )

    def __repr__(self) -> str:
        return f"UserAgent({self._headers!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UserAgent):
            return NotImplemented
        return list(self._headers.items()) == list(other._headers.items())

    def __hash__(self) -> int:
        return hash(tuple(self._headers.items()))

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    @classmethod
    def from_useragent(cls, useragent: str) -> "UserAgent":
        return cls({"user-agent": useragent})

    @classmethod
    def from_header_array(cls, headers: Mapping[str, str]) -> "UserAgent":
        return cls(headers)

    @classmethod
    def from_string(cls, encoded: str) -> "UserAgent":
        headers: dict[str, str] = {}
        for segment in encoded.split(DELIMITER_HEADER):
            if not segment:
                continue
            name, _, value = segment.partition(DELIMITER_HEADER_ROW)
            headers[name] = value
        return cls(headers)
