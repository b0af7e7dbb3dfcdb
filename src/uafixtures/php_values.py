"""Read PHP fixture files that ``return`` a literal array.

Several upstream test suites ship their fixtures as ``<?php return [...];``
includes. Only literal data is supported: nested ``[]``/``array()`` values,
quoted strings (optionally joined with ``.``), numbers, ``true``, ``false``
and ``null``. Anything else raises :class:`PhpValueError`.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Callable

StructuredValueProvider = Callable[[Path], Any]

_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
    |(?P<comment>//[^\n]*|\#[^\n]*|/\*.*?\*/)
    |(?P<open_tag><\?php)
    |(?P<close_tag>\?>)
    |(?P<single>'(?:[^'\\]|\\.)*')
    |(?P<double>"(?:[^"\\]|\\.)*")
    |(?P<number>-?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][-+]?\d+)?)
    |(?P<arrow>=>)
    |(?P<word>[A-Za-z_\\][A-Za-z0-9_\\]*)
    |(?P<punct>[\[\]\(\),;.=])
    """,
    re.VERBOSE | re.DOTALL,
)

_DOUBLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "v": "\v",
    "e": "\x1b",
    "f": "\f",
    "0": "\0",
    "\\": "\\",
    "$": "$",
    '"': '"',
}


class PhpValueError(ValueError):
    """The file is not a literal PHP array include."""


def _unquote_single(text: str) -> str:
    body = text[1:-1]
    return re.sub(r"\\([\\'])", r"\1", body)


def _unquote_double(text: str) -> str:
    body = text[1:-1]

    def _replace(match: re.Match[str]) -> str:
        char = match.group(1)
        return _DOUBLE_ESCAPES.get(char, "\\" + char)

    return re.sub(r"\\(.)", _replace, body, flags=re.DOTALL)


class _Parser:
    def __init__(self, source: str) -> None:
        self.tokens: list[tuple[str, str]] = []
        position = 0
        while position < len(source):
            match = _TOKEN_RE.match(source, position)
            if match is None:
                raise PhpValueError(f"Unexpected character {source[position]!r} at offset {position}")
            kind = match.lastgroup or ""
            if kind not in {"ws", "comment", "open_tag", "close_tag"}:
                self.tokens.append((kind, match.group()))
            position = match.end()
        self.index = 0

    def peek(self) -> tuple[str, str] | None:
        return self.tokens[self.index] if self.index < len(self.tokens) else None

    def take(self) -> tuple[str, str]:
        token = self.peek()
        if token is None:
            raise PhpValueError("Unexpected end of file")
        self.index += 1
        return token

    def expect(self, text: str) -> None:
        kind, value = self.take()
        if value != text:
            raise PhpValueError(f"Expected {text!r}, found {value!r}")

    def accept(self, text: str) -> bool:
        token = self.peek()
        if token is not None and token[1] == text:
            self.index += 1
            return True
        return False

    def parse_file(self) -> Any:
        while True:
            token = self.take()
            if token[0] == "word" and token[1].lower() in {"declare", "namespace", "use"}:
                while self.take()[1] != ";":
                    pass
                continue
            if token[0] == "word" and token[1].lower() == "return":
                value = self.parse_value()
                self.accept(";")
                return value
            raise PhpValueError(f"Expected 'return', found {token[1]!r}")

    def parse_value(self) -> Any:
        value = self._parse_atom()
        while isinstance(value, str) and self.accept("."):
            suffix = self._parse_atom()
            if not isinstance(suffix, (str, int, float)):
                raise PhpValueError("Only scalars can be concatenated")
            value += str(suffix)
        return value

    def _parse_atom(self) -> Any:
        kind, text = self.take()
        if kind == "single":
            return _unquote_single(text)
        if kind == "double":
            return _unquote_double(text)
        if kind == "number":
            return float(text) if any(char in text for char in ".eE") else int(text)
        if text == "[":
            return self._parse_array("]")
        if kind == "word":
            lowered = text.lower()
            if lowered == "array":
                self.expect("(")
                return self._parse_array(")")
            if lowered == "true":
                return True
            if lowered == "false":
                return False
            if lowered == "null":
                return None
        raise PhpValueError(f"Unsupported PHP expression near {text!r}")

    def _parse_array(self, closing: str) -> dict[Any, Any] | list[Any]:
        entries: dict[Any, Any] = {}
        explicit_keys = False
        next_index = 0
        while not self.accept(closing):
            value = self.parse_value()
            if self.accept("=>"):
                key = value
                if isinstance(key, bool) or key is None:
                    key = int(bool(key))
                elif isinstance(key, str) and re.fullmatch(r"-?[1-9]\d*|0", key):
                    key = int(key)
                entries[key] = self.parse_value()
                explicit_keys = True
                if isinstance(key, int) and key >= next_index:
                    next_index = key + 1
            else:
                entries[next_index] = value
                next_index += 1
            if not self.accept(","):
                self.expect(closing)
                break
        if not explicit_keys:
            return list(entries.values())
        return entries


def parse_php_array(source: str) -> Any:
    """Parse the value returned by a PHP include's ``return`` statement."""

    return _Parser(source).parse_file()


def load_php_array(path: Path) -> Any:
    """Default structured value provider for ``*.php`` fixture files."""

    with Path(path).open(encoding="utf-8") as stream:
        return parse_php_array(stream.read())
