"""Shared utilities for file-backed fixture adapters."""

from __future__ import annotations

import bz2
import gzip
import json
import os
import xml.etree.ElementTree as ET
import zlib
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from typing import IO, Any

import pandas as pd
import yaml

from uafixtures.errors import SourceError
from uafixtures.output import Verbosity
from uafixtures.php_values import PhpValueError, StructuredValueProvider, load_php_array

VCS_DIRECTORIES = frozenset({".git", ".svn", ".hg", ".bzr", "_darcs", "CVS"})


def _extension(path: Path) -> str:
    return path.suffix[1:].lower()


def iter_files(
    roots: Path | Iterable[Path],
    *,
    extensions: Iterable[str] | None = None,
    names: Iterable[str] | None = None,
    exclude_extensions: Iterable[str] | None = None,
    predicate: Callable[[Path], bool] | None = None,
) -> Iterator[Path]:
    """Walk directory trees in name order and yield the files that pass the filters.

    Dot files and VCS directories are skipped, as are subdirectories that
    cannot be read. A root that cannot be listed raises :class:`SourceError`.
    """

    if isinstance(roots, Path):
        roots = [roots]
    wanted_extensions = {item.lower().lstrip(".") for item in extensions} if extensions else None
    excluded = {item.lower().lstrip(".") for item in exclude_extensions or ()}
    wanted_names = set(names) if names else None

    for root in roots:
        root = Path(root)
        try:
            with os.scandir(root):
                pass
        except OSError as exc:
            raise SourceError(f"Could not enumerate {root}: {exc}") from exc

        for current, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(
                name for name in dirnames if not name.startswith(".") and name not in VCS_DIRECTORIES
            )
            for filename in sorted(filenames):
                if filename.startswith("."):
                    continue
                path = Path(current) / filename
                extension = _extension(path)
                if wanted_extensions is not None and extension not in wanted_extensions:
                    continue
                if extension in excluded:
                    continue
                if wanted_names is not None and filename not in wanted_names:
                    continue
                if predicate is not None and not predicate(path):
                    continue
                yield path


def open_text(path: Path, *, errors: str = "strict") -> IO[str]:
    """Open a text file, decompressing ``.gz`` and ``.bz2`` transparently."""

    extension = _extension(path)
    if extension == "gz":
        return gzip.open(path, "rt", encoding="utf-8", errors=errors)
    if extension == "bz2":
        return bz2.open(path, "rt", encoding="utf-8", errors=errors)
    return path.open("r", encoding="utf-8", errors=errors)


def display_path(path: Path) -> str:
    return str(path).replace("\\", "/")


def source_key(path: Path, root: Path) -> str:
    """Key a merged source file by its path below the adapter root."""

    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return display_path(path)


class FileAdapterMixin:
    """Common reading, reporting and value conversions for file adapters.

    Loaders return ``None`` after reporting when a file cannot be read or
    parsed, so callers simply move on to the next file.
    """

    value_provider: StructuredValueProvider = staticmethod(load_php_array)

    def _report_path(self, message: str, path: Path) -> None:
        self.writeln(f"{message}- reading path {display_path(path)}", Verbosity.VERBOSE)

    def _report_file(self, message: str, path: Path) -> None:
        self.writeln(f"{message}- reading file {display_path(path)}", Verbosity.VERY_VERBOSE)

    def _report_failure(self, message: str, path: Path, exc: BaseException) -> None:
        self.write_error(f"{message}- parsing file content [{display_path(path)}] failed: {exc}")

    def _read_text(self, message: str, path: Path) -> str | None:
        try:
            with open_text(path) as stream:
                content = stream.read()
        except (OSError, UnicodeDecodeError, EOFError, zlib.error) as exc:
            self._report_failure(message, path, exc)
            return None

        if content.strip() == "":
            return None
        return content

    def _iter_lines(self, message: str, path: Path) -> Iterator[str]:
        """Yield the stripped, non-empty lines of one file."""

        try:
            with open_text(path, errors="replace") as stream:
                for line in stream:
                    line = line.strip()
                    if line:
                        yield line
        except (OSError, EOFError, zlib.error) as exc:
            self._report_failure(message, path, exc)

    def _load_json(self, message: str, path: Path) -> Any:
        content = self._read_text(message, path)
        if content is None:
            return None

        try:
            return json.loads(content)
        except json.JSONDecodeError as exc:
            self._report_failure(message, path, exc)
            return None

    def _load_yaml(self, message: str, path: Path) -> Any:
        content = self._read_text(message, path)
        if content is None:
            return None

        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as exc:
            self._report_failure(message, path, exc)
            return None

    def _load_yaml_documents(self, message: str, path: Path) -> list[Any]:
        content = self._read_text(message, path)
        if content is None:
            return []

        try:
            return [document for document in yaml.safe_load_all(content) if document is not None]
        except yaml.YAMLError as exc:
            self._report_failure(message, path, exc)
            return []

    def _load_xml(self, message: str, path: Path) -> ET.Element | None:
        try:
            with path.open("rb") as stream:
                return ET.parse(stream).getroot()
        except (OSError, ET.ParseError) as exc:
            self._report_failure(message, path, exc)
            return None

    def _load_php(self, message: str, path: Path) -> Any:
        try:
            return self.value_provider(path)
        except (OSError, UnicodeDecodeError, PhpValueError) as exc:
            self._report_failure(message, path, exc)
            return None

    @staticmethod
    def _to_string(value: Any) -> str | None:
        if value is None or isinstance(value, (dict, list, tuple)):
            return None
        if pd.api.types.is_scalar(value) and pd.isna(value):
            return None
        if isinstance(value, bool):
            return "true" if value else "false"

        cleaned = str(value).strip()
        return cleaned or None

    @staticmethod
    def _to_int(value: Any) -> int | None:
        if value is None or isinstance(value, bool):
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    @staticmethod
    def _to_float(value: Any) -> float | None:
        if value is None or isinstance(value, bool):
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None

    @staticmethod
    def _to_bool(value: Any) -> bool | None:
        if value is None:
            return None
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in {"true", "1", "yes"}:
                return True
            if lowered in {"false", "0", "no", ""}:
                return False
            return None
        return bool(value)

    @staticmethod
    def _join_lines(value: Any) -> str:
        """Collapse a multi-line user agent into one line."""

        return " ".join(part.strip() for part in str(value).split("\n")).strip()

    @staticmethod
    def _lower_headers(headers: Any) -> dict[str, str]:
        if not isinstance(headers, dict):
            return {}
        return {
            str(name).lower(): str(value)
            for name, value in headers.items()
            if value is not None and not isinstance(value, (dict, list))
        }
