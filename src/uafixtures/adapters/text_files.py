"""Adapters for plain-text user-agent lists."""

from __future__ import annotations

from collections.abc import Iterator

from uafixtures.adapters.base import PathAdapter
from uafixtures.adapters.common import FileAdapterMixin, display_path, iter_files
from uafixtures.models import CanonicalRecord, new_identifier


class TxtFileAdapter(PathAdapter, FileAdapterMixin):
    """One record per non-empty line of every ``*.txt`` file below ``path``."""

    name = "txt-files"

    def get_properties(self, message: str = "") -> Iterator[tuple[str, CanonicalRecord]]:
        self._report_path(message, self.path)

        for path in iter_files(self.path, extensions=["txt"]):
            self._report_file(message, path)
            filepath = display_path(path)

            for agent in self._iter_lines(message, path):
                yield new_identifier(), CanonicalRecord(
                    headers={"user-agent": agent},
                    file=filepath,
                )


class TxtCounterFileAdapter(PathAdapter, FileAdapterMixin):
    """Read ``*.ctxt`` files whose lines are ``"<count> <user agent>"``."""

    name = "ctxt-files"

    def get_properties(self, message: str = "") -> Iterator[tuple[str, CanonicalRecord]]:
        self._report_path(message, self.path)

        for path in iter_files(self.path, extensions=["ctxt"]):
            self._report_file(message, path)
            filepath = display_path(path)

            for line in self._iter_lines(message, path):
                parts = line.split(" ", 1)
                if len(parts) < 2 or not parts[1].strip():
                    continue

                yield new_identifier(), CanonicalRecord(
                    headers={"user-agent": parts[1].strip()},
                    raw=parts,
                    file=filepath,
                )


class DirectoryAdapter(PathAdapter, FileAdapterMixin):
    """Treat every file below ``path`` as a user-agent list.

    ``.gz`` and ``.bz2`` files are decompressed while reading.
    """

    name = "directory"

    def get_properties(self, message: str = "") -> Iterator[tuple[str, CanonicalRecord]]:
        self._report_path(message, self.path)

        for path in iter_files(self.path):
            self._report_file(message, path)
            filepath = display_path(path)

            for agent in self._iter_lines(message, path):
                yield new_identifier(), CanonicalRecord(
                    headers={"user-agent": agent},
                    file=filepath,
                )
