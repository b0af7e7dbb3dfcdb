"""Adapters for local JSON, YAML and PHP header collections."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from uafixtures.adapters.base import PathAdapter
from uafixtures.adapters.common import FileAdapterMixin, display_path, iter_files
from uafixtures.models import CanonicalRecord, new_identifier


def _entries(data: Any) -> Iterable[Any]:
    if isinstance(data, dict):
        return data.values()
    if isinstance(data, list):
        return data
    return ()


class JsonFileAdapter(PathAdapter, FileAdapterMixin):
    """Each ``*.json`` file holds a list of request header maps."""

    name = "json-files"

    def get_properties(self, message: str = "") -> Iterator[tuple[str, CanonicalRecord]]:
        self._report_path(message, self.path)

        for path in iter_files(self.path, extensions=["json"]):
            self._report_file(message, path)
            data = self._load_json(message, path)

            for headers in _entries(data):
                lowered = self._lower_headers(headers)
                if not lowered.get("user-agent"):
                    continue

                yield new_identifier(), CanonicalRecord(
                    headers=lowered,
                    raw=headers,
                    file=display_path(path),
                )


class YamlFileAdapter(PathAdapter, FileAdapterMixin):
    """Each ``*.yaml`` document holds a list of request header maps."""

    name = "yaml-files"

    def get_properties(self, message: str = "") -> Iterator[tuple[str, CanonicalRecord]]:
        self._report_path(message, self.path)

        for path in iter_files(self.path, extensions=["yaml", "yml"]):
            self._report_file(message, path)

            for document in self._load_yaml_documents(message, path):
                for headers in _entries(document):
                    lowered = self._lower_headers(headers)
                    if not lowered.get("user-agent"):
                        continue

                    yield new_identifier(), CanonicalRecord(
                        headers=lowered,
                        raw=headers,
                        file=display_path(path),
                    )


class PhpFileAdapter(PathAdapter, FileAdapterMixin):
    """Each ``*.php`` file returns an array keyed by user agent."""

    name = "php-files"

    def get_properties(self, message: str = "") -> Iterator[tuple[str, CanonicalRecord]]:
        self._report_path(message, self.path)

        for path in iter_files(self.path, extensions=["php"]):
            self._report_file(message, path)
            provider = self._load_php(message, path)
            if not isinstance(provider, dict):
                continue

            for key, payload in provider.items():
                agent = str(key).strip()
                if not agent or isinstance(key, int):
                    continue

                yield new_identifier(), CanonicalRecord(
                    headers={"user-agent": agent},
                    raw=payload,
                    file=display_path(path),
                )
