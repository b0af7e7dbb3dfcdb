"""Adapter for the woothee/woothee-testset YAML test sets."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from uafixtures.adapters.base import PathAdapter
from uafixtures.adapters.classification import WOOTHEE_UNKNOWN, classify_woothee_category
from uafixtures.adapters.common import FileAdapterMixin, display_path, iter_files
from uafixtures.models import (
    CanonicalRecord,
    ClientInfo,
    DeviceInfo,
    PlatformInfo,
    new_identifier,
)


class WootheeAdapter(PathAdapter, FileAdapterMixin):
    """Rows carry ``target`` plus name, version, os, os_version and category."""

    name = "woothee/woothee-testset"
    default_path = "woothee/woothee-testset/testsets"

    def _value(self, value: Any) -> str | None:
        cleaned = self._to_string(value)
        return None if cleaned == WOOTHEE_UNKNOWN else cleaned

    def get_properties(self, message: str = "") -> Iterator[tuple[str, CanonicalRecord]]:
        self._report_path(message, self.path)

        for path in iter_files(self.path, extensions=["yaml", "yml"]):
            self._report_file(message, path)
            data = self._load_yaml(message, path)
            if not isinstance(data, list):
                continue

            filepath = display_path(path)
            for row in data:
                if not isinstance(row, dict):
                    continue

                agent = self._to_string(row.get("target"))
                if agent is None:
                    continue

                category = self._value(row.get("category"))
                is_mobile, is_bot = classify_woothee_category(category)

                yield new_identifier(), CanonicalRecord(
                    headers={"user-agent": agent},
                    device=DeviceInfo(type=category, is_mobile=is_mobile),
                    client=ClientInfo(
                        name=self._value(row.get("name")),
                        version=self._value(row.get("version")),
                        is_bot=is_bot,
                    ),
                    platform=PlatformInfo(
                        name=self._value(row.get("os")),
                        version=self._value(row.get("os_version")),
                    ),
                    raw=row,
                    file=filepath,
                )
