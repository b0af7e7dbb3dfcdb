"""Adapters for the matomo (formerly piwik) device-detector YAML fixtures."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any, ClassVar

from uafixtures.adapters.base import PathAdapter
from uafixtures.adapters.classification import is_matomo_mobile
from uafixtures.adapters.common import FileAdapterMixin, display_path, iter_files
from uafixtures.models import (
    CanonicalRecord,
    ClientInfo,
    DeviceInfo,
    EngineInfo,
    PlatformInfo,
    new_identifier,
)


def _mapping(row: dict[str, Any], key: str) -> dict[str, Any]:
    value = row.get(key)
    return value if isinstance(value, dict) else {}


class MatomoAdapter(PathAdapter, FileAdapterMixin):
    """Fixture rows carry ``user_agent``/``headers`` plus os, client, bot and device blocks.

    A ``bot`` block takes precedence over ``client``: its category becomes
    the client type and the version stays unknown.
    """

    name = "matomo/device-detector"
    default_path = "matomo/device-detector/Tests/fixtures"

    # ismobile reported for rows that carry no device type at all
    missing_type_mobile: ClassVar[bool | None] = False

    def get_properties(self, message: str = "") -> Iterator[tuple[str, CanonicalRecord]]:
        self._report_path(message, self.path)

        for path in iter_files(self.path, extensions=["yml", "yaml"]):
            self._report_file(message, path)
            data = self._load_yaml(message, path)
            if not isinstance(data, list):
                continue

            for row in data:
                record = self._to_record(row, path)
                if record is not None:
                    yield new_identifier(), record

    def is_mobile(self, row: dict[str, Any]) -> bool | None:
        if not _mapping(row, "device").get("type"):
            return self.missing_type_mobile
        return is_matomo_mobile(row)

    def _headers(self, row: dict[str, Any]) -> dict[str, str]:
        headers: dict[str, str] = {}

        agent = row.get("user_agent")
        if isinstance(agent, str):
            agent = self._join_lines(agent)
            if agent:
                headers["user-agent"] = agent

        headers.update(self._lower_headers(row.get("headers")))
        return headers

    def _to_record(self, row: Any, path: Path) -> CanonicalRecord | None:
        if not isinstance(row, dict):
            return None

        headers = self._headers(row)
        if not headers:
            return None

        device = _mapping(row, "device")
        client = _mapping(row, "client")
        bot = _mapping(row, "bot")
        os_block = _mapping(row, "os")

        if bot:
            client_info = ClientInfo(
                name=self._to_string(bot.get("name")),
                type=self._to_string(bot.get("category")),
                is_bot=True,
            )
        else:
            client_info = ClientInfo(
                name=self._to_string(client.get("name")),
                version=self._to_string(client.get("version")),
                type=self._to_string(client.get("type")),
                is_bot=False,
            )

        return CanonicalRecord(
            headers=headers,
            device=DeviceInfo(
                device_name=self._to_string(device.get("model")),
                brand=self._to_string(device.get("brand")),
                type=self._to_string(device.get("type")),
                is_mobile=self.is_mobile(row),
            ),
            client=client_info,
            platform=PlatformInfo(
                name=self._to_string(os_block.get("name")),
                version=self._to_string(os_block.get("version")),
            ),
            engine=EngineInfo(
                name=self._to_string(client.get("engine")),
                version=self._to_string(client.get("engine_version")),
            ),
            raw=row,
            file=display_path(path),
        )


class PiwikAdapter(MatomoAdapter):
    """The legacy piwik package; a missing device type leaves mobility unknown."""

    name = "piwik/device-detector"
    default_path = "piwik/device-detector/Tests/fixtures"
    missing_type_mobile = None
