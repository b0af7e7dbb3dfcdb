"""Adapter for the whichbrowser/parser YAML test data."""

from __future__ import annotations

from collections.abc import Iterator
from email.parser import HeaderParser
from pathlib import Path
from typing import Any

from uafixtures.adapters.base import PathAdapter
from uafixtures.adapters.classification import is_whichbrowser_mobile
from uafixtures.adapters.common import FileAdapterMixin, display_path, iter_files
from uafixtures.models import (
    CanonicalRecord,
    ClientInfo,
    DeviceInfo,
    EngineInfo,
    PlatformInfo,
    new_identifier,
)


def parse_header_block(block: str) -> dict[str, str]:
    """Parse a raw ``Name: value`` header block into a lower-cased mapping."""

    message = HeaderParser().parsestr(block.strip() + "\n\n", headersonly=True)
    headers: dict[str, str] = {}
    for name, value in message.items():
        value = " ".join(str(value).split())
        if value:
            headers[name.lower()] = value
    return headers


def _section(result: dict[str, Any], key: str) -> dict[str, Any]:
    value = result.get(key)
    return value if isinstance(value, dict) else {}


class WhichBrowserAdapter(PathAdapter, FileAdapterMixin):
    """Rows hold the request as ``useragent`` or ``headers`` and the expected ``result``."""

    name = "whichbrowser/parser"
    default_path = "whichbrowser/parser/tests/data"

    def get_properties(self, message: str = "") -> Iterator[tuple[str, CanonicalRecord]]:
        self._report_path(message, self.path)

        for path in iter_files(self.path, extensions=["yaml", "yml"]):
            self._report_file(message, path)
            data = self._load_yaml(message, path)
            if not isinstance(data, list):
                continue

            for row in data:
                record = self._to_record(row, path)
                if record is not None:
                    yield new_identifier(), record

    def headers_from_row(self, row: dict[str, Any]) -> dict[str, str]:
        agent = row.get("useragent")
        if isinstance(agent, str):
            agent = agent.strip()
            return {"user-agent": agent} if agent else {}

        headers = row.get("headers")
        if isinstance(headers, dict):
            return self._lower_headers(headers)
        if isinstance(headers, str):
            return parse_header_block(headers)
        return {}

    def _version(self, section: dict[str, Any]) -> str | None:
        version = section.get("version")
        if isinstance(version, dict):
            version = version.get("value")
        return self._to_string(version)

    def _to_record(self, row: Any, path: Path) -> CanonicalRecord | None:
        if not isinstance(row, dict):
            return None

        headers = self.headers_from_row(row)
        if not headers:
            return None

        result = row.get("result")
        if not isinstance(result, dict):
            result = {}

        browser = _section(result, "browser")
        engine = _section(result, "engine")
        os_block = _section(result, "os")
        device = _section(result, "device")
        device_type = self._to_string(device.get("type"))

        return CanonicalRecord(
            headers=headers,
            device=DeviceInfo(
                device_name=self._to_string(device.get("model")),
                brand=self._to_string(device.get("manufacturer")),
                type=device_type,
                is_mobile=is_whichbrowser_mobile(device),
            ),
            client=ClientInfo(
                name=self._to_string(browser.get("name")),
                version=self._version(browser),
                type=self._to_string(browser.get("type")),
                is_bot=device_type == "bot",
            ),
            platform=PlatformInfo(
                name=self._to_string(os_block.get("name")),
                version=self._version(os_block),
            ),
            engine=EngineInfo(
                name=self._to_string(engine.get("name")),
                version=self._version(engine),
            ),
            raw=row,
            file=display_path(path),
        )
