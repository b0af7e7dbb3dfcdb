"""Adapters for the mimmi20 browser-detector fixture sets."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

from uafixtures.adapters.base import PathAdapter
from uafixtures.adapters.classification import (
    is_browser_detector_bot,
    is_browser_detector_mobile,
    normalize_version,
)
from uafixtures.adapters.common import FileAdapterMixin, display_path, iter_files
from uafixtures.models import (
    CanonicalRecord,
    ClientInfo,
    DeviceInfo,
    DisplayInfo,
    EngineInfo,
    PlatformInfo,
    new_identifier,
)

FALLBACK_USER_AGENT = "this is a fake ua to trigger the fallback"


def _block(data: Any, *keys: str) -> dict[str, Any]:
    """Return the first mapping found under ``keys``, or an empty dict."""

    for key in keys:
        value = data.get(key)
        if isinstance(value, dict):
            return value
    return {}


class _BrowserDetectorMapping(FileAdapterMixin):
    """Mapping shared by both mimmi20 layouts once the result block is found."""

    def _build_record(
        self,
        headers: dict[str, str],
        result: dict[str, Any],
        *,
        raw: Any,
        path: Path,
    ) -> CanonicalRecord:
        device = _block(result, "device")
        display = _block(device, "display")
        client = _block(result, "client", "browser")
        platform = _block(result, "os", "platform")
        engine = _block(result, "engine")

        return CanonicalRecord(
            headers=headers,
            device=DeviceInfo(
                device_name=self._to_string(device.get("deviceName")),
                marketing_name=self._to_string(device.get("marketingName")),
                manufacturer=self._to_string(device.get("manufacturer")),
                brand=self._to_string(device.get("brand")),
                display=DisplayInfo(
                    width=self._to_int(display.get("width")),
                    height=self._to_int(display.get("height")),
                    touch=self._to_bool(display.get("touch")),
                    type=self._to_string(display.get("type")),
                    size=self._to_float(display.get("size")),
                ),
                dual_orientation=self._to_bool(device.get("dualOrientation")),
                type=self._to_string(device.get("type")),
                sim_count=self._to_int(device.get("simCount")),
                is_mobile=is_browser_detector_mobile(device.get("type")),
            ),
            client=ClientInfo(
                name=self._to_string(client.get("name")),
                modus=self._to_string(client.get("modus")),
                version=normalize_version(self._to_string(client.get("version"))),
                manufacturer=self._to_string(client.get("manufacturer")),
                bits=self._to_int(client.get("bits")),
                type=self._to_string(client.get("type")),
                is_bot=is_browser_detector_bot(client.get("type")),
            ),
            platform=PlatformInfo(
                name=self._to_string(platform.get("name")),
                marketing_name=self._to_string(platform.get("marketingName")),
                version=normalize_version(self._to_string(platform.get("version"))),
                manufacturer=self._to_string(platform.get("manufacturer")),
                bits=self._to_int(platform.get("bits")),
            ),
            engine=EngineInfo(
                name=self._to_string(engine.get("name")),
                version=normalize_version(self._to_string(engine.get("version"))),
                manufacturer=self._to_string(engine.get("manufacturer")),
            ),
            raw=raw,
            file=display_path(path),
        )


class BrowserDetectorAdapter(PathAdapter, _BrowserDetectorMapping):
    """Read ``tests/data/**/*.json``; each test carries headers and result blocks."""

    name = "mimmi20/browser-detector"
    default_path = "mimmi20/browser-detector/tests/data"

    def get_properties(self, message: str = "") -> Iterator[tuple[str, CanonicalRecord]]:
        self._report_path(message, self.path)

        for path in iter_files(self.path, extensions=["json"]):
            self._report_file(message, path)
            data = self._load_json(message, path)
            if not isinstance(data, (dict, list)):
                continue

            tests = data.values() if isinstance(data, dict) else data
            for test in tests:
                if not isinstance(test, dict):
                    continue

                headers = self._lower_headers(test.get("headers"))
                agent = headers.get("user-agent")
                if not agent or agent == FALLBACK_USER_AGENT:
                    continue

                yield new_identifier(), self._build_record(headers, test, raw=test, path=path)


class DetectorAdapter(PathAdapter, _BrowserDetectorMapping):
    """Read browser-detector-tests issue files, whose expectations sit under ``result``."""

    name = "mimmi20/browser-detector-tests"
    default_path = "mimmi20/browser-detector-tests/tests/issues"

    def get_properties(self, message: str = "") -> Iterator[tuple[str, CanonicalRecord]]:
        self._report_path(message, self.path)

        for path in iter_files(self.path, extensions=["json"]):
            self._report_file(message, path)
            data = self._load_json(message, path)
            if not isinstance(data, (dict, list)):
                continue

            tests = data.values() if isinstance(data, dict) else data
            for test in tests:
                if not isinstance(test, dict):
                    continue

                headers = self._lower_headers(test.get("headers"))
                if not headers.get("user-agent"):
                    continue

                result = test.get("result")
                if not isinstance(result, dict):
                    result = {}

                yield new_identifier(), self._build_record(headers, result, raw=test, path=path)
