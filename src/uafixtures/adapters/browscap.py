"""Adapter for the browscap/browscap issue test suite."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

from uafixtures.adapters.base import PathAdapter
from uafixtures.adapters.classification import is_browscap_mobile
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

SKIPPED_FILES = frozenset({"issue-000-invalids.php", "issue-000-invalid-versions.php"})


class BrowscapAdapter(PathAdapter, FileAdapterMixin):
    """Read ``tests/issues/*.php`` files of ``{key: {ua, properties}}`` rows."""

    name = "browscap/browscap"
    default_path = "browscap/browscap/tests/issues"

    def get_properties(self, message: str = "") -> Iterator[tuple[str, CanonicalRecord]]:
        self._report_path(message, self.path)

        files = iter_files(
            self.path,
            extensions=["php"],
            predicate=lambda path: path.name not in SKIPPED_FILES,
        )
        for path in files:
            self._report_file(message, path)
            data = self._load_php(message, path)
            if not isinstance(data, (dict, list)):
                continue

            rows = data.values() if isinstance(data, dict) else data
            for row in rows:
                record = self._to_record(row, path)
                if record is not None:
                    yield new_identifier(), record

    def _to_record(self, row: Any, path: Path) -> CanonicalRecord | None:
        if not isinstance(row, dict) or "ua" not in row:
            return None

        agent = str(row["ua"]).strip()
        if not agent:
            return None

        properties = row.get("properties")
        if not isinstance(properties, dict):
            properties = {}

        device_type = self._to_string(properties.get("Device_Type"))
        crawler = properties.get("Crawler")

        return CanonicalRecord(
            headers={"user-agent": agent},
            device=DeviceInfo(
                device_name=self._to_string(properties.get("Device_Code_Name")),
                marketing_name=self._to_string(properties.get("Device_Name")),
                manufacturer=self._to_string(properties.get("Device_Maker")),
                brand=self._to_string(properties.get("Device_Brand_Name")),
                display=DisplayInfo(
                    touch=properties.get("Device_Pointing_Method") == "touchscreen",
                ),
                type=device_type,
                is_mobile=is_browscap_mobile(device_type),
            ),
            client=ClientInfo(
                name=self._to_string(properties.get("Browser")),
                modus=self._to_string(properties.get("Browser_Modus")),
                version=self._to_string(properties.get("Version")),
                manufacturer=self._to_string(properties.get("Browser_Maker")),
                bits=self._to_int(properties.get("Browser_Bits")),
                type=self._to_string(properties.get("Browser_Type")),
                is_bot=self._to_bool(crawler) if "Crawler" in properties else None,
            ),
            platform=PlatformInfo(
                name=self._to_string(properties.get("Platform")),
                version=self._to_string(properties.get("Platform_Version")),
                manufacturer=self._to_string(properties.get("Platform_Maker")),
                bits=self._to_int(properties.get("Platform_Bits")),
            ),
            engine=EngineInfo(
                name=self._to_string(properties.get("RenderingEngine_Name")),
                version=self._to_string(properties.get("RenderingEngine_Version")),
                manufacturer=self._to_string(properties.get("RenderingEngine_Maker")),
            ),
            raw=row,
            file=display_path(path),
        )
