"""Adapter for the sinergi/browser-detector XML user-agent lists."""

from __future__ import annotations

from collections.abc import Iterator

from uafixtures.adapters.base import PathAdapter
from uafixtures.adapters.common import FileAdapterMixin, display_path, iter_files
from uafixtures.models import (
    CanonicalRecord,
    ClientInfo,
    DeviceInfo,
    PlatformInfo,
    new_identifier,
)

# Positions of the <field> children inside one <string> row.
BROWSER_FIELD = 0
BROWSER_VERSION_FIELD = 1
PLATFORM_FIELD = 2
PLATFORM_VERSION_FIELD = 3
DEVICE_FIELD = 4
USER_AGENT_FIELD = 6


class SinergiAdapter(PathAdapter, FileAdapterMixin):
    """Each ``<strings><string>`` row holds positional ``<field>`` values."""

    name = "sinergi/browser-detector"
    default_path = "sinergi/browser-detector/tests/BrowserDetector/Tests/_files"

    def get_properties(self, message: str = "") -> Iterator[tuple[str, CanonicalRecord]]:
        self._report_path(message, self.path)

        for path in iter_files(self.path, extensions=["xml"]):
            self._report_file(message, path)
            root = self._load_xml(message, path)
            if root is None:
                continue

            filepath = display_path(path)
            for string in root.iter("string"):
                fields = [field.text or "" for field in string.findall("field")]
                if len(fields) <= USER_AGENT_FIELD:
                    continue

                agent = self._join_lines(fields[USER_AGENT_FIELD])
                if not agent:
                    continue

                yield new_identifier(), CanonicalRecord(
                    headers={"user-agent": agent},
                    device=DeviceInfo(device_name=self._to_string(fields[DEVICE_FIELD])),
                    client=ClientInfo(
                        name=self._to_string(fields[BROWSER_FIELD]),
                        version=self._to_string(fields[BROWSER_VERSION_FIELD]),
                    ),
                    platform=PlatformInfo(
                        name=self._to_string(fields[PLATFORM_FIELD]),
                        version=self._to_string(fields[PLATFORM_VERSION_FIELD]),
                    ),
                    raw=fields,
                    file=filepath,
                )
