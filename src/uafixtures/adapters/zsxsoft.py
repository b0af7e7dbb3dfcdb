"""Adapter for the zsxsoft/php-useragent test list."""

from __future__ import annotations

import re
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from uafixtures.adapters.base import PathAdapter
from uafixtures.adapters.common import FileAdapterMixin, display_path, iter_files
from uafixtures.models import (
    CanonicalRecord,
    ClientInfo,
    DeviceInfo,
    PlatformInfo,
    new_identifier,
)

BRAND_PATTERN = re.compile(r"""^\$brand = ("|')(.*)("|');$""")
BRAND_SOURCE = Path("lib") / "useragent_detect_device.php"
TEST_LIST = "UserAgentList.php"

# Positions inside the expectation list of one test row.
CLIENT_NAME = 2
CLIENT_VERSION = 3
PLATFORM_NAME = 5
PLATFORM_VERSION = 6
DEVICE_STRING = 8


def _item(values: Any, index: int) -> Any:
    if isinstance(values, list) and index < len(values):
        return values[index]
    return None


class ZsxsoftAdapter(PathAdapter, FileAdapterMixin):
    """Rows are ``[[user agent], [.., .., browser, version, .., os, os version, .., device]]``.

    The device string is split into brand and model using the brand names
    the library itself assigns in ``lib/useragent_detect_device.php``.
    """

    name = "zsxsoft/php-useragent"
    default_path = "zsxsoft/php-useragent"

    def load_brands(self, message: str = "") -> list[str]:
        """Return the known brands, longest first so prefixes never shadow longer names."""

        brands: list[str] = []
        source = self.path / BRAND_SOURCE
        if not source.exists():
            return brands

        for line in self._iter_lines(message, source):
            match = BRAND_PATTERN.match(line)
            if match and match.group(2) and match.group(2) not in brands:
                brands.append(match.group(2))

        return sorted(brands, key=len, reverse=True)

    @staticmethod
    def split_device(device: str | None, brands: list[str]) -> tuple[str | None, str | None]:
        if not device:
            return None, None
        for brand in brands:
            if brand in device:
                return brand, device.replace(brand, "").strip() or None
        return None, None

    def get_properties(self, message: str = "") -> Iterator[tuple[str, CanonicalRecord]]:
        self._report_path(message, self.path)
        brands = self.load_brands(message)

        for path in iter_files(self.path / "tests", names=[TEST_LIST]):
            self._report_file(message, path)
            provider = self._load_php(message, path)
            if not isinstance(provider, (dict, list)):
                continue

            filepath = display_path(path)
            rows = provider.values() if isinstance(provider, dict) else provider
            for row in rows:
                agent = self._to_string(_item(_item(row, 0), 0))
                if agent is None:
                    continue

                expected = _item(row, 1)
                brand, model = self.split_device(self._to_string(_item(expected, DEVICE_STRING)), brands)

                yield new_identifier(), CanonicalRecord(
                    headers={"user-agent": agent},
                    device=DeviceInfo(device_name=model, brand=brand),
                    client=ClientInfo(
                        name=self._to_string(_item(expected, CLIENT_NAME)),
                        version=self._to_string(_item(expected, CLIENT_VERSION)),
                    ),
                    platform=PlatformInfo(
                        name=self._to_string(_item(expected, PLATFORM_NAME)),
                        version=self._to_string(_item(expected, PLATFORM_VERSION)),
                    ),
                    raw=row,
                    file=filepath,
                )
