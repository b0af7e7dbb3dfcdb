"""Adapter for the mobiledetect/mobiledetectlib vendor providers."""

from __future__ import annotations

from collections.abc import Iterator

from uafixtures.adapters.base import PathAdapter
from uafixtures.adapters.common import FileAdapterMixin, display_path, iter_files
from uafixtures.models import CanonicalRecord, DeviceInfo, new_identifier


class MobileDetectAdapter(PathAdapter, FileAdapterMixin):
    """Provider files return ``{vendor: {user agent: {isMobile, model, ...}}}``."""

    name = "mobiledetect/mobiledetectlib"
    default_path = "mobiledetect/mobiledetectlib/tests/providers/vendors"

    def get_properties(self, message: str = "") -> Iterator[tuple[str, CanonicalRecord]]:
        self._report_path(message, self.path)

        for path in iter_files(self.path, extensions=["php"]):
            self._report_file(message, path)
            provider = self._load_php(message, path)
            if not isinstance(provider, dict):
                continue

            filepath = display_path(path)
            for vendor_data in provider.values():
                if not isinstance(vendor_data, dict):
                    continue

                for key, test in vendor_data.items():
                    # integer keys are plain list entries without expectations
                    if isinstance(key, int):
                        continue

                    agent = str(key).strip()
                    if not agent:
                        continue

                    expected = test if isinstance(test, dict) else {}
                    yield new_identifier(), CanonicalRecord(
                        headers={"user-agent": agent},
                        device=DeviceInfo(
                            device_name=self._to_string(expected.get("model")),
                            is_mobile=bool(expected.get("isMobile")),
                        ),
                        raw=test,
                        file=filepath,
                    )
