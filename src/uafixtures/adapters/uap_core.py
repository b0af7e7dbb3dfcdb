"""Adapter for the ua-parser/uap-core regex test cases."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

from uafixtures.adapters.base import PathAdapter
from uafixtures.adapters.common import FileAdapterMixin, display_path, iter_files, source_key
from uafixtures.models import CanonicalRecord, RecordBuilder, new_identifier

DEVICE_FILES = frozenset({"test_device.yaml"})
PLATFORM_FILES = frozenset({"test_os.yaml", "additional_os_tests.yaml"})
CLIENT_FILES = frozenset(
    {
        "test_ua.yaml",
        "firefox_user_agent_strings.yaml",
        "opera_mini_user_agent_strings.yaml",
        "pgts_browser_list.yaml",
    }
)
TEST_DIRECTORIES = ("tests", "test_resources")


class UapCoreAdapter(PathAdapter, FileAdapterMixin):
    """Merge the per-axis ``test_cases`` files into one record per user agent."""

    name = "ua-parser/uap-core"
    default_path = "ua-parser/uap-core"

    def roots(self) -> list[Path]:
        return [self.path / name for name in TEST_DIRECTORIES if (self.path / name).exists()]

    def _value(self, value: Any) -> str | None:
        cleaned = self._to_string(value)
        return None if cleaned == "undefined" else cleaned

    def _version(self, data: dict[str, Any]) -> str | None:
        major = self._value(data.get("major"))
        if major is None:
            return None
        minor = self._value(data.get("minor"))
        return f"{major}.{minor}" if minor else major

    def get_properties(self, message: str = "") -> Iterator[tuple[str, CanonicalRecord]]:
        self._report_path(message, self.path)
        agents: dict[str, RecordBuilder] = {}

        files = iter_files(self.roots(), names=DEVICE_FILES | PLATFORM_FILES | CLIENT_FILES)
        for path in files:
            self._report_file(message, path)
            provider = self._load_yaml(message, path)
            if not isinstance(provider, dict) or not isinstance(provider.get("test_cases"), list):
                continue

            filepath = display_path(path)
            key = source_key(path, self.path)
            for data in provider["test_cases"]:
                if not isinstance(data, dict) or data.get("user_agent_string") is None:
                    continue

                agent = str(data["user_agent_string"]).replace("\n", "\\n")
                if not agent:
                    continue

                builder = agents.get(agent)
                if builder is None:
                    builder = agents[agent] = RecordBuilder.for_user_agent(agent)
                if path.name in DEVICE_FILES:
                    builder.update(
                        "device",
                        device_name=self._value(data.get("model")),
                        brand=self._value(data.get("brand")),
                    )
                elif path.name in PLATFORM_FILES:
                    builder.update(
                        "platform",
                        name=self._value(data.get("family")),
                        version=self._version(data),
                    )
                else:
                    builder.update(
                        "client",
                        name=self._value(data.get("family")),
                        version=self._version(data),
                    )
                builder.add_source(key, data, filepath)

        for builder in agents.values():
            yield new_identifier(), builder.build()
