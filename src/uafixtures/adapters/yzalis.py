"""Adapter for the yzalis/ua-parser YAML fixtures."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from uafixtures.adapters.base import PathAdapter
from uafixtures.adapters.common import FileAdapterMixin, display_path, iter_files, source_key
from uafixtures.models import CanonicalRecord, RecordBuilder, new_identifier

BROWSERS = "browsers.yml"
DEVICES = "devices.yml"
OPERATING_SYSTEMS = "operating_systems.yml"
RENDERING_ENGINES = "rendering_engines.yml"


def _cell(row: list[Any], index: int) -> Any:
    return row[index] if index < len(row) else None


class YzalisAdapter(PathAdapter, FileAdapterMixin):
    """Fixture rows are positional lists whose first cell is the user agent."""

    name = "yzalis/ua-parser"
    default_path = "yzalis/ua-parser/tests/UAParser/Tests/Fixtures"

    def join_version(self, parts: list[Any]) -> str | None:
        """Join ``major, minor, patch`` cells with dots, stopping at the first empty one."""

        joined: list[str] = []
        for part in parts:
            cleaned = self._to_string(part)
            if cleaned is None:
                break
            joined.append(cleaned)
        return ".".join(joined) or None

    def apply_row(self, builder: RecordBuilder, file_name: str, row: list[Any]) -> None:
        if file_name == BROWSERS:
            builder.update(
                "client",
                name=self._to_string(_cell(row, 1)),
                version=self.join_version(row[2:5]),
            )
        elif file_name == DEVICES:
            builder.update(
                "device",
                brand=self._to_string(_cell(row, 1)),
                device_name=self._to_string(_cell(row, 2)),
                type=self._to_string(_cell(row, 3)),
            )
        elif file_name == OPERATING_SYSTEMS:
            builder.update(
                "platform",
                name=self._to_string(_cell(row, 1)),
                version=self.join_version(row[2:5]),
            )
        elif file_name == RENDERING_ENGINES:
            builder.update(
                "engine",
                name=self._to_string(_cell(row, 1)),
                version=self._to_string(_cell(row, 2)),
            )

    def get_properties(self, message: str = "") -> Iterator[tuple[str, CanonicalRecord]]:
        self._report_path(message, self.path)
        agents: dict[str, RecordBuilder] = {}

        files = iter_files(self.path, names=[BROWSERS, DEVICES, OPERATING_SYSTEMS, RENDERING_ENGINES])
        for path in files:
            self._report_file(message, path)
            provider = self._load_yaml(message, path)
            if not isinstance(provider, list):
                continue

            filepath = display_path(path)
            key = source_key(path, self.path)
            for row in provider:
                if not isinstance(row, list) or not row:
                    continue

                agent = self._to_string(row[0])
                if agent is None:
                    continue

                builder = agents.get(agent)
                if builder is None:
                    builder = agents[agent] = RecordBuilder.for_user_agent(agent)
                self.apply_row(builder, path.name, row)
                builder.add_source(key, row, filepath)

        for builder in agents.values():
            yield new_identifier(), builder.build()
