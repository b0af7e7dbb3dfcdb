"""Adapter for the faisalman/ua-parser-js JSON test files."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from uafixtures.adapters.base import PathAdapter
from uafixtures.adapters.common import FileAdapterMixin, display_path, iter_files, source_key
from uafixtures.models import CanonicalRecord, RecordBuilder, new_identifier

UNDEFINED = "undefined"

# test file name -> (axis, {canonical field: "expect" key})
FILE_AXES: dict[str, tuple[str, dict[str, str]]] = {
    "browser-test.json": ("client", {"name": "name", "version": "version"}),
    "device-test.json": ("device", {"device_name": "model", "brand": "vendor", "type": "type"}),
    "os-test.json": ("platform", {"name": "name", "version": "version"}),
    "engine-test.json": ("engine", {"name": "name", "version": "version"}),
}


class UaParserJsAdapter(PathAdapter, FileAdapterMixin):
    """Merge the ``*-test.json`` expectations into one record per user agent.

    ``cpu-test.json`` and the media-player tests have no canonical axis and
    are ignored.
    """

    name = "faisalman/ua-parser-js"
    default_path = "ua-parser-js/test"
    package_root = "node_modules"

    def _value(self, value: Any) -> str | None:
        cleaned = self._to_string(value)
        return None if cleaned == UNDEFINED else cleaned

    def get_properties(self, message: str = "") -> Iterator[tuple[str, CanonicalRecord]]:
        self._report_path(message, self.path)
        agents: dict[str, RecordBuilder] = {}

        for path in iter_files(self.path, names=FILE_AXES):
            self._report_file(message, path)
            provider = self._load_json(message, path)
            if not isinstance(provider, list):
                continue

            axis, columns = FILE_AXES[path.name]
            filepath = display_path(path)
            key = source_key(path, self.path)
            for data in provider:
                if not isinstance(data, dict):
                    continue

                agent = self._to_string(data.get("ua"))
                if agent is None:
                    continue

                expect = data.get("expect")
                if not isinstance(expect, dict):
                    expect = {}

                builder = agents.get(agent)
                if builder is None:
                    builder = agents[agent] = RecordBuilder.for_user_agent(agent)
                builder.update(
                    axis,
                    **{field: self._value(expect.get(name)) for field, name in columns.items()},
                )
                builder.add_source(key, data, filepath)

        for builder in agents.values():
            yield new_identifier(), builder.build()
