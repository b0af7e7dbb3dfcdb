"""Adapter for the endorphin-studio/browser-detector XML test data."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Iterator
from typing import Any

from uafixtures.adapters.base import PathAdapter
from uafixtures.adapters.common import FileAdapterMixin, display_path, iter_files, source_key
from uafixtures.models import CanonicalRecord, RecordBuilder, new_identifier

# check-list property -> (axis, field)
PROPERTY_FIELDS: dict[str, tuple[str, str]] = {
    "OS->getName()": ("platform", "name"),
    "OS->getVersion()": ("platform", "version"),
    "Browser->getName()": ("client", "name"),
    "Device->getName()": ("device", "device_name"),
    "Device->getType()": ("device", "type"),
    "isMobile": ("device", "is_mobile"),
    "Robot->getName()": ("client", "name"),
}


def _text(element: ET.Element | None) -> str:
    if element is None or element.text is None:
        return ""
    return element.text.strip()


class EndorphinAdapter(PathAdapter, FileAdapterMixin):
    """Every ``<test>`` pairs a ``<CheckList>`` of expectations with a ``<UAList>``.

    A user agent listed by several tests keeps its first expectations;
    later tests only fill in or overwrite with non-empty values. ``raw``
    keeps every matching check list, in file order, under the file key.
    """

    name = "endorphin-studio/browser-detector"
    default_path = "endorphin-studio/browser-detector/tests/data/ua"

    def expectations(self, test: ET.Element) -> dict[str, dict[str, Any]]:
        expected: dict[str, dict[str, Any]] = {}
        for item in test.iter("Item"):
            prop = _text(item.find("Property"))
            target = PROPERTY_FIELDS.get(prop)
            if target is None:
                continue

            axis, field = target
            value = _text(item.find("Value"))
            if field == "is_mobile":
                converted = self._to_bool(value)
            else:
                converted = value or None
            expected.setdefault(axis, {})[field] = converted

            if prop == "Robot->getName()" and converted:
                expected["client"]["is_bot"] = True
        return expected

    def get_properties(self, message: str = "") -> Iterator[tuple[str, CanonicalRecord]]:
        self._report_path(message, self.path)
        agents: dict[str, RecordBuilder] = {}

        for path in iter_files(self.path, extensions=["xml"]):
            self._report_file(message, path)
            root = self._load_xml(message, path)
            if root is None:
                continue

            filepath = display_path(path)
            key = source_key(path, self.path)
            for test in root.iter("test"):
                expected = self.expectations(test)
                useragents = [_text(ua) for ua in test.iter("UA")]

                for agent in useragents:
                    if not agent:
                        continue

                    builder = agents.get(agent)
                    if builder is None:
                        builder = agents[agent] = RecordBuilder.for_user_agent(agent)
                    for axis, values in expected.items():
                        builder.update(axis, skip_none=True, **values)
                    builder.append_source(
                        key,
                        {axis: dict(values) for axis, values in expected.items()},
                        filepath,
                    )

        for builder in agents.values():
            yield new_identifier(), builder.build()
