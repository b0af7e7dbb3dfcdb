"""Facade that streams several adapters as one."""

from __future__ import annotations

from collections.abc import Iterator

from uafixtures.adapters.base import FixtureAdapter
from uafixtures.headers import HeaderMap
from uafixtures.models import CanonicalRecord
from uafixtures.output import OutputSink


class CollectionAdapter(FixtureAdapter):
    """Chain member adapters in the order given, without de-duplication."""

    name = "collection"

    def __init__(self, *adapters: FixtureAdapter) -> None:
        self.adapters: list[FixtureAdapter] = list(adapters)

    def __len__(self) -> int:
        return len(self.adapters)

    def add(self, adapter: FixtureAdapter) -> None:
        self.adapters.append(adapter)

    def set_output(self, output: OutputSink | None) -> None:
        super().set_output(output)
        for adapter in self.adapters:
            adapter.set_output(output)

    def is_ready(self, message: str = "") -> bool:
        return len(self) > 0

    def get_properties(self, message: str = "") -> Iterator[tuple[str, CanonicalRecord]]:
        for adapter in self.adapters:
            yield from adapter.get_properties(message)

    def get_headers(self, message: str = "") -> Iterator[tuple[str, HeaderMap]]:
        for adapter in self.adapters:
            yield from adapter.get_headers(message)

    def get_user_agents(self, message: str = "") -> Iterator[tuple[str, str]]:
        for adapter in self.adapters:
            yield from adapter.get_user_agents(message)
