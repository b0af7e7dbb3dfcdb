"""Named catalogue of fixture adapters for configurable exports.

Adapters are registered by class and keyed by their ``name`` attribute,
lower-cased, so ``"Woothee/Woothee-Testset"`` and
``"woothee/woothee-testset"`` select the same source.  A plugin spec may
register a class under a different key.
"""

from __future__ import annotations

import importlib
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from uafixtures.adapters import (
    BrowscapAdapter,
    BrowserDetectorAdapter,
    CbschuldAdapter,
    CrawlerDetectAdapter,
    DatabaseAdapter,
    DetectorAdapter,
    DirectoryAdapter,
    DonatjAdapter,
    EndorphinAdapter,
    FixtureAdapter,
    JsonFileAdapter,
    LogFileAdapter,
    MatomoAdapter,
    MobileDetectAdapter,
    PathAdapter,
    PhpFileAdapter,
    PiwikAdapter,
    SinergiAdapter,
    TxtCounterFileAdapter,
    TxtFileAdapter,
    UaParserJsAdapter,
    UapCoreAdapter,
    WhichBrowserAdapter,
    WootheeAdapter,
    YamlFileAdapter,
    YzalisAdapter,
    ZsxsoftAdapter,
)
from uafixtures.config import DEFAULT_SETTINGS, SourceSettings

# generic sources first, then vendored corpora; lookups go through ``name``
BUILTIN_ADAPTERS: tuple[type[FixtureAdapter], ...] = (
    TxtFileAdapter,
    TxtCounterFileAdapter,
    DirectoryAdapter,
    LogFileAdapter,
    JsonFileAdapter,
    YamlFileAdapter,
    PhpFileAdapter,
    DatabaseAdapter,
    CbschuldAdapter,
    CrawlerDetectAdapter,
    MobileDetectAdapter,
    DonatjAdapter,
    SinergiAdapter,
    ZsxsoftAdapter,
    BrowscapAdapter,
    BrowserDetectorAdapter,
    DetectorAdapter,
    MatomoAdapter,
    PiwikAdapter,
    WhichBrowserAdapter,
    WootheeAdapter,
    UapCoreAdapter,
    UaParserJsAdapter,
    EndorphinAdapter,
    YzalisAdapter,
)


def adapter_key(name: str) -> str:
    return name.strip().lower()


@dataclass(frozen=True)
class AdapterPluginSpec:
    """Adapter class imported at runtime and registered under ``name``."""

    name: str
    module: str
    class_name: str


class AdapterRegistry:
    """Adapter classes keyed by their source name."""

    def __init__(self, adapters: Iterable[type[FixtureAdapter]] = ()) -> None:
        self._adapters: dict[str, type[FixtureAdapter]] = {}
        for adapter_cls in adapters:
            self.register(adapter_cls)

    def register(self, adapter_cls: type[FixtureAdapter], *, name: str | None = None) -> None:
        """Add ``adapter_cls`` under ``name``, defaulting to the class's own name."""

        if not (isinstance(adapter_cls, type) and issubclass(adapter_cls, FixtureAdapter)):
            raise TypeError(f"{adapter_cls!r} is not a FixtureAdapter subclass")

        key = adapter_key(name if name is not None else getattr(adapter_cls, "name", ""))
        if not key:
            raise ValueError(f"{adapter_cls.__name__} has an empty adapter name")
        if key in self._adapters:
            existing = self._adapters[key].__name__
            raise ValueError(f"Adapter name '{key}' already taken by {existing}")
        self._adapters[key] = adapter_cls

    def register_plugin(self, plugin: AdapterPluginSpec) -> None:
        module = importlib.import_module(plugin.module)
        self.register(getattr(module, plugin.class_name), name=plugin.name)

    def get(self, name: str) -> type[FixtureAdapter]:
        key = adapter_key(name)
        if key not in self._adapters:
            raise KeyError(f"Unknown adapter '{name}'. Available: {', '.join(self.available())}")
        return self._adapters[key]

    def create(self, name: str, **params: Any) -> FixtureAdapter:
        """Instantiate the adapter registered as ``name`` with ``params``."""

        return self.get(name)(**params)

    def available(self) -> list[str]:
        return sorted(self._adapters)

    def locations(self, settings: SourceSettings | None = None) -> dict[str, Path | None]:
        """Map each name to the corpus path it reads when given no ``path``.

        Sources without a vendored default (generic file readers, the
        database) map to None.
        """

        settings = settings or DEFAULT_SETTINGS
        locations: dict[str, Path | None] = {}
        for key in self.available():
            adapter_cls = self._adapters[key]
            if issubclass(adapter_cls, PathAdapter):
                locations[key] = adapter_cls.default_location(settings)
            else:
                locations[key] = None
        return locations


def build_default_adapter_registry() -> AdapterRegistry:
    return AdapterRegistry(BUILTIN_ADAPTERS)
