"""Base interface for all fixture adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path
from typing import ClassVar

from uafixtures.config import DEFAULT_SETTINGS, SourceSettings
from uafixtures.headers import HeaderMap
from uafixtures.models import CanonicalRecord
from uafixtures.output import OutputAwareMixin


class FixtureAdapter(OutputAwareMixin, ABC):
    """Adapter that converts one upstream fixture corpus into canonical records.

    Only :meth:`get_properties` carries source-specific logic; headers and
    user agents are projections of it. All three operations return lazy,
    finite generators that re-read the source on every call.
    """

    name: str

    def get_name(self) -> str:
        return self.name

    def is_ready(self, message: str = "") -> bool:
        """Return whether the backing resource exists, reporting if it does not."""

        return True

    @abstractmethod
    def get_properties(self, message: str = "") -> Iterator[tuple[str, CanonicalRecord]]:
        """Yield ``(identifier, record)`` pairs from the adapter source."""

    def get_headers(self, message: str = "") -> Iterator[tuple[str, HeaderMap]]:
        for uid, record in self.get_properties(message):
            yield uid, record.headers

    def get_user_agents(self, message: str = "") -> Iterator[tuple[str, str]]:
        for uid, headers in self.get_headers(message):
            if "user-agent" not in headers:
                continue
            yield uid, headers["user-agent"]


class PathAdapter(FixtureAdapter):
    """Adapter backed by a directory tree on disk.

    Adapters for vendored corpora set ``default_path`` relative to the
    Composer ``vendor`` directory (or ``node_modules`` when
    ``package_root`` says so); generic adapters require an explicit path.
    """

    default_path: ClassVar[str | None] = None
    package_root: ClassVar[str] = "vendor"

    def __init__(
        self,
        path: str | Path | None = None,
        *,
        settings: SourceSettings | None = None,
    ) -> None:
        self.settings = settings or DEFAULT_SETTINGS
        if path is None:
            path = self.default_location(self.settings)
            if path is None:
                raise TypeError(f"{type(self).__name__} requires an explicit path")
        self.path = Path(path)

    @classmethod
    def default_location(cls, settings: SourceSettings) -> Path | None:
        """Where the vendored corpus lives under ``settings``, if it has a default."""

        if cls.default_path is None:
            return None
        if cls.package_root == "node_modules":
            return settings.node_modules_path(cls.default_path)
        return settings.vendor_path(cls.default_path)

    def roots(self) -> list[Path]:
        return [self.path]

    def is_ready(self, message: str = "") -> bool:
        if self.path.exists():
            return True

        self.write_error(f"{message}- path {self.path} not found")
        return False
