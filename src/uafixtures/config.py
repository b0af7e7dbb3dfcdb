"""Runtime settings for fixture adapters."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

ENV_PREFIX = "UAFIXTURES_"


@dataclass(frozen=True)
class SourceSettings:
    """Where vendored fixture trees live and how large reads are batched.

    Adapters for third-party corpora resolve their default path below
    ``vendor_dir`` (Composer packages) or ``node_modules_dir`` (npm packages).
    """

    vendor_dir: Path = Path("vendor")
    node_modules_dir: Path = Path("node_modules")
    chunksize: int = 50_000
    fetch_size: int = 1_000

    def __post_init__(self) -> None:
        object.__setattr__(self, "vendor_dir", Path(self.vendor_dir))
        object.__setattr__(self, "node_modules_dir", Path(self.node_modules_dir))
        if self.chunksize < 1:
            raise ValueError("chunksize must be >= 1")
        if self.fetch_size < 1:
            raise ValueError("fetch_size must be >= 1")

    def vendor_path(self, relative: str | Path) -> Path:
        return self.vendor_dir / relative

    def node_modules_path(self, relative: str | Path) -> Path:
        return self.node_modules_dir / relative

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> "SourceSettings":
        """Build settings from a config mapping, ignoring unknown keys."""

        known = {item.name for item in fields(cls)}
        values = {key: value for key, value in (payload or {}).items() if key in known}
        for key in ("chunksize", "fetch_size"):
            if key in values:
                values[key] = int(values[key])
        return cls(**values)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "SourceSettings":
        """Build settings from ``UAFIXTURES_*`` environment variables."""

        environ = os.environ if environ is None else environ
        payload = {
            item.name: environ[ENV_PREFIX + item.name.upper()]
            for item in fields(cls)
            if environ.get(ENV_PREFIX + item.name.upper())
        }
        return cls.from_mapping(payload)


DEFAULT_SETTINGS = SourceSettings()
