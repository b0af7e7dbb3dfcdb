"""Canonical in-memory data models used by uafixtures."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, fields
from typing import Any, Mapping

from uafixtures.headers import HeaderMap

AXES: tuple[str, ...] = ("device", "client", "platform", "engine")


def new_identifier() -> str:
    """Return a fresh random stream key for one emitted record."""

    return str(uuid.uuid4())


@dataclass(frozen=True)
class DisplayInfo:
    width: int | None = None
    height: int | None = None
    touch: bool | None = None
    type: str | None = None
    size: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "touch": self.touch,
            "type": self.type,
            "size": self.size,
        }


@dataclass(frozen=True)
class DeviceInfo:
    device_name: str | None = None
    marketing_name: str | None = None
    manufacturer: str | None = None
    brand: str | None = None
    display: DisplayInfo = field(default_factory=DisplayInfo)
    dual_orientation: bool | None = None
    type: str | None = None
    sim_count: int | None = None
    is_mobile: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "deviceName": self.device_name,
            "marketingName": self.marketing_name,
            "manufacturer": self.manufacturer,
            "brand": self.brand,
            "display": self.display.to_dict(),
            "dualOrientation": self.dual_orientation,
            "type": self.type,
            "simCount": self.sim_count,
            "ismobile": self.is_mobile,
        }


@dataclass(frozen=True)
class ClientInfo:
    name: str | None = None
    modus: str | None = None
    version: str | None = None
    manufacturer: str | None = None
    bits: int | None = None
    type: str | None = None
    is_bot: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "modus": self.modus,
            "version": self.version,
            "manufacturer": self.manufacturer,
            "bits": self.bits,
            "type": self.type,
            "isbot": self.is_bot,
        }


@dataclass(frozen=True)
class PlatformInfo:
    name: str | None = None
    marketing_name: str | None = None
    version: str | None = None
    manufacturer: str | None = None
    bits: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "marketingName": self.marketing_name,
            "version": self.version,
            "manufacturer": self.manufacturer,
            "bits": self.bits,
        }


@dataclass(frozen=True)
class EngineInfo:
    name: str | None = None
    version: str | None = None
    manufacturer: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "manufacturer": self.manufacturer,
        }


@dataclass(frozen=True)
class CanonicalRecord:
    """Single normalized fixture: request headers plus expected classification.

    Every nested block is always present; values a source does not know are
    ``None``. ``raw`` keeps the source payload and ``file`` the origin path
    (or a per-file mapping after a merge).
    """

    headers: HeaderMap = field(default_factory=HeaderMap)
    device: DeviceInfo = field(default_factory=DeviceInfo)
    client: ClientInfo = field(default_factory=ClientInfo)
    platform: PlatformInfo = field(default_factory=PlatformInfo)
    engine: EngineInfo = field(default_factory=EngineInfo)
    raw: Any = None
    file: str | dict[str, str] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.headers, HeaderMap):
            object.__setattr__(self, "headers", HeaderMap(self.headers))

    @property
    def user_agent(self) -> str | None:
        return self.headers.get("user-agent")

    def to_dict(self) -> dict[str, Any]:
        """Serialize into the canonical nested dict with camelCase keys."""

        return {
            "headers": self.headers.to_dict(),
            "device": self.device.to_dict(),
            "client": self.client.to_dict(),
            "platform": self.platform.to_dict(),
            "engine": self.engine.to_dict(),
            "raw": self.raw,
            "file": dict(self.file) if isinstance(self.file, dict) else self.file,
        }


_AXIS_TYPES: dict[str, type] = {
    "device": DeviceInfo,
    "client": ClientInfo,
    "platform": PlatformInfo,
    "engine": EngineInfo,
}


class RecordBuilder:
    """Mutable accumulator for one user agent while several files are merged.

    Each file overwrites only the axis fields it knows about; ``raw`` and
    ``file`` collect one sub-entry per contributing file.
    """

    def __init__(self, headers: Mapping[str, Any]) -> None:
        self.headers: dict[str, Any] = dict(headers)
        self.axes: dict[str, dict[str, Any]] = {
            axis: {item.name: None for item in fields(axis_type) if item.name != "display"}
            for axis, axis_type in _AXIS_TYPES.items()
        }
        self.display: dict[str, Any] = {item.name: None for item in fields(DisplayInfo)}
        self.raw: dict[str, Any] = {}
        self.files: dict[str, str] = {}

    @classmethod
    def for_user_agent(cls, useragent: str) -> "RecordBuilder":
        return cls({"user-agent": useragent})

    def update(self, axis: str, *, skip_none: bool = False, **values: Any) -> None:
        """Overwrite fields of one axis; unknown field names raise ``KeyError``."""

        target = self.axes[axis]
        for name, value in values.items():
            if name not in target:
                raise KeyError(f"Unknown {axis} field: {name}")
            if skip_none and value is None:
                continue
            target[name] = value

    def update_display(self, **values: Any) -> None:
        for name, value in values.items():
            if name not in self.display:
                raise KeyError(f"Unknown display field: {name}")
            self.display[name] = value

    def add_source(self, key: str, raw: Any, path: str) -> None:
        self.raw[key] = raw
        self.files[key] = path

    def append_source(self, key: str, raw: Any, path: str) -> None:
        """Collect several payloads from one file under the same key."""

        self.raw.setdefault(key, []).append(raw)
        self.files[key] = path

    def build(self) -> CanonicalRecord:
        return CanonicalRecord(
            headers=HeaderMap(self.headers),
            device=DeviceInfo(display=DisplayInfo(**self.display), **self.axes["device"]),
            client=ClientInfo(**self.axes["client"]),
            platform=PlatformInfo(**self.axes["platform"]),
            engine=EngineInfo(**self.axes["engine"]),
            raw=dict(self.raw),
            file=dict(self.files),
        )
