"""User-agent fixture normalization.

This package turns the test fixtures shipped by browser-detection
libraries into one canonical record shape, streamed lazily per adapter.
"""

from .collection import CollectionAdapter
from .config import DEFAULT_SETTINGS, SourceSettings
from .errors import SourceError
from .headers import DELIMITER_HEADER, DELIMITER_HEADER_ROW, HeaderMap, UserAgent
from .models import (
    CanonicalRecord,
    ClientInfo,
    DeviceInfo,
    DisplayInfo,
    EngineInfo,
    PlatformInfo,
    RecordBuilder,
    new_identifier,
)
from .output import LoggingOutput, OutputSink, StreamOutput, Verbosity
from .quality import CANONICAL_RECORD_SCHEMA, RecordShapeValidator, ShapeReport
from .registry import AdapterPluginSpec, AdapterRegistry, build_default_adapter_registry

__all__ = [
    "CanonicalRecord",
    "DeviceInfo",
    "DisplayInfo",
    "ClientInfo",
    "PlatformInfo",
    "EngineInfo",
    "RecordBuilder",
    "new_identifier",
    "HeaderMap",
    "UserAgent",
    "DELIMITER_HEADER",
    "DELIMITER_HEADER_ROW",
    "SourceSettings",
    "DEFAULT_SETTINGS",
    "SourceError",
    "Verbosity",
    "OutputSink",
    "LoggingOutput",
    "StreamOutput",
    "CANONICAL_RECORD_SCHEMA",
    "RecordShapeValidator",
    "ShapeReport",
    "CollectionAdapter",
    "AdapterRegistry",
    "AdapterPluginSpec",
    "build_default_adapter_registry",
]
