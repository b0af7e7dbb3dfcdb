"""Shape validation for canonical records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from jsonschema import Draft202012Validator

from uafixtures.models import CanonicalRecord


def _nullable(*types: str) -> dict[str, Any]:
    return {"type": [*types, "null"]}


def _block(properties: dict[str, Any]) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": properties,
        "required": list(properties),
        "additionalProperties": False,
    }


CANONICAL_RECORD_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "CanonicalRecord",
    **_block(
        {
            "headers": {
                "type": "object",
                "additionalProperties": {"type": "string"},
            },
            "device": _block(
                {
                    "deviceName": _nullable("string"),
                    "marketingName": _nullable("string"),
                    "manufacturer": _nullable("string"),
                    "brand": _nullable("string"),
                    "display": _block(
                        {
                            "width": _nullable("integer"),
                            "height": _nullable("integer"),
                            "touch": _nullable("boolean"),
                            "type": _nullable("string"),
                            "size": _nullable("number"),
                        }
                    ),
                    "dualOrientation": _nullable("boolean"),
                    "type": _nullable("string"),
                    "simCount": _nullable("integer"),
                    "ismobile": _nullable("boolean"),
                }
            ),
            "client": _block(
                {
                    "name": _nullable("string"),
                    "modus": _nullable("string"),
                    "version": _nullable("string"),
                    "manufacturer": _nullable("string"),
                    "bits": _nullable("integer"),
                    "type": _nullable("string"),
                    "isbot": _nullable("boolean"),
                }
            ),
            "platform": _block(
                {
                    "name": _nullable("string"),
                    "marketingName": _nullable("string"),
                    "version": _nullable("string"),
                    "manufacturer": _nullable("string"),
                    "bits": _nullable("integer"),
                }
            ),
            "engine": _block(
                {
                    "name": _nullable("string"),
                    "version": _nullable("string"),
                    "manufacturer": _nullable("string"),
                }
            ),
            "raw": {},
            "file": {
                "type": ["string", "object", "null"],
                "additionalProperties": {"type": "string"},
            },
        }
    ),
}


@dataclass
class ShapeReport:
    """Result of checking one record against the canonical schema."""

    errors: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


class RecordShapeValidator:
    """Check that serialized records carry exactly the canonical key set."""

    def __init__(self, schema: dict[str, Any] | None = None) -> None:
        self.schema = schema or CANONICAL_RECORD_SCHEMA
        Draft202012Validator.check_schema(self.schema)
        self._validator = Draft202012Validator(self.schema)

    def check(self, record: CanonicalRecord | dict[str, Any]) -> ShapeReport:
        payload = record.to_dict() if isinstance(record, CanonicalRecord) else record
        report = ShapeReport()
        for error in sorted(self._validator.iter_errors(payload), key=lambda item: [str(part) for part in item.path]):
            location = "/".join(str(part) for part in error.path) or "<root>"
            report.errors.append(f"{location}: {error.message}")
        return report

    def is_valid(self, record: CanonicalRecord | dict[str, Any]) -> bool:
        return self.check(record).valid
