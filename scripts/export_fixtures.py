#!/usr/bin/env python3
"""Stream normalized user-agent fixtures from configured adapters as JSON lines."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, TextIO

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from uafixtures import (  # noqa: E402
    AdapterPluginSpec,
    CollectionAdapter,
    RecordShapeValidator,
    SourceSettings,
    StreamOutput,
    Verbosity,
    build_default_adapter_registry,
)

MODES = ("properties", "headers", "user-agents")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export user-agent fixtures as JSON lines")
    parser.add_argument("--config", help="Path to export JSON config")
    parser.add_argument(
        "--adapter",
        action="append",
        default=[],
        help="Adapter name to run with its default path (repeatable).",
    )
    parser.add_argument(
        "--mode",
        default="properties",
        choices=MODES,
        help="Which projection of each record to emit.",
    )
    parser.add_argument("--output", help="Write JSON lines here instead of stdout.")
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Check every record against the canonical schema; exit 1 on failures.",
    )
    parser.add_argument(
        "--list-adapters",
        action="store_true",
        help="Print each registered adapter name with its default corpus path and exit.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Write adapter progress to stderr (repeat for more detail).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Runner log level.",
    )
    return parser.parse_args(argv)


def load_json(path: str | Path) -> dict[str, Any]:
    return json.loads(Path(path).read_text())


def build_settings(config: dict[str, Any]) -> SourceSettings:
    """Environment overrides first, then the config ``settings`` block on top."""

    env_settings = SourceSettings.from_env()
    payload = {
        "vendor_dir": env_settings.vendor_dir,
        "node_modules_dir": env_settings.node_modules_dir,
        "chunksize": env_settings.chunksize,
        "fetch_size": env_settings.fetch_size,
    }
    payload.update(config.get("settings", {}))
    return SourceSettings.from_mapping(payload)


def build_collection(config: dict[str, Any], extra_names: list[str], settings: SourceSettings) -> CollectionAdapter:
    registry = build_default_adapter_registry()
    for plugin_raw in config.get("plugins", []):
        registry.register_plugin(
            AdapterPluginSpec(
                name=plugin_raw["name"],
                module=plugin_raw["module"],
                class_name=plugin_raw["class_name"],
            )
        )

    collection = CollectionAdapter()
    adapter_configs = list(config.get("adapters", []))
    adapter_configs.extend({"name": name} for name in extra_names)

    for adapter_raw in adapter_configs:
        params = dict(adapter_raw.get("params", {}))
        params.setdefault("settings", settings)
        collection.add(registry.create(adapter_raw["name"], **params))

    return collection


def _payload(mode: str, uid: str, record: Any) -> dict[str, Any]:
    if mode == "headers":
        return {"id": uid, "headers": record.headers.to_dict()}
    if mode == "user-agents":
        return {"id": uid, "user-agent": record.user_agent}
    return {"id": uid, **record.to_dict()}


def export(
    collection: CollectionAdapter,
    stream: TextIO,
    *,
    mode: str = "properties",
    validator: RecordShapeValidator | None = None,
    logger: logging.Logger | None = None,
) -> dict[str, int]:
    """Write one JSON line per record and return emitted/invalid/skipped counts."""

    logger = logger or logging.getLogger("uafixtures.export")
    counts = {"emitted": 0, "invalid": 0, "skipped_adapters": 0}

    for adapter in collection.adapters:
        message = f"[{adapter.get_name()}] "
        if not adapter.is_ready(message):
            counts["skipped_adapters"] += 1
            continue

        for uid, record in adapter.get_properties(message):
            if mode == "user-agents" and record.user_agent is None:
                continue

            if validator is not None:
                report = validator.check(record)
                if not report.valid:
                    counts["invalid"] += 1
                    for error in report.errors:
                        logger.error("%s %s: %s", message, uid, error)

            stream.write(json.dumps(_payload(mode, uid, record), ensure_ascii=False, default=str))
            stream.write("\n")
            counts["emitted"] += 1

        logger.info("%s done, %d records so far", message, counts["emitted"])

    return counts


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stderr,
    )
    logger = logging.getLogger("uafixtures.export")

    config = load_json(args.config) if args.config else {}
    settings = build_settings(config)

    if args.list_adapters:
        for name, location in build_default_adapter_registry().locations(settings).items():
            print(f"{name}\t{location if location is not None else '-'}")
        return 0

    collection = build_collection(config, args.adapter, settings)

    if not collection.is_ready():
        raise ValueError("No adapters configured. Set adapters[] or pass --adapter.")

    if args.verbose:
        verbosity = Verbosity(min(Verbosity.NORMAL + args.verbose, Verbosity.VERY_VERBOSE))
        collection.set_output(StreamOutput(sys.stderr, verbosity=verbosity))

    validator = RecordShapeValidator() if args.validate else None

    if args.output:
        with Path(args.output).open("w", encoding="utf-8") as stream:
            counts = export(collection, stream, mode=args.mode, validator=validator, logger=logger)
    else:
        counts = export(collection, sys.stdout, mode=args.mode, validator=validator, logger=logger)

    logger.info(
        "exported %d records (%d invalid, %d adapters not ready)",
        counts["emitted"],
        counts["invalid"],
        counts["skipped_adapters"],
    )
    return 1 if counts["invalid"] else 0


if __name__ == "__main__":
    raise SystemExit(main())
