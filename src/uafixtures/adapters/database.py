"""Adapter that streams recorded request headers out of a DuckDB database."""

from __future__ import annotations

import json
import re
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import duckdb

from uafixtures.adapters.base import FixtureAdapter
from uafixtures.config import DEFAULT_SETTINGS, SourceSettings
from uafixtures.errors import SourceError
from uafixtures.models import CanonicalRecord, new_identifier
from uafixtures.output import Verbosity

_TABLE_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class DatabaseAdapter(FixtureAdapter):
    """Read the ``request(id, date, headers, count)`` table, newest and most frequent first.

    ``database`` is either an open DuckDB connection, which stays owned by
    the caller, or a path that is opened read-only for each pass. Rows are
    pulled in batches of ``settings.fetch_size`` so memory stays bounded.
    Header payloads are passed through unfiltered and records carry no
    file.
    """

    name = "database"

    def __init__(
        self,
        database: str | Path | duckdb.DuckDBPyConnection,
        *,
        table: str = "request",
        settings: SourceSettings | None = None,
    ) -> None:
        if not _TABLE_RE.match(table):
            raise ValueError(f"Unsafe table name: {table}")

        self.database = database
        self.table = table
        self.settings = settings or DEFAULT_SETTINGS

    @property
    def query(self) -> str:
        return (
            f"SELECT DISTINCT headers, date, count, id FROM {self.table} "
            "ORDER BY date DESC, count DESC, id DESC"
        )

    def is_ready(self, message: str = "") -> bool:
        if isinstance(self.database, duckdb.DuckDBPyConnection):
            return True

        path = Path(self.database)
        if path.exists():
            return True

        self.write_error(f"{message}- path {path} not found")
        return False

    @staticmethod
    def _decode_headers(payload: Any) -> dict[str, Any] | None:
        if isinstance(payload, dict):
            return payload
        if not isinstance(payload, (str, bytes)):
            return None
        try:
            decoded = json.loads(payload)
        except json.JSONDecodeError:
            return None
        return decoded if isinstance(decoded, dict) else None

    def _rows(self, connection: duckdb.DuckDBPyConnection) -> Iterator[tuple[Any, ...]]:
        try:
            cursor = connection.cursor()
        except duckdb.Error as exc:
            raise SourceError(f"Could not open a cursor on {self.table}: {exc}") from exc

        try:
            try:
                cursor.execute(self.query)
            except duckdb.Error as exc:
                raise SourceError(f"Could not query {self.table}: {exc}") from exc

            while True:
                try:
                    batch = cursor.fetchmany(self.settings.fetch_size)
                except duckdb.Error as exc:
                    raise SourceError(f"Could not fetch rows from {self.table}: {exc}") from exc
                if not batch:
                    break
                yield from batch
        finally:
            cursor.close()

    def get_properties(self, message: str = "") -> Iterator[tuple[str, CanonicalRecord]]:
        self.writeln(f"{message}- reading table {self.table}", Verbosity.VERBOSE)

        if isinstance(self.database, duckdb.DuckDBPyConnection):
            yield from self._records(self.database)
            return

        try:
            connection = duckdb.connect(str(self.database), read_only=True)
        except duckdb.Error as exc:
            raise SourceError(f"Could not open database {self.database}: {exc}") from exc

        try:
            yield from self._records(connection)
        finally:
            connection.close()

    def _records(self, connection: duckdb.DuckDBPyConnection) -> Iterator[tuple[str, CanonicalRecord]]:
        for headers_payload, *_ in self._rows(connection):
            record = self._to_record(headers_payload)
            if record is not None:
                yield new_identifier(), record

    def _to_record(self, payload: Any) -> CanonicalRecord | None:
        headers = self._decode_headers(payload)
        if headers is None:
            return None
        return CanonicalRecord(headers=headers, raw=headers, file=None)
