import io
import json
import sys
from pathlib import Path

import duckdb
import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from uafixtures.adapters import DatabaseAdapter  # noqa: E402
from uafixtures.config import SourceSettings  # noqa: E402
from uafixtures.errors import SourceError  # noqa: E402
from uafixtures.output import StreamOutput, Verbosity  # noqa: E402

ROWS = [
    (1, "2024-01-01 10:00:00", json.dumps({"user-agent": "UA-old"}), 50),
    (2, "2024-03-01 10:00:00", json.dumps({"user-agent": "UA-rare", "accept": "*/*"}), 1),
    (3, "2024-03-01 10:00:00", json.dumps({"User-Agent": "UA-frequent"}), 9),
    (4, "2024-02-01 10:00:00", "{not json", 3),
    (5, "2024-02-01 09:00:00", json.dumps(["not", "a", "mapping"]), 3),
    (6, "2024-01-15 10:00:00", json.dumps({"accept": "text/html"}), 2),
]


def _create_database(path: Path, rows=ROWS) -> Path:
    connection = duckdb.connect(str(path))
    try:
        connection.execute(
            "CREATE TABLE request (id INTEGER, date TIMESTAMP, headers VARCHAR, count INTEGER)"
        )
        connection.executemany("INSERT INTO request VALUES (?, ?, ?, ?)", rows)
    finally:
        connection.close()
    return path


def test_database_adapter_orders_by_date_then_count(tmp_path: Path) -> None:
    path = _create_database(tmp_path / "requests.duckdb")
    adapter = DatabaseAdapter(path, settings=SourceSettings(fetch_size=2))

    records = [record for _, record in adapter.get_properties()]

    assert [record.headers.to_dict() for record in records] == [
        {"user-agent": "UA-frequent"},
        {"user-agent": "UA-rare", "accept": "*/*"},
        {"accept": "text/html"},
        {"user-agent": "UA-old"},
    ]
    assert records[0].raw == {"User-Agent": "UA-frequent"}
    assert all(record.file is None for record in records)


def test_database_adapter_user_agents_skip_rows_without_agent(tmp_path: Path) -> None:
    path = _create_database(tmp_path / "requests.duckdb")

    agents = [agent for _, agent in DatabaseAdapter(path).get_user_agents()]

    assert agents == ["UA-frequent", "UA-rare", "UA-old"]


def test_database_adapter_uses_caller_connection(tmp_path: Path) -> None:
    connection = duckdb.connect()
    connection.execute("CREATE TABLE seen (id INTEGER, date TIMESTAMP, headers VARCHAR, count INTEGER)")
    connection.execute(
        "INSERT INTO seen VALUES (1, '2024-01-01', ?, 1)", [json.dumps({"user-agent": "UA-memory"})]
    )
    adapter = DatabaseAdapter(connection, table="seen")

    assert adapter.is_ready() is True
    assert [agent for _, agent in adapter.get_user_agents()] == ["UA-memory"]
    # the connection is still usable afterwards
    assert connection.execute("SELECT count(*) FROM seen").fetchone() == (1,)
    connection.close()


def test_database_adapter_reports_missing_file(tmp_path: Path) -> None:
    stream = io.StringIO()
    adapter = DatabaseAdapter(tmp_path / "missing.duckdb")
    adapter.set_output(StreamOutput(stream))

    assert adapter.is_ready("[db] ") is False
    assert f"path {tmp_path / 'missing.duckdb'} not found" in stream.getvalue()


def test_database_adapter_wraps_query_errors(tmp_path: Path) -> None:
    path = _create_database(tmp_path / "requests.duckdb")
    adapter = DatabaseAdapter(path, table="missing_table")

    with pytest.raises(SourceError) as excinfo:
        list(adapter.get_properties())

    assert isinstance(excinfo.value.__cause__, duckdb.Error)


def test_database_adapter_rejects_unsafe_table_name(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        DatabaseAdapter(tmp_path / "x.duckdb", table="request; DROP TABLE request")


def test_database_adapter_reports_table_at_verbose_level(tmp_path: Path) -> None:
    path = _create_database(tmp_path / "requests.duckdb", rows=ROWS[:1])
    stream = io.StringIO()
    adapter = DatabaseAdapter(path)
    adapter.set_output(StreamOutput(stream, verbosity=Verbosity.VERBOSE))

    list(adapter.get_headers())

    assert stream.getvalue() == "- reading table request\n"
