import io
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from uafixtures.adapters import JsonFileAdapter, TxtFileAdapter  # noqa: E402
from uafixtures.collection import CollectionAdapter  # noqa: E402
from uafixtures.output import StreamOutput  # noqa: E402


def _sources(tmp_path: Path) -> tuple[TxtFileAdapter, JsonFileAdapter]:
    (tmp_path / "txt").mkdir()
    (tmp_path / "txt" / "agents.txt").write_text("UA-1\nUA-1\n")
    (tmp_path / "json").mkdir()
    (tmp_path / "json" / "headers.json").write_text('[{"Accept": "*/*"}, {"user-agent": "UA-2"}]')
    return TxtFileAdapter(tmp_path / "txt"), JsonFileAdapter(tmp_path / "json")


def test_collection_chains_members_in_order_without_dedup(tmp_path: Path) -> None:
    collection = CollectionAdapter(*_sources(tmp_path))

    agents = [agent for _, agent in collection.get_user_agents()]

    assert agents == ["UA-1", "UA-1", "UA-2"]
    assert len(collection) == 2


def test_collection_headers_and_properties_match_members(tmp_path: Path) -> None:
    txt, json_adapter = _sources(tmp_path)
    collection = CollectionAdapter(txt)
    collection.add(json_adapter)

    headers = [dict(headers) for _, headers in collection.get_headers()]
    properties = list(collection.get_properties())

    assert headers == [{"user-agent": "UA-1"}, {"user-agent": "UA-1"}, {"user-agent": "UA-2"}]
    assert len(properties) == 3
    assert len({uid for uid, _ in properties}) == 3


def test_empty_collection_is_not_ready() -> None:
    collection = CollectionAdapter()

    assert collection.is_ready() is False
    assert list(collection.get_properties()) == []
    assert collection.get_name() == "collection"


def test_collection_propagates_output_to_members(tmp_path: Path) -> None:
    txt = TxtFileAdapter(tmp_path / "missing")
    collection = CollectionAdapter(txt)
    stream = io.StringIO()

    collection.set_output(StreamOutput(stream))

    assert txt.is_ready("[txt-files] ") is False
    assert "[txt-files] - path" in stream.getvalue()
