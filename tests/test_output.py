import io
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from uafixtures.adapters import TxtFileAdapter  # noqa: E402
from uafixtures.output import LoggingOutput, StreamOutput, Verbosity  # noqa: E402


def test_stream_output_filters_by_verbosity() -> None:
    stream = io.StringIO()
    output = StreamOutput(stream, verbosity=Verbosity.VERBOSE)

    output.writeln("normal")
    output.writeln("verbose", Verbosity.VERBOSE)
    output.writeln("very verbose", Verbosity.VERY_VERBOSE)
    output.error("broken")

    assert stream.getvalue().splitlines() == ["normal", "verbose", "error: broken"]


def test_logging_output_maps_verbosity_to_levels(caplog) -> None:
    output = LoggingOutput(logging.getLogger("uafixtures.test"))

    with caplog.at_level(logging.DEBUG, logger="uafixtures.test"):
        output.writeln("normal")
        output.writeln("detail", Verbosity.VERBOSE)
        output.error("broken")

    levels = [(record.levelno, record.getMessage()) for record in caplog.records]
    assert levels == [
        (logging.INFO, "normal"),
        (logging.DEBUG, "detail"),
        (logging.ERROR, "broken"),
    ]


def test_adapter_reports_missing_path_through_injected_sink(tmp_path: Path) -> None:
    stream = io.StringIO()
    adapter = TxtFileAdapter(tmp_path / "missing")
    adapter.set_output(StreamOutput(stream))

    assert adapter.is_ready("[txt] ") is False
    assert stream.getvalue() == f"error: [txt] - path {tmp_path / 'missing'} not found\n"


def test_adapter_without_sink_logs_errors(tmp_path: Path, caplog) -> None:
    adapter = TxtFileAdapter(tmp_path / "missing")

    with caplog.at_level(logging.ERROR, logger="uafixtures.output"):
        assert adapter.is_ready() is False

    assert "not found" in caplog.text


def test_output_does_not_change_records(tmp_path: Path) -> None:
    (tmp_path / "agents.txt").write_text("UA-1\nUA-2\n")
    quiet = TxtFileAdapter(tmp_path)
    noisy = TxtFileAdapter(tmp_path)
    noisy.set_output(StreamOutput(io.StringIO(), verbosity=Verbosity.VERY_VERBOSE))

    quiet_agents = [agent for _, agent in quiet.get_user_agents()]
    noisy_agents = [agent for _, agent in noisy.get_user_agents()]

    assert quiet_agents == noisy_agents == ["UA-1", "UA-2"]
