import io
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from uafixtures.adapters import (  # noqa: E402
    EndorphinAdapter,
    UaParserJsAdapter,
    UapCoreAdapter,
    YzalisAdapter,
)
from uafixtures.config import SourceSettings  # noqa: E402
from uafixtures.output import StreamOutput  # noqa: E402
from uafixtures.quality import RecordShapeValidator  # noqa: E402


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def _records(adapter) -> list:
    adapter.set_output(StreamOutput(io.StringIO()))
    records = [record for _, record in adapter.get_properties()]
    validator = RecordShapeValidator()
    assert all(validator.is_valid(record) for record in records)
    return records


def test_uap_core_merges_axes_by_user_agent(tmp_path: Path) -> None:
    device_path = _write(
        tmp_path / "tests" / "test_device.yaml",
        """test_cases:
  - user_agent_string: 'Mozilla/5.0 (Linux; Android 4.4; Nexus 5)'
    family: 'Nexus 5'
    brand: 'LG'
    model: 'Nexus 5'
""",
    )
    _write(
        tmp_path / "tests" / "test_os.yaml",
        """test_cases:
  - user_agent_string: 'Mozilla/5.0 (Linux; Android 4.4; Nexus 5)'
    family: 'Android'
    major: '4'
    minor: '4'
    patch:
  - user_agent_string: 'curl/7.0'
    family: 'Other'
    major:
""",
    )
    _write(
        tmp_path / "test_resources" / "firefox_user_agent_strings.yaml",
        """test_cases:
  - user_agent_string: "Mozilla/5.0 (Windows NT 6.1)\\nFirefox/3.0"
    family: 'Firefox'
    major: '3'
    minor: 'undefined'
""",
    )
    _write(tmp_path / "tests" / "regexes.yaml", "test_cases:\n  - user_agent_string: 'ignored'\n")

    records = _records(UapCoreAdapter(tmp_path))

    by_agent = {record.user_agent: record for record in records}
    assert set(by_agent) == {
        "Mozilla/5.0 (Linux; Android 4.4; Nexus 5)",
        "curl/7.0",
        "Mozilla/5.0 (Windows NT 6.1)\\nFirefox/3.0",
    }

    nexus = by_agent["Mozilla/5.0 (Linux; Android 4.4; Nexus 5)"]
    assert nexus.device.brand == "LG"
    assert nexus.device.device_name == "Nexus 5"
    assert nexus.platform.name == "Android"
    assert nexus.platform.version == "4.4"
    assert nexus.client.name is None
    assert set(nexus.file) == {"tests/test_device.yaml", "tests/test_os.yaml"}
    assert nexus.file["tests/test_device.yaml"] == str(device_path).replace("\\", "/")
    assert nexus.raw["tests/test_os.yaml"]["family"] == "Android"

    assert by_agent["curl/7.0"].platform.version is None
    assert by_agent["Mozilla/5.0 (Windows NT 6.1)\\nFirefox/3.0"].client.version == "3"


def test_uap_core_keeps_same_named_files_apart(tmp_path: Path) -> None:
    agent = "Mozilla/5.0 (X11; Linux x86_64) Firefox/115.0"
    for directory, family in (("tests", "Firefox"), ("test_resources", "Firefox ESR")):
        _write(
            tmp_path / directory / "test_ua.yaml",
            f"test_cases:\n  - user_agent_string: '{agent}'\n    family: '{family}'\n    major: '115'\n",
        )

    records = _records(UapCoreAdapter(tmp_path))

    assert len(records) == 1
    record = records[0]
    assert record.client.name == "Firefox ESR"
    assert sorted(record.file) == ["test_resources/test_ua.yaml", "tests/test_ua.yaml"]
    assert record.raw["tests/test_ua.yaml"]["family"] == "Firefox"
    assert record.raw["test_resources/test_ua.yaml"]["family"] == "Firefox ESR"


def test_uap_core_tolerates_missing_test_directory(tmp_path: Path) -> None:
    _write(
        tmp_path / "tests" / "test_ua.yaml",
        "test_cases:\n  - user_agent_string: 'Opera/9.80'\n    family: 'Opera'\n    major: '9'\n    minor: '80'\n",
    )

    records = _records(UapCoreAdapter(tmp_path))

    assert [(record.client.name, record.client.version) for record in records] == [("Opera", "9.80")]


def test_ua_parser_js_merges_expectations(tmp_path: Path) -> None:
    agent = "Mozilla/5.0 (iPad; CPU OS 7_0 like Mac OS X) Version/7.0 Mobile/11A465 Safari/9537.53"
    _write(
        tmp_path / "browser-test.json",
        json.dumps(
            [
                {"desc": "Safari", "ua": agent, "expect": {"name": "Mobile Safari", "version": "7.0", "major": "7"}},
                {"desc": "broken", "ua": "", "expect": {}},
            ]
        ),
    )
    _write(
        tmp_path / "device-test.json",
        json.dumps([{"desc": "iPad", "ua": agent, "expect": {"vendor": "Apple", "model": "iPad", "type": "tablet"}}]),
    )
    _write(
        tmp_path / "os-test.json",
        json.dumps([{"desc": "iOS", "ua": agent, "expect": {"name": "iOS", "version": "undefined"}}]),
    )
    _write(tmp_path / "cpu-test.json", json.dumps([{"ua": "ignored", "expect": {"architecture": "amd64"}}]))

    records = _records(UaParserJsAdapter(tmp_path))

    assert len(records) == 1
    record = records[0]
    assert record.client.name == "Mobile Safari"
    assert record.device.brand == "Apple"
    assert record.device.type == "tablet"
    assert record.platform.name == "iOS"
    assert record.platform.version is None
    assert sorted(record.file) == ["browser-test.json", "device-test.json", "os-test.json"]


def test_ua_parser_js_defaults_below_node_modules(tmp_path: Path) -> None:
    adapter = UaParserJsAdapter(settings=SourceSettings(node_modules_dir=tmp_path))

    assert adapter.path == tmp_path / "ua-parser-js" / "test"


ENDORPHIN_FIXTURE = """<?xml version="1.0" encoding="utf-8"?>
<tests>
  <test>
    <CheckList>
      <Item><Property>OS->getName()</Property><Value>Android</Value></Item>
      <Item><Property>OS->getVersion()</Property><Value></Value></Item>
      <Item><Property>Browser->getName()</Property><Value>Chrome</Value></Item>
      <Item><Property>Device->getType()</Property><Value>mobile</Value></Item>
      <Item><Property>isMobile</Property><Value>true</Value></Item>
      <Item><Property>UnknownProperty</Property><Value>x</Value></Item>
    </CheckList>
    <UAList>
      <UA>Mozilla/5.0 (Linux; Android 9) Chrome/70.0</UA>
      <UA> </UA>
    </UAList>
  </test>
  <test>
    <CheckList>
      <Item><Property>OS->getName()</Property><Value></Value></Item>
      <Item><Property>OS->getVersion()</Property><Value>9</Value></Item>
    </CheckList>
    <UAList>
      <UA>Mozilla/5.0 (Linux; Android 9) Chrome/70.0</UA>
    </UAList>
  </test>
  <test>
    <CheckList>
      <Item><Property>Robot->getName()</Property><Value>Googlebot</Value></Item>
    </CheckList>
    <UAList>
      <UA>Googlebot/2.1</UA>
    </UAList>
  </test>
</tests>
"""


def test_endorphin_merges_without_erasing_known_values(tmp_path: Path) -> None:
    _write(tmp_path / "android.xml", ENDORPHIN_FIXTURE)

    records = _records(EndorphinAdapter(tmp_path))

    by_agent = {record.user_agent: record for record in records}
    android = by_agent["Mozilla/5.0 (Linux; Android 9) Chrome/70.0"]
    assert android.platform.name == "Android"
    assert android.platform.version == "9"
    assert android.client.name == "Chrome"
    assert android.device.type == "mobile"
    assert android.device.is_mobile is True
    assert android.file == {"android.xml": str(tmp_path / "android.xml").replace("\\", "/")}
    assert [entry["platform"] for entry in android.raw["android.xml"]] == [
        {"name": "Android", "version": None},
        {"name": None, "version": "9"},
    ]

    robot = by_agent["Googlebot/2.1"]
    assert robot.client.name == "Googlebot"
    assert robot.client.is_bot is True
    assert len(records) == 2


def test_yzalis_merges_positional_rows(tmp_path: Path) -> None:
    agent = "Mozilla/5.0 (Windows NT 6.1; WOW64) AppleWebKit/537.36 Chrome/41.0.2228.0"
    _write(tmp_path / "browsers.yml", f"- ['{agent}', 'Chrome', '41', '0', '2228']\n- ['x', 'Opera', '12', ~, '5']\n")
    _write(tmp_path / "operating_systems.yml", f"- ['{agent}', 'Windows', '7']\n")
    _write(tmp_path / "rendering_engines.yml", f"- ['{agent}', 'WebKit', '537.36']\n")
    _write(tmp_path / "devices.yml", "- ['y', 'Samsung', 'GT-I9100', 'mobile']\n- []\n")
    _write(tmp_path / "email_clients.yml", f"- ['{agent}', 'Outlook']\n")

    records = _records(YzalisAdapter(tmp_path))

    by_agent = {record.user_agent: record for record in records}
    assert set(by_agent) == {agent, "x", "y"}
    chrome = by_agent[agent]
    assert chrome.client.version == "41.0.2228"
    assert chrome.platform.version == "7"
    assert chrome.engine.version == "537.36"
    assert sorted(chrome.file) == ["browsers.yml", "operating_systems.yml", "rendering_engines.yml"]
    assert by_agent["x"].client.version == "12"
    assert by_agent["y"].device.device_name == "GT-I9100"
    assert by_agent["y"].device.type == "mobile"


def test_merge_adapters_reread_on_every_call(tmp_path: Path) -> None:
    path = _write(tmp_path / "browsers.yml", "- ['UA-1', 'Chrome', '1']\n")
    adapter = YzalisAdapter(tmp_path)

    first = [agent for _, agent in adapter.get_user_agents()]
    path.write_text("- ['UA-2', 'Chrome', '2']\n")
    second = [agent for _, agent in adapter.get_user_agents()]

    assert first == ["UA-1"]
    assert second == ["UA-2"]
