import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from uafixtures.headers import HeaderMap  # noqa: E402
from uafixtures.models import (  # noqa: E402
    CanonicalRecord,
    ClientInfo,
    DeviceInfo,
    DisplayInfo,
    RecordBuilder,
    new_identifier,
)


def test_record_defaults_render_full_key_set() -> None:
    payload = CanonicalRecord(headers={"User-Agent": "UA"}).to_dict()

    assert set(payload) == {"headers", "device", "client", "platform", "engine", "raw", "file"}
    assert payload["headers"] == {"user-agent": "UA"}
    assert set(payload["device"]) == {
        "deviceName",
        "marketingName",
        "manufacturer",
        "brand",
        "display",
        "dualOrientation",
        "type",
        "simCount",
        "ismobile",
    }
    assert set(payload["device"]["display"]) == {"width", "height", "touch", "type", "size"}
    assert set(payload["client"]) == {"name", "modus", "version", "manufacturer", "bits", "type", "isbot"}
    assert set(payload["platform"]) == {"name", "marketingName", "version", "manufacturer", "bits"}
    assert set(payload["engine"]) == {"name", "version", "manufacturer"}
    assert all(value is None for value in payload["client"].values())


def test_record_converts_plain_headers_to_header_map() -> None:
    record = CanonicalRecord(headers={"User-Agent": "UA"})

    assert isinstance(record.headers, HeaderMap)
    assert record.user_agent == "UA"
    assert CanonicalRecord().user_agent is None


def test_record_to_dict_uses_camel_case_field_names() -> None:
    record = CanonicalRecord(
        headers={"user-agent": "UA"},
        device=DeviceInfo(
            device_name="SM-G960F",
            marketing_name="Galaxy S9",
            display=DisplayInfo(width=1440, touch=True),
            dual_orientation=True,
            sim_count=2,
            is_mobile=True,
        ),
        client=ClientInfo(name="Chrome", is_bot=False),
    )

    payload = record.to_dict()

    assert payload["device"]["deviceName"] == "SM-G960F"
    assert payload["device"]["marketingName"] == "Galaxy S9"
    assert payload["device"]["display"]["width"] == 1440
    assert payload["device"]["display"]["touch"] is True
    assert payload["device"]["dualOrientation"] is True
    assert payload["device"]["simCount"] == 2
    assert payload["device"]["ismobile"] is True
    assert payload["client"]["isbot"] is False


def test_builder_merges_axes_from_several_sources() -> None:
    builder = RecordBuilder.for_user_agent("UA")
    builder.update("device", brand="Samsung", device_name="SM-G960F")
    builder.add_source("test_device.yaml", {"brand": "Samsung"}, "tests/test_device.yaml")
    builder.update("client", name="Chrome", version="70.0")
    builder.add_source("test_ua.yaml", {"family": "Chrome"}, "tests/test_ua.yaml")

    record = builder.build()

    assert record.user_agent == "UA"
    assert record.device.brand == "Samsung"
    assert record.client.name == "Chrome"
    assert record.platform.name is None
    assert record.raw == {"test_device.yaml": {"brand": "Samsung"}, "test_ua.yaml": {"family": "Chrome"}}
    assert record.file == {"test_device.yaml": "tests/test_device.yaml", "test_ua.yaml": "tests/test_ua.yaml"}


def test_builder_skip_none_keeps_earlier_values() -> None:
    builder = RecordBuilder.for_user_agent("UA")
    builder.update("platform", name="Android", version="9")
    builder.update("platform", skip_none=True, name=None, version="10")

    record = builder.build()

    assert record.platform.name == "Android"
    assert record.platform.version == "10"


def test_builder_rejects_unknown_fields() -> None:
    builder = RecordBuilder.for_user_agent("UA")

    with pytest.raises(KeyError):
        builder.update("client", colour="blue")
    with pytest.raises(KeyError):
        builder.update_display(depth=3)


def test_builder_display_reaches_record() -> None:
    builder = RecordBuilder.for_user_agent("UA")
    builder.update_display(width=320, height=480)

    assert builder.build().device.display == DisplayInfo(width=320, height=480)


def test_new_identifier_is_unique_uuid_string() -> None:
    first = new_identifier()
    second = new_identifier()

    assert first != second
    assert len(first) == 36
    assert first.count("-") == 4
