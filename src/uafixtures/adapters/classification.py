"""Derived ``ismobile``/``isbot`` rules and value normalizations.

Several corpora do not state mobility or bot status directly; it follows
from the source's own device/client type taxonomy. Each function here is a
pure function of already-parsed fixture fields.
"""

from __future__ import annotations

from typing import Any, Mapping

VERSION_SENTINEL = "0.0.0"


def normalize_version(value: Any) -> str | None:
    """Map the upstream ``0.0.0`` placeholder (and blanks) to ``None``."""

    if value is None:
        return None
    cleaned = str(value).strip()
    if not cleaned or cleaned == VERSION_SENTINEL:
        return None
    return cleaned


# Matomo / Piwik device-detector

MATOMO_DEVICE_TYPES: dict[str, int] = {
    "desktop": 0,
    "smartphone": 1,
    "tablet": 2,
    "feature phone": 3,
    "console": 4,
    "tv": 5,
    "car browser": 6,
    "smart display": 7,
    "camera": 8,
    "portable media player": 9,
    "phablet": 10,
    "smart speaker": 11,
    "wearable": 12,
    "peripheral": 13,
}

MATOMO_MOBILE_TYPES = frozenset(
    MATOMO_DEVICE_TYPES[name]
    for name in (
        "feature phone",
        "smartphone",
        "tablet",
        "phablet",
        "camera",
        "portable media player",
    )
)

MATOMO_NON_MOBILE_TYPES = frozenset(
    MATOMO_DEVICE_TYPES[name] for name in ("tv", "smart display", "console")
)

DESKTOP_OS_FAMILIES = frozenset(
    {"AmigaOS", "IBM", "GNU/Linux", "Mac", "Unix", "Windows", "BeOS", "Chrome OS"}
)

# Short names of browsers that only exist on mobile devices.
MOBILE_ONLY_BROWSERS = frozenset(
    {
        "36", "AH", "AI", "BL", "C1", "C4", "CB", "CW", "DB", "DD", "DR", "EU",
        "GH", "HA", "HB", "HR", "HU", "IB", "IW", "KS", "KU", "LC", "LH", "LY",
        "M3", "MN", "MQ", "MT", "NT", "OB", "OI", "OK", "ON", "OT", "PB", "PL",
        "PO", "PU", "QW", "RE", "S8", "SB", "SV", "TC", "U2", "UR", "VG", "WO",
        "YA", "ZV",
    }
)


def _is_unknown_os(short_name: Any) -> bool:
    return not short_name or short_name == "UNK"


def is_mobile_only_browser(row: Mapping[str, Any]) -> bool:
    client = row.get("client") or {}
    if not isinstance(client, Mapping) or client.get("type") != "browser":
        return False
    return (client.get("short_name") or "UNK") in MOBILE_ONLY_BROWSERS


def classify_matomo_device_type(device_type: Any) -> bool | None:
    """Return True/False for a decisive device type, None when indeterminate."""

    code = MATOMO_DEVICE_TYPES.get(str(device_type).lower()) if device_type else None
    if code in MATOMO_MOBILE_TYPES:
        return True
    if code in MATOMO_NON_MOBILE_TYPES:
        return False
    return None


def is_matomo_desktop(row: Mapping[str, Any]) -> bool:
    os_block = row.get("os") or {}
    if not isinstance(os_block, Mapping) or _is_unknown_os(os_block.get("short_name")):
        return False
    if is_mobile_only_browser(row):
        return False
    return row.get("os_family") in DESKTOP_OS_FAMILIES


def is_matomo_mobile(row: Mapping[str, Any]) -> bool:
    """Mobility of a device-detector fixture row with a known device type.

    Decisive device types win; otherwise mobile-only browsers count as
    mobile, an unknown OS as not mobile, and the rest as "not desktop".
    """

    device = row.get("device") or {}
    verdict = classify_matomo_device_type(device.get("type") if isinstance(device, Mapping) else None)
    if verdict is not None:
        return verdict

    if is_mobile_only_browser(row):
        return True

    os_block = row.get("os") or {}
    if not isinstance(os_block, Mapping) or _is_unknown_os(os_block.get("short_name")):
        return False

    return not is_matomo_desktop(row)


# browscap

BROWSCAP_MOBILE_TYPES = frozenset(
    {
        "Mobile Phone",
        "Tablet",
        "Console",
        "Digital Camera",
        "Ebook Reader",
        "Mobile Device",
    }
)


def is_browscap_mobile(device_type: Any) -> bool:
    return device_type in BROWSCAP_MOBILE_TYPES


# WhichBrowser

WHICHBROWSER_MOBILE_TYPES = frozenset({"mobile", "tablet", "ereader", "media", "watch", "camera"})


def is_whichbrowser_mobile(device: Mapping[str, Any]) -> bool | None:
    device_type = device.get("type")
    if device_type is None:
        return None
    if device_type in WHICHBROWSER_MOBILE_TYPES:
        return True
    return device_type == "gaming" and device.get("subtype") == "portable"


# mimmi20 browser-detector

BROWSER_DETECTOR_MOBILE_TYPES = frozenset(
    {
        "mobile-phone",
        "smartphone",
        "feature-phone",
        "tablet",
        "phablet",
        "fone-pad",
        "mobile-device",
        "mobile-console",
        "mobile-media-player",
        "digital-camera",
        "ebook-reader",
        "smartwatch",
        "wearable-computer",
    }
)

BROWSER_DETECTOR_BOT_TYPES = frozenset(
    {"bot", "crawler", "search-bot", "site-monitor", "validator", "link-checker"}
)


def _type_key(value: Any) -> str | None:
    if value is None:
        return None
    return str(value).strip().lower().replace(" ", "-") or None


def is_browser_detector_mobile(device_type: Any) -> bool | None:
    key = _type_key(device_type)
    if key is None:
        return None
    return key in BROWSER_DETECTOR_MOBILE_TYPES


def is_browser_detector_bot(client_type: Any) -> bool | None:
    key = _type_key(client_type)
    if key is None:
        return None
    return key in BROWSER_DETECTOR_BOT_TYPES


# Woothee

WOOTHEE_UNKNOWN = "UNKNOWN"
WOOTHEE_MOBILE_CATEGORIES = frozenset({"smartphone", "mobilephone"})


def classify_woothee_category(category: Any) -> tuple[bool | None, bool | None]:
    """Return ``(ismobile, isbot)`` for a Woothee test-set category."""

    if category in WOOTHEE_MOBILE_CATEGORIES:
        return True, False
    if category == "pc":
        return False, False
    if category == "crawler":
        return None, True
    return None, None
