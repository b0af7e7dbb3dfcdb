"""Fixture adapters, one per upstream corpus or generic file format."""

from .base import FixtureAdapter, PathAdapter
from .browscap import BrowscapAdapter
from .browser_detector import BrowserDetectorAdapter, DetectorAdapter
from .cbschuld import CbschuldAdapter
from .crawler_detect import CrawlerDetectAdapter
from .database import DatabaseAdapter
from .donatj import DonatjAdapter
from .endorphin import EndorphinAdapter
from .header_files import JsonFileAdapter, PhpFileAdapter, YamlFileAdapter
from .log_files import LogFileAdapter
from .matomo import MatomoAdapter, PiwikAdapter
from .mobile_detect import MobileDetectAdapter
from .sinergi import SinergiAdapter
from .text_files import DirectoryAdapter, TxtCounterFileAdapter, TxtFileAdapter
from .ua_parser_js import UaParserJsAdapter
from .uap_core import UapCoreAdapter
from .which_browser import WhichBrowserAdapter
from .woothee import WootheeAdapter
from .yzalis import YzalisAdapter
from .zsxsoft import ZsxsoftAdapter

__all__ = [
    "FixtureAdapter",
    "PathAdapter",
    "TxtFileAdapter",
    "TxtCounterFileAdapter",
    "DirectoryAdapter",
    "LogFileAdapter",
    "JsonFileAdapter",
    "YamlFileAdapter",
    "PhpFileAdapter",
    "DatabaseAdapter",
    "CbschuldAdapter",
    "CrawlerDetectAdapter",
    "MobileDetectAdapter",
    "DonatjAdapter",
    "SinergiAdapter",
    "ZsxsoftAdapter",
    "BrowscapAdapter",
    "BrowserDetectorAdapter",
    "DetectorAdapter",
    "MatomoAdapter",
    "PiwikAdapter",
    "WhichBrowserAdapter",
    "WootheeAdapter",
    "UapCoreAdapter",
    "UaParserJsAdapter",
    "EndorphinAdapter",
    "YzalisAdapter",
]
