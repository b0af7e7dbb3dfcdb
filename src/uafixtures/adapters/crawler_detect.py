"""Adapter for the jaybizzle/crawler-detect fixture lists."""

from __future__ import annotations

from collections.abc import Iterator

from uafixtures.adapters.base import PathAdapter
from uafixtures.adapters.common import FileAdapterMixin, display_path, iter_files
from uafixtures.models import CanonicalRecord, ClientInfo, new_identifier

CRAWLER_LIST = "crawlers"
CLIENT_HINT_DIRECTORY = "sec_ch_ua"


class CrawlerDetectAdapter(PathAdapter, FileAdapterMixin):
    """``crawlers.txt`` lists bots, every other list holds regular clients.

    Lists below a ``sec_ch_ua`` directory carry ``Sec-CH-UA`` values rather
    than user agents.
    """

    name = "jaybizzle/crawler-detect"
    default_path = "jaybizzle/crawler-detect/tests"

    def get_properties(self, message: str = "") -> Iterator[tuple[str, CanonicalRecord]]:
        self._report_path(message, self.path)

        for path in iter_files(self.path, extensions=["txt"]):
            self._report_file(message, path)
            filepath = display_path(path)
            is_bot = path.stem == CRAWLER_LIST
            header = "sec-ch-ua" if path.parent.name == CLIENT_HINT_DIRECTORY else "user-agent"

            for value in self._iter_lines(message, path):
                yield new_identifier(), CanonicalRecord(
                    headers={header: value},
                    client=ClientInfo(is_bot=is_bot),
                    raw=value,
                    file=filepath,
                )
