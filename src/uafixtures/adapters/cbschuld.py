"""Adapter for the cbschuld/browser.php tab-separated test lists."""

from __future__ import annotations

import csv
from collections.abc import Iterator
from pathlib import Path

import pandas as pd

from uafixtures.adapters.base import PathAdapter
from uafixtures.adapters.common import FileAdapterMixin, display_path, iter_files
from uafixtures.models import CanonicalRecord, ClientInfo, PlatformInfo, new_identifier

UA_COLUMN = 0
CLIENT_NAME_COLUMN = 2
CLIENT_VERSION_COLUMN = 3
PLATFORM_NAME_COLUMN = 5
# wider rows are cut to this many columns, shorter ones padded
COLUMN_COUNT = 8


class CbschuldAdapter(PathAdapter, FileAdapterMixin):
    """Read ``tests/lists/*.txt``; rows are tab separated and positional."""

    name = "cbschuld/browser.php"
    default_path = "cbschuld/browser.php/tests/lists"

    def get_properties(self, message: str = "") -> Iterator[tuple[str, CanonicalRecord]]:
        self._report_path(message, self.path)

        for path in iter_files(self.path, extensions=["txt"]):
            self._report_file(message, path)
            yield from self._read_list(message, path)

    def _read_list(self, message: str, path: Path) -> Iterator[tuple[str, CanonicalRecord]]:
        filepath = display_path(path)
        try:
            with pd.read_csv(
                path,
                sep="\t",
                header=None,
                names=list(range(COLUMN_COUNT)),
                usecols=list(range(COLUMN_COUNT)),
                index_col=False,
                dtype=str,
                keep_default_na=False,
                quoting=csv.QUOTE_NONE,
                on_bad_lines="skip",
                skip_blank_lines=True,
                chunksize=self.settings.chunksize,
            ) as reader:
                for chunk in reader:
                    for row in chunk.itertuples(index=False, name=None):
                        agent = self._to_string(row[UA_COLUMN])
                        if agent is None:
                            continue

                        # short rows are padded with NaN
                        values = ["" if pd.isna(value) else value for value in row]
                        while values and values[-1] == "":
                            values.pop()

                        yield new_identifier(), CanonicalRecord(
                            headers={"user-agent": agent},
                            client=ClientInfo(
                                name=self._to_string(row[CLIENT_NAME_COLUMN]),
                                version=self._to_string(row[CLIENT_VERSION_COLUMN]),
                            ),
                            platform=PlatformInfo(
                                name=self._to_string(row[PLATFORM_NAME_COLUMN]),
                            ),
                            raw=values,
                            file=filepath,
                        )
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError, OSError) as exc:
            self._report_failure(message, path, exc)
