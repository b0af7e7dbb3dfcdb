"""Adapter that extracts user agents from web-server access logs."""

from __future__ import annotations

import re
from collections.abc import Iterator

from uafixtures.adapters.base import PathAdapter
from uafixtures.adapters.common import FileAdapterMixin, display_path, iter_files
from uafixtures.models import CanonicalRecord, new_identifier

# Apache/nginx "combined" format; the user agent is the last quoted field.
ACCESS_LOG_PATTERN = re.compile(
    r"^"
    r"(?P<remotehost>\S+)\s+"  # remote host (IP)
    r"(?P<logname>\S+)\s+"  # remote logname
    r"(?P<user>\S+)"  # remote user
    r"[^\[]+"
    r"\[(?P<time>[^\]]+)\]"  # date/time
    r"[^\"]+"
    r"\"(?P<http>.*)\"\s+"  # request line
    r"(?P<status>\d+)\D+"
    r"(?P<length>\d+)[^\d\"]+"
    r"\"(?P<referrer>.*)\"[^\"]+"
    r"\"(?P<user_agent>[^\"]*)\".*"
    r"$"
)

SKIPPED_EXTENSIONS = ("filepart", "sql", "rename", "txt", "zip", "rar", "php", "gitkeep")


class LogFileAdapter(PathAdapter, FileAdapterMixin):
    """One record per access-log line with a non-empty user agent."""

    name = "log-files"

    def get_properties(self, message: str = "") -> Iterator[tuple[str, CanonicalRecord]]:
        self._report_path(message, self.path)

        for path in iter_files(self.path, exclude_extensions=SKIPPED_EXTENSIONS):
            self._report_file(message, path)
            filepath = display_path(path)

            for line in self._iter_lines(message, path):
                match = ACCESS_LOG_PATTERN.match(line)
                if match is None:
                    self.write_error(f"{message}- no useragent found in line \"{line}\"")
                    continue

                agent = match.group("user_agent").strip()
                if not agent or agent == "-":
                    continue

                yield new_identifier(), CanonicalRecord(
                    headers={"user-agent": agent},
                    raw=line,
                    file=filepath,
                )
