"""Adapter for the donatj/phpuseragentparser test data."""

from __future__ import annotations

from collections.abc import Iterator

from uafixtures.adapters.base import PathAdapter
from uafixtures.adapters.common import FileAdapterMixin, display_path, iter_files
from uafixtures.models import CanonicalRecord, ClientInfo, PlatformInfo, new_identifier


class DonatjAdapter(PathAdapter, FileAdapterMixin):
    name = "donatj/phpuseragentparser"
    default_path = "donatj/phpuseragentparser/tests"

    def get_properties(self, message: str = "") -> Iterator[tuple[str, CanonicalRecord]]:
        self._report_path(message, self.path)

        for path in iter_files(self.path, extensions=["json"]):
            self._report_file(message, path)
            provider = self._load_json(message, path)
            if not isinstance(provider, dict):
                continue

            filepath = display_path(path)
            for agent, data in provider.items():
                agent = str(agent).strip()
                if not agent or not isinstance(data, dict):
                    continue

                yield new_identifier(), CanonicalRecord(
                    headers={"user-agent": agent},
                    client=ClientInfo(
                        name=self._to_string(data.get("browser")),
                        version=self._to_string(data.get("version")),
                    ),
                    platform=PlatformInfo(name=self._to_string(data.get("platform"))),
                    raw=data,
                    file=filepath,
                )
