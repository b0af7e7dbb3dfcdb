"""Error types raised by fixture adapters."""

from __future__ import annotations


class SourceError(RuntimeError):
    """A fixture source could not be enumerated or queried at all.

    Raised with the underlying exception as ``__cause__``. Problems with a
    single file or row never raise this; they are reported and skipped.
    """
