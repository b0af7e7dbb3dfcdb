"""Operator progress output for adapters.

Adapters report what they are reading through an optional sink. Output is
feedback only and never changes the records an adapter yields.
"""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import TextIO

logger = logging.getLogger(__name__)


class Verbosity(IntEnum):
    """Detail tier of a progress message; errors are always ``NORMAL``."""

    NORMAL = 1
    VERBOSE = 2
    VERY_VERBOSE = 3


class OutputSink(ABC):
    """Line writer that adapters report progress and problems to."""

    @abstractmethod
    def writeln(self, message: str, verbosity: Verbosity = Verbosity.NORMAL) -> None:
        """Write one progress line."""

    @abstractmethod
    def error(self, message: str) -> None:
        """Write one error line, shown at normal verbosity."""


class LoggingOutput(OutputSink):
    """Route progress lines to a :mod:`logging` logger."""

    _LEVELS = {
        Verbosity.NORMAL: logging.INFO,
        Verbosity.VERBOSE: logging.DEBUG,
        Verbosity.VERY_VERBOSE: logging.DEBUG,
    }

    def __init__(self, target: logging.Logger | None = None) -> None:
        self.logger = target or logger

    def writeln(self, message: str, verbosity: Verbosity = Verbosity.NORMAL) -> None:
        self.logger.log(self._LEVELS[verbosity], message)

    def error(self, message: str) -> None:
        self.logger.error(message)


class StreamOutput(OutputSink):
    """Write lines up to a verbosity threshold to a text stream."""

    def __init__(
        self,
        stream: TextIO | None = None,
        *,
        verbosity: Verbosity = Verbosity.NORMAL,
    ) -> None:
        self.stream = stream or sys.stderr
        self.verbosity = verbosity

    def writeln(self, message: str, verbosity: Verbosity = Verbosity.NORMAL) -> None:
        if verbosity <= self.verbosity:
            self.stream.write(message + "\n")

    def error(self, message: str) -> None:
        self.stream.write(f"error: {message}\n")


class OutputAwareMixin:
    """Give an adapter an injectable sink, falling back to logging."""

    _output: OutputSink | None = None

    def set_output(self, output: OutputSink | None) -> None:
        self._output = output

    @property
    def output(self) -> OutputSink:
        if self._output is None:
            self._output = LoggingOutput()
        return self._output

    def writeln(self, message: str, verbosity: Verbosity = Verbosity.NORMAL) -> None:
        self.output.writeln(message, verbosity)

    def write_error(self, message: str) -> None:
        self.output.error(message)
