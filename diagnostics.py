"""Optional human-readable progress sink."""

from __future__ import annotations

import logging
from typing import TextIO

LOGGER = logging.getLogger(__name__)


class InfoSink:
    """Write progress and warning lines to an optional text stream.

    Every line also goes to the module logger. When no stream is attached the
    sink itself stays silent.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream

    def info(self, fmt: str, *args: object) -> None:
        self._emit(logging.DEBUG, fmt, args)

    def warning(self, fmt: str, *args: object) -> None:
        self._emit(logging.WARNING, fmt, args)

    def _emit(self, level: int, fmt: str, args: tuple[object, ...]) -> None:
        line = fmt % args if args else fmt
        LOGGER.log(level, "%s", line)
        if self.stream is not None:
            self.stream.write(line + "\n")


def as_sink(info: InfoSink | TextIO | None) -> InfoSink:
    """Accept a stream, an existing sink, or None."""
    if isinstance(info, InfoSink):
        return info
    return InfoSink(info)
