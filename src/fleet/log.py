"""Line sinks used to narrate state transitions.

The core never writes to a global logger; callers inject one of these.
"""
from __future__ import annotations

import logging
from typing import Callable, List

LineSink = Callable[[str], None]


def null_sink(line: str) -> None:
    return None


class CollectingSink:
    """Keeps every narrated line in memory."""

    def __init__(self) -> None:
        self.lines: List[str] = []

    def __call__(self, line: str) -> None:
        self.lines.append(line)


def logging_sink(logger: logging.Logger, level: int = logging.INFO) -> LineSink:
    """Route narrated lines to a standard library logger."""

    def emit(line: str) -> None:
        logger.log(level, line)

    return emit


def prefixed(sink: LineSink, prefix: str) -> LineSink:
    def emit(line: str) -> None:
        sink(f"{prefix}{line}")

    return emit
