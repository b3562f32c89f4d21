"""Diagnostic sink for recoverable evaluation problems.

A Diagnostics object is created once by whoever drives evaluation and handed to
the construction API and the evaluator. Each warning is recorded (so callers
and tests can inspect what happened while computing one result) and forwarded
to the ``cilisp.diagnostics`` logger. Emitting a warning never changes the
value being computed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional

logger = logging.getLogger("cilisp.diagnostics")


@dataclass(frozen=True)
class Diagnostic:
    severity: str
    message: str

    def __str__(self) -> str:
        return f"{self.severity.upper()}: {self.message}"


class Diagnostics:
    """Records warnings and forwards them to a logger."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log if log is not None else logger
        self.records: List[Diagnostic] = []

    def warning(self, msg: str, *args) -> None:
        message = msg % args if args else msg
        self.records.append(Diagnostic("warning", message))
        self.log.warning("%s", message)

    @property
    def warnings(self) -> List[str]:
        return [d.message for d in self.records if d.severity == "warning"]

    def drain(self) -> List[Diagnostic]:
        """Return and forget everything recorded so far."""
        drained, self.records = self.records, []
        return drained

    def clear(self) -> None:
        self.records.clear()

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)
