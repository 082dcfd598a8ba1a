"""Diagnostics and result objects shared by the engines.

Both engines report through a :class:`logging.Logger` and also keep every
message in their result object so callers and tests can inspect what
happened without capturing log output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

_LEVELS = {
    "success": SUCCESS,
    "info": logging.INFO,
    "error": logging.ERROR,
}


@dataclass(frozen=True)
class Diagnostic:
    """One reportable event with its severity."""

    severity: str
    message: str


@dataclass
class Diagnostics:
    """Collects diagnostics and forwards them to ``logger``."""

    logger: logging.Logger
    entries: List[Diagnostic] = field(default_factory=list)

    def emit(self, severity: str, message: str) -> None:
        self.entries.append(Diagnostic(severity, message))
        self.logger.log(_LEVELS[severity], message)

    def success(self, message: str) -> None:
        self.emit("success", message)

    def info(self, message: str) -> None:
        self.emit("info", message)

    def error(self, message: str) -> None:
        self.emit("error", message)


def plural(count: int, singular: str) -> str:
    """Return ``"1 thing"`` or ``"<n> things"``."""

    if count == 1:
        return f"1 {singular}"
    return f"{count} {singular}s"


@dataclass
class LintReport:
    """Outcome of :meth:`XliffLinter.lint`.

    ``write`` tells the caller whether the rewritten notes should be
    persisted under the configured missing-note policy.
    """

    missing_count: int
    updated_count: int
    write: bool
    details: List[Diagnostic]

    def __repr__(self) -> str:
        return (
            f"LintReport(missing_count={self.missing_count}, "
            f"updated_count={self.updated_count}, write={self.write})"
        )


@dataclass
class TrimReport:
    """Outcome of :meth:`XliffTrimmer.trim`."""

    removed_files: int
    removed_units: int
    removed_by_content: int
    details: List[Diagnostic]

    def __repr__(self) -> str:
        return (
            f"TrimReport(removed_files={self.removed_files}, "
            f"removed_units={self.removed_units}, "
            f"removed_by_content={self.removed_by_content})"
        )
