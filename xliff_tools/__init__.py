"""Public entry points for :mod:`xliff_tools`.

Applications usually only need the two engines and the loader.  The
implementation modules stay importable for finer control.
"""

from .document import ParseError, load, serialize
from .linter import XliffLinter
from .notes import explain
from .report import LintReport, TrimReport
from .trimmer import XliffTrimmer

__all__ = [
    "LintReport",
    "ParseError",
    "TrimReport",
    "XliffLinter",
    "XliffTrimmer",
    "explain",
    "load",
    "serialize",
]
