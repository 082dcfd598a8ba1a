"""Trimming criteria.

A criterion is either a literal string, which must equal the inspected
value, or a compiled regular expression, which must be found somewhere in
it.  The kind is fixed when the criterion is built so the trimmer never has
to inspect types while matching.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Pattern, Union


class InvalidCriterion(TypeError):
    """A trimming value that is neither a string nor a pattern."""


class MatchCriterion:
    """Base class of :class:`LiteralCriterion` and :class:`PatternCriterion`."""

    def matches(self, value: Optional[str]) -> bool:
        raise NotImplementedError

    @classmethod
    def from_value(cls, value: Union[str, Pattern[str], "MatchCriterion"]) -> "MatchCriterion":
        """Wrap ``value`` in the matching criterion type.

        :raises InvalidCriterion: For anything other than a string, a
            compiled pattern or an existing criterion.
        """

        if isinstance(value, MatchCriterion):
            return value
        if isinstance(value, str):
            return LiteralCriterion(value)
        if isinstance(value, re.Pattern):
            return PatternCriterion(value)
        raise InvalidCriterion(
            f"Trimming value ({value}) must be either a string or a regular expression."
        )


@dataclass(frozen=True)
class LiteralCriterion(MatchCriterion):
    value: str

    def matches(self, value: Optional[str]) -> bool:
        return value == self.value

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PatternCriterion(MatchCriterion):
    pattern: Pattern[str]

    def matches(self, value: Optional[str]) -> bool:
        return value is not None and self.pattern.search(value) is not None

    def __str__(self) -> str:
        return self.pattern.pattern


_PATTERN_SYNTAX = re.compile(r"^/(?P<body>.*)/(?P<flags>[imsx]*)$", re.DOTALL)

_FLAGS = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL, "x": re.VERBOSE}


def parse_criterion(text: str) -> MatchCriterion:
    """Read a criterion written on the command line or in a TOML file.

    ``/Debug.*/`` (optionally followed by ``i``, ``m``, ``s`` or ``x`` flags)
    becomes a :class:`PatternCriterion`; anything else is taken literally.

    :raises re.error: If the pattern does not compile.
    """

    match = _PATTERN_SYNTAX.match(text)
    if match is None:
        return LiteralCriterion(text)
    flags = 0
    for flag in match.group("flags"):
        flags |= _FLAGS[flag]
    return PatternCriterion(re.compile(match.group("body"), flags))
