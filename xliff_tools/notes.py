"""Classification of translator notes.

Xcode fills the note of a string extracted from a storyboard with the
Interface Builder metadata of the element it came from, for example::

    Class = "UIButton"; normalTitle = "Save"; ObjectID = "x3a-Fb-12k";

Developers add a ``Note = "..."`` field to that comment to explain the string.
This module recognises those structured notes, pulls out the element class,
its role and the free-text note, and turns class and role into a short
sentence a translator can understand.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from lxml import etree

import config
from . import document


class MalformedStructuredNote(ValueError):
    """A structured note whose fields cannot be split into ``key = value``."""


class NoteKind(enum.Enum):
    NO_NOTE = "no note"
    PLACEHOLDER = "placeholder"
    ANNOTATED = "annotated"
    UNANNOTATED = "unannotated"
    FREE_TEXT = "free text"


@dataclass(frozen=True)
class NoteRecord:
    """Parsed structured note of one translation unit."""

    unit: etree._Element
    type: Optional[str]
    role: Optional[str]
    note: Optional[str]

    @property
    def missing(self) -> bool:
        return not self.note


def _unquote(text: str) -> str:
    return re.sub(r'^"|"$', "", text.strip())


def is_structured(text: str) -> bool:
    return config.STRUCTURED_MARKER in text


def parse_fields(text: str) -> List[Tuple[str, str]]:
    """Split a structured note into ``(key, value)`` pairs in order.

    Fields are separated by ``;`` and split on their first ``=``.  Keys and
    values lose surrounding whitespace and one layer of double quotes.  Blank
    fields, such as the one after a trailing ``;``, are skipped.

    :param text: Raw note text.
    :returns: Ordered list of pairs.
    :raises MalformedStructuredNote: If a field has no ``=``.
    """

    fields: List[Tuple[str, str]] = []
    for part in text.split(";"):
        if not part.strip():
            continue
        if "=" not in part:
            raise MalformedStructuredNote(f"field without '=': {part.strip()!r}")
        key, value = part.split("=", 1)
        fields.append((_unquote(key), _unquote(value)))
    return fields


def parse_note(unit: etree._Element, text: str) -> NoteRecord:
    """Build a :class:`NoteRecord` from the structured note of ``unit``.

    The role is the key of the second field, whatever its name.  Xcode
    always writes ``Class`` first and the localized property second, so the
    position identifies the role.

    :raises MalformedStructuredNote: If the fields cannot be parsed or there
        is no second field to take the role from.
    """

    fields = parse_fields(text)
    if len(fields) < 2:
        raise MalformedStructuredNote(f"expected at least two fields in {text!r}")
    values: Dict[str, str] = dict(fields)
    return NoteRecord(unit, values.get("Class"), fields[1][0], values.get("Note"))


def explain(role: Optional[str], type: Optional[str]) -> str:
    """Describe where a string appears in the UI.

    >>> explain("normalTitle", "UIButton")
    'title of a button'

    Unknown element classes fall back to the class name itself.
    """

    role = config.ROLE_NAMES.get(role, role)
    phrase = config.ELEMENT_PHRASES.get(type)
    if phrase is None:
        return type or ""
    return phrase.format(role=role)


def classify(unit: etree._Element) -> NoteKind:
    """Put ``unit`` into exactly one :class:`NoteKind`.

    Only the first note of the unit is considered.  A structured note that
    cannot be parsed counts as :attr:`NoteKind.UNANNOTATED`.
    """

    notes = document.children(unit, "note")
    if not notes:
        return NoteKind.NO_NOTE
    text = document.get_text(notes[0])
    if text == config.PLACEHOLDER_NOTE:
        return NoteKind.PLACEHOLDER
    if not is_structured(text):
        return NoteKind.FREE_TEXT
    try:
        record = parse_note(unit, text)
    except MalformedStructuredNote:
        return NoteKind.UNANNOTATED
    return NoteKind.UNANNOTATED if record.missing else NoteKind.ANNOTATED
