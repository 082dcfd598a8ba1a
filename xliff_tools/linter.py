"""Lint translator notes of an XLIFF document.

The linter reports every translation unit a translator would see without
useful context and expands structured Interface Builder notes into plain
sentences.  Missing notes are found in three separate passes (structured
notes without a ``Note`` field, units without any note, and Xcode's
placeholder note).  A unit that falls into two passes is counted twice.
"""

from __future__ import annotations

import logging
from typing import List

from lxml import etree

import config
from . import document, notes
from .notes import MalformedStructuredNote, NoteRecord
from .report import SUCCESS, Diagnostics, LintReport, plural

POLICIES = ("error", "warning")

_NOTE_XPATH = (
    "//*[local-name()='file'][@original=$original]"
    "//*[local-name()='trans-unit'][@id=$unit_id]"
    "/*[local-name()='note']"
)

_UNIT_NOTE_XPATH = (
    "//*[local-name()='trans-unit'][@id=$unit_id]/*[local-name()='note']"
)


class XliffLinter:
    """Check and rewrite translator notes.

    :param logger: Logger receiving the diagnostics.
    :param policy: ``error`` to persist rewrites only when no note is
        missing, ``warning`` to persist them regardless.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        policy: str = config.MISSING_NOTE_POLICY,
    ) -> None:
        if policy not in POLICIES:
            raise ValueError(f"Options are 'error' and 'warning', got {policy!r}")
        self.policy = policy
        if logger is None:
            logger = logging.getLogger("XliffLinter")
            logger.setLevel(getattr(logging, config.LOG_LEVEL))
        self.logger = logger

    def _original_of(self, unit: etree._Element) -> str:
        file = document.file_of(unit)
        return (document.get_attribute(file, "original") if file is not None else None) or ""

    def _structured_notes(self, tree, diag: Diagnostics):
        """Parse every structured note, splitting on the ``Note`` field."""

        missing: List[NoteRecord] = []
        annotated: List[NoteRecord] = []
        for note in document.select_all(
            tree, "trans-unit/note", lambda n: notes.is_structured(document.get_text(n))
        ):
            unit = note.getparent()
            try:
                record = notes.parse_note(unit, document.get_text(note))
            except MalformedStructuredNote as exc:
                diag.error(
                    f"Could not read translator note of '{unit.get('id')}' "
                    f"in {self._original_of(unit)}: {exc}"
                )
                continue
            (missing if record.missing else annotated).append(record)
        return missing, annotated

    def _rewrite(self, tree, record: NoteRecord, diag: Diagnostics) -> bool:
        text = f"{record.note} (It appears as a {notes.explain(record.role, record.type)})"
        unit_id = record.unit.get("id") or ""
        original = self._original_of(record.unit)
        if original:
            note = document.select_one(tree, _NOTE_XPATH, original=original, unit_id=unit_id)
        else:
            note = document.select_one(tree, _UNIT_NOTE_XPATH, unit_id=unit_id)
        if note is None:
            diag.error(f"Translator note of '{record.unit.get('id')}' disappeared")
            return False
        document.set_text(note, text)
        diag.info(text)
        return True

    def lint(self, tree: etree._ElementTree) -> LintReport:
        """Lint ``tree`` in place.

        Structured notes that carry a ``Note`` field are rewritten to
        ``"<note> (It appears as a <explanation>)"``.  Nothing is written to
        disk; :attr:`LintReport.write` says whether the caller should.

        :param tree: Document returned by :func:`document.load`.
        :returns: Counts of missing and rewritten notes.
        """

        diag = Diagnostics(self.logger)
        missing, annotated = self._structured_notes(tree, diag)

        missing_count = 0
        for record in missing:
            source = document.get_text(next(iter(document.children(record.unit, "source")), None))
            diag.info(
                f"Missing translator note for {record.type or ''}.{record.role} "
                f"'{source}' in {self._original_of(record.unit)}"
            )
            missing_count += 1

        for unit in document.select_all(
            tree, "trans-unit", lambda u: not document.children(u, "note")
        ):
            diag.info(
                f"Missing translator note for '{unit.get('id')}' in {self._original_of(unit)}"
            )
            missing_count += 1

        for note in document.select_all(
            tree, "trans-unit/note", lambda n: document.get_text(n) == config.PLACEHOLDER_NOTE
        ):
            unit = note.getparent()
            diag.info(
                f"Missing translator note for '{unit.get('id')}' in {self._original_of(unit)}"
            )
            missing_count += 1

        if missing_count == 0:
            diag.success("No missing comments")
        else:
            diag.info(f"Missing {plural(missing_count, 'translator comment')}")

        updated_count = sum(1 for record in annotated if self._rewrite(tree, record, diag))

        write = (missing_count == 0 or self.policy == "warning") and updated_count > 0
        return LintReport(missing_count, updated_count, write, diag.entries)

    def lint_file(self, path: str) -> LintReport:
        """Lint the XLIFF file at ``path`` and save rewritten notes.

        The file is only overwritten when the report says so; otherwise it is
        left untouched.
        """

        self.logger.log(SUCCESS, "Linting localizations in %s", path)
        tree = document.read_document(path)
        report = self.lint(tree)
        if report.write:
            document.write_document(tree, path)
            diag = Diagnostics(self.logger, report.details)
            diag.success(
                f"Updated translator notes for {report.updated_count} UI elements"
            )
        return report
