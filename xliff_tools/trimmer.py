"""Remove entries from an XLIFF document.

Entries can be trimmed along four axes: the source file they were extracted
from, their unit id, their source text and their translator note.  Removal
runs in three phases, whole files first, then units by id, then units by
content, so later phases only ever see nodes that are still attached.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List

from lxml import etree

import config
from . import document
from .criteria import InvalidCriterion, MatchCriterion
from .report import SUCCESS, Diagnostics, TrimReport, plural


@dataclass(frozen=True)
class Match:
    """A node selected for removal and the criterion that selected it."""

    node: etree._Element
    field: str
    criterion: MatchCriterion


class XliffTrimmer:
    """Drop files and translation units matching literal or pattern criteria."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        if logger is None:
            logger = logging.getLogger("XliffTrimmer")
            logger.setLevel(getattr(logging, config.LOG_LEVEL))
        self.logger = logger

    def _collect(
        self,
        tree: etree._ElementTree,
        tag_path: str,
        values: Iterable,
        read: Callable[[etree._Element], str],
        field: str,
        diag: Diagnostics,
    ) -> List[Match]:
        """Resolve ``values`` against the nodes at ``tag_path``.

        Invalid values are reported and skipped.  A node selected by more
        than one criterion is only returned for the first.
        """

        matches: List[Match] = []
        seen = set()
        for value in values:
            try:
                criterion = MatchCriterion.from_value(value)
            except InvalidCriterion as exc:
                diag.error(str(exc))
                continue
            for node in document.select_all(tree, tag_path, lambda n: criterion.matches(read(n))):
                if node in seen:
                    continue
                seen.add(node)
                matches.append(Match(node, field, criterion))
        return matches

    def _trim_files(self, tree, values, diag: Diagnostics) -> int:
        matches = self._collect(tree, "file", values, lambda n: n.get("original"), "file", diag)
        for match in matches:
            diag.info(
                f"Removing file {match.node.get('original')} because its path "
                f"matched '{match.criterion}'"
            )
            document.remove_node(match.node)
        diag.success(f"Trimmed {plural(len(matches), 'file')}")
        return len(matches)

    def _trim_ids(self, tree, values, diag: Diagnostics) -> int:
        matches = self._collect(tree, "trans-unit", values, lambda n: n.get("id"), "phrase", diag)
        for match in matches:
            diag.info(
                f"Removing phrase {match.node.get('id')} because its id "
                f"matched '{match.criterion}'"
            )
            document.remove_node(match.node)
        diag.success(f"Trimmed {plural(len(matches), 'localization')}")
        return len(matches)

    def _trim_content(self, tree, text, comment, diag: Diagnostics) -> int:
        matches = self._collect(
            tree, "trans-unit/source", text, document.get_text, "text", diag
        ) + self._collect(tree, "trans-unit/note", comment, document.get_text, "comment", diag)
        removed = 0
        for match in matches:
            unit = match.node.getparent()
            # Source and note of the same unit may both have matched.
            if document.is_detached(tree, unit):
                continue
            file = document.file_of(unit)
            original = file.get("original") if file is not None else None
            diag.info(
                f"Removing {unit.get('id')} because its {match.field} was "
                f"'{document.get_text(match.node)}' ({original})"
            )
            document.remove_node(unit)
            removed += 1
        diag.success(f"Trimmed {plural(removed, 'localization')}")
        return removed

    def trim(
        self,
        tree: etree._ElementTree,
        files: Iterable = (),
        ids: Iterable = (),
        text: Iterable = (),
        comment: Iterable = (),
    ) -> TrimReport:
        """Trim ``tree`` in place.

        Every criterion sequence may mix strings, compiled patterns and
        :class:`MatchCriterion` objects.  Strings must equal the inspected
        value, patterns only have to be found in it.

        :param tree: Document returned by :func:`document.load`.
        :param files: Criteria for the ``original`` path of ``<file>``.
        :param ids: Criteria for the ``id`` of ``<trans-unit>``.
        :param text: Criteria for the unit's ``<source>`` text.
        :param comment: Criteria for the unit's ``<note>`` text.
        :returns: Number of files and units removed by each phase.
        """

        diag = Diagnostics(self.logger)
        removed_files = self._trim_files(tree, files, diag)
        removed_units = self._trim_ids(tree, ids, diag)
        removed_by_content = self._trim_content(tree, text, comment, diag)
        return TrimReport(removed_files, removed_units, removed_by_content, diag.entries)

    def trim_file(
        self,
        path: str,
        files: Iterable = (),
        ids: Iterable = (),
        text: Iterable = (),
        comment: Iterable = (),
    ) -> TrimReport:
        """Trim the XLIFF file at ``path`` and write it back once."""

        self.logger.log(SUCCESS, "Trimming localizations in %s", path)
        tree = document.read_document(path)
        report = self.trim(tree, files, ids, text, comment)
        document.write_document(tree, path)
        return report
