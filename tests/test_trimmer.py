import os
import re
import sys
import shutil
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from xliff_tools import XliffTrimmer, document
from xliff_tools.criteria import LiteralCriterion

SAMPLE_XLIFF = os.path.join(os.path.dirname(__file__), '..', 'sample_data', 'Localizable.xliff')

THREE_FILES = """<?xml version="1.0" encoding="UTF-8"?>
<xliff version="1.2">
  <file original="A">
    <body>
      <trans-unit id="a1"><source>Alpha</source><note>First letter</note></trans-unit>
    </body>
  </file>
  <file original="B">
    <body>
      <trans-unit id="b1"><source>Beta</source><note>Second letter</note></trans-unit>
      <trans-unit id="b2"><source>Bravo</source><note>Radio alphabet</note></trans-unit>
    </body>
  </file>
  <file original="C">
    <body>
      <trans-unit id="c1"><source>Gamma</source><note>Third letter</note></trans-unit>
      <trans-unit id="c2"><source>Charlie</source><note>Radio alphabet</note></trans-unit>
    </body>
  </file>
</xliff>"""


def unit_ids(tree):
    return [u.get('id') for u in document.select_all(tree, 'trans-unit')]


def file_names(tree):
    return [f.get('original') for f in document.select_all(tree, 'file')]


def messages(report, severity=None):
    return [d.message for d in report.details if severity in (None, d.severity)]


def test_trim_single_file():
    tree = document.load(THREE_FILES)
    report = XliffTrimmer().trim(tree, files=['B'])
    assert report.removed_files == 1
    assert file_names(tree) == ['A', 'C']
    assert unit_ids(tree) == ['a1', 'c1', 'c2']
    assert "Removing file B because its path matched 'B'" in messages(report, 'info')
    assert messages(report, 'success') == [
        'Trimmed 1 file', 'Trimmed 0 localizations', 'Trimmed 0 localizations'
    ]


def test_trim_files_by_pattern():
    tree = document.load(THREE_FILES)
    report = XliffTrimmer().trim(tree, files=[re.compile('^[AC]$')])
    assert report.removed_files == 2
    assert file_names(tree) == ['B']
    assert 'Trimmed 2 files' in messages(report, 'success')


def test_trim_file_matched_twice_is_removed_once():
    tree = document.load(THREE_FILES)
    report = XliffTrimmer().trim(tree, files=['B', re.compile('B')])
    assert report.removed_files == 1
    assert file_names(tree) == ['A', 'C']


def test_trim_ids():
    tree = document.load(THREE_FILES)
    report = XliffTrimmer().trim(tree, ids=['a1', re.compile(r'^c')])
    assert report.removed_units == 3
    assert unit_ids(tree) == ['b1', 'b2']
    assert "Removing phrase c2 because its id matched '^c'" in messages(report, 'info')
    assert 'Trimmed 3 localizations' in messages(report, 'success')


def test_trim_by_source_and_note():
    tree = document.load(THREE_FILES)
    report = XliffTrimmer().trim(tree, text=['Alpha'], comment=[re.compile('Radio')])
    assert report.removed_by_content == 3
    assert unit_ids(tree) == ['b1', 'c1']
    assert "Removing a1 because its text was 'Alpha' (A)" in messages(report, 'info')
    assert "Removing c2 because its comment was 'Radio alphabet' (C)" in messages(report, 'info')


def test_trim_unit_matched_by_source_and_note_counts_once():
    tree = document.load(THREE_FILES)
    report = XliffTrimmer().trim(tree, text=['Beta'], comment=['Second letter'])
    assert report.removed_by_content == 1
    assert 'Trimmed 1 localization' in messages(report, 'success')
    assert messages(report, 'error') == []


def test_trim_content_skips_units_of_removed_files():
    tree = document.load(THREE_FILES)
    report = XliffTrimmer().trim(tree, files=['C'], comment=['Radio alphabet'])
    assert report.removed_files == 1
    assert report.removed_by_content == 1
    assert unit_ids(tree) == ['a1', 'b1']


def test_trim_pattern_matching_nothing_leaves_document():
    tree = document.load(THREE_FILES)
    before = document.serialize(tree)
    report = XliffTrimmer().trim(tree, text=[re.compile('Omega')])
    assert report.removed_by_content == 0
    assert messages(report, 'success')[-1] == 'Trimmed 0 localizations'
    assert document.serialize(tree) == before


def test_trim_invalid_criterion_is_reported_and_skipped():
    tree = document.load(THREE_FILES)
    report = XliffTrimmer().trim(tree, files=[42, 'A'], ids=[None])
    assert report.removed_files == 1
    assert messages(report, 'error') == [
        'Trimming value (42) must be either a string or a regular expression.',
        'Trimming value (None) must be either a string or a regular expression.',
    ]


def test_trim_accepts_criterion_objects():
    tree = document.load(THREE_FILES)
    report = XliffTrimmer().trim(tree, ids=[LiteralCriterion('b2')])
    assert report.removed_units == 1
    assert 'b2' not in unit_ids(tree)


def test_trim_namespaced_sample():
    with open(SAMPLE_XLIFF, 'rb') as f:
        tree = document.load(f.read())
    report = XliffTrimmer().trim(
        tree, files=[re.compile(r'InfoPlist')], ids=['DEBUG_MENU'], text=['Delete']
    )
    assert (report.removed_files, report.removed_units, report.removed_by_content) == (1, 1, 1)
    assert unit_ids(tree) == [
        '7Gh-2a-KxP.normalTitle', 'Qm1-bd-9zR.text', 'c2D-fe-41x.title', 'Loading…'
    ]


def test_trim_file_writes_result(tmp_path):
    path = tmp_path / 'Localizable.xliff'
    shutil.copy(SAMPLE_XLIFF, path)
    report = XliffTrimmer().trim_file(str(path), files=['App/Base.lproj/Main.storyboard'])
    assert report.removed_files == 1
    content = path.read_text(encoding='utf-8')
    assert 'Main.storyboard' not in content
    assert 'CFBundleName' in content
