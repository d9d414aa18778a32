"""Tests for output parsing, outcome classification, and report accumulation."""

from __future__ import annotations

from pathlib import Path

import pytest

from pixelmatch_dirs.comparator import ComparatorRun
from pixelmatch_dirs.errors import ComparatorError, OutputParseError
from pixelmatch_dirs.outcomes import (
    DimensionMismatch,
    Identical,
    PixelMismatch,
    RunReport,
    classify,
    parse_pixel_stats,
)

_PIXEL_OUTPUT = 'header\npixels: 1234\nerror: 0.042\n'


def test_parse_pixel_stats_trims_values() -> None:
    """Lines 2 and 3 yield the whitespace-trimmed values."""
    assert parse_pixel_stats(_PIXEL_OUTPUT) == ('1234', '0.042')


def test_parse_pixel_stats_ignores_trailing_lines() -> None:
    """Extra log lines after line 3 do not matter."""
    out = 'matched in: 12ms\ndifferent pixels:   77  \nerror:\t1.5%\nsome log\n'
    assert parse_pixel_stats(out) == ('77', '1.5%')


@pytest.mark.parametrize(
    'output',
    [
        '',
        'header\npixels: 1\n',
        'header\npixels 1\nerror: 2\n',
        'header\npixels:\nerror: 2\n',
    ],
)
def test_parse_pixel_stats_failure_is_fatal(output: str) -> None:
    """Missing or malformed metric lines raise instead of defaulting."""
    with pytest.raises(OutputParseError):
        parse_pixel_stats(output)


def test_classify_exit_codes() -> None:
    """0, 65 and 66 map to the three outcome variants."""
    diff = Path('diff-a.png')
    assert classify('a.png', ComparatorRun(0, 'ok'), diff) == Identical('a.png')
    assert classify('a.png', ComparatorRun(65, 'sizes'), diff) == DimensionMismatch('a.png')
    assert classify('a.png', ComparatorRun(66, _PIXEL_OUTPUT), diff) == PixelMismatch(
        'a.png', '1234', '0.042', diff
    )


def test_classify_unknown_exit_code_is_fatal() -> None:
    """Any other exit code is a contract violation, not a result."""
    with pytest.raises(ComparatorError, match='exit status 1'):
        classify('a.png', ComparatorRun(1, 'docker: daemon not running'), Path('diff-a.png'))


def test_parse_error_is_a_comparator_error() -> None:
    """OutputParseError is caught by handlers of ComparatorError."""
    with pytest.raises(ComparatorError):
        classify('a.png', ComparatorRun(66, 'garbage'), Path('diff-a.png'))


def test_run_report_appends_in_order() -> None:
    """Report keeps scan order, no dedup, and ignores Identical."""
    report = RunReport()
    pm = PixelMismatch('y.png', '500', '0.03', Path('diff-y.png'))
    for outcome in (
        DimensionMismatch('b.png'),
        Identical('c.png'),
        pm,
        DimensionMismatch('a.png'),
        DimensionMismatch('b.png'),
    ):
        report.add(outcome)

    assert report.dimension_mismatches == ['b.png', 'a.png', 'b.png']
    assert report.pixel_mismatches == [pm]
    assert report.compared == 5
    assert report.is_clean is False
    assert RunReport().is_clean is True
