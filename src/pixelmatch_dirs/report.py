"""Console report: dimension-mismatch list and tab-aligned pixel-mismatch table."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TextIO

from pixelmatch_dirs.constants import DIMENSION_HEADER, PIXEL_HEADER, TAB_WIDTH
from pixelmatch_dirs.outcomes import RunReport


def format_table(rows: Sequence[Sequence[str]], tabwidth: int = TAB_WIDTH) -> list[str]:
    """Align cells to tab stops, padding every non-final column with tabs.

    Each column ends at the first multiple of tabwidth strictly past its
    widest cell, so at least one tab always separates adjacent columns.

    Parameters:
        rows: Rows of cells; rows may have different lengths.
        tabwidth: Tab-stop spacing assumed by the terminal.

    Returns:
        One formatted line per row, without trailing newline.
    """
    ncols = max((len(row) for row in rows), default=0)
    stops: list[int] = []
    for col in range(ncols - 1):
        widest = max((len(row[col]) for row in rows if len(row) > col + 1), default=0)
        stops.append((widest // tabwidth + 1) * tabwidth)
    lines: list[str] = []
    for row in rows:
        parts: list[str] = []
        for col, cell in enumerate(row):
            parts.append(cell)
            if col < len(row) - 1:
                ntabs = -(-(stops[col] - len(cell)) // tabwidth)
                parts.append('\t' * ntabs)
        lines.append(''.join(parts))
    return lines


def render_report(report: RunReport, stream: TextIO) -> None:
    """Write the mismatch sections of report to stream; nothing if both are empty."""
    if report.dimension_mismatches:
        stream.write(DIMENSION_HEADER + '\n')
        for name in report.dimension_mismatches:
            stream.write(name + '\n')
    if report.pixel_mismatches:
        stream.write(PIXEL_HEADER + '\n')
        rows = [(pm.file_name, pm.pixel_count, pm.error_rate) for pm in report.pixel_mismatches]
        for line in format_table(rows):
            stream.write(line + '\n')
