"""Classify comparator results and accumulate them into a RunReport."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from pixelmatch_dirs.comparator import ComparatorRun
from pixelmatch_dirs.constants import (
    EXIT_DIFFERENT_DIMENSIONS,
    EXIT_DIFFERENT_PIXELS,
    EXIT_IDENTICAL,
)
from pixelmatch_dirs.errors import ComparatorError, OutputParseError


@dataclass(frozen=True)
class Identical:
    """Images are equivalent within the threshold."""

    file_name: str


@dataclass(frozen=True)
class DimensionMismatch:
    """Images have different dimensions; no pixel statistics."""

    file_name: str


@dataclass(frozen=True)
class PixelMismatch:
    """Pixel differences found; pixel_count and error_rate are the tool's text."""

    file_name: str
    pixel_count: str
    error_rate: str
    diff_artifact: Path


ComparisonOutcome = Identical | DimensionMismatch | PixelMismatch


def _metric_value(lines: list[str], index: int) -> str:
    if index >= len(lines):
        raise OutputParseError(
            f'pixelmatch output has {len(lines)} lines; expected a metric on line {index + 1}'
        )
    line = lines[index]
    _label, sep, value = line.partition(':')
    value = value.strip()
    if not sep or not value:
        raise OutputParseError(f'pixelmatch output line {index + 1} is not "label: value": {line!r}')
    return value


def parse_pixel_stats(output: str) -> tuple[str, str]:
    """Extract (pixel_count, error_rate) from pixelmatch's pixel-mismatch output.

    Line 2 carries the differing-pixel count and line 3 the error percentage,
    each as ``label: value``. E.g. ``"header\\npixels: 1234\\nerror: 0.042\\n"``
    gives ``('1234', '0.042')``.

    Raises:
        OutputParseError: If either line is missing or malformed.
    """
    lines = output.split('\n')
    return _metric_value(lines, 1), _metric_value(lines, 2)


def classify(file_name: str, run: ComparatorRun, diff_artifact: Path) -> ComparisonOutcome:
    """Map one comparator exit status to an outcome.

    Parameters:
        file_name: Compared file name.
        run: Exit code and captured output.
        diff_artifact: Stable path the diff image will be moved to on pixel mismatch.

    Raises:
        ComparatorError: On an exit code outside the 0/65/66 contract.
        OutputParseError: If pixel-mismatch output cannot be parsed.
    """
    if run.returncode == EXIT_IDENTICAL:
        return Identical(file_name)
    if run.returncode == EXIT_DIFFERENT_DIMENSIONS:
        return DimensionMismatch(file_name)
    if run.returncode == EXIT_DIFFERENT_PIXELS:
        pixel_count, error_rate = parse_pixel_stats(run.output)
        return PixelMismatch(file_name, pixel_count, error_rate, diff_artifact)
    raise ComparatorError(
        f'command execution error: {file_name}: exit status {run.returncode}: {run.output.strip()}'
    )


@dataclass
class RunReport:
    """Dimension and pixel mismatches in scan order; identical pairs are not kept."""

    dimension_mismatches: list[str] = field(default_factory=list)
    pixel_mismatches: list[PixelMismatch] = field(default_factory=list)
    compared: int = 0

    def add(self, outcome: ComparisonOutcome) -> None:
        """Append outcome to the matching list."""
        self.compared += 1
        if isinstance(outcome, DimensionMismatch):
            self.dimension_mismatches.append(outcome.file_name)
        elif isinstance(outcome, PixelMismatch):
            self.pixel_mismatches.append(outcome)

    @property
    def is_clean(self) -> bool:
        """True when no mismatches were recorded."""
        return not self.dimension_mismatches and not self.pixel_mismatches
