"""Sequential compare loop: stage, run comparator, classify, keep or drop diff, clean up."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from pathlib import Path
from typing import TextIO

from pixelmatch_dirs.comparator import ComparatorRun, run_comparator
from pixelmatch_dirs.config import RunConfig
from pixelmatch_dirs.constants import DIFF_PREFIX
from pixelmatch_dirs.errors import WorkspaceError
from pixelmatch_dirs.outcomes import (
    ComparisonOutcome,
    Identical,
    PixelMismatch,
    RunReport,
    classify,
)
from pixelmatch_dirs.pairing import iter_comparison_requests
from pixelmatch_dirs.workspace import StagedPair, Workspace, remove_file

logger = logging.getLogger(__name__)

Comparator = Callable[[RunConfig, StagedPair], ComparatorRun]


def _move_diff(src: Path, dst: Path) -> None:
    try:
        shutil.move(str(src), str(dst))
    except OSError as e:
        raise WorkspaceError(f'file move error: {src} -> {dst}: {e}') from e


def _finalize_diff(outcome: ComparisonOutcome, staged: StagedPair) -> None:
    """Drop the transient diff for identical pairs; move it to its stable name otherwise."""
    if isinstance(outcome, Identical):
        remove_file(staged.diff_path, missing_ok=True)
    elif isinstance(outcome, PixelMismatch):
        _move_diff(staged.diff_path, outcome.diff_artifact)


def compare_pair(
    config: RunConfig,
    staged: StagedPair,
    stdout: TextIO,
    comparator: Comparator,
) -> ComparisonOutcome:
    """Compare one already-staged pair and settle its diff artifact."""
    name = staged.request.file_name
    stdout.write(f'check {staged.request.src_path}\n')
    stdout.flush()
    result = comparator(config, staged)
    diff_artifact = config.output_dir / f'{DIFF_PREFIX}{name}'
    outcome = classify(name, result, diff_artifact)
    _finalize_diff(outcome, staged)
    logger.info('%s: %s', name, type(outcome).__name__)
    return outcome


def run(
    config: RunConfig,
    stdout: TextIO,
    comparator: Comparator = run_comparator,
) -> RunReport:
    """Compare every paired PNG and return the accumulated report.

    Any PixelmatchDirsError propagates immediately; nothing is rendered for a
    partial run.

    Parameters:
        config: Validated run configuration.
        stdout: Stream for per-file ``check <path>`` progress lines.
        comparator: Callable that runs the external tool (replaceable in tests).

    Returns:
        RunReport with dimension and pixel mismatches in scan order.
    """
    workspace = Workspace(config.workspace_dir)
    workspace.ensure()
    report = RunReport()
    for request in iter_comparison_requests(config.src_dir, config.target_dir):
        with workspace.stage(request) as staged:
            outcome = compare_pair(config, staged, stdout, comparator)
        report.add(outcome)
    logger.info(
        'Compared %d pair(s): %d dimension mismatch(es), %d pixel mismatch(es)',
        report.compared,
        len(report.dimension_mismatches),
        len(report.pixel_mismatches),
    )
    return report
