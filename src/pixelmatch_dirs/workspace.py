"""Transient workspace: per-pair copies staged for the container bind mount."""

from __future__ import annotations

import contextlib
import logging
import shutil
import stat
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from pixelmatch_dirs.constants import (
    DIFF_PREFIX,
    SRC_PREFIX,
    TARGET_PREFIX,
    WORKSPACE_DIR_MODE,
)
from pixelmatch_dirs.errors import WorkspaceError
from pixelmatch_dirs.pairing import ComparisonRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StagedPair:
    """Workspace paths for one request while it is being compared."""

    request: ComparisonRequest
    src_copy: Path
    target_copy: Path
    diff_path: Path


def _copy_file(src: Path, dst: Path) -> None:
    try:
        shutil.copyfile(src, dst)
    except OSError as e:
        raise WorkspaceError(f'copy file error: {src} -> {dst}: {e}') from e


def remove_file(path: Path, *, missing_ok: bool = False) -> None:
    """Remove path, raising WorkspaceError on failure.

    Parameters:
        path: File to remove.
        missing_ok: When True, an already-absent file is not an error.
    """
    try:
        path.unlink(missing_ok=missing_ok)
    except OSError as e:
        raise WorkspaceError(f'file remove error: {path}: {e}') from e


class Workspace:
    """Scratch directory that holds src-/target-/diff- copies for one pair at a time."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def ensure(self) -> None:
        """Create the workspace directory if absent; fail if path is not a directory."""
        try:
            mode = self.path.stat().st_mode
        except FileNotFoundError:
            try:
                self.path.mkdir(mode=WORKSPACE_DIR_MODE)
            except OSError as e:
                raise WorkspaceError(f'tmp directory error: {e}') from e
            logger.debug('Created workspace %s', self.path)
            return
        except OSError as e:
            raise WorkspaceError(f'tmp directory error: {e}') from e
        if not stat.S_ISDIR(mode):
            raise WorkspaceError(f'{self.path} is not directory')

    def paths_for(self, request: ComparisonRequest) -> StagedPair:
        """Return the workspace paths used for request (no filesystem access)."""
        name = request.file_name
        return StagedPair(
            request=request,
            src_copy=self.path / f'{SRC_PREFIX}{name}',
            target_copy=self.path / f'{TARGET_PREFIX}{name}',
            diff_path=self.path / f'{DIFF_PREFIX}{name}',
        )

    @contextlib.contextmanager
    def stage(self, request: ComparisonRequest) -> Iterator[StagedPair]:
        """Copy request's files into the workspace and remove them on exit.

        Both copies are removed on every exit path; on an error path any
        transient diff is removed too. If removal fails while another error is
        already propagating, that error wins and the removal failure is logged.
        """
        staged = self.paths_for(request)
        try:
            _copy_file(request.src_path, staged.src_copy)
            _copy_file(request.target_path, staged.target_copy)
            logger.debug('Staged %s into %s', request.file_name, self.path)
            yield staged
        except BaseException:
            for path in (staged.src_copy, staged.target_copy, staged.diff_path):
                try:
                    remove_file(path, missing_ok=True)
                except WorkspaceError as e:
                    logger.error('%s', e)
            raise
        errors: list[WorkspaceError] = []
        for path in (staged.src_copy, staged.target_copy):
            try:
                remove_file(path)
            except WorkspaceError as e:
                errors.append(e)
        if errors:
            for err in errors[1:]:
                logger.error('%s', err)
            raise errors[0]
