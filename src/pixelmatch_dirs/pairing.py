"""Pair source PNGs with same-named files in the target directory."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from pixelmatch_dirs.constants import IMAGE_SUFFIX
from pixelmatch_dirs.errors import WorkspaceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComparisonRequest:
    """One source/target pair to compare."""

    file_name: str
    src_path: Path
    target_path: Path


def _target_exists(path: Path) -> bool:
    try:
        path.stat()
    except (FileNotFoundError, NotADirectoryError):
        return False
    except OSError as e:
        raise WorkspaceError(f'target file error: {e}') from e
    return True


def iter_comparison_requests(src_dir: Path, target_dir: Path) -> Iterator[ComparisonRequest]:
    """Yield a request for each source PNG that has a same-named target entry.

    Entries come in directory-listing order (not sorted). Non-PNG entries are
    ignored and PNGs with no target counterpart are skipped without error.

    Parameters:
        src_dir: Directory scanned for ``*.png`` entries.
        target_dir: Directory probed for same-named counterparts.

    Raises:
        WorkspaceError: If src_dir cannot be listed.
    """
    try:
        with os.scandir(src_dir) as it:
            names = [entry.name for entry in it]
    except OSError as e:
        raise WorkspaceError(f'read {src_dir} error: {e}') from e
    for name in names:
        if not name.endswith(IMAGE_SUFFIX):
            continue
        target_path = target_dir / name
        if not _target_exists(target_path):
            logger.debug('No target counterpart for %s; skipping', name)
            continue
        yield ComparisonRequest(
            file_name=name,
            src_path=src_dir / name,
            target_path=target_path,
        )
