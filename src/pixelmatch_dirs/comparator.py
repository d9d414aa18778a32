"""Run the pixelmatch container for one staged pair and capture its result."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from pixelmatch_dirs.config import RunConfig
from pixelmatch_dirs.errors import ComparatorError
from pixelmatch_dirs.workspace import StagedPair

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComparatorRun:
    """Exit status and combined stdout/stderr text of one comparator run."""

    returncode: int
    output: str


def _container_path(workspace_dir: Path, path: Path) -> str:
    """Path of a workspace file as seen from the container's working directory."""
    return str(PurePosixPath(workspace_dir.name, path.name))


def build_command(config: RunConfig, staged: StagedPair) -> list[str]:
    """Build ``<runtime> run --rm -v <abs ws>:<app>/<ws> <image> src target diff threshold``.

    The workspace is bind-mounted under the image's working directory so the
    three workspace-relative file arguments resolve inside the container.
    """
    workspace_dir = config.workspace_dir
    mount_point = PurePosixPath(config.container_app_dir, workspace_dir.name)
    volume = f'{workspace_dir.resolve()}:{mount_point}'
    return [
        config.runtime,
        'run',
        '--rm',
        '-v',
        volume,
        config.image,
        _container_path(workspace_dir, staged.src_copy),
        _container_path(workspace_dir, staged.target_copy),
        _container_path(workspace_dir, staged.diff_path),
        config.threshold,
    ]


def run_comparator(config: RunConfig, staged: StagedPair) -> ComparatorRun:
    """Invoke the comparator and wait for it to exit.

    Returns:
        ComparatorRun with the raw exit code; interpreting it is left to
        outcomes.classify().

    Raises:
        ComparatorError: If the process cannot be launched.
    """
    cmd = build_command(config, staged)
    logger.debug('Running %s', ' '.join(cmd))
    try:
        result = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            check=False,
        )
    except OSError as e:
        raise ComparatorError(f'command execution error: {e}') from e
    return ComparatorRun(returncode=result.returncode, output=result.stdout or '')
