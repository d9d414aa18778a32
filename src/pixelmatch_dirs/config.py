"""Configuration: runtime, image, and workspace paths from environment, plus RunConfig."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from pixelmatch_dirs.constants import (
    CONTAINER_APP_DIR,
    DEFAULT_IMAGE,
    DEFAULT_RUNTIME,
    DEFAULT_SRC_DIR,
    DEFAULT_TARGET_DIR,
    DEFAULT_THRESHOLD,
    DEFAULT_WORKSPACE_DIR,
)


def get_runtime() -> str:
    """Return container runtime executable (PIXELMATCH_DIRS_RUNTIME env var or default).

    Returns:
        Executable name or path, e.g. ``docker`` or ``podman``.
    """
    return os.environ.get('PIXELMATCH_DIRS_RUNTIME', '').strip() or DEFAULT_RUNTIME


def get_image() -> str:
    """Return comparator container image (PIXELMATCH_DIRS_IMAGE env var or default)."""
    return os.environ.get('PIXELMATCH_DIRS_IMAGE', '').strip() or DEFAULT_IMAGE


def get_workspace_path() -> str:
    """Return transient workspace directory (PIXELMATCH_DIRS_TMP env var or default).

    Relative paths are resolved against the current working directory.

    Returns:
        Path string.
    """
    return os.environ.get('PIXELMATCH_DIRS_TMP', '').strip() or DEFAULT_WORKSPACE_DIR


@dataclass(frozen=True)
class RunConfig:
    """Settings for one run; built once at startup and never mutated.

    threshold is kept as the original string so the comparator receives
    exactly what the user typed.
    """

    threshold: str = DEFAULT_THRESHOLD
    src_dir: Path = Path(DEFAULT_SRC_DIR)
    target_dir: Path = Path(DEFAULT_TARGET_DIR)
    workspace_dir: Path = Path(DEFAULT_WORKSPACE_DIR)
    output_dir: Path = field(default_factory=Path)
    runtime: str = DEFAULT_RUNTIME
    image: str = DEFAULT_IMAGE
    container_app_dir: str = CONTAINER_APP_DIR


def build_run_config(
    threshold: str | None = None,
    src_dir: str | Path | None = None,
    target_dir: str | Path | None = None,
) -> RunConfig:
    """Build RunConfig from CLI values, falling back to defaults and environment.

    Parameters:
        threshold: Threshold string; empty or None means the default.
        src_dir: Source directory; empty or None means the default.
        target_dir: Target directory; empty or None means the default.

    Returns:
        Immutable RunConfig.
    """
    return RunConfig(
        threshold=threshold or DEFAULT_THRESHOLD,
        src_dir=Path(src_dir or DEFAULT_SRC_DIR),
        target_dir=Path(target_dir or DEFAULT_TARGET_DIR),
        workspace_dir=Path(get_workspace_path()),
        output_dir=Path(),
        runtime=get_runtime(),
        image=get_image(),
    )
