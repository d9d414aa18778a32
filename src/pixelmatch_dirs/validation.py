"""Startup validation: runtime on PATH, numeric threshold, existing directories."""

from __future__ import annotations

import logging
import math
import shutil
import stat
from pathlib import Path

from pixelmatch_dirs.config import RunConfig
from pixelmatch_dirs.errors import ConfigError

logger = logging.getLogger(__name__)

# Largest finite float32; the threshold is parsed at single precision.
_FLOAT32_MAX = 3.4028234663852886e38


def _is_hex_float(text: str) -> bool:
    body = text.lstrip('+-').lower()
    return body.startswith('0x') and 'p' in body


def parse_threshold(text: str) -> float:
    """Parse threshold string strictly as a single-precision float.

    Python's float() also accepts surrounding whitespace and ``_`` digit
    separators; both are rejected here. Hex floats with a binary exponent
    (``0x1p-3``) are accepted, and finite values outside the float32 range
    are rejected. The documented 0..1 range is not enforced.

    Raises:
        ConfigError: If text is not a plain float literal.
    """
    if text != text.strip() or '_' in text:
        raise ConfigError(f'threshold error: invalid number {text!r}')
    try:
        value = float.fromhex(text) if _is_hex_float(text) else float(text)
    except ValueError as e:
        raise ConfigError(f'threshold error: invalid number {text!r}') from e
    overflowed = math.isinf(value) and 'inf' not in text.lower()
    if overflowed or (math.isfinite(value) and abs(value) > _FLOAT32_MAX):
        raise ConfigError(f'threshold error: value out of range {text!r}')
    return value


def _check_directory(path: Path, role: str) -> None:
    try:
        mode = path.stat().st_mode
    except FileNotFoundError:
        raise ConfigError(f'{role} directory error: {path} does not exist') from None
    except OSError as e:
        raise ConfigError(f'{role} directory error: {e}') from e
    if not stat.S_ISDIR(mode):
        raise ConfigError(f'{role}: {path} is not directory')


def validate(config: RunConfig) -> None:
    """Check config before any scanning; raise ConfigError on the first failure.

    Parameters:
        config: Run configuration to check.
    """
    runtime_path = shutil.which(config.runtime)
    if runtime_path is None:
        raise ConfigError(f'{config.runtime} is not installed')
    logger.debug('Using container runtime %s', runtime_path)
    value = parse_threshold(config.threshold)
    if not 0.0 <= value <= 1.0:
        logger.warning('threshold %s is outside the documented range 0 to 1', config.threshold)
    _check_directory(config.src_dir, 'source')
    _check_directory(config.target_dir, 'target')
