"""Tests for startup validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from pixelmatch_dirs.config import RunConfig
from pixelmatch_dirs.errors import ConfigError
from pixelmatch_dirs.validation import parse_threshold, validate


@pytest.fixture
def runtime_found(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr('pixelmatch_dirs.validation.shutil.which', lambda name: f'/usr/bin/{name}')


def _config(tmp_path: Path, **kwargs: object) -> RunConfig:
    (tmp_path / 'src').mkdir(exist_ok=True)
    (tmp_path / 'target').mkdir(exist_ok=True)
    values: dict[str, object] = {
        'src_dir': tmp_path / 'src',
        'target_dir': tmp_path / 'target',
    }
    values.update(kwargs)
    return RunConfig(**values)  # type: ignore[arg-type]


@pytest.mark.parametrize('text', ['0.015', '0', '1', '1e-3', '.5'])
def test_parse_threshold_accepts_floats(text: str) -> None:
    """Plain float literals parse."""
    assert parse_threshold(text) == float(text)


@pytest.mark.parametrize('text', ['not-a-number', '', ' 0.1', '0.1 ', '1_0', '0,5'])
def test_parse_threshold_rejects(text: str) -> None:
    """Anything that is not a plain float literal is a ConfigError."""
    with pytest.raises(ConfigError, match='threshold error'):
        parse_threshold(text)


@pytest.mark.usefixtures('runtime_found')
def test_validate_ok(tmp_path: Path) -> None:
    """A valid config passes silently."""
    validate(_config(tmp_path))


@pytest.mark.usefixtures('runtime_found')
def test_validate_out_of_range_threshold_is_only_warned(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """The 0..1 range is not enforced; a warning is logged instead."""
    validate(_config(tmp_path, threshold='2.5'))
    assert 'outside the documented range' in caplog.text


def test_validate_missing_runtime(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """A runtime not on PATH is reported before anything else."""
    monkeypatch.setattr('pixelmatch_dirs.validation.shutil.which', lambda name: None)
    with pytest.raises(ConfigError, match='docker is not installed'):
        validate(_config(tmp_path, threshold='not-a-number'))


@pytest.mark.usefixtures('runtime_found')
def test_validate_bad_threshold(tmp_path: Path) -> None:
    """Unparseable threshold fails validation."""
    with pytest.raises(ConfigError, match='threshold error'):
        validate(_config(tmp_path, threshold='not-a-number'))


@pytest.mark.usefixtures('runtime_found')
def test_validate_source_missing(tmp_path: Path) -> None:
    """Missing source directory is fatal."""
    with pytest.raises(ConfigError, match='source directory error'):
        validate(_config(tmp_path, src_dir=tmp_path / 'missing'))


@pytest.mark.usefixtures('runtime_found')
def test_validate_target_not_directory(tmp_path: Path) -> None:
    """Target path that is a file is fatal."""
    (tmp_path / 'target.png').write_bytes(b'x')
    with pytest.raises(ConfigError, match='target: .* is not directory'):
        validate(_config(tmp_path, target_dir=tmp_path / 'target.png'))


@pytest.mark.parametrize(('text', 'expected'), [('0x1p-3', 0.125), ('-0X1.8p1', -3.0), ('inf', float('inf'))])
def test_parse_threshold_accepts_hex_and_infinity(text: str, expected: float) -> None:
    """Hex floats with a binary exponent and explicit infinity parse."""
    assert parse_threshold(text) == expected


@pytest.mark.parametrize('text', ['1e50', '-3.5e38', '1e400'])
def test_parse_threshold_rejects_values_beyond_float32(text: str) -> None:
    """Finite literals outside the single-precision range are rejected."""
    with pytest.raises(ConfigError, match='out of range'):
        parse_threshold(text)


@pytest.mark.usefixtures('runtime_found')
def test_validate_unstatable_source_is_config_error(tmp_path: Path) -> None:
    """OS errors other than not-found (here ENAMETOOLONG) become ConfigError."""
    with pytest.raises(ConfigError, match='source directory error'):
        validate(_config(tmp_path, src_dir=tmp_path / ('a' * 300)))
