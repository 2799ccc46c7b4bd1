"""Shared test fixtures for downmix."""

import logging
import os
import shutil
import tempfile
from pathlib import Path

import pytest

FFPROBE_FIXTURES_DIR = Path(__file__).parent / "fixtures" / "ffprobe"


def load_ffprobe_fixture(name: str) -> str:
    """Load raw ffprobe JSON output by fixture name.

    Args:
        name: Name of the fixture file (without .json extension).

    Returns:
        The fixture text, as ffprobe would print it on stdout.
    """
    return (FFPROBE_FIXTURES_DIR / f"{name}.json").read_text()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test isolation."""
    dir_path = tempfile.mkdtemp()
    yield Path(dir_path)
    shutil.rmtree(dir_path, ignore_errors=True)


@pytest.fixture
def input_file(temp_dir: Path) -> Path:
    """An existing (empty) media file to use as INPUT_PATH."""
    path = temp_dir / "movie.mkv"
    path.write_bytes(b"\x1a\x45\xdf\xa3")
    return path


@pytest.fixture
def output_file(temp_dir: Path) -> Path:
    """A not-yet-existing OUTPUT_PATH in the same directory."""
    return temp_dir / "movie.stereo.mkv"


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Keep user config and DOWNMIX_* variables out of tests."""
    for var in list(os.environ):
        if var.startswith("DOWNMIX_"):
            monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("DOWNMIX_CONFIG_PATH", str(tmp_path / "no-config.toml"))


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Save and restore root logger state between tests."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers[:] = original_handlers
    root.setLevel(original_level)


@pytest.fixture
def ffprobe_output():
    """Factory returning raw ffprobe stdout for a named fixture."""
    return load_ffprobe_fixture
