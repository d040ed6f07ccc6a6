import shutil
from pathlib import Path

import pytest

from notecorpus.shared.config import IndexerConfig

DATA_DIR = Path(__file__).parent / "data"
SAMPLE_NAME = "swiftui_notes.swift"


@pytest.fixture
def sample_text() -> str:
    return (DATA_DIR / SAMPLE_NAME).read_text(encoding="utf-8")


@pytest.fixture
def sample_path(tmp_path) -> Path:
    """A writable copy of the sample notes file."""
    target = tmp_path / SAMPLE_NAME
    shutil.copy(DATA_DIR / SAMPLE_NAME, target)
    return target


@pytest.fixture
def config() -> IndexerConfig:
    return IndexerConfig()
