"""Pytest configuration and shared fixtures."""

import os
from pathlib import Path
from typing import Callable, Optional

import pytest

from ansigrid import Config, Document


def get_test_art_dir() -> Optional[Path]:
    """
    Get external art directory from environment or default locations.

    Set ANSIGRID_TEST_DIR environment variable to specify a custom location.
    """
    if env_path := os.environ.get("ANSIGRID_TEST_DIR"):
        path = Path(env_path).expanduser()
        if path.exists():
            return path

    defaults = [
        Path.home() / "ansi-art",
        Path.home() / "Documents" / "ansi-art",
    ]

    for default in defaults:
        if default.exists() and list(default.glob("*.ans"))[:1]:
            return default

    return None


@pytest.fixture
def decode() -> Callable[..., Document]:
    """Factory decoding bytes into a fresh Document; keyword args go to Config."""
    def _decode(data: bytes, **config) -> Document:
        doc = Document(Config(**config))
        doc.write(data)
        return doc
    return _decode


def pytest_generate_tests(metafunc: pytest.Metafunc) -> None:
    """Parametrize ``ans_file`` over the external art directory, if any."""
    if "ans_file" in metafunc.fixturenames:
        art_dir = get_test_art_dir()
        files = sorted(art_dir.glob("*.ans"))[:50] if art_dir else []
        metafunc.parametrize("ans_file", files, ids=lambda p: p.name)
