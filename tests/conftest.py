"""Shared fixtures: the sample stylesheet and a throwaway copy of the sample project."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def css_path() -> Path:
    return FIXTURES / "sample.css"


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A writable copy of fixtures/project."""
    root = tmp_path / "project"
    shutil.copytree(FIXTURES / "project", root)
    return root
