"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def movie_html() -> str:
    return _read_fixture("movie.html")


@pytest.fixture
def place_html() -> str:
    return _read_fixture("place.html")


@pytest.fixture
def no_og_html() -> str:
    return _read_fixture("no_og.html")


@pytest.fixture
def movie_path() -> Path:
    return FIXTURES_DIR / "movie.html"


@pytest.fixture
def no_og_path() -> Path:
    return FIXTURES_DIR / "no_og.html"
