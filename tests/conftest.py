"""Shared test fixtures for bbserve."""

from __future__ import annotations

from pathlib import Path

import pytest

from bbserve.config import BBConfig


@pytest.fixture
def tmp_project(tmp_path: Path) -> Path:
    """Create a minimal project with an empty views/ and a public/ file.

    The root page falls back to the bundled theme's ``index.html``.
    """
    (tmp_path / "views").mkdir()
    public = tmp_path / "public"
    public.mkdir()
    (public / "robots.txt").write_text("User-agent: *\nDisallow:\n")
    return tmp_path


@pytest.fixture
def themed_project(tmp_project: Path) -> Path:
    """Extend tmp_project with a user ``index.html`` overriding the theme."""
    (tmp_project / "views" / "index.html").write_text(
        "<!DOCTYPE html>\n<html>\n<head><title>{{ title }}</title></head>\n"
        "<body><h1>{{ greeting }}</h1><p>custom theme</p></body>\n</html>\n"
    )
    return tmp_project


@pytest.fixture
def config(tmp_project: Path) -> BBConfig:
    """Default configuration rooted at tmp_project."""
    return BBConfig(root=tmp_project)
