"""Bundled default theme and the lookup order for templates and assets.

A project may ship ``views/index.html`` to replace the landing page and put
files in ``public/`` to serve them at ``/``.  Anything the project leaves
out comes from ``theme/default/``: its ``templates/index.html`` renders the
greeting under the ``bbCode.tech`` title and ``assets/style.css`` styles it.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bbserve.config import BBConfig


def _bundled_theme_path() -> Path:
    return Path(__file__).parent / "default"


def _chain(user_dir: Path, bundled: Path) -> list[Path]:
    # A project rooted at the bundled theme itself gets a single entry.
    return [bundled] if user_dir == bundled else [user_dir, bundled]


def get_template_dirs(config: BBConfig) -> list[Path]:
    """Template directories, project ``views/`` first.

    The project directory is listed even when missing; Chirp's loader
    simply finds nothing there and falls back to the bundled templates.
    """
    return _chain(config.templates_path, _bundled_theme_path() / "templates")


def get_asset_dirs(config: BBConfig) -> list[Path]:
    """Static directories, project ``public/`` first.

    Only existing directories get mounted, see ``bbserve.app``.
    """
    return _chain(config.static_path, _bundled_theme_path() / "assets")
