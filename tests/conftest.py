"""Shared test fixtures."""

from pathlib import Path

import pytest
from extlibs.config import AppConfig, Config, LibraryConfig, ServerConfig
from extlibs.core.types import AssetDeclaration, CssCategory


@pytest.fixture
def app_root(tmp_path: Path) -> Path:
    """Create an application root with an empty libraries directory."""
    root = tmp_path / "web"
    (root / "libraries").mkdir(parents=True)
    return root


@pytest.fixture
def test_config(app_root: Path) -> Config:
    """Create a test configuration with one local and one remote library.

    Only "flexslider" is installed under app_root; "chosen" is remote-only
    and "missing" is neither.
    """
    (app_root / "libraries" / "flexslider").mkdir()

    return Config(
        server=ServerConfig(),
        app=AppConfig(root=app_root),
        schemes={"asset": "libraries"},
        libraries=[
            LibraryConfig(
                id="flexslider",
                css={CssCategory.BASE: [AssetDeclaration("flexslider.css")]},
                js=[AssetDeclaration("jquery.flexslider-min.js")],
                remote_url="https://cdn.example.com/flexslider",
            ),
            LibraryConfig(
                id="chosen",
                css={CssCategory.COMPONENT: [AssetDeclaration("chosen.min.css")]},
                js=[AssetDeclaration("chosen.jquery.min.js", {"minified": True})],
                remote_url="https://cdn.example.com/chosen/1.8",
            ),
            LibraryConfig(
                id="missing",
                js=[AssetDeclaration("missing.js")],
            ),
        ],
    )
