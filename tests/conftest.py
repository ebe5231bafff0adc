"""
Pytest configuration and fixtures for icon font build tests.
"""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import Mock

import pytest

from iconfont.core.config import BuildConfig
from iconfont.core.exceptions import FetchError
from iconfont.fonts.client import FontServiceClient
from iconfont.fonts.stylesheet import build_stylesheet_url

OUTLINED = "Material+Symbols+Outlined"
ROUNDED = "Material+Symbols+Rounded"

OUTLINED_ASSET_URL = "https://fonts.gstatic.com/s/materialsymbolsoutlined/v1/outlined-v1.woff2"
ROUNDED_ASSET_URL = "https://fonts.gstatic.com/s/materialsymbolsrounded/v1/rounded-v1.woff2"

SOURCE_FILES = {
    "MaterialSymbolsOutlined[FILL,GRAD,opsz,wght].ttf": b"outlined-ttf",
    "MaterialSymbolsOutlined[FILL,GRAD,opsz,wght].woff2": b"outlined-woff2",
    "MaterialSymbolsOutlined[FILL,GRAD,opsz,wght].codepoints": b"home e88a\n",
    "MaterialSymbolsRounded[FILL,GRAD,opsz,wght].ttf": b"rounded-ttf",
    "README.md": b"# sources\n",
}


def make_stylesheet(family_name: str, asset_url: str) -> str:
    """Return a minimal stylesheet shaped like the font service response."""
    return (
        "/* fallback */\n"
        "@font-face {\n"
        f"  font-family: '{family_name}';\n"
        "  font-style: normal;\n"
        "  font-weight: 400;\n"
        f"  src: url({asset_url}) format('woff2');\n"
        "}\n"
        f".{family_name.lower().replace(' ', '-')} {{\n"
        f"  font-family: '{family_name}';\n"
        "}\n"
    )


@pytest.fixture
def stylesheets() -> dict[str, str]:
    """Stylesheets served per family query."""
    return {
        OUTLINED: make_stylesheet("Material Symbols Outlined", OUTLINED_ASSET_URL),
        ROUNDED: make_stylesheet("Material Symbols Rounded", ROUNDED_ASSET_URL),
    }


@pytest.fixture
def assets() -> dict[str, bytes]:
    """Asset bytes served per URL."""
    return {
        OUTLINED_ASSET_URL: b"outlined-remote-woff2",
        ROUNDED_ASSET_URL: b"rounded-remote-woff2",
    }


@pytest.fixture
def fake_client_factory() -> Callable[[dict[str, str], dict[str, bytes]], Mock]:
    """Build a mock FontServiceClient serving the given stylesheets and assets."""

    def factory(stylesheets: dict[str, str], assets: dict[str, bytes]) -> Mock:
        urls = {build_stylesheet_url(family): css for family, css in stylesheets.items()}

        def fetch_text(url):
            if url not in urls:
                raise FetchError(url, status_code=400)
            return urls[url]

        def fetch_binary(url):
            if url not in assets:
                raise FetchError(url, status_code=404)
            return assets[url]

        client = Mock(spec=FontServiceClient)
        client.fetch_text.side_effect = fetch_text
        client.fetch_binary.side_effect = fetch_binary
        return client

    return factory


@pytest.fixture
def fake_client(fake_client_factory, stylesheets, assets) -> Mock:
    """Mock client serving both Material Symbols families."""
    return fake_client_factory(stylesheets, assets)


@pytest.fixture
def build_root(tmp_path: Path) -> Path:
    """Create a build root with a populated variable font directory."""
    root = tmp_path / "material-design-icons"
    source_dir = root / "variablefont"
    source_dir.mkdir(parents=True)

    for name, data in SOURCE_FILES.items():
        (source_dir / name).write_bytes(data)
    (source_dir / "nested").mkdir()

    (root / "package.json").write_text("{}\n", encoding="utf-8")
    (root / "other").mkdir()
    (root / "other" / "notes.txt").write_text("keep me?\n", encoding="utf-8")

    return root


@pytest.fixture
def build_config(build_root: Path) -> BuildConfig:
    """Flat layout configuration rooted at build_root."""
    return BuildConfig(root_dir=build_root)


def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers."""
    for item in items:
        if "integration" in item.nodeid:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
