"""
CLI Integration Tests
=====================

Tests the complete CLI interface including command parsing, configuration loading,
and end-to-end builds against a fake font service.
"""

from unittest.mock import patch

import pytest
import yaml
from click.testing import CliRunner

from iconfont.cli import cli


class TestCLIIntegration:
    """CLI integration tests."""

    @pytest.fixture
    def runner(self):
        """Click test runner."""
        return CliRunner()

    @pytest.fixture
    def patched_client(self, fake_client):
        with patch("iconfont.pipeline.driver.FontServiceClient", return_value=fake_client):
            yield fake_client

    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "build" in result.output
        assert "families" in result.output
        assert "sanitize" in result.output

    def test_build_flat(self, runner, build_root, patched_client):
        result = runner.invoke(cli, ["build", "--root", str(build_root)])

        assert result.exit_code == 0, result.output
        assert "Cleanup complete. Only /fonts and /css remain." in result.output
        assert {item.name for item in build_root.iterdir()} == {"fonts", "css"}
        assert (build_root / "css" / "MaterialSymbolsOutlined.css").exists()

    def test_build_layout_without_cleanup(self, runner, build_root, patched_client):
        result = runner.invoke(
            cli, ["build", "--root", str(build_root), "--layout", "build", "--no-cleanup"]
        )

        assert result.exit_code == 0, result.output
        assert f"Output written to {build_root / 'build'}" in result.output
        assert (build_root / "variablefont").exists()
        assert (build_root / "build" / "css" / "MaterialSymbolsRounded.css").exists()

    def test_build_with_allow_list(self, runner, build_root, patched_client):
        result = runner.invoke(
            cli, ["build", "--root", str(build_root), "--allow", "Material+Symbols+Rounded"]
        )

        assert result.exit_code == 0, result.output
        assert {item.name for item in (build_root / "css").iterdir()} == {
            "MaterialSymbolsRounded.css"
        }

    def test_build_from_yaml_config(self, runner, build_root, tmp_path, patched_client):
        config_path = tmp_path / "iconfont.yaml"
        config_path.write_text(
            yaml.dump(
                {
                    "log_level": "warning",
                    "build": {"root_dir": str(build_root), "layout": "build"},
                }
            ),
            encoding="utf-8",
        )

        result = runner.invoke(cli, ["build", "--config", str(config_path)])

        assert result.exit_code == 0, result.output
        assert (build_root / "build" / "fonts" / "OutlinedV1.woff2").exists()
        assert (build_root / "package.json").exists()

    def test_build_missing_source_directory(self, runner, tmp_path, patched_client):
        empty_root = tmp_path / "empty"
        empty_root.mkdir()

        result = runner.invoke(cli, ["build", "--root", str(empty_root)])

        assert result.exit_code == 1
        patched_client.fetch_text.assert_not_called()

    def test_build_rejects_unknown_layout(self, runner, build_root):
        result = runner.invoke(cli, ["build", "--root", str(build_root), "--layout", "nested"])

        assert result.exit_code != 0
        assert "nested" in result.output

    def test_families(self, runner, build_root):
        result = runner.invoke(cli, ["families", str(build_root / "variablefont")])

        lines = result.output.splitlines()
        assert result.exit_code == 0
        assert lines.index("Material+Symbols+Outlined") < lines.index("Material+Symbols+Rounded")

    def test_families_with_allow_list(self, runner, build_root):
        result = runner.invoke(
            cli,
            ["families", str(build_root / "variablefont"), "-a", "Material+Symbols+Sharp"],
        )

        assert result.exit_code == 0
        assert "No families detected." in result.output

    def test_sanitize(self, runner):
        result = runner.invoke(
            cli,
            ["--verbose", "sanitize", "MaterialSymbolsOutlined[FILL,GRAD,opsz,wght].ttf", "a-b.svg"],
        )

        lines = result.output.splitlines()
        assert result.exit_code == 0
        assert "MaterialSymbolsOutlined[FILL,GRAD,opsz,wght].ttf -> MaterialSymbolsOutlined.ttf" in lines
        assert "a-b.svg -> AB.svg" in lines
