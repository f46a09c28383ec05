"""Tests for CLI commands."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner
from extlibs.cli import cli


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write a config with an installed, a remote and an unavailable library."""
    (tmp_path / "web" / "libraries" / "flexslider").mkdir(parents=True)
    config_file = tmp_path / "extlibs.toml"
    config_file.write_text("""
[app]
root = "web"

[libraries.flexslider]
remote_url = "https://cdn.example.com/flexslider"
js = ["jquery.flexslider-min.js"]

[libraries.flexslider.css]
base = ["flexslider.css"]

[libraries.chosen]
remote_url = "https://cdn.example.com/chosen"
js = [{ file = "chosen.jquery.js", options = { minified = false } }]

[libraries.missing]
js = ["missing.js"]
""")
    return config_file


class TestListCommand:
    """Tests for the list command."""

    def test__libraries__shows_source(self, config_file: Path) -> None:
        """Show where each library is served from."""
        runner = CliRunner()
        result = runner.invoke(cli, ["list", "-c", str(config_file)])

        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "flexslider: local",
            "chosen: remote",
            "missing: unavailable",
        ]

    def test__no_libraries__prints_message(self, tmp_path: Path) -> None:
        """Report an empty configuration."""
        config_file = tmp_path / "extlibs.toml"
        config_file.write_text("")

        runner = CliRunner()
        result = runner.invoke(cli, ["list", "-c", str(config_file)])

        assert result.exit_code == 0
        assert "No libraries configured" in result.output

    def test__invalid_config__fails(self, tmp_path: Path) -> None:
        """Exit with an error for invalid configuration."""
        config_file = tmp_path / "extlibs.toml"
        config_file.write_text('[libraries.foo.css]\nprint = ["p.css"]')

        runner = CliRunner()
        result = runner.invoke(cli, ["list", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "unknown category 'print'" in result.output


class TestResolveCommand:
    """Tests for the resolve command."""

    def test__installed_library__prints_local_paths(self, config_file: Path) -> None:
        """Print assets rewritten under the local path."""
        runner = CliRunner()
        result = runner.invoke(cli, ["resolve", "flexslider", "-c", str(config_file)])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data == {
            "id": "flexslider",
            "attachable": True,
            "prefix": "/libraries/flexslider",
            "css": {"base": {"/libraries/flexslider/flexslider.css": {}}},
            "js": {"/libraries/flexslider/jquery.flexslider-min.js": {}},
        }

    def test__remote_library__prints_urls(self, config_file: Path) -> None:
        """Print assets rewritten under the remote URL."""
        runner = CliRunner()
        result = runner.invoke(cli, ["resolve", "chosen", "-c", str(config_file)])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["js"] == {
            "https://cdn.example.com/chosen/chosen.jquery.js": {"minified": False},
        }

    def test__unavailable_library__fails(self, config_file: Path) -> None:
        """Exit with an error when the library cannot be attached."""
        runner = CliRunner()
        result = runner.invoke(cli, ["resolve", "missing", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "'missing' cannot be attached" in result.output

    def test__unknown_library__fails(self, config_file: Path) -> None:
        """Exit with an error for undeclared libraries."""
        runner = CliRunner()
        result = runner.invoke(cli, ["resolve", "jquery", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "Unknown library: jquery" in result.output


class TestServeCommand:
    """Tests for the serve command."""

    def test__overrides__passed_to_server(
        self,
        config_file: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Run the server with CLI overrides applied."""
        captured = {}
        monkeypatch.setattr(
            "extlibs.server.run_server",
            lambda config: captured.setdefault("config", config),
        )

        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["serve", "-c", str(config_file), "--host", "0.0.0.0", "-p", "9000"],
        )

        assert result.exit_code == 0
        assert "Starting server on 0.0.0.0:9000" in result.output
        assert "Libraries: 3" in result.output
        assert captured["config"].server.port == 9000
