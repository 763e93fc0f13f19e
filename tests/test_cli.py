"""Tests for swagger_ui_formatter.cli module."""

import json
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from swagger_ui_formatter.cli import main
from swagger_ui_formatter.config import CONFIG_FILENAME


@pytest.fixture
def runner():
    """Create a CLI runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("SWAGGER_UI_FORMATTER_APP_ROOT", raising=False)
    monkeypatch.delenv("SWAGGER_UI_FORMATTER_CACHE", raising=False)


class TestLocate:
    """Tests for locate command."""

    def test_found(self, runner, install_library, tmp_path):
        install_library(tmp_path)
        result = runner.invoke(main, ["locate", "--app-root", str(tmp_path)])
        assert result.exit_code == 0
        assert result.output.strip() == "/libraries/swagger-ui"

    def test_not_found(self, runner, tmp_path):
        result = runner.invoke(main, ["locate", "--app-root", str(tmp_path)])
        assert result.exit_code != 0
        assert "not found" in result.output


class TestVersion:
    def test_prints_version(self, runner, install_library, tmp_path):
        install_library(tmp_path, version="5.0.0")
        result = runner.invoke(main, ["version", "--app-root", str(tmp_path)])
        assert result.exit_code == 0
        assert result.output.strip() == "5.0.0"

    def test_unknown_version(self, runner, tmp_path):
        result = runner.invoke(main, ["version", "--app-root", str(tmp_path)])
        assert result.exit_code != 0
        assert "unknown" in result.output


class TestBundles:
    def test_dumps_yaml(self, runner, install_library, tmp_path):
        install_library(tmp_path, version="5.0.0")
        result = runner.invoke(main, ["bundles", "--app-root", str(tmp_path)])
        assert result.exit_code == 0

        data = yaml.safe_load(result.output)
        assert data["swagger_ui"]["version"] == "5.0.0"
        assert data["swagger_ui_integration"]["dependencies"] == [
            "core/jquery",
            "core/drupal",
            "core/drupalSettings",
        ]

    def test_no_library(self, runner, tmp_path):
        result = runner.invoke(main, ["bundles", "--app-root", str(tmp_path)])
        assert result.exit_code == 0
        assert "No asset libraries" in result.output


class TestSvg:
    def test_prints_fragment(self, runner, install_library, tmp_path, sample_svg):
        install_library(tmp_path)
        result = runner.invoke(main, ["svg", "--app-root", str(tmp_path)])
        assert result.exit_code == 0
        assert result.output == sample_svg + "\n"

    def test_no_fragment(self, runner, install_library, tmp_path):
        install_library(tmp_path, index=None)
        result = runner.invoke(main, ["svg", "--app-root", str(tmp_path)])
        assert result.exit_code != 0
        assert "No SVG definitions" in result.output


class TestCacheClear:
    """Tests for the file-backed cache across invocations."""

    def test_cached_path_persists_until_cleared(
        self, runner, install_library, tmp_path, monkeypatch
    ):
        cache_file = tmp_path / "cache.json"
        monkeypatch.setenv("SWAGGER_UI_FORMATTER_CACHE", str(cache_file))
        first = install_library(tmp_path, "swagger-ui")

        result = runner.invoke(main, ["locate", "--app-root", str(tmp_path)])
        assert result.output.strip() == "/libraries/swagger-ui"
        assert json.loads(cache_file.read_text()) == {
            "swagger_ui_formatter.library_path": "/libraries/swagger-ui"
        }

        (first / "package.json").unlink()
        install_library(tmp_path, "swagger_ui")
        result = runner.invoke(main, ["locate", "--app-root", str(tmp_path)])
        assert result.output.strip() == "/libraries/swagger-ui"

        result = runner.invoke(main, ["cache", "clear", "--app-root", str(tmp_path)])
        assert result.exit_code == 0
        assert "Cache cleared" in result.output

        result = runner.invoke(main, ["locate", "--app-root", str(tmp_path)])
        assert result.output.strip() == "/libraries/swagger_ui"


class TestRender:
    def test_renders_containers(self, runner, install_library, tmp_path):
        install_library(tmp_path)
        result = runner.invoke(
            main, ["render", "field_api", "/a.json", "/b.json", "--app-root", str(tmp_path)]
        )
        assert result.exit_code == 0
        assert 'id="swagger-ui-field_api-0"' in result.output
        assert 'id="swagger-ui-field_api-1"' in result.output

    def test_missing_library(self, runner, tmp_path):
        result = runner.invoke(main, ["render", "f", "/a.json", "--app-root", str(tmp_path)])
        assert result.exit_code == 0
        assert "messages--error" in result.output

    def test_requires_urls(self, runner, tmp_path):
        result = runner.invoke(main, ["render", "f", "--app-root", str(tmp_path)])
        assert result.exit_code != 0


class TestHelp:
    def test_markdown(self, runner, tmp_path):
        result = runner.invoke(main, ["help", "--app-root", str(tmp_path)])
        assert result.exit_code == 0
        assert "<h1>Swagger UI Field Formatter</h1>" in result.output

    def test_plain(self, runner, tmp_path):
        result = runner.invoke(main, ["help", "--plain", "--app-root", str(tmp_path)])
        assert result.exit_code == 0
        assert result.output.startswith("<pre># Swagger UI Field Formatter")


class TestConfigCommands:
    """Tests for config init/show/where."""

    def test_init_creates_file(self, runner, tmp_path):
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(main, ["config", "init"])
            assert result.exit_code == 0
            assert "Created:" in result.output
            assert Path(CONFIG_FILENAME).exists()

    def test_init_refuses_existing(self, runner, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text("app_root: .")
        result = runner.invoke(main, ["config", "init", "-d", str(tmp_path)])
        assert result.exit_code != 0
        assert "already exists" in result.output

    def test_show(self, runner, tmp_path):
        config_path = tmp_path / CONFIG_FILENAME
        config_path.write_text("formatter:\n  doc_expansion: none\n")
        result = runner.invoke(main, ["config", "show", "-c", str(config_path)])
        assert result.exit_code == 0
        data = yaml.safe_load(result.output)
        assert data["formatter"]["doc_expansion"] == "none"
        assert data["config_path"] == str(config_path)

    def test_show_invalid(self, runner, tmp_path):
        config_path = tmp_path / CONFIG_FILENAME
        config_path.write_text("formatter:\n  validator: strict\n")
        result = runner.invoke(main, ["config", "show", "-c", str(config_path)])
        assert result.exit_code != 0
        assert "Invalid validator" in result.output

    def test_where(self, runner, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text("app_root: .")
        result = runner.invoke(main, ["config", "where", "-d", str(tmp_path)])
        assert result.exit_code == 0
        assert "Config file:" in result.output

    def test_where_none(self, runner, tmp_path):
        result = runner.invoke(main, ["config", "where", "-d", str(tmp_path)])
        assert "No .swagger-ui-formatter.yaml found" in result.output
