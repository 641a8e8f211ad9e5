"""
CLI 单元测试

使用 typer 的 CliRunner 测试 build / validate / example 命令。
"""

import json

import pytest
from typer.testing import CliRunner

from sitestage import __version__
from sitestage.cli.main import app
from sitestage.utils import logging as log


runner = CliRunner()


@pytest.fixture(autouse=True)
def fresh_facade():
    log.close_logger()
    yield
    log.close_logger()


@pytest.fixture
def site(tmp_path, monkeypatch):
    """在临时目录中创建 src/index.html 和 src/css/style.css"""
    (tmp_path / "src" / "css").mkdir(parents=True)
    (tmp_path / "src" / "index.html").write_bytes(b"x" * 100)
    (tmp_path / "src" / "css" / "style.css").write_bytes(b"y" * 50)
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestBuildCommand:
    """build 命令测试"""

    def test_default_config(self, site):
        result = runner.invoke(app, ["build"])

        assert result.exit_code == 0
        assert (site / "dist" / "index.html").exists()
        assert (site / "dist" / "css" / "style.css").exists()

    def test_overrides_and_report(self, site):
        (site / "web").mkdir()
        (site / "web" / "home.html").write_text("<html></html>")

        result = runner.invoke(app, [
            "build", "-s", "web", "-d", "public",
            "--html", "home.html", "--asset", "css",
            "--report", "report.json",
        ])

        assert result.exit_code == 0
        assert (site / "public" / "home.html").exists()
        data = json.loads((site / "report.json").read_text(encoding="utf-8"))
        assert data["filesProcessed"] == 1
        assert data["warnings"]

    def test_config_file(self, site):
        (site / "site.yaml").write_text(
            "source_dir: src\ndist_dir: out\nasset_dirs: [css]\nhtml_files: [index.html]\n",
            encoding="utf-8",
        )

        result = runner.invoke(app, ["build", "-c", "site.yaml"])

        assert result.exit_code == 0
        assert (site / "out" / "css" / "style.css").exists()

    def test_zero_files_exit_code(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["build"])
        assert result.exit_code == 1

    def test_invalid_override(self, site):
        result = runner.invoke(app, ["build", "--asset", "../up"])
        assert result.exit_code == 1
        assert not (site / "dist").exists()

    def test_missing_config_file(self, site):
        result = runner.invoke(app, ["build", "-c", "missing.yaml"])
        assert result.exit_code == 1

    def test_log_file(self, site):
        result = runner.invoke(app, ["build", "--log-file", "logs/build.log"])
        log.close_logger()

        assert result.exit_code == 0
        content = (site / "logs" / "build.log").read_text(encoding="utf-8")
        assert "index.html" in content


class TestValidateCommand:
    """validate 命令测试"""

    def test_valid(self, tmp_path):
        path = tmp_path / "site.yaml"
        path.write_text("asset_dirs: [css]\n", encoding="utf-8")

        result = runner.invoke(app, ["validate", "-c", str(path)])

        assert result.exit_code == 0

    def test_invalid(self, tmp_path):
        path = tmp_path / "site.yaml"
        path.write_text("unknown_key: 1\n", encoding="utf-8")

        result = runner.invoke(app, ["validate", "-c", str(path)])

        assert result.exit_code == 1

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "site.yaml"
        path.write_text("asset_dirs: ['../x']\n", encoding="utf-8")

        result = runner.invoke(app, ["validate", "-c", str(path), "--json"])

        assert result.exit_code == 1
        assert "error_count" in result.output


class TestMisc:
    """其他命令测试"""

    def test_example(self, tmp_path):
        output = tmp_path / "site.yaml"

        result = runner.invoke(app, ["example", "-o", str(output)])

        assert result.exit_code == 0
        assert "asset_dirs" in output.read_text(encoding="utf-8")

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
