# File: tests/test_cli.py
"""Тесты для CLI (`link_scout/cli.py`) с использованием click.testing.CliRunner.
Проверяют команды `check`, `config`, `--version`, а также обработку ошибок.
"""
import asyncio
import json

import pytest
import link_scout.cli as cli_module
from click.testing import CliRunner
from link_scout.cli import cli
from link_scout.logger import init_logging

QUIET = ["--log-level", "ERROR"]


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def restore_logging():
    """The CLI binds the log handler to the runner's stream; rebind it afterwards."""
    yield
    init_logging()


def test_version_option(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "LinkScout" in result.output


def test_show_config(runner, config_file):
    result = runner.invoke(cli, ["--config", str(config_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["domain"] == "www.example.com"
    assert data["node_types"] == {"page": ["document"]}


def test_bad_config(runner, tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("domain: example.com\ntree_file: missing.yaml", encoding="utf-8")
    result = runner.invoke(cli, ["--config", str(cfg), "config"])
    assert result.exit_code == 1
    assert "Ошибка загрузки конфигурации" in result.output


def test_check_stdout(runner, config_file):
    result = runner.invoke(cli, ["--config", str(config_file), *QUIET, "check"])
    assert result.exit_code == 0
    # the JSON report is the last line written
    report = json.loads(result.output.strip().splitlines()[-1])
    assert report["messages"] == ["Not found: node://missing", "Invalid format: tel:5551234"]
    assert report["status_counts"] == {"404": 1, "490": 1}


def test_check_json_file(runner, config_file, tmp_path):
    out = tmp_path / "out" / "links.json"
    result = runner.invoke(
        cli, ["--config", str(config_file), *QUIET, "check", "--json", str(out)]
    )
    assert result.exit_code == 0
    assert "JSON report" in result.output
    data = json.loads(out.read_text(encoding="utf-8"))
    assert [f["status_code"] for f in data["findings"]] == [404, 490]


def test_check_html_file(runner, config_file, tmp_path):
    out = tmp_path / "links.html"
    result = runner.invoke(
        cli, ["--config", str(config_file), *QUIET, "check", "--html", str(out)]
    )
    assert result.exit_code == 0
    assert out.exists()
    assert "node://missing" in out.read_text(encoding="utf-8")


def test_check_strict(runner, config_file):
    result = runner.invoke(cli, ["--config", str(config_file), *QUIET, "check", "--strict"])
    assert result.exit_code == cli_module.EXIT_FINDINGS


def test_check_timeout(runner, config_file, monkeypatch):
    async def slow(cfg):
        await asyncio.sleep(2)

    monkeypatch.setattr(cli_module, "start_check", slow)

    result = runner.invoke(
        cli, ["--config", str(config_file), *QUIET, "check", "--timeout", "0.1"]
    )
    assert result.exit_code == 1
    assert "не завершена" in result.output


def test_check_failure(runner, config_file, monkeypatch):
    async def broken(cfg):
        raise RuntimeError("tree store unavailable")

    monkeypatch.setattr(cli_module, "start_check", broken)

    result = runner.invoke(cli, ["--config", str(config_file), *QUIET, "check"])
    assert result.exit_code == 1
    assert "tree store unavailable" in result.output
