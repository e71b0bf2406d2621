"""Tests for the click commands in openrouter_mcp/cli.py."""

import pytest
from click.testing import CliRunner

from openrouter_mcp import cli
from tests.conftest import FakeGateway, completion_body, status_error


@pytest.fixture
def patched_cli(monkeypatch, sample_app_config, sample_catalog):
    gateway = FakeGateway(
        scripts={"deepseek/r1": [completion_body("forty-two", reasoning="thinking")]},
        catalog=sample_catalog,
    )
    monkeypatch.setattr(cli, "load_config", lambda: sample_app_config)
    monkeypatch.setattr(cli, "_build_gateway", lambda config: gateway)
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)
    return gateway


def test_chat_command(patched_cli):
    result = CliRunner().invoke(cli.main, ["chat", "deepseek/r1", "meaning of life?", "--system", "Be terse."])
    assert result.exit_code == 0, result.output
    assert "forty-two" in result.output
    call = patched_cli.calls[0]
    assert [t.role for t in call["turns"]] == ["system", "user"]


def test_chat_command_error_exits_1(patched_cli):
    patched_cli.scripts["bad/model"] = [status_error(400, "bad/model")]
    result = CliRunner().invoke(cli.main, ["chat", "bad/model", "hi"])
    assert result.exit_code == 1
    assert "HTTP 400" in result.output


def test_compare_command(patched_cli):
    result = CliRunner().invoke(cli.main, ["compare", "hi", "-m", "a/1", "-m", "deepseek/r1", "--max-tokens", "64"])
    assert result.exit_code == 0, result.output
    assert "Comparison of 2 models" in result.output
    assert {c["max_tokens"] for c in patched_cli.calls} == {64}


def test_compare_requires_a_model(patched_cli):
    result = CliRunner().invoke(cli.main, ["compare", "hi"])
    assert result.exit_code != 0


def test_models_command(patched_cli):
    result = CliRunner().invoke(cli.main, ["models"])
    assert result.exit_code == 0, result.output
    assert "openai/gpt-4o" in result.output
    assert "free" in result.output


def test_info_command_not_found(patched_cli):
    result = CliRunner().invoke(cli.main, ["info", "nope/none"])
    assert result.exit_code == 1
    assert "not found" in result.output


def test_config_error_exits(monkeypatch):
    def missing():
        raise FileNotFoundError("Settings file not found: x.yaml")

    monkeypatch.setattr(cli, "load_config", missing)
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)
    result = CliRunner().invoke(cli.main, ["models"])
    assert result.exit_code == 1
    assert "Config error" in result.output
