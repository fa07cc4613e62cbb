"""Tests for mcpeval.cli — argument parsing and exit codes"""

from unittest.mock import AsyncMock, patch

import pytest

from mcpeval.app import RunResult
from mcpeval.cli import build_parser, main
from mcpeval.errors import SuiteValidationError, TransportConnectionError
from mcpeval.report import ResultAggregator
from mcpeval.runner import PassedOutcome


def _result():
    return RunResult(
        aggregator=ResultAggregator([PassedOutcome(name="a")]),
        server_name="issues",
        model_id="anthropic/claude-3.7-sonnet",
    )


# ── Parsing ──


class TestParser:

    def test_run_arguments(self):
        args = build_parser().parse_args([
            "run", "tests.yml",
            "--url", "https://mcp.example.com",
            "--header", "Authorization: Bearer t",
            "--header", "X-Team: qa",
            "--concurrency", "3",
            "--timeout", "45",
        ])
        assert args.command == "run"
        assert args.tests == "tests.yml"
        assert args.assistant == "anthropic/claude"
        assert args.header == ["Authorization: Bearer t", "X-Team: qa"]
        assert args.concurrency == 3
        assert args.timeout == 45.0

    def test_url_required(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["run", "tests.yml"])
        assert exc_info.value.code == 2

    def test_unknown_assistant_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["run", "t.yml", "--url", "u", "--assistant", "acme/bot"])

    def test_bad_concurrency_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["run", "t.yml", "--url", "u", "--concurrency", "0"])


# ── Exit codes ──


class TestMain:

    def test_completed_run_exits_zero(self, capsys, monkeypatch):
        monkeypatch.setenv("OPENROUTER_API_KEY", "sk-or-env")
        with patch("mcpeval.app.run_suite", new=AsyncMock(return_value=_result())) as run_suite:
            code = main(["run", "tests.yml", "--url", "https://mcp.example.com", "--header", "X-Key: 1"])

        assert code == 0
        assert "Accuracy: 100%" in capsys.readouterr().out
        kwargs = run_suite.call_args.kwargs
        assert kwargs["headers"] == {"X-Key": "1"}
        assert kwargs["settings"].api_key == "sk-or-env"

    def test_flags_override_environment(self, monkeypatch):
        monkeypatch.setenv("OPENROUTER_API_KEY", "sk-or-env")
        monkeypatch.setenv("MCP_EVAL_TIMEOUT", "99")
        with patch("mcpeval.app.run_suite", new=AsyncMock(return_value=_result())) as run_suite:
            main([
                "run", "tests.yml", "--url", "u",
                "--api-key", "sk-or-flag", "--timeout", "5", "--output", "out.json",
            ])

        settings = run_suite.call_args.kwargs["settings"]
        assert settings.api_key == "sk-or-flag"
        assert settings.test_timeout == 5.0
        assert settings.results_path == "out.json"

    def test_validation_error_exits_one(self, caplog):
        error = SuiteValidationError(["test_cases: Field required"])
        with patch("mcpeval.app.run_suite", new=AsyncMock(side_effect=error)):
            code = main(["run", "tests.yml", "--url", "u"])
        assert code == 1
        assert "test_cases: Field required" in caplog.text

    def test_connection_error_exits_one(self):
        with patch("mcpeval.app.run_suite", new=AsyncMock(side_effect=TransportConnectionError([]))):
            assert main(["run", "tests.yml", "--url", "u"]) == 1

    def test_malformed_header_exits_one(self):
        with patch("mcpeval.app.run_suite", new=AsyncMock(return_value=_result())) as run_suite:
            assert main(["run", "tests.yml", "--url", "u", "--header", "no-colon"]) == 1
        run_suite.assert_not_called()
