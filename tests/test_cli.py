"""Tests for CLI."""

import io

import orjson
import pytest
from structlog.testing import capture_logs

from whatif import cli

REQUEST = {
    "baseline": {
        "federalTax": "13614.00",
        "stateTax": "3740.00",
        "totalTax": "17354.00",
        "taxableIncome": "85000.00",
    },
    "filingStatus": "SINGLE",
    "state": "CO",
    "taxableIncomeDelta": {"low": "0", "base": "0", "high": "0"},
    "qualifyingChildrenUnder17": 2,
    "sessionId": "sess-42",
}


@pytest.fixture
def logging_calls(monkeypatch) -> list[bool]:
    """Replace configure_logging with a recorder."""
    calls: list[bool] = []
    monkeypatch.setattr(cli, "configure_logging", lambda: calls.append(True))
    return calls


@pytest.fixture
def request_file(tmp_path):
    path = tmp_path / "request.json"
    path.write_bytes(orjson.dumps(REQUEST))
    return path


class TestCLI:
    """Tests for command-line interface."""

    def test_recompute_to_stdout(self, request_file, logging_calls, capsys) -> None:
        """recompute prints the result as JSON with exact cents."""
        with capture_logs():
            cli.main(["recompute", str(request_file)])

        result = orjson.loads(capsys.readouterr().out)
        assert logging_calls == [True]
        assert result["revised"]["federal_tax"] == "9614.00"
        assert result["total_tax_delta"] == {
            "low": "4000.00",
            "base": "4000.00",
            "high": "4000.00",
        }
        assert result["baseline_agi"]["source"] == "taxable_income_plus_standard_deduction"

    def test_recompute_to_file(self, request_file, logging_calls, tmp_path) -> None:
        """recompute can write to a file."""
        output_file = tmp_path / "result.json"
        with capture_logs() as logs:
            cli.main(["recompute", str(request_file), "-o", str(output_file)])

        result = orjson.loads(output_file.read_bytes())
        assert result["revised"]["total_tax"] == "13354.00"
        assert any(log["event"] == "scenario_written" for log in logs)

    def test_recompute_from_stdin(self, logging_calls, monkeypatch, capsys) -> None:
        """Without an input path the request is read from stdin."""
        stdin = io.TextIOWrapper(io.BytesIO(orjson.dumps(REQUEST)))
        monkeypatch.setattr("sys.stdin", stdin)
        with capture_logs():
            cli.main(["recompute"])

        assert orjson.loads(capsys.readouterr().out)["revised"]["state_tax"] == "3740.00"

    def test_missing_input_file(self, logging_calls, tmp_path, capsys) -> None:
        """A missing input file exits 1."""
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["recompute", str(tmp_path / "missing.json")])
        assert excinfo.value.code == 1
        assert "not found" in capsys.readouterr().err

    def test_invalid_request(self, logging_calls, tmp_path, capsys) -> None:
        """A request failing validation exits 2."""
        path = tmp_path / "bad.json"
        path.write_bytes(orjson.dumps({**REQUEST, "unexpected": 1}))
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["recompute", str(path)])
        assert excinfo.value.code == 2
        assert "invalid request" in capsys.readouterr().err

    def test_unsupported_tax_year(self, request_file, logging_calls, capsys) -> None:
        """Engine errors exit 1 with the message on stderr."""
        with capture_logs(), pytest.raises(SystemExit) as excinfo:
            cli.main(["recompute", str(request_file), "--tax-year", "2019"])
        assert excinfo.value.code == 1
        assert "Available years" in capsys.readouterr().err

    def test_no_command_shows_help(self, logging_calls, capsys) -> None:
        """No command shows help and exits 1."""
        with pytest.raises(SystemExit) as excinfo:
            cli.main([])
        assert excinfo.value.code == 1
        assert "recompute" in capsys.readouterr().out
        assert logging_calls == []
