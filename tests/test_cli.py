"""Tests for the command line entry point."""

import json

import openpyxl
import pytest
import typer
from typer.testing import CliRunner

from limo_rates.__main__ import generate

app = typer.Typer()
app.command()(generate)

runner = CliRunner()


class TestCli:
    def test_prints_confirmation(self):
        result = runner.invoke(app, ["--hours", "3", "--confirmation", "RES-42"])
        assert result.exit_code == 0, result.output
        assert "Reservation Summary #RES-42" in result.output
        assert "$615.83" in result.output

    def test_edits_and_outputs(self, tmp_path):
        out = tmp_path / "breakdown.json"
        audit = tmp_path / "audit.json"
        xlsx = tmp_path / "invoice.xlsx"
        result = runner.invoke(app, [
            "--hours", "3",
            "--set", "deposit=200",
            "--set", "stdGratLabel=Driver Gratuity",
            "--out", str(out),
            "--audit-out", str(audit),
            "--xlsx", str(xlsx),
        ])
        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["totalDue"] == pytest.approx(415.825)
        assert data["stdGratLabel"] == "Driver Gratuity"
        assert json.loads(audit.read_text(encoding="utf-8"))["summary"]["deposit"] == 200.0
        assert openpyxl.load_workbook(str(xlsx)).active.title == "Invoice"

    def test_existing_breakdown(self, tmp_path):
        saved = tmp_path / "saved.json"
        runner.invoke(app, ["--hours", "4", "--out", str(saved)])
        out = tmp_path / "edited.json"
        result = runner.invoke(app, [
            "--existing", str(saved),
            "--hours", "9",
            "--set", "extraStopCount=1",
            "--out", str(out),
        ])
        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["hourlyHours"] == 4.0
        assert data["extraStopsTotal"] == 50.0

    def test_inputs_file(self, tmp_path):
        inputs = tmp_path / "inputs.json"
        inputs.write_text(json.dumps({"hourlyRate": 200, "sanitizingFee": 0}), encoding="utf-8")
        out = tmp_path / "breakdown.json"
        result = runner.invoke(app, ["--hours", "2", "--inputs", str(inputs), "--out", str(out)])
        assert result.exit_code == 0, result.output
        assert json.loads(out.read_text(encoding="utf-8"))["primarySubtotal"] == 400.0

    def test_strict_failure(self, tmp_path):
        out = tmp_path / "breakdown.json"
        result = runner.invoke(app, [
            "--hours", "3", "--set", "stdTaxPercent=120", "--strict", "--out", str(out),
        ])
        assert result.exit_code == 1
        assert "STRICT VALIDATION FAILED" in result.output
        assert not out.exists()

    def test_large_flat_rate(self):
        result = runner.invoke(app, ["--set", "flatRate=1e30"])
        assert result.exit_code == 0, result.output
        assert "FATAL ERROR" not in result.output
        assert "$1,000,000,000,000,000,000,000,000,000,000.00" in result.output

    def test_unknown_field(self):
        result = runner.invoke(app, ["--set", "tipJar=5"])
        assert result.exit_code == 1
        assert "UNKNOWN FIELD: tipJar" in result.output

    def test_malformed_assignment(self):
        result = runner.invoke(app, ["--set", "deposit"])
        assert result.exit_code == 2
