"""Tests for the flag report script."""

import json
import sys

import pytest

from flag_report import build_report, main
from labtrend.repositories.measurements import MeasurementStore
from tests.conftest import make_measurement


class TestBuildReport:
    def test_lists_parameters_in_selector_order(self, store):
        lines = build_report(store)
        names = [line.split("\t")[0] for line in lines]
        assert names[0] == "Filtrado Glomerular ⬇️"
        assert "Leucocitos" in names
        assert len(lines) == len(store.parameter_names())

    def test_only_flagged(self, store):
        lines = build_report(store, only_flagged=True)
        assert all("\tnormal\t" not in line for line in lines)
        assert any(line.startswith("Glucosa ⬆️") for line in lines)

    def test_chart_reference_is_first_measurement(self):
        store = MeasurementStore({"X": [
            make_measurement("2025-02-01", 5, "[4-8]"),
            make_measurement("2025-01-01", 5, "3,5-6"),
        ]})
        (line,) = build_report(store)
        assert line.endswith("chart_ref=[3.5-6]")
        assert "latest=5 g/dL (2025-02-01)" in line


class TestMain:
    def test_missing_file_exits(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["flag_report.py", "--data", str(tmp_path / "nope.json")])
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 1
        assert "Data file not found" in capsys.readouterr().out

    def test_prints_report(self, tmp_path, monkeypatch, capsys):
        path = tmp_path / "data.json"
        path.write_text(json.dumps({
            "PCR": [{"date": "2025-01-01", "value": 7, "unit": "mg/L", "refRange": "< 5"}],
        }), encoding="utf-8")
        monkeypatch.setattr(sys, "argv", ["flag_report.py", "--data", str(path)])
        main()
        out = capsys.readouterr().out
        assert out.startswith("PCR ⬆️\thigh\tlatest=7 mg/L (2025-01-01)\tchart_ref=< 5")
