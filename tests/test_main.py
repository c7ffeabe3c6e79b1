import json

import pytest

from main import main, build_parser, load_config


def _run(data_dir, tmp_path, *args):
    out = tmp_path / "out.json"
    code = main(["--data-dir", str(data_dir), "--output", str(out), *args])
    return code, json.loads(out.read_text())


def test_summary_command(data_dir, tmp_path):
    code, payload = _run(data_dir, tmp_path, "summary")
    assert code == 0
    assert payload["success"] is True
    assert payload["data"][0]["id"] == "E1"


def test_employee_not_found_exit_code(data_dir, tmp_path):
    code, payload = _run(data_dir, tmp_path, "employee", "E404")
    assert code == 1
    assert payload == {"success": False, "error": "Employee not found"}


def test_simulate_command(data_dir, tmp_path):
    code, payload = _run(data_dir, tmp_path, "simulate", "--task", "T1", "--from", "E1", "--to", "E2")
    assert code == 0
    assert payload["data"]["to"]["new_utilization"] == 65.2


def test_forecast_with_fixed_date(data_dir, tmp_path):
    code, payload = _run(data_dir, tmp_path, "forecast", "--today", "2026-01-05")
    assert code == 0
    assert payload["summary"]["bottlenecks_detected"] == 2


def test_missing_data_exit_code(tmp_path):
    code, payload = _run(tmp_path / "nowhere", tmp_path, "stats")
    assert code == 1
    assert payload == {"success": False, "error": "Failed to load data"}


def test_generate_then_summarize(tmp_path):
    target = tmp_path / "generated"
    code, payload = _run(target, tmp_path, "generate", "--employees", "5", "--tasks", "12", "--seed", "2")
    assert code == 0
    assert payload["employees"].endswith("employees.json")

    code, payload = _run(target, tmp_path, "summary")
    assert code == 0
    assert len(payload["data"]) == 5


def test_export_command(data_dir, tmp_path):
    excel = tmp_path / "report" / "workload.xlsx"
    plots = tmp_path / "plots"
    code, payload = _run(data_dir, tmp_path, "export", "--excel", str(excel), "--plots-dir", str(plots))

    assert code == 0
    assert payload["success"] is True
    assert excel.exists()
    assert (plots / "utilization.png").exists()
    assert (plots / "forecast_heatmap.png").exists()


def test_parser_rejects_bad_date():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["forecast", "--today", "not-a-date"])


def test_load_config_falls_back_to_defaults(tmp_path):
    bad = tmp_path / "config.json"
    bad.write_text("{broken")
    assert load_config(str(bad)).recommendation.max_recommendations == 10

    good = tmp_path / "good.json"
    good.write_text(json.dumps({"REC_MAX_RECOMMENDATIONS": 2}))
    assert load_config(str(good)).recommendation.max_recommendations == 2
