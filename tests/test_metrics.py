import pytest

from models import Employee
from analysis.metrics import compute_workload_metrics, workload_statistics, compare_metrics


def test_workload_metrics(team):
    employees, tasks = team
    metrics = compute_workload_metrics(employees, tasks)

    assert metrics["peak_utilization"] == pytest.approx(108.7)
    assert metrics["task_coverage"] == pytest.approx(5 / 7 * 100)
    assert metrics["resource_utilization"] == pytest.approx(58.84 / 140 * 100)
    assert metrics["workload_balance_ratio"] > 1


def test_perfectly_balanced_team():
    employees = [Employee(id=f"E{i}", name="x", current_hours=30) for i in range(3)]
    assert compute_workload_metrics(employees, [])["workload_balance_ratio"] == 0


def test_empty_team_metrics():
    metrics = compute_workload_metrics([], [])
    assert metrics == {
        "workload_balance_ratio": 0.0,
        "resource_utilization": 0.0,
        "task_coverage": 0.0,
        "peak_utilization": 0.0,
    }


def test_statistics(team):
    employees, tasks = team
    stats = workload_statistics(employees, tasks)

    assert stats["total_employees"] == 4
    assert stats["total_tasks"] == 7
    assert stats["average_utilization"] == pytest.approx(36.78, abs=0.01)
    assert stats["workload_distribution"] == {
        "critical": 1,
        "overloaded": 0,
        "optimal": 0,
        "underutilized": 0,
        "available": 3,
    }
    assert stats["imbalances_summary"]["overloaded_count"] == 1


def test_statistics_empty():
    assert workload_statistics([], [])["average_utilization"] == 0.0


def test_compare_metrics_direction():
    before = {"workload_balance_ratio": 0.8, "peak_utilization": 110, "task_coverage": 50}
    after = {"workload_balance_ratio": 0.5, "peak_utilization": 90, "task_coverage": 50}
    comparison = compare_metrics(before, after)

    assert comparison["workload_balance_ratio"]["improved"] is True
    assert comparison["workload_balance_ratio"]["delta"] == pytest.approx(-0.3)
    assert comparison["peak_utilization"]["improved"] is True
    assert comparison["task_coverage"]["improved"] is False
