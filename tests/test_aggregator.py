import pytest

from models import Task, Employee
from workload.aggregator import (
    recompute_loads,
    summarize,
    task_details,
    employee_by_id,
    task_by_id,
    tasks_for_employee,
    employee_detail,
)


def test_recompute_matches_sum_of_assigned_loads(team):
    employees, tasks = team
    for emp in employees:
        expected = sum(t.calculate_load() for t in tasks if t.assigned_to == emp.id)
        assert emp.current_hours == pytest.approx(expected)


def test_recompute_is_idempotent(team):
    employees, tasks = team
    before = [e.current_hours for e in employees]
    recompute_loads(employees, tasks)
    assert [e.current_hours for e in employees] == pytest.approx(before)


def test_recompute_skips_unknown_assignee():
    employees = [Employee(id="E1", name="A", current_hours=99)]
    tasks = [
        Task(id="T1", title="t", required_skill="x", estimated_hours=10, assigned_to="E404"),
        Task(id="T2", title="t", required_skill="x", estimated_hours=10),
    ]
    recompute_loads(employees, tasks)
    assert employees[0].current_hours == 0


def test_summary_rows(team):
    employees, tasks = team
    rows = {r.id: r for r in summarize(employees, tasks)}

    assert rows["E1"].current_hours == 43.48
    assert rows["E1"].utilization == 108.7
    assert rows["E1"].workload_state == "Critical"
    assert rows["E1"].assigned_tasks == 3
    assert rows["E4"].assigned_tasks == 0
    assert [r.id for r in summarize(employees, tasks)] == ["E1", "E2", "E3", "E4"]


def test_task_details(team):
    employees, tasks = team
    details = {d.id: d.to_dict() for d in task_details(tasks, employees)}

    assert details["T1"]["calculated_load"] == 20.8
    assert details["T1"]["assigned_to_name"] == "Ava"
    assert details["T1"]["complexity_label"] == "Medium"
    assert details["T1"]["due_date"] == "2026-01-07"
    assert details["T6"]["assigned_to_name"] is None
    assert details["T5"]["due_date"] is None


def test_lookups(team):
    employees, tasks = team
    assert employee_by_id(employees, "E2").name == "Ben"
    assert employee_by_id(employees, "E404") is None
    assert task_by_id(tasks, "T3").title == "Input checks"
    assert task_by_id(tasks, None) is None


def test_tasks_for_employee(team):
    _, tasks = team
    assert [t.id for t in tasks_for_employee(tasks, "E1")] == ["T1", "T2", "T3"]
    assert tasks_for_employee(tasks, "E404") == []
    assert tasks_for_employee(tasks, "") == []


def test_employee_detail(team):
    employees, tasks = team
    detail = employee_detail(employee_by_id(employees, "E3"), tasks).to_dict()

    assert detail["department"] == "Product"
    assert detail["utilization"] == 25.2
    assert detail["tasks"] == [
        {
            "id": "T5",
            "title": "Style guide",
            "estimated_hours": 6,
            "complexity": 2,
            "urgency": 2,
            "required_skill": "Design",
            "calculated_load": 10.08,
        }
    ]
