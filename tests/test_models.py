from datetime import date

import pytest

from models import (
    Task,
    Employee,
    CRITICAL,
    OVERLOADED,
    OPTIMAL,
    UNDERUTILIZED,
    AVAILABLE,
    state_for_utilization,
    utilization_for,
)


@pytest.mark.parametrize(
    "utilization, expected",
    [
        (0, AVAILABLE),
        (49.99, AVAILABLE),
        (50.0, UNDERUTILIZED),
        (69.99, UNDERUTILIZED),
        (70.0, OPTIMAL),
        (84.99, OPTIMAL),
        (85.0, OVERLOADED),
        (95.0, OVERLOADED),
        (95.01, CRITICAL),
        (150, CRITICAL),
    ],
)
def test_state_boundaries(utilization, expected):
    assert state_for_utilization(utilization) == expected


def test_utilization_with_zero_capacity_is_zero():
    assert utilization_for(10, 0) == 0
    emp = Employee(id="E1", name="A", capacity_hours=0, current_hours=12)
    assert emp.utilization() == 0
    assert emp.workload_state() == AVAILABLE


def test_task_load_formula():
    task = Task(id="T1", title="t", required_skill="Python", estimated_hours=10, complexity=3, urgency=3)
    assert task.calculate_load() == pytest.approx(20.8)


def test_task_load_grows_with_complexity_and_urgency():
    loads = [
        Task(id="T", title="t", required_skill="x", estimated_hours=5, complexity=c, urgency=u).calculate_load()
        for c in range(1, 6)
        for u in (1, 2, 3)
    ]
    by_complexity = [
        Task(id="T", title="t", required_skill="x", estimated_hours=5, complexity=c, urgency=2).calculate_load()
        for c in range(1, 6)
    ]
    by_urgency = [
        Task(id="T", title="t", required_skill="x", estimated_hours=5, complexity=2, urgency=u).calculate_load()
        for u in (1, 2, 3)
    ]
    assert by_complexity == sorted(by_complexity)
    assert len(set(by_complexity)) == 5
    assert by_urgency == sorted(by_urgency)
    assert all(load >= 5 for load in loads)


def test_labels():
    task = Task(id="T1", title="t", required_skill="x", complexity=5, urgency=2)
    assert task.complexity_label() == "Very High"
    assert task.urgency_label() == "Medium"

    task.complexity = 9
    task.urgency = 0
    assert task.complexity_label() == "Unknown"
    assert task.urgency_label() == "Unknown"


def test_task_from_record_defaults():
    task = Task.from_record({"id": "T9", "title": "Bare", "requiredSkill": "SQL"})
    assert task.estimated_hours == 0
    assert task.complexity == 1
    assert task.urgency == 1
    assert task.assigned_to is None
    assert task.due_date is None


def test_task_from_record_parses_due_date():
    task = Task.from_record({"id": "T9", "title": "Dated", "dueDate": "2026-03-04T10:00:00Z"})
    assert task.due_date == date(2026, 3, 4)


def test_task_from_record_ignores_unreadable_due_date():
    task = Task.from_record({"id": "T9", "title": "Vague", "dueDate": "next week"})
    assert task.due_date is None


def test_labels_accept_integral_floats():
    task = Task.from_record({"id": "T9", "title": "Float", "complexity": 3.0, "urgency": 2.0})
    assert task.complexity_label() == "Medium"
    assert task.urgency_label() == "Medium"

    task.complexity = 2.5
    task.urgency = True
    assert task.complexity_label() == "Unknown"
    assert task.urgency_label() == "Unknown"


def test_employee_from_record_defaults_and_ignores_current_hours():
    emp = Employee.from_record({"id": "E9", "name": "New", "capacityHours": 0, "currentHours": 30})
    assert emp.capacity_hours == 40
    assert emp.current_hours == 0
    assert emp.skills == []
    assert emp.department is None


def test_assignment_mutators():
    task = Task(id="T1", title="t", required_skill="x")
    task.assign_to("E2")
    assert task.assigned_to == "E2"
    task.unassign()
    assert task.assigned_to is None


def test_workload_mutators_floor_at_zero():
    emp = Employee(id="E1", name="A")
    emp.add_workload(10)
    emp.remove_workload(25)
    assert emp.current_hours == 0


def test_has_skill_is_case_sensitive():
    emp = Employee(id="E1", name="A", skills=["Python"])
    assert emp.has_skill("Python")
    assert not emp.has_skill("python")
