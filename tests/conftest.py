import json

import matplotlib

matplotlib.use("Agg")

import pytest

from models import Task, Employee
from workload.aggregator import recompute_loads


EMPLOYEE_RECORDS = [
    {"id": "E1", "name": "Ava", "skills": ["Python", "SQL"], "capacityHours": 40, "department": "Engineering"},
    {"id": "E2", "name": "Ben", "skills": ["Python"], "capacityHours": 40, "department": "Engineering"},
    {"id": "E3", "name": "Cleo", "skills": ["SQL", "Design"], "capacityHours": 40, "department": "Product"},
    {"id": "E4", "name": "Dev", "skills": ["Design"], "capacityHours": 20},
]

# Loads: T1 20.8, T2 13.44, T3 9.24, T4 5.28, T5 10.08
TASK_RECORDS = [
    {"id": "T1", "title": "Billing rewrite", "estimatedHours": 10, "complexity": 3, "urgency": 3,
     "requiredSkill": "Python", "assignedTo": "E1", "dueDate": "2026-01-07"},
    {"id": "T2", "title": "Warehouse queries", "estimatedHours": 8, "complexity": 2, "urgency": 2,
     "requiredSkill": "SQL", "assignedTo": "E1", "dueDate": "2026-01-08"},
    {"id": "T3", "title": "Input checks", "estimatedHours": 6, "complexity": 2, "urgency": 1,
     "requiredSkill": "Python", "assignedTo": "E1", "dueDate": "2026-01-15"},
    {"id": "T4", "title": "Unit tests", "estimatedHours": 4, "complexity": 1, "urgency": 1,
     "requiredSkill": "Python", "assignedTo": "E2", "dueDate": "2026-01-20"},
    {"id": "T5", "title": "Style guide", "estimatedHours": 6, "complexity": 2, "urgency": 2,
     "requiredSkill": "Design", "assignedTo": "E3"},
    {"id": "T6", "title": "Storage engine", "estimatedHours": 8, "complexity": 4, "urgency": 3,
     "requiredSkill": "Rust", "assignedTo": None},
    {"id": "T7", "title": "Report export", "estimatedHours": 5, "complexity": 4, "urgency": 2,
     "requiredSkill": "Python", "assignedTo": None},
]


@pytest.fixture
def employee_records():
    return [dict(r) for r in EMPLOYEE_RECORDS]


@pytest.fixture
def task_records():
    return [dict(r) for r in TASK_RECORDS]


@pytest.fixture
def team(employee_records, task_records):
    """Employees and tasks with loads already recomputed."""
    employees = [Employee.from_record(r) for r in employee_records]
    tasks = [Task.from_record(r) for r in task_records]
    recompute_loads(employees, tasks)
    return employees, tasks


@pytest.fixture
def data_dir(tmp_path, employee_records, task_records):
    """Directory holding employees.json and tasks.json."""
    (tmp_path / "employees.json").write_text(json.dumps(employee_records))
    (tmp_path / "tasks.json").write_text(json.dumps(task_records))
    return tmp_path
