"""
Workload aggregation: current loads, summaries and per-entity detail views.
"""
from dataclasses import dataclass, field, asdict
from datetime import date
from typing import List, Dict, Optional, Any

from models import Task, Employee
from utils.logger import logger


@dataclass
class EmployeeSummary:
    """Workload summary row for one employee."""

    id: str
    name: str
    skills: List[str]
    capacity_hours: float
    current_hours: float
    utilization: float
    workload_state: str
    assigned_tasks: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class TaskDetail:
    """Task row enriched with labels, assignee name and load."""

    id: str
    title: str
    estimated_hours: float
    complexity: int
    complexity_label: str
    urgency: int
    urgency_label: str
    required_skill: Optional[str]
    assigned_to: Optional[str]
    assigned_to_name: Optional[str]
    calculated_load: float
    due_date: Optional[date] = None

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result["due_date"] = self.due_date.isoformat() if self.due_date else None
        return result


@dataclass
class EmployeeTask:
    """Task as listed under its assignee."""

    id: str
    title: str
    estimated_hours: float
    complexity: int
    urgency: int
    required_skill: Optional[str]
    calculated_load: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class EmployeeDetail:
    """Single-employee view with the tasks currently assigned to it."""

    id: str
    name: str
    skills: List[str]
    capacity_hours: float
    current_hours: float
    utilization: float
    workload_state: str
    department: Optional[str]
    tasks: List[EmployeeTask] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result["tasks"] = [t.to_dict() for t in self.tasks]
        return result


def recompute_loads(employees: List[Employee], tasks: List[Task]) -> None:
    """
    Rebuild every employee's current hours from task assignments.

    All employees are reset to zero first, so the result never depends on
    earlier state. Tasks pointing at an unknown employee are skipped.

    Args:
        employees: Employees whose hours are rebuilt in place
        tasks: Tasks providing the assignments
    """
    emp_map: Dict[str, Employee] = {}
    for emp in employees:
        emp.current_hours = 0
        # First occurrence wins for duplicated ids, like a linear search
        emp_map.setdefault(emp.id, emp)

    for task in tasks:
        if not task.assigned_to:
            continue

        employee = emp_map.get(task.assigned_to)
        if employee is None:
            logger.debug(
                f"Task {task.id} is assigned to unknown employee {task.assigned_to}; "
                f"its load is ignored."
            )
            continue

        employee.add_workload(task.calculate_load())


def summarize(employees: List[Employee], tasks: List[Task]) -> List[EmployeeSummary]:
    """
    Build the workload summary for all employees.

    Args:
        employees: Employees with recomputed loads
        tasks: Tasks used to count assignments

    Returns:
        List[EmployeeSummary]: One row per employee, in input order
    """
    task_counts: Dict[str, int] = {}
    for task in tasks:
        if task.assigned_to:
            task_counts[task.assigned_to] = task_counts.get(task.assigned_to, 0) + 1

    return [
        EmployeeSummary(
            id=emp.id,
            name=emp.name,
            skills=list(emp.skills),
            capacity_hours=emp.capacity_hours,
            current_hours=round(emp.current_hours, 2),
            utilization=round(emp.utilization(), 2),
            workload_state=emp.workload_state(),
            assigned_tasks=task_counts.get(emp.id, 0),
        )
        for emp in employees
    ]


def task_details(tasks: List[Task], employees: List[Employee]) -> List[TaskDetail]:
    """Describe every task with labels, assignee name and rounded load."""
    details = []
    for task in tasks:
        assignee = employee_by_id(employees, task.assigned_to) if task.assigned_to else None
        details.append(
            TaskDetail(
                id=task.id,
                title=task.title,
                estimated_hours=task.estimated_hours,
                complexity=task.complexity,
                complexity_label=task.complexity_label(),
                urgency=task.urgency,
                urgency_label=task.urgency_label(),
                required_skill=task.required_skill,
                assigned_to=task.assigned_to,
                assigned_to_name=assignee.name if assignee else None,
                calculated_load=round(task.calculate_load(), 2),
                due_date=task.due_date,
            )
        )
    return details


def employee_by_id(employees: List[Employee], employee_id: Optional[str]) -> Optional[Employee]:
    """Find an employee by id, or None."""
    return next((emp for emp in employees if emp.id == employee_id), None)


def task_by_id(tasks: List[Task], task_id: Optional[str]) -> Optional[Task]:
    """Find a task by id, or None."""
    return next((t for t in tasks if t.id == task_id), None)


def tasks_for_employee(tasks: List[Task], employee_id: Optional[str]) -> List[EmployeeTask]:
    """
    List the tasks assigned to an employee.

    Unknown or empty ids simply yield an empty list.
    """
    if not employee_id:
        return []

    return [
        EmployeeTask(
            id=t.id,
            title=t.title,
            estimated_hours=t.estimated_hours,
            complexity=t.complexity,
            urgency=t.urgency,
            required_skill=t.required_skill,
            calculated_load=round(t.calculate_load(), 2),
        )
        for t in tasks
        if t.assigned_to == employee_id
    ]


def employee_detail(employee: Employee, tasks: List[Task]) -> EmployeeDetail:
    return EmployeeDetail(
        id=employee.id,
        name=employee.name,
        skills=list(employee.skills),
        capacity_hours=employee.capacity_hours,
        current_hours=round(employee.current_hours, 2),
        utilization=round(employee.utilization(), 2),
        workload_state=employee.workload_state(),
        department=employee.department,
        tasks=tasks_for_employee(tasks, employee.id),
    )
