"""
Core data models for the workload balancing system.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Dict, Any


CRITICAL = "Critical"
OVERLOADED = "Overloaded"
OPTIMAL = "Optimal"
UNDERUTILIZED = "Underutilized"
AVAILABLE = "Available"

WORKLOAD_STATES = [CRITICAL, OVERLOADED, OPTIMAL, UNDERUTILIZED, AVAILABLE]

COMPLEXITY_LABELS = ["", "Very Low", "Low", "Medium", "High", "Very High"]
URGENCY_LABELS = ["", "Low", "Medium", "High"]

DEFAULT_CAPACITY_HOURS = 40


def utilization_for(hours: float, capacity_hours: float) -> float:
    """Percentage of capacity consumed by the given hours."""
    return (hours / capacity_hours) * 100 if capacity_hours > 0 else 0


def state_for_utilization(utilization: float) -> str:
    """
    Map a utilization percentage to a workload state.

    The checks run from the top band down, so 85.0 is Overloaded while
    95.0 is still Overloaded and only values above 95 are Critical.
    """
    if utilization > 95:
        return CRITICAL
    if utilization >= 85:
        return OVERLOADED
    if utilization >= 70:
        return OPTIMAL
    if utilization >= 50:
        return UNDERUTILIZED
    return AVAILABLE


def _label(labels: List[str], index: Any) -> str:
    # Integral floats such as 3.0 from JSON index the table like 3
    if isinstance(index, (int, float)) and not isinstance(index, bool) and float(index).is_integer():
        if 0 < index < len(labels):
            return labels[int(index)]
    return "Unknown"


def parse_date(value: Any) -> Optional[date]:
    """Calendar day of an ISO date or timestamp; None when absent or unparseable."""
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


@dataclass
class Task:
    """Task model representing a unit of work with an effort estimate."""

    id: str
    title: str
    required_skill: Optional[str]
    estimated_hours: float = 0
    complexity: int = 1
    urgency: int = 1
    assigned_to: Optional[str] = None
    due_date: Optional[date] = None

    @classmethod
    def from_record(cls, data: Dict[str, Any]) -> "Task":
        """Build a task from a flat data-file record, applying defaults."""
        return cls(
            id=data.get("id"),
            title=data.get("title"),
            required_skill=data.get("requiredSkill"),
            estimated_hours=data.get("estimatedHours") or 0,
            complexity=data.get("complexity") or 1,
            urgency=data.get("urgency") or 1,
            assigned_to=data.get("assignedTo") or None,
            due_date=parse_date(data.get("dueDate")),
        )

    def __repr__(self) -> str:
        return (
            f"Task({self.id}, title={self.title}, skill={self.required_skill}, "
            f"hours={self.estimated_hours}, complexity={self.complexity}, "
            f"urgency={self.urgency}, assigned_to={self.assigned_to})"
        )

    def calculate_load(self) -> float:
        """
        Effective hour cost of the task.

        load = estimated_hours * (1 + complexity * 0.2) * (1 + urgency * 0.1)
        """
        return (
            self.estimated_hours
            * (1 + self.complexity * 0.2)
            * (1 + self.urgency * 0.1)
        )

    def complexity_label(self) -> str:
        return _label(COMPLEXITY_LABELS, self.complexity)

    def urgency_label(self) -> str:
        return _label(URGENCY_LABELS, self.urgency)

    def assign_to(self, employee_id: str) -> None:
        self.assigned_to = employee_id

    def unassign(self) -> None:
        self.assigned_to = None


@dataclass
class Employee:
    """Employee model representing a resource with skills and weekly capacity."""

    id: str
    name: str
    skills: List[str] = field(default_factory=list)
    capacity_hours: float = DEFAULT_CAPACITY_HOURS
    current_hours: float = 0
    department: Optional[str] = None

    def __post_init__(self):
        """Initialize default values for collections if None."""
        if self.skills is None:
            self.skills = []
        if self.current_hours is None:
            self.current_hours = 0

    @classmethod
    def from_record(cls, data: Dict[str, Any]) -> "Employee":
        """
        Build an employee from a flat data-file record.

        current_hours is never read from the record; it is always rebuilt
        from task assignments.
        """
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            skills=list(data.get("skills") or []),
            capacity_hours=data.get("capacityHours") or DEFAULT_CAPACITY_HOURS,
            department=data.get("department") or None,
        )

    def __repr__(self) -> str:
        return (
            f"Employee({self.id}, name={self.name}, skills={self.skills}, "
            f"capacity={self.capacity_hours}, current={self.current_hours:.2f})"
        )

    def utilization(self) -> float:
        """Utilization percentage (0 when capacity is not positive)."""
        return utilization_for(self.current_hours, self.capacity_hours)

    def workload_state(self) -> str:
        return state_for_utilization(self.utilization())

    def has_skill(self, skill: str) -> bool:
        """Exact, case-sensitive skill check."""
        return skill in self.skills

    def add_workload(self, hours: float) -> None:
        self.current_hours += hours

    def remove_workload(self, hours: float) -> None:
        self.current_hours = max(0, self.current_hours - hours)
