"""
Imbalance classification of employees into load bands.
"""
from dataclasses import dataclass, field
from typing import List, Dict, Any

from models import Employee, CRITICAL, OVERLOADED, UNDERUTILIZED, AVAILABLE


@dataclass
class EmployeeSnapshot:
    """Point-in-time view of an employee's load, kept unrounded."""

    id: str
    name: str
    utilization: float
    current_hours: float
    capacity_hours: float
    workload_state: str
    skills: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "utilization": round(self.utilization, 2),
            "current_hours": round(self.current_hours, 2),
            "capacity_hours": self.capacity_hours,
            "workload_state": self.workload_state,
            "skills": list(self.skills),
        }


@dataclass
class ImbalanceReport:
    """Employees bucketed by load band; Optimal employees are in no bucket."""

    overloaded: List[EmployeeSnapshot] = field(default_factory=list)
    underutilized: List[EmployeeSnapshot] = field(default_factory=list)
    available: List[EmployeeSnapshot] = field(default_factory=list)
    total_employees: int = 0

    @property
    def targets(self) -> List[EmployeeSnapshot]:
        """Employees that can take on more work, Available first."""
        return self.available + self.underutilized

    def summary(self) -> Dict[str, int]:
        return {
            "total_employees": self.total_employees,
            "overloaded_count": len(self.overloaded),
            "underutilized_count": len(self.underutilized),
            "available_count": len(self.available),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overloaded": [s.to_dict() for s in self.overloaded],
            "underutilized": [s.to_dict() for s in self.underutilized],
            "available": [s.to_dict() for s in self.available],
            "summary": self.summary(),
        }


def snapshot(employee: Employee) -> EmployeeSnapshot:
    return EmployeeSnapshot(
        id=employee.id,
        name=employee.name,
        utilization=employee.utilization(),
        current_hours=employee.current_hours,
        capacity_hours=employee.capacity_hours,
        workload_state=employee.workload_state(),
        skills=list(employee.skills),
    )


def classify(employees: List[Employee]) -> ImbalanceReport:
    """
    Partition employees into overloaded, underutilized and available bands.

    Critical and Overloaded employees are both reported as overloaded,
    sorted by utilization descending. The other two bands are sorted
    ascending so the least loaded employee comes first.

    Args:
        employees: Employees with recomputed loads

    Returns:
        ImbalanceReport: Bucketed snapshots and counts
    """
    report = ImbalanceReport(total_employees=len(employees))

    for emp in employees:
        snap = snapshot(emp)
        if snap.workload_state in (CRITICAL, OVERLOADED):
            report.overloaded.append(snap)
        elif snap.workload_state == UNDERUTILIZED:
            report.underutilized.append(snap)
        elif snap.workload_state == AVAILABLE:
            report.available.append(snap)

    report.overloaded.sort(key=lambda s: -s.utilization)
    report.underutilized.sort(key=lambda s: s.utilization)
    report.available.sort(key=lambda s: s.utilization)

    return report
