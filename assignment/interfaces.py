"""
Interfaces for workload rebalancing models.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, asdict
from typing import List, Dict, Optional, Any

from models import Task, Employee


@dataclass
class EmployeeMove:
    """Before/after load of one side of a task move."""

    id: str
    name: str
    current_utilization: float
    new_utilization: float
    current_hours: float
    new_hours: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "current_utilization": round(self.current_utilization, 2),
            "new_utilization": round(self.new_utilization, 2),
            "current_hours": round(self.current_hours, 2),
            "new_hours": round(self.new_hours, 2),
        }


@dataclass
class Recommendation:
    """A proposed move of one task from an overloaded employee."""

    task_id: str
    task_title: str
    task_load: float
    estimated_hours: float
    complexity: int
    urgency: int
    required_skill: Optional[str]
    source: EmployeeMove
    target: EmployeeMove
    improvement: float
    reasoning: str
    priority: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "task_id": self.task_id,
            "task_title": self.task_title,
            "task_load": round(self.task_load, 2),
            "estimated_hours": self.estimated_hours,
            "complexity": self.complexity,
            "urgency": self.urgency,
            "required_skill": self.required_skill,
            "from": self.source.to_dict(),
            "to": self.target.to_dict(),
            "improvement": round(self.improvement, 2),
            "reasoning": self.reasoning,
            "priority": round(self.priority, 2),
        }


@dataclass
class RecommendationResult:
    """Top recommendations plus statistics about the search."""

    recommendations: List[Recommendation]
    message: str
    overloaded_employees: int
    available_employees: int
    potential_moves: int

    @property
    def top_recommendations(self) -> int:
        return len(self.recommendations)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "recommendations": [r.to_dict() for r in self.recommendations],
            "statistics": {
                "overloaded_employees": self.overloaded_employees,
                "available_employees": self.available_employees,
                "potential_moves": self.potential_moves,
                "top_recommendations": self.top_recommendations,
            },
            "message": self.message,
        }


@dataclass
class SimulationResult:
    """Outcome of a dry-run task reassignment."""

    success: bool
    error: Optional[str] = None
    task: Optional[Dict[str, Any]] = None
    source: Optional[EmployeeMove] = None
    target: Optional[EmployeeMove] = None

    def to_dict(self) -> Dict[str, Any]:
        if not self.success:
            return {"success": False, "error": self.error}
        return {
            "success": True,
            "task": dict(self.task),
            "from": self.source.to_dict(),
            "to": self.target.to_dict(),
        }


class RebalancingModel(ABC):
    """Base interface for workload rebalancing models."""

    @abstractmethod
    def recommend(
        self, employees: List[Employee], tasks: List[Task]
    ) -> RecommendationResult:
        """
        Propose task moves that relieve overloaded employees.

        Args:
            employees: Employees with recomputed loads
            tasks: All tasks, assigned or not

        Returns:
            RecommendationResult: Ranked recommendations and statistics
        """
        pass

    @abstractmethod
    def simulate(
        self,
        employees: List[Employee],
        tasks: List[Task],
        task_id: str,
        from_employee_id: str,
        to_employee_id: str,
    ) -> SimulationResult:
        """
        Preview the effect of moving one task without changing any state.

        Returns:
            SimulationResult: Failure with a message, or before/after loads
        """
        pass
