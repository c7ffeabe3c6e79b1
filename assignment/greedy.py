"""
Greedy single-task-move rebalancing.
"""
from typing import List, Optional

from models import Task, Employee, utilization_for
from config import RecommendationConfig
from assignment.interfaces import (
    RebalancingModel,
    EmployeeMove,
    Recommendation,
    RecommendationResult,
    SimulationResult,
)
from workload.aggregator import employee_by_id, task_by_id
from workload.imbalance import classify, EmployeeSnapshot
from utils.logger import logger


NO_REBALANCING_MESSAGE = "No rebalancing needed - workload is well distributed"
NO_MOVES_MESSAGE = "No suitable task movements found"
INVALID_IDS_MESSAGE = "Invalid task or employee IDs"


class GreedyRebalancer(RebalancingModel):
    """
    Greedy rebalancing model.

    Every task held by an overloaded employee is tried against every
    skill-matched employee with spare capacity. A move is kept when it
    lowers the source's utilization without pushing the target to the
    ceiling, and moves are ranked by a priority score.
    """

    def __init__(self, config: Optional[RecommendationConfig] = None):
        """
        Initialize the rebalancer.

        Args:
            config: Ceiling, result limit and priority weights
        """
        self.config = config or RecommendationConfig()

    def recommend(
        self, employees: List[Employee], tasks: List[Task]
    ) -> RecommendationResult:
        """
        Generate rebalancing recommendations.

        Args:
            employees: Employees with recomputed loads
            tasks: All tasks

        Returns:
            RecommendationResult: Top recommendations by priority
        """
        imbalances = classify(employees)
        sources = imbalances.overloaded
        targets = imbalances.targets

        if not sources or not targets:
            logger.info(
                f"Nothing to rebalance: {len(sources)} overloaded, "
                f"{len(targets)} with spare capacity."
            )
            return RecommendationResult(
                recommendations=[],
                message=NO_REBALANCING_MESSAGE,
                overloaded_employees=len(sources),
                available_employees=len(targets),
                potential_moves=0,
            )

        candidates: List[Recommendation] = []

        for source in sources:
            source_tasks = [t for t in tasks if t.assigned_to == source.id]

            for task in source_tasks:
                task_load = task.calculate_load()

                for target in targets:
                    # Skip if target lacks the skill or is the source itself
                    if target.id == source.id or task.required_skill not in target.skills:
                        continue

                    candidate = self._evaluate_move(source, target, task, task_load)
                    if candidate is not None:
                        candidates.append(candidate)

        # Highest priority first; ties keep discovery order
        candidates.sort(key=lambda r: -r.priority)

        logger.info(
            f"Found {len(candidates)} candidate moves from {len(sources)} overloaded "
            f"employees to {len(targets)} employees with capacity."
        )

        return RecommendationResult(
            recommendations=candidates[: self.config.max_recommendations],
            message=(
                f"Found {len(candidates)} potential task movements to improve workload balance"
                if candidates
                else NO_MOVES_MESSAGE
            ),
            overloaded_employees=len(sources),
            available_employees=len(targets),
            potential_moves=len(candidates),
        )

    def _evaluate_move(
        self,
        source: EmployeeSnapshot,
        target: EmployeeSnapshot,
        task: Task,
        task_load: float,
    ) -> Optional[Recommendation]:
        """Build a recommendation for one move, or None if it is rejected."""
        source_new_hours = source.current_hours - task_load
        target_new_hours = target.current_hours + task_load

        source_new_util = utilization_for(source_new_hours, source.capacity_hours)
        target_new_util = utilization_for(target_new_hours, target.capacity_hours)

        if target_new_util >= self.config.target_ceiling:
            return None
        if source_new_util >= source.utilization:
            return None

        improvement = source.utilization - source_new_util

        return Recommendation(
            task_id=task.id,
            task_title=task.title,
            task_load=task_load,
            estimated_hours=task.estimated_hours,
            complexity=task.complexity,
            urgency=task.urgency,
            required_skill=task.required_skill,
            source=EmployeeMove(
                id=source.id,
                name=source.name,
                current_utilization=source.utilization,
                new_utilization=source_new_util,
                current_hours=source.current_hours,
                new_hours=source_new_hours,
            ),
            target=EmployeeMove(
                id=target.id,
                name=target.name,
                current_utilization=target.utilization,
                new_utilization=target_new_util,
                current_hours=target.current_hours,
                new_hours=target_new_hours,
            ),
            improvement=improvement,
            reasoning=self.generate_reasoning(source, target, task, improvement),
            priority=self.calculate_priority(improvement, task.urgency, source.utilization),
        )

    def calculate_priority(
        self, improvement: float, urgency: int, source_utilization: float
    ) -> float:
        """
        Priority score for a recommendation.

        priority = improvement * 2 + urgency * 10 + source_utilization * 0.5
        with the weights taken from the configuration.
        """
        return (
            improvement * self.config.improvement_weight
            + urgency * self.config.urgency_weight
            + source_utilization * self.config.source_utilization_weight
        )

    @staticmethod
    def generate_reasoning(
        source: EmployeeSnapshot,
        target: EmployeeSnapshot,
        task: Task,
        improvement: float,
    ) -> str:
        """Human-readable explanation of a recommended move."""
        return (
            f'Move "{task.title}" from {source.name} ({source.utilization:.1f}% utilized) '
            f"to {target.name} ({target.utilization:.1f}% utilized). "
            f'Both have "{task.required_skill}" skill. '
            f"Expected improvement: {improvement:.1f}% reduction in {source.name}'s workload."
        )

    def simulate(
        self,
        employees: List[Employee],
        tasks: List[Task],
        task_id: str,
        from_employee_id: str,
        to_employee_id: str,
    ) -> SimulationResult:
        """
        Simulate moving a task between two employees.

        Nothing is mutated: the new loads are computed on the side, so
        repeated calls return identical results.

        Args:
            employees: Employees with recomputed loads
            tasks: All tasks
            task_id: Task to move
            from_employee_id: Current holder of the load
            to_employee_id: Proposed new assignee

        Returns:
            SimulationResult: Failure with a message, or before/after loads
        """
        task = task_by_id(tasks, task_id)
        from_employee = employee_by_id(employees, from_employee_id)
        to_employee = employee_by_id(employees, to_employee_id)

        if task is None or from_employee is None or to_employee is None:
            logger.debug(
                f"Simulation rejected: task={task_id}, from={from_employee_id}, "
                f"to={to_employee_id}"
            )
            return SimulationResult(success=False, error=INVALID_IDS_MESSAGE)

        if not to_employee.has_skill(task.required_skill):
            return SimulationResult(
                success=False,
                error=(
                    f"{to_employee.name} does not have the required skill: "
                    f"{task.required_skill}"
                ),
            )

        task_load = task.calculate_load()
        from_new_hours = from_employee.current_hours - task_load
        to_new_hours = to_employee.current_hours + task_load

        return SimulationResult(
            success=True,
            task={"id": task.id, "title": task.title, "load": round(task_load, 2)},
            source=EmployeeMove(
                id=from_employee.id,
                name=from_employee.name,
                current_utilization=from_employee.utilization(),
                new_utilization=utilization_for(from_new_hours, from_employee.capacity_hours),
                current_hours=from_employee.current_hours,
                new_hours=from_new_hours,
            ),
            target=EmployeeMove(
                id=to_employee.id,
                name=to_employee.name,
                current_utilization=to_employee.utilization(),
                new_utilization=utilization_for(to_new_hours, to_employee.capacity_hours),
                current_hours=to_employee.current_hours,
                new_hours=to_new_hours,
            ),
        )
