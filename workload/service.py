"""
Request-scoped facade over the workload core.

Every operation reloads the data and recomputes loads before answering, and
returns plain nested data ready for JSON. Lookup misses and invalid
simulations come back as ``{"success": False, "error": ...}``; only a data
load failure raises.
"""
from copy import deepcopy
from datetime import date
from typing import Dict, Any, Optional

from config import AppConfig
from workload.store import WorkloadStore
from workload import aggregator
from workload.imbalance import classify
from assignment.greedy import GreedyRebalancer
from analysis.metrics import compute_workload_metrics, workload_statistics, compare_metrics
from analysis.skill_gaps import detect_skill_gaps
from analysis.burnout import assess_burnout_risk
from analysis.growth import find_growth_opportunities
from analysis.forecast import forecast_workload
from analysis.trends import generate_trends
from analysis.departments import analyze_departments


MISSING_SIMULATION_FIELDS = "Missing required fields: taskId, fromEmployeeId, toEmployeeId"


class WorkloadService:
    """Entry point used by the CLI and the dashboard."""

    def __init__(self, store: WorkloadStore, config: Optional[AppConfig] = None):
        self.store = store
        self.config = config or AppConfig()
        self.rebalancer = GreedyRebalancer(self.config.recommendation)

    def _refresh(self) -> None:
        self.store.load()

    def summary(self) -> Dict[str, Any]:
        self._refresh()
        rows = aggregator.summarize(self.store.employees, self.store.tasks)
        return {"success": True, "data": [r.to_dict() for r in rows]}

    def tasks(self) -> Dict[str, Any]:
        self._refresh()
        rows = aggregator.task_details(self.store.tasks, self.store.employees)
        return {"success": True, "data": [r.to_dict() for r in rows]}

    def employee(self, employee_id: str) -> Dict[str, Any]:
        self._refresh()
        employee = aggregator.employee_by_id(self.store.employees, employee_id)
        if employee is None:
            return {"success": False, "error": "Employee not found"}
        detail = aggregator.employee_detail(employee, self.store.tasks)
        return {"success": True, "data": detail.to_dict()}

    def imbalances(self) -> Dict[str, Any]:
        self._refresh()
        return {"success": True, "data": classify(self.store.employees).to_dict()}

    def recommendations(self) -> Dict[str, Any]:
        self._refresh()
        result = self.rebalancer.recommend(self.store.employees, self.store.tasks)
        return {"success": True, "data": result.to_dict()}

    def simulate(
        self,
        task_id: Optional[str],
        from_employee_id: Optional[str],
        to_employee_id: Optional[str],
    ) -> Dict[str, Any]:
        """
        Dry-run a task move and report its effect on team metrics.

        The metric comparison is computed on copies of the collections, so
        the store is never modified. The "after" hours are the dry run's own
        figures, so the metrics describe the same move even when the task is
        unassigned or held by someone other than the source.
        """
        if not task_id or not from_employee_id or not to_employee_id:
            return {"success": False, "error": MISSING_SIMULATION_FIELDS}

        self._refresh()
        employees, tasks = self.store.employees, self.store.tasks

        result = self.rebalancer.simulate(
            employees, tasks, task_id, from_employee_id, to_employee_id
        )
        if not result.success:
            return result.to_dict()

        moved_employees = deepcopy(employees)
        moved_tasks = deepcopy(tasks)
        aggregator.task_by_id(moved_tasks, task_id).assign_to(to_employee_id)
        source = aggregator.employee_by_id(moved_employees, from_employee_id)
        target = aggregator.employee_by_id(moved_employees, to_employee_id)
        source.current_hours = result.source.new_hours
        target.current_hours = result.target.new_hours

        data = result.to_dict()
        data["metrics"] = compare_metrics(
            compute_workload_metrics(employees, tasks),
            compute_workload_metrics(moved_employees, moved_tasks),
        )
        return {"success": True, "data": data}

    def stats(self) -> Dict[str, Any]:
        self._refresh()
        return {
            "success": True,
            "data": workload_statistics(self.store.employees, self.store.tasks),
        }

    def skill_gaps(self) -> Dict[str, Any]:
        self._refresh()
        return detect_skill_gaps(self.store.employees, self.store.tasks)

    def burnout_risk(self) -> Dict[str, Any]:
        self._refresh()
        return assess_burnout_risk(
            self.store.employees, self.store.tasks, self.config.burnout
        )

    def growth_opportunities(self) -> Dict[str, Any]:
        self._refresh()
        return find_growth_opportunities(
            self.store.employees, self.store.tasks, self.config.growth
        )

    def forecast(self, today: Optional[date] = None) -> Dict[str, Any]:
        self._refresh()
        return forecast_workload(
            self.store.employees, self.store.tasks, today, self.config.forecast
        )

    def trends(self, today: Optional[date] = None) -> Dict[str, Any]:
        self._refresh()
        return generate_trends(
            self.store.employees, self.store.tasks, today, self.config.trend
        )

    def departments(self) -> Dict[str, Any]:
        self._refresh()
        return analyze_departments(self.store.employees)
