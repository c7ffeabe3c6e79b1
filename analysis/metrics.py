"""
Metrics calculation and analysis for team workload.
"""
import numpy as np
from typing import List, Dict, Any
from models import (
    Task,
    Employee,
    CRITICAL,
    OVERLOADED,
    OPTIMAL,
    UNDERUTILIZED,
    AVAILABLE,
)
from workload.imbalance import classify


def compute_workload_metrics(
    employees: List[Employee], tasks: List[Task]
) -> Dict[str, float]:
    """
    Compute aggregate load metrics for the team.

    Args:
        employees: Employees with recomputed loads
        tasks: All tasks

    Returns:
        Dict of metric names to metric values
    """
    utilizations = [emp.utilization() for emp in employees]

    # 1. Workload Balance Ratio (Lower is better)
    # Standard deviation of utilization / mean utilization
    mean_util = float(np.mean(utilizations)) if utilizations else 0.0
    std_util = float(np.std(utilizations)) if utilizations else 0.0
    workload_balance_ratio = std_util / mean_util if mean_util != 0 else 0.0

    # 2. Resource Utilization (total assigned load over total capacity)
    total_capacity = sum(emp.capacity_hours for emp in employees)
    total_load = sum(emp.current_hours for emp in employees)
    resource_utilization = (
        (total_load / total_capacity * 100) if total_capacity > 0 else 0.0
    )

    # 3. Task Coverage (share of tasks with an assignee)
    assigned = sum(1 for t in tasks if t.assigned_to)
    task_coverage = (assigned / len(tasks) * 100) if tasks else 0.0

    # 4. Peak Utilization (Lower is better)
    peak_utilization = max(utilizations) if utilizations else 0.0

    return {
        "workload_balance_ratio": workload_balance_ratio,
        "resource_utilization": resource_utilization,
        "task_coverage": task_coverage,
        "peak_utilization": peak_utilization,
    }


def workload_statistics(employees: List[Employee], tasks: List[Task]) -> Dict[str, Any]:
    """
    Overall workload statistics for dashboards.

    The average is taken over the rounded per-employee utilizations so it
    agrees with the summary table.
    """
    rounded = [round(emp.utilization(), 2) for emp in employees]
    states = [emp.workload_state() for emp in employees]
    metrics = compute_workload_metrics(employees, tasks)

    return {
        "total_employees": len(employees),
        "total_tasks": len(tasks),
        "average_utilization": round(sum(rounded) / len(rounded), 2) if rounded else 0.0,
        "workload_distribution": {
            "critical": states.count(CRITICAL),
            "overloaded": states.count(OVERLOADED),
            "optimal": states.count(OPTIMAL),
            "underutilized": states.count(UNDERUTILIZED),
            "available": states.count(AVAILABLE),
        },
        "imbalances_summary": classify(employees).summary(),
        "balance_ratio": round(metrics["workload_balance_ratio"], 4),
    }


def compare_metrics(
    before: Dict[str, float], after: Dict[str, float]
) -> Dict[str, Dict[str, Any]]:
    """
    Compare two metric snapshots, e.g. before and after a simulated move.

    Args:
        before: Metrics of the current assignment
        after: Metrics of the hypothetical assignment

    Returns:
        Dict mapping metric names to before, after, delta and improved flag
    """
    comparison = {}

    for metric in sorted(set(before) & set(after)):
        delta = after[metric] - before[metric]

        # Balance ratio and peak load improve when they go down
        if metric in ("workload_balance_ratio", "peak_utilization"):
            improved = delta < 0
        else:
            improved = delta > 0

        comparison[metric] = {
            "before": round(before[metric], 4),
            "after": round(after[metric], 4),
            "delta": round(delta, 4),
            "improved": improved,
        }

    return comparison
