"""
Burnout risk scoring.
"""
from typing import List, Dict, Any, Optional, Tuple

from models import Task, Employee
from config import BurnoutConfig


def score_employee(
    employee: Employee, tasks: List[Task], config: BurnoutConfig
) -> Tuple[int, List[str]]:
    """
    Additive risk score and the factors behind it.

    Args:
        employee: Employee with a recomputed load
        tasks: Tasks assigned to the employee
        config: Point values and thresholds
    """
    utilization = employee.utilization()
    score = 0
    factors = []

    if utilization > config.critical_utilization:
        score += config.critical_points
        factors.append(f"Critical utilization (>{config.critical_utilization:g}%)")
    elif utilization > config.high_utilization:
        score += config.high_points
        factors.append(f"High utilization (>{config.high_utilization:g}%)")

    if len(tasks) > config.max_tasks:
        score += config.task_count_points
        factors.append(f"Managing {len(tasks)} tasks")

    if tasks:
        avg_complexity = sum(t.complexity for t in tasks) / len(tasks)
        if avg_complexity >= config.complexity_threshold:
            score += config.complexity_points
            factors.append("High task complexity")

    urgent = sum(1 for t in tasks if t.urgency == 3)
    if urgent > config.max_urgent_tasks:
        score += config.urgent_points
        factors.append(f"{urgent} urgent tasks")

    return score, factors


def risk_level(score: int, config: BurnoutConfig) -> str:
    if score >= config.high_risk_score:
        return "High"
    if score >= config.medium_risk_score:
        return "Medium"
    return "Low"


def burnout_recommendation(level: str, employee: Employee) -> str:
    if level == "High":
        return (
            f"Immediate action needed: Redistribute tasks from {employee.name}. "
            f"Consider additional support or deadline extensions."
        )
    if level == "Medium":
        return (
            f"Monitor closely: {employee.name} is approaching high workload. "
            f"Review task priorities and consider rebalancing."
        )
    return f"{employee.name} has manageable workload. Continue monitoring."


def assess_burnout_risk(
    employees: List[Employee],
    tasks: List[Task],
    config: Optional[BurnoutConfig] = None,
) -> Dict[str, Any]:
    """
    Score every employee for burnout risk.

    Employees with a score of zero are left out entirely.

    Args:
        employees: Employees with recomputed loads
        tasks: All tasks
        config: Scoring rules

    Returns:
        Dict with at-risk employees, all scored employees and level counts
    """
    config = config or BurnoutConfig()
    risks = []

    for emp in employees:
        assigned = [t for t in tasks if t.assigned_to == emp.id]
        score, factors = score_employee(emp, assigned, config)
        if score <= 0:
            continue

        level = risk_level(score, config)
        risks.append(
            {
                "employee_id": emp.id,
                "employee_name": emp.name,
                "risk_score": score,
                "risk_level": level,
                "utilization": round(emp.utilization(), 2),
                "task_count": len(assigned),
                "risk_factors": factors,
                "recommendation": burnout_recommendation(level, emp),
            }
        )

    risks.sort(key=lambda r: -r["risk_score"])

    return {
        "at_risk": [r for r in risks if r["risk_level"] != "Low"],
        "all": risks,
        "summary": {
            "high_risk": sum(1 for r in risks if r["risk_level"] == "High"),
            "medium_risk": sum(1 for r in risks if r["risk_level"] == "Medium"),
            "low_risk": sum(1 for r in risks if r["risk_level"] == "Low"),
        },
    }
