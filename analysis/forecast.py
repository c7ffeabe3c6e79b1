"""
Forward-looking workload forecast built from task due dates.
"""
from datetime import date, timedelta
from typing import List, Dict, Any, Optional

from models import Task, Employee, OVERLOADED, state_for_utilization, utilization_for
from config import ForecastConfig
from utils.logger import logger


def _week_forecast(
    week: int,
    week_start: date,
    week_end: date,
    employees: List[Employee],
    tasks: List[Task],
    config: ForecastConfig,
) -> Dict[str, Any]:
    week_data = {
        "week": week,
        "start_date": week_start.isoformat(),
        "end_date": week_end.isoformat(),
        "total_tasks": 0,
        "critical_tasks": 0,
        "estimated_hours": 0.0,
        "employee_forecasts": [],
    }

    for emp in employees:
        due = [
            t
            for t in tasks
            if t.assigned_to == emp.id
            and t.due_date is not None
            and week_start <= t.due_date <= week_end
        ]
        if not due:
            continue

        week_hours = sum(t.calculate_load() for t in due)
        projected = utilization_for(emp.current_hours + week_hours, emp.capacity_hours)

        week_data["total_tasks"] += len(due)
        week_data["critical_tasks"] += sum(1 for t in due if t.urgency == 3)
        week_data["estimated_hours"] += week_hours

        week_data["employee_forecasts"].append(
            {
                "employee_id": emp.id,
                "employee_name": emp.name,
                "current_utilization": round(emp.utilization(), 2),
                "projected_utilization": round(projected, 2),
                "tasks_due": len(due),
                "hours_required": round(week_hours, 2),
                "status": state_for_utilization(projected),
                "is_bottleneck": projected > config.bottleneck_utilization,
            }
        )

    week_data["estimated_hours"] = round(week_data["estimated_hours"], 2)
    week_data["employee_forecasts"].sort(key=lambda f: -f["projected_utilization"])
    return week_data


def forecast_workload(
    employees: List[Employee],
    tasks: List[Task],
    today: Optional[date] = None,
    config: Optional[ForecastConfig] = None,
) -> Dict[str, Any]:
    """
    Project per-employee utilization for the coming weeks.

    Each week is a seven-day window starting ``today + 7 * n``; a task
    counts in the week its due date falls in. Projected utilization adds
    the week's due load on top of the employee's current hours.

    Args:
        employees: Employees with recomputed loads
        tasks: All tasks
        today: First day of the first window (defaults to the current date)
        config: Horizon and thresholds

    Returns:
        Dict with weekly forecasts, bottlenecks, warnings and a summary
    """
    config = config or ForecastConfig()
    today = today or date.today()

    weekly_forecast = []
    for week in range(config.weeks):
        week_start = today + timedelta(days=week * 7)
        week_end = week_start + timedelta(days=6)
        weekly_forecast.append(
            _week_forecast(week + 1, week_start, week_end, employees, tasks, config)
        )

    bottlenecks = []
    warnings = []

    for week in weekly_forecast:
        critical = [f for f in week["employee_forecasts"] if f["is_bottleneck"]]
        overloaded = [f for f in week["employee_forecasts"] if f["status"] == OVERLOADED]

        if critical:
            bottlenecks.append(
                {
                    "week": week["week"],
                    "week_start": week["start_date"],
                    "severity": "critical",
                    "affected_employees": len(critical),
                    "employees": [
                        {
                            "name": f["employee_name"],
                            "projected_utilization": f["projected_utilization"],
                            "tasks_due": f["tasks_due"],
                        }
                        for f in critical
                    ],
                    "recommendation": (
                        f"Week {week['week']}: {len(critical)} employee(s) projected to "
                        f"exceed capacity. Redistribute tasks immediately."
                    ),
                }
            )

        if len(overloaded) > config.warning_overloaded_count:
            warnings.append(
                {
                    "week": week["week"],
                    "week_start": week["start_date"],
                    "severity": "warning",
                    "affected_employees": len(overloaded),
                    "recommendation": (
                        f"Week {week['week']}: {len(overloaded)} employees will be "
                        f"heavily loaded. Monitor closely."
                    ),
                }
            )

    peak_week = None
    for week in weekly_forecast:
        if peak_week is None or week["total_tasks"] > peak_week["total_tasks"]:
            peak_week = week

    if bottlenecks:
        logger.warning(f"Forecast found bottlenecks in {len(bottlenecks)} week(s).")

    return {
        "weekly_forecast": weekly_forecast,
        "bottlenecks": bottlenecks,
        "warnings": warnings,
        "summary": {
            "total_weeks_analyzed": config.weeks,
            "bottlenecks_detected": len(bottlenecks),
            "warnings_issued": len(warnings),
            "peak_week": peak_week,
        },
    }
