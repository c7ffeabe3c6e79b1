"""
Synthetic utilization trends.

There is no stored history, so the series is simulated around the current
average utilization. Only the shape and value ranges are meaningful.
"""
import math
import numpy as np
from datetime import date, timedelta
from typing import List, Dict, Any, Optional

from models import Task, Employee
from config import TrendConfig


def generate_trends(
    employees: List[Employee],
    tasks: List[Task],
    today: Optional[date] = None,
    config: Optional[TrendConfig] = None,
) -> Dict[str, Any]:
    """
    Simulate a daily utilization series ending today.

    Args:
        employees: Employees with recomputed loads
        tasks: All tasks
        today: Last day of the series (defaults to the current date)
        config: Number of days and optional random seed

    Returns:
        Dict with ``days + 1`` trend points and a summary
    """
    config = config or TrendConfig()
    today = today or date.today()
    rng = np.random.default_rng(config.seed)

    count = len(employees)
    avg_utilization = (
        sum(emp.utilization() for emp in employees) / count if count else 0.0
    )

    trends = []
    for i in range(config.days, -1, -1):
        # +/- 10 points of noise around a gently rising line
        variance = (rng.random() - 0.5) * 20
        base = float(np.clip(avg_utilization + variance - i * 0.5, 30, 95))

        trends.append(
            {
                "date": (today - timedelta(days=i)).isoformat(),
                "average_utilization": round(base, 2),
                "overloaded_count": math.floor(count * (0.3 if base > 85 else 0.1)),
                "optimal_count": math.floor(count * 0.4),
                "underutilized_count": math.floor(count * 0.3),
                "total_tasks": max(0, len(tasks) + int(rng.integers(-2, 3))),
            }
        )

    return {
        "trends": trends,
        "summary": {
            "current_utilization": round(avg_utilization, 2),
            "trend": "increasing",
            "projected_utilization": round(trends[-1]["average_utilization"] + 5, 2),
            "days_analyzed": config.days + 1,
        },
    }
