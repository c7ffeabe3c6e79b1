"""
Department-level workload roll-up.
"""
from typing import List, Dict, Any

from models import Employee, state_for_utilization, utilization_for


def analyze_departments(employees: List[Employee]) -> Dict[str, Any]:
    """
    Aggregate capacity and load per department.

    Employees without a department are grouped under "Unassigned".

    Args:
        employees: Employees with recomputed loads

    Returns:
        Dict with departments (most utilized first) and a summary
    """
    departments: Dict[str, Dict[str, Any]] = {}

    for emp in employees:
        name = emp.department or "Unassigned"
        dept = departments.setdefault(
            name,
            {
                "name": name,
                "employee_count": 0,
                "total_capacity": 0,
                "total_workload": 0.0,
                "employees": [],
                "skills": [],
            },
        )
        dept["employee_count"] += 1
        dept["total_capacity"] += emp.capacity_hours
        dept["total_workload"] += emp.current_hours
        dept["employees"].append(
            {"id": emp.id, "name": emp.name, "utilization": round(emp.utilization(), 2)}
        )
        for skill in emp.skills:
            if skill not in dept["skills"]:
                dept["skills"].append(skill)

    result = []
    for dept in departments.values():
        utilization = utilization_for(dept["total_workload"], dept["total_capacity"])
        result.append(
            {
                **dept,
                "total_workload": round(dept["total_workload"], 2),
                "average_utilization": round(utilization, 2),
                "workload_state": state_for_utilization(utilization),
            }
        )

    result.sort(key=lambda d: -d["average_utilization"])

    return {
        "departments": result,
        "summary": {
            "total_departments": len(result),
            "most_utilized": result[0] if result else None,
            "least_utilized": result[-1] if result else None,
        },
    }
