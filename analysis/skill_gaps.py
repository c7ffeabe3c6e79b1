"""
Skill supply versus task demand.
"""
from typing import List, Dict, Any

from models import Task, Employee

SEVERITY_ORDER = {"high": 3, "medium": 2, "low": 1}


def _demand_by_skill(tasks: List[Task]) -> Dict[str, Dict[str, Any]]:
    demand: Dict[str, Dict[str, Any]] = {}
    for task in tasks:
        entry = demand.setdefault(
            task.required_skill,
            {"demand_count": 0, "total_hours": 0, "unassigned_tasks": 0},
        )
        entry["demand_count"] += 1
        entry["total_hours"] += task.estimated_hours
        if not task.assigned_to:
            entry["unassigned_tasks"] += 1
    return demand


def _supply_by_skill(employees: List[Employee]) -> Dict[str, Dict[str, Any]]:
    supply: Dict[str, Dict[str, Any]] = {}
    for emp in employees:
        for skill in emp.skills:
            entry = supply.setdefault(
                skill, {"employee_count": 0, "employees": [], "total_capacity": 0}
            )
            entry["employee_count"] += 1
            entry["employees"].append(
                {
                    "id": emp.id,
                    "name": emp.name,
                    "utilization": round(emp.utilization(), 2),
                }
            )
            entry["total_capacity"] += emp.capacity_hours
    return supply


def classify_skill(skill: str, demand: int, supply: int) -> Dict[str, str]:
    """
    Status, severity and advice for one demanded skill.

    Args:
        skill: Skill label
        demand: Number of tasks requiring the skill
        supply: Number of employees holding the skill
    """
    if supply == 0:
        return {
            "status": "Critical Gap",
            "severity": "high",
            "recommendation": f"Urgent: No employees with {skill} skill. Consider hiring or training.",
        }
    if supply < demand / 2:
        return {
            "status": "Skill Gap",
            "severity": "medium",
            "recommendation": f"{skill} is in high demand but low supply. Consider training more team members.",
        }
    if supply > demand * 2:
        return {
            "status": "Skill Surplus",
            "severity": "low",
            "recommendation": f"{skill} has more supply than demand. These team members could learn additional skills.",
        }
    return {
        "status": "Balanced",
        "severity": "none",
        "recommendation": f"{skill} supply and demand are well balanced.",
    }


def detect_skill_gaps(employees: List[Employee], tasks: List[Task]) -> Dict[str, Any]:
    """
    Compare how many employees hold each skill with how many tasks need it.

    Args:
        employees: All employees
        tasks: All tasks

    Returns:
        Dict with gaps (most severe first), balanced, surpluses and a summary
    """
    demand = _demand_by_skill(tasks)
    supply = _supply_by_skill(employees)

    gaps = []
    surpluses = []
    balanced = []

    for skill, needed in demand.items():
        held = supply.get(skill, {"employee_count": 0, "total_capacity": 0, "employees": []})

        entry = {
            "skill": skill,
            "demand": needed["demand_count"],
            "supply": held["employee_count"],
            "demand_hours": needed["total_hours"],
            "supply_capacity": held["total_capacity"],
            "unassigned_tasks": needed["unassigned_tasks"],
            "employees": held["employees"],
        }
        entry.update(classify_skill(skill, needed["demand_count"], held["employee_count"]))

        if entry["status"] in ("Critical Gap", "Skill Gap"):
            gaps.append(entry)
        elif entry["status"] == "Skill Surplus":
            surpluses.append(entry)
        else:
            balanced.append(entry)

    # Skills nobody asks for
    for skill, held in supply.items():
        if skill in demand:
            continue
        surpluses.append(
            {
                "skill": skill,
                "demand": 0,
                "supply": held["employee_count"],
                "demand_hours": 0,
                "supply_capacity": held["total_capacity"],
                "unassigned_tasks": 0,
                "employees": held["employees"],
                "status": "No Demand",
                "severity": "low",
                "recommendation": f"{skill} is available but not currently needed in any tasks.",
            }
        )

    gaps.sort(key=lambda g: -SEVERITY_ORDER.get(g["severity"], 0))

    return {
        "summary": {
            "total_skills_required": len(demand),
            "total_skills_available": len(supply),
            "critical_gaps": sum(1 for g in gaps if g["severity"] == "high"),
            "moderate_gaps": sum(1 for g in gaps if g["severity"] == "medium"),
            "balanced": len(balanced),
            "surpluses": len(surpluses),
        },
        "gaps": gaps,
        "balanced": balanced,
        "surpluses": surpluses,
    }
