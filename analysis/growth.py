"""
Growth opportunities for employees with spare capacity.
"""
from typing import List, Dict, Any, Optional

from models import Task, Employee
from config import GrowthConfig


def _skills_to_learn(employee: Employee, tasks: List[Task]) -> List[Dict[str, Any]]:
    """In-demand skills the employee lacks, most unassigned work first."""
    candidates = []
    # dict keeps first-seen order of the demanded skills
    for skill in dict.fromkeys(t.required_skill for t in tasks):
        if employee.has_skill(skill):
            continue
        demand = sum(1 for t in tasks if t.required_skill == skill)
        unassigned = sum(1 for t in tasks if t.required_skill == skill and not t.assigned_to)
        candidates.append(
            {
                "skill": skill,
                "demand": demand,
                "unassigned": unassigned,
                "reason": (
                    f"{unassigned} unassigned {skill} tasks available"
                    if unassigned > 0
                    else f"{demand} {skill} tasks in the system"
                ),
            }
        )
    candidates.sort(key=lambda s: -s["unassigned"])
    return candidates


def growth_recommendations(
    employee: Employee,
    matching_tasks: List[Dict[str, Any]],
    skills_to_learn: List[Dict[str, Any]],
    stretch_assignments: List[Dict[str, Any]],
) -> List[Dict[str, Any]]:
    """Prioritized actions for one employee."""
    recommendations = []

    if matching_tasks:
        recommendations.append(
            {
                "type": "immediate_assignment",
                "priority": "high",
                "action": f"Assign {min(len(matching_tasks), 3)} available tasks to {employee.name}",
                "benefit": "Increase utilization and productivity",
                "tasks": [t["title"] for t in matching_tasks[:3]],
            }
        )

    if stretch_assignments:
        recommendations.append(
            {
                "type": "stretch_assignment",
                "priority": "medium",
                "action": f"Consider stretch assignment for {employee.name}",
                "benefit": "Develop advanced skills and leadership potential",
                "tasks": [t["title"] for t in stretch_assignments[:2]],
            }
        )

    if skills_to_learn:
        top_skill = skills_to_learn[0]
        recommendations.append(
            {
                "type": "skill_development",
                "priority": "medium",
                "action": f"Train {employee.name} in {top_skill['skill']}",
                "benefit": (
                    f"{top_skill['unassigned']} unassigned {top_skill['skill']} "
                    f"tasks could be assigned"
                ),
                "suggested_skills": [s["skill"] for s in skills_to_learn[:2]],
            }
        )

    if not recommendations:
        recommendations.append(
            {
                "type": "monitor",
                "priority": "low",
                "action": f"Continue monitoring {employee.name}'s workload",
                "benefit": "Maintain flexibility for future assignments",
            }
        )

    return recommendations


def find_growth_opportunities(
    employees: List[Employee],
    tasks: List[Task],
    config: Optional[GrowthConfig] = None,
) -> Dict[str, Any]:
    """
    Surface work and learning opportunities for under-used employees.

    Only employees below the utilization threshold are considered, and of
    those only the ones with at least one opportunity are reported.

    Args:
        employees: Employees with recomputed loads
        tasks: All tasks
        config: Threshold and list limits

    Returns:
        Dict with per-employee opportunities (least utilized first) and a summary
    """
    config = config or GrowthConfig()
    opportunities = []

    for emp in employees:
        utilization = emp.utilization()
        if utilization >= config.utilization_threshold:
            continue

        open_matches = [
            t for t in tasks if not t.assigned_to and emp.has_skill(t.required_skill)
        ]

        matching_tasks = [
            {
                "id": t.id,
                "title": t.title,
                "required_skill": t.required_skill,
                "estimated_hours": t.estimated_hours,
                "complexity": t.complexity,
                "urgency": t.urgency,
                "is_stretch_assignment": t.complexity >= config.stretch_complexity,
            }
            for t in open_matches
        ]

        stretch_assignments = [
            {
                "id": t.id,
                "title": t.title,
                "required_skill": t.required_skill,
                "complexity": t.complexity,
                "benefit": "Develop advanced skills and take on challenging work",
            }
            for t in open_matches
            if t.complexity >= config.stretch_complexity
        ]

        skills_to_learn = _skills_to_learn(emp, tasks)

        if not (matching_tasks or skills_to_learn or stretch_assignments):
            continue

        available_capacity = emp.capacity_hours - emp.current_hours
        opportunities.append(
            {
                "employee_id": emp.id,
                "employee_name": emp.name,
                "current_utilization": round(utilization, 2),
                "available_capacity": round(available_capacity, 2),
                "current_skills": list(emp.skills),
                "current_task_count": sum(1 for t in tasks if t.assigned_to == emp.id),
                "department": emp.department or "Unassigned",
                "opportunities": {
                    "matching_tasks": matching_tasks[: config.max_matching_tasks],
                    "skills_to_learn": skills_to_learn[: config.max_skills_to_learn],
                    "stretch_assignments": stretch_assignments[: config.max_stretch_assignments],
                },
                "recommendations": growth_recommendations(
                    emp, matching_tasks, skills_to_learn, stretch_assignments
                ),
            }
        )

    opportunities.sort(key=lambda o: o["current_utilization"])

    return {
        "opportunities": opportunities,
        "summary": {
            "total_underutilized": len(opportunities),
            "total_available_capacity": round(
                sum(o["available_capacity"] for o in opportunities), 2
            ),
            "total_matching_tasks": sum(
                len(o["opportunities"]["matching_tasks"]) for o in opportunities
            ),
            "total_skill_gaps": sum(
                len(o["opportunities"]["skills_to_learn"]) for o in opportunities
            ),
        },
    }
