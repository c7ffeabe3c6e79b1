"""
Validation utilities for employee and task records.
"""
from typing import List, Dict, Any, Set

from models import COMPLEXITY_LABELS, URGENCY_LABELS, parse_date
from utils.logger import logger


def _duplicate_ids(records: List[Dict[str, Any]]) -> Set[str]:
    seen = set()
    duplicates = set()
    for record in records:
        record_id = record.get("id")
        if record_id in seen:
            duplicates.add(record_id)
        seen.add(record_id)
    return duplicates


def validate_records(
    employee_records: List[Dict[str, Any]], task_records: List[Dict[str, Any]]
) -> List[str]:
    """
    Check raw records for data-integrity problems.

    Problems are logged as warnings and returned; they never stop a load.

    Checks:
    1. Every record has an id and ids are unique
    2. Capacity is positive and estimates are not negative
    3. Complexity and urgency are within their scales
    4. Assigned tasks point at a known employee
    5. Due dates, when present, are ISO dates

    Args:
        employee_records: Raw employee records
        task_records: Raw task records

    Returns:
        List[str]: Human-readable issues, empty when the data is clean
    """
    issues = []

    for kind, records in (("employee", employee_records), ("task", task_records)):
        for record in records:
            if not record.get("id"):
                issues.append(f"A {kind} record has no id: {record}")
        for dup in sorted(_duplicate_ids(records), key=str):
            issues.append(f"Duplicate {kind} id {dup}; only the first record is used for lookups.")

    for record in employee_records:
        capacity = record.get("capacityHours")
        if capacity is not None and capacity < 0:
            issues.append(f"Employee {record.get('id')} has negative capacity {capacity}.")

    employee_ids = {r.get("id") for r in employee_records}

    for record in task_records:
        task_id = record.get("id")

        hours = record.get("estimatedHours")
        if hours is not None and hours < 0:
            issues.append(f"Task {task_id} has negative estimated hours {hours}.")

        complexity = record.get("complexity")
        if complexity is not None and not 1 <= complexity < len(COMPLEXITY_LABELS):
            issues.append(f"Task {task_id} has complexity {complexity} outside 1-5.")

        urgency = record.get("urgency")
        if urgency is not None and not 1 <= urgency < len(URGENCY_LABELS):
            issues.append(f"Task {task_id} has urgency {urgency} outside 1-3.")

        if not record.get("requiredSkill"):
            issues.append(f"Task {task_id} has no required skill.")

        assignee = record.get("assignedTo")
        if assignee and assignee not in employee_ids:
            issues.append(f"Task {task_id} is assigned to unknown employee {assignee}.")

        due = record.get("dueDate")
        if due not in (None, "") and parse_date(due) is None:
            issues.append(f"Task {task_id} has unreadable due date {due!r}; it is left out of forecasts.")

    for issue in issues:
        logger.warning(issue)

    return issues
