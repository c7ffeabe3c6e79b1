from utils.validators import validate_records


def test_clean_records(employee_records, task_records):
    assert validate_records(employee_records, task_records) == []


def test_reports_problems(employee_records, task_records):
    employee_records.append({"id": "E1", "name": "Copy", "capacityHours": -5})
    employee_records.append({"name": "No id"})
    task_records.append(
        {"id": "T8", "title": "Bad", "estimatedHours": -1, "complexity": 7, "urgency": 0,
         "assignedTo": "E404"}
    )

    issues = validate_records(employee_records, task_records)

    assert any("Duplicate employee id E1" in i for i in issues)
    assert any("employee record has no id" in i for i in issues)
    assert any("negative capacity" in i for i in issues)
    assert any("negative estimated hours" in i for i in issues)
    assert any("complexity 7 outside 1-5" in i for i in issues)
    assert any("urgency 0 outside 1-3" in i for i in issues)
    assert any("T8 has no required skill" in i for i in issues)
    assert any("unknown employee E404" in i for i in issues)


def test_issues_are_logged(caplog, employee_records, task_records):
    task_records[0]["assignedTo"] = "E404"
    with caplog.at_level("WARNING", logger="workload"):
        validate_records(employee_records, task_records)
    assert "unknown employee E404" in caplog.text


def test_reports_unreadable_due_date(employee_records, task_records):
    task_records[1]["dueDate"] = "next week"
    task_records[2]["dueDate"] = "2026-01-15T09:00:00Z"

    issues = validate_records(employee_records, task_records)

    assert issues == ["Task T2 has unreadable due date 'next week'; it is left out of forecasts."]
