"""
Visualization and export utilities for workload reports.

Charts are returned as matplotlib figures so the dashboard can render them
directly; passing a filename also saves them to disk.
"""

import os
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from typing import List, Dict, Optional, Any
from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.styles import PatternFill, Font, Alignment

from models import (
    Task,
    Employee,
    CRITICAL,
    OVERLOADED,
    OPTIMAL,
    UNDERUTILIZED,
    AVAILABLE,
    WORKLOAD_STATES,
)
from utils.logger import logger


STATE_COLOR_MAP = {
    CRITICAL: "#c0392b",  # Dark red
    OVERLOADED: "#e67e22",  # Orange
    OPTIMAL: "#2ecc71",  # Green
    UNDERUTILIZED: "#3498db",  # Blue
    AVAILABLE: "#95a5a6",  # Gray
}


def get_state_color(state: str) -> str:
    """Return the chart color for a workload state."""
    return STATE_COLOR_MAP.get(state, "gray")


def _save(fig: plt.Figure, filename: Optional[str], label: str) -> None:
    if not filename:
        return
    directory = os.path.dirname(filename)
    if directory:
        os.makedirs(directory, exist_ok=True)
    fig.savefig(filename, dpi=150, bbox_inches="tight")
    logger.info(f"{label} saved as {filename}")


def plot_utilization_chart(
    summary: List[Dict[str, Any]], filename: Optional[str] = None
) -> plt.Figure:
    """
    Horizontal bar chart of employee utilization colored by workload state.

    Args:
        summary: Rows from the workload summary (``to_dict`` form)
        filename: File to save the plot (None to skip saving)

    Returns:
        plt.Figure: The chart
    """
    rows = sorted(summary, key=lambda r: r["utilization"])
    names = [r["name"] for r in rows]
    values = [r["utilization"] for r in rows]
    colors = [get_state_color(r["workload_state"]) for r in rows]

    fig, ax = plt.subplots(figsize=(12, max(4, 0.4 * len(rows) + 1)))
    bars = ax.barh(names, values, color=colors, edgecolor="black", alpha=0.85)

    # Band boundaries
    for threshold, style in ((50, ":"), (70, "--"), (85, "--"), (95, "-")):
        ax.axvline(threshold, color="black", linestyle=style, linewidth=0.8, alpha=0.5)

    for bar in bars:
        width = bar.get_width()
        ax.text(
            width + 1,
            bar.get_y() + bar.get_height() / 2,
            f"{width:.1f}%",
            va="center",
            fontsize=8,
        )

    handles = [
        plt.Rectangle((0, 0), 1, 1, color=get_state_color(s)) for s in WORKLOAD_STATES
    ]
    ax.legend(handles, WORKLOAD_STATES, loc="lower right")
    ax.set_xlabel("Utilization (%)")
    ax.set_title("Employee Utilization by Workload State")
    ax.grid(axis="x", linestyle="--", alpha=0.3)
    fig.tight_layout()

    _save(fig, filename, "Utilization chart")
    return fig


def plot_state_distribution(
    distribution: Dict[str, int], filename: Optional[str] = None
) -> plt.Figure:
    """
    Bar chart of how many employees sit in each workload state.

    Args:
        distribution: ``workload_distribution`` from the statistics report
        filename: File to save the plot (None to skip saving)
    """
    states = list(WORKLOAD_STATES)
    counts = [distribution.get(s.lower(), 0) for s in states]

    fig, ax = plt.subplots(figsize=(10, 6))
    bars = ax.bar(states, counts, color=[get_state_color(s) for s in states])

    for bar in bars:
        height = bar.get_height()
        ax.text(
            bar.get_x() + bar.get_width() / 2,
            height,
            f"{int(height)}",
            ha="center",
            va="bottom",
            fontsize=9,
        )

    ax.set_xlabel("Workload State")
    ax.set_ylabel("Employees")
    ax.set_title("Workload Distribution")
    ax.grid(axis="y", linestyle="--", alpha=0.3)
    fig.tight_layout()

    _save(fig, filename, "State distribution chart")
    return fig


def plot_forecast_heatmap(
    forecast: Dict[str, Any], filename: Optional[str] = None
) -> plt.Figure:
    """
    Heatmap of projected utilization per employee and week.

    Weeks in which an employee has nothing due are left blank.

    Args:
        forecast: Output of the workload forecast
        filename: File to save the plot (None to skip saving)
    """
    records = [
        {
            "employee": f["employee_name"],
            "week": f"W{week['week']}",
            "projected": f["projected_utilization"],
        }
        for week in forecast["weekly_forecast"]
        for f in week["employee_forecasts"]
    ]
    week_labels = [f"W{week['week']}" for week in forecast["weekly_forecast"]]

    fig, ax = plt.subplots(figsize=(12, 6))

    if not records:
        ax.text(0.5, 0.5, "No tasks due in the forecast window", ha="center", va="center")
        ax.axis("off")
    else:
        df = pd.DataFrame(records)
        pivot = df.pivot_table(
            index="employee", columns="week", values="projected", aggfunc="max"
        ).reindex(columns=week_labels)
        sns.heatmap(
            pivot,
            ax=ax,
            cmap="RdYlGn_r",
            vmin=0,
            vmax=120,
            annot=True,
            fmt=".0f",
            linewidths=0.5,
            cbar_kws={"label": "Projected utilization (%)"},
        )
        ax.set_xlabel("Week")
        ax.set_ylabel("Employee")

    ax.set_title("Projected Utilization by Week")
    fig.tight_layout()

    _save(fig, filename, "Forecast heatmap")
    return fig


def plot_trends(
    trends: Dict[str, Any], window_size: int = 7, filename: Optional[str] = None
) -> plt.Figure:
    """
    Plot the utilization trend with a moving average.

    Args:
        trends: Output of the trend generator
        window_size: Window size for the moving average
        filename: File to save the plot (None to skip saving)
    """
    points = trends["trends"]
    values = [p["average_utilization"] for p in points]
    days = range(len(values))

    fig, ax = plt.subplots(figsize=(12, 6))
    ax.plot(days, values, label="Average utilization", color="blue", alpha=0.4, marker=".")

    if len(values) >= window_size > 1:
        moving_avg = np.convolve(values, np.ones(window_size) / window_size, mode="valid")
        ax.plot(
            range(window_size - 1, len(values)),
            moving_avg,
            label=f"{window_size}-day MA",
            color="blue",
            linewidth=2,
        )

    ax.axhspan(70, 85, color="green", alpha=0.08, label="Optimal band")

    step = max(1, len(points) // 10)
    ax.set_xticks(list(days)[::step])
    ax.set_xticklabels([p["date"] for p in points][::step], rotation=45, ha="right")
    ax.set_ylabel("Utilization (%)")
    ax.set_title("Workload Trend")
    ax.legend()
    ax.grid(True, alpha=0.3)
    fig.tight_layout()

    _save(fig, filename, "Trend plot")
    return fig


def _style_header(sheet, header_fill, header_font, center_align) -> None:
    for cell in sheet[1]:
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = center_align


def export_to_excel(
    filename: str,
    employees: List[Employee],
    tasks: List[Task],
    recommendations: Dict[str, Any],
    skill_gaps: Dict[str, Any],
    statistics: Dict[str, Any],
) -> bool:
    """
    Export the workload picture to an Excel workbook.

    Args:
        filename: File to save the Excel spreadsheet
        employees: Employees with recomputed loads
        tasks: All tasks
        recommendations: Recommendation report (``to_dict`` form)
        skill_gaps: Skill gap report
        statistics: Workload statistics report

    Returns:
        bool: True if export successful
    """
    wb = Workbook()

    header_fill = PatternFill(start_color="D0D0D0", end_color="D0D0D0", fill_type="solid")
    header_font = Font(bold=True)
    center_align = Alignment(horizontal="center")

    # Employee sheet
    ws1 = wb.active
    ws1.title = "Employees"
    ws1.append(
        ["Employee ID", "Name", "Department", "Skills", "CapacityHrs", "CurrentHrs",
         "Utilization %", "State"]
    )
    _style_header(ws1, header_fill, header_font, center_align)

    for emp in employees:
        ws1.append([
            emp.id,
            emp.name,
            emp.department or "Unassigned",
            ", ".join(emp.skills),
            emp.capacity_hours,
            round(emp.current_hours, 2),
            round(emp.utilization(), 2),
            emp.workload_state(),
        ])
        state_cell = ws1.cell(row=ws1.max_row, column=8)
        state_cell.fill = PatternFill(
            start_color=get_state_color(emp.workload_state()).lstrip("#"),
            end_color=get_state_color(emp.workload_state()).lstrip("#"),
            fill_type="solid",
        )

    # Tasks sheet
    ws2 = wb.create_sheet("Tasks")
    ws2.append(
        ["TaskID", "Title", "Skill", "EstHrs", "Complexity", "Urgency", "Load",
         "AssignedTo", "DueDate"]
    )
    _style_header(ws2, header_fill, header_font, center_align)

    for t in tasks:
        ws2.append([
            t.id,
            t.title,
            t.required_skill,
            t.estimated_hours,
            t.complexity_label(),
            t.urgency_label(),
            round(t.calculate_load(), 2),
            t.assigned_to or "",
            t.due_date.isoformat() if t.due_date else "",
        ])

    # Recommendations sheet
    ws3 = wb.create_sheet("Recommendations")
    ws3.append(
        ["Priority", "TaskID", "Task", "Load", "From", "From Util %", "From New Util %",
         "To", "To Util %", "To New Util %", "Reasoning"]
    )
    _style_header(ws3, header_fill, header_font, center_align)

    for rec in recommendations.get("recommendations", []):
        ws3.append([
            rec["priority"],
            rec["task_id"],
            rec["task_title"],
            rec["task_load"],
            rec["from"]["name"],
            rec["from"]["current_utilization"],
            rec["from"]["new_utilization"],
            rec["to"]["name"],
            rec["to"]["current_utilization"],
            rec["to"]["new_utilization"],
            rec["reasoning"],
        ])

    # Skill gaps sheet
    ws4 = wb.create_sheet("Skill Gaps")
    ws4.append(["Skill", "Status", "Severity", "Demand", "Supply", "Unassigned", "Recommendation"])
    _style_header(ws4, header_fill, header_font, center_align)

    for entry in skill_gaps["gaps"] + skill_gaps["balanced"] + skill_gaps["surpluses"]:
        ws4.append([
            entry["skill"],
            entry["status"],
            entry["severity"],
            entry["demand"],
            entry["supply"],
            entry["unassigned_tasks"],
            entry["recommendation"],
        ])

    # Summary sheet
    ws5 = wb.create_sheet("Summary")
    ws5.append(["Metric", "Value"])
    _style_header(ws5, header_fill, header_font, center_align)

    ws5.append(["Total Employees", statistics["total_employees"]])
    ws5.append(["Total Tasks", statistics["total_tasks"]])
    ws5.append(["Average Utilization", f"{statistics['average_utilization']:.2f}%"])
    ws5.append(["Balance Ratio (std/mean)", statistics["balance_ratio"]])
    for state, count in statistics["workload_distribution"].items():
        ws5.append([f"{state.title()} Employees", count])
    ws5.append(["Potential Moves", recommendations["statistics"]["potential_moves"]])

    # Adjust column widths for better readability
    for sheet in wb.worksheets:
        for col in sheet.columns:
            max_len = 0
            col_letter = get_column_letter(col[0].column)
            for cell in col:
                val = cell.value
                if val is not None:
                    max_len = max(max_len, len(str(val)))
            sheet.column_dimensions[col_letter].width = min(max_len + 2, 80)

    directory = os.path.dirname(filename)
    if directory:
        os.makedirs(directory, exist_ok=True)

    try:
        wb.save(filename)
        logger.info(f"Excel report saved as '{filename}'")
        return True
    except OSError as e:
        logger.error(f"Error saving Excel report: {e}")
        return False
