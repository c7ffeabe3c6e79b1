from datetime import date

import matplotlib.pyplot as plt
from openpyxl import load_workbook

from assignment.greedy import GreedyRebalancer
from analysis.forecast import forecast_workload
from analysis.metrics import workload_statistics
from analysis.skill_gaps import detect_skill_gaps
from analysis.trends import generate_trends
from config import TrendConfig
from workload.aggregator import summarize
from visualization import (
    export_to_excel,
    get_state_color,
    plot_forecast_heatmap,
    plot_state_distribution,
    plot_trends,
    plot_utilization_chart,
)


def test_export_to_excel(team, tmp_path):
    employees, tasks = team
    filename = tmp_path / "report.xlsx"

    saved = export_to_excel(
        str(filename),
        employees,
        tasks,
        GreedyRebalancer().recommend(employees, tasks).to_dict(),
        detect_skill_gaps(employees, tasks),
        workload_statistics(employees, tasks),
    )

    assert saved is True
    wb = load_workbook(filename)
    assert wb.sheetnames == ["Employees", "Tasks", "Recommendations", "Skill Gaps", "Summary"]
    assert wb["Employees"].max_row == 5
    assert wb["Tasks"].max_row == 8
    assert wb["Recommendations"].max_row == 4
    assert wb["Employees"]["H2"].value == "Critical"
    assert wb["Summary"]["A2"].value == "Total Employees"
    assert wb["Summary"]["B2"].value == 4


def test_charts_save_files(team, tmp_path):
    employees, tasks = team
    summary = [row.to_dict() for row in summarize(employees, tasks)]
    stats = workload_statistics(employees, tasks)
    forecast = forecast_workload(employees, tasks, today=date(2026, 1, 5))
    trends = generate_trends(employees, tasks, today=date(2026, 1, 31), config=TrendConfig(seed=1))

    outputs = {
        "util.png": lambda f: plot_utilization_chart(summary, filename=f),
        "dist.png": lambda f: plot_state_distribution(stats["workload_distribution"], filename=f),
        "heat.png": lambda f: plot_forecast_heatmap(forecast, filename=f),
        "trend.png": lambda f: plot_trends(trends, filename=f),
    }
    for name, draw in outputs.items():
        path = tmp_path / "charts" / name
        fig = draw(str(path))
        assert isinstance(fig, plt.Figure)
        assert path.exists()
        plt.close(fig)


def test_heatmap_without_due_tasks():
    fig = plot_forecast_heatmap({"weekly_forecast": [{"week": 1, "employee_forecasts": []}]})
    assert isinstance(fig, plt.Figure)
    plt.close(fig)


def test_state_colors():
    assert get_state_color("Critical") == "#c0392b"
    assert get_state_color("Unknown") == "gray"
