import os
import json
import logging

import streamlit as st
import pandas as pd
import matplotlib.pyplot as plt

from config import AppConfig
from utils.logger import setup_logger
from workload.store import WorkloadStore, DataLoadError
from workload.service import WorkloadService
from visualization import (
    plot_utilization_chart,
    plot_state_distribution,
    plot_forecast_heatmap,
    plot_trends,
    get_state_color,
)

# Set page config
st.set_page_config(
    page_title="Workload Analysis and Rebalancing",
    page_icon="📋",
    layout="wide",
    initial_sidebar_state="expanded",
)

setup_logger(level=logging.INFO)


def load_app_config(config_path: str) -> AppConfig:
    """Read a JSON configuration file, falling back to defaults."""
    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, "r") as f:
                return AppConfig.from_dict(json.load(f))
        except (OSError, ValueError, TypeError) as e:
            st.sidebar.warning(f"Could not read {config_path}: {e}. Using defaults.")
    return AppConfig()


def show_figure(fig):
    st.pyplot(fig)
    plt.close(fig)


def color_state(value):
    return f"background-color: {get_state_color(value)}; color: white"


# Sidebar
st.sidebar.title("Settings")
config_path = st.sidebar.text_input("Configuration file", value="")
config = load_app_config(config_path)
config.data.data_dir = st.sidebar.text_input("Data directory", value=config.data.data_dir)

service = WorkloadService(WorkloadStore(config.data), config)

st.title("Workload Analysis and Rebalancing")

try:
    summary = service.summary()["data"]
except DataLoadError as e:
    st.error(f"{e}. Check that {config.data.data_dir} contains the employee and task files.")
    st.stop()

statistics = service.stats()["data"]

col1, col2, col3, col4 = st.columns(4)
col1.metric("Employees", statistics["total_employees"])
col2.metric("Tasks", statistics["total_tasks"])
col3.metric("Average Utilization", f"{statistics['average_utilization']:.1f}%")
col4.metric("Balance Ratio", f"{statistics['balance_ratio']:.2f}")

workload_tab, rec_tab, sim_tab, analytics_tab = st.tabs(
    ["Workload", "Recommendations", "What-if Simulation", "Analytics"]
)

with workload_tab:
    st.header("Team Workload")
    summary_df = pd.DataFrame(summary)
    if not summary_df.empty:
        summary_df["skills"] = summary_df["skills"].apply(", ".join)
        st.dataframe(
            summary_df.style.map(color_state, subset=["workload_state"]),
            use_container_width=True,
        )
        left, right = st.columns(2)
        with left:
            show_figure(plot_utilization_chart(summary))
        with right:
            show_figure(plot_state_distribution(statistics["workload_distribution"]))

    imbalances = service.imbalances()["data"]
    st.subheader("Imbalances")
    st.write(
        f"{imbalances['summary']['overloaded_count']} overloaded, "
        f"{imbalances['summary']['underutilized_count']} underutilized, "
        f"{imbalances['summary']['available_count']} available"
    )

    st.subheader("Employee Detail")
    employee_ids = [row["id"] for row in summary]
    if employee_ids:
        selected = st.selectbox("Employee", employee_ids)
        detail = service.employee(selected)
        if detail["success"]:
            emp = detail["data"]
            st.write(
                f"**{emp['name']}** ({emp['department'] or 'Unassigned'}): "
                f"{emp['current_hours']:.1f}/{emp['capacity_hours']} hours, "
                f"{emp['utilization']:.1f}% ({emp['workload_state']})"
            )
            st.dataframe(pd.DataFrame(emp["tasks"]), use_container_width=True)

    st.subheader("All Tasks")
    st.dataframe(pd.DataFrame(service.tasks()["data"]), use_container_width=True)

with rec_tab:
    st.header("Rebalancing Recommendations")
    rec_data = service.recommendations()["data"]
    st.info(rec_data["message"])
    rows = [
        {
            "priority": r["priority"],
            "task": f"{r['task_id']} {r['task_title']}",
            "load": r["task_load"],
            "from": r["from"]["name"],
            "from util": f"{r['from']['current_utilization']} -> {r['from']['new_utilization']}",
            "to": r["to"]["name"],
            "to util": f"{r['to']['current_utilization']} -> {r['to']['new_utilization']}",
            "reasoning": r["reasoning"],
        }
        for r in rec_data["recommendations"]
    ]
    if rows:
        st.dataframe(pd.DataFrame(rows), use_container_width=True)
    st.json(rec_data["statistics"])

with sim_tab:
    st.header("What-if Simulation")
    task_ids = [t["id"] for t in service.tasks()["data"]]
    employee_ids = [row["id"] for row in summary]

    with st.form("simulation"):
        task_id = st.selectbox("Task", task_ids)
        from_id = st.selectbox("From employee", employee_ids)
        to_id = st.selectbox("To employee", employee_ids)
        submitted = st.form_submit_button("Simulate")

    if submitted:
        result = service.simulate(task_id, from_id, to_id)
        if not result["success"]:
            st.error(result["error"])
        else:
            data = result["data"]
            source, target = data["from"], data["to"]
            c1, c2 = st.columns(2)
            c1.metric(
                source["name"],
                f"{source['new_utilization']:.1f}%",
                f"{source['new_utilization'] - source['current_utilization']:.1f}",
                delta_color="inverse",
            )
            c2.metric(
                target["name"],
                f"{target['new_utilization']:.1f}%",
                f"{target['new_utilization'] - target['current_utilization']:.1f}",
                delta_color="inverse",
            )
            st.subheader("Team metrics")
            st.dataframe(
                pd.DataFrame(data["metrics"]).T,
                use_container_width=True,
            )

with analytics_tab:
    st.header("Analytics")

    gaps = service.skill_gaps()
    st.subheader("Skill Gaps")
    st.json(gaps["summary"])
    gap_rows = gaps["gaps"] + gaps["balanced"] + gaps["surpluses"]
    if gap_rows:
        st.dataframe(pd.DataFrame(gap_rows), use_container_width=True)

    burnout = service.burnout_risk()
    st.subheader("Burnout Risk")
    st.json(burnout["summary"])
    if burnout["at_risk"]:
        st.dataframe(pd.DataFrame(burnout["at_risk"]), use_container_width=True)

    growth = service.growth_opportunities()
    st.subheader("Growth Opportunities")
    st.json(growth["summary"])
    for opportunity in growth["opportunities"]:
        with st.expander(
            f"{opportunity['employee_name']} ({opportunity['current_utilization']:.1f}%)"
        ):
            for rec in opportunity["recommendations"]:
                st.write(f"- **{rec['type']}**: {rec['action']}")

    st.subheader("Forecast")
    forecast = service.forecast()
    for bottleneck in forecast["bottlenecks"]:
        st.error(bottleneck["recommendation"])
    for warning in forecast["warnings"]:
        st.warning(warning["recommendation"])
    show_figure(plot_forecast_heatmap(forecast))

    st.subheader("Trends")
    show_figure(plot_trends(service.trends()))

    st.subheader("Departments")
    departments = service.departments()
    if departments["departments"]:
        dept_df = pd.DataFrame(departments["departments"])
        dept_df["skills"] = dept_df["skills"].apply(", ".join)
        st.dataframe(dept_df, use_container_width=True)
