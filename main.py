"""
Main application entry point for the workload analysis system.
"""
import os
import sys
import json
import logging
import argparse
from datetime import date
from typing import Dict, Optional, Any, List

import matplotlib.pyplot as plt

from config import AppConfig
from utils.logger import logger, setup_logger
from utils.generators import DataGenerator
from workload.store import WorkloadStore, DataLoadError
from workload.service import WorkloadService
from visualization import (
    plot_utilization_chart,
    plot_state_distribution,
    plot_forecast_heatmap,
    plot_trends,
    export_to_excel,
)


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load configuration from file or use defaults.

    Args:
        config_path: Path to configuration file

    Returns:
        AppConfig: Application configuration
    """
    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, "r") as f:
                config_dict = json.load(f)
            return AppConfig.from_dict(config_dict)
        except (OSError, ValueError, TypeError) as e:
            logger.error(f"Error loading config from {config_path}: {e}")
            logger.info("Using default configuration.")
            return AppConfig()
    else:
        return AppConfig()


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', expected YYYY-MM-DD")


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser with one subcommand per report."""
    parser = argparse.ArgumentParser(description="Workload Analysis and Rebalancing System")
    parser.add_argument("--config", help="Path to configuration file")
    parser.add_argument("--data-dir", help="Directory holding employees.json and tasks.json")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set the logging level",
    )
    parser.add_argument("--output", help="Write JSON output to this file instead of stdout")
    parser.add_argument("--log-file", help="Also write log records to this file")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("summary", help="Per-employee workload summary")
    subparsers.add_parser("tasks", help="All tasks with computed load")

    employee = subparsers.add_parser("employee", help="One employee with assigned tasks")
    employee.add_argument("employee_id")

    subparsers.add_parser("imbalances", help="Overloaded and idle employees")
    subparsers.add_parser("recommendations", help="Ranked task reassignment suggestions")

    simulate = subparsers.add_parser("simulate", help="Dry-run moving one task")
    simulate.add_argument("--task", dest="task_id", required=True)
    simulate.add_argument("--from", dest="from_id", required=True)
    simulate.add_argument("--to", dest="to_id", required=True)

    subparsers.add_parser("stats", help="Team-level statistics")
    subparsers.add_parser("skill-gaps", help="Skill demand versus supply")
    subparsers.add_parser("burnout", help="Burnout risk assessment")
    subparsers.add_parser("growth", help="Growth opportunities for idle employees")

    forecast = subparsers.add_parser("forecast", help="Weekly workload forecast")
    forecast.add_argument("--today", type=_parse_date, help="Reference date (YYYY-MM-DD)")

    trends = subparsers.add_parser("trends", help="Synthetic utilization trend")
    trends.add_argument("--today", type=_parse_date, help="Reference date (YYYY-MM-DD)")

    subparsers.add_parser("departments", help="Per-department utilization")

    export = subparsers.add_parser("export", help="Write the Excel report and charts")
    export.add_argument("--excel", default="output/workload_report.xlsx")
    export.add_argument("--plots-dir", default="plots")

    generate = subparsers.add_parser("generate", help="Write a synthetic data set")
    generate.add_argument("--employees", type=int, default=12)
    generate.add_argument("--tasks", type=int, default=40)
    generate.add_argument("--seed", type=int, default=42)

    return parser


def write_output(payload: Any, output_path: Optional[str] = None) -> None:
    """Serialize a result as JSON to a file or stdout."""
    text = json.dumps(payload, indent=2, default=str)
    if output_path:
        directory = os.path.dirname(output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(output_path, "w") as f:
            f.write(text)
        logger.info(f"Output saved to {output_path}")
    else:
        print(text)


def run_export(service: WorkloadService, excel_path: str, plots_dir: str) -> Dict[str, Any]:
    """
    Produce the Excel report and the chart images.

    Args:
        service: Workload service bound to the data set
        excel_path: Destination of the workbook
        plots_dir: Directory for chart images

    Returns:
        Dict[str, Any]: Paths written and whether the workbook was saved
    """
    summary = service.summary()["data"]
    statistics = service.stats()["data"]
    recommendations = service.recommendations()["data"]
    skill_gaps = service.skill_gaps()
    forecast = service.forecast()
    trends = service.trends()

    store = service.store
    saved = export_to_excel(
        excel_path,
        store.employees,
        store.tasks,
        recommendations,
        skill_gaps,
        statistics,
    )

    charts = {
        "utilization": os.path.join(plots_dir, "utilization.png"),
        "distribution": os.path.join(plots_dir, "state_distribution.png"),
        "forecast": os.path.join(plots_dir, "forecast_heatmap.png"),
        "trends": os.path.join(plots_dir, "trends.png"),
    }
    figures = [
        plot_utilization_chart(summary, filename=charts["utilization"]),
        plot_state_distribution(statistics["workload_distribution"], filename=charts["distribution"]),
        plot_forecast_heatmap(forecast, filename=charts["forecast"]),
        plot_trends(trends, filename=charts["trends"]),
    ]
    for fig in figures:
        plt.close(fig)

    return {"success": saved, "excel": excel_path, "charts": charts}


def run(args: argparse.Namespace) -> int:
    """
    Execute one parsed command.

    Args:
        args: Parsed command-line arguments

    Returns:
        int: Process exit code
    """
    config = load_config(args.config)
    if args.data_dir:
        config.data.data_dir = args.data_dir

    if args.command == "generate":
        generator = DataGenerator(seed=args.seed)
        employees_path, tasks_path = generator.write_scenario(
            config.data.data_dir,
            num_tasks=args.tasks,
            num_employees=args.employees,
            employees_file=config.data.employees_file,
            tasks_file=config.data.tasks_file,
        )
        write_output({"employees": employees_path, "tasks": tasks_path}, args.output)
        return 0

    service = WorkloadService(WorkloadStore(config.data), config)

    handlers = {
        "summary": service.summary,
        "tasks": service.tasks,
        "employee": lambda: service.employee(args.employee_id),
        "imbalances": service.imbalances,
        "recommendations": service.recommendations,
        "simulate": lambda: service.simulate(args.task_id, args.from_id, args.to_id),
        "stats": service.stats,
        "skill-gaps": service.skill_gaps,
        "burnout": service.burnout_risk,
        "growth": service.growth_opportunities,
        "forecast": lambda: service.forecast(args.today),
        "trends": lambda: service.trends(args.today),
        "departments": service.departments,
        "export": lambda: run_export(service, args.excel, args.plots_dir),
    }

    try:
        result = handlers[args.command]()
    except DataLoadError as e:
        logger.error(f"{args.command} failed: {e}")
        write_output({"success": False, "error": str(e)}, args.output)
        return 1

    write_output(result, args.output)
    if isinstance(result, dict) and result.get("success") is False:
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Set up logging
    setup_logger(level=getattr(logging, args.log_level), log_file=args.log_file)

    return run(args)


if __name__ == "__main__":
    sys.exit(main())
