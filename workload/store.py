"""
In-memory employee and task collections with an explicit load/reset lifecycle.
"""
import json
import os
from typing import List, Dict, Any, Optional, Tuple

from models import Task, Employee
from config import DataConfig
from workload.aggregator import recompute_loads
from utils.validators import validate_records
from utils.logger import logger


class DataLoadError(Exception):
    """Raised when the employee or task data cannot be read."""


class WorkloadStore:
    """
    Holds the current employees and tasks.

    ``load`` replaces both collections wholesale and recomputes every
    employee's hours. A failed load raises ``DataLoadError`` and leaves the
    previous collections untouched.
    """

    def __init__(self, config: Optional[DataConfig] = None):
        self.config = config or DataConfig()
        self.employees: List[Employee] = []
        self.tasks: List[Task] = []

    @property
    def employees_path(self) -> str:
        return os.path.join(self.config.data_dir, self.config.employees_file)

    @property
    def tasks_path(self) -> str:
        return os.path.join(self.config.data_dir, self.config.tasks_file)

    def read_records(self) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
        """Read the raw employee and task records from the data files."""
        try:
            with open(self.employees_path, "r", encoding="utf-8") as f:
                employee_records = json.load(f)
            with open(self.tasks_path, "r", encoding="utf-8") as f:
                task_records = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Error loading data from {self.config.data_dir}: {e}")
            raise DataLoadError("Failed to load data") from e

        if not isinstance(employee_records, list) or not isinstance(task_records, list):
            logger.error("Data files must each contain a JSON array of records.")
            raise DataLoadError("Failed to load data")

        return employee_records, task_records

    def load(self) -> None:
        """Reload both collections from disk and recompute loads."""
        employee_records, task_records = self.read_records()
        self.load_records(employee_records, task_records)

    def load_records(
        self,
        employee_records: List[Dict[str, Any]],
        task_records: List[Dict[str, Any]],
    ) -> None:
        """
        Replace the collections from already-parsed records.

        Args:
            employee_records: Flat employee records
            task_records: Flat task records
        """
        try:
            validate_records(employee_records, task_records)
            employees = [Employee.from_record(r) for r in employee_records]
            tasks = [Task.from_record(r) for r in task_records]
        except (AttributeError, TypeError, ValueError) as e:
            logger.error(f"Malformed data records: {e}")
            raise DataLoadError("Failed to load data") from e

        recompute_loads(employees, tasks)

        self.employees = employees
        self.tasks = tasks
        logger.debug(f"Loaded {len(employees)} employees and {len(tasks)} tasks.")

    def reset(self) -> None:
        """Drop all loaded data."""
        self.employees = []
        self.tasks = []
