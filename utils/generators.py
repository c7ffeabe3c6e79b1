"""
Utility functions for generating employee and task records.
"""
import json
import os
import random
from datetime import date, timedelta
from typing import List, Dict, Optional, Tuple, Any

from faker import Faker

from utils.logger import logger


class DataGenerator:
    """Generator for synthetic employee and task records."""

    def __init__(self, seed: int = 42, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the generator with a specific seed and optional configuration.

        Args:
            seed: Random seed for reproducibility
            config: Optional configuration settings
        """
        self.seed = seed
        self.fake = Faker()
        self.fake.seed_instance(seed)
        self.random = random.Random(seed)

        self.config = config or {
            "skills": ["Python", "Angular", "SQL", "DevOps", "Design", "Testing"],
            "departments": ["Engineering", "Product", "Operations"],
            "capacity_choices": [32, 40, 40, 40],
            "skills_per_employee_max": 3,
            "task_hours_min": 2,
            "task_hours_max": 16,
            "unassigned_ratio": 0.15,
            "due_within_days": 56,
            "start_date": date.today(),
        }

    def generate_employees(self, num_employees: int) -> List[Dict[str, Any]]:
        """
        Generate employee records.

        Employees are dealt skills round-robin first so that every skill has
        at least one holder, then receive a few random extra skills.

        Args:
            num_employees: Number of employees to generate

        Returns:
            List[Dict[str, Any]]: Employee records in data-file format
        """
        skills = self.config["skills"]
        records = []

        for i in range(num_employees):
            primary = skills[i % len(skills)]
            extra_count = self.random.randint(0, self.config["skills_per_employee_max"] - 1)
            extras = self.random.sample(
                [s for s in skills if s != primary], min(extra_count, len(skills) - 1)
            )

            record = {
                "id": f"E{i + 1:03d}",
                "name": self.fake.name(),
                "skills": [primary] + extras,
                "capacityHours": self.random.choice(self.config["capacity_choices"]),
                "department": self.random.choice(self.config["departments"]),
            }
            records.append(record)
            logger.debug(f"Created employee: {record}")

        logger.info(f"Generated {len(records)} employees.")
        return records

    def generate_tasks(
        self, num_tasks: int, employees: List[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        """
        Generate task records and assign most of them to skilled employees.

        Assignment is deliberately uneven so the scenario contains both
        overloaded and idle employees.

        Args:
            num_tasks: Number of tasks to generate
            employees: Employee records to assign tasks to

        Returns:
            List[Dict[str, Any]]: Task records in data-file format
        """
        skills = self.config["skills"]
        start = self.config["start_date"]
        records = []

        # Earlier employees are favoured to create imbalance
        weights = [1.0 / (i + 1) for i in range(len(employees))]

        for i in range(num_tasks):
            skill = self.random.choice(skills)

            assigned_to = None
            if self.random.random() >= self.config["unassigned_ratio"]:
                holders = [
                    (emp, w) for emp, w in zip(employees, weights) if skill in emp["skills"]
                ]
                if holders:
                    chosen = self.random.choices(
                        [emp for emp, _ in holders], weights=[w for _, w in holders]
                    )[0]
                    assigned_to = chosen["id"]

            due = start + timedelta(days=self.random.randint(0, self.config["due_within_days"]))

            records.append(
                {
                    "id": f"T{i + 1:03d}",
                    "title": f"{self.fake.bs().capitalize()} ({skill})",
                    "estimatedHours": self.random.randint(
                        self.config["task_hours_min"], self.config["task_hours_max"]
                    ),
                    "complexity": self.random.randint(1, 5),
                    "urgency": self.random.randint(1, 3),
                    "requiredSkill": skill,
                    "assignedTo": assigned_to,
                    "dueDate": due.isoformat(),
                }
            )

        unassigned = sum(1 for r in records if r["assignedTo"] is None)
        logger.info(f"Generated {len(records)} tasks, {unassigned} unassigned.")
        return records

    def generate_scenario(
        self, num_tasks: int, num_employees: int
    ) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
        """
        Generate a complete scenario with employees and tasks.

        Args:
            num_tasks: Number of tasks to generate
            num_employees: Number of employees to generate

        Returns:
            Tuple of employee records and task records
        """
        employees = self.generate_employees(num_employees)
        tasks = self.generate_tasks(num_tasks, employees)
        return employees, tasks

    def write_scenario(
        self,
        directory: str,
        num_tasks: int,
        num_employees: int,
        employees_file: str = "employees.json",
        tasks_file: str = "tasks.json",
    ) -> Tuple[str, str]:
        """Generate a scenario and write it as data files the store can read."""
        employees, tasks = self.generate_scenario(num_tasks, num_employees)

        os.makedirs(directory, exist_ok=True)
        employees_path = os.path.join(directory, employees_file)
        tasks_path = os.path.join(directory, tasks_file)

        with open(employees_path, "w", encoding="utf-8") as f:
            json.dump(employees, f, indent=2)
        with open(tasks_path, "w", encoding="utf-8") as f:
            json.dump(tasks, f, indent=2)

        logger.info(f"Scenario written to {directory}")
        return employees_path, tasks_path
