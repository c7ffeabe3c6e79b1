"""
Configuration management for the application.
"""
from dataclasses import dataclass, field
from typing import Dict, Any, Optional


@dataclass
class RecommendationConfig:
    """Configuration for the rebalancing recommendation engine."""

    target_ceiling: float = 85.0
    max_recommendations: int = 10
    improvement_weight: float = 2.0
    urgency_weight: float = 10.0
    source_utilization_weight: float = 0.5


@dataclass
class BurnoutConfig:
    """Scoring rules for burnout risk."""

    critical_utilization: float = 95.0
    critical_points: int = 40
    high_utilization: float = 85.0
    high_points: int = 25
    max_tasks: int = 5
    task_count_points: int = 20
    complexity_threshold: float = 4.0
    complexity_points: int = 15
    max_urgent_tasks: int = 2
    urgent_points: int = 15
    high_risk_score: int = 60
    medium_risk_score: int = 30


@dataclass
class GrowthConfig:
    """Configuration for growth opportunity discovery."""

    utilization_threshold: float = 70.0
    stretch_complexity: int = 4
    max_matching_tasks: int = 5
    max_skills_to_learn: int = 3
    max_stretch_assignments: int = 3


@dataclass
class ForecastConfig:
    """Configuration for the weekly workload forecast."""

    weeks: int = 8
    bottleneck_utilization: float = 95.0
    warning_overloaded_count: int = 2


@dataclass
class TrendConfig:
    """Configuration for synthetic utilization trends."""

    days: int = 30
    seed: Optional[int] = None


@dataclass
class DataConfig:
    """Location of the employee and task data files."""

    data_dir: str = "data"
    employees_file: str = "employees.json"
    tasks_file: str = "tasks.json"


@dataclass
class AppConfig:
    """Main application configuration."""

    recommendation: RecommendationConfig = field(default_factory=RecommendationConfig)
    burnout: BurnoutConfig = field(default_factory=BurnoutConfig)
    growth: GrowthConfig = field(default_factory=GrowthConfig)
    forecast: ForecastConfig = field(default_factory=ForecastConfig)
    trend: TrendConfig = field(default_factory=TrendConfig)
    data: DataConfig = field(default_factory=DataConfig)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "AppConfig":
        """Create a configuration from a flat dictionary of upper-case keys."""
        # Each section owns a key prefix
        recommendation_config = RecommendationConfig(
            **{
                k.split("_", 1)[1].lower(): v
                for k, v in config_dict.items()
                if k.startswith("REC_")
            }
        )

        burnout_config = BurnoutConfig(
            **{
                k.split("_", 1)[1].lower(): v
                for k, v in config_dict.items()
                if k.startswith("BURNOUT_")
            }
        )

        growth_config = GrowthConfig(
            **{
                k.split("_", 1)[1].lower(): v
                for k, v in config_dict.items()
                if k.startswith("GROWTH_")
            }
        )

        forecast_config = ForecastConfig(
            **{
                k.split("_", 1)[1].lower(): v
                for k, v in config_dict.items()
                if k.startswith("FORECAST_")
            }
        )

        trend_config = TrendConfig(
            days=config_dict.get("TREND_DAYS", 30),
            seed=config_dict.get("TREND_SEED"),
        )

        data_config = DataConfig(
            data_dir=config_dict.get("DATA_DIR", "data"),
            employees_file=config_dict.get("DATA_EMPLOYEES_FILE", "employees.json"),
            tasks_file=config_dict.get("DATA_TASKS_FILE", "tasks.json"),
        )

        return cls(
            recommendation=recommendation_config,
            burnout=burnout_config,
            growth=growth_config,
            forecast=forecast_config,
            trend=trend_config,
            data=data_config,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a flat dictionary."""
        result = {}

        for key, value in vars(self.recommendation).items():
            result[f"REC_{key.upper()}"] = value

        for key, value in vars(self.burnout).items():
            result[f"BURNOUT_{key.upper()}"] = value

        for key, value in vars(self.growth).items():
            result[f"GROWTH_{key.upper()}"] = value

        for key, value in vars(self.forecast).items():
            result[f"FORECAST_{key.upper()}"] = value

        result["TREND_DAYS"] = self.trend.days
        result["TREND_SEED"] = self.trend.seed

        # Data paths use their own naming
        result["DATA_DIR"] = self.data.data_dir
        result["DATA_EMPLOYEES_FILE"] = self.data.employees_file
        result["DATA_TASKS_FILE"] = self.data.tasks_file

        return result
