"""Configuration management for NCV Guard."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml

MS_PER_S = 1000.0


@dataclass
class PredictionConfig:
    """Object history and motion prediction configuration."""

    model: str = "linear_regression"
    max_historical_data_age: int = 3000  # ms
    distance_step: float = 2.0  # m
    time_duration: float = 10.0  # s


@dataclass
class CollisionConfig:
    """Conflict checking and replan policy configuration."""

    replan_period: float = 5.0  # s
    downtrack_buffer: float = 2.0  # m
    crosstrack_buffer: float = 0.5  # m
    time_margin: float = 0.1  # s
    longitudinal_bias: float = 0.0
    lateral_bias: float = 0.0
    temporal_bias: float = 0.0
    collision_gated_replan: bool = False
    gated_margin_factor: float = 1.2


@dataclass
class VehicleConfig:
    """Host vehicle dimensions."""

    length: float = 5.0  # m
    width: float = 2.0  # m


@dataclass
class SpatialIndexConfig:
    """Cell sizes of the spatial hash used for conflict queries."""

    cell_downtrack_size: float = 5.0  # m
    cell_crosstrack_size: float = 5.0  # m
    cell_time_size: float = 0.5  # s


@dataclass
class CollisionCheckerConfig:
    """Main NCV Guard configuration."""

    interpolator: str = "linear"
    include_adjacent_lanes: bool = False
    normalize_object_ids: bool = True
    prediction: PredictionConfig = field(default_factory=PredictionConfig)
    collision: CollisionConfig = field(default_factory=CollisionConfig)
    vehicle: VehicleConfig = field(default_factory=VehicleConfig)
    spatial_index: SpatialIndexConfig = field(default_factory=SpatialIndexConfig)

    @property
    def replan_period_ms(self) -> int:
        """Replan period converted to milliseconds."""
        return int(self.collision.replan_period * MS_PER_S)

    @property
    def downtrack_margin(self) -> float:
        """Half the vehicle length plus the downtrack buffer."""
        return self.vehicle.length / 2.0 + self.collision.downtrack_buffer

    @property
    def crosstrack_margin(self) -> float:
        """Half the vehicle width plus the crosstrack buffer."""
        return self.vehicle.width / 2.0 + self.collision.crosstrack_buffer

    @property
    def cell_sizes(self) -> List[float]:
        return [
            self.spatial_index.cell_downtrack_size,
            self.spatial_index.cell_crosstrack_size,
            self.spatial_index.cell_time_size,
        ]

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "CollisionCheckerConfig":
        """Load configuration from YAML file.

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            CollisionCheckerConfig instance

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            ValueError: If YAML is invalid
        """
        yaml_file = Path(yaml_path)
        if not yaml_file.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_file) as f:
            config_dict = yaml.safe_load(f)

        if config_dict is None:
            raise ValueError(f"Empty or invalid YAML file: {yaml_path}")

        return cls.from_dict(config_dict)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "CollisionCheckerConfig":
        """Create configuration from dictionary.

        Args:
            config_dict: Configuration dictionary

        Returns:
            CollisionCheckerConfig instance
        """
        # Extract nested configs
        prediction_config = PredictionConfig(**config_dict.get("prediction", {}))
        collision_config = CollisionConfig(**config_dict.get("collision", {}))
        vehicle_config = VehicleConfig(**config_dict.get("vehicle", {}))
        spatial_config = SpatialIndexConfig(**config_dict.get("spatial_index", {}))

        return cls(
            interpolator=config_dict.get("interpolator", "linear"),
            include_adjacent_lanes=config_dict.get("include_adjacent_lanes", False),
            normalize_object_ids=config_dict.get("normalize_object_ids", True),
            prediction=prediction_config,
            collision=collision_config,
            vehicle=vehicle_config,
            spatial_index=spatial_config,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary.

        Returns:
            Configuration as nested dictionary
        """
        return {
            "interpolator": self.interpolator,
            "include_adjacent_lanes": self.include_adjacent_lanes,
            "normalize_object_ids": self.normalize_object_ids,
            "prediction": {
                "model": self.prediction.model,
                "max_historical_data_age": self.prediction.max_historical_data_age,
                "distance_step": self.prediction.distance_step,
                "time_duration": self.prediction.time_duration,
            },
            "collision": {
                "replan_period": self.collision.replan_period,
                "downtrack_buffer": self.collision.downtrack_buffer,
                "crosstrack_buffer": self.collision.crosstrack_buffer,
                "time_margin": self.collision.time_margin,
                "longitudinal_bias": self.collision.longitudinal_bias,
                "lateral_bias": self.collision.lateral_bias,
                "temporal_bias": self.collision.temporal_bias,
                "collision_gated_replan": self.collision.collision_gated_replan,
                "gated_margin_factor": self.collision.gated_margin_factor,
            },
            "vehicle": {
                "length": self.vehicle.length,
                "width": self.vehicle.width,
            },
            "spatial_index": {
                "cell_downtrack_size": self.spatial_index.cell_downtrack_size,
                "cell_crosstrack_size": self.spatial_index.cell_crosstrack_size,
                "cell_time_size": self.spatial_index.cell_time_size,
            },
        }

    def save_yaml(self, yaml_path: str):
        """Save configuration to YAML file.

        Args:
            yaml_path: Path to save YAML file
        """
        yaml_file = Path(yaml_path)
        yaml_file.parent.mkdir(parents=True, exist_ok=True)

        with open(yaml_file, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def validate(self) -> List[str]:
        """Validate configuration values.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        # Validate prediction config
        if self.prediction.max_historical_data_age < 0:
            errors.append("prediction.max_historical_data_age must be >= 0")
        if self.prediction.distance_step <= 0:
            errors.append("prediction.distance_step must be > 0")
        if self.prediction.time_duration <= 0:
            errors.append("prediction.time_duration must be > 0")

        # Validate collision config
        if self.collision.replan_period < 0:
            errors.append("collision.replan_period must be >= 0")
        if self.collision.time_margin < 0:
            errors.append("collision.time_margin must be >= 0")
        if self.collision.downtrack_buffer < 0:
            errors.append("collision.downtrack_buffer must be >= 0")
        if self.collision.crosstrack_buffer < 0:
            errors.append("collision.crosstrack_buffer must be >= 0")

        # Validate vehicle config
        if self.vehicle.length <= 0:
            errors.append("vehicle.length must be > 0")
        if self.vehicle.width <= 0:
            errors.append("vehicle.width must be > 0")

        for name, size in zip(
            ("cell_downtrack_size", "cell_crosstrack_size", "cell_time_size"),
            self.cell_sizes,
        ):
            if size <= 0:
                errors.append(f"spatial_index.{name} must be > 0")

        return errors
