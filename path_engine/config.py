"""Engine configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables.

    Priority: explicit function arguments > environment variables > defaults
    """

    model_config = SettingsConfigDict(
        env_prefix="PATH_ENGINE_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Hit-testing tolerances (world units)
    hit_tolerance: float = 10.0  # hover over a segment or anchor
    context_menu_tolerance: float = 15.0  # add/delete point from a context menu
    shape_hit_tolerance: float = 5.0  # whole-shape hit test

    # Curve projection
    curve_samples: int = 50  # coarse samples before ternary refinement
    refine_iterations: int = 10  # ternary search iterations

    # Arc sampling
    arc_bounds_samples: int = 16  # points per arc for bounding boxes
    arc_hit_samples: int = 50  # polyline pieces per arc for stroke hit-testing
    fill_samples: int = 10  # points per curve for fill containment

    # Editing
    smooth_factor: float = 0.33  # control point distance as fraction of a half-segment

    # Logging
    log_json: bool = False
    log_level: str = "INFO"
    log_file: Path | None = None  # every record, rotated
    error_log_file: Path | None = None  # ERROR and above, rotated


settings = Settings()
