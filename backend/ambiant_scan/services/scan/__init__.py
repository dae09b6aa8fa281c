"""Scan orchestrator and snapshot normalization."""

from .normalizer import (
    aqi_level,
    model_environmental_data,
    uv_level,
    weather_description,
    wind_description,
    wind_direction_label,
)
from .service import ScanOrchestratorService

__all__ = [
    "ScanOrchestratorService",
    "aqi_level",
    "model_environmental_data",
    "uv_level",
    "weather_description",
    "wind_description",
    "wind_direction_label",
]
