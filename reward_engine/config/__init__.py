"""Configuration loading."""
from .loader import BandConfig, EstimatorConfig, LoggingConfig

__all__ = ["BandConfig", "EstimatorConfig", "LoggingConfig"]
