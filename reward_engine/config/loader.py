"""
Configuration management for the reward estimator.

Loads config from a YAML file and environment variables.
Environment variables take precedence over file config; CLI flags are
applied on top by the caller.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import math
import os

import yaml

from ..core.types import DEFAULT_BANDS, SpreadBand
from ..gateways.polymarket_rest import PolymarketConfig, extract_slug

OUTPUT_FORMATS = ("text", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def is_valid_log_level(level) -> bool:
    return isinstance(level, str) and level.upper() in LOG_LEVELS


@dataclass
class BandConfig:
    """Spread band as written in config (label optional)."""
    half_width: float
    label: str = ""

    def to_band(self) -> SpreadBand:
        if self.label:
            return SpreadBand(label=self.label, half_width=self.half_width)
        return SpreadBand.from_half_width(self.half_width)


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    file_path: Optional[str] = None
    max_file_size_mb: int = 10
    backup_count: int = 3
    json_format: bool = False


@dataclass
class EstimatorConfig:
    """Top-level configuration."""
    polymarket: PolymarketConfig = field(default_factory=PolymarketConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    bands: list[BandConfig] = field(
        default_factory=lambda: [BandConfig(b.half_width, b.label) for b in DEFAULT_BANDS]
    )

    event_slug: str = ""                # From env: REWARD_EVENT_SLUG
    capital: float = 1000.0             # USD committed as liquidity
    market_index: int = 0               # Which market of the event to rate
    output_format: str = "text"         # "text" or "json"

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "EstimatorConfig":
        """
        Load configuration from file and environment variables.
        Environment variables override file config.
        """
        config = cls()

        if config_path and config_path.exists():
            with open(config_path) as f:
                file_config = yaml.safe_load(f)
                config = cls._merge_dict(config, file_config)

        config.event_slug = os.getenv("REWARD_EVENT_SLUG", config.event_slug)
        config.logging.level = os.getenv("REWARD_LOG_LEVEL", config.logging.level)
        config.polymarket.gamma_url = os.getenv("POLYMARKET_GAMMA_URL", config.polymarket.gamma_url)
        config.polymarket.clob_url = os.getenv("POLYMARKET_CLOB_URL", config.polymarket.clob_url)

        capital = os.getenv("REWARD_CAPITAL")
        if capital:
            try:
                config.capital = float(capital)
            except ValueError:
                config.capital = math.nan   # Reported by validate()

        return config

    @classmethod
    def _merge_dict(cls, config: "EstimatorConfig", data: dict) -> "EstimatorConfig":
        """Merge dictionary into config object."""
        if not data:
            return config

        if "polymarket" in data:
            for k, v in data["polymarket"].items():
                if hasattr(config.polymarket, k):
                    setattr(config.polymarket, k, v)

        if "logging" in data:
            for k, v in data["logging"].items():
                if hasattr(config.logging, k):
                    setattr(config.logging, k, v)

        if "bands" in data:
            config.bands = [
                BandConfig(half_width=float(b["half_width"]), label=str(b.get("label", "")))
                if isinstance(b, dict)
                else BandConfig(half_width=float(b))
                for b in data["bands"]
            ]

        if "capital" in data:
            config.capital = float(data["capital"])

        for key in ["event_slug", "market_index", "output_format"]:
            if key in data:
                setattr(config, key, data[key])

        return config

    def spread_bands(self) -> list[SpreadBand]:
        """Convert configured bands. Raises InvalidConfigurationError on bad widths."""
        return [b.to_band() for b in self.bands]

    def validate(self) -> list[str]:
        """
        Validate configuration. Returns list of error messages.
        Empty list means config is valid.
        """
        errors = []

        if not self.event_slug:
            errors.append("event_slug not set (REWARD_EVENT_SLUG or --event)")
        else:
            try:
                extract_slug(self.event_slug)
            except ValueError as e:
                errors.append(str(e))
        if not math.isfinite(self.capital) or self.capital <= 0:
            errors.append(f"capital must be positive, got {self.capital}")
        if not isinstance(self.market_index, int) or self.market_index < 0:
            errors.append(f"market_index must be a non-negative integer, got {self.market_index}")
        if self.output_format not in OUTPUT_FORMATS:
            errors.append(f"output_format must be one of {OUTPUT_FORMATS}, got {self.output_format!r}")

        if not self.bands:
            errors.append("No spread bands configured")
        for band in self.bands:
            if not math.isfinite(band.half_width) or band.half_width <= 0:
                errors.append(f"Band half_width must be positive, got {band.half_width}")

        if self.polymarket.timeout_sec <= 0:
            errors.append("polymarket.timeout_sec must be positive")

        if not is_valid_log_level(self.logging.level):
            errors.append(f"logging.level must be one of {LOG_LEVELS}, got {self.logging.level!r}")

        return errors
