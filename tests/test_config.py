"""
Tests for configuration loading and validation.
"""
import math
from pathlib import Path

import pytest

from reward_engine.config.loader import BandConfig, EstimatorConfig
from reward_engine.core.types import InvalidConfigurationError, SpreadBand


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in (
        "REWARD_EVENT_SLUG",
        "REWARD_CAPITAL",
        "REWARD_LOG_LEVEL",
        "POLYMARKET_GAMMA_URL",
        "POLYMARKET_CLOB_URL",
    ):
        monkeypatch.delenv(var, raising=False)


class TestLoad:

    def test_defaults(self):
        config = EstimatorConfig.load(None)
        assert config.capital == 1000.0
        assert [b.half_width for b in config.bands] == [0.01, 0.02, 0.03]
        assert config.polymarket.clob_url == "https://clob.polymarket.com"
        assert config.output_format == "text"

    def test_missing_file_uses_defaults(self, tmp_path):
        config = EstimatorConfig.load(tmp_path / "nope.yaml")
        assert config.capital == 1000.0

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "event_slug: some-event\n"
            "capital: 2500\n"
            "market_index: 1\n"
            "bands:\n"
            "  - {label: tight, half_width: 0.005}\n"
            "  - 0.04\n"
            "polymarket:\n"
            "  timeout_sec: 3\n"
            "logging:\n"
            "  level: DEBUG\n"
        )

        config = EstimatorConfig.load(path)

        assert config.event_slug == "some-event"
        assert config.capital == 2500.0
        assert config.market_index == 1
        assert config.spread_bands() == [SpreadBand("tight", 0.005), SpreadBand("4%", 0.04)]
        assert config.polymarket.timeout_sec == 3
        assert config.logging.level == "DEBUG"

    def test_empty_yaml_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert EstimatorConfig.load(path).capital == 1000.0

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("event_slug: from-file\ncapital: 10\n")
        monkeypatch.setenv("REWARD_EVENT_SLUG", "from-env")
        monkeypatch.setenv("REWARD_CAPITAL", "750.5")
        monkeypatch.setenv("POLYMARKET_CLOB_URL", "https://clob.example")

        config = EstimatorConfig.load(path)

        assert config.event_slug == "from-env"
        assert config.capital == 750.5
        assert config.polymarket.clob_url == "https://clob.example"

    def test_bad_capital_env_fails_validation(self, monkeypatch):
        monkeypatch.setenv("REWARD_CAPITAL", "lots")
        config = EstimatorConfig.load(None)
        config.event_slug = "x"
        assert math.isnan(config.capital)
        assert any("capital" in e for e in config.validate())

    def test_shipped_config_is_valid(self):
        path = Path(__file__).parent.parent / "config" / "config.yaml"
        assert EstimatorConfig.load(path).validate() == []


class TestValidate:

    def _valid(self) -> EstimatorConfig:
        config = EstimatorConfig()
        config.event_slug = "some-event"
        return config

    def test_valid(self):
        assert self._valid().validate() == []

    def test_missing_slug(self):
        config = self._valid()
        config.event_slug = ""
        assert any("event_slug" in e for e in config.validate())

    @pytest.mark.parametrize("capital", [0, -5])
    def test_non_positive_capital(self, capital):
        config = self._valid()
        config.capital = capital
        assert any("capital" in e for e in config.validate())

    def test_non_positive_band(self):
        config = self._valid()
        config.bands = [BandConfig(half_width=0.0)]
        assert any("half_width" in e for e in config.validate())

    def test_no_bands(self):
        config = self._valid()
        config.bands = []
        assert "No spread bands configured" in config.validate()

    def test_unknown_output_format(self):
        config = self._valid()
        config.output_format = "xml"
        assert any("output_format" in e for e in config.validate())

    def test_negative_market_index(self):
        config = self._valid()
        config.market_index = -1
        assert any("market_index" in e for e in config.validate())

    def test_url_without_slug(self):
        config = self._valid()
        config.event_slug = "https://polymarket.com/event/"
        assert any("No event slug" in e for e in config.validate())

    @pytest.mark.parametrize("level", ["verbose", "", None])
    def test_unknown_log_level(self, level):
        config = self._valid()
        config.logging.level = level
        assert any("logging.level" in e for e in config.validate())

    def test_log_level_case_insensitive(self):
        config = self._valid()
        config.logging.level = "debug"
        assert config.validate() == []

    def test_unknown_log_level_from_env(self, monkeypatch):
        monkeypatch.setenv("REWARD_LOG_LEVEL", "verbose")
        config = EstimatorConfig.load(None)
        config.event_slug = "some-event"
        assert any("logging.level" in e for e in config.validate())

    def test_spread_bands_rejects_invalid_width(self):
        config = self._valid()
        config.bands = [BandConfig(half_width=-0.01)]
        with pytest.raises(InvalidConfigurationError):
            config.spread_bands()
