#!/usr/bin/env python
"""
Polymarket Reward Estimator CLI

Usage:
    python main.py --event russia-x-ukraine-ceasefire-in-2025
    python main.py --event <slug> --capital 5000 --band 0.01 --band 0.05
    python main.py -c config/config.yaml --json
    python main.py -c config/config.yaml --validate
"""
import argparse
import asyncio
import sys
from pathlib import Path

import httpx
from dotenv import load_dotenv

from reward_engine.config.loader import BandConfig, EstimatorConfig, is_valid_log_level
from reward_engine.core.reward_estimator import RewardEstimator
from reward_engine.core.types import InvalidConfigurationError
from reward_engine.gateways.polymarket_rest import ClobClient, GammaClient, PolymarketError
from reward_engine.monitor.reporter import RewardReporter
from reward_engine.monitor.reward_monitor import RewardMonitor
from reward_engine.utils.logging import get_logger, setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Polymarket liquidity reward estimator")

    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=Path("config/config.yaml"),
        help="Path to configuration file (default: config/config.yaml)",
    )
    parser.add_argument(
        "--event",
        type=str,
        default=None,
        help="Event slug or polymarket.com event URL",
    )
    parser.add_argument(
        "--capital",
        type=float,
        default=None,
        help="Capital committed as liquidity, USD",
    )
    parser.add_argument(
        "--band",
        type=float,
        action="append",
        default=None,
        help="Spread half-width around mid (repeatable, e.g. --band 0.01 --band 0.02)",
    )
    parser.add_argument(
        "--market-index",
        type=int,
        default=None,
        help="Which market of the event to rate (default: 0)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate configuration and exit",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> EstimatorConfig:
    """Load file/env config and apply CLI overrides."""
    config = EstimatorConfig.load(args.config)

    if args.event is not None:
        config.event_slug = args.event
    if args.capital is not None:
        config.capital = args.capital
    if args.band:
        config.bands = [BandConfig(half_width=h) for h in args.band]
    if args.market_index is not None:
        config.market_index = args.market_index
    if args.json:
        config.output_format = "json"
    if args.log_level:
        config.logging.level = args.log_level

    return config


async def main(config: EstimatorConfig) -> int:
    """
    Run one estimation pass.

    Returns:
        Exit code (0 for success)
    """
    logger = get_logger("reward_engine.main")

    try:
        estimator = RewardEstimator(capital=config.capital, bands=config.spread_bands())
    except InvalidConfigurationError as e:
        logger.error(f"Config error: {e}")
        return 2

    reporter = RewardReporter(output_format=config.output_format)

    async with GammaClient(config.polymarket) as gamma, ClobClient(config.polymarket) as clob:
        monitor = RewardMonitor(estimator=estimator, gamma=gamma, clob=clob, reporter=reporter)
        try:
            await monitor.run(config.event_slug, market_index=config.market_index)
        except PolymarketError as e:
            logger.error(str(e))
            return 1
        except httpx.HTTPError as e:
            logger.error(f"Event fetch failed: {e}")
            return 1

    return 0


def cli(argv: list[str] | None = None) -> None:
    """Command-line interface entry point."""
    load_dotenv()
    args = parse_args(argv)
    config = build_config(args)

    errors = config.validate()
    if args.validate:
        if errors:
            print("Configuration errors:")
            for error in errors:
                print(f"  - {error}")
            sys.exit(1)
        print("Configuration is valid")
        sys.exit(0)

    # An unknown level is already in `errors`; log it at INFO
    level = config.logging.level if is_valid_log_level(config.logging.level) else "INFO"
    setup_logging(
        level=level,
        file_path=config.logging.file_path,
        max_file_size_mb=config.logging.max_file_size_mb,
        backup_count=config.logging.backup_count,
        json_format=config.logging.json_format,
    )

    if errors:
        logger = get_logger("reward_engine.main")
        for error in errors:
            logger.error(f"Config error: {error}")
        sys.exit(2)

    sys.exit(asyncio.run(main(config)))


if __name__ == "__main__":
    cli()
