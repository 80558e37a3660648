"""Reward report output (console text or JSON)."""
import json
import sys
from typing import TextIO

from ..core.types import MarketContext, OutcomeReport


class RewardReporter:
    """Prints per-outcome reward estimates for one market."""

    def __init__(self, output_format: str = "text", stream: TextIO | None = None):
        self._format = output_format
        self._out = stream or sys.stdout

    def report(
        self,
        market: MarketContext,
        capital: float,
        reports: list[OutcomeReport],
    ) -> None:
        """Write the full report for a market."""
        if self._format == "json":
            self._report_json(market, capital, reports)
        else:
            self._report_text(market, capital, reports)

    def _report_json(self, market: MarketContext, capital: float, reports: list[OutcomeReport]) -> None:
        payload = {
            "event_slug": market.slug,
            "question": market.question,
            "daily_reward_pool": market.daily_reward_pool,
            "capital": capital,
            "outcomes": [r.to_dict() for r in reports],
        }
        print(json.dumps(payload, indent=2), file=self._out)

    def _report_text(self, market: MarketContext, capital: float, reports: list[OutcomeReport]) -> None:
        out = self._out
        print("\n--- Polymarket Reward Calculator ---", file=out)
        print(f"Target Event:      {market.slug or '-'}", file=out)
        print(f"Investment:        ${capital:,.2f}\n", file=out)
        print(f"Market Question:   {market.question}", file=out)
        print(f"Daily Reward Pool: ${market.daily_reward_pool:.2f}\n", file=out)

        for report in reports:
            self._print_outcome(report)

    def _print_outcome(self, report: OutcomeReport) -> None:
        out = self._out
        if not report.is_rated:
            print(f"Outcome: {report.outcome.label} (skipped: {report.skip_reason.value})\n", file=out)
            return

        print(f"Outcome: {report.outcome.label} (Mid Price: {report.mid_price:.4f})", file=out)
        for est in report.estimates:
            print(f"  Spread +/- {est.band.label} (${est.min_price:.3f} - ${est.max_price:.3f}):", file=out)
            print(
                f"    Depth: ${est.total_depth_usd:.2f} "
                f"(Bids: ${est.bid_depth_usd:.0f}, Asks: ${est.ask_depth_usd:.0f})",
                file=out,
            )
            print(f"    Share: {est.user_share:.2%} of ${est.outcome_reward_pool:.2f}", file=out)
            print(f"    Est. Daily Reward: ${est.estimated_daily_reward:.2f}", file=out)
        print("", file=out)
