"""Monitor module."""
from reward_engine.monitor.reward_monitor import RewardMonitor
from reward_engine.monitor.reporter import RewardReporter

__all__ = ["RewardMonitor", "RewardReporter"]
