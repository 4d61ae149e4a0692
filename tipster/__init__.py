"""tipster - proactive tip decisions, cooldowns and timers."""

__version__ = "0.1.0"
__logo__ = "💡"
