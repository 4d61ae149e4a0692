"""User activity tracking."""

from tipster.activity.monitor import UserActivityMonitor

__all__ = ["UserActivityMonitor"]
