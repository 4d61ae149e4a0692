"""Event bus for decoupled signal delivery."""

from tipster.bus import events
from tipster.bus.emitter import EventEmitter

__all__ = ["EventEmitter", "events"]
