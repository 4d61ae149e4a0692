"""Centralized defaults for the message catalog, storage keys and activity windows."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

DEFAULT_KEY_PREFIX = "tipster"

DEFAULT_COOLDOWN_HOURS = 24

DEFAULT_MESSAGES: dict[str, dict[str, dict[str, Any]]] = {
    "in": {
        "greeting": {
            "text": "Hi! I can help you pick a product or place an order. Just write to me",
            "delay": 600,
        },
        "followup": {
            "text": "Still thinking? Happy to help!",
            "delay": 15000,
        },
        "fallback": {
            "text": "Something went wrong, please call us",
            "delay": 0,
        },
        "error": {
            "text": "Something went wrong, please call us",
            "delay": 0,
        },
    },
    "out": {
        "welcome": {
            "text": "Ready to help! Click to start a chat",
            "delay": 10000,
            "duration": 8000,
            "disable": False,
        },
        "followup": {
            "text": "Still have questions? I'm right here",
            "delay": 30000,
            "duration": 10000,
            "cooldown_hours": 6,
        },
        "returning": {
            "text": "Welcome back! Shall we continue?",
            "delay": 10000,
            "duration": 10000,
            "cooldown_hours": 6,
        },
        "reconnect": {
            "text": "Good to see you again! Anything else I can help with?",
            "delay": 8000,
            "duration": 10000,
        },
        "active_return": {
            "text": "You're back. The chat is open whenever you need it",
            "delay": 5000,
            "duration": 7000,
        },
    },
}

# (section, name) -> key suffix; the configured prefix is prepended.
DEFAULT_STORAGE_KEYS: dict[str, dict[str, str]] = {
    "CHAT": {
        "CHAT_OPEN": "ui:chat:open",
        "CHAT_CLOSE": "ui:chat:close",
        "MESSAGE_SENT": "ui:chat:message-sent",
        "LAST_MESSAGE_SENT": "ui:chat:last-message-sent",
    },
    "OUTER_TIP": {
        "WELCOME_SHOWN": "ui:outer-tip:welcome-shown",
        "FOLLOWUP_SHOWN": "ui:outer-tip:followup-shown",
        "RETURNING_SHOWN": "ui:outer-tip:returning-shown",
        "ACTIVE_RETURN_SHOWN": "ui:outer-tip:active-return-shown",
        "RECONNECT_SHOWN": "ui:outer-tip:reconnect-shown",
    },
    "INNER_TIP": {
        "GREETING_SHOWN": "ui:inner-tip:greeting-shown",
        "FOLLOWUP_SHOWN": "ui:inner-tip:followup-shown",
        "ERROR_SHOWN": "ui:inner-tip:error-shown",
        "FALLBACK_SHOWN": "ui:inner-tip:fallback-shown",
    },
}

DEFAULT_ACTIVITY: dict[str, Any] = {
    "returning_min_minutes": 2,
    "returning_max_minutes": 10,
    "reconnect_max_days": 7,
}


def default_messages() -> dict[str, dict[str, dict[str, Any]]]:
    return deepcopy(DEFAULT_MESSAGES)


def build_storage_keys(prefix: str = DEFAULT_KEY_PREFIX) -> dict[str, dict[str, str]]:
    """Return the key table with ``prefix:`` prepended to every key."""
    clean = prefix.strip().strip(":")
    return {
        section: {
            name: f"{clean}:{suffix}" if clean else suffix
            for name, suffix in names.items()
        }
        for section, names in DEFAULT_STORAGE_KEYS.items()
    }
