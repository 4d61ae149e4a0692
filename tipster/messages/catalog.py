"""Message catalog: default definitions merged with caller overrides."""

from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
from typing import Any

from tipster.config.defaults import DEFAULT_MESSAGES
from tipster.config.schema import MessageDefinition
from tipster.utils.helpers import camel_to_snake

MessageTable = Mapping[str, Mapping[str, Mapping[str, Any]]]

_UNKNOWN_MESSAGE: dict[str, Any] = {"text": "", "delay": 0}


def _is_unset(value: Any) -> bool:
    return value is None or value == ""


def _normalize_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    return {camel_to_snake(str(name)): value for name, value in fields.items()}


def _merge_definition(default: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Field-by-field merge; unset override values keep the default."""
    merged = dict(default)
    for name, value in override.items():
        if not _is_unset(value):
            merged[name] = value
    return merged


class MessageCatalog:
    """Holds resolved message definitions keyed by (category, type).

    The table is built once at construction and never mutated afterwards.
    """

    def __init__(
        self,
        overrides: MessageTable | None = None,
        defaults: MessageTable | None = None,
    ) -> None:
        self._messages = self._merge(
            DEFAULT_MESSAGES if defaults is None else defaults,
            overrides or {},
        )

    @staticmethod
    def _merge(defaults: MessageTable, overrides: MessageTable) -> dict[str, dict[str, dict[str, Any]]]:
        result: dict[str, dict[str, dict[str, Any]]] = {}
        for category in set(defaults) | set(overrides):
            base = defaults.get(category) or {}
            custom = overrides.get(category) or {}
            types: dict[str, dict[str, Any]] = {}
            for msg_type in list(base) + [t for t in custom if t not in base]:
                default_fields = _normalize_fields(base.get(msg_type) or {})
                override_fields = _normalize_fields(custom.get(msg_type) or {})
                types[msg_type] = _merge_definition(default_fields, override_fields)
            result[category] = types
        return result

    def get(self, category: str, type: str) -> dict[str, Any]:
        """
        Return the merged definition fields.

        Unknown types yield ``{"text": "", "delay": 0}``.
        """
        found = self._messages.get(category, {}).get(type)
        if found is None:
            return dict(_UNKNOWN_MESSAGE)
        return deepcopy(found)

    def get_definition(self, category: str, type: str) -> MessageDefinition | None:
        found = self._messages.get(category, {}).get(type)
        if found is None:
            return None
        return MessageDefinition.model_validate(found)

    def has(self, category: str, type: str) -> bool:
        """True iff the type exists and is not disabled."""
        found = self._messages.get(category, {}).get(type)
        if found is None:
            return False
        return found.get("disable") is not True

    def get_text(self, category: str, type: str) -> str:
        return str(self.get(category, type).get("text") or "")

    def get_delay(self, category: str, type: str) -> int:
        return int(self.get(category, type).get("delay") or 0)

    def get_duration(self, category: str, type: str, default: int | None = None) -> int | None:
        return self.get_field(category, type, "duration", default)

    def get_field(self, category: str, type: str, field: str, default: Any = None) -> Any:
        value = self._messages.get(category, {}).get(type, {}).get(camel_to_snake(field))
        return default if value is None else value

    def get_field_in(self, type: str, field: str, default: Any = None) -> Any:
        return self.get_field("in", type, field, default)

    def get_field_out(self, type: str, field: str, default: Any = None) -> Any:
        return self.get_field("out", type, field, default)

    def list_types(self) -> list[str]:
        """All known types as ``"category.type"`` strings."""
        return [
            f"{category}.{msg_type}"
            for category in sorted(self._messages)
            for msg_type in self._messages[category]
        ]
