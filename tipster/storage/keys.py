"""Namespaced storage key registry."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from tipster.config.defaults import build_storage_keys


class StorageKeyRegistry:
    """Maps logical (section, name) pairs onto literal storage keys.

    Lookups never raise; unknown pairs resolve to None.
    """

    def __init__(self, keys: Mapping[str, Mapping[str, str]] | None = None) -> None:
        source = build_storage_keys() if keys is None else keys
        self._keys: Mapping[str, Mapping[str, str]] = MappingProxyType(
            {section: MappingProxyType(dict(names)) for section, names in source.items()}
        )

    def get(self, section: str, name: str) -> str | None:
        """
        Resolve one key.

        Example:
            registry.get("OUTER_TIP", "WELCOME_SHOWN") -> "tipster:ui:outer-tip:welcome-shown"
        """
        names = self._keys.get(section)
        if names is None:
            return None
        return names.get(name) or None

    def has(self, section: str, name: str) -> bool:
        return self.get(section, name) is not None

    def list_sections(self) -> list[str]:
        return list(self._keys.keys())

    def list_keys(self, section: str) -> list[str]:
        return list(self._keys.get(section, {}).keys())
