"""Read and write ``~/.tipster/config.json``."""

import json
import os
from pathlib import Path
from typing import Any, Callable

from loguru import logger

from tipster.config.schema import TipsterConfig
from tipster.utils.helpers import camel_to_snake, snake_to_camel

CONFIG_VERSION = 1


def get_config_path() -> Path:
    return Path.home() / ".tipster" / "config.json"


def load_config(config_path: Path | None = None) -> TipsterConfig:
    """
    Build the config from a camelCase JSON file.

    A missing file yields defaults. An unreadable or invalid file is logged
    and also yields defaults. `TIPSTER_*` environment variables fill any field
    the file leaves unset; values in the file win.
    """
    path = config_path or get_config_path()
    if not path.exists():
        return TipsterConfig()

    try:
        payload = _read_object(path)
        payload["config_version"] = CONFIG_VERSION
        return TipsterConfig(**payload)
    except (json.JSONDecodeError, ValueError) as e:
        logger.warning("config_load_failed path={} error={}; using defaults", path, e)
        return TipsterConfig()


def save_config(config: TipsterConfig, config_path: Path | None = None) -> None:
    """Persist ``config`` as camelCase JSON, replacing the file atomically."""
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    payload = convert_to_camel(config.model_dump(exclude_none=True))
    staging = path.with_name(path.name + ".tmp")
    staging.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    os.replace(staging, path)
    logger.info("config_saved path={}", path)


def _read_object(path: Path) -> dict[str, Any]:
    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError("config root must be a JSON object")
    return convert_keys(raw)


def _rekey(data: Any, rename: Callable[[str], str]) -> Any:
    if isinstance(data, dict):
        return {rename(str(k)): _rekey(v, rename) for k, v in data.items()}
    if isinstance(data, list):
        return [_rekey(item, rename) for item in data]
    return data


def convert_keys(data: Any) -> Any:
    """camelCase keys -> snake_case, recursively."""
    return _rekey(data, camel_to_snake)


def convert_to_camel(data: Any) -> Any:
    """snake_case keys -> camelCase, recursively."""
    return _rekey(data, snake_to_camel)
