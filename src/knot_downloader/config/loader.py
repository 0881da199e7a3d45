from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, MutableMapping

from pydantic import ValidationError

from knot_downloader.config.models import AppConfig, ConfigLoadRequest
from knot_downloader.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV_VAR = "CONFIG_PATH"
DEFAULT_CONFIG_PATH = "config.yml"

# Keys whose values are structured and cannot be replaced by a single env string.
_NON_OVERRIDABLE_KEYS = frozenset({"files"})


def resolve_config_path(explicit: str | None = None) -> Path:
    if explicit:
        return Path(explicit)
    return Path(os.environ.get(CONFIG_PATH_ENV_VAR) or DEFAULT_CONFIG_PATH)


def _read_yaml_config(path: Path) -> dict[str, Any]:
    try:
        import yaml  # type: ignore[import-not-found]
    except ModuleNotFoundError as e:  # pragma: no cover
        raise ModuleNotFoundError(
            "Missing dependency: PyYAML is required to load the YAML config file. Install 'PyYAML'."
        ) from e

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to read config file from {str(path)!r}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config file from {str(path)!r}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Failed to parse config file from {str(path)!r}: "
            f"top-level YAML must be a mapping, got {type(data).__name__}"
        )
    return data


def _load_dotenv_if_present(dotenv_path: Path) -> None:
    try:
        from dotenv import load_dotenv  # type: ignore[import-not-found]
    except ModuleNotFoundError as e:  # pragma: no cover
        raise ModuleNotFoundError(
            "Missing dependency: python-dotenv is required to load .env. Install 'python-dotenv'."
        ) from e

    if not dotenv_path.exists():
        return
    load_dotenv(dotenv_path=dotenv_path, override=False)


def _env_var_name_to_key(env_var_name: str, prefix: str) -> str:
    remainder = env_var_name[len(prefix) :]
    parts = [p for p in remainder.split("__") if p]
    if len(parts) != 1:
        raise ConfigError(f"Invalid environment variable override name: {env_var_name}")
    return parts[0].lower()


def _apply_env_overrides(config: MutableMapping[str, Any], env_prefix: str) -> None:
    for name, value in os.environ.items():
        if not name.startswith(env_prefix):
            continue

        key = _env_var_name_to_key(name, env_prefix)
        if key not in AppConfig.model_fields or key in _NON_OVERRIDABLE_KEYS:
            raise ConfigError(f"Unknown configuration key in {name}: {key}")

        # Pydantic handles type coercion and validation afterwards.
        config[key] = value
        logger.debug("Applied configuration override. key=%s", key)


class YamlConfigLoader:
    async def load(self, request: ConfigLoadRequest = ConfigLoadRequest()) -> AppConfig:
        if request.dotenv_path is not None:
            _load_dotenv_if_present(Path(request.dotenv_path))

        yaml_path = resolve_config_path(request.yaml_path)
        config = _read_yaml_config(yaml_path)
        _apply_env_overrides(config, request.env_prefix)

        try:
            return AppConfig.model_validate(config)
        except ValidationError as e:
            raise ConfigError(f"Failed to parse config file from {str(yaml_path)!r}") from e
