from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import ConfigurationError
from .settings import Settings

ENV_PREFIX = "BITBANKCC_"

# Flat shortcuts for the most common overrides.
_ENV_SHORTCUTS = {
    "API_KEY": ["credentials", "api_key"],
    "API_SECRET": ["credentials", "api_secret"],
}
_RESERVED = {"CONFIG", "LOG_LEVEL"}


def _deep_set(obj: dict[str, Any], path: list[str], value: Any) -> None:
    cur: dict[str, Any] = obj
    for key in path[:-1]:
        nxt = cur.get(key)
        if not isinstance(nxt, dict):
            nxt = {}
            cur[key] = nxt
        cur = nxt
    cur[path[-1]] = value


def _parse_env_value(raw: str) -> Any:
    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw


def _apply_env_overrides(data: dict[str, Any], environ: dict[str, str] | None = None) -> dict[str, Any]:
    environ = dict(os.environ) if environ is None else environ
    merged: dict[str, Any] = dict(data)

    for key, raw_value in sorted(environ.items()):
        if not key.startswith(ENV_PREFIX):
            continue

        remainder = key[len(ENV_PREFIX) :]
        if remainder in _RESERVED:
            continue

        if remainder in _ENV_SHORTCUTS:
            # Keys and secrets stay strings even if they look like numbers.
            _deep_set(merged, _ENV_SHORTCUTS[remainder], raw_value)
            continue

        path = [p.lower() for p in remainder.split("__") if p]
        if path:
            _deep_set(merged, path, _parse_env_value(raw_value))

    return merged


def load_settings(config_path: str | Path | None = None, environ: dict[str, str] | None = None) -> Settings:
    """Load settings from YAML, then apply ``BITBANKCC_*`` environment overrides.

    Raises:
        ConfigurationError: If the file is not a mapping or validation fails
    """
    env = dict(os.environ) if environ is None else environ
    if config_path is None:
        config_path = env.get(f"{ENV_PREFIX}CONFIG", "config.yml")

    path = Path(config_path)
    data: dict[str, Any] = {}
    if path.exists():
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
        if isinstance(loaded, dict):
            data = loaded
        elif loaded is not None:
            raise ConfigurationError(f"Config root must be a mapping, got: {type(loaded)!r}")

    data = _apply_env_overrides(data, env)

    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        # Input values are left out: they may include credentials.
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in exc.errors(include_input=False)
        )
        raise ConfigurationError(f"Invalid configuration: {details}") from None
