"""YAML config with ``SIGNAL_*`` environment overrides."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable

import yaml

from signal_core.config.schema import AppConfig
from signal_core.errors import InvalidInputError


def _seed(env: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise InvalidInputError(
            f"{env} must be an integer, got {raw!r}", context={"env": env, "value": raw}
        ) from None


# env var -> (section, key, parser)
ENV_OVERRIDES: dict[str, tuple[str, str, Callable[[str, str], Any]]] = {
    "SIGNAL_LOG_LEVEL": ("logging", "level", lambda env, raw: raw),
    "SIGNAL_LOG_FORMAT": ("logging", "format", lambda env, raw: raw),
    "SIGNAL_SIM_SEED": ("simulator", "seed", _seed),
}


def _read_yaml(path: Path) -> dict:
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise InvalidInputError(
            f"{path}: top level must be a mapping, got {type(data).__name__}",
            context={"path": str(path)},
        )
    return data


def load_config(path: str | Path | None = None) -> AppConfig:
    """Build an ``AppConfig`` from *path* and the environment.

    A missing file or ``None`` yields the defaults. Set (non-empty) variables
    in ``ENV_OVERRIDES`` win over the file.

    Raises:
        InvalidInputError: the file is not a mapping or an override does not parse.
        pydantic.ValidationError: a value is out of range.
    """
    data: dict = {}
    if path is not None and Path(path).exists():
        data = _read_yaml(Path(path))

    for env, (section, key, parse) in ENV_OVERRIDES.items():
        raw = os.environ.get(env)
        if raw:
            data.setdefault(section, {})[key] = parse(env, raw)

    return AppConfig.model_validate(data)
