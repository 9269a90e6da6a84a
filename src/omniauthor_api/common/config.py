"""Runtime settings, read once at process start."""
from __future__ import annotations
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

CONFIG_ENV = "OMNIAUTHOR_CONFIG"

# setting name -> environment variable
ENV_KEYS = {
    "host": "HOST",
    "port": "PORT",
    "project": "GOOGLE_CLOUD_PROJECT",
    "location": "GEMINI_LOCATION",
    "model_id": "GEMINI_MODEL_ID",
    "max_output_tokens": "MAX_OUTPUT_TOKENS",
    "temperature": "TEMPERATURE",
    "top_p": "TOP_P",
    "log_level": "LOG_LEVEL",
}

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


@dataclass(frozen=True)
class GenerationParams:
    """Sampling parameters sent with every generation call."""
    max_output_tokens: int = 2048
    temperature: float = 1.0
    top_p: float = 0.95


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 8080
    project: str | None = None
    location: str = "us-central1"
    model_id: str = "gemini-1.5-pro-002"
    generation: GenerationParams = field(default_factory=GenerationParams)
    log_level: str = "INFO"


def load_yaml(path: str) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return data


def load_settings(
    environ: Mapping[str, str] | None = None,
    config_path: str | None = None,
) -> Settings:
    """
    Build Settings from defaults, an optional YAML file, then the environment.

    Args:
        environ: Environment mapping; defaults to os.environ.
        config_path: YAML file path; defaults to $OMNIAUTHOR_CONFIG when set.

    Raises:
        ValueError: if a numeric setting or the log level cannot be parsed.
    """
    env = os.environ if environ is None else environ
    path = config_path or env.get(CONFIG_ENV)

    raw: dict[str, Any] = {}
    if path:
        if not Path(path).exists():
            raise FileNotFoundError(f"Config file not found at {path}")
        raw.update({k: v for k, v in load_yaml(path).items() if k in ENV_KEYS})
    for key, var in ENV_KEYS.items():
        value = env.get(var)
        if value:
            raw[key] = value

    defaults = Settings()
    gen_defaults = defaults.generation
    try:
        generation = GenerationParams(
            max_output_tokens=_as_int(raw.get("max_output_tokens", gen_defaults.max_output_tokens)),
            temperature=float(raw.get("temperature", gen_defaults.temperature)),
            top_p=float(raw.get("top_p", gen_defaults.top_p)),
        )
        port = _as_int(raw.get("port", defaults.port))
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid numeric setting: {e}") from e

    project = raw.get("project") or None
    return Settings(
        host=str(raw.get("host", defaults.host)),
        port=port,
        project=str(project) if project is not None else None,
        location=str(raw.get("location", defaults.location)),
        model_id=str(raw.get("model_id", defaults.model_id)),
        generation=generation,
        log_level=normalize_log_level(str(raw.get("log_level", defaults.log_level))),
    )


def _as_int(value: Any) -> int:
    # YAML floats like 1.5 must not be truncated.
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValueError(f"expected an integer, got {value!r}")
    return int(value)


def normalize_log_level(name: str) -> str:
    """Map a level name (any case, WARN/FATAL aliases) to one uvicorn accepts."""
    level = name.strip().upper()
    level = LEVEL_ALIASES.get(level, level)
    if level not in LOG_LEVELS:
        raise ValueError(f"Invalid log level {name!r}; expected one of {', '.join(LOG_LEVELS)}")
    return level
