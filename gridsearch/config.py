# gridsearch/config.py
#!/usr/bin/env python3
"""
Runtime settings.

- ENV:  GRIDSEARCH_STRATEGY, GRIDSEARCH_WIDTH, GRIDSEARCH_HEIGHT, GRIDSEARCH_SEED,
        GRIDSEARCH_SPEED, GRIDSEARCH_MAP, GRIDSEARCH_MAX_STEPS, GRIDSEARCH_LOG_LEVEL,
        GRIDSEARCH_HEADLESS
- CLI:  --strategy=A* --width=20 --height=20 --seed=7 --speed=30 --map=maps/x.json
        --max-steps=500 --log-level=DEBUG --headless

Command-line values win over the environment.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from gridsearch.core.search import Strategy
from gridsearch.core.types import ConfigurationError

ENV_PREFIX = "GRIDSEARCH_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# option name -> env suffix
_KEYS = {
    "strategy": "STRATEGY",
    "width": "WIDTH",
    "height": "HEIGHT",
    "seed": "SEED",
    "speed": "SPEED",
    "map": "MAP",
    "max-steps": "MAX_STEPS",
    "log-level": "LOG_LEVEL",
    "headless": "HEADLESS",
}


@dataclass(frozen=True)
class Settings:
    strategy: Strategy = Strategy.ASTAR
    width: int = 20
    height: int = 20
    seed: Optional[int] = None
    steps_per_sec: int = 30
    map_path: Optional[str] = None
    max_steps: Optional[int] = None
    log_level: str = "INFO"
    headless: bool = False


def _int(key: str, raw: str, minimum: int) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ConfigurationError(f"{key} must be >= {minimum}, got {value}")
    return value


def _flag(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "on", "")


def resolve_settings(argv: Optional[Sequence[str]] = None,
                     environ: Optional[Mapping[str, str]] = None) -> Settings:
    environ = os.environ if environ is None else environ
    argv = [] if argv is None else argv

    raw = {}
    for key, suffix in _KEYS.items():
        if ENV_PREFIX + suffix in environ:
            raw[key] = environ[ENV_PREFIX + suffix]
    for arg in argv:
        if not arg.startswith("--"):
            raise ConfigurationError(f"unexpected argument {arg!r}")
        key, sep, value = arg[2:].partition("=")
        key = key.replace("_", "-")
        if key not in _KEYS:
            raise ConfigurationError(f"unknown option --{key}")
        if not sep and key != "headless":
            raise ConfigurationError(f"--{key} needs a value (--{key}=...)")
        raw[key] = value

    log_level = raw.get("log-level", "INFO").upper()
    if log_level not in LOG_LEVELS:
        raise ConfigurationError(f"log-level must be one of {', '.join(LOG_LEVELS)}")

    return Settings(
        strategy=Strategy.parse(raw.get("strategy", Strategy.ASTAR)),
        width=_int("width", raw["width"], 1) if "width" in raw else 20,
        height=_int("height", raw["height"], 1) if "height" in raw else 20,
        seed=_int("seed", raw["seed"], 0) if raw.get("seed") else None,
        steps_per_sec=_int("speed", raw["speed"], 1) if "speed" in raw else 30,
        map_path=raw.get("map") or None,
        max_steps=_int("max-steps", raw["max-steps"], 1) if raw.get("max-steps") else None,
        log_level=log_level,
        headless=_flag(raw["headless"]) if "headless" in raw else False,
    )
