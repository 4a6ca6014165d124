"""
Runtime settings for the LED circuit simulation.

Values come from the environment (a .env file is loaded by main.py) and can
be overridden by command-line switches.
"""
import os
from dataclasses import dataclass, replace
from typing import List, Mapping, Optional


class ConfigError(ValueError):
    """Raised when a setting has an invalid value."""


@dataclass(frozen=True)
class Settings:
    coords_csv: str = "led_coords.csv"
    race_csv: str = "master_track_data_with_time_deltas.csv"
    frame_interval_ms: int = 16
    led_size_px: int = 20
    catch_up: bool = False
    max_steps_per_tick: int = 50
    log_level: str = "INFO"


_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}
_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e
    if value < 1:
        raise ConfigError(f"{name} must be >= 1, got {value}")
    return value


def _flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables.

    Args:
        env: Mapping to read from (defaults to os.environ)
    """
    if env is None:
        env = os.environ
    defaults = Settings()

    log_level = env.get("LOG_LEVEL", defaults.log_level).strip().upper()
    if log_level not in _LEVELS:
        raise ConfigError(f"LOG_LEVEL must be one of {sorted(_LEVELS)}, got {log_level!r}")

    return Settings(
        coords_csv=env.get("LED_COORDS_CSV", defaults.coords_csv),
        race_csv=env.get("RACE_DATA_CSV", defaults.race_csv),
        frame_interval_ms=_positive_int(env, "FRAME_INTERVAL_MS", defaults.frame_interval_ms),
        led_size_px=_positive_int(env, "LED_SIZE_PX", defaults.led_size_px),
        catch_up=_flag(env, "PLAYBACK_CATCH_UP", defaults.catch_up),
        max_steps_per_tick=_positive_int(env, "PLAYBACK_MAX_STEPS_PER_TICK", defaults.max_steps_per_tick),
        log_level=log_level,
    )


def apply_args(settings: Settings, argv: List[str]) -> Settings:
    """
    Apply command-line switches: --coords PATH, --race PATH, --catch-up.
    """
    overrides = {}
    if "--catch-up" in argv:
        overrides["catch_up"] = True

    for flag, field in (("--coords", "coords_csv"), ("--race", "race_csv")):
        if flag in argv:
            i = argv.index(flag)
            if i + 1 >= len(argv) or argv[i + 1].startswith("--"):
                raise ConfigError(f"{flag} requires a path")
            overrides[field] = argv[i + 1]

    return replace(settings, **overrides)
