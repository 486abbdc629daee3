from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Final, TypeAlias, TypedDict, cast

from typing_extensions import assert_never

log = logging.getLogger(__name__)

CONFIG_ENV_KEY: Final = "ASSERTING_CONFIG"
FATAL_ENV_KEY: Final = "ASSERTING_FATAL"
WIDTH_ENV_KEY: Final = "ASSERTING_WIDTH"

DEFAULT_WIDTH: Final = 80


class AssertingConfig(TypedDict, total=False):
    """Configuration for assertion evaluation."""

    fatal: bool
    """Default severity of newly created conditions."""

    width: int
    """Line width used when pretty-printing values in failure messages."""


_SENTINEL: Final = object()

ValueType: TypeAlias = AssertingConfig | bool | None


def _parse_env_bool(value: str) -> bool:
    """Parse environment variable as boolean."""
    return value.lower() in ("1", "true", "yes", "on")


def _parse_env_width(value: str) -> int | None:
    try:
        width = int(value)
    except ValueError:
        log.warning(f"Ignoring non-integer render width {value!r}.")
        return None
    if width <= 0:
        log.warning(f"Ignoring non-positive render width {width}.")
        return None
    return width


def _parse_env_config(env_key: str) -> AssertingConfig:
    """
    Parse environment configuration from various formats.

    Supports:
    1. JSON: ASSERTING_CONFIG='{"fatal": true, "width": 120}'
    2. Comma-separated: ASSERTING_CONFIG='fatal=true,width=120'
    """
    env_value = os.environ.get(env_key, "").strip()
    config: AssertingConfig = {}

    if not env_value:
        return config

    # Try JSON first
    if env_value.startswith("{"):
        try:
            parsed = json.loads(env_value)
        except json.JSONDecodeError:
            log.warning(f"Could not parse {env_key} as JSON: {env_value!r}")
            return config
        if isinstance(parsed, dict):
            if "fatal" in parsed:
                fatal = parsed["fatal"]
                config["fatal"] = (
                    _parse_env_bool(fatal) if isinstance(fatal, str) else bool(fatal)
                )
            if "width" in parsed and (
                width := _parse_env_width(str(parsed["width"]))
            ) is not None:
                config["width"] = width
        return config

    for pair in env_value.split(","):
        if "=" not in pair:
            continue
        key, value = pair.split("=", 1)
        key = key.strip()
        value = value.strip()

        if key == "fatal":
            config["fatal"] = _parse_env_bool(value)
        elif key == "width":
            if (width := _parse_env_width(value)) is not None:
                config["width"] = width
        else:
            log.warning(f"Unknown key {key!r} in {env_key}.")

    return config


def _default_config() -> AssertingConfig:
    """Get default configuration from environment variables."""
    config = _parse_env_config(CONFIG_ENV_KEY)

    # Individual environment variable overrides
    if (fatal_env := os.environ.get(FATAL_ENV_KEY)) is not None:
        config["fatal"] = _parse_env_bool(fatal_env)

    if (width_env := os.environ.get(WIDTH_ENV_KEY)) is not None:
        if (width := _parse_env_width(width_env)) is not None:
            config["width"] = width

    return config


def _config_for_value(value: ValueType) -> AssertingConfig | object:
    """Convert a value to either a config dict or _SENTINEL."""
    match value:
        case None:
            return _SENTINEL
        case bool():
            # A bare bool toggles the default severity
            return AssertingConfig(fatal=value)
        case Mapping():
            return value
        case _:
            assert_never(value)


# Holds either an explicit config dict or _SENTINEL (re-read the environment)
_var: ContextVar[AssertingConfig | object] = ContextVar(
    "asserting:config", default=_SENTINEL
)


def config() -> AssertingConfig:
    """Return the effective configuration."""
    val = _var.get()
    if val is _SENTINEL:
        return _default_config()

    # Explicit values are layered on top of the environment defaults
    return {**_default_config(), **cast(AssertingConfig, val)}


def set(value: ValueType) -> None:
    """Set the configuration. None reverts to the environment defaults."""
    _var.set(_config_for_value(value))


@contextmanager
def override(value: ValueType):
    """Temporarily override the configuration within the current context."""
    token = _var.set(_config_for_value(value))
    try:
        yield
    finally:
        _var.reset(token)


def default_fatal() -> bool:
    """Whether newly created conditions abort the test on failure."""
    return config().get("fatal", False)


def render_width() -> int:
    """Line width for pretty-printed values in failure messages."""
    return config().get("width", DEFAULT_WIDTH)
