"""Configuration for colortag.

Layered resolution (highest priority wins):
  1. Explicit keyword arguments to init_logging()
  2. Environment: COLORTAG_LOG, COLORTAG_COLOR, NO_COLOR
  3. Project config: .colortag.json in the working directory or a parent
  4. Global config: ~/.colortag/config.json

Recognized keys:
  enabled   bool   turn the tagged logging on (default: off)
  color     str    'ansi', 'plain' or 'markup' (default: 'ansi')
  stream    str    'stderr' or 'stdout' (default: 'stderr')
"""

import json
import os
from pathlib import Path


DEFAULTS = {
    "enabled": False,
    "color": "ansi",
    "stream": "stderr",
}

ENV_ENABLE = "COLORTAG_LOG"
ENV_COLOR = "COLORTAG_COLOR"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


# ---------------------------------------------------------------------------
# Config file locations
# ---------------------------------------------------------------------------
def get_global_config_dir():
    """Return the global config directory (~/.colortag/)."""
    return Path.home() / ".colortag"


def get_global_config_path():
    """Return path to the global config file."""
    return get_global_config_dir() / "config.json"


def find_project_config(start_dir=None):
    """Walk up from start_dir looking for .colortag.json.

    Returns the path if found, None otherwise.
    """
    current = Path(start_dir or os.getcwd()).resolve()
    for _ in range(20):  # safety limit
        candidate = current / ".colortag.json"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


# ---------------------------------------------------------------------------
# Config loading
# ---------------------------------------------------------------------------
def load_json(path):
    """Load a JSON object file, returning empty dict on error."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def load_global_config():
    """Load the global config file."""
    return load_json(get_global_config_path())


def load_project_config(start_dir=None):
    """Load the nearest .colortag.json walking upward from start_dir."""
    path = find_project_config(start_dir)
    if path:
        return load_json(path), path
    return {}, None


def parse_bool(value):
    """Interpret an environment or JSON value as a boolean.

    Returns None for values that are neither clearly true nor false.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
    return None


def env_settings(environ=None):
    """Collect settings from environment variables."""
    environ = os.environ if environ is None else environ
    settings = {}
    if ENV_ENABLE in environ:
        enabled = parse_bool(environ[ENV_ENABLE])
        if enabled is not None:
            settings["enabled"] = enabled
    if environ.get("NO_COLOR"):
        settings["color"] = "plain"
    elif environ.get(ENV_COLOR):
        settings["color"] = environ[ENV_COLOR].strip().lower()
    return settings


# ---------------------------------------------------------------------------
# Config resolution
# ---------------------------------------------------------------------------
def resolve_settings(overrides=None, start_dir=None, environ=None):
    """Resolve every key using layered precedence.

    Args:
        overrides: Explicit values; None entries are ignored
        start_dir: Where to start looking for .colortag.json
        environ: Environment mapping (default: os.environ)

    Returns a dict with a value for every key in DEFAULTS.
    """
    layers = [
        {k: v for k, v in (overrides or {}).items() if v is not None},
        env_settings(environ),
        load_project_config(start_dir)[0],
        load_global_config(),
    ]

    resolved = {}
    for key, default in DEFAULTS.items():
        resolved[key] = default
        for layer in layers:
            value = layer.get(key)
            if key == "enabled":
                value = parse_bool(value)
            if value is not None:
                resolved[key] = value
                break
    return resolved
