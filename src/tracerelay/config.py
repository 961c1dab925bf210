"""Configuration management for tracerelay.

Three-layer config resolution (highest priority wins):
  1. CLI flags — explicit on the command line
  2. Project config — .tracerelay.json in the working directory or above
  3. Global config — ~/.tracerelay/config.json (or --config PATH)

Each layer is a JSON object using the TraceOptions keys, for example::

    {
      "level": "info",
      "auto_flush": true,
      "mirror_to_system_trace": false,
      "listeners": ["console", "file:logs/trace.log"]
    }

``level`` sets the four severity gates at once; an explicit gate key in
the same layer overrides it.
"""

import json
import os
from pathlib import Path

from tracerelay.lib.trace_lib import TraceOptions

PROJECT_CONFIG_NAME = ".tracerelay.json"


# ---------------------------------------------------------------------------
# Config file locations
# ---------------------------------------------------------------------------
def get_global_config_dir():
    """Return the global config directory (~/.tracerelay/)."""
    return Path.home() / ".tracerelay"


def get_global_config_path():
    """Return path to the global config file."""
    return get_global_config_dir() / "config.json"


def find_project_config(start_dir=None):
    """Walk up from start_dir looking for .tracerelay.json.

    Returns the path if found, None otherwise.
    """
    current = Path(start_dir or os.getcwd()).resolve()
    for _ in range(20):  # safety limit
        candidate = current / PROJECT_CONFIG_NAME
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
    """Load a JSON object from a file, returning empty dict on error."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (FileNotFoundError, IsADirectoryError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def load_global_config(path=None):
    """Load the global config file (or an explicit replacement)."""
    return load_json(path or get_global_config_path())


def load_project_config(start_dir=None):
    """Load the nearest .tracerelay.json walking upward from start_dir."""
    path = find_project_config(start_dir)
    if path:
        return load_json(path), path
    return {}, None


# ---------------------------------------------------------------------------
# Config resolution
# ---------------------------------------------------------------------------
def cli_overrides(args):
    """Extract option overrides from an argparse namespace.

    Only flags the user actually gave are returned, so lower layers keep
    their values for everything else.
    """
    if args is None:
        return {}
    overrides = {}
    level = getattr(args, "level", None)
    if level is not None:
        overrides["level"] = level
    listeners = getattr(args, "listener", None)
    if listeners:
        overrides["listeners"] = list(listeners)
    if getattr(args, "auto_flush", False):
        overrides["auto_flush"] = True
    if getattr(args, "mirror", False):
        overrides["mirror_to_system_trace"] = True
    if getattr(args, "strict", False):
        overrides["raise_on_failure"] = True
    if getattr(args, "disable", False):
        overrides["enabled"] = False
    return overrides


def resolve_options(args=None, start_dir=None):
    """Resolve TraceOptions using three-layer precedence.

    Layers are applied lowest first:
      1. Global ~/.tracerelay/config.json (or args.config)
      2. Project .tracerelay.json
      3. CLI args (from argparse namespace)

    Returns:
        (TraceOptions, project_config_path or None)

    Raises:
        ValueError: for an unknown level name or a negative indent size
    """
    if start_dir is None:
        start_dir = getattr(args, "project_dir", None)
    global_cfg = load_global_config(getattr(args, "config", None))
    project_cfg, project_path = load_project_config(start_dir)

    options = TraceOptions()
    options.update(global_cfg)
    options.update(project_cfg)
    options.update(cli_overrides(args))
    return options, project_path

