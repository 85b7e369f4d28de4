"""
Centralized path resolution for the inistream data directory.

The data directory (~/.inistream/) holds the optional config file.
Supports INISTREAM_HOME env var override for testing and custom installs.
"""

import os
from pathlib import Path


def get_data_dir() -> Path:
    """Return the inistream data directory path.

    Checks INISTREAM_HOME env var first, then falls back to ~/.inistream/.
    """
    env_dir = os.environ.get("INISTREAM_HOME")
    if env_dir:
        return Path(env_dir)
    return Path.home() / ".inistream"


def get_config_path() -> Path:
    """Return the path to the config TOML file."""
    return get_data_dir() / "config.toml"
