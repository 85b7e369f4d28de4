"""
Configuration management for inistream.

Loads settings from ~/.inistream/config.toml (or INISTREAM_HOME/config.toml),
falls back to defaults when the file doesn't exist, and supports
CLI flag overrides via Config.with_overrides().
"""

import dataclasses
import sys
import tomllib
from pathlib import Path
from typing import Optional

from ._paths import get_config_path


# Default configuration values
_DEFAULTS = {
    "parser": {
        "encoding": "utf-8",
        "chunk_size": 8192,
        "complete_last_line": False,
    },
    "output": {
        "quiet": False,
        "suggestions": True,
    },
}


@dataclasses.dataclass(frozen=True)
class Config:
    """Immutable configuration object."""

    parser_encoding: str = "utf-8"
    parser_chunk_size: int = 8192
    parser_complete_last_line: bool = False
    output_quiet: bool = False
    output_suggestions: bool = True

    def with_overrides(self, **kwargs) -> "Config":
        """Return a new Config with specified fields overridden.

        Only applies overrides for non-None values, so CLI flags
        that weren't specified don't clobber config file values.
        """
        updates = {k: v for k, v in kwargs.items() if v is not None}
        return dataclasses.replace(self, **updates) if updates else self


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load config from TOML file, falling back to defaults.

    Args:
        config_path: Explicit path to config file. If None, uses
                     INISTREAM_HOME/config.toml or ~/.inistream/config.toml.

    Returns:
        Config dataclass with merged values.
    """
    path = config_path or get_config_path()

    if not path.is_file():
        return Config()

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        _warn(f"Could not read config file {path}: {e}")
        return Config()

    try:
        parsed = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        _warn(f"Could not parse config file {path}: {e}")
        return Config()

    return _build_config(parsed)


def _build_config(parsed: dict) -> Config:
    """Build a Config from parsed TOML dict, using defaults for missing keys."""
    def _get(section: str, key: str):
        default = _DEFAULTS[section][key]
        table = parsed.get(section, {})
        val = table.get(key, default) if isinstance(table, dict) else default
        # Type coercion for safety
        if isinstance(default, bool):
            if isinstance(val, str):
                return val.lower() in ("true", "1", "yes")
            return bool(val)
        if isinstance(default, int):
            try:
                val = int(val)
            except (ValueError, TypeError):
                return default
            return val if val > 0 else default
        return val if isinstance(val, str) and val else default

    return Config(
        parser_encoding=_get("parser", "encoding"),
        parser_chunk_size=_get("parser", "chunk_size"),
        parser_complete_last_line=_get("parser", "complete_last_line"),
        output_quiet=_get("output", "quiet"),
        output_suggestions=_get("output", "suggestions"),
    )


def format_config(config: Config, config_path: Optional[Path] = None) -> str:
    """Format config for display (used by --config flag)."""
    path = config_path or get_config_path()
    lines = [
        f"Config file: {path}",
        f"  exists: {'yes' if path.is_file() else 'no'}",
        "",
        "[parser]",
        f"  encoding = {config.parser_encoding}",
        f"  chunk_size = {config.parser_chunk_size}",
        f"  complete_last_line = {str(config.parser_complete_last_line).lower()}",
        "",
        "[output]",
        f"  quiet = {str(config.output_quiet).lower()}",
        f"  suggestions = {str(config.output_suggestions).lower()}",
    ]
    return "\n".join(lines)


def _warn(msg: str) -> None:
    """Print a warning to stderr."""
    print(f"inistream: config: {msg}", file=sys.stderr)
