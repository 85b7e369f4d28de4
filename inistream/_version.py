"""
Version information for inistream.

This file is the canonical source for version numbers; pyproject.toml
reads __version__ from here.

Version levels:
  PROJECT_PHASE: Global project maturity (prealpha -> alpha -> beta -> stable).
  PHASE:         Per-MINOR feature set maturity (alpha -> beta -> None).
"""

MAJOR = 0
MINOR = 1
PATCH = 0
PHASE = None  # None, "alpha", "beta", "rc1", etc.
PROJECT_PHASE = "alpha"  # "prealpha", "alpha", "beta", "stable"

__version__ = "0.1.0"
__app_name__ = "inistream"


def get_version():
    """Return the full version string."""
    return __version__


def get_base_version():
    """Return the semantic version string (MAJOR.MINOR.PATCH[-PHASE])."""
    base = f"{MAJOR}.{MINOR}.{PATCH}"
    if PHASE:
        base = f"{base}-{PHASE}"
    return base


def get_display_version():
    """Return a human-friendly version string with project phase.

    Example: 'ALPHA 0.1.0' or '1.0.0'
    """
    base = get_base_version()
    if PROJECT_PHASE and PROJECT_PHASE != "stable":
        return f"{PROJECT_PHASE.upper()} {base}"
    return base


VERSION = get_version()
BASE_VERSION = get_base_version()
