"""
inistream - streaming, character-level INI parser with typed lookups.

The file is fed one character at a time through an explicit state machine
and every syntax error is reported with its 1-based row.

Usage:
    parser = IniParser("settings.ini")
    parser.get("Section1", "var1")        # raw text
    parser.get_int("Section1", "var2")    # int
    parser.get_value("Section1.var3", float)
"""

from ._version import __version__, get_version, get_base_version, VERSION, BASE_VERSION
from .errors import (
    ConversionError,
    IniError,
    IniReadError,
    IniSyntaxError,
    KeyNotFoundError,
    SectionNotFoundError,
    SyntaxIssue,
)
from .parser import IniParser

__all__ = [
    "__version__",
    "get_version",
    "get_base_version",
    "VERSION",
    "BASE_VERSION",
    "IniParser",
    "IniError",
    "IniSyntaxError",
    "IniReadError",
    "SectionNotFoundError",
    "KeyNotFoundError",
    "ConversionError",
    "SyntaxIssue",
]
