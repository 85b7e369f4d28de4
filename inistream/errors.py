"""
Exceptions raised by inistream.

Every failure is surfaced to the caller as an IniError subclass; nothing is
retried or swallowed. The CLI prints str(error) and exits non-zero.
"""

import dataclasses
from typing import Sequence


@dataclasses.dataclass(frozen=True)
class SyntaxIssue:
    """Location and reason of a fatal parse failure (1-based row)."""

    row: int
    message: str

    def __str__(self) -> str:
        return f"row {self.row}: {self.message}"


class IniError(Exception):
    """Base class for all inistream errors."""
    pass


class IniSyntaxError(IniError):
    """Raised when the input violates the format grammar."""

    def __init__(self, row: int, message: str):
        self.row = row
        self.message = message
        super().__init__(str(SyntaxIssue(row, message)))

    @classmethod
    def from_issue(cls, issue: SyntaxIssue) -> "IniSyntaxError":
        return cls(issue.row, issue.message)

    @property
    def issue(self) -> SyntaxIssue:
        return SyntaxIssue(self.row, self.message)


class IniReadError(IniError):
    """Raised when the INI file cannot be opened or decoded."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class SectionNotFoundError(IniError):
    """Raised when a lookup names a section the file never declares."""

    def __init__(self, section: str):
        self.section = section
        super().__init__(f"section '{section}' is not found")


class KeyNotFoundError(IniError):
    """Raised when a key is absent from an existing section.

    ``suggestions`` holds the keys that do exist in that section, in the
    order they first appear in the file.
    """

    def __init__(self, section: str, key: str, suggestions: Sequence[str] = ()):
        self.section = section
        self.key = key
        self.suggestions = list(suggestions)
        msg = f"variable '{key}' is not found in section '{section}'"
        if self.suggestions:
            msg += "; maybe you meant: " + ", ".join(self.suggestions)
        super().__init__(msg)

    def short_message(self) -> str:
        """Message without the suggestion list."""
        return f"variable '{self.key}' is not found in section '{self.section}'"


class ConversionError(IniError):
    """Raised when a stored value is not valid text for the requested type."""

    def __init__(self, text: str, target: type, section: str = "", key: str = ""):
        self.text = text
        self.target = target
        self.section = section
        self.key = key
        where = f" ({section}.{key})" if section or key else ""
        super().__init__(f"cannot convert {text!r} to {target.__name__}{where}")
