"""
Character-level finite-state machine for the INI format.

The grammar lives entirely in step(), a pure function of
(state, character, accumulators). parse_chars() drives it over any iterable
of characters and returns a tagged result instead of raising, so the engine
can be exercised one character at a time without a real file.

Format:
    ; comment line
    [SectionName]
    keyName = value text until newline or ;
    keyWithoutValue
"""

import dataclasses
import enum
import itertools
import string
from os import PathLike
from typing import Dict, Iterable, Iterator, NamedTuple, Optional, Tuple, Union

from .errors import IniReadError, SyntaxIssue

# section -> key -> raw value
Table = Dict[str, Dict[str, str]]

NO_SECTION = "no section for variable"
WRONG_SYNTAX = "wrong syntax"
WRONG_SECTION = "wrong section syntax"
WRONG_VARIABLE = "wrong variable syntax"

DEFAULT_CHUNK_SIZE = 8192

_ALPHA = frozenset(string.ascii_letters)
_WORD = frozenset(string.ascii_letters + string.digits + "_")
# ASCII whitespace except the newline, which always has its own meaning
_BLANK = frozenset(" \t\r\v\f")


class ParserState(enum.Enum):
    AWAITING_LINE = "awaiting line"
    READING_SECTION = "reading section"
    READING_KEY = "reading key"
    READING_VALUE = "reading value"
    SKIPPING = "skipping comment"
    SECTION_CLOSED = "section closed"
    KEY_CLOSED = "key closed"
    AWAITING_VALUE = "awaiting value"


@dataclasses.dataclass(frozen=True)
class Accumulators:
    """Names and value collected so far on the current line."""

    section: str = ""
    key: str = ""
    value: str = ""


class Step(NamedTuple):
    """Outcome of feeding one character to the machine.

    emit is a (section, key, value) triple to store; declare is a section
    name whose header just closed; error is a message when the character is
    not allowed in the current state (state and acc are then unchanged).
    """

    state: ParserState
    acc: Accumulators
    emit: Optional[Tuple[str, str, str]] = None
    declare: Optional[str] = None
    error: Optional[str] = None


@dataclasses.dataclass(frozen=True)
class Ok:
    table: Table


@dataclasses.dataclass(frozen=True)
class Err:
    issue: SyntaxIssue


ParseResult = Union[Ok, Err]


S = ParserState


def _awaiting_line(ch: str, acc: Accumulators) -> Step:
    if ch == "\n":
        return Step(S.AWAITING_LINE, acc)
    if ch == ";":
        return Step(S.SKIPPING, acc)
    if ch == "[":
        return Step(S.READING_SECTION, dataclasses.replace(acc, section=""))
    if ch in _ALPHA:
        if not acc.section:
            return Step(S.AWAITING_LINE, acc, error=NO_SECTION)
        return Step(S.READING_KEY, dataclasses.replace(acc, key=ch))
    if ch in _BLANK:
        return Step(S.AWAITING_LINE, acc)
    return Step(S.AWAITING_LINE, acc, error=WRONG_SYNTAX)


def _reading_section(ch: str, acc: Accumulators) -> Step:
    if ch == "]":
        return Step(S.SECTION_CLOSED, acc, declare=acc.section or None)
    if ch in _WORD:
        return Step(S.READING_SECTION, dataclasses.replace(acc, section=acc.section + ch))
    return Step(S.READING_SECTION, acc, error=WRONG_SECTION)


def _reading_key(ch: str, acc: Accumulators) -> Step:
    if ch in _WORD:
        return Step(S.READING_KEY, dataclasses.replace(acc, key=acc.key + ch))

    bare = (acc.section, acc.key, "")
    if ch == " ":
        return Step(S.KEY_CLOSED, acc, emit=bare)
    if ch == "=":
        return Step(S.AWAITING_VALUE, acc, emit=bare)
    if ch == "\n":
        return Step(S.AWAITING_LINE, acc, emit=bare)
    if ch == ";":
        return Step(S.SKIPPING, acc, emit=bare)
    return Step(S.READING_KEY, acc, error=WRONG_VARIABLE)


def _reading_value(ch: str, acc: Accumulators) -> Step:
    if ch == "\n":
        return Step(S.AWAITING_LINE, acc, emit=(acc.section, acc.key, acc.value))
    if ch == ";":
        return Step(S.SKIPPING, acc, emit=(acc.section, acc.key, acc.value))
    return Step(S.READING_VALUE, dataclasses.replace(acc, value=acc.value + ch))


def _skipping(ch: str, acc: Accumulators) -> Step:
    if ch == "\n":
        return Step(S.AWAITING_LINE, acc)
    return Step(S.SKIPPING, acc)


def _section_closed(ch: str, acc: Accumulators) -> Step:
    if ch == "\n":
        return Step(S.AWAITING_LINE, acc)
    if ch == ";":
        return Step(S.SKIPPING, acc)
    if ch in _BLANK:
        return Step(S.SECTION_CLOSED, acc)
    return Step(S.SECTION_CLOSED, acc, error=WRONG_SECTION)


def _key_closed(ch: str, acc: Accumulators) -> Step:
    # key was already stored with an empty value when the space was read
    if ch == " ":
        return Step(S.KEY_CLOSED, acc)
    if ch == "=":
        return Step(S.AWAITING_VALUE, acc)
    if ch == "\n":
        return Step(S.AWAITING_LINE, acc)
    if ch == ";":
        return Step(S.SKIPPING, acc)
    return Step(S.KEY_CLOSED, acc, error=WRONG_VARIABLE)


def _awaiting_value(ch: str, acc: Accumulators) -> Step:
    if ch == "\n":
        return Step(S.AWAITING_LINE, acc)
    if ch == ";":
        return Step(S.SKIPPING, acc)
    if ch == " ":
        return Step(S.AWAITING_VALUE, acc)
    return Step(S.READING_VALUE, dataclasses.replace(acc, value=ch))


_HANDLERS = {
    S.AWAITING_LINE: _awaiting_line,
    S.READING_SECTION: _reading_section,
    S.READING_KEY: _reading_key,
    S.READING_VALUE: _reading_value,
    S.SKIPPING: _skipping,
    S.SECTION_CLOSED: _section_closed,
    S.KEY_CLOSED: _key_closed,
    S.AWAITING_VALUE: _awaiting_value,
}


def step(state: ParserState, ch: str, acc: Accumulators) -> Step:
    """Feed one character to the machine. Never raises for bad input."""
    return _HANDLERS[state](ch, acc)


def parse_chars(chars: Iterable[str], complete_last_line: bool = False) -> ParseResult:
    """Run one parse pass over an iterable of single characters.

    Args:
        chars: Characters in input order (a str works).
        complete_last_line: Treat end of input as a final newline. By
            default a key or value still being read at end of input is
            dropped.

    Returns:
        Ok(table) on success, Err(SyntaxIssue) on the first violation.
        No partial table is returned on error.
    """
    if complete_last_line:
        chars = itertools.chain(chars, "\n")

    table: Table = {}
    state = S.AWAITING_LINE
    acc = Accumulators()
    row = 1

    for ch in chars:
        result = step(state, ch, acc)
        if result.error is not None:
            return Err(SyntaxIssue(row, result.error))
        if result.declare is not None:
            table.setdefault(result.declare, {})
        if result.emit is not None:
            section, key, value = result.emit
            table.setdefault(section, {})[key] = value
        state, acc = result.state, result.acc
        if ch == "\n":
            row += 1

    return Ok(table)


def check_chunk_size(chunk_size: int) -> int:
    """Return chunk_size, or raise ValueError unless it is a positive int.

    read(0) would end the pass at once and read(-1) would load the whole
    file.
    """
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size < 1:
        raise ValueError(f"chunk_size must be a positive integer, got {chunk_size!r}")
    return chunk_size


def iter_chars(fp, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[str]:
    """Yield characters from a text stream, reading chunk_size at a time."""
    check_chunk_size(chunk_size)
    while True:
        chunk = fp.read(chunk_size)
        if not chunk:
            break
        yield from chunk


def parse_file(
    path: Union[str, PathLike],
    encoding: str = "utf-8",
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    complete_last_line: bool = False,
) -> ParseResult:
    """Parse a file from disk, streaming it through the state machine.

    The file is opened in text mode with universal newlines, so CRLF line
    endings count as a single newline. It is closed when the pass ends,
    whether it succeeds or stops at a syntax error.

    Raises:
        IniReadError: The file cannot be opened, read or decoded.
        ValueError: chunk_size is not a positive integer.
    """
    check_chunk_size(chunk_size)
    try:
        with open(path, "r", encoding=encoding) as fp:
            return parse_chars(iter_chars(fp, chunk_size), complete_last_line)
    except UnicodeDecodeError as e:
        raise IniReadError(path, f"cannot decode as {encoding}: {e.reason}") from e
    except LookupError as e:
        raise IniReadError(path, f"unknown encoding: {encoding}") from e
    except OSError as e:
        raise IniReadError(path, e.strerror or str(e)) from e
