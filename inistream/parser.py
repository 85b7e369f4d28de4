"""
Lookup API over the INI state machine.

The file is parsed lazily on the first lookup and the resulting table is
cached for the lifetime of the IniParser; reload() forces a fresh pass.
"""

import copy
from os import PathLike
from typing import List, Optional, Tuple, Union

from .config import Config
from .engine import Err, Table, check_chunk_size, parse_file
from .errors import (
    ConversionError,
    IniSyntaxError,
    KeyNotFoundError,
    SectionNotFoundError,
)

_CONVERTERS = {str: str, int: int, float: float}


class IniParser:
    """Read-only view of one INI file.

    A key whose value is empty (``key =`` or a bare ``key``) is a successful
    lookup returning ``""``; only a key the file never mentions raises
    KeyNotFoundError.
    """

    def __init__(
        self,
        path: Union[str, PathLike],
        encoding: Optional[str] = None,
        chunk_size: Optional[int] = None,
        complete_last_line: Optional[bool] = None,
        config: Optional[Config] = None,
    ):
        config = (config or Config()).with_overrides(
            parser_encoding=encoding,
            parser_chunk_size=chunk_size,
            parser_complete_last_line=complete_last_line,
        )
        check_chunk_size(config.parser_chunk_size)
        self._path = path
        self._config = config
        self._table: Optional[Table] = None

    @property
    def path(self):
        return self._path

    @property
    def loaded(self) -> bool:
        """True once a parse pass has succeeded and its table is cached."""
        return self._table is not None

    def reload(self) -> None:
        """Parse the file again, replacing the cached table.

        On failure the previous table is discarded as well.
        """
        self._table = None
        result = parse_file(
            self._path,
            encoding=self._config.parser_encoding,
            chunk_size=self._config.parser_chunk_size,
            complete_last_line=self._config.parser_complete_last_line,
        )
        if isinstance(result, Err):
            raise IniSyntaxError.from_issue(result.issue)
        self._table = result.table

    def _ensure_table(self) -> Table:
        if self._table is None:
            self.reload()
        return self._table

    # -- lookups ----------------------------------------------------------

    def get(self, section: str, key: str) -> str:
        """Return the raw text stored for key in section."""
        table = self._ensure_table()
        if section not in table:
            raise SectionNotFoundError(section)
        pairs = table[section]
        if key not in pairs:
            raise KeyNotFoundError(section, key, list(pairs))
        return pairs[key]

    def get_typed(self, section: str, key: str, type_: type = str):
        """Return the value converted with str(), int() or float()."""
        try:
            convert = _CONVERTERS[type_]
        except KeyError:
            raise TypeError(f"unsupported value type: {type_!r}") from None

        text = self.get(section, key)
        try:
            return convert(text)
        except ValueError as e:
            raise ConversionError(text, type_, section, key) from e

    def get_int(self, section: str, key: str) -> int:
        return self.get_typed(section, key, int)

    def get_float(self, section: str, key: str) -> float:
        return self.get_typed(section, key, float)

    def get_value(self, name: str, type_: type = str):
        """Look up a dotted ``"section.key"`` name.

        The name is split on the first dot. Section and key names never
        contain dots, so there is no ambiguity.
        """
        section, key = split_name(name)
        return self.get_typed(section, key, type_)

    # -- introspection ----------------------------------------------------

    def sections(self) -> List[str]:
        return list(self._ensure_table())

    def keys(self, section: str) -> List[str]:
        table = self._ensure_table()
        if section not in table:
            raise SectionNotFoundError(section)
        return list(table[section])

    @property
    def table(self) -> Table:
        """A copy of the parsed table; edits do not affect the parser."""
        return copy.deepcopy(self._ensure_table())

    def __contains__(self, item: Tuple[str, str]) -> bool:
        section, key = item
        return key in self._ensure_table().get(section, {})

    def __repr__(self) -> str:
        state = "loaded" if self.loaded else "not loaded"
        return f"IniParser({str(self._path)!r}, {state})"


def split_name(name: str) -> Tuple[str, str]:
    """Split ``"section.key"`` on the first dot."""
    section, dot, key = name.partition(".")
    if not dot:
        raise ValueError(f"expected SECTION.KEY, got {name!r}")
    return section, key
