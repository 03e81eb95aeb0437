"""
Helpers for building parameterized SQL.

The partial-update builder emits PostgreSQL-style numbered placeholders
($1, $2, ...); to_named_params() rewrites a composed statement into the
named-bind form sqlalchemy.text() expects so it runs on any dialect.
"""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from ..errors import NoDataError

# quoted identifiers and string literals are matched first so $n inside them is left alone
PLACEHOLDER_RE = re.compile(r"""('(?:[^']|'')*'|"(?:[^"]|"")*")|\$(\d+)""")


@dataclass(frozen=True)
class SqlFragment:
    set_clause: str
    values: list[Any] = field(default_factory=list)

    @property
    def next_placeholder(self) -> str:
        """Placeholder for the first bind value after this fragment's values."""
        return f"${len(self.values) + 1}"


def quote_identifier(name: str) -> str:
    """
    Quote a column name so reserved words and mixed case survive.

    Examples:
        >>> quote_identifier("firstName")
        '"firstName"'
        >>> quote_identifier('we"ird')
        '"we""ird"'
    """
    escaped = name.replace('"', '""')
    return f'"{escaped}"'


def sql_for_partial_update(data: Mapping[str, Any], column_map: Mapping[str, str]) -> SqlFragment:
    """
    Build the SET portion of an UPDATE touching only the keys in `data`.

    Args:
        data: Logical field name -> new value, in the order to emit
        column_map: Logical field name -> storage column, for fields whose
            column name differs (e.g. {"numEmployees": "num_employees"})

    Returns:
        SqlFragment whose set_clause looks like '"name"=$1, "num_employees"=$2'
        and whose values hold the bind value for each position

    Raises:
        NoDataError: if `data` has no keys

    Examples:
        >>> frag = sql_for_partial_update({"firstName": "Aliya", "age": 32}, {"firstName": "first_name"})
        >>> frag.set_clause
        '"first_name"=$1, "age"=$2'
        >>> frag.values
        ['Aliya', 32]
    """
    keys = list(data.keys())
    if not keys:
        raise NoDataError("No data")

    cols = [
        f"{quote_identifier(column_map.get(key, key))}=${idx}"
        for idx, key in enumerate(keys, start=1)
    ]
    return SqlFragment(set_clause=", ".join(cols), values=[data[key] for key in keys])


def to_named_params(statement: str, values: Sequence[Any]) -> tuple[str, dict[str, Any]]:
    """
    Rewrite $n placeholders into :p<n> binds.

    Text inside double-quoted identifiers and single-quoted literals is
    copied through unchanged.

    Returns:
        Tuple of (rewritten statement, {"p1": values[0], ...})

    Raises:
        ValueError: if a placeholder refers past the end of `values`
    """
    def _replace(match: re.Match) -> str:
        if match.group(1) is not None:
            return match.group(1)
        position = int(match.group(2))
        if position < 1 or position > len(values):
            raise ValueError(f"Placeholder ${position} has no bind value ({len(values)} supplied)")
        return f":p{position}"

    rewritten = PLACEHOLDER_RE.sub(_replace, statement)
    params = {f"p{idx}": value for idx, value in enumerate(values, start=1)}
    return rewritten, params
