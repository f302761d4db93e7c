"""Helpers for building prepared-statement SQL fragments.

Statements are written with `?` placeholders and backtick-quoted
identifiers. `translate_query` rewrites them for the `format` paramstyle
used by PyMySQL and psycopg2.
"""

import re
from collections.abc import Mapping

from .errors import InvalidParameterShape

SEPARATORS = ("AND", "OR", ",")

_TOKENS = r"""
    '(?:[^'\\]|\\.|'')*'     # single-quoted literal
  | "(?:[^"\\]|\\.|"")*"     # double-quoted literal or identifier
  | `(?:[^`]|``)*`           # backtick identifier
  | /\*.*?\*/                # block comment
  | --[^\n]*                 # line comment
  {hash_comment}
  | \?
  | %
"""

# `#` starts a comment in MySQL but is an operator in PostgreSQL
_TOKEN_RE = re.compile(_TOKENS.replace("{hash_comment}", r"| \#[^\n]*"), re.VERBOSE | re.DOTALL)
_TOKEN_RE_NO_HASH = re.compile(_TOKENS.replace("{hash_comment}", ""), re.VERBOSE | re.DOTALL)


def _tokenizer(hash_comments: bool):
    return _TOKEN_RE if hash_comments else _TOKEN_RE_NO_HASH


def check_params(params) -> None:
    """Raise InvalidParameterShape unless params is a mapping, list or tuple."""
    if not isinstance(params, (Mapping, list, tuple)):
        raise InvalidParameterShape()


def _keys(params) -> list:
    if isinstance(params, Mapping):
        return list(params.keys())
    return list(range(len(params)))


def bound_values(params) -> tuple:
    """Values to bind, in key order."""
    check_params(params)
    if isinstance(params, Mapping):
        return tuple(params.values())
    return tuple(params)


def format_columns(params) -> str:
    """
    Build a column list from the keys of params.

    Keys are backtick-quoted, except `*` which is passed through:
    {"id": 1, "name": "x"} gives "`id`, `name`".
    """
    check_params(params)
    return ", ".join(
        key if key == "*" else f"`{key}`" for key in _keys(params)
    )


def format_placeholders(params) -> str:
    """One `?` per entry in params, comma separated."""
    check_params(params)
    return ", ".join("?" for _ in range(len(params)))


def format_conditions(params, separator: str = ",") -> str:
    """
    Build `` `key` = ? `` clauses for each key in params.

    Args:
        params: Mapping (or list/tuple) whose keys name the columns
        separator: AND, OR or "," (case and surrounding whitespace ignored).
            Anything else falls back to ","

    Returns:
        Clauses joined by the separator, e.g. "`a` = ? AND `b` = ?"
    """
    check_params(params)
    separator = str(separator).strip().upper()
    if separator not in SEPARATORS:
        separator = ","

    return f" {separator} ".join(f"`{key}` = ?" for key in _keys(params))


def translate_query(
    query: str,
    identifier_quote: str = "`",
    paramstyle: bool = False,
    hash_comments: bool = True,
) -> str:
    """
    Rewrite a `?`/backtick statement for a DB-API driver.

    Quoted literals and comments are copied through untouched, apart
    from `%` doubling when values are bound.

    Args:
        query: SQL text using `?` placeholders and backtick identifiers
        identifier_quote: Quote character the target server expects
        paramstyle: True when values will be bound, in which case `?`
            becomes `%s` and literal `%` is doubled
        hash_comments: Whether `#` starts a line comment (MySQL)

    Returns:
        The rewritten SQL text
    """
    def _replace(match):
        token = match.group(0)
        if token == "?":
            return "%s" if paramstyle else token
        if token == "%":
            return "%%" if paramstyle else token

        if token[0] == "`" and identifier_quote != "`":
            name = token[1:-1].replace("``", "`")
            name = name.replace(identifier_quote, identifier_quote * 2)
            token = f"{identifier_quote}{name}{identifier_quote}"
        if paramstyle:
            token = token.replace("%", "%%")
        return token

    return _tokenizer(hash_comments).sub(_replace, query)


def count_placeholders(query: str, hash_comments: bool = True) -> int:
    """Number of `?` markers outside literals and comments."""
    return sum(
        1 for match in _tokenizer(hash_comments).finditer(query)
        if match.group(0) == "?"
    )
