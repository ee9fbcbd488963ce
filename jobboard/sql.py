"""
SQL fragment builders.

Both compilers emit positional placeholders ($1, $2, ...) and return the
bound values separately; caller-supplied values never end up in SQL text.
"""

from typing import Any, Callable, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from .errors import BadRequestError

# (fragment, params) or None when the criterion imposes no constraint
PredicateResult = Optional[Tuple[str, List[Any]]]
PredicateBuilder = Callable[[Any, str], PredicateResult]


class SetClause(NamedTuple):
    set_cols: str
    values: List[Any]


class WhereClause(NamedTuple):
    where: str
    values: List[Any]


def compile_set_clause(
    fields_to_update: Mapping[str, Any],
    name_translation: Mapping[str, str],
    start: int = 1,
) -> SetClause:
    """
    Build the SET portion of a partial UPDATE.

    Args:
        fields_to_update: {field name: new value}, iteration order decides numbering
        name_translation: {field name: column name}; missing names are used as-is
        start: number of the first placeholder

    Returns:
        SetClause('"first_name"=$1, "age"=$2', ["Aliya", 32])

    Raises:
        BadRequestError: if there is nothing to update
    """
    if not fields_to_update:
        raise BadRequestError("No data")

    cols: List[str] = []
    values: List[Any] = []
    for idx, (field, value) in enumerate(fields_to_update.items(), start):
        column = name_translation.get(field, field)
        cols.append(f'"{column}"=${idx}')
        values.append(value)

    return SetClause(", ".join(cols), values)


def compile_where_clause(
    criteria: Mapping[str, Any],
    predicates: Sequence[Tuple[str, PredicateBuilder]],
    start: int = 1,
) -> WhereClause:
    """
    Build a WHERE clause from whichever criteria are present.

    Predicates are applied in the given order. A criterion whose value is
    None is skipped. Each builder receives the value and the placeholder it
    must use if it binds a parameter, and returns (fragment, params) or None.

    Returns:
        WhereClause("WHERE a AND b", [...]), or ("", []) when nothing applies
    """
    clauses: List[str] = []
    values: List[Any] = []

    for name, build in predicates:
        value = criteria.get(name)
        if value is None:
            continue
        result = build(value, f"${start + len(values)}")
        if result is None:
            continue
        fragment, params = result
        clauses.append(fragment)
        values.extend(params)

    if not clauses:
        return WhereClause("", [])
    return WhereClause("WHERE " + " AND ".join(clauses), values)


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so the text matches literally (escape char is backslash)."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def select_list(columns: Sequence[str], translation: Mapping[str, str], prefix: str = "") -> str:
    """
    Render a SELECT column list, aliasing translated columns to their field names.

    select_list(["handle", "numEmployees"], {"numEmployees": "num_employees"})
    -> 'handle, num_employees AS "numEmployees"'
    """
    parts = []
    for field in columns:
        column = translation.get(field, field)
        if column == field:
            parts.append(f"{prefix}{column}")
        else:
            parts.append(f'{prefix}{column} AS "{field}"')
    return ", ".join(parts)
