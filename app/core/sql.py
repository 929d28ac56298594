"""
Parameterized SQL fragment builders used by the CRUD layer.

- sql_for_partial_update(): SET clause for partial updates
- FilterClauseBuilder: WHERE clause for list filters, one instance per entity

Both return a structured clause (ordered predicates plus ordered bound values)
that is only rendered to SQL text where it is spliced into a statement.
Values are never interpolated into the SQL text.
"""

import operator
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Sequence, Tuple

from sqlalchemy import Table, and_
from sqlalchemy.sql.elements import ColumnElement

from app.core.exceptions import BadRequestError

Placeholder = Callable[[int], str]


def positional(index: int) -> str:
    """PostgreSQL positional placeholder: $1, $2, ..."""
    return f"${index}"


def param_name(index: int) -> str:
    """Bind parameter name for placeholder `index`: p1, p2, ..."""
    return f"p{index}"


def named(index: int) -> str:
    """Named bind placeholder understood by sqlalchemy.text(): :p1, :p2, ..."""
    return f":{param_name(index)}"


def _ilike(column, value):
    return column.ilike(value)


SQL_OPERATORS: Dict[str, Callable[[Any, Any], Any]] = {
    ">": operator.gt,
    ">=": operator.ge,
    "<=": operator.le,
    "ILIKE": _ilike,
}


@dataclass(frozen=True)
class Predicate:
    """A single comparison against one bound value."""
    column: str
    operator: str = "="


class ClauseFragment(ABC):
    """
    Ordered predicates joined by a fixed connective, with one bound value per
    predicate. Placeholder indices run 1..n in predicate order.

    Unpacks as ``(sql, values)``::

        set_cols, values = sql_for_partial_update(data, js_to_sql)
    """

    separator = ", "
    prefix = ""

    def __init__(self, predicates: Sequence[Predicate], values: Sequence[Any]):
        if len(predicates) != len(values):
            raise ValueError("Each predicate needs exactly one bound value")
        self.predicates: Tuple[Predicate, ...] = tuple(predicates)
        self.values: Tuple[Any, ...] = tuple(values)

    def __len__(self) -> int:
        return len(self.predicates)

    def __iter__(self) -> Iterator[Any]:
        yield self.sql
        yield list(self.values)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.sql!r}, {list(self.values)!r})"

    @abstractmethod
    def render_predicate(self, predicate: Predicate, placeholder: str) -> str:
        """Render one predicate around its placeholder text."""

    def render(self, placeholder: Placeholder = positional) -> str:
        """Render the clause text, numbering placeholders from 1."""
        if not self.predicates:
            return ""
        parts = [
            self.render_predicate(predicate, placeholder(idx))
            for idx, predicate in enumerate(self.predicates, start=1)
        ]
        return self.prefix + self.separator.join(parts)

    @property
    def sql(self) -> str:
        return self.render()

    @property
    def next_index(self) -> int:
        """Placeholder index a caller should use for the next bound value."""
        return len(self.values) + 1

    def params(self) -> Dict[str, Any]:
        """Bound values keyed to match the placeholders produced by named()."""
        return {param_name(idx): value for idx, value in enumerate(self.values, start=1)}


class SetClause(ClauseFragment):
    """Comma separated ``"column"=$n`` assignments for an UPDATE statement."""

    def render_predicate(self, predicate: Predicate, placeholder: str) -> str:
        # Quoted to tolerate reserved words and mixed case
        return f'"{predicate.column}"{predicate.operator}{placeholder}'


class WhereClause(ClauseFragment):
    """``WHERE a AND b ...`` filter; renders to "" when there are no predicates."""

    separator = " AND "
    prefix = "WHERE "

    def render_predicate(self, predicate: Predicate, placeholder: str) -> str:
        return f"{predicate.column} {predicate.operator} {placeholder}"

    def to_expression(self, table: Table) -> Optional[ColumnElement]:
        """
        Build the same predicates as a SQLAlchemy expression against `table`.

        Lets the filter run on any dialect SQLAlchemy supports (ILIKE compiles
        to lower() LIKE lower() outside PostgreSQL). Returns None when there
        is nothing to filter on.
        """
        if not self.predicates:
            return None
        return and_(*(
            SQL_OPERATORS[predicate.operator](table.c[predicate.column], value)
            for predicate, value in zip(self.predicates, self.values)
        ))


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    js_to_sql: Optional[Mapping[str, str]] = None
) -> SetClause:
    """
    Build the SET clause of a partial update.

    Args:
        data_to_update: Client field name -> new value, e.g.
            {"firstName": "Aliya", "age": 32}. Insertion order decides
            placeholder order.
        js_to_sql: Client field name -> column name, only for names that
            differ, e.g. {"firstName": "first_name"}.

    Returns:
        SetClause rendering as '"first_name"=$1, "age"=$2' with values
        ["Aliya", 32]. The caller's row key goes in placeholder
        `next_index`.

    Raises:
        BadRequestError: If data_to_update is empty
    """
    if not data_to_update:
        raise BadRequestError("No data")

    js_to_sql = js_to_sql or {}
    predicates = [Predicate(js_to_sql.get(key, key)) for key in data_to_update]
    return SetClause(predicates, list(data_to_update.values()))


def _identity(value: Any) -> Any:
    return value


@dataclass(frozen=True)
class FilterField:
    """
    One recognized filter key and how it becomes a predicate.

    `flag` fields only apply when the supplied value is True; any other
    field applies when its value is neither None nor "".
    """
    key: str
    column: str
    operator: str
    transform: Callable[[Any], Any] = _identity
    flag: bool = False

    def is_present(self, value: Any) -> bool:
        if self.flag:
            return value is True
        return value is not None and value != ""


@dataclass(frozen=True)
class BoundPair:
    """Lower/upper filter keys that must satisfy lower <= upper."""
    lower: str
    upper: str
    message: str


def contains(key: str, column: str) -> FilterField:
    """Case-insensitive substring match."""
    return FilterField(key, column, "ILIKE", lambda value: f"%{value}%")


def at_least(key: str, column: str) -> FilterField:
    return FilterField(key, column, ">=")


def at_most(key: str, column: str) -> FilterField:
    return FilterField(key, column, "<=")


def positive_when_set(key: str, column: str) -> FilterField:
    """Restrict to column > 0 when the flag is true; no predicate otherwise."""
    return FilterField(key, column, ">", lambda _: 0, flag=True)


class FilterClauseBuilder:
    """
    WHERE clause builder driven by a declarative field table.

    Fields are emitted in declaration order whatever order the criteria
    arrive in, so identical criteria always give identical SQL.
    """

    def __init__(self, fields: Sequence[FilterField], bounds: Sequence[BoundPair] = ()):
        self.fields: Tuple[FilterField, ...] = tuple(fields)
        self.bounds: Tuple[BoundPair, ...] = tuple(bounds)
        self._by_key: Dict[str, FilterField] = {field.key: field for field in self.fields}

        for bound in self.bounds:
            if bound.lower not in self._by_key or bound.upper not in self._by_key:
                raise ValueError(f"Unknown filter keys in bound pair: {bound.lower}, {bound.upper}")

    @property
    def keys(self) -> Tuple[str, ...]:
        return tuple(field.key for field in self.fields)

    def check_bounds(self, criteria: Mapping[str, Any]) -> None:
        """
        Compare each declared pair whose sides are both supplied.

        Raises:
            BadRequestError: If any declared lower bound exceeds its upper bound
        """
        for bound in self.bounds:
            lower = criteria.get(bound.lower)
            upper = criteria.get(bound.upper)
            if not (self._by_key[bound.lower].is_present(lower) and self._by_key[bound.upper].is_present(upper)):
                continue
            if lower > upper:
                raise BadRequestError(bound.message)

    def build(self, criteria: Optional[Mapping[str, Any]] = None) -> WhereClause:
        """
        Build the WHERE clause for `criteria`.

        Unrecognized keys are ignored; request validation rejects them
        before they get here.

        Raises:
            BadRequestError: If a bound pair is inverted
        """
        criteria = criteria or {}
        self.check_bounds(criteria)

        predicates = []
        values = []
        for field in self.fields:
            value = criteria.get(field.key)
            if not field.is_present(value):
                continue
            predicates.append(Predicate(field.column, field.operator))
            values.append(field.transform(value))

        return WhereClause(predicates, values)
