"""
Builder objects populated by callers before DDL is rendered.

Every definition is created fresh for a single statement and handed to the
caller's ``populate`` callback; none of them are reused across calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Sequence, Tuple

from ..dialects.base import Dialect
from .errors import InvalidColumnError


class VirtualTableKind(Enum):
    VIEW = "view"
    MATERIALIZED_VIEW = "materialized_view"

    @property
    def keyword(self) -> str:
        return _KEYWORDS[self]


_KEYWORDS = {
    VirtualTableKind.VIEW: "VIEW",
    VirtualTableKind.MATERIALIZED_VIEW: "MATERIALIZED VIEW",
}


def quote_all(dialect: Dialect, names: Sequence[str]) -> str:
    return ", ".join(dialect.quote_identifier(name) for name in names)


@dataclass(frozen=True)
class VirtualTableOptions:
    """
    Per-call options for creating or dropping a view.

    ``check_option`` is rendered as ``WITH <value> CHECK OPTION`` (ANSI defines
    CASCADED and LOCAL). ``drop_behavior`` is appended to DROP statements
    (ANSI defines CASCADE and RESTRICT). Neither value is validated.
    """

    force: bool = False
    check_option: str | None = None
    drop_behavior: str | None = None


class ViewDefinition:
    """
    Explicit output columns and the backing query of a view.
    """

    def __init__(self, dialect: Dialect, select_query: str) -> None:
        self.dialect = dialect
        self.select_query = select_query
        self.columns: List[str] = []

    def add_column(self, name: str) -> "ViewDefinition":
        self.columns.append(name)
        return self

    def render(self) -> str:
        if not self.columns:
            return ""
        return f"({quote_all(self.dialect, self.columns)})"


class MappingDefinition:
    """
    Projection from the columns of an existing table onto new names.

    ``view_columns[i]`` is the view-side name of ``select_columns[i]``.
    """

    def __init__(self, column_names: Iterable[str], *, table: str | None = None) -> None:
        self.column_names: Tuple[str, ...] = tuple(column_names)
        self.table = table
        self._allowed = frozenset(self.column_names)
        self.view_columns: List[str] = []
        self.select_columns: List[str] = []

    def map(self, old_name: str, new_name: str) -> "MappingDefinition":
        if old_name not in self._allowed:
            raise InvalidColumnError(old_name, self.table)
        self.view_columns.append(new_name)
        self.select_columns.append(old_name)
        return self

    def render(self) -> Tuple[List[str], List[str]]:
        return list(self.view_columns), list(self.select_columns)


@dataclass(frozen=True)
class FunctionParam:
    direction: str
    name: str
    type: str

    def render(self) -> str:
        return f"{self.direction} {self.name} {self.type}"


class ParamDefinition:
    """
    Parameter list and return type of a stored function.

    A ``return_type`` of None renders no RETURN clause. Parameter names and
    types are emitted verbatim.
    """

    def __init__(self, return_type: str | None = None) -> None:
        self.return_type = return_type
        self.params: List[FunctionParam] = []

    def add_param(self, direction: str, name: str, type: str) -> "ParamDefinition":
        self.params.append(FunctionParam(" ".join(direction.upper().split()), name, type))
        return self

    def render(self) -> str:
        clause = ""
        if self.params:
            clause = "(" + ", ".join(param.render() for param in self.params) + ")"
        if self.return_type is not None:
            clause += f" RETURN {self.return_type}"
        return clause
