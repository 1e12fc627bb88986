"""Offset pagination and sort resolution for list queries."""

from dataclasses import dataclass

from sqlalchemy import ColumnElement


@dataclass(frozen=True)
class PaginationSpec:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def order_by_clause(column: ColumnElement, order: str) -> ColumnElement:
    """ASC or DESC on `column`. Ties keep whatever order the database picks."""
    return column.asc() if order.upper() == "ASC" else column.desc()


def escape_like(value: str, escape: str = "\\") -> str:
    """Escape LIKE wildcards so a filter matches `%` and `_` literally."""
    return (
        value.replace(escape, escape * 2)
        .replace("%", f"{escape}%")
        .replace("_", f"{escape}_")
    )
