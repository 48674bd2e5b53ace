"""
Query specifications: filtering, ordering and paging applied to a read query.

A specification is built once per request and applied twice by the read
repository, once with paging for the page slice and once without paging (and
without ordering) for the total count.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Tuple

from sqlalchemy import String, or_
from sqlalchemy.orm import Query

from webapi.core.errors import BadRequestException
from webapi.schemas.pagination import PaginationFilter


def parse_order_expression(expression: str) -> Tuple[str, bool]:
    """Split ``"name desc"`` into ``("name", True)``; ascending by default."""
    parts = expression.strip().split()
    if not parts or len(parts) > 2:
        raise BadRequestException(f"Invalid order by expression '{expression}'")
    descending = False
    if len(parts) == 2:
        direction = parts[1].lower()
        if direction not in ("asc", "desc"):
            raise BadRequestException(f"Invalid order by direction '{parts[1]}'")
        descending = direction == "desc"
    return parts[0], descending


@dataclass
class Specification:
    """Filter, ordering and paging for queries over ``model``."""

    model: Any
    criteria: List[Any] = field(default_factory=list)
    order_by: List[Tuple[str, bool]] = field(default_factory=list)
    skip: Optional[int] = None
    take: Optional[int] = None

    def order(self, column_name: str, descending: bool = False) -> "Specification":
        self._column(column_name)
        self.order_by.append((column_name, descending))
        return self

    def search(self, keyword: Optional[str], fields: Optional[Sequence[str]] = None) -> "Specification":
        """Case-insensitive substring match of ``keyword`` over ``fields``.

        Without ``fields`` the model's ``__searchable__`` columns are searched,
        or every non-key string column when the model declares none.
        """
        if not keyword or not keyword.strip():
            return self
        if fields:
            columns = [self._column(name) for name in fields]
        else:
            columns = self._searchable_columns()
        pattern = f"%{keyword.strip()}%"
        if columns:
            self.criteria.append(or_(*[column.ilike(pattern) for column in columns]))
        return self

    def paginate(self, page_number: int, page_size: int) -> "Specification":
        self.skip = (page_number - 1) * page_size
        self.take = page_size
        return self

    def apply(self, query: Query, paginate: bool = True) -> Query:
        """Apply the specification to ``query``.

        With ``paginate=False`` neither ordering nor paging is applied, which
        is the form used for counting.
        """
        for criterion in self.criteria:
            query = query.filter(criterion)
        if not paginate:
            return query
        for column_name, descending in self.order_by:
            column = self._column(column_name)
            query = query.order_by(column.desc() if descending else column.asc())
        if self.skip:
            query = query.offset(self.skip)
        if self.take is not None:
            query = query.limit(self.take)
        return query

    def _searchable_columns(self):
        names = getattr(self.model, "__searchable__", None)
        if names:
            return [self._column(name) for name in names]
        return [
            getattr(self.model, c.key)
            for c in self.model.__table__.columns
            if isinstance(c.type, String) and not c.primary_key and not c.foreign_keys
        ]

    def _column(self, name: str):
        columns = self.model.__table__.columns
        for column in columns:
            if column.name.lower() == name.lower():
                return getattr(self.model, column.key)
        raise BadRequestException(f"Unknown field '{name}' for {self.model.__name__}")


class EntitiesByPaginationFilterSpec(Specification):
    """Specification built from a ``PaginationFilter``."""

    def __init__(self, model: Any, pagination_filter: PaginationFilter):
        super().__init__(model=model)
        self.search(pagination_filter.keyword)
        if pagination_filter.advanced_search is not None:
            self.search(
                pagination_filter.advanced_search.keyword,
                pagination_filter.advanced_search.fields,
            )
        for expression in pagination_filter.order_by:
            if expression and expression.strip():
                self.order(*parse_order_expression(expression))
        self.paginate(pagination_filter.page_number, pagination_filter.page_size)
