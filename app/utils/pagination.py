from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from fastapi import Query as QueryParam
from pydantic.alias_generators import to_camel, to_snake
from sqlalchemy import func, inspect, or_
from sqlalchemy.orm import Query

from app.models.status import EntityStatus
from app.utils.response_utils import invalid_parameters

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
DEFAULT_SORT_BY = "createdAt"


def exclude_non_active(model):
    """Rows are visible unless their status is non-active, compared case-insensitively."""
    return or_(
        model.status.is_(None),
        func.lower(model.status) != EntityStatus.NON_ACTIVE.value,
    )


def only_active(model):
    """Rows are visible only when their status is exactly active."""
    return model.status == EntityStatus.ACTIVE.value


def _parse_positive(raw: Optional[str], default: int) -> int:
    try:
        value = int(str(raw).strip()) if raw is not None else default
    except ValueError:
        return default
    return max(value, 1)


def resolve_sort_column(model, sort_by: str) -> str:
    """Map a camelCase or snake_case field name to a column of `model`."""
    columns = {column.key for column in inspect(model).columns}
    for candidate in (sort_by, to_snake(sort_by)):
        if candidate in columns:
            return candidate
    raise invalid_parameters(
        message=f"Cannot sort by '{sort_by}'",
        details={"allowed": sorted(to_camel(column) for column in columns)},
    )


@dataclass
class ListQueryParams:
    page: int
    limit: int
    sort_by: str
    sort_column: str
    descending: bool

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def order_direction(self) -> str:
        return "desc" if self.descending else "asc"

    @classmethod
    def from_raw(
        cls,
        model,
        page: Optional[str] = None,
        limit: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> "ListQueryParams":
        sort_by = (sort_by or "").strip() or DEFAULT_SORT_BY
        return cls(
            page=_parse_positive(page, DEFAULT_PAGE),
            limit=_parse_positive(limit, DEFAULT_LIMIT),
            sort_by=sort_by,
            sort_column=resolve_sort_column(model, sort_by),
            descending=(sort_order or "").strip().lower() == "desc",
        )


def list_params(model) -> Callable[..., ListQueryParams]:
    """
    Build a FastAPI dependency reading page, limit, sortBy and sortOrder for `model`.
    Values arrive as raw strings so that junk falls back to the defaults instead of a 400.
    """
    def dependency(
        page: Optional[str] = QueryParam(None),
        limit: Optional[str] = QueryParam(None),
        sortBy: Optional[str] = QueryParam(None),
        sortOrder: Optional[str] = QueryParam(None),
    ) -> ListQueryParams:
        return ListQueryParams.from_raw(model, page, limit, sortBy, sortOrder)

    return dependency


def paginate_query(query: Query, params: ListQueryParams) -> Tuple[int, List[Any]]:
    """
    Helper function to paginate SQLAlchemy queries.
    Returns a tuple of (total_count, items); the count ignores offset and limit.
    """
    model = query.column_descriptions[0]["entity"]
    column = getattr(model, params.sort_column)
    ordering = column.desc() if params.descending else column.asc()

    total = query.order_by(None).count()
    items = query.order_by(ordering, model.id.asc()).offset(params.offset).limit(params.limit).all()
    return total, items
