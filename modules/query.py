"""
Pagination, filter and sort query composition for backend list endpoints.

Every paginated endpoint takes:
    page, size, sortBy, sortDirection  (+ optional filters)

ListQuery is immutable. Changing a filter, the sort or the page size
starts again from page 0; only goto() keeps the filters and moves pages.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Tuple


SORT_ASC = "ASC"
SORT_DESC = "DESC"
SORT_DIRECTIONS = (SORT_ASC, SORT_DESC)

PAGE_SIZES = (2, 10, 20, 50, 100)
DEFAULT_PAGE_SIZE = 20

# Agent filter values with special meaning on the overrides endpoint
AGENT_FILTER_ALL = "all"
AGENT_FILTER_MANAGER = "manager"

# Query-string keys understood by the backend, in the order they are sent
FILTER_KEYS = ("status", "categoryId", "productId", "customerId", "agentId")


@dataclass(frozen=True)
class ListQuery:
    """
    Query for one page of a list endpoint.

    Filters with empty values are never sent.
    """

    sort_by: str
    sort_direction: str = SORT_ASC
    page: int = 0
    size: int = DEFAULT_PAGE_SIZE
    filters: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)
    sortable: Tuple[str, ...] = ()
    """Accepted sort fields; empty means any."""

    def __post_init__(self):
        if self.sort_direction not in SORT_DIRECTIONS:
            raise ValueError(f"Invalid sort direction: {self.sort_direction}")
        if self.page < 0:
            raise ValueError(f"Invalid page index: {self.page}")
        if self.size not in PAGE_SIZES:
            raise ValueError(f"Invalid page size: {self.size}")

    # ------------------------------------------------------------------
    # Derivations
    # ------------------------------------------------------------------

    def filter_value(self, key: str) -> str:
        return dict(self.filters).get(key, "")

    def with_filter(self, key: str, value: Optional[Any]) -> "ListQuery":
        """Set (or clear, with an empty value) one filter and reset to page 0."""
        current = [(k, v) for k, v in self.filters if k != key]
        text = "" if value is None else str(value).strip()
        if text:
            current.append((key, text))
        current.sort(key=lambda kv: FILTER_KEYS.index(kv[0]) if kv[0] in FILTER_KEYS else len(FILTER_KEYS))
        return replace(self, filters=tuple(current), page=0)

    def with_sort(self, sort_by: str, direction: Optional[str] = None) -> "ListQuery":
        if self.sortable and sort_by not in self.sortable:
            raise ValueError(f"Invalid sort field: {sort_by}")
        return replace(self, sort_by=sort_by, sort_direction=direction or self.sort_direction, page=0)

    def toggle_direction(self) -> "ListQuery":
        flipped = SORT_DESC if self.sort_direction == SORT_ASC else SORT_ASC
        return replace(self, sort_direction=flipped, page=0)

    def with_size(self, size: int) -> "ListQuery":
        return replace(self, size=size, page=0)

    def goto(self, page: int) -> "ListQuery":
        return replace(self, page=max(page, 0))

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_params(self) -> Dict[str, Any]:
        """Query-string parameters for the backend."""
        params: Dict[str, Any] = {
            "page": self.page,
            "size": self.size,
            "sortBy": self.sort_by,
            "sortDirection": self.sort_direction,
        }
        for key, value in self.filters:
            if key == "agentId" and value == AGENT_FILTER_ALL:
                continue
            params[key] = value
        return params

    def to_args(self) -> Dict[str, Any]:
        """Arguments for url_for() so page links keep the current query."""
        args: Dict[str, Any] = {
            "page": self.page,
            "size": self.size,
            "sort": self.sort_by,
            "direction": self.sort_direction,
        }
        args.update(dict(self.filters))
        return args

    @classmethod
    def from_args(
        cls,
        args: Mapping[str, Any],
        defaults: "ListQuery",
        filter_keys: Tuple[str, ...] = (),
    ) -> "ListQuery":
        """
        Build a query from request args, falling back to defaults for
        anything missing or invalid.
        """
        query = defaults

        sort_by = args.get("sort") or defaults.sort_by
        if defaults.sortable and sort_by not in defaults.sortable:
            sort_by = defaults.sort_by
        direction = str(args.get("direction") or defaults.sort_direction).upper()
        if direction not in SORT_DIRECTIONS:
            direction = defaults.sort_direction
        query = replace(query, sort_by=sort_by, sort_direction=direction)

        size = _parse_int(args.get("size"), defaults.size)
        if size not in PAGE_SIZES:
            size = defaults.size
        query = replace(query, size=size)

        for key in filter_keys:
            value = args.get(key)
            if value:
                query = query.with_filter(key, value)

        page = _parse_int(args.get("page"), 0)
        return query.goto(page)


def _parse_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


# =============================================================================
# PER-RESOURCE DEFAULTS
# =============================================================================

ORDER_QUERY = ListQuery(
    sort_by="createdAt",
    sort_direction=SORT_DESC,
    sortable=("createdAt", "status", "totalPrice"),
)
ORDER_FILTERS = ("status",)

PRODUCT_QUERY = ListQuery(
    sort_by="name",
    sort_direction=SORT_ASC,
    sortable=("name", "specialPrice", "originalPrice", "createdAt"),
)
PRODUCT_FILTERS = ("categoryId",)

OVERRIDE_QUERY = ListQuery(sort_by="customer_id", sort_direction=SORT_ASC)
OVERRIDE_FILTERS = ("productId", "customerId", "agentId")

CUSTOMER_OVERRIDE_QUERY = ListQuery(sort_by="product_id", sort_direction=SORT_ASC)
