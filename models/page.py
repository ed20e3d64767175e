"""Paginated list responses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Tuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """
    One page of a backend list endpoint.

    Backend shape: {content: T[], totalPages, totalElements, page?, size?}
    """

    content: Tuple[T, ...]
    total_pages: int = 0
    total_elements: int = 0
    number: int = 0
    size: int = 0

    @property
    def has_previous(self) -> bool:
        return self.number > 0

    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages

    @property
    def is_empty(self) -> bool:
        return not self.content

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        item_factory: Callable[[Dict[str, Any]], T],
        number: int = 0,
        size: int = 0,
    ) -> "Page[T]":
        """
        Build a page, converting each content entry with item_factory.

        The requested page number and size are used when the backend omits them.
        """
        data = data or {}
        content = tuple(item_factory(item) for item in (data.get("content") or []))
        return cls(
            content=content,
            total_pages=int(data.get("totalPages") or 0),
            total_elements=int(data.get("totalElements") or 0),
            number=int(data.get("page", data.get("number", number)) or 0),
            size=int(data.get("size") or size),
        )
