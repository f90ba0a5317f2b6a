"""Pagination bounds and the paginated list envelope."""

from dataclasses import dataclass, field
from typing import Any, NamedTuple

PER_PAGE_MIN = 5
PER_PAGE_MAX = 100
PAGE_MIN = 1


class PaginationRequest(NamedTuple):
    per_page: int
    page: int

    def as_params(self) -> dict[str, int]:
        return {"per_page": self.per_page, "page": self.page}


def normalize_pagination(per_page: int, page: int) -> PaginationRequest:
    """Clamp pagination input to the bounds the service accepts.

    Out-of-range values are corrected, never rejected: `per_page` is
    clamped into [5, 100] and `page` to at least 1.

    Args:
        per_page: Requested items per page
        page: Requested page number (1 to N)

    Returns:
        The normalized (per_page, page) pair
    """
    per_page = max(PER_PAGE_MIN, min(per_page, PER_PAGE_MAX))
    page = max(PAGE_MIN, page)
    return PaginationRequest(per_page=per_page, page=page)


@dataclass(frozen=True)
class Pagination:
    current_page: int
    per_page: int
    total_pages: int

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Pagination":
        return cls(
            current_page=int(data.get("current_page", 0)),
            per_page=int(data.get("per_page", 0)),
            total_pages=int(data.get("total_pages", 0)),
        )


@dataclass
class PaginatedList:
    """One page of a list endpoint.

    Items are left as decoded JSON objects. The latest-release list without
    an archive reports no total page count, so `total_count` may be None.
    """

    pagination: Pagination
    items: list[dict[str, Any]] = field(default_factory=list)
    total_count: int | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "PaginatedList":
        total_count = data.get("total_count")
        return cls(
            pagination=Pagination.from_json(data.get("pagination") or {}),
            items=list(data.get("list") or []),
            total_count=int(total_count) if total_count is not None else None,
        )
