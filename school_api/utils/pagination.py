# school_api/utils/pagination.py
"""Pagination utilities for consistent API responses."""
from typing import Any, Dict, List
from pydantic import BaseModel, Field, computed_field
from fastapi import Query
from math import ceil

MAX_PAGE_SIZE = 50


class PaginationParams(BaseModel):
    """Standard pagination parameters."""
    page: int = Field(1, ge=1, description="Page number (starts from 1)")
    page_size: int = Field(10, ge=1, le=MAX_PAGE_SIZE, description="Items per page")

    @computed_field
    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size


class Paginator:
    """Pagination utility class."""

    @staticmethod
    def get_pagination_params(
        page: int = Query(1, ge=1, description="Page number"),
        page_size: int = Query(10, ge=1, le=MAX_PAGE_SIZE, description="Items per page")
    ) -> PaginationParams:
        """FastAPI dependency for pagination parameters."""
        return PaginationParams(page=page, page_size=page_size)

    @staticmethod
    def total_pages(count: int, page_size: int) -> int:
        return ceil(count / page_size) if page_size > 0 else 0

    @staticmethod
    def create_response(items: List[Any], count: int, params: PaginationParams) -> Dict[str, Any]:
        """Create standardized paginated response."""
        return {
            "results": items,
            "count": count,
            "page": params.page,
            "page_size": params.page_size,
            "total_pages": Paginator.total_pages(count, params.page_size),
        }
