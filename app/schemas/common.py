"""Common Pydantic response schema definitions.

Schemas shared by every API domain.
"""

from typing import Any
from pydantic import BaseModel


class PaginatedResponse(BaseModel):
    """Paginated response wrapper schema.

    Attributes:
        items: List of result items
        total: Total count across all pages
        page: Current page number, 1-based
        per_page: Items per page
    """

    items: list[Any]  # Items for the current page
    total: int  # Total item count
    page: int  # Current page, 1-indexed
    per_page: int  # Items per page
