from typing import Optional

from fastapi import Query

from referencedata.config import settings
from referencedata.repositories.versioned import PageRequest


def get_page_request(
    page: int = Query(0, ge=0, description="Zero-based page index"),
    size: Optional[int] = Query(
        None,
        ge=0,
        le=settings.MAX_PAGE_SIZE,
        description="Page size; omit or 0 to return every match",
    ),
) -> PageRequest:
    return PageRequest(page=page, size=size)
