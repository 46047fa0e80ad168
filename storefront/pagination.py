from typing import List

from pydantic import BaseModel

from storefront.errors import ClientValidationError
from storefront.schemas import Page


class Pagination(BaseModel):
    """Where a paged listing stands, as last reported by the backend.

    Indexes are zero-based. Nothing is cached: moving to another page is a
    fresh request issued by the owning store.
    """
    current_page: int = 0
    total_pages: int = 0
    total_items: int = 0
    page_size: int = 12

    @classmethod
    def from_page(cls, page: Page) -> "Pagination":
        return cls(
            current_page=page.number,
            total_pages=page.total_pages,
            total_items=page.total_elements,
            page_size=page.size,
        )

    @property
    def has_previous(self) -> bool:
        return self.current_page > 0

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages - 1

    @property
    def show_controls(self) -> bool:
        return self.total_pages > 1

    def page_numbers(self) -> List[int]:
        return list(range(self.total_pages))

    def check_page(self, page: int) -> int:
        if page < 0 or page >= max(self.total_pages, 1):
            raise ClientValidationError(f"Page {page} is out of range")
        return page
