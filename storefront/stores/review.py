import logging
from typing import List, Optional

import httpx
from pydantic import BaseModel

from storefront.errors import ClientValidationError, error_message
from storefront.pagination import Pagination
from storefront.schemas import CreateReviewRequest, ProductRating, Review
from storefront.services.review import ReviewService
from storefront.stores.base import Store

logger = logging.getLogger(__name__)

MAX_COMMENT_LENGTH = 1000


class ReviewState(BaseModel):
    product_id: Optional[int] = None
    reviews: List[Review] = []
    pagination: Pagination = Pagination(page_size=10)
    rating: Optional[ProductRating] = None
    is_loading: bool = False
    is_submitting: bool = False
    error: Optional[str] = None


def validate_review(rating: int, comment: str) -> str:
    """Return the trimmed comment or raise with the message the form shows."""
    if rating == 0:
        raise ClientValidationError("Please select a rating")
    if not 1 <= rating <= 5:
        raise ClientValidationError("Rating must be between 1 and 5")
    comment = (comment or "").strip()
    if not comment:
        raise ClientValidationError("Please write a review comment")
    if len(comment) > MAX_COMMENT_LENGTH:
        raise ClientValidationError(f"Review must be at most {MAX_COMMENT_LENGTH} characters")
    return comment


class ReviewStore(Store[ReviewState]):
    """Reviews and average rating for the product being viewed."""

    def __init__(self, service: ReviewService, page_size: int = 10):
        self.service = service
        self.page_size = page_size
        super().__init__(ReviewState(pagination=Pagination(page_size=page_size)))

    async def load_reviews(self, product_id: int, page: int = 0, size: Optional[int] = None) -> None:
        self.set(product_id=product_id, is_loading=True)
        try:
            result = await self.service.get_product_reviews(product_id, page, size or self.page_size)
        except httpx.HTTPError:
            logger.exception("Failed to load reviews for product %s", product_id)
            self.set(is_loading=False)
            return
        self.set(reviews=result.content, pagination=Pagination.from_page(result), is_loading=False)

    async def load_rating(self, product_id: int) -> None:
        try:
            rating = await self.service.get_product_rating(product_id)
        except httpx.HTTPError:
            logger.exception("Failed to load rating for product %s", product_id)
            return
        self.set(rating=rating)

    async def go_to_page(self, page: int) -> None:
        if self.state.product_id is None:
            raise ClientValidationError("No product selected")
        self.state.pagination.check_page(page)
        await self.load_reviews(self.state.product_id, page, self.state.pagination.page_size)

    async def submit_review(self, product_id: int, rating: int, comment: str) -> Review:
        self.set(error=None)
        try:
            comment = validate_review(rating, comment)
        except ClientValidationError as exc:
            self.set(error=exc.message)
            raise
        self.set(is_submitting=True)
        try:
            review = await self.service.create_review(
                CreateReviewRequest(product_id=product_id, rating=rating, comment=comment)
            )
        except httpx.HTTPError as exc:
            self.set(
                error=error_message(exc, "Failed to submit review. You may need to purchase this product first."),
                is_submitting=False,
            )
            raise
        self.set(is_submitting=False)
        await self.load_reviews(product_id)
        await self.load_rating(product_id)
        return review

    def has_reviewed(self, username: str) -> bool:
        """Whether ``username`` wrote one of the reviews currently loaded.

        Known gap: only the loaded page is scanned, so a review on another page
        goes unnoticed. The backend is the authority on duplicates and rejects
        them on submit.
        """
        return any(r.user.username == username for r in self.state.reviews)
