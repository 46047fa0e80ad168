import httpx

from storefront.api import send
from storefront.schemas import CreateReviewRequest, Page, ProductRating, Review


class ReviewService:
    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def get_product_reviews(self, product_id: int, page: int = 0, size: int = 10) -> Page[Review]:
        body = await send(
            self.client, "GET", f"/api/reviews/product/{product_id}", params={"page": page, "size": size}
        )
        return Page[Review].model_validate(body)

    async def get_product_rating(self, product_id: int) -> ProductRating:
        body = await send(self.client, "GET", f"/api/reviews/product/{product_id}/rating")
        return ProductRating.model_validate(body)

    async def create_review(self, data: CreateReviewRequest) -> Review:
        return Review.model_validate(await send(self.client, "POST", "/api/reviews", json=data.to_payload()))

    async def get_my_reviews(self, page: int = 0, size: int = 10) -> Page[Review]:
        body = await send(self.client, "GET", "/api/reviews/my-reviews", params={"page": page, "size": size})
        return Page[Review].model_validate(body)

    async def delete_review(self, review_id: int) -> None:
        await send(self.client, "DELETE", f"/api/reviews/{review_id}")
