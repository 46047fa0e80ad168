from typing import List, Optional

import httpx
from pydantic import TypeAdapter

from storefront.api import clean_params, send
from storefront.schemas import ProductMedia, SelectedFile

_media_list = TypeAdapter(List[ProductMedia])


class MediaService:
    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def _upload(
        self, url: str, file: SelectedFile, alt_text: Optional[str], display_order: Optional[int]
    ) -> ProductMedia:
        form = {}
        if alt_text:
            form["altText"] = alt_text
        if display_order is not None:
            form["displayOrder"] = str(display_order)
        body = await send(
            self.client,
            "POST",
            url,
            files={"file": (file.name, file.data, file.content_type)},
            data=form,
        )
        return ProductMedia.model_validate(body)

    async def upload_image(
        self,
        product_id: int,
        file: SelectedFile,
        alt_text: Optional[str] = None,
        display_order: Optional[int] = None,
    ) -> ProductMedia:
        """Upload an image for a product."""
        return await self._upload(f"/api/admin/media/products/{product_id}/images", file, alt_text, display_order)

    async def upload_video(
        self,
        product_id: int,
        file: SelectedFile,
        alt_text: Optional[str] = None,
        display_order: Optional[int] = None,
    ) -> ProductMedia:
        """Upload a video for a product."""
        return await self._upload(f"/api/admin/media/products/{product_id}/videos", file, alt_text, display_order)

    async def get_product_media(self, product_id: int) -> List[ProductMedia]:
        return _media_list.validate_python(await send(self.client, "GET", f"/api/admin/media/products/{product_id}"))

    async def update_media(
        self, media_id: int, alt_text: Optional[str] = None, display_order: Optional[int] = None
    ) -> ProductMedia:
        """Update alt text and/or display order; unset values are left alone."""
        params = clean_params({"altText": alt_text, "displayOrder": display_order})
        return ProductMedia.model_validate(await send(self.client, "PUT", f"/api/admin/media/{media_id}", params=params))

    async def delete_media(self, media_id: int) -> None:
        await send(self.client, "DELETE", f"/api/admin/media/{media_id}")
