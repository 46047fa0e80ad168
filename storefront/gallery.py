"""
Media gallery selection for the product detail view.

The gallery shows a product's uploaded media in order. Products created before
media uploads existed only carry ``image_url``; when a product has no media
records that URL is shown as a single legacy image.
"""
from typing import Annotated, List, Literal, Optional, Sequence, Union

from pydantic import BaseModel, Field

from storefront.errors import ClientValidationError
from storefront.schemas import MediaType, Product, ProductMedia


class UploadedMedia(BaseModel):
    kind: Literal["media"] = "media"
    media: ProductMedia

    @property
    def url(self) -> str:
        return self.media.url


class LegacyImage(BaseModel):
    kind: Literal["legacyImage"] = "legacyImage"
    url: str


GalleryItem = Annotated[Union[UploadedMedia, LegacyImage], Field(discriminator="kind")]


def gallery_items(product: Product, media: Sequence[ProductMedia]) -> List[GalleryItem]:
    items: List[GalleryItem] = [UploadedMedia(media=m) for m in media]
    if not items and product.image_url:
        items.append(LegacyImage(url=product.image_url))
    return items


class MediaGallery:
    def __init__(self, product: Product, media: Sequence[ProductMedia]):
        self.product = product
        self.items = gallery_items(product, media)
        self.index = 0

    def __len__(self) -> int:
        return len(self.items)

    @property
    def current(self) -> Optional[GalleryItem]:
        if not self.items:
            return None
        return self.items[self.index]

    @property
    def show_navigation(self) -> bool:
        return len(self.items) > 1

    @property
    def counter(self) -> str:
        if not self.items:
            return "0 / 0"
        return f"{self.index + 1} / {len(self.items)}"

    def next(self) -> int:
        if self.items:
            self.index = (self.index + 1) % len(self.items)
        return self.index

    def previous(self) -> int:
        if self.items:
            self.index = (self.index - 1) % len(self.items)
        return self.index

    def select(self, index: int) -> int:
        if not 0 <= index < len(self.items):
            raise ClientValidationError(f"No media at position {index}")
        self.index = index
        return self.index

    def media_type(self, item: Optional[GalleryItem] = None) -> Optional[MediaType]:
        item = item if item is not None else self.current
        if item is None:
            return None
        if item.kind == "legacyImage":
            return MediaType.IMAGE
        return item.media.media_type

    def alt_text(self, item: Optional[GalleryItem] = None) -> str:
        item = item if item is not None else self.current
        if item is not None and item.kind == "media" and item.media.alt_text:
            return item.media.alt_text
        return self.product.name
