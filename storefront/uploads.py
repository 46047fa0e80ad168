"""
Admin image/video upload flow.

Files are checked locally (MIME type prefix and size) before a multipart
request is built. A failed upload keeps the selected file so it can be retried;
there is no chunking or resume.
"""
import asyncio
import contextlib
import logging
from typing import Callable, List, Optional

import httpx

from storefront.errors import ClientValidationError, error_message
from storefront.schemas import ProductMedia, SelectedFile
from storefront.services.media import MediaService

logger = logging.getLogger(__name__)

IMAGE_MAX_BYTES = 5 * 1024 * 1024
VIDEO_MAX_BYTES = 50 * 1024 * 1024


class SimulatedProgress:
    """Placeholder upload progress. It does NOT measure bytes sent.

    httpx gives no progress events for a multipart body, so while the request
    is in flight the value climbs by ``step`` every ``interval`` seconds up to
    ``ceiling``; ``finish`` then snaps it to 100 (success) or 0 (failure).
    """

    def __init__(self, step: int = 10, ceiling: int = 90, interval: float = 0.5):
        self.step = step
        self.ceiling = ceiling
        self.interval = interval
        self.value = 0
        self._task: Optional[asyncio.Task] = None
        self._listeners: List[Callable[[int], None]] = []

    def subscribe(self, listener: Callable[[int], None]) -> None:
        self._listeners.append(listener)

    def _set(self, value: int) -> None:
        self.value = value
        for listener in list(self._listeners):
            listener(value)

    async def _tick(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            self._set(min(self.value + self.step, self.ceiling))

    def start(self) -> None:
        self._set(0)
        self._task = asyncio.get_running_loop().create_task(self._tick())

    async def finish(self, value: int) -> None:
        if self._task is not None:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
        self._set(value)

    def reset(self) -> None:
        self._set(0)


class MediaUploader:
    kind = "file"
    mime_prefix = ""
    max_bytes = 0
    type_message = ""
    size_message = ""

    def __init__(self, service: MediaService, product_id: int, display_order: int = 0):
        self.service = service
        self.product_id = product_id
        self.display_order = display_order
        self.file: Optional[SelectedFile] = None
        self.error: Optional[str] = None
        self.uploading = False

    def validate(self, file: SelectedFile) -> None:
        if not file.content_type.startswith(self.mime_prefix):
            raise ClientValidationError(self.type_message)
        if file.size > self.max_bytes:
            raise ClientValidationError(self.size_message)

    def select(self, file: SelectedFile) -> None:
        """Pick ``file`` for upload. A rejected file leaves the previous pick."""
        try:
            self.validate(file)
        except ClientValidationError as exc:
            self.error = exc.message
            raise
        self.error = None
        self.file = file

    def clear(self) -> None:
        self.file = None
        self.error = None

    async def _send(self, file: SelectedFile) -> ProductMedia:
        raise NotImplementedError

    async def upload(self) -> ProductMedia:
        if self.file is None:
            raise ClientValidationError(f"No {self.kind} selected")
        self.uploading = True
        self.error = None
        try:
            media = await self._send(self.file)
        except httpx.HTTPError as exc:
            self.error = error_message(exc, f"Failed to upload {self.kind}")
            raise
        finally:
            self.uploading = False
        logger.info("Uploaded %s %s for product %s", self.kind, self.file.name, self.product_id)
        self.file = None
        return media


class ImageUploader(MediaUploader):
    kind = "image"
    mime_prefix = "image/"
    max_bytes = IMAGE_MAX_BYTES
    type_message = "Please select an image file (JPG, PNG, WebP, GIF)"
    size_message = "Image must be less than 5MB"

    async def _send(self, file):
        return await self.service.upload_image(self.product_id, file, None, self.display_order)


class VideoUploader(MediaUploader):
    kind = "video"
    mime_prefix = "video/"
    max_bytes = VIDEO_MAX_BYTES
    type_message = "Please select a video file (MP4, WebM)"
    size_message = "Video must be less than 50MB"

    def __init__(self, service: MediaService, product_id: int, display_order: int = 0,
                 progress: Optional[SimulatedProgress] = None):
        super().__init__(service, product_id, display_order)
        self.progress = progress or SimulatedProgress()

    async def _send(self, file):
        self.progress.start()
        try:
            media = await self.service.upload_video(self.product_id, file, None, self.display_order)
        except BaseException:
            await self.progress.finish(0)
            raise
        await self.progress.finish(100)
        return media

    def clear(self) -> None:
        super().clear()
        self.progress.reset()
