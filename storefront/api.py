import logging
from typing import Any, Optional

import httpx

from storefront.config import Settings
from storefront.session import TOKEN_KEY, Storage

logger = logging.getLogger(__name__)


class BearerAuth(httpx.Auth):
    """Attach the persisted session token to every outgoing request."""

    def __init__(self, storage: Storage):
        self.storage = storage

    def auth_flow(self, request):
        token = self.storage.get_item(TOKEN_KEY)
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        yield request


async def _log_request(request: httpx.Request) -> None:
    logger.debug("%s %s", request.method, request.url)


async def _log_response(response: httpx.Response) -> None:
    logger.debug("%s %s -> %s", response.request.method, response.request.url, response.status_code)


def create_client(
    settings: Settings,
    storage: Storage,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    kwargs = {}
    if settings.timeout is not None:
        kwargs["timeout"] = settings.timeout
    if transport is not None:
        kwargs["transport"] = transport
    return httpx.AsyncClient(
        base_url=settings.api_url,
        auth=BearerAuth(storage),
        headers={"Accept": "application/json"},
        event_hooks={"request": [_log_request], "response": [_log_response]},
        **kwargs,
    )


def clean_params(params: dict) -> dict:
    return {k: v for k, v in params.items() if v is not None}


async def send(client: httpx.AsyncClient, method: str, url: str, **kwargs) -> Any:
    """One round trip. Errors propagate as raised by httpx."""
    response = await client.request(method, url, **kwargs)
    response.raise_for_status()
    if not response.content:
        return None
    return response.json()
