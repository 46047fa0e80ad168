"""
Backend reachability check.

    python -m storefront.diagnostics
"""
import asyncio
import json
import os
from typing import Optional

import httpx

from storefront.api import create_client, send
from storefront.config import Settings, configure_logging, load_settings
from storefront.session import TOKEN_KEY, FileStorage, Storage, token_expired


async def check_backend(
    settings: Optional[Settings] = None,
    storage: Optional[Storage] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> dict:
    settings = settings or load_settings()
    storage = storage if storage is not None else FileStorage(settings.session_file)
    response = {
        "backend": "❌ Not Reachable",
        "api_url": settings.api_url,
        "api_url_env": "✅ Set" if os.getenv("STORE_API_URL") else "❌ Not Set (using default)",
        "connection_status": "Not Connected",
        "categories": [],
        "session": "❌ No session",
    }

    token = storage.get_item(TOKEN_KEY)
    if token:
        response["session"] = "⚠️ Expired token" if token_expired(token) else "✅ Token stored"

    async with create_client(settings, storage, transport=transport) as client:
        try:
            categories = await send(client, "GET", "/api/public/categories")
        except httpx.HTTPStatusError as e:
            response["backend"] = f"⚠️ Reachable but HTTP {e.response.status_code}"
            response["connection_status"] = "Connected"
        except httpx.HTTPError as e:
            response["backend"] = f"❌ Error: {str(e)[:50]}"
        else:
            response["backend"] = "✅ Running"
            response["connection_status"] = "Connected"
            response["categories"] = [c.get("name") for c in (categories or [])][:10]
    return response


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    print(json.dumps(asyncio.run(check_backend(settings)), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
