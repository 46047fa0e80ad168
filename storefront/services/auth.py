import json
import logging
from typing import Optional

import httpx

from storefront.api import send
from storefront.schemas import ROLE_ADMIN, AuthResponse, LoginRequest, MessageResponse, RegisterRequest, User
from storefront.session import TOKEN_KEY, USER_KEY, Storage, token_expired

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, client: httpx.AsyncClient, storage: Storage):
        self.client = client
        self.storage = storage

    async def register(self, data: RegisterRequest) -> MessageResponse:
        body = await send(self.client, "POST", "/api/auth/register", json=data.to_payload())
        return MessageResponse.model_validate(body)

    async def login(self, data: LoginRequest) -> AuthResponse:
        body = await send(self.client, "POST", "/api/auth/login", json=data.to_payload())
        auth = AuthResponse.model_validate(body)
        self.storage.set_item(TOKEN_KEY, auth.token)
        self.storage.set_item(USER_KEY, auth.to_user().model_dump_json(by_alias=True))
        logger.info("Logged in as %s", auth.username)
        return auth

    def logout(self) -> None:
        self.storage.remove_item(TOKEN_KEY)
        self.storage.remove_item(USER_KEY)
        logger.info("Session cleared")

    def get_current_user(self) -> Optional[User]:
        raw = self.storage.get_item(USER_KEY)
        if not raw:
            return None
        return User.model_validate(json.loads(raw))

    def get_token(self) -> Optional[str]:
        return self.storage.get_item(TOKEN_KEY)

    def is_authenticated(self) -> bool:
        token = self.get_token()
        return bool(token) and not token_expired(token)

    def has_role(self, role: str) -> bool:
        user = self.get_current_user()
        return user is not None and user.has_role(role)

    def is_admin(self) -> bool:
        return self.has_role(ROLE_ADMIN)
