import logging
from typing import Optional

import httpx
from pydantic import BaseModel, ValidationError

from storefront.errors import ClientValidationError, error_message
from storefront.schemas import ROLE_ADMIN, LoginRequest, RegisterRequest, User
from storefront.services.auth import AuthService
from storefront.stores.base import Store

logger = logging.getLogger(__name__)


class AuthState(BaseModel):
    user: Optional[User] = None
    is_authenticated: bool = False
    is_loading: bool = False
    error: Optional[str] = None


class AuthStore(Store[AuthState]):
    def __init__(self, service: AuthService):
        self.service = service
        super().__init__(AuthState(user=service.get_current_user(), is_authenticated=service.is_authenticated()))

    async def login(self, username: str, password: str) -> None:
        self.set(is_loading=True, error=None)
        try:
            response = await self.service.login(LoginRequest(username=username, password=password))
        except httpx.HTTPError as exc:
            self.set(error=error_message(exc, "Login failed"), is_loading=False)
            raise
        self.set(user=response.to_user(), is_authenticated=True, is_loading=False)

    async def register(self, username: str, email: str, password: str) -> None:
        try:
            data = RegisterRequest(username=username, email=email, password=password)
        except ValidationError:
            self.set(error="Please enter a valid email")
            raise ClientValidationError("Please enter a valid email") from None
        self.set(is_loading=True, error=None)
        try:
            await self.service.register(data)
        except httpx.HTTPError as exc:
            self.set(error=error_message(exc, "Registration failed"), is_loading=False)
            raise
        self.set(is_loading=False)

    def logout(self) -> None:
        self.service.logout()
        self.set(user=None, is_authenticated=False, error=None)

    def check_auth(self) -> None:
        """Re-read the persisted session, dropping it if the token has expired."""
        if self.service.get_token() and not self.service.is_authenticated():
            logger.info("Stored session has expired")
            self.service.logout()
        self.set(user=self.service.get_current_user(), is_authenticated=self.service.is_authenticated())

    def has_role(self, role: str) -> bool:
        user = self.state.user
        return self.state.is_authenticated and user is not None and user.has_role(role)

    def is_admin(self) -> bool:
        return self.has_role(ROLE_ADMIN)
