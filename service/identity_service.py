# service/identity_service.py
import re
import logging
from typing import Optional
import httpx
from config.http import get_http_client
from config.settings import settings
from core.entities import UserInfo
from util.constants import USERNAME_PATTERN
from util.enums import ErrorMessage
from util.errors import AppError

logger = logging.getLogger(__name__)

_USERNAME_RE = re.compile(USERNAME_PATTERN)


def is_valid_username(username: object) -> bool:
    return isinstance(username, str) and bool(_USERNAME_RE.match(username))


class IdentityService:
    """
    Resolves a session token to the caller's identity via the identity provider
    (GET /me for the id, then GET /users/{id} for the username).
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        api_url: str = settings.HANKO_API_URL,
    ) -> None:
        self._http = client
        self._url = api_url.rstrip("/")

    async def _get_json(self, path: str, token: str) -> dict:
        client = self._http or await get_http_client()
        try:
            res = await client.get(
                f"{self._url}{path}", headers={"Authorization": f"Bearer {token}"}
            )
        except httpx.RequestError as e:
            logger.error("identity.request_error path=%s err=%s", path, type(e).__name__)
            raise AppError.of(ErrorMessage.IDENTITY_UNAVAILABLE)

        if res.status_code // 100 != 2:
            logger.warning("identity.rejected path=%s status=%d", path, res.status_code)
            raise AppError.of(ErrorMessage.UNAUTHORIZED)

        try:
            body = res.json()
        except ValueError:
            logger.error("identity.malformed path=%s", path)
            raise AppError.of(ErrorMessage.IDENTITY_UNAVAILABLE)
        if not isinstance(body, dict):
            raise AppError.of(ErrorMessage.IDENTITY_UNAVAILABLE)
        return body

    async def current_user(self, token: Optional[str]) -> UserInfo:
        if not token:
            raise AppError.of(ErrorMessage.UNAUTHORIZED)

        me = await self._get_json("/me", token)
        userid = str(me.get("id") or "")
        if not userid:
            raise AppError.of(ErrorMessage.UNAUTHORIZED)

        user = await self._get_json(f"/users/{userid}", token)
        username = user.get("username")
        if not is_valid_username(username):
            logger.warning("identity.username.invalid user=%s", userid)
            raise AppError.of(ErrorMessage.INVALID_USERNAME)

        return UserInfo(userid=userid, username=username)
