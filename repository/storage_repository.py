# repository/storage_repository.py
import logging
from typing import List, Optional
from urllib.parse import quote
import httpx
from config.http import get_http_client
from config.settings import settings
from core.entities import DirectoryEntry
from util.errors import BackendUnavailableError

logger = logging.getLogger(__name__)


class StorageRepository:
    """
    Flat object store keyed by path (Bunny storage API).

    Flow:
    - GET on a key ending in "/" lists that one directory as JSON.
    - GET/PUT/DELETE on any other key reads/writes/removes one object.
    - Every call carries the AccessKey header; the store does no path checks,
      so callers resolve user paths before any mutation.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        base_url: str = settings.BUNNY_STORAGE_URL,
        api_key: str = settings.BUNNY_API_KEY,
    ) -> None:
        self._http = client
        self._base = base_url.rstrip("/")
        self._headers = {"AccessKey": api_key}

    async def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = await get_http_client()
        return self._http

    def _url(self, key: str) -> str:
        # Keys are literal object names; "#", "?" and "%" must not reach the wire raw.
        return f"{self._base}/{quote(key.lstrip('/'), safe='/~!')}"

    async def _send(
        self, method: str, key: str, content: Optional[bytes] = None
    ) -> httpx.Response:
        client = await self._client()
        try:
            return await client.request(
                method, self._url(key), headers=self._headers, content=content
            )
        except httpx.RequestError as e:
            logger.error(
                "storage.request_error op=%s key=%s err=%s", method, key, type(e).__name__
            )
            raise BackendUnavailableError(method, key, type(e).__name__)

    async def list_directory(self, path: str) -> List[DirectoryEntry]:
        if not path.endswith("/"):
            path = path + "/"
        res = await self._send("GET", path)
        if res.status_code // 100 != 2:
            raise BackendUnavailableError("LIST", path, f"status={res.status_code}")
        try:
            items = res.json()
        except ValueError:
            raise BackendUnavailableError("LIST", path, "malformed listing")
        if not isinstance(items, list):
            raise BackendUnavailableError("LIST", path, "malformed listing")
        return [DirectoryEntry.from_raw(item) for item in items if isinstance(item, dict)]

    async def get_response(self, key: str) -> Optional[httpx.Response]:
        res = await self._send("GET", key)
        if res.status_code // 100 != 2:
            logger.debug("storage.get.miss key=%s status=%d", key, res.status_code)
            return None
        return res

    async def get(self, key: str) -> Optional[bytes]:
        res = await self.get_response(key)
        return res.content if res is not None else None

    async def get_text(self, key: str) -> Optional[str]:
        data = await self.get(key)
        if data is None:
            return None
        return data.decode("utf-8", errors="replace")

    async def put(self, key: str, data: bytes) -> None:
        res = await self._send("PUT", key, content=data)
        if res.status_code // 100 != 2:
            logger.error("storage.put.failed key=%s status=%d", key, res.status_code)
            raise BackendUnavailableError("PUT", key, f"status={res.status_code}")

    async def delete(self, key: str) -> None:
        res = await self._send("DELETE", key)
        if res.status_code // 100 != 2:
            logger.error("storage.delete.failed key=%s status=%d", key, res.status_code)
            raise BackendUnavailableError("DELETE", key, f"status={res.status_code}")
