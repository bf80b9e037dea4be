# controller/controller_dependencies.py
from typing import Optional
from fastapi import Depends, HTTPException, Request, Response, UploadFile
from fastapi_limiter.depends import RateLimiter
from config.settings import settings
from core.entities import UserInfo
from repository.storage_repository import StorageRepository
from service.file_service import FileService
from service.identity_service import IdentityService
from service.site_service import SiteService

_limiter = RateLimiter(times=settings.RATE_LIMIT_TIMES, seconds=settings.RATE_LIMIT_SECONDS)


async def rate_limit(request: Request, response: Response) -> None:
    # Limiter state lives in Redis; off unless configured.
    if not settings.RATE_LIMIT_ENABLED:
        return
    await _limiter(request, response)


def get_storage_repository() -> StorageRepository:
    return StorageRepository()


def get_identity_service() -> IdentityService:
    return IdentityService()


def get_file_service(
    storage: StorageRepository = Depends(get_storage_repository),
) -> FileService:
    return FileService(storage)


def get_site_service(
    storage: StorageRepository = Depends(get_storage_repository),
) -> SiteService:
    return SiteService(storage)


async def get_current_user(
    request: Request,
    identity: IdentityService = Depends(get_identity_service),
) -> UserInfo:
    token: Optional[str] = request.cookies.get(settings.AUTH_COOKIE_NAME)
    return await identity.current_user(token)


async def read_upload(request: Request, file: UploadFile) -> bytes:
    """Read the uploaded file, refusing anything over MAX_FILE_MB."""
    max_bytes = settings.max_file_bytes
    too_large = HTTPException(
        status_code=413, detail=f"File too large (max {settings.MAX_FILE_MB}MB)"
    )

    # Fast pre-check via Content-Length if present (covers the whole form)
    cl = request.headers.get("content-length")
    if cl and cl.isdigit() and int(cl) > max_bytes + 64 * 1024:
        raise too_large

    # Hard cap while reading (works even if no Content-Length)
    blob = await file.read(max_bytes + 1)
    if len(blob) > max_bytes:
        raise too_large
    return blob
