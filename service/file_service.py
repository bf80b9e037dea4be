# service/file_service.py
import asyncio
import json
import logging
from dataclasses import dataclass
from typing import List, Tuple
from fastapi import status
from config.settings import settings
from core.entities import FileRecord, LintReport, UserInfo
from core.html_lint import validate_html
from core.paths import resolve_storage_key
from core.tree_lister import list_recursive
from repository import namespaces
from repository.storage_repository import StorageRepository
from util import functions
from util.constants import ALLOWED_EXTENSIONS
from util.enums import ErrorMessage
from util.errors import AppError, BackendUnavailableError, InvalidPathError
from util.timing import timed

logger = logging.getLogger(__name__)

DEFAULT_ETAG = '"0"'


async def list_tree(storage: StorageRepository, root: str) -> List[FileRecord]:
    """
    Flat listing of everything under `root`, sorted by object name.
    Bounded by LIST_DEADLINE_SECONDS as a whole; raises 504 past it.
    """
    with timed(logger, "tree.list", root=root):
        try:
            records = await asyncio.wait_for(
                list_recursive(
                    root,
                    storage.list_directory,
                    max_depth=settings.LIST_MAX_DEPTH,
                    concurrency=settings.LIST_CONCURRENCY,
                ),
                timeout=settings.LIST_DEADLINE_SECONDS,
            )
        except asyncio.TimeoutError:
            logger.error("tree.list.timeout root=%s", root)
            raise AppError.of(ErrorMessage.LISTING_TIMEOUT)
    return sorted(records, key=lambda r: r.object_name)


def file_key(user: UserInfo, path: str) -> str:
    # One object under the user's root; the root itself is a directory, never a file key.
    key = resolve_storage_key(namespaces.user_root(user.username), path)
    if key.endswith("/"):
        raise InvalidPathError()
    return key


async def bump_change_marker(storage: StorageRepository, userid: str) -> None:
    # Best effort: a stale marker only costs the client one extra full listing.
    try:
        await storage.put(
            namespaces.change_marker_key(userid),
            functions.new_change_marker(userid).encode("utf-8"),
        )
    except BackendUnavailableError:
        logger.warning("files.marker.failed user=%s", userid)


@dataclass
class FileContent:
    data: bytes
    content_type: str


class FileService:
    def __init__(self, storage: StorageRepository) -> None:
        self._storage = storage

    async def upload(self, user: UserInfo, path: str, data: bytes) -> str:
        """
        Store `data` at the user's `path`. The path is confined to the user's
        namespace before anything is sent to the store.
        """
        key = file_key(user, path)

        filename = key.rsplit("/", 1)[-1]
        ext = functions.file_extension(filename)
        if not ext or ext not in ALLOWED_EXTENSIONS:
            logger.info("upload.rejected user=%s ext=%s", user.username, ext or "-")
            raise AppError.of(ErrorMessage.FILE_TYPE_NOT_ALLOWED)

        try:
            await self._storage.put(key, data)
        except BackendUnavailableError:
            raise AppError.of(ErrorMessage.UPLOAD_FAILED)

        await bump_change_marker(self._storage, user.userid)
        logger.info("upload.ok user=%s key=%s bytes=%d", user.username, key, len(data))
        return key

    async def list_files(self, user: UserInfo) -> Tuple[List[FileRecord], str]:
        records = await list_tree(self._storage, namespaces.user_root(user.username))

        etag = DEFAULT_ETAG
        try:
            marker = await self._storage.get_text(namespaces.change_marker_key(user.userid))
        except BackendUnavailableError:
            logger.warning("files.marker.unavailable user=%s", user.userid)
            marker = None
        if marker and marker.strip():
            etag = functions.quote_etag(marker)

        logger.info("files.list user=%s count=%d", user.username, len(records))
        return records, etag

    async def delete(self, user: UserInfo, path: str) -> str:
        key = file_key(user, path)
        try:
            await self._storage.delete(key)
        except BackendUnavailableError:
            raise AppError.of(ErrorMessage.DELETE_FAILED)

        await bump_change_marker(self._storage, user.userid)
        logger.info("delete.ok user=%s key=%s", user.username, key)
        return key

    async def get_content(
        self, user: UserInfo, owner: str, path: str
    ) -> FileContent:
        if owner != user.username:
            raise AppError.of(ErrorMessage.UNAUTHORIZED)
        if not path.strip("/"):
            raise AppError("File path not specified", status.HTTP_400_BAD_REQUEST)

        key = file_key(user, path)
        res = await self._storage.get_response(key)
        if res is None:
            raise AppError.of(ErrorMessage.FILE_NOT_FOUND)
        return FileContent(
            data=res.content,
            content_type=res.headers.get("content-type") or "text/html",
        )

    async def validate(self, user: UserInfo, file: str) -> Tuple[int, dict]:
        """
        Lint one of the user's HTML files and keep the report in the user's
        private space. Returns (http_status, report).
        """
        if file.startswith("/"):
            raise AppError.of(ErrorMessage.INVALID_PATH)
        key = file_key(user, file)

        html = await self._storage.get_text(key)
        if html is None:
            return status.HTTP_404_NOT_FOUND, _single_issue_report(f"{file} not found")

        with timed(logger, "html.validate", user=user.username):
            report: LintReport = validate_html(html)
        payload = report.to_dict()

        try:
            await self._storage.put(
                namespaces.validation_report_key(user.userid),
                json.dumps(payload).encode("utf-8"),
            )
        except BackendUnavailableError:
            logger.warning("html.report.store.failed user=%s", user.userid)

        logger.info(
            "html.validate user=%s file=%s issues=%d",
            user.username,
            file,
            len(report.issues),
        )
        return status.HTTP_200_OK, payload

    async def validation_report(self, user: UserInfo) -> Tuple[int, dict]:
        raw = await self._storage.get_text(namespaces.validation_report_key(user.userid))
        if raw is None:
            return status.HTTP_404_NOT_FOUND, _single_issue_report(
                "No validation report found"
            )
        try:
            return status.HTTP_200_OK, json.loads(raw)
        except ValueError:
            logger.error("html.report.malformed user=%s", user.userid)
            return status.HTTP_500_INTERNAL_SERVER_ERROR, _single_issue_report(
                "Failed to retrieve validation report"
            )


def _single_issue_report(message: str) -> dict:
    return {
        "valid": False,
        "issues": [{"type": "error", "message": message, "line": 0, "column": 0}],
    }
