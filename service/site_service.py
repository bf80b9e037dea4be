# service/site_service.py
import datetime
import logging
from pathlib import Path
from typing import List, Tuple
from config.settings import settings
from core.entities import UserInfo
from core.zip_export import build_site_zip
from repository import namespaces
from repository.storage_repository import StorageRepository
from service.file_service import bump_change_marker, list_tree
from service.identity_service import is_valid_username
from util.constants import USERNAME_PLACEHOLDER, YEAR_PLACEHOLDER
from util.enums import ErrorMessage
from util.errors import AppError, BackendUnavailableError, InvalidPathError
from util.timing import timed

logger = logging.getLogger(__name__)

STARTER_TEMPLATE = "starter.html"


class SiteService:
    """
    Multi-step workflows over a user's whole namespace:
    starter page generation, zip export and username migration.
    """

    def __init__(self, storage: StorageRepository, public_dir: str = settings.PUBLIC_DIR) -> None:
        self._storage = storage
        self._public_dir = Path(public_dir)

    async def create_starter(self, user: UserInfo) -> None:
        template = self._public_dir / STARTER_TEMPLATE
        if not template.is_file():
            logger.error("starter.template.missing path=%s", template)
            raise AppError.of(ErrorMessage.STARTER_TEMPLATE_MISSING)

        html = template.read_text(encoding="utf-8")
        html = html.replace(USERNAME_PLACEHOLDER, user.username)
        html = html.replace(YEAR_PLACEHOLDER, str(datetime.date.today().year))

        key = f"{namespaces.user_root(user.username)}index.html"
        try:
            await self._storage.put(key, html.encode("utf-8"))
        except BackendUnavailableError:
            raise AppError.of(ErrorMessage.STARTER_FAILED)

        await bump_change_marker(self._storage, user.userid)
        logger.info("starter.ok user=%s", user.username)

    async def export_zip(self, user: UserInfo) -> bytes:
        root = namespaces.user_root(user.username)
        records = await list_tree(self._storage, root)

        files: List[Tuple[str, bytes]] = []
        for record in records:
            data = await self._storage.get(f"{root}{record.object_name}")
            if data is None:
                logger.warning(
                    "zip.fetch.failed user=%s file=%s", user.username, record.object_name
                )
                continue
            files.append((record.object_name, data))

        with timed(logger, "zip.build", user=user.username, files=len(files)):
            return build_site_zip(user.username, files)

    async def prepare_migration(self, user: UserInfo) -> None:
        await self._storage.put(
            namespaces.migration_token_key(user.username), user.userid.encode("utf-8")
        )
        logger.info("migration.prepared user=%s", user.username)

    async def migrate_username(self, user: UserInfo, old_username: str) -> int:
        """
        Move every file from ~old_username to the caller's namespace.

        The old namespace must carry a migration token holding the caller's
        userid (written by prepare_migration while signed in under the old
        name). Returns the number of files moved.
        """
        if not is_valid_username(old_username):
            raise InvalidPathError()

        token_key = namespaces.migration_token_key(old_username)
        stored = await self._storage.get_text(token_key)
        if stored is None:
            raise AppError.of(ErrorMessage.MIGRATION_TOKEN_MISSING)
        if stored != user.userid:
            logger.warning(
                "migration.token.mismatch user=%s old=%s", user.username, old_username
            )
            raise AppError.of(ErrorMessage.MIGRATION_TOKEN_INVALID)

        old_root = namespaces.user_root(old_username)
        new_root = namespaces.user_root(user.username)
        if old_root == new_root:
            await self._drop_token(token_key)
            return 0

        records = await list_tree(self._storage, old_root)
        moved = 0
        for record in records:
            if record.object_name == namespaces.MIGRATION_TOKEN:
                continue
            data = await self._storage.get(f"{old_root}{record.object_name}")
            if data is None:
                continue
            try:
                await self._storage.put(f"{new_root}{record.object_name}", data)
            except BackendUnavailableError:
                logger.error(
                    "migration.copy.failed old=%s new=%s file=%s",
                    old_username,
                    user.username,
                    record.object_name,
                )
                raise AppError.of(ErrorMessage.MIGRATION_FAILED)
            try:
                await self._storage.delete(f"{old_root}{record.object_name}")
            except BackendUnavailableError:
                logger.warning(
                    "migration.cleanup.failed old=%s file=%s",
                    old_username,
                    record.object_name,
                )
            moved += 1

        await self._drop_token(token_key)
        await bump_change_marker(self._storage, user.userid)
        logger.info(
            "migration.ok old=%s new=%s files=%d", old_username, user.username, moved
        )
        return moved

    async def _drop_token(self, token_key: str) -> None:
        try:
            await self._storage.delete(token_key)
        except BackendUnavailableError:
            logger.warning("migration.token.cleanup.failed key=%s", token_key)
