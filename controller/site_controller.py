# controller/site_controller.py
from fastapi import APIRouter, Depends
from fastapi.responses import Response
from core.entities import UserInfo
from model.api import MigrateUsernameRequest, MigrateUsernameResponse, OkResponse
from service.site_service import SiteService
from util.constants import InternalURIs
from util.enums import ErrorMessage
from util.errors import AppError
from controller.controller_dependencies import get_current_user, get_site_service, rate_limit

site_router = APIRouter(dependencies=[Depends(rate_limit)])


@site_router.post(InternalURIs.CREATE_STARTER, response_model=OkResponse)
async def create_starter(
    user: UserInfo = Depends(get_current_user),
    service: SiteService = Depends(get_site_service),
) -> OkResponse:
    await service.create_starter(user)
    return OkResponse()


@site_router.get(InternalURIs.FILES_ZIP)
async def download_zip(
    user: UserInfo = Depends(get_current_user),
    service: SiteService = Depends(get_site_service),
) -> Response:
    data = await service.export_zip(user)
    return Response(
        content=data,
        media_type="application/zip",
        headers={
            "Content-Disposition": f'attachment; filename="{user.username}.zip"',
            "Cache-Control": "no-store",
        },
    )


@site_router.get(InternalURIs.PREPARE_MIGRATION, response_model=OkResponse)
async def prepare_migration(
    user: UserInfo = Depends(get_current_user),
    service: SiteService = Depends(get_site_service),
) -> OkResponse:
    await service.prepare_migration(user)
    return OkResponse()


@site_router.post(InternalURIs.MIGRATE_USERNAME, response_model=MigrateUsernameResponse)
async def migrate_username(
    payload: MigrateUsernameRequest,
    user: UserInfo = Depends(get_current_user),
    service: SiteService = Depends(get_site_service),
) -> MigrateUsernameResponse:
    if not payload.old:
        raise AppError.of(ErrorMessage.BAD_REQUEST)
    moved = await service.migrate_username(user, payload.old)
    return MigrateUsernameResponse(moved=moved)
