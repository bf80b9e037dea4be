# controller/file_controller.py
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, Header, Query, Request, UploadFile, status
from fastapi.responses import JSONResponse, Response
from core.entities import UserInfo
from model.api import DeleteFileRequest, FileRecordOut, OkResponse, ValidationReport
from service.file_service import FileService
from util.constants import InternalURIs
from util.enums import ErrorMessage
from util.errors import AppError
from controller.controller_dependencies import (
    get_current_user,
    get_file_service,
    rate_limit,
    read_upload,
)

file_router = APIRouter(dependencies=[Depends(rate_limit)])


@file_router.post(InternalURIs.FILES, response_model=OkResponse)
async def upload_file(
    request: Request,
    file: Optional[UploadFile] = File(None),
    path: Optional[str] = Form(None),
    user: UserInfo = Depends(get_current_user),
    service: FileService = Depends(get_file_service),
) -> OkResponse:
    if file is None or not path:
        raise AppError.of(ErrorMessage.BAD_REQUEST)
    data = await read_upload(request, file)
    await service.upload(user, path, data)
    return OkResponse()


@file_router.get(InternalURIs.FILES, response_model=List[FileRecordOut])
async def list_files(
    if_none_match: Optional[str] = Header(None),
    user: UserInfo = Depends(get_current_user),
    service: FileService = Depends(get_file_service),
) -> Response:
    records, etag = await service.list_files(user)
    if if_none_match and if_none_match == etag:
        return Response(status_code=status.HTTP_304_NOT_MODIFIED, headers={"ETag": etag})

    body = [FileRecordOut.from_record(r).model_dump() for r in records]
    return JSONResponse(
        body,
        headers={"ETag": etag, "Cache-Control": "private, must-revalidate"},
    )


@file_router.delete(InternalURIs.FILES, response_model=OkResponse)
async def delete_file(
    payload: DeleteFileRequest,
    user: UserInfo = Depends(get_current_user),
    service: FileService = Depends(get_file_service),
) -> OkResponse:
    if not payload.path:
        raise AppError.of(ErrorMessage.BAD_REQUEST)
    await service.delete(user, payload.path)
    return OkResponse()


@file_router.get(InternalURIs.FILE_CONTENT + "/{owner}/{path:path}")
async def get_file_content(
    owner: str,
    path: str,
    user: UserInfo = Depends(get_current_user),
    service: FileService = Depends(get_file_service),
) -> Response:
    content = await service.get_content(user, owner, path)
    return Response(
        content=content.data,
        media_type=content.content_type,
        headers={"Cache-Control": "no-cache"},
    )


@file_router.get(InternalURIs.VALIDATE_HTML, response_model=ValidationReport)
async def validate_html(
    file: str = Query("index.html"),
    user: UserInfo = Depends(get_current_user),
    service: FileService = Depends(get_file_service),
) -> JSONResponse:
    code, report = await service.validate(user, file)
    return JSONResponse(report, status_code=code)


@file_router.get(InternalURIs.VALIDATION_REPORT, response_model=ValidationReport)
async def validation_report(
    user: UserInfo = Depends(get_current_user),
    service: FileService = Depends(get_file_service),
) -> JSONResponse:
    code, report = await service.validation_report(user)
    return JSONResponse(report, status_code=code)
