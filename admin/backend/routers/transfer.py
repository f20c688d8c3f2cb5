# -*- coding: utf-8 -*-
"""
API роутер импорта и экспорта данных.

Эндпоинты:
- GET /export/{resource} - Выгрузка раздела в JSON или CSV
- POST /import - Импорт файла (раздел определяется по имени файла)
- POST /bulk/{resource} - Пакетная загрузка JSON-массива
"""

import logging
from typing import Any, Literal, Optional

from fastapi import APIRouter, Body, Depends, File, HTTPException, Query, UploadFile, status
from fastapi.responses import Response
from pydantic import ValidationError

from admin.backend.auth.dependencies import CurrentUser, get_current_active_user, require_admin
from admin.backend.dependencies import get_record_source, get_vet_client
from admin.backend.models.content import validate_content
from admin.backend.models.transfer import ImportReportResponse
from vetpanel.api.vet_api import VetApiClient
from vetpanel.core.resources import ResourceConfig, UnknownResourceError, get_resource
from vetpanel.services.record_source import RecordSource
from vetpanel.services.transfer import (
    ImportReport,
    import_records,
    parse_upload,
    records_to_csv,
    records_to_json,
    resource_from_filename,
    validate_bulk_payload,
)

router = APIRouter()
logger = logging.getLogger("admin.routers.transfer")


def _row_validator(resource: ResourceConfig):
    def validate(row: dict) -> dict:
        try:
            return validate_content(resource.name, row)
        except ValidationError as e:
            messages = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ValueError(messages) from e
    return validate


def _report_response(report: ImportReport, filename: Optional[str] = None) -> ImportReportResponse:
    message = f"{report.succeeded} items uploaded successfully"
    if report.failed:
        message += f", {report.failed} failed"
    return ImportReportResponse(
        resource=report.resource,
        file=filename,
        status=report.status,
        total=report.total,
        succeeded=report.succeeded,
        failed=report.failed,
        errors=report.errors,
        message=message,
    )


def _importable(resource: ResourceConfig) -> ResourceConfig:
    if not resource.can_import or resource.singleton:
        raise HTTPException(
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            detail="This endpoint is read-only and does not support importing data",
        )
    return resource


@router.get("/export/{resource_name}")
async def export_resource(
    resource_name: str,
    format: Literal["json", "csv"] = Query("json", description="Формат выгрузки"),
    current_user: CurrentUser = Depends(get_current_active_user),
    source: RecordSource = Depends(get_record_source),
):
    """Выгрузка всех записей раздела (в пределах лимита выборки) файлом."""
    resource = get_resource(resource_name)
    batch = await source.fetch_batch(resource)

    if format == "csv":
        content = records_to_csv(batch.records)
        media_type = "text/csv; charset=utf-8"
    else:
        content = records_to_json(batch.records)
        media_type = "application/json"

    logger.info(f"{current_user.username}: экспорт {resource.name} ({batch.fetched} записей, {format})")
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{resource.name}.{format}"'},
    )


@router.post("/import", response_model=ImportReportResponse)
async def import_file(
    file: UploadFile = File(...),
    current_user: CurrentUser = Depends(require_admin),
    client: VetApiClient = Depends(get_vet_client),
):
    """
    Импорт JSON/CSV файла.

    Раздел определяется по имени файла: books.csv -> books.
    """
    filename = file.filename or ""
    try:
        resource = get_resource(resource_from_filename(filename))
    except UnknownResourceError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unknown file type - cannot determine API endpoint",
        )
    _importable(resource)

    rows = parse_upload(filename, await file.read())
    report = await import_records(client, resource, rows, _row_validator(resource))
    logger.info(f"{current_user.username}: импорт файла {filename}")
    return _report_response(report, filename)


@router.post("/bulk/{resource_name}", response_model=ImportReportResponse)
async def bulk_upload(
    resource_name: str,
    data: Any = Body(...),
    current_user: CurrentUser = Depends(require_admin),
    client: VetApiClient = Depends(get_vet_client),
):
    """Пакетная загрузка: тело запроса: JSON-массив объектов."""
    resource = _importable(get_resource(resource_name))

    errors = validate_bulk_payload(data)
    if errors:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=errors)

    report = await import_records(client, resource, data, _row_validator(resource))
    logger.info(f"{current_user.username}: пакетная загрузка в {resource.name}")
    return _report_response(report)
