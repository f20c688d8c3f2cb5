# -*- coding: utf-8 -*-
"""
API роутер разделов контента.

Эндпоинты:
- GET /resources - Каталог разделов
- GET /about - Страница «О приложении»
- PUT /about - Обновить страницу «О приложении»
- GET /{resource} - Таблица раздела (поиск, фильтры, сортировка, страницы)
- GET /{resource}/options - Варианты значений фильтров
- POST /{resource} - Создать запись
- PUT /{resource}/{key} - Обновить запись
- DELETE /{resource}/{key} - Удалить запись

Записи живут во внешнем API; таблица строится локально по одной
ограниченной выборке (см. vetpanel.services.record_source).
"""

import logging
from typing import Any, Literal, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from pydantic import ValidationError

from admin.backend.auth.dependencies import CurrentUser, get_current_active_user, require_admin
from admin.backend.dependencies import get_record_source, get_vet_client
from admin.backend.models.auth import MessageResponse
from admin.backend.models.content import validate_content
from admin.backend.models.view import (
    FilterOptionInfo,
    FilterValuesResponse,
    ResourceInfo,
    SortOptionInfo,
    ViewResponse,
)
from vetpanel.api.vet_api import VetApiClient
from vetpanel.core.data_view import (
    ViewSpec,
    compute_view,
    count_active_filters,
    describe_view,
    distinct_values,
)
from vetpanel.core.resources import ResourceConfig, get_resource, list_resources
from vetpanel.services.record_source import RecordSource

router = APIRouter()
logger = logging.getLogger("admin.routers.content")


def parse_filters(raw_filters: list[str]) -> dict[str, str]:
    """
    Разбирает параметры filter=key:value.

    Пустое значение (filter=category:) означает «Все» и пропускается.
    Параметр без двоеточия игнорируется.
    """
    filters: dict[str, str] = {}
    for raw in raw_filters:
        key, sep, value = raw.partition(":")
        key = key.strip()
        if not sep or not key or value == "":
            continue
        filters[key] = value
    return filters


def _validated(resource_name: str, data: dict[str, Any]) -> dict[str, Any]:
    try:
        return validate_content(resource_name, data)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.errors(include_url=False, include_context=False),
        )


def _collection_resource(name: str) -> ResourceConfig:
    resource = get_resource(name)
    if resource.singleton:
        raise HTTPException(
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            detail=f"{resource.label} is a single page, use /api/content/{resource.name}",
        )
    return resource


def _resource_info(resource: ResourceConfig) -> ResourceInfo:
    return ResourceInfo(
        name=resource.name,
        label=resource.label,
        key_field=resource.key_field,
        search_fields=list(resource.search_fields),
        sort_options=[SortOptionInfo(key=o.key, label=o.label) for o in resource.sort_options],
        filter_options=[FilterOptionInfo(key=o.key, label=o.label) for o in resource.filter_options],
        can_create=resource.can_create,
        can_update=resource.can_update,
        can_delete=resource.can_delete,
        can_import=resource.can_import,
        singleton=resource.singleton,
    )


@router.get("/resources", response_model=list[ResourceInfo])
async def get_resources(current_user: CurrentUser = Depends(get_current_active_user)):
    """Каталог разделов для построения меню и таблиц."""
    return [_resource_info(resource) for resource in list_resources()]


# ==================== О приложении ====================

@router.get("/about")
async def get_about(
    current_user: CurrentUser = Depends(get_current_active_user),
    client: VetApiClient = Depends(get_vet_client),
):
    """Текущее содержимое страницы «О приложении»."""
    return await client.get_singleton(get_resource("about").path)


@router.put("/about")
async def update_about(
    data: dict[str, Any] = Body(...),
    current_user: CurrentUser = Depends(require_admin),
    client: VetApiClient = Depends(get_vet_client),
):
    """Обновление страницы «О приложении»."""
    payload = _validated("about", data)
    result = await client.update_singleton(get_resource("about").path, payload)
    logger.info(f"Страница About обновлена оператором {current_user.username}")
    return result


# ==================== Таблицы разделов ====================

@router.get("/{resource_name}", response_model=ViewResponse)
async def list_records(
    resource_name: str,
    search: str = Query("", description="Поиск по текстовым полям"),
    sort_by: Optional[str] = Query(None, description="Поле сортировки"),
    sort_dir: Literal["asc", "desc"] = Query("asc", description="Направление сортировки"),
    page: int = Query(1, description="Номер страницы (зажимается в допустимый диапазон)"),
    page_size: int = Query(20, le=1000, description="Элементов на странице"),
    filters: list[str] = Query([], alias="filter", description="Фильтры в виде key:value"),
    current_user: CurrentUser = Depends(get_current_active_user),
    source: RecordSource = Depends(get_record_source),
):
    """
    Страница таблицы раздела.

    Стадии: поиск -> фильтры -> сортировка -> пагинация по выборке
    из внешнего API. Неизвестные поля сортировки/фильтров не дают ошибки.
    """
    resource = _collection_resource(resource_name)
    active_filters = parse_filters(filters)
    sort_key = sort_by or resource.default_sort

    spec = ViewSpec(
        search_term=search,
        search_fields=resource.search_fields,
        active_filters=active_filters,
        sort_key=sort_key,
        sort_direction=sort_dir,
        page=page,
        page_size=page_size,
    )

    batch = await source.fetch_batch(resource)
    result = compute_view(batch.records, spec, resource.accessor())

    return ViewResponse(
        resource=resource.name,
        items=result.items,
        total_items=result.total_items,
        total_pages=result.total_pages,
        page=result.page,
        page_size=result.page_size,
        sort_by=sort_key,
        sort_dir=sort_dir,
        active_filters=active_filters,
        active_filters_count=count_active_filters(active_filters),
        fetched=batch.fetched,
        remote_total=batch.remote_total,
        truncated=batch.truncated,
        summary=describe_view(result, batch.fetched, spec, resource.sort_label(sort_key)),
    )


@router.get("/{resource_name}/options", response_model=FilterValuesResponse)
async def get_filter_values(
    resource_name: str,
    current_user: CurrentUser = Depends(get_current_active_user),
    source: RecordSource = Depends(get_record_source),
):
    """
    Варианты значений для фильтров раздела.

    Берутся из справочника внешнего API, если он есть, иначе
    уникальные значения поля по выборке записей.
    """
    resource = _collection_resource(resource_name)
    filters: dict[str, list[str]] = {}
    records = None

    for option in resource.filter_options:
        if option.lookup_path:
            filters[option.key] = await source.filter_values(resource, option.lookup_path)
            continue
        if records is None:
            records = (await source.fetch_batch(resource)).records
        filters[option.key] = distinct_values(records, option.key, resource.accessor())

    return FilterValuesResponse(resource=resource.name, filters=filters)


@router.post("/{resource_name}", status_code=status.HTTP_201_CREATED)
async def create_record(
    resource_name: str,
    data: dict[str, Any] = Body(...),
    current_user: CurrentUser = Depends(require_admin),
    client: VetApiClient = Depends(get_vet_client),
):
    """Создание записи во внешнем API."""
    resource = _collection_resource(resource_name)
    if not resource.can_create:
        raise HTTPException(
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            detail=f"Creating {resource.label.lower()} is not supported by the API",
        )
    payload = _validated(resource.name, data)
    result = await client.create_record(resource.path, payload)
    logger.info(f"{current_user.username}: создана запись в {resource.name}")
    return result


@router.put("/{resource_name}/{key}")
async def update_record(
    resource_name: str,
    key: str,
    data: dict[str, Any] = Body(...),
    current_user: CurrentUser = Depends(require_admin),
    client: VetApiClient = Depends(get_vet_client),
):
    """Обновление записи по ключевому полю раздела (title, name, id...)."""
    resource = _collection_resource(resource_name)
    if not resource.can_update:
        raise HTTPException(
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            detail=f"Editing {resource.label.lower()} is not supported by the API",
        )
    payload = _validated(resource.name, data)
    result = await client.update_record(resource.path, key, payload)
    logger.info(f"{current_user.username}: обновлена запись {resource.name}/{key}")
    return result


@router.delete("/{resource_name}/{key}", response_model=MessageResponse)
async def delete_record(
    resource_name: str,
    key: str,
    current_user: CurrentUser = Depends(require_admin),
    client: VetApiClient = Depends(get_vet_client),
):
    """Удаление записи по ключевому полю раздела."""
    resource = _collection_resource(resource_name)
    if not resource.can_delete:
        raise HTTPException(
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            detail=f"Deleting {resource.label.lower()} is not supported by the API",
        )
    await client.delete_record(resource.path, key)
    logger.info(f"{current_user.username}: удалена запись {resource.name}/{key}")
    return MessageResponse(message=f"{resource.label} entry has been deleted successfully")
