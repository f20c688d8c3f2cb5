# -*- coding: utf-8 -*-
"""
Pydantic схемы табличных представлений разделов.
"""

from typing import Any, Literal, Optional
from pydantic import BaseModel, Field


class SortOptionInfo(BaseModel):
    key: str
    label: str


class FilterOptionInfo(BaseModel):
    key: str
    label: str


class ResourceInfo(BaseModel):
    """Описание раздела для построения UI."""
    name: str
    label: str
    key_field: str
    search_fields: list[str]
    sort_options: list[SortOptionInfo]
    filter_options: list[FilterOptionInfo]
    can_create: bool
    can_update: bool
    can_delete: bool
    can_import: bool
    singleton: bool


class ViewResponse(BaseModel):
    """Страница таблицы раздела."""
    resource: str = Field(..., description="Раздел")
    items: list[dict[str, Any]] = Field(..., description="Записи текущей страницы")
    total_items: int = Field(..., description="Найдено после поиска и фильтров")
    total_pages: int = Field(..., description="Всего страниц (минимум 1)")
    page: int = Field(..., description="Текущая страница (после зажима)")
    page_size: int = Field(..., description="Элементов на странице")
    sort_by: Optional[str] = Field(None, description="Поле сортировки")
    sort_dir: Literal["asc", "desc"] = Field("asc", description="Направление сортировки")
    active_filters: dict[str, str] = Field(default_factory=dict, description="Активные фильтры")
    active_filters_count: int = Field(0, description="Количество активных фильтров")
    fetched: int = Field(..., description="Получено записей из внешнего API")
    remote_total: Optional[int] = Field(None, description="Всего записей по данным внешнего API")
    truncated: bool = Field(False, description="Выборка обрезана лимитом")
    summary: str = Field(..., description="Строка «Showing N of M items»")


class FilterValuesResponse(BaseModel):
    """Варианты значений для фильтров раздела."""
    resource: str
    filters: dict[str, list[str]]
