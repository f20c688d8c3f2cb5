# -*- coding: utf-8 -*-
"""
Каталог разделов контента админ-панели.

Для каждого раздела описано, где он живёт во внешнем API, по каким полям
искать, сортировать и фильтровать, и какие операции поддерживает API.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from vetpanel.core.data_view import FieldAccessor


class UnknownResourceError(KeyError):
    """Запрошен раздел, которого нет в каталоге."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Неизвестный раздел: {self.name}"


@dataclass(frozen=True)
class SortOption:
    key: str
    label: str


@dataclass(frozen=True)
class FilterOption:
    key: str
    label: str
    # Путь справочника во внешнем API (например, /api/books/categories/list).
    # Если не задан, варианты собираются из самих записей.
    lookup_path: Optional[str] = None


@dataclass(frozen=True)
class ResourceConfig:
    """Описание одного раздела контента."""
    name: str
    label: str
    path: str
    key_field: str = "name"
    search_fields: tuple[str, ...] = ("name",)
    sort_options: tuple[SortOption, ...] = (SortOption("name", "Name"),)
    filter_options: tuple[FilterOption, ...] = ()
    numeric_fields: tuple[str, ...] = ()
    can_create: bool = True
    can_update: bool = True
    can_delete: bool = True
    can_import: bool = True
    singleton: bool = False

    @property
    def default_sort(self) -> Optional[str]:
        return self.sort_options[0].key if self.sort_options else None

    def accessor(self) -> FieldAccessor:
        return FieldAccessor(numeric_fields=self.numeric_fields)

    def sort_label(self, key: Optional[str]) -> Optional[str]:
        for option in self.sort_options:
            if option.key == key:
                return option.label
        return None


_SLIDE_SORTS = (
    SortOption("name", "Slide Name"),
    SortOption("slide_name", "Slide Name (Alt)"),
    SortOption("description", "Description"),
)


RESOURCES: dict[str, ResourceConfig] = {
    config.name: config
    for config in (
        ResourceConfig(
            name="users",
            label="Users",
            path="/api/users",
            key_field="username",
            search_fields=("username", "email"),
            sort_options=(SortOption("username", "Username"),),
            # Пользователи мобильного приложения: только просмотр и выгрузка
            can_create=False,
            can_update=False,
            can_delete=False,
            can_import=False,
        ),
        ResourceConfig(
            name="books",
            label="Books",
            path="/api/books",
            key_field="title",
            search_fields=("title", "description", "category"),
            sort_options=(
                SortOption("title", "Title"),
                SortOption("category", "Category"),
                SortOption("added_at", "Date Added"),
            ),
            filter_options=(
                FilterOption("category", "Category", "/api/books/categories/list"),
            ),
            numeric_fields=("added_at",),
        ),
        ResourceConfig(
            name="diseases",
            label="Diseases",
            path="/api/diseases",
            search_fields=("name", "kurdish", "symptoms", "cause", "control"),
        ),
        ResourceConfig(
            name="drugs",
            label="Drugs",
            path="/api/drugs",
            search_fields=("name", "usage", "side_effect", "other_info", "drug_class"),
            sort_options=(
                SortOption("name", "Name"),
                SortOption("drug_class", "Drug Class"),
            ),
            filter_options=(
                FilterOption("drug_class", "Drug Class", "/api/drugs/classes/list"),
            ),
        ),
        ResourceConfig(
            name="dictionary",
            label="Dictionary",
            path="/api/dictionary",
            search_fields=("name", "kurdish", "arabic", "description", "barcode"),
            filter_options=(
                FilterOption("is_saved", "Saved"),
                FilterOption("is_favorite", "Favorite"),
            ),
        ),
        ResourceConfig(
            name="staff",
            label="Staff",
            path="/api/staff",
            search_fields=("name", "position", "department", "email"),
            sort_options=(
                SortOption("name", "Name"),
                SortOption("position", "Position"),
                SortOption("department", "Department"),
            ),
            filter_options=(FilterOption("department", "Department"),),
        ),
        ResourceConfig(
            name="normal-ranges",
            label="Normal Ranges",
            path="/api/normal-ranges",
            search_fields=("name", "species", "category", "unit", "notes"),
            sort_options=(
                SortOption("name", "Name"),
                SortOption("species", "Species"),
                SortOption("min_value", "Min Value"),
                SortOption("max_value", "Max Value"),
            ),
            filter_options=(
                FilterOption("species", "Species", "/api/normal-ranges/species/list"),
                FilterOption("category", "Category", "/api/normal-ranges/categories/list"),
            ),
            numeric_fields=("min_value", "max_value"),
        ),
        ResourceConfig(
            name="tutorial-videos",
            label="Tutorial Videos",
            path="/api/tutorial-videos",
            key_field="title",
            search_fields=("title", "description", "category"),
            sort_options=(
                SortOption("title", "Title"),
                SortOption("category", "Category"),
            ),
            filter_options=(FilterOption("category", "Category"),),
        ),
        ResourceConfig(
            name="instruments",
            label="Instruments",
            path="/api/instruments",
            search_fields=("name", "description", "usage", "category"),
            sort_options=(
                SortOption("name", "Name"),
                SortOption("category", "Category"),
            ),
            filter_options=(FilterOption("category", "Category"),),
            # Внешний API умеет только создавать инструменты
            can_update=False,
            can_delete=False,
        ),
        ResourceConfig(
            name="notes",
            label="Notes",
            path="/api/notes",
            search_fields=("name", "description"),
        ),
        ResourceConfig(
            name="urine-slides",
            label="Urine Slides",
            path="/api/urine-slides",
            search_fields=("name", "description", "findings"),
        ),
        ResourceConfig(
            name="stool-slides",
            label="Stool Slides",
            path="/api/stool-slides",
            key_field="slide_name",
            search_fields=("slide_name", "name", "description"),
            sort_options=_SLIDE_SORTS,
        ),
        ResourceConfig(
            name="other-slides",
            label="Other Slides",
            path="/api/other-slides",
            key_field="slide_name",
            search_fields=("slide_name", "name", "description"),
            sort_options=_SLIDE_SORTS,
        ),
        ResourceConfig(
            name="other-tests",
            label="Other Tests",
            path="/api/other-tests",
            search_fields=("name", "description"),
        ),
        ResourceConfig(
            name="notifications",
            label="Notifications",
            path="/api/notifications",
            key_field="id",
            search_fields=("title", "content"),
            sort_options=(
                SortOption("created_at", "Date"),
                SortOption("title", "Title"),
                SortOption("type", "Type"),
            ),
            filter_options=(
                FilterOption("type", "Type"),
                FilterOption("is_read", "Read"),
            ),
            numeric_fields=("id", "created_at"),
        ),
        ResourceConfig(
            name="app-links",
            label="App Links",
            path="/api/app-links",
            key_field="title",
            search_fields=("title", "url", "platform", "description"),
            sort_options=(
                SortOption("title", "Title"),
                SortOption("platform", "Platform"),
            ),
            filter_options=(FilterOption("platform", "Platform"),),
        ),
        ResourceConfig(
            name="about",
            label="About",
            path="/api/about",
            key_field="title",
            search_fields=("title", "content"),
            sort_options=(),
            can_delete=False,
            singleton=True,
        ),
    )
}


def get_resource(name: str) -> ResourceConfig:
    """
    Возвращает описание раздела.

    Raises:
        UnknownResourceError: Если раздела нет в каталоге
    """
    try:
        return RESOURCES[name]
    except KeyError:
        raise UnknownResourceError(name) from None


def list_resources(include_singletons: bool = True) -> list[ResourceConfig]:
    return [
        config for config in RESOURCES.values()
        if include_singletons or not config.singleton
    ]
