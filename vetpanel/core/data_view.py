# -*- coding: utf-8 -*-
"""
Конвейер представления данных для таблиц админ-панели.

Порядок стадий строго фиксирован:
    поиск -> фильтры -> сортировка -> пагинация

Конвейер — чистая функция от (записи, ViewSpec). Он ничего не кэширует,
не меняет входную коллекцию и не выбрасывает исключений на «кривом» вводе:
неизвестные ключи сортировки/фильтров работают как no-op, номер страницы
зажимается в допустимый диапазон. Единственная ошибка — page_size <= 0.
"""

from __future__ import annotations

import math
import re
import unicodedata
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Literal, Mapping, Optional, Sequence

SortDirection = Literal["asc", "desc"]

_DIGITS_RE = re.compile(r"(\d+)")


class InvalidArgumentError(ValueError):
    """Ошибка вызывающего кода (например, page_size <= 0)."""


def to_text(value: Any) -> str:
    """
    Приводит значение поля к строке для сравнения.

    None -> "", bool -> "true"/"false", целые float -> "3" (как в JS).
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _default_getter(record: Any, field_name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(field_name)
    return getattr(record, field_name, None)


class FieldAccessor:
    """
    Доступ к полям записи с приведением к строке.

    Args:
        getter: Функция (record, field) -> значение. По умолчанию читает
            Mapping через .get, остальные объекты — через атрибуты.
        numeric_fields: Поля с числовыми данными (сортируются по числу)
    """

    def __init__(
        self,
        getter: Optional[Callable[[Any, str], Any]] = None,
        numeric_fields: Iterable[str] = (),
    ):
        self._getter = getter or _default_getter
        self.numeric_fields = frozenset(numeric_fields)

    def text(self, record: Any, field_name: str) -> str:
        return to_text(self._getter(record, field_name))

    def is_numeric(self, field_name: str) -> bool:
        return field_name in self.numeric_fields


DEFAULT_ACCESSOR = FieldAccessor()


@dataclass(frozen=True)
class ViewSpec:
    """Параметры отображения: поиск, фильтры, сортировка, страница."""
    search_term: str = ""
    search_fields: tuple[str, ...] = ()
    active_filters: Mapping[str, Any] = field(default_factory=dict)
    sort_key: Optional[str] = None
    sort_direction: SortDirection = "asc"
    page: int = 1
    page_size: int = 20


@dataclass
class ViewResult:
    """Результат: текущая страница и счётчики для бейджей."""
    items: list
    total_items: int
    total_pages: int
    page: int
    page_size: int


# ==================== Стадии ====================

def _fold(value: str) -> str:
    return value.casefold()


def apply_search(
    records: Sequence[Any],
    search_term: str,
    searchable_fields: Sequence[str],
    accessor: FieldAccessor = DEFAULT_ACCESSOR,
) -> Sequence[Any]:
    """
    Оставляет записи, у которых хотя бы одно из полей содержит подстроку.

    Сравнение регистронезависимое. Пустой (после strip) запрос — no-op:
    возвращается та же коллекция.
    """
    term = (search_term or "").strip()
    if not term:
        return records

    needle = _fold(term)
    return [
        record for record in records
        if any(needle in _fold(accessor.text(record, name)) for name in searchable_fields)
    ]


def apply_filters(
    records: Sequence[Any],
    active_filters: Optional[Mapping[str, Any]],
    accessor: FieldAccessor = DEFAULT_ACCESSOR,
) -> list:
    """
    Точное совпадение по всем активным фильтрам (логическое И).

    Пустое или отсутствующее значение фильтра означает «Все».
    Значения сравниваются в строковой форме, поэтому True == "true".
    """
    constraints = [
        (key, to_text(value))
        for key, value in (active_filters or {}).items()
        if to_text(value) != ""
    ]
    if not constraints:
        return list(records)

    return [
        record for record in records
        if all(accessor.text(record, key) == expected for key, expected in constraints)
    ]


def _strip_accents(value: str) -> str:
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def _text_key(value: str) -> tuple:
    # Первичный ключ без регистра и диакритики, вторичный — исходная строка
    return (_fold(_strip_accents(value)), value)


def _numeric_key(value: str) -> tuple:
    try:
        number = float(value)
    except ValueError:
        number = math.nan
    if not math.isnan(number):
        return (0, number, ())
    # "2" < "10": десятичные куски сравниваются как числа, "²" остаётся текстом
    chunks = tuple(
        (0, int(chunk), "") if chunk.isdecimal() else (1, 0, _fold(_strip_accents(chunk)))
        for chunk in _DIGITS_RE.split(value)
        if chunk
    )
    return (1, 0.0, chunks)


def apply_sort(
    records: Sequence[Any],
    sort_key: Optional[str],
    direction: SortDirection = "asc",
    accessor: FieldAccessor = DEFAULT_ACCESSOR,
) -> list:
    """
    Стабильная сортировка по строковому значению поля.

    Отсутствующее поле даёт пустую строку, поэтому сортировка по
    несуществующему ключу сохраняет исходный порядок.
    """
    if not sort_key:
        return list(records)

    make_key = _numeric_key if accessor.is_numeric(sort_key) else _text_key
    # sorted() стабилен и при reverse=True
    return sorted(
        records,
        key=lambda record: make_key(accessor.text(record, sort_key)),
        reverse=direction == "desc",
    )


def paginate(records: Sequence[Any], page: int, page_size: int) -> tuple[list, int]:
    """
    Возвращает (элементы страницы, всего страниц).

    Номер страницы зажимается в [1, total_pages]; total_pages >= 1.

    Raises:
        InvalidArgumentError: Если page_size <= 0
    """
    if page_size <= 0:
        raise InvalidArgumentError(f"page_size должен быть положительным, получено {page_size}")

    total_pages = max(1, math.ceil(len(records) / page_size))
    page = clamp_page(page, total_pages)
    start = (page - 1) * page_size
    return list(records[start:start + page_size]), total_pages


def clamp_page(page: int, total_pages: int) -> int:
    return min(max(page, 1), max(total_pages, 1))


def compute_view(
    records: Sequence[Any],
    spec: ViewSpec,
    accessor: FieldAccessor = DEFAULT_ACCESSOR,
) -> ViewResult:
    """
    Строит страницу для таблицы: поиск -> фильтры -> сортировка -> пагинация.

    total_items считается после поиска и фильтров, до пагинации.
    """
    if spec.page_size <= 0:
        raise InvalidArgumentError(f"page_size должен быть положительным, получено {spec.page_size}")

    found = apply_search(records, spec.search_term, spec.search_fields, accessor)
    filtered = apply_filters(found, spec.active_filters, accessor)
    ordered = apply_sort(filtered, spec.sort_key, spec.sort_direction, accessor)
    items, total_pages = paginate(ordered, spec.page, spec.page_size)

    return ViewResult(
        items=items,
        total_items=len(filtered),
        total_pages=total_pages,
        page=clamp_page(spec.page, total_pages),
        page_size=spec.page_size,
    )


# ==================== Вспомогательное для UI ====================

def count_active_filters(active_filters: Optional[Mapping[str, Any]]) -> int:
    """Количество выбранных фильтров (бейдж на кнопке «Фильтр»)."""
    return sum(1 for value in (active_filters or {}).values() if to_text(value) != "")


def distinct_values(
    records: Iterable[Any],
    field_name: str,
    accessor: FieldAccessor = DEFAULT_ACCESSOR,
) -> list[str]:
    """Отсортированные уникальные непустые значения поля — варианты фильтра."""
    values = {accessor.text(record, field_name) for record in records}
    values.discard("")
    return sorted(values, key=_text_key)


def describe_view(
    result: ViewResult,
    total_records: int,
    spec: ViewSpec,
    sort_label: Optional[str] = None,
) -> str:
    """
    Строка вида "Showing 3 of 5 items • Sorted by Title (A-Z)".

    "Showing N of M" выводится только при активном поиске или фильтрах.
    """
    if (spec.search_term or "").strip() or count_active_filters(spec.active_filters):
        summary = f"Showing {result.total_items:,} of {total_records:,} items"
    else:
        summary = f"Total: {total_records:,} items"

    if sort_label:
        order = "A-Z" if spec.sort_direction == "asc" else "Z-A"
        summary += f" • Sorted by {sort_label} ({order})"
    return summary
