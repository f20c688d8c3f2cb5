# -*- coding: utf-8 -*-
"""Тесты конвейера поиск -> фильтры -> сортировка -> пагинация."""

import copy
from dataclasses import replace
from types import SimpleNamespace

import pytest

from vetpanel.core.data_view import (
    FieldAccessor,
    InvalidArgumentError,
    ViewResult,
    ViewSpec,
    apply_filters,
    apply_search,
    apply_sort,
    compute_view,
    count_active_filters,
    describe_view,
    distinct_values,
    paginate,
    to_text,
)

BOOKS = [
    {"title": "Anatomy A", "category": "anatomy"},
    {"title": "Surgery B", "category": "surgery"},
    {"title": "Anatomy C", "category": "anatomy"},
    {"title": "Pharmacology D", "category": "pharma"},
    {"title": "Anatomy E", "category": "anatomy"},
]


def titles(records):
    return [record["title"] for record in records]


# ==================== Полный сценарий ====================

def test_compute_view_books_scenario():
    """Поиск + фильтр + сортировка + вторая страница."""
    spec = ViewSpec(
        search_term="anatomy",
        search_fields=("title",),
        active_filters={"category": "anatomy"},
        sort_key="title",
        sort_direction="asc",
        page=2,
        page_size=2,
    )
    result = compute_view(BOOKS, spec)

    assert titles(result.items) == ["Anatomy E"]
    assert result.total_items == 3
    assert result.total_pages == 2
    assert result.page == 2
    assert result.page_size == 2


def test_search_then_filter_keeps_three_matches():
    found = apply_search(BOOKS, "anatomy", ("title",))
    assert titles(found) == ["Anatomy A", "Anatomy C", "Anatomy E"]

    filtered = apply_filters(found, {"category": "anatomy"})
    assert len(filtered) == 3


@pytest.mark.parametrize("page,expected_page,expected_titles", [
    (0, 1, ["Anatomy A", "Anatomy C"]),
    (-5, 1, ["Anatomy A", "Anatomy C"]),
    (99, 2, ["Anatomy E"]),
])
def test_page_is_clamped(page, expected_page, expected_titles):
    spec = ViewSpec(search_term="anatomy", search_fields=("title",), sort_key="title", page=page, page_size=2)
    result = compute_view(BOOKS, spec)

    assert result.page == expected_page
    assert titles(result.items) == expected_titles


def test_unknown_sort_key_keeps_input_order():
    result = compute_view(BOOKS, ViewSpec(sort_key="nonexistent", page_size=10))
    assert titles(result.items) == titles(BOOKS)


def test_compute_view_does_not_mutate_input_and_is_repeatable():
    snapshot = copy.deepcopy(BOOKS)
    spec = ViewSpec(search_term="a", search_fields=("title",), sort_key="title", sort_direction="desc", page_size=2)

    first = compute_view(BOOKS, spec)
    second = compute_view(BOOKS, spec)

    assert BOOKS == snapshot
    assert first == second


def test_empty_records_give_single_empty_page():
    result = compute_view([], ViewSpec(page=3))
    assert result == ViewResult(items=[], total_items=0, total_pages=1, page=1, page_size=20)


@pytest.mark.parametrize("page_size", [0, -1])
def test_non_positive_page_size_raises(page_size):
    with pytest.raises(InvalidArgumentError):
        compute_view(BOOKS, ViewSpec(page_size=page_size))
    with pytest.raises(InvalidArgumentError):
        paginate(BOOKS, 1, page_size)


# ==================== Поиск ====================

def test_blank_search_is_noop():
    assert apply_search(BOOKS, "   ", ("title",)) is BOOKS


def test_search_is_case_insensitive_across_fields():
    records = [
        {"name": "Rabies", "symptoms": "Hydrophobia"},
        {"name": "Anthrax", "symptoms": "Fever"},
    ]
    assert apply_search(records, "HYDRO", ("name", "symptoms")) == [records[0]]
    assert apply_search(records, "fever", ("name",)) == []


def test_search_ignores_missing_and_none_fields():
    records = [{"name": "Bile", "kurdish": None}, {"name": "Cornea"}]
    assert apply_search(records, "cor", ("kurdish", "name")) == [records[1]]


# ==================== Фильтры ====================

def test_filters_are_conjunctive():
    records = [
        {"name": "a", "is_saved": True, "is_favorite": True},
        {"name": "b", "is_saved": True, "is_favorite": False},
        {"name": "c", "is_saved": False, "is_favorite": True},
    ]
    result = apply_filters(records, {"is_saved": "true", "is_favorite": "true"})
    assert [r["name"] for r in result] == ["a"]


def test_empty_filter_value_means_all():
    assert apply_filters(BOOKS, {"category": "", "other": None}) == BOOKS


def test_unknown_filter_key_matches_nothing():
    assert apply_filters(BOOKS, {"publisher": "x"}) == []


def test_filter_is_exact_match():
    assert apply_filters(BOOKS, {"category": "anat"}) == []


# ==================== Сортировка ====================

def test_sort_is_stable_in_both_directions():
    records = [
        {"id": 1, "group": "b"},
        {"id": 2, "group": "a"},
        {"id": 3, "group": "b"},
        {"id": 4, "group": "a"},
    ]
    asc = apply_sort(records, "group", "asc")
    desc = apply_sort(records, "group", "desc")

    assert [r["id"] for r in asc] == [2, 4, 1, 3]
    assert [r["id"] for r in desc] == [1, 3, 2, 4]


def test_sort_is_case_insensitive():
    records = [{"name": "beta"}, {"name": "Alpha"}, {"name": "Émile"}, {"name": "delta"}]
    assert [r["name"] for r in apply_sort(records, "name")] == ["Alpha", "beta", "delta", "Émile"]


def test_numeric_fields_sort_by_value():
    accessor = FieldAccessor(numeric_fields=("min_value",))
    records = [{"min_value": "10"}, {"min_value": 2}, {"min_value": "1.5"}, {"min_value": None}]

    result = apply_sort(records, "min_value", "asc", accessor)
    assert [to_text(r["min_value"]) for r in result] == ["1.5", "2", "10", ""]


def test_sort_without_key_returns_copy():
    result = apply_sort(BOOKS, None)
    assert result == BOOKS
    assert result is not BOOKS


# ==================== Пагинация ====================

def test_pages_cover_all_items_exactly_once():
    records = list(range(7))
    pages = [paginate(records, page, 3)[0] for page in (1, 2, 3)]

    assert pages == [[0, 1, 2], [3, 4, 5], [6]]
    assert paginate(records, 1, 3)[1] == 3


# ==================== Доступ к полям ====================

def test_custom_getter_and_attribute_records():
    records = [SimpleNamespace(title="Zeta"), SimpleNamespace(title="Alpha")]
    assert [r.title for r in apply_sort(records, "title")] == ["Alpha", "Zeta"]

    upper = FieldAccessor(getter=lambda record, name: record[name].upper())
    assert apply_search([{"t": "abc"}], "ABC", ("t",), upper) == [{"t": "abc"}]


@pytest.mark.parametrize("value,expected", [
    (None, ""),
    (True, "true"),
    (False, "false"),
    (3.0, "3"),
    (2.5, "2.5"),
    (7, "7"),
])
def test_to_text(value, expected):
    assert to_text(value) == expected


# ==================== Вспомогательное ====================

def test_count_active_filters_skips_empty():
    assert count_active_filters({"a": "x", "b": "", "c": None, "d": False}) == 2
    assert count_active_filters(None) == 0


def test_distinct_values_sorted_and_non_empty():
    records = [{"c": "surgery"}, {"c": "Anatomy"}, {"c": ""}, {}, {"c": "surgery"}]
    assert distinct_values(records, "c") == ["Anatomy", "surgery"]


def test_describe_view():
    spec = ViewSpec(search_term="anatomy", search_fields=("title",), sort_key="title", page_size=2)
    result = compute_view(BOOKS, spec)

    assert describe_view(result, 5, spec, "Title") == "Showing 3 of 5 items • Sorted by Title (A-Z)"

    plain = ViewSpec(sort_key="title", sort_direction="desc")
    assert describe_view(compute_view(BOOKS, plain), 1200, plain) == "Total: 1,200 items"
    assert describe_view(compute_view(BOOKS, plain), 5, plain, "Title").endswith("(Z-A)")


def test_numeric_sort_with_non_decimal_digits():
    """Надстрочные цифры ("²") сортируются как текст, а не ломают сортировку."""
    accessor = FieldAccessor(numeric_fields=("min_value",))
    records = [{"min_value": "10²"}, {"min_value": "5"}, {"min_value": "m²"}, {"min_value": "9 x 10³"}]

    result = apply_sort(records, "min_value", "asc", accessor)
    assert [r["min_value"] for r in result] == ["5", "9 x 10³", "10²", "m²"]

    view = compute_view(records, ViewSpec(sort_key="min_value", sort_direction="desc"), accessor)
    assert view.total_items == 4


# ==================== Свойства ====================

RANGES = [
    {"name": "Glucose", "species": "dog", "category": "chemistry"},
    {"name": "Urea", "species": "cat", "category": "chemistry"},
    {"name": "Hematocrit", "species": "dog", "category": "hematology"},
    {"name": "Platelets", "species": "horse", "category": "hematology"},
    {"name": "Albumin", "species": "cat", "category": "chemistry"},
    {"name": "Lactate", "species": "dog", "category": "chemistry"},
    {"name": "Neutrophils", "species": "cat", "category": "hematology"},
]


@pytest.mark.parametrize("filters", [
    {"species": "dog", "category": "chemistry"},
    {"species": "cat", "category": "hematology"},
    {"species": "horse", "category": "chemistry"},
    {"species": "dog", "category": "missing"},
])
def test_clearing_a_filter_never_shrinks_result(filters):
    base = compute_view(RANGES, ViewSpec(active_filters=filters)).total_items

    for key in filters:
        relaxed = dict(filters, **{key: ""})
        assert compute_view(RANGES, ViewSpec(active_filters=relaxed)).total_items >= base


@pytest.mark.parametrize("page_size", [1, 2, 3, 5, 7, 10])
@pytest.mark.parametrize("search_term,filters", [
    ("", {}),
    ("a", {}),
    ("", {"category": "chemistry"}),
    ("e", {"species": "cat"}),
    ("zzz", {}),
])
def test_pages_add_up_to_total_items(page_size, search_term, filters):
    spec = ViewSpec(
        search_term=search_term,
        search_fields=("name",),
        active_filters=filters,
        sort_key="name",
        page_size=page_size,
    )
    first = compute_view(RANGES, spec)

    seen = []
    for page in range(1, first.total_pages + 1):
        seen.extend(compute_view(RANGES, replace(spec, page=page)).items)

    assert len(seen) == first.total_items
    assert [r["name"] for r in seen] == sorted({r["name"] for r in seen})
