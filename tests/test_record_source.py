# -*- coding: utf-8 -*-
"""Тесты загрузки записей из внешнего API."""

import asyncio

import pytest

from vetpanel.core.resources import get_resource
from vetpanel.services.record_source import RecordSource, extract_records, extract_total


@pytest.mark.parametrize("payload", [
    [{"name": "a"}],
    {"items": [{"name": "a"}], "total": 1},
    {"data": [{"name": "a"}]},
    {"results": [{"name": "a"}]},
    {"normal_ranges": [{"name": "a"}]},
])
def test_extract_records_formats(payload):
    assert extract_records(payload, "normal-ranges") == [{"name": "a"}]


def test_extract_records_unexpected_payload():
    assert extract_records({"message": "ok"}) == []
    assert extract_records(None) == []


def test_extract_total():
    assert extract_total({"total": 12}) == 12
    assert extract_total({"total": True}) is None
    assert extract_total([1, 2]) is None


def test_fetch_batch_marks_truncated(fake_api, vet_client):
    source = RecordSource(vet_client, fetch_size=3)
    batch = asyncio.run(source.fetch_batch(get_resource("books")))

    assert batch.fetched == 3
    assert batch.remote_total == 5
    assert batch.truncated


def test_fetch_batch_full(vet_client):
    batch = asyncio.run(RecordSource(vet_client).fetch_batch(get_resource("books")))
    assert batch.fetched == 5
    assert not batch.truncated


def test_count_uses_remote_total(fake_api, vet_client):
    assert asyncio.run(RecordSource(vet_client).count(get_resource("books"))) == 5


def test_filter_values_from_lookup(vet_client):
    source = RecordSource(vet_client)
    books = get_resource("books")
    drugs = get_resource("drugs")

    assert asyncio.run(source.filter_values(books, "/api/books/categories/list")) == ["Anatomy", "Surgery"]
    assert asyncio.run(source.filter_values(drugs, "/api/drugs/classes/list")) == ["Antibiotic", "NSAID"]
