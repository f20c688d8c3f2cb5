# -*- coding: utf-8 -*-
"""Тесты импорта и экспорта."""

import asyncio
import json

import pytest

from vetpanel.core.resources import get_resource
from vetpanel.services.transfer import (
    ImportReport,
    TransferFormatError,
    import_records,
    parse_upload,
    records_to_csv,
    records_to_json,
    resource_from_filename,
    validate_bulk_payload,
)


def test_resource_from_filename():
    assert resource_from_filename("books.csv") == "books"
    assert resource_from_filename("normal-ranges.json") == "normal-ranges"


def test_parse_csv_skips_empty_cells_and_rows():
    content = "\ufefftitle,category,description\nAnatomy A,anatomy,\n,,\nSurgery B,,Soft\n".encode("utf-8")
    rows = parse_upload("books.csv", content)

    assert rows == [
        {"title": "Anatomy A", "category": "anatomy"},
        {"title": "Surgery B", "description": "Soft"},
    ]


def test_parse_json_array_and_envelope():
    assert parse_upload("drugs.json", '[{"name": "Meloxicam"}]') == [{"name": "Meloxicam"}]
    assert parse_upload("drugs.json", '{"items": [{"name": "X"}]}') == [{"name": "X"}]


@pytest.mark.parametrize("filename,content", [
    ("books.txt", "title\nA"),
    ("books.json", "{not json"),
    ("books.json", '"just a string"'),
    ("books.csv", b"\xff\xfe\x00"),
])
def test_parse_upload_rejects_bad_files(filename, content):
    with pytest.raises(TransferFormatError):
        parse_upload(filename, content)


def test_validate_bulk_payload():
    assert validate_bulk_payload([{"name": "a"}]) == []
    assert validate_bulk_payload({"name": "a"}) == ["JSON must be an array of objects"]
    assert validate_bulk_payload([]) == ["Array cannot be empty"]
    assert validate_bulk_payload([{"name": "a"}, "b", 3]) == [
        "Item 2: Must be an object",
        "Item 3: Must be an object",
    ]


def test_records_to_csv_union_of_headers():
    records = [
        {"name": "Abdomen", "is_saved": True},
        {"name": "Bile", "tags": ["gi", "liver"], "score": 2.0},
    ]
    assert records_to_csv(records).splitlines() == [
        "name,is_saved,tags,score",
        "Abdomen,true,,",
        'Bile,,"[""gi"", ""liver""]",2',
    ]
    assert records_to_csv([]) == ""


def test_records_to_json_keeps_unicode():
    text = records_to_json([{"name": "Гастрит"}])
    assert "Гастрит" in text
    assert json.loads(text) == [{"name": "Гастрит"}]


@pytest.mark.parametrize("failed,succeeded,status", [
    (0, 3, "success"),
    (1, 2, "partial"),
    (3, 0, "error"),
])
def test_import_report_status(failed, succeeded, status):
    assert ImportReport(resource="books", succeeded=succeeded, failed=failed).status == status


def test_import_records_collects_row_errors(fake_api, vet_client):
    def validate(row):
        if not row.get("name"):
            raise ValueError("name: Field required")
        return row

    rows = [{"name": "Parvovirus"}, {"name": "FAIL"}, {"symptoms": "x"}, "bad"]
    report = asyncio.run(import_records(vet_client, get_resource("diseases"), rows, validate))

    assert report.total == 4
    assert report.succeeded == 1
    assert report.failed == 3
    assert report.status == "partial"
    assert report.errors[0] == "Item 2: HTTP 400: Duplicate entry"
    assert report.errors[1] == "Item 3: name: Field required"
    assert report.errors[2] == "Item 4: Must be an object"
    assert {"name": "Parvovirus"} in fake_api.collections["diseases"]


def test_csv_export_then_import_keeps_nested_fields():
    records = [
        {
            "name": "Skin scraping",
            "sections": [{"title": "Method", "content": "Deep scrape", "image_url": ""}],
            "description": "[draft] not json",
        },
    ]
    rows = parse_upload("other-tests.csv", records_to_csv(records))
    assert rows == records
