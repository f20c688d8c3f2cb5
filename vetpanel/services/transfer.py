# -*- coding: utf-8 -*-
"""
Импорт и экспорт записей разделов (JSON / CSV).

Импорт построчный: каждая запись отправляется отдельным POST во внешний
API, ошибки отдельных строк собираются в отчёт и не прерывают загрузку.
"""

from __future__ import annotations

import csv
import io
import json
import logging
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any, Callable, Optional

from vetpanel.api.vet_api import VetApiClient, VetApiError
from vetpanel.core.data_view import to_text
from vetpanel.core.resources import ResourceConfig

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".json", ".csv")


class TransferFormatError(ValueError):
    """Файл импорта не удалось разобрать."""


@dataclass
class ImportReport:
    """Итог импорта одного файла/пакета."""
    resource: str
    total: int = 0
    succeeded: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def status(self) -> str:
        if self.failed == 0:
            return "success"
        return "partial" if self.succeeded else "error"


# ==================== Разбор файлов ====================

def resource_from_filename(filename: str) -> str:
    """books.csv -> books, normal-ranges.json -> normal-ranges."""
    return PurePath(filename).stem


def _parse_json(text: str, filename: str) -> list:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise TransferFormatError(f"Failed to parse {filename}: {e.msg}") from e

    if isinstance(data, dict):
        data = data.get("items", [])
    if not isinstance(data, list):
        raise TransferFormatError(f"Failed to parse {filename}: expected an array of objects")
    return data


def _csv_value(text: str) -> Any:
    """Ячейка с JSON-массивом или объектом (так выгружаются вложенные поля) декодируется обратно."""
    if text[:1] not in ("[", "{"):
        return text
    try:
        value = json.loads(text)
    except json.JSONDecodeError:
        return text
    return value if isinstance(value, (list, dict)) else text


def _parse_csv(text: str) -> list[dict]:
    reader = csv.DictReader(io.StringIO(text))
    rows = []
    for row in reader:
        # Пустые ячейки не передаём: API сам проставит значения по умолчанию
        cleaned = {
            (key or "").strip(): _csv_value(value.strip())
            for key, value in row.items()
            if key and isinstance(value, str) and value.strip()
        }
        if cleaned:
            rows.append(cleaned)
    return rows


def parse_upload(filename: str, content: bytes | str) -> list:
    """
    Разбирает загруженный файл в список записей.

    Raises:
        TransferFormatError: Неподдерживаемое расширение или битый файл
    """
    suffix = PurePath(filename).suffix.lower()
    if suffix not in SUPPORTED_EXTENSIONS:
        raise TransferFormatError("Only JSON and CSV files are supported.")

    if isinstance(content, bytes):
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise TransferFormatError(f"Failed to read {filename}: not UTF-8") from e
    else:
        text = content

    if suffix == ".json":
        return _parse_json(text, filename)
    return _parse_csv(text)


def validate_bulk_payload(data: Any) -> list[str]:
    """Проверка JSON для пакетной загрузки. Пустой список: ошибок нет."""
    if not isinstance(data, list):
        return ["JSON must be an array of objects"]
    if not data:
        return ["Array cannot be empty"]
    return [
        f"Item {index}: Must be an object"
        for index, item in enumerate(data, start=1)
        if not isinstance(item, dict)
    ]


# ==================== Экспорт ====================

def records_to_json(records: list[dict]) -> str:
    return json.dumps(records, ensure_ascii=False, indent=2)


def records_to_csv(records: list[dict]) -> str:
    """CSV с заголовком из объединения ключей (в порядке первого появления)."""
    if not records:
        return ""

    headers: list[str] = []
    for record in records:
        for key in record:
            if key not in headers:
                headers.append(key)

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    for record in records:
        writer.writerow([_csv_cell(record.get(header)) for header in headers])
    return buffer.getvalue()


def _csv_cell(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return to_text(value)


# ==================== Импорт ====================

async def import_records(
    client: VetApiClient,
    resource: ResourceConfig,
    rows: list,
    validate: Optional[Callable[[dict], dict]] = None,
) -> ImportReport:
    """
    Создаёт записи во внешнем API по одной.

    Args:
        client: Клиент внешнего API
        resource: Раздел, в который импортируем
        rows: Записи для импорта
        validate: Проверка/нормализация строки; ValueError помечает строку ошибочной
    """
    report = ImportReport(resource=resource.name, total=len(rows))

    for index, row in enumerate(rows, start=1):
        if not isinstance(row, dict):
            report.failed += 1
            report.errors.append(f"Item {index}: Must be an object")
            continue
        try:
            payload = validate(row) if validate else row
            await client.create_record(resource.path, payload)
        except (ValueError, VetApiError) as e:
            report.failed += 1
            report.errors.append(f"Item {index}: {e}")
            continue
        report.succeeded += 1

    logger.info(
        f"Импорт в {resource.name}: {report.succeeded} успешно, {report.failed} с ошибками "
        f"(всего {report.total})"
    )
    return report
