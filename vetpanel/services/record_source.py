# -*- coding: utf-8 -*-
"""
Источник записей для таблиц админ-панели.

Записи забираются из внешнего API одной ограниченной выборкой
(page=1, size=fetch_size), дальше поиск/фильтры/пагинация считаются
локально по этой выборке. Если API сообщает total больше, чем вернул,
выборка помечается как truncated, записи за пределами лимита в таблице
не видны.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from vetpanel.api.vet_api import VetApiClient
from vetpanel.core.resources import ResourceConfig

logger = logging.getLogger(__name__)

# Ключи-обёртки, в которых API возвращает списки
_ENVELOPE_KEYS = ("items", "data", "results")


def extract_records(payload: Any, resource_name: Optional[str] = None) -> list[dict]:
    """
    Достаёт список записей из ответа API.

    Поддерживаемые форматы: голый список; словарь с ключом items, data,
    results или именем раздела (books, notes, ...). Иначе — пустой список.
    """
    if isinstance(payload, list):
        return list(payload)

    if isinstance(payload, dict):
        keys = list(_ENVELOPE_KEYS)
        if resource_name:
            keys.append(resource_name)
            keys.append(resource_name.replace("-", "_"))
        for key in keys:
            value = payload.get(key)
            if isinstance(value, list):
                return list(value)

    logger.warning(f"Неожиданный формат ответа для раздела {resource_name}: {type(payload).__name__}")
    return []


def extract_total(payload: Any) -> Optional[int]:
    """Поле total из ответа API, если оно есть и является числом."""
    if isinstance(payload, dict):
        total = payload.get("total")
        if isinstance(total, int) and not isinstance(total, bool):
            return total
    return None


@dataclass
class RecordBatch:
    """Ограниченная выборка записей раздела."""
    records: list[dict]
    remote_total: Optional[int]
    truncated: bool

    @property
    def fetched(self) -> int:
        return len(self.records)


class RecordSource:
    """
    Загрузка записей разделов из внешнего API.

    Ничего не кэширует: каждый вызов — свежая выборка.
    """

    def __init__(self, client: VetApiClient, fetch_size: int = 10000):
        self.client = client
        self.fetch_size = fetch_size

    async def fetch_batch(self, resource: ResourceConfig) -> RecordBatch:
        payload = await self.client.list_records(resource.path, page=1, size=self.fetch_size)
        records = extract_records(payload, resource.name)
        remote_total = extract_total(payload)
        truncated = remote_total is not None and remote_total > len(records)

        if truncated:
            logger.warning(
                f"Раздел {resource.name}: получено {len(records)} из {remote_total} записей "
                f"(лимит выборки {self.fetch_size})"
            )
        return RecordBatch(records=records, remote_total=remote_total, truncated=truncated)

    async def count(self, resource: ResourceConfig) -> int:
        """Количество записей раздела по полю total (для дашборда)."""
        payload = await self.client.list_records(resource.path, page=1, size=1)
        total = extract_total(payload)
        if total is None:
            return len(extract_records(payload, resource.name))
        return total

    async def filter_values(self, resource: ResourceConfig, lookup_path: str) -> list[str]:
        """Варианты фильтра из справочника внешнего API."""
        payload = await self.client.get_lookup(lookup_path)
        values: list = []
        if isinstance(payload, list):
            values = payload
        elif isinstance(payload, dict):
            # {"categories": [...]} и подобные обёртки
            values = next((v for v in payload.values() if isinstance(v, list)), [])
        logger.debug(f"Справочник {lookup_path} для {resource.name}: {len(values)} значений")
        return [str(value) for value in values if value not in (None, "")]
