# -*- coding: utf-8 -*-
"""
FastAPI зависимости для доступа к внешнему API.

Клиент создаётся один на процесс, чтобы токен внешнего API
переиспользовался между запросами. В тестах подменяется через
app.dependency_overrides.
"""

from functools import lru_cache

from fastapi import Depends

from admin.backend.config import admin_settings
from vetpanel.api.vet_api import VetApiClient
from vetpanel.services.record_source import RecordSource


@lru_cache()
def get_vet_client() -> VetApiClient:
    return VetApiClient(
        base_url=admin_settings.VET_API_BASE_URL,
        username=admin_settings.VET_API_USERNAME,
        password=admin_settings.VET_API_PASSWORD,
        timeout=admin_settings.VET_API_TIMEOUT_SECONDS,
    )


def get_record_source(client: VetApiClient = Depends(get_vet_client)) -> RecordSource:
    return RecordSource(client, fetch_size=admin_settings.VET_API_FETCH_SIZE)
