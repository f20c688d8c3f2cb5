# -*- coding: utf-8 -*-
"""
API роутер главной страницы.

Эндпоинты:
- GET /stats - Количество записей в основных разделах
"""

import logging

from fastapi import APIRouter, Depends

from admin.backend.auth.dependencies import CurrentUser, get_current_active_user
from admin.backend.dependencies import get_record_source
from admin.backend.models.transfer import DashboardStats
from vetpanel.core.resources import get_resource
from vetpanel.services.record_source import RecordSource

router = APIRouter()
logger = logging.getLogger("admin.routers.dashboard")

DASHBOARD_RESOURCES = ("books", "diseases", "drugs", "dictionary")


@router.get("/stats", response_model=DashboardStats)
async def get_stats(
    current_user: CurrentUser = Depends(get_current_active_user),
    source: RecordSource = Depends(get_record_source),
):
    """Счётчики для карточек дашборда (поле total внешнего API)."""
    counts = {}
    for name in DASHBOARD_RESOURCES:
        counts[name.replace("-", "_")] = await source.count(get_resource(name))
    logger.debug(f"Статистика дашборда: {counts}")
    return DashboardStats(**counts)
