# -*- coding: utf-8 -*-
"""
Pydantic схемы импорта, экспорта и дашборда.
"""

from typing import Literal, Optional
from pydantic import BaseModel, Field


class ImportReportResponse(BaseModel):
    """Итог импорта."""
    resource: str = Field(..., description="Раздел")
    file: Optional[str] = Field(None, description="Имя загруженного файла")
    status: Literal["success", "partial", "error"] = Field(..., description="Итоговый статус")
    total: int = Field(..., description="Всего записей")
    succeeded: int = Field(..., description="Создано успешно")
    failed: int = Field(..., description="С ошибками")
    errors: list[str] = Field(default_factory=list, description="Описание ошибок по записям")
    message: str = Field(..., description="Сообщение для уведомления")


class DashboardStats(BaseModel):
    """Счётчики главной страницы."""
    books: int = 0
    diseases: int = 0
    drugs: int = 0
    dictionary: int = 0
