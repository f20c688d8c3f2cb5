# -*- coding: utf-8 -*-
"""
Pydantic модели (схемы) для админ-панели.

Содержит:
- auth: Схемы аутентификации (логин, токены)
- content: Схемы разделов контента
- view: Схемы табличных представлений
- transfer: Схемы импорта/экспорта и дашборда
"""

from admin.backend.models.auth import (
    LoginRequest,
    LoginResponse,
    AdminUserResponse,
    MessageResponse,
    VetTokenResponse,
)
from admin.backend.models.content import CONTENT_SCHEMAS, validate_content
from admin.backend.models.view import (
    ResourceInfo,
    ViewResponse,
    FilterValuesResponse,
)
from admin.backend.models.transfer import ImportReportResponse, DashboardStats

__all__ = [
    # Auth
    "LoginRequest",
    "LoginResponse",
    "AdminUserResponse",
    "MessageResponse",
    "VetTokenResponse",
    # Content
    "CONTENT_SCHEMAS",
    "validate_content",
    # View
    "ResourceInfo",
    "ViewResponse",
    "FilterValuesResponse",
    # Transfer
    "ImportReportResponse",
    "DashboardStats",
]
