# -*- coding: utf-8 -*-
"""
Модуль аутентификации админ-панели.

Содержит:
- jwt: Генерация и валидация JWT токенов, хэширование паролей
- sessions: Реестр сессий и локальные операторы панели
- dependencies: FastAPI зависимости для авторизации
"""

from admin.backend.auth.jwt import (
    create_access_token,
    verify_token,
    hash_password,
    verify_password,
)
from admin.backend.auth.dependencies import (
    CurrentUser,
    get_current_user,
    get_current_active_user,
    require_admin,
)

__all__ = [
    # JWT
    "create_access_token",
    "verify_token",
    "hash_password",
    "verify_password",
    # Dependencies
    "CurrentUser",
    "get_current_user",
    "get_current_active_user",
    "require_admin",
]
