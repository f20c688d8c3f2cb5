# -*- coding: utf-8 -*-
"""
API роутеры админ-панели.

Содержит:
- auth: Аутентификация и токен внешнего API
- content: Разделы контента (таблицы и CRUD)
- transfer: Импорт и экспорт
- dashboard: Главная страница
"""

from admin.backend.routers import auth, content, transfer, dashboard

__all__ = [
    "auth",
    "content",
    "transfer",
    "dashboard",
]
