# -*- coding: utf-8 -*-
"""
FastAPI бэкенд админ-панели ветеринарного контента.

Модули:
- auth: Аутентификация операторов (JWT, сессии)
- routers: API эндпоинты
- models: Pydantic схемы
- dependencies: Клиент внешнего API и источник записей
"""
