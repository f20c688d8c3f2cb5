# -*- coding: utf-8 -*-
"""
Pydantic схемы для аутентификации в админ-панели.
"""

from pydantic import BaseModel, Field


# ==================== Запросы ====================

class LoginRequest(BaseModel):
    """Запрос на вход по логину/паролю."""
    username: str = Field(..., min_length=1, max_length=255, description="Логин оператора")
    password: str = Field(..., min_length=1, max_length=255, description="Пароль")


# ==================== Ответы ====================

class AdminUserResponse(BaseModel):
    """Данные оператора панели."""
    id: str = Field(..., description="ID пользователя")
    username: str = Field(..., description="Логин")
    is_admin: bool = Field(..., alias="isAdmin", description="Права администратора")

    model_config = {"populate_by_name": True}


class LoginResponse(BaseModel):
    """Ответ на успешный вход."""
    access_token: str = Field(..., description="JWT токен сессии")
    token_type: str = Field("bearer", description="Тип токена")
    expires_in: int = Field(..., description="Время жизни токена в секундах")
    user: AdminUserResponse = Field(..., description="Данные пользователя")


class MessageResponse(BaseModel):
    """Простой ответ с сообщением."""
    message: str


class VetTokenResponse(BaseModel):
    """Токен внешнего API для прямых запросов клиента."""
    token: str = Field(..., description="Access token внешнего API")
