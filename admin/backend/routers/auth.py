# -*- coding: utf-8 -*-
"""
API роутер аутентификации.

Эндпоинты:
- POST /login - Вход по логину/паролю
- POST /logout - Выход (закрывает сессию)
- GET /me - Текущий пользователь

Отдельный роутер vet_router:
- GET /vet-auth - Токен внешнего API для прямых запросов клиента
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request, status

from admin.backend.config import admin_settings
from admin.backend.auth.jwt import create_access_token, verify_password
from admin.backend.auth.dependencies import get_current_active_user, CurrentUser
from admin.backend.auth.sessions import (
    SessionRegistry,
    UserStore,
    get_session_registry,
    get_user_store,
)
from admin.backend.dependencies import get_vet_client
from admin.backend.models.auth import (
    AdminUserResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    VetTokenResponse,
)
from admin.backend.utils.security import mask_sensitive_data
from vetpanel.api.vet_api import VetApiClient

router = APIRouter()
vet_router = APIRouter()
logger = logging.getLogger("admin.routers.auth")


def get_client_ip(request: Request) -> str:
    """Извлекает IP клиента (учитываем прокси)."""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def _user_response(user) -> AdminUserResponse:
    return AdminUserResponse(id=str(user.id), username=user.username, is_admin=user.is_admin)


@router.post("/login", response_model=LoginResponse)
async def login(
    request: Request,
    data: LoginRequest,
    users: UserStore = Depends(get_user_store),
    sessions: SessionRegistry = Depends(get_session_registry),
):
    """
    Вход по логину и паролю.

    Возвращает JWT токен сессии.
    """
    ip = get_client_ip(request)
    user = users.get_by_username(data.username)

    if user is None or not verify_password(data.password, user.password_hash):
        logger.warning(f"Неудачная попытка входа: {data.username}, IP: {ip}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    if not user.is_active:
        logger.warning(f"Попытка входа в деактивированный аккаунт: {data.username}, IP: {ip}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is deactivated",
        )

    access_token, jti = create_access_token({
        "sub": str(user.id),
        "username": user.username,
        "is_admin": user.is_admin,
    })
    sessions.register(jti, user.id)
    user.last_login = datetime.now(timezone.utc)

    logger.info(f"Успешный вход: {user.username}, IP: {ip}")

    return LoginResponse(
        access_token=access_token,
        expires_in=admin_settings.ADMIN_JWT_ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        user=_user_response(user),
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(
    current_user: CurrentUser = Depends(get_current_active_user),
    sessions: SessionRegistry = Depends(get_session_registry),
):
    """Выход: сессия удаляется из реестра, токен больше не принимается."""
    sessions.revoke(current_user.session_id)
    logger.info(f"Выход: {current_user.username}")
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=AdminUserResponse)
async def get_me(current_user: CurrentUser = Depends(get_current_active_user)):
    """Данные текущего пользователя."""
    return _user_response(current_user.user)


@vet_router.get("/vet-auth", response_model=VetTokenResponse)
async def vet_auth(
    current_user: CurrentUser = Depends(get_current_active_user),
    client: VetApiClient = Depends(get_vet_client),
):
    """
    Токен внешнего ветеринарного API.

    Нужен клиенту для загрузки файлов напрямую во внешний API.
    """
    token = await client.authenticate()
    logger.info(f"Выдан токен внешнего API оператору {current_user.username}: {mask_sensitive_data(token)}")
    return VetTokenResponse(token=token)
