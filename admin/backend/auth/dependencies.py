# -*- coding: utf-8 -*-
"""
FastAPI зависимости для авторизации в админ-панели.

Предоставляет зависимости для:
- Получения текущего пользователя из JWT токена
- Проверки активности пользователя
- Проверки роли администратора
"""

from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from admin.backend.auth.jwt import TOKEN_TYPE, verify_token
from admin.backend.auth.sessions import (
    LocalUser,
    SessionRegistry,
    UserStore,
    get_session_registry,
    get_user_store,
)

# Схема авторизации Bearer token
oauth2_scheme = HTTPBearer(auto_error=False)


class CurrentUser:
    """
    Контекст текущего авторизованного пользователя.

    Содержит данные пользователя и информацию из токена.
    """
    def __init__(self, user: LocalUser, token_data: dict):
        self.user = user
        self.token_data = token_data

    @property
    def id(self) -> int:
        return self.user.id

    @property
    def username(self) -> str:
        return self.user.username

    @property
    def is_admin(self) -> bool:
        return self.user.is_admin

    @property
    def session_id(self) -> Optional[str]:
        return self.token_data.get("jti")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(oauth2_scheme),
    users: UserStore = Depends(get_user_store),
    sessions: SessionRegistry = Depends(get_session_registry),
) -> CurrentUser:
    """
    Получает текущего пользователя из JWT токена.

    Извлекает токен из заголовка Authorization: Bearer <token>,
    проверяет подпись, срок действия и наличие сессии в реестре.

    Raises:
        HTTPException 401: Токен отсутствует, невалиден, сессия закрыта
            или пользователь не найден
    """
    if credentials is None:
        raise _unauthorized("Unauthorized")

    token_data = verify_token(credentials.credentials)
    if token_data is None:
        raise _unauthorized("Invalid or expired token")

    if token_data.get("type") != TOKEN_TYPE:
        raise _unauthorized("Invalid token type")

    if not sessions.is_active(token_data.get("jti")):
        raise _unauthorized("Session has been closed")

    try:
        user_id = int(token_data.get("sub"))
    except (TypeError, ValueError):
        raise _unauthorized("Invalid user id in token")

    user = users.get(user_id)
    if user is None:
        raise _unauthorized("User not found")

    return CurrentUser(user=user, token_data=token_data)


async def get_current_active_user(
    current_user: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    """
    Проверяет, что текущий пользователь активен.

    Raises:
        HTTPException 403: Если пользователь деактивирован
    """
    if not current_user.user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is deactivated",
        )
    return current_user


async def require_admin(
    current_user: CurrentUser = Depends(get_current_active_user),
) -> CurrentUser:
    """
    Проверяет, что текущий пользователь является администратором.

    Используется для изменяющих операций (создание, правка, удаление, импорт).

    Raises:
        HTTPException 403: Если пользователь не админ
    """
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator rights required",
        )
    return current_user
