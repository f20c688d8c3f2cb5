# -*- coding: utf-8 -*-
"""
Реестр активных сессий и локальные пользователи панели.

Хранится в памяти процесса: после перезапуска все операторы входят заново.
Выход (logout) удаляет jti из реестра, после чего токен не принимается,
даже если срок его действия ещё не истёк.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache
from typing import Optional

from admin.backend.auth.jwt import hash_password
from admin.backend.config import admin_settings

logger = logging.getLogger("admin.auth.sessions")


@dataclass
class LocalUser:
    """Оператор админ-панели."""
    id: int
    username: str
    password_hash: str
    is_admin: bool = True
    is_active: bool = True
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None


class UserStore:
    """Локальные операторы панели (по умолчанию один — из настроек)."""

    def __init__(self):
        self._users: dict[int, LocalUser] = {}
        self._next_id = 1

    def create_user(self, username: str, password: str, is_admin: bool = True) -> LocalUser:
        user = LocalUser(
            id=self._next_id,
            username=username,
            password_hash=hash_password(password),
            is_admin=is_admin,
            created_at=datetime.now(timezone.utc),
        )
        self._users[user.id] = user
        self._next_id += 1
        return user

    def get(self, user_id: int) -> Optional[LocalUser]:
        return self._users.get(user_id)

    def get_by_username(self, username: str) -> Optional[LocalUser]:
        return next((u for u in self._users.values() if u.username == username), None)


class SessionRegistry:
    """
    Активные сессии: jti -> user_id.

    На пользователя хранится не более max_per_user сессий,
    при превышении вытесняются самые старые.
    """

    def __init__(self, max_per_user: int = 5):
        self.max_per_user = max_per_user
        self._sessions: "OrderedDict[str, int]" = OrderedDict()

    def register(self, jti: str, user_id: int) -> None:
        self._sessions[jti] = user_id

        user_sessions = [key for key, uid in self._sessions.items() if uid == user_id]
        excess = len(user_sessions) - self.max_per_user
        for old_jti in user_sessions[:max(excess, 0)]:
            del self._sessions[old_jti]
            logger.info(f"Сессия вытеснена по лимиту: user_id={user_id}")

    def is_active(self, jti: Optional[str]) -> bool:
        return jti is not None and jti in self._sessions

    def revoke(self, jti: Optional[str]) -> bool:
        if jti is None:
            return False
        return self._sessions.pop(jti, None) is not None

    def count(self, user_id: int) -> int:
        return sum(1 for uid in self._sessions.values() if uid == user_id)


@lru_cache()
def get_user_store() -> UserStore:
    store = UserStore()
    store.create_user(admin_settings.ADMIN_USERNAME, admin_settings.ADMIN_PASSWORD)
    logger.info(f"Создан оператор панели: {admin_settings.ADMIN_USERNAME}")
    return store


@lru_cache()
def get_session_registry() -> SessionRegistry:
    return SessionRegistry(max_per_user=admin_settings.ADMIN_MAX_SESSIONS_PER_USER)
