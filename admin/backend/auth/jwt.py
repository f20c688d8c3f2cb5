# -*- coding: utf-8 -*-
"""
Токены сессий операторов и пароли.

Токен сессии - JWT (HS256 по умолчанию) с полями sub, username, is_admin,
jti и type="access". jti связывает токен с записью в реестре сессий,
поэтому logout отзывает токен до истечения exp.
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from admin.backend.config import admin_settings

TOKEN_TYPE = "access"

pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__default_rounds=310_000,
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Сверяет пароль с хэшем; битый хэш считается несовпадением."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def _session_lifetime(expires_delta: Optional[timedelta]) -> timedelta:
    if expires_delta is not None:
        return expires_delta
    return timedelta(minutes=admin_settings.ADMIN_JWT_ACCESS_TOKEN_EXPIRE_MINUTES)


def create_access_token(
    data: dict[str, Any],
    expires_delta: Optional[timedelta] = None,
) -> tuple[str, str]:
    """
    Выпускает токен новой сессии.

    Args:
        data: Поля оператора (sub, username, is_admin)
        expires_delta: Время жизни; по умолчанию ADMIN_JWT_ACCESS_TOKEN_EXPIRE_MINUTES

    Returns:
        (token, jti). jti нужно зарегистрировать в SessionRegistry,
        иначе токен не будет принят.
    """
    issued_at = datetime.now(timezone.utc)
    session_id = secrets.token_hex(16)

    claims = {
        **data,
        "iat": issued_at,
        "exp": issued_at + _session_lifetime(expires_delta),
        "jti": session_id,
        "type": TOKEN_TYPE,
    }
    token = jwt.encode(claims, admin_settings.ADMIN_JWT_SECRET, algorithm=admin_settings.ADMIN_JWT_ALGORITHM)
    return token, session_id


def verify_token(token: str) -> Optional[dict[str, Any]]:
    """Поля токена, если подпись и срок действия в порядке, иначе None."""
    try:
        return jwt.decode(token, admin_settings.ADMIN_JWT_SECRET, algorithms=[admin_settings.ADMIN_JWT_ALGORITHM])
    except JWTError:
        return None
