# -*- coding: utf-8 -*-
"""
Клиент внешнего ветеринарного REST API.

Админ-панель не хранит контент сама: все книги, болезни, препараты и т.д.
живут во внешнем API. Клиент получает токен по сервисной учётке
(POST /api/auth/login), кэширует его и подставляет в Authorization.
При ответе 401 токен сбрасывается и запрос повторяется один раз.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)


class VetApiError(Exception):
    """Ошибка обращения к внешнему API (HTTP статус + текст ответа)."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    def __str__(self) -> str:
        return f"HTTP {self.status_code}: {self.message}"


def _json_body(response: httpx.Response) -> Any:
    """JSON ответа; HTML-заглушка прокси и прочий не-JSON дают VetApiError 502."""
    try:
        return response.json()
    except ValueError as e:
        logger.error(f"Внешний API вернул не JSON: HTTP {response.status_code}, {response.text[:200]!r}")
        raise VetApiError(502, "Invalid response from external API") from e


class VetApiClient:
    """
    Асинхронный клиент внешнего API.

    Args:
        base_url: Базовый URL API
        username: Логин сервисной учётки
        password: Пароль сервисной учётки
        timeout: Таймаут запроса в секундах
        transport: Транспорт httpx (подменяется в тестах)
    """

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.username = username
        self.password = password
        self.timeout = timeout
        self.transport = transport

        self._token: Optional[str] = None
        self._token_lock = asyncio.Lock()

    @property
    def has_credentials(self) -> bool:
        return bool(self.username and self.password)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self.transport,
        )

    # ==================== Аутентификация ====================

    async def authenticate(self, force: bool = False) -> str:
        """
        Получает access token внешнего API (с кэшированием).

        Raises:
            VetApiError: Учётка не настроена, API отказал или недоступен
        """
        async with self._token_lock:
            if self._token and not force:
                return self._token

            if not self.has_credentials:
                raise VetApiError(500, "API credentials not configured")

            logger.info(f"Аутентификация во внешнем API: {self.base_url}")
            try:
                async with self._client() as client:
                    response = await client.post(
                        "/api/auth/login",
                        json={"username": self.username, "password": self.password},
                    )
            except httpx.HTTPError as e:
                logger.error(f"Внешний API недоступен при входе: {e}")
                raise VetApiError(502, "Failed to authenticate with external API") from e

            if response.is_error:
                logger.warning(f"Внешний API отклонил вход: HTTP {response.status_code}")
                raise VetApiError(response.status_code, response.text or f"HTTP {response.status_code}")

            payload = _json_body(response)
            token = payload.get("access_token") if isinstance(payload, dict) else None
            if not token:
                raise VetApiError(502, "External API returned no access token")

            self._token = token
            return token

    def invalidate_token(self) -> None:
        self._token = None

    # ==================== Низкоуровневый запрос ====================

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[dict[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        """
        Выполняет авторизованный запрос и возвращает JSON ответа.

        Raises:
            VetApiError: Для ответов 4xx/5xx и сетевых ошибок
        """
        for attempt in range(2):
            token = await self.authenticate()
            try:
                async with self._client() as client:
                    response = await client.request(
                        method,
                        url,
                        params=params,
                        json=json,
                        headers={"Authorization": f"Bearer {token}"},
                    )
            except httpx.HTTPError as e:
                logger.error(f"Ошибка сети при {method} {url}: {e}")
                raise VetApiError(502, f"External API unavailable: {e}") from e

            if response.status_code == 401 and attempt == 0:
                logger.info("Токен внешнего API истёк, получаем новый")
                self.invalidate_token()
                continue

            if response.is_error:
                logger.warning(f"{method} {url} -> HTTP {response.status_code}")
                raise VetApiError(response.status_code, response.text or f"HTTP {response.status_code}")

            logger.debug(f"{method} {url} -> HTTP {response.status_code}")
            if not response.content:
                return None
            return _json_body(response)

        # Недостижимо: второй 401 выходит через is_error
        raise VetApiError(401, "Unauthorized")

    # ==================== Коллекции ====================

    @staticmethod
    def _collection(path: str) -> str:
        return f"{path.rstrip('/')}/"

    @staticmethod
    def _item(path: str, key: Any) -> str:
        return f"{path.rstrip('/')}/{quote(str(key), safe='')}"

    async def list_records(self, path: str, page: int = 1, size: int = 100) -> Any:
        """Список записей раздела (ответ API как есть)."""
        return await self.request("GET", self._collection(path), params={"page": page, "size": size})

    async def get_lookup(self, lookup_path: str) -> Any:
        """Справочник (например, /api/books/categories/list)."""
        return await self.request("GET", lookup_path)

    async def create_record(self, path: str, data: dict[str, Any]) -> Any:
        return await self.request("POST", self._collection(path), json=data)

    async def update_record(self, path: str, key: Any, data: dict[str, Any]) -> Any:
        return await self.request("PUT", self._item(path, key), json=data)

    async def delete_record(self, path: str, key: Any) -> Any:
        return await self.request("DELETE", self._item(path, key))

    # ==================== Одиночные разделы (About) ====================

    async def get_singleton(self, path: str) -> Any:
        return await self.request("GET", self._collection(path))

    async def update_singleton(self, path: str, data: dict[str, Any]) -> Any:
        return await self.request("PUT", self._collection(path), json=data)
