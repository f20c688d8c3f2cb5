# -*- coding: utf-8 -*-
"""
Конфигурация админ-панели.

Настройки загружаются из переменных окружения.
Использует Pydantic Settings для валидации.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class AdminSettings(BaseSettings):
    """
    Настройки админ-панели.

    Переменные окружения с префиксом ADMIN_ / VET_API_ или без.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # === Основные настройки ===

    APP_NAME: str = "Vet Content Admin"
    APP_VERSION: str = "1.0.0"

    # Режим отладки
    DEBUG: bool = False

    # === Сервер ===

    ADMIN_HOST: str = "0.0.0.0"
    ADMIN_PORT: int = 5000

    # CORS разрешённые домены (через запятую)
    ADMIN_CORS_ORIGINS: str = "http://localhost:5173,http://localhost:3000"

    # === Оператор панели ===

    # Локальная учётка для входа в панель (ОБЯЗАТЕЛЬНО сменить в продакшене!)
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "admin123"

    # === JWT сессии ===

    ADMIN_JWT_SECRET: str = "CHANGE_ME_IN_PRODUCTION_super_secret_key_32_chars"
    ADMIN_JWT_ALGORITHM: str = "HS256"

    # Время жизни токена сессии в минутах
    ADMIN_JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 720

    # Максимальное количество активных сессий на пользователя
    ADMIN_MAX_SESSIONS_PER_USER: int = 5

    # === Внешний ветеринарный API ===

    VET_API_BASE_URL: str = "https://python-database-production.up.railway.app"

    # Сервисная учётка внешнего API (пусто = не настроено)
    VET_API_USERNAME: str = ""
    VET_API_PASSWORD: str = ""

    VET_API_TIMEOUT_SECONDS: float = 30.0

    # Размер единственной выборки для таблиц и экспорта
    VET_API_FETCH_SIZE: int = 10000

    # === Логирование ===

    ADMIN_LOG_LEVEL: str = "INFO"

    # Файл логов (пусто = только консоль)
    ADMIN_LOG_FILE: str = "logs/admin.log"

    ADMIN_LOG_MAX_SIZE_MB: int = 50
    ADMIN_LOG_BACKUP_COUNT: int = 3

    @property
    def cors_origins_list(self) -> list[str]:
        """Возвращает список разрешённых CORS origins."""
        return [origin.strip() for origin in self.ADMIN_CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def vet_api_configured(self) -> bool:
        return bool(self.VET_API_USERNAME and self.VET_API_PASSWORD)


@lru_cache()
def get_admin_settings() -> AdminSettings:
    """
    Получает singleton экземпляр настроек.

    Кэшируется для производительности.
    """
    return AdminSettings()


# Глобальный экземпляр настроек
admin_settings = get_admin_settings()
