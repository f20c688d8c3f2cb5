# -*- coding: utf-8 -*-
"""
Точка входа FastAPI приложения админ-панели.

Запуск:
    uvicorn admin.backend.main:app --host 0.0.0.0 --port 5000 --reload
"""

import logging
import sys
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from admin.backend.config import admin_settings
from admin.backend.utils.security import redact_secrets
from vetpanel.api.vet_api import VetApiError
from vetpanel.core.data_view import InvalidArgumentError
from vetpanel.core.resources import UnknownResourceError
from vetpanel.services.transfer import TransferFormatError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# Настройка логирования
def setup_logging() -> None:
    """Настраивает логирование для админ-панели (повторный вызов не дублирует хэндлеры)."""
    root_logger = logging.getLogger()
    if getattr(root_logger, "_admin_configured", False):
        return

    formatter = logging.Formatter(LOG_FORMAT)
    log_level = getattr(logging, admin_settings.ADMIN_LOG_LEVEL.upper(), logging.INFO)
    root_logger.setLevel(log_level)

    # Консольный хэндлер
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    # Файловый хэндлер с ротацией
    if admin_settings.ADMIN_LOG_FILE:
        log_dir = Path(admin_settings.ADMIN_LOG_FILE).parent
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            admin_settings.ADMIN_LOG_FILE,
            maxBytes=admin_settings.ADMIN_LOG_MAX_SIZE_MB * 1024 * 1024,
            backupCount=admin_settings.ADMIN_LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        root_logger.addHandler(file_handler)

    root_logger._admin_configured = True


setup_logging()
logger = logging.getLogger("admin.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Жизненный цикл приложения: только логирование старта/остановки."""
    logger.info("Запуск админ-панели...")
    logger.info(f"Версия: {admin_settings.APP_VERSION}")
    logger.info(f"Внешний API: {admin_settings.VET_API_BASE_URL}")
    logger.debug(f"Настройки: {redact_secrets(admin_settings.model_dump())}")
    if not admin_settings.vet_api_configured:
        logger.warning("VET_API_USERNAME/VET_API_PASSWORD не заданы: запросы к внешнему API будут отклонены")

    yield

    logger.info("Админ-панель остановлена")


app = FastAPI(
    title=admin_settings.APP_NAME,
    version=admin_settings.APP_VERSION,
    description="REST API админ-панели ветеринарного образовательного контента",
    docs_url="/api/docs" if admin_settings.DEBUG else None,
    redoc_url="/api/redoc" if admin_settings.DEBUG else None,
    openapi_url="/api/openapi.json" if admin_settings.DEBUG else None,
    lifespan=lifespan,
)


# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=admin_settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ==================== Обработчики исключений ====================

@app.exception_handler(VetApiError)
async def vet_api_exception_handler(request: Request, exc: VetApiError):
    """Ошибки внешнего API: 4xx пробрасываем как есть, 5xx -> 502."""
    status_code = exc.status_code if 400 <= exc.status_code < 500 else status.HTTP_502_BAD_GATEWAY
    logger.warning(f"Внешний API: {request.method} {request.url.path} -> {exc}")
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


@app.exception_handler(InvalidArgumentError)
@app.exception_handler(TransferFormatError)
async def invalid_argument_handler(request: Request, exc: ValueError):
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc)},
    )


@app.exception_handler(UnknownResourceError)
async def unknown_resource_handler(request: Request, exc: UnknownResourceError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Глобальный обработчик необработанных исключений."""
    logger.error(f"Необработанное исключение: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# ==================== Системные эндпоинты ====================

@app.get("/health", tags=["System"])
async def health_check():
    """Проверка работоспособности сервиса."""
    return {"status": "ok", "version": admin_settings.APP_VERSION}


@app.get("/api", tags=["System"])
async def api_info():
    """Информация об API."""
    return {
        "name": admin_settings.APP_NAME,
        "version": admin_settings.APP_VERSION,
        "docs": "/api/docs" if admin_settings.DEBUG else None,
    }


def register_routers():
    """Регистрирует все API роутеры."""
    from admin.backend.routers import auth, content, transfer, dashboard

    app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
    app.include_router(auth.vet_router, prefix="/api", tags=["Authentication"])
    app.include_router(content.router, prefix="/api/content", tags=["Content"])
    app.include_router(transfer.router, prefix="/api/transfer", tags=["Import/Export"])
    app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard"])


register_routers()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "admin.backend.main:app",
        host=admin_settings.ADMIN_HOST,
        port=admin_settings.ADMIN_PORT,
        reload=admin_settings.DEBUG,
        log_level=admin_settings.ADMIN_LOG_LEVEL.lower(),
    )
