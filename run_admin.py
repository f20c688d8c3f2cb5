"""
Запуск административной панели.

Использование:
    python run_admin.py
"""

import uvicorn

from admin.backend.config import admin_settings

if __name__ == "__main__":
    uvicorn.run(
        "admin.backend.main:app",
        host=admin_settings.ADMIN_HOST,
        port=admin_settings.ADMIN_PORT,
        reload=admin_settings.DEBUG,
        log_level=admin_settings.ADMIN_LOG_LEVEL.lower(),
    )
