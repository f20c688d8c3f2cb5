"""
Vet Admin Panel - Core Package
==============================
Ядро админ-панели ветеринарного образовательного контента.

Структура:
- core/     - Конвейер представления данных и каталог разделов
- api/      - Клиент внешнего ветеринарного API
- services/ - Источник записей, импорт и экспорт
"""

__version__ = "1.0.0"
