"""
Core Package
============
Конвейер поиска/фильтрации/сортировки/пагинации и каталог разделов.
"""

from .data_view import (
    FieldAccessor,
    InvalidArgumentError,
    ViewResult,
    ViewSpec,
    compute_view,
)
from .resources import ResourceConfig, UnknownResourceError, get_resource, list_resources

__all__ = [
    'FieldAccessor',
    'InvalidArgumentError',
    'ViewResult',
    'ViewSpec',
    'compute_view',
    'ResourceConfig',
    'UnknownResourceError',
    'get_resource',
    'list_resources',
]
