"""
API Package
===========
Клиент внешнего ветеринарного REST API.
"""

from .vet_api import VetApiClient, VetApiError

__all__ = ['VetApiClient', 'VetApiError']
