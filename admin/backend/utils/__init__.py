# -*- coding: utf-8 -*-
"""Утилиты админ-панели."""

from admin.backend.utils.security import mask_sensitive_data, redact_secrets

__all__ = [
    "mask_sensitive_data",
    "redact_secrets",
]
