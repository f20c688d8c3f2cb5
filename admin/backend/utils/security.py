# -*- coding: utf-8 -*-
"""
Скрытие секретов в логах админ-панели.
"""

from typing import Any, Mapping

# Подстроки имён полей, значения которых в лог не попадают
SECRET_MARKERS = ("password", "secret", "token")


def mask_sensitive_data(data: str, visible_chars: int = 4) -> str:
    """
    Оставляет видимыми только края строки: "abcd********wxyz".

    Короткие строки (не длиннее 2 * visible_chars) скрываются целиком.
    """
    if not data:
        return ""
    hidden = len(data) - visible_chars * 2
    if hidden <= 0:
        return "*" * len(data)
    return data[:visible_chars] + "*" * hidden + data[-visible_chars:]


def redact_secrets(values: Mapping[str, Any]) -> dict[str, Any]:
    """Копия словаря, где пароли, секреты и токены замаскированы."""
    redacted = {}
    for key, value in values.items():
        if any(marker in key.lower() for marker in SECRET_MARKERS) and isinstance(value, str):
            redacted[key] = mask_sensitive_data(value, visible_chars=2)
        else:
            redacted[key] = value
    return redacted
