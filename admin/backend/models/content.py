# -*- coding: utf-8 -*-
"""
Pydantic схемы разделов контента.

Проверяют данные перед отправкой во внешний API: обязательные названия,
корректные URL и email, допустимые типы уведомлений.
"""

from typing import Literal, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


def _validate_url(value: Optional[str], allow_empty: bool = False) -> Optional[str]:
    if value is None:
        return value
    if value == "" and allow_empty:
        return value
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("Valid URL required")
    return value


class ContentBase(BaseModel):
    """Лишние поля пропускаем во внешний API как есть."""
    model_config = ConfigDict(extra="allow")


class BookSchema(ContentBase):
    title: str = Field(..., min_length=1, description="Title is required")
    description: Optional[str] = None
    category: Optional[str] = None
    cover_url: Optional[str] = None
    download_url: Optional[str] = None

    @field_validator("cover_url", "download_url")
    @classmethod
    def check_urls(cls, v):
        return _validate_url(v)


class DiseaseSchema(ContentBase):
    name: str = Field(..., min_length=1, description="Disease name is required")
    kurdish: Optional[str] = None
    symptoms: Optional[str] = None
    cause: Optional[str] = None
    control: Optional[str] = None


class DrugSchema(ContentBase):
    name: str = Field(..., min_length=1, description="Drug name is required")
    usage: Optional[str] = None
    side_effect: Optional[str] = None
    other_info: Optional[str] = None
    drug_class: Optional[str] = None


class DictionarySchema(ContentBase):
    name: str = Field(..., min_length=1, description="Word is required")
    kurdish: Optional[str] = None
    arabic: Optional[str] = None
    description: Optional[str] = None
    barcode: Optional[str] = None
    is_saved: bool = False
    is_favorite: bool = False


class StaffSchema(ContentBase):
    name: str = Field(..., min_length=1, description="Name is required")
    position: Optional[str] = None
    department: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    bio: Optional[str] = None


class NormalRangeSchema(ContentBase):
    name: str = Field(..., min_length=1, description="Range name is required")
    species: Optional[str] = None
    category: Optional[str] = None
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    unit: Optional[str] = None
    notes: Optional[str] = None


class TutorialVideoSchema(ContentBase):
    title: str = Field(..., min_length=1, description="Title is required")
    description: Optional[str] = None
    video_url: str
    thumbnail_url: Optional[str] = None
    duration: Optional[str] = None
    category: Optional[str] = None

    @field_validator("video_url", "thumbnail_url")
    @classmethod
    def check_urls(cls, v):
        return _validate_url(v)


class InstrumentSchema(ContentBase):
    name: str = Field(..., min_length=1, description="Instrument name is required")
    description: Optional[str] = None
    usage: Optional[str] = None
    category: Optional[str] = None


class NoteSchema(ContentBase):
    name: str = Field(..., min_length=1, description="Note name is required")
    description: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, v):
        return _validate_url(v, allow_empty=True)


class SlideSchema(ContentBase):
    """Слайды кала и прочие слайды (поле slide_name)."""
    slide_name: str = Field(..., min_length=1, description="Slide name is required")
    description: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, v):
        return _validate_url(v, allow_empty=True)


class UrineSlideSchema(ContentBase):
    name: str = Field(..., min_length=1, description="Slide name is required")
    description: Optional[str] = None
    findings: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, v):
        return _validate_url(v)


class LabTestSection(BaseModel):
    """Раздел описания лабораторного теста."""
    title: str = ""
    content: str = ""
    image_url: Optional[str] = None

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, v):
        return _validate_url(v, allow_empty=True)


class OtherTestSchema(ContentBase):
    name: str = Field(..., min_length=1, description="Test name is required")
    description: Optional[str] = None
    sections: Optional[list[LabTestSection]] = None


NotificationType = Literal["general", "drug", "disease", "quiz", "update", "reminder"]


class NotificationSchema(ContentBase):
    title: str = Field(..., min_length=1, description="Title is required")
    content: str = Field(..., min_length=1, description="Content is required")
    type: NotificationType = "general"
    is_read: bool = False


class AppLinkSchema(ContentBase):
    title: str = Field(..., min_length=1, description="Title is required")
    url: str
    platform: Optional[str] = None
    description: Optional[str] = None

    @field_validator("url")
    @classmethod
    def check_url(cls, v):
        return _validate_url(v)


class AboutSchema(ContentBase):
    title: str = Field(..., min_length=1, description="Title is required")
    content: str = Field(..., min_length=1, description="Content is required")
    version: Optional[str] = None


CONTENT_SCHEMAS: dict[str, type[ContentBase]] = {
    "books": BookSchema,
    "diseases": DiseaseSchema,
    "drugs": DrugSchema,
    "dictionary": DictionarySchema,
    "staff": StaffSchema,
    "normal-ranges": NormalRangeSchema,
    "tutorial-videos": TutorialVideoSchema,
    "instruments": InstrumentSchema,
    "notes": NoteSchema,
    "urine-slides": UrineSlideSchema,
    "stool-slides": SlideSchema,
    "other-slides": SlideSchema,
    "other-tests": OtherTestSchema,
    "notifications": NotificationSchema,
    "app-links": AppLinkSchema,
    "about": AboutSchema,
}


def validate_content(resource_name: str, data: dict) -> dict:
    """
    Проверяет запись раздела и возвращает данные для внешнего API.

    Raises:
        pydantic.ValidationError: Если данные не прошли проверку
    """
    schema = CONTENT_SCHEMAS.get(resource_name)
    if schema is None:
        return dict(data)
    return schema.model_validate(data).model_dump(mode="json", exclude_none=True)
