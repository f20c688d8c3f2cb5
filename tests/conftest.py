# -*- coding: utf-8 -*-
"""
Фикстуры pytest.

Внешний ветеринарный API подменяется httpx.MockTransport, поэтому
тесты не ходят в сеть. Переменные окружения выставляются до импорта
настроек админ-панели.
"""

import json
import os

os.environ.setdefault("ADMIN_LOG_FILE", "")
os.environ.setdefault("ADMIN_USERNAME", "admin")
os.environ.setdefault("ADMIN_PASSWORD", "admin123")
os.environ.setdefault("VET_API_USERNAME", "service")
os.environ.setdefault("VET_API_PASSWORD", "service-secret")
os.environ.setdefault("VET_API_BASE_URL", "https://vet.test")

import httpx
import pytest
from fastapi.testclient import TestClient

from vetpanel.api.vet_api import VetApiClient

BOOKS = [
    {"title": "Anatomy A", "category": "anatomy", "description": "Bones and joints"},
    {"title": "Surgery B", "category": "surgery", "description": "Soft tissue"},
    {"title": "Anatomy C", "category": "anatomy", "description": "Muscles"},
    {"title": "Pharmacology D", "category": "pharma", "description": "Dosage"},
    {"title": "Anatomy E", "category": "anatomy", "description": "Nerves"},
]


class FakeVetApi:
    """
    Имитация внешнего API: вход, коллекции, справочники и страница About.

    Запись с названием "FAIL" отклоняется с HTTP 400.
    """

    def __init__(self):
        self.token = "upstream-token-1"
        self.logins = 0
        self.calls: list[tuple[str, str]] = []
        self.collections: dict[str, list[dict]] = {
            "books": [dict(book) for book in BOOKS],
            "diseases": [{"name": "Rabies"}, {"name": "Anthrax"}],
            "drugs": [
                {"name": "Amoxicillin", "drug_class": "Antibiotic"},
                {"name": "Meloxicam", "drug_class": "NSAID"},
            ],
            "dictionary": [
                {"name": "Abdomen", "is_saved": True, "is_favorite": False},
                {"name": "Bile", "is_saved": False, "is_favorite": True},
                {"name": "Cornea", "is_saved": True, "is_favorite": True},
            ],
            "instruments": [{"name": "Scalpel"}, {"name": "Forceps"}],
            "other-tests": [],
            "users": [
                {"username": "vetstudent", "email": "student@example.com"},
                {"username": "drkaran", "email": "karan@example.com"},
            ],
        }
        self.about = {"title": "About", "content": "Vet reference app", "version": "1.0"}

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path

        if path == "/api/auth/login":
            self.logins += 1
            return httpx.Response(200, json={"access_token": self.token, "token_type": "bearer"})

        if request.headers.get("Authorization") != f"Bearer {self.token}":
            return httpx.Response(401, json={"detail": "Not authenticated"})

        self.calls.append((request.method, path))

        if path == "/api/books/categories/list":
            return httpx.Response(200, json={"categories": ["Anatomy", "Surgery", ""]})
        if path == "/api/drugs/classes/list":
            return httpx.Response(200, json=["Antibiotic", "NSAID"])

        parts = path.strip("/").split("/")
        name = parts[1] if len(parts) > 1 else ""
        body = json.loads(request.content) if request.content else None

        if name == "about":
            if request.method == "PUT":
                self.about = body
            return httpx.Response(200, json=self.about)

        if name not in self.collections:
            return httpx.Response(404, text="Not Found")
        records = self.collections[name]

        if len(parts) == 2:
            if request.method == "GET":
                size = int(request.url.params.get("size", 100))
                return httpx.Response(200, json={"items": records[:size], "total": len(records)})
            if request.method == "POST":
                if "FAIL" in (body.get("title"), body.get("name")):
                    return httpx.Response(400, text="Duplicate entry")
                records.append(body)
                return httpx.Response(201, json=body)

        if request.method == "PUT":
            return httpx.Response(200, json=body)
        if request.method == "DELETE":
            return httpx.Response(200, json={"message": "deleted"})
        return httpx.Response(405, text="Method Not Allowed")


@pytest.fixture
def fake_api() -> FakeVetApi:
    return FakeVetApi()


@pytest.fixture
def vet_client(fake_api: FakeVetApi) -> VetApiClient:
    return VetApiClient(
        base_url="https://vet.test",
        username="service",
        password="service-secret",
        transport=httpx.MockTransport(fake_api.handler),
    )


@pytest.fixture
def client(vet_client: VetApiClient):
    """TestClient с подменённым клиентом внешнего API."""
    from admin.backend.dependencies import get_vet_client
    from admin.backend.main import app

    app.dependency_overrides[get_vet_client] = lambda: vet_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client: TestClient) -> dict[str, str]:
    response = client.post("/api/auth/login", json={"username": "admin", "password": "admin123"})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
