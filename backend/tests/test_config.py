"""
Tests for environment-driven settings.
"""

import pytest
from pydantic import ValidationError

from bookshelf.core.config import Settings


def test_settings_read_prefixed_environment(monkeypatch):
    monkeypatch.setenv("BOOKSHELF_DATABASE_URL", "sqlite+aiosqlite:///./books.db")
    monkeypatch.setenv("BOOKSHELF_SECRET_KEY", "s3cret")
    monkeypatch.setenv("BOOKSHELF_ALLOWED_ORIGINS", "http://a.example, http://b.example")

    settings = Settings(_env_file=None)

    assert settings.database_url == "sqlite+aiosqlite:///./books.db"
    assert settings.allowed_origins == ["http://a.example", "http://b.example"]
    assert settings.access_token_expire_seconds == 3600
    assert settings.docs_url == "/api-docs"


def test_database_url_and_secret_are_required(monkeypatch):
    monkeypatch.delenv("BOOKSHELF_DATABASE_URL", raising=False)
    monkeypatch.delenv("BOOKSHELF_SECRET_KEY", raising=False)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_docs_are_served(client):
    assert client.get("/api-docs").status_code == 200
    schema = client.get("/openapi.json").json()
    assert {"/books", "/books/{bookid}", "/register", "/login", "/me"} <= set(schema["paths"])
