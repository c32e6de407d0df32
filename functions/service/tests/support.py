"""
Shared wiring for the route tests: a fresh in-memory store and settings with
every provider key unset unless a test passes one.
"""

from fastapi.testclient import TestClient

from service.app import create_app
from service.config import Settings, get_settings
from service.db import InMemoryDbClient
from service.dependencies import get_db_client


def offline_settings(**overrides) -> Settings:
    values = dict(
        use_in_memory_backends=True,
        database_url=None,
        openai_api_key=None,
        claude_api_key=None,
        grok_api_key=None,
        google_vision_api_key=None,
        pdf_co_api_key=None,
        youtube_api_key=None,
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_client(db: InMemoryDbClient, **settings_overrides) -> TestClient:
    settings = offline_settings(**settings_overrides)
    app = create_app()
    app.dependency_overrides[get_db_client] = lambda: db
    app.dependency_overrides[get_settings] = lambda: settings
    return TestClient(app)
