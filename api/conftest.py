"""Pytest configuration and fixtures for the brand kit API."""

import json
import sys
from contextlib import ExitStack
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select

# Add the api directory to Python path
api_dir = Path(__file__).parent
sys.path.insert(0, str(api_dir))

from brandkit.core.config import Settings
from brandkit.main import create_app
from brandkit.models.records import BrandKitRecord, BrandProject
from brandkit.services.db import Database


class FakeCompletionsClient:
    """Stands in for CompletionsClient: returns canned text or raises, and records calls."""

    def __init__(self, text: str = "", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    async def complete(self, messages, model, temperature, max_tokens) -> str:
        self.calls.append({
            "messages": messages,
            "model": model,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        if self.error is not None:
            raise self.error
        return self.text

    async def health_check(self) -> bool:
        return True

    async def aclose(self) -> None:
        return None


@pytest.fixture
def sample_kit() -> Dict[str, Any]:
    """A kit that satisfies the studio contract."""
    return {
        "taglines": ["Brew the future", "Roasted with intent", "Every cup, a constellation"],
        "logo_svg": "<svg width='260' height='100' viewBox='0 0 260 100' xmlns='http://www.w3.org/2000/svg'><circle cx='40' cy='50' r='24' fill='#F5B700'/><text x='80' y='60' fill='#FFFFFF'>Nova</text></svg>",
        "logo_description": "A rising sun disc beside a clean geometric wordmark.",
        "colors": [
            {"role": "primary", "name": "Solar Gold", "hex": "#F5B700"},
            {"role": "secondary", "name": "Night Roast", "hex": "#1B1B1E"},
            {"role": "accent", "name": "Ember", "hex": "#E4572E"},
            {"role": "neutral", "name": "Foam", "hex": "#F4F1EA"},
            {"role": "neutral", "name": "Ash", "hex": "#8D8D92"},
        ],
        "fonts": {"heading": "Space Grotesk", "body": "Inter"},
        "instagram_bio": "Small-batch coffee for night owls.",
        "captions": ["New roast just landed.", "Fuel for late ideas.", "Meet the team behind the beans."],
    }


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        service_env="test",
        log_level="DEBUG",
        openai_api_key="test-key",
        database_url="sqlite://",
        generation_profile="studio",
        strict_kit_validation=False,
        cors_allow_origins=None,
    )


@pytest.fixture
def database() -> Generator[Database, None, None]:
    """Fresh in-memory SQLite database with tables created."""
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def fake_completions(sample_kit) -> FakeCompletionsClient:
    return FakeCompletionsClient(text=json.dumps(sample_kit))


@pytest.fixture
def row_counts(database):
    """Callable returning (project_rows, kit_rows)."""
    def _counts():
        with database.session() as session:
            projects = session.execute(select(func.count()).select_from(BrandProject)).scalar_one()
            kits = session.execute(select(func.count()).select_from(BrandKitRecord)).scalar_one()
        return projects, kits
    return _counts


@pytest.fixture
def make_client(test_settings, database, fake_completions):
    """Factory building a started TestClient; keyword overrides replace settings fields or handles."""
    stack = ExitStack()

    def _make(completions=None, **settings_overrides) -> TestClient:
        cfg = Settings(**{**test_settings.__dict__, **settings_overrides})
        app = create_app(cfg, database=database, completions_client=completions or fake_completions)
        return stack.enter_context(TestClient(app, raise_server_exceptions=False))

    yield _make
    stack.close()


@pytest.fixture
def client(make_client) -> TestClient:
    """Create a started test client for the FastAPI app."""
    return make_client()
