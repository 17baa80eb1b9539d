"""
Test Configuration and Fixtures
"""
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.config import Settings, get_settings
from app.main import app
from app.services.parsing_service import get_parsing_service
from app.services.summary_service import SummaryService, get_profile, get_summary_service


class FakeParser:
    """Stands in for the parsing service; records what it was asked to parse."""

    def __init__(self, pages: list[str] | None = None, fail_for: str | None = None):
        self.pages = pages if pages is not None else ["Intro to graphs", "Shortest paths"]
        self.fail_for = fail_for
        self.paths: list[Path] = []
        self.contents: list[bytes] = []

    async def parse_pages(self, path: Path) -> list[str]:
        self.paths.append(path)
        self.contents.append(path.read_bytes())
        if self.fail_for and self.fail_for in path.name:
            raise RuntimeError("parse job failed")
        return list(self.pages)


class FakeLLM:
    model = "fake-model"

    def __init__(self, reply: str = "# Resume\n- graphs", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[dict] = []

    async def chat_completion(self, messages, system_prompt=None, max_tokens=None,
                              temperature=None, top_p=None):
        self.calls.append({
            "messages": messages,
            "system_prompt": system_prompt,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "top_p": top_p,
        })
        if self.error:
            raise self.error
        return self.reply


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def uploads_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def settings(uploads_dir):
    return Settings(
        llama_cloud_api_key="llx-test",
        llm_api_key="gsk-test",
        uploads_dir=uploads_dir,
    )


@pytest.fixture
def parser():
    return FakeParser()


@pytest.fixture
def llm():
    return FakeLLM()


@pytest.fixture
def profile_name():
    return "structured"


@pytest.fixture
def client(settings, parser, llm, profile_name):
    """Test client with external services replaced by fakes."""
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_parsing_service] = lambda: parser
    app.dependency_overrides[get_summary_service] = lambda: SummaryService(
        llm, get_profile(profile_name)
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def fresh_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
