"""
Testes de integração do ciclo de vida (lifespan).

Sem GEMINI_API_KEY a aplicação não pode iniciar: o startup falha com
ConfigurationError antes de aceitar qualquer requisição.
"""

import pytest
from fastapi.testclient import TestClient

from app.errors import ConfigurationError
from app.main import app
from llm.gemini_client import GeminiClient


@pytest.fixture
def fresh_state(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    app.state.llm_client = None
    yield monkeypatch
    app.state.llm_client = None


def test_startup_fails_without_api_key(fresh_state):
    with pytest.raises(ConfigurationError, match="GEMINI_API_KEY"):
        with TestClient(app):
            pass


def test_startup_builds_gemini_client(fresh_state):
    fresh_state.setenv("GEMINI_API_KEY", "test-key")

    with TestClient(app):
        assert isinstance(app.state.llm_client, GeminiClient)
        assert app.state.llm_client.api_key == "test-key"


def test_startup_keeps_injected_client(fresh_state, fake_llm_factory):
    fake = fake_llm_factory()
    app.state.llm_client = fake

    with TestClient(app) as client:
        response = client.post("/analyze", json={"comments": ["injected"]})

    assert response.status_code == 200
    assert app.state.llm_client is fake
    assert len(fake.prompts) == 2
