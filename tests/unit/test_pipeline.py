"""
Testes unitários do pipeline completo (com dublê do modelo).

Cenário de referência: 150 comentários → 2 chunks (100 + 50) → pos=[60, 40]
→ posAvg=50 → positivePercentage=50, independentemente do palpite do modelo.
"""

import asyncio
import json

import pytest
from openai import APIError
from unittest.mock import MagicMock

from app.analyzers.pipeline import run_analysis_pipeline
from app.errors import SynthesisParseError
from conftest import PREMIUM_MARKER, chunk_json, make_comments, premium_json


def _reply_by_first_comment(replies):
    """Responde cada chunk conforme o primeiro comentário presente no prompt."""
    def _reply(prompt: str) -> str:
        for first_comment, reply in replies.items():
            if f"1. {first_comment}\n" in prompt or prompt.rstrip().endswith(f"1. {first_comment}"):
                return reply
        raise AssertionError("prompt de chunk inesperado")
    return _reply


@pytest.mark.asyncio
async def test_150_comments_two_chunks_and_overwritten_percentages(fake_llm_factory):
    fake = fake_llm_factory(
        chunk_reply=_reply_by_first_comment({
            "comment-000": chunk_json(60, 30, 10, praise=["a"], themes=["t1"]),
            "comment-100": chunk_json(40, 20, 40, praise=["b"], pain=["p"]),
        }),
        premium_reply=premium_json(positivePercentage=12, negativePercentage=34, neutralPercentage=56),
    )

    report = await run_analysis_pipeline(make_comments(150), fake, request_id="req-150")

    assert len(fake.chunk_prompts) == 2
    assert len(fake.premium_prompts) == 1
    assert "100. comment-099" in fake.chunk_prompts[0]
    assert "50. comment-149" in fake.chunk_prompts[1]
    assert "51. " not in fake.chunk_prompts[1]

    assert report["positivePercentage"] == 50
    assert report["negativePercentage"] == 25
    assert report["neutralPercentage"] == 25

    embedded = json.loads(fake.premium_prompts[0].rstrip().split("### COMMENTS:\n", 1)[1])
    assert embedded == {
        "posAvg": 50.0, "negAvg": 25.0, "neuAvg": 25.0,
        "praise": ["a", "b"], "pain": ["p"], "themes": ["t1"],
    }
    assert set(fake.request_ids) == {"req-150"}


@pytest.mark.asyncio
@pytest.mark.parametrize("count,expected_chunks", [(1, 1), (100, 1), (101, 2), (250, 3)])
async def test_one_model_call_per_chunk_plus_synthesis(fake_llm_factory, count, expected_chunks):
    fake = fake_llm_factory()

    await run_analysis_pipeline(make_comments(count), fake)

    assert len(fake.chunk_prompts) == expected_chunks
    assert len(fake.premium_prompts) == 1


@pytest.mark.asyncio
async def test_bad_chunk_contributes_zero_record(fake_llm_factory):
    fake = fake_llm_factory(
        chunk_reply=_reply_by_first_comment({
            "comment-000": chunk_json(80, 10, 10, praise=["kept"]),
            "comment-100": "NOT JSON",
        }),
    )

    report = await run_analysis_pipeline(make_comments(150), fake)

    assert report["positivePercentage"] == 40
    assert report["negativePercentage"] == 5
    assert report["neutralPercentage"] == 5
    embedded = json.loads(fake.premium_prompts[0].rstrip().split("### COMMENTS:\n", 1)[1])
    assert embedded["praise"] == ["kept"]


@pytest.mark.asyncio
async def test_synthesis_parse_failure_aborts(fake_llm_factory):
    fake = fake_llm_factory(premium_reply="NOT JSON")

    with pytest.raises(SynthesisParseError):
        await run_analysis_pipeline(make_comments(10), fake)


@pytest.mark.asyncio
async def test_upstream_chunk_failure_aborts_before_synthesis(fake_llm_factory):
    fake = fake_llm_factory(
        chunk_reply=APIError(message="model unavailable", request=MagicMock(), body=None)
    )

    with pytest.raises(APIError):
        await run_analysis_pipeline(make_comments(10), fake)

    assert fake.premium_prompts == []


@pytest.mark.asyncio
async def test_empty_comments_rejected(fake_llm_factory):
    fake = fake_llm_factory()

    with pytest.raises(ValueError):
        await run_analysis_pipeline([], fake)

    assert fake.prompts == []


class _GateLLMClient:
    """
    Segura cada chamada de chunk até que todas as `expected` tenham começado.

    Um pipeline que aguardasse um chunk por vez nunca liberaria o portão.
    """

    def __init__(self, expected: int):
        self.expected = expected
        self.started = 0
        self.max_in_flight = 0
        self.in_flight = 0
        self.gate = asyncio.Event()

    async def generate(self, prompt: str, request_id: str = "-") -> str:
        if PREMIUM_MARKER in prompt:
            return premium_json()

        self.started += 1
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        if self.started == self.expected:
            self.gate.set()
        await self.gate.wait()
        self.in_flight -= 1
        return chunk_json(10, 20, 70)


@pytest.mark.asyncio
async def test_chunk_calls_are_dispatched_concurrently():
    client = _GateLLMClient(expected=3)

    report = await asyncio.wait_for(
        run_analysis_pipeline(make_comments(250), client), timeout=2.0
    )

    assert client.started == 3
    assert client.max_in_flight == 3
    assert report["positivePercentage"] == 10
    assert report["neutralPercentage"] == 70
