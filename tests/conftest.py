"""
Fixtures compartilhadas: dublê do modelo externo e geradores de comentários.

Nenhum teste acessa a rede: o FakeLLMClient implementa o mesmo contrato
do GeminiClient (`async generate(prompt, request_id) -> str`).
"""

import json
from typing import Any, Callable, List, Union

import pytest


CHUNK_MARKER = "Analyze these YouTube comments"
PREMIUM_MARKER = "You are a YouTube audience intelligence engine"

Reply = Union[str, Exception, Callable[[str], str]]


class FakeLLMClient:
    """
    Responde conforme a etapa identificada no prompt e registra cada chamada.

    `chunk_reply` e `premium_reply` podem ser uma string fixa, uma exceção
    (levantada na chamada) ou uma função prompt -> resposta.
    """

    def __init__(self, chunk_reply: Reply, premium_reply: Reply):
        self.chunk_reply = chunk_reply
        self.premium_reply = premium_reply
        self.prompts: List[str] = []
        self.request_ids: List[str] = []

    @property
    def chunk_prompts(self) -> List[str]:
        return [p for p in self.prompts if PREMIUM_MARKER not in p]

    @property
    def premium_prompts(self) -> List[str]:
        return [p for p in self.prompts if PREMIUM_MARKER in p]

    async def generate(self, prompt: str, request_id: str = "-") -> str:
        self.prompts.append(prompt)
        self.request_ids.append(request_id)
        reply = self.premium_reply if PREMIUM_MARKER in prompt else self.chunk_reply
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(prompt)
        return reply


def chunk_json(pos: float, neg: float, neu: float, **lists: Any) -> str:
    """Resposta de chunk no formato pedido pelo prompt."""
    return json.dumps({
        "pos": pos,
        "neg": neg,
        "neu": neu,
        "praise": lists.get("praise", []),
        "pain": lists.get("pain", []),
        "themes": lists.get("themes", []),
    })


def premium_json(**overrides: Any) -> str:
    """Relatório premium completo; percentuais propositalmente 'errados' (99/1/0)."""
    report = {
        "positivePercentage": 99,
        "negativePercentage": 1,
        "neutralPercentage": 0,
        "sentimentSummary_premium": "Audience is broadly enthusiastic.",
        "actionableInsight_premium": "Fix the audio mix before the next upload.",
        "topPraise_premium": ["editing", "pacing"],
        "topPainPoints_premium": ["audio levels"],
        "strategicOpportunity": "Lean into tutorial-style content.",
        "audienceDeepProfile": "Hobbyist creators in their twenties.",
        "contentIdeas": ["behind the scenes"],
        "engagementPatterns": ["timestamps in replies"],
    }
    report.update(overrides)
    return json.dumps(report)


def make_comments(count: int) -> List[str]:
    """Comentários únicos e ordenáveis: comment-000, comment-001, ..."""
    return [f"comment-{i:03d}" for i in range(count)]


@pytest.fixture
def fake_llm_factory() -> Callable[..., FakeLLMClient]:
    def _factory(chunk_reply: Reply = None, premium_reply: Reply = None) -> FakeLLMClient:
        return FakeLLMClient(
            chunk_reply=chunk_reply if chunk_reply is not None else chunk_json(60, 20, 20),
            premium_reply=premium_reply if premium_reply is not None else premium_json(),
        )
    return _factory
