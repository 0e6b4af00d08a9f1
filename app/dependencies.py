from fastapi import Request

from llm.gemini_client import LLMClient


def get_llm_client(request: Request) -> LLMClient:
    """
    Cliente do modelo criado no lifespan (app.state.llm_client).

    Nos testes, substitua via app.dependency_overrides[get_llm_client].
    """
    llm_client = getattr(request.app.state, "llm_client", None)
    if llm_client is None:
        raise RuntimeError("Cliente do modelo não inicializado (lifespan não executado)")
    return llm_client
