"""
Funções auxiliares compartilhadas pelo cliente do modelo e pelo pipeline.

Funções disponíveis:
- sanitize_for_log: Truncamento de textos (comentários, respostas) para logs
- extract_and_record_token_usage: Extração de tokens da resposta do LLM
- message_text: Conteúdo textual de uma mensagem do LangChain
"""

import logging
from typing import Any

# Métricas Prometheus
from app.metrics.collectors import record_llm_tokens


logger = logging.getLogger(__name__)


def sanitize_for_log(text: str, max_chars: int = 300) -> str:
    """
    Trunca um texto para log (comentários de usuários ou resposta bruta do modelo).

    Args:
        text: Texto completo
        max_chars: Número máximo de caracteres mantidos (padrão: 300)

    Returns:
        str: Texto truncado com indicador do tamanho original

    Example:
        >>> sanitize_for_log("a" * 500, 10)
        'aaaaaaaaaa... (truncado, total: 500 chars)'
    """
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + f"... (truncado, total: {len(text)} chars)"


def message_text(message: Any) -> str:
    """
    Extrai o texto de uma resposta do LangChain (AIMessage).

    O conteúdo pode ser uma string ou uma lista de partes (dicts com "text"
    ou strings); as partes textuais são concatenadas.
    """
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type", "text") == "text":
                parts.append(str(part.get("text", "")))
        return "".join(parts)
    return str(content)


def extract_and_record_token_usage(raw_response: Any, model: str, request_id: str) -> None:
    """
    Extrai o uso de tokens da resposta do LLM e registra nas métricas Prometheus.

    Suporta os dois formatos expostos pelo LangChain:
    - usage_metadata: {"input_tokens", "output_tokens", "total_tokens"}
    - response_metadata["token_usage"]: {"prompt_tokens", "completion_tokens", "total_tokens"}

    Erros aqui nunca interrompem a análise: são apenas logados.

    Args:
        raw_response: Resposta bruta do LLM (AIMessage)
        model: Nome do modelo usado
        request_id: ID de correlação para logs
    """
    try:
        prompt_tokens = completion_tokens = total_tokens = 0

        usage = getattr(raw_response, "usage_metadata", None)
        if usage:
            prompt_tokens = usage.get("input_tokens", 0)
            completion_tokens = usage.get("output_tokens", 0)
            total_tokens = usage.get("total_tokens", 0)
        else:
            metadata = getattr(raw_response, "response_metadata", None) or {}
            token_usage = metadata.get("token_usage") or {}
            prompt_tokens = token_usage.get("prompt_tokens", 0)
            completion_tokens = token_usage.get("completion_tokens", 0)
            total_tokens = token_usage.get("total_tokens", 0)

        if total_tokens > 0:
            record_llm_tokens(model, prompt_tokens, completion_tokens, total_tokens)
            logger.debug(
                f"[{request_id}] 💰 Tokens registrados: {total_tokens} total "
                f"(prompt: {prompt_tokens}, completion: {completion_tokens})"
            )
        else:
            logger.debug(f"[{request_id}] Token usage não encontrado na resposta")

    except Exception as e:
        logger.error(f"[{request_id}] ❌ Erro ao extrair tokens: {e}")
