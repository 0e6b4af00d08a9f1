"""
Chunk Analyzer: extração leve de sentimento e temas para um lote de comentários.

Uma chamada ao modelo por chunk, sem retry. Respostas que não são um objeto
JSON válido viram o registro zerado (PartialResult.fallback): um chunk ruim
nunca derruba a requisição. Já falhas da própria chamada ao modelo propagam.
"""

import logging
from typing import List

from app.analyzers.prompts import build_chunk_prompt
from app.errors import ModelOutputParseError
from app.metrics.collectors import record_chunk_parse_failure
from app.models.schemas_common import PartialResult
from llm.gemini_client import LLMClient
from utils import parse_model_json_object, sanitize_for_log


logger = logging.getLogger(__name__)


async def analyze_chunk(
    chunk: List[str],
    llm_client: LLMClient,
    request_id: str = "-",
    chunk_index: int = 0
    ) -> PartialResult:
    """
    Analisa um chunk e retorna o resultado parcial.

    Args:
        chunk: Comentários do lote (1 a 100)
        llm_client: Cliente do modelo (injetado)
        request_id: ID de correlação para logs
        chunk_index: Posição do chunk na requisição (apenas para logs)

    Returns:
        PartialResult: Resultado do modelo, ou o registro zerado se a
        resposta não for um objeto JSON válido.

    Raises:
        Exception: Erros da chamada ao modelo (rede, quota, autenticação).
    """
    prompt = build_chunk_prompt(chunk)
    logger.debug(
        f"[CHUNK] [{request_id}] Enviando chunk | "
        f"chunk={chunk_index} | comments={len(chunk)} | prompt_chars={len(prompt)}"
    )

    raw_output = await llm_client.generate(prompt, request_id=request_id)

    try:
        parsed = parse_model_json_object(raw_output)
    except ModelOutputParseError as e:
        logger.warning(
            f"[CHUNK] [{request_id}] ⚠️ Chunk parse error, usando registro zerado | "
            f"chunk={chunk_index} | "
            f"erro={e} | "
            f"raw={sanitize_for_log(raw_output or '', 300)}"
        )
        logger.debug(f"[CHUNK] [{request_id}] Resposta bruta completa (chunk={chunk_index}): {raw_output}")
        record_chunk_parse_failure()
        return PartialResult.fallback()

    partial = PartialResult.from_model_output(parsed)
    logger.debug(
        f"[CHUNK] [{request_id}] ✅ Chunk analisado | "
        f"chunk={chunk_index} | "
        f"pos={partial.pos} | neg={partial.neg} | neu={partial.neu} | "
        f"praise={len(partial.praise)} | pain={len(partial.pain)} | themes={len(partial.themes)}"
    )
    return partial
