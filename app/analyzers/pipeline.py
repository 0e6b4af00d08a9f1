"""
Orquestração do pipeline de análise de comentários.

Fluxo por requisição (sem estado compartilhado entre requisições):
1. Chunker: lotes de até 100 comentários
2. Chunk Analyzer: todos os chunks em paralelo (asyncio.gather)
3. Aggregator: médias simples + concatenação das listas
4. Premium Synthesizer: relatório final com percentuais sobrescritos
"""

import time
import asyncio
import logging
from typing import Any, Dict, List

from app.analyzers.aggregator import aggregate_partials
from app.analyzers.chunk_analyzer import analyze_chunk
from app.analyzers.chunker import CHUNK_SIZE, chunk_comments
from app.analyzers.synthesizer import synthesize_report
from app.metrics.collectors import record_analysis_duration, record_request_shape
from llm.gemini_client import LLMClient


logger = logging.getLogger(__name__)


async def run_analysis_pipeline(
    comments: List[str],
    llm_client: LLMClient,
    request_id: str = "-"
    ) -> Dict[str, Any]:
    """
    Executa as quatro etapas para uma lista de comentários.

    Resiliência:
    - Chunk com resposta inválida: substituído pelo registro zerado
    - Síntese com resposta inválida: SynthesisParseError (fatal)
    - Falha na chamada ao modelo em qualquer etapa: propaga (fatal)

    Args:
        comments: Comentários (não vazio; a validação fica no router)
        llm_client: Cliente do modelo (injetado)
        request_id: ID de correlação para logs

    Returns:
        Dict[str, Any]: Relatório premium

    Raises:
        ValueError: Se `comments` estiver vazio
        SynthesisParseError: Se a síntese não retornar JSON válido
        Exception: Erros da chamada ao modelo
    """
    if not comments:
        raise ValueError("run_analysis_pipeline requer ao menos um comentário")

    start = time.time()
    chunks = chunk_comments(comments, CHUNK_SIZE)
    record_request_shape(len(comments), len(chunks))

    logger.info(
        f"[ANALYZE] [{request_id}] 🚀 Pipeline iniciado | "
        f"comments={len(comments)} | chunks={len(chunks)} | chunk_size={CHUNK_SIZE}"
    )

    # Barreira: aguarda todos os chunks antes de agregar
    partials = await asyncio.gather(*(
        analyze_chunk(chunk, llm_client, request_id=request_id, chunk_index=index)
        for index, chunk in enumerate(chunks)
    ))

    aggregate = aggregate_partials(partials)
    logger.info(
        f"[ANALYZE] [{request_id}] 📊 Chunks agregados | "
        f"posAvg={aggregate.pos_avg:.2f} | negAvg={aggregate.neg_avg:.2f} | "
        f"neuAvg={aggregate.neu_avg:.2f} | chunks_duration={time.time() - start:.2f}s"
    )

    report = await synthesize_report(aggregate, llm_client, request_id=request_id)

    duration = time.time() - start
    record_analysis_duration(duration)
    logger.info(
        f"[ANALYZE] [{request_id}] 🎉 Pipeline concluído | "
        f"duration={duration:.2f}s | report_fields={len(report)}"
    )
    return report
