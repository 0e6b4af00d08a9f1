"""
Router do endpoint POST /analyze.

Recebe uma lista de comentários, executa o pipeline de análise
(chunks em paralelo + síntese premium) e devolve o relatório no envelope
`{"success": true, "data": ...}`.
"""

import time
import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Body, Depends, Request, status
from fastapi.responses import JSONResponse

from app.analyzers import run_analysis_pipeline
from app.dependencies import get_llm_client
from app.metrics.collectors import record_api_error
from app.models.schemas_analyze import AnalyzeRequest, AnalyzeResponse, ErrorResponse
from llm.gemini_client import LLMClient

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Analysis"])


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(exclude_none=True),
    )


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    status_code=status.HTTP_200_OK,
    summary="Analisa sentimento e insights de um lote de comentários",
    responses={
        400: {"model": ErrorResponse, "description": "Lista de comentários ausente ou vazia"},
        500: {"model": ErrorResponse, "description": "Falha no modelo ou na síntese"},
    },
)
async def analyze_comments(
    request: Request,
    llm_client: Annotated[LLMClient, Depends(get_llm_client)],
    body: Annotated[Optional[AnalyzeRequest], Body()] = None,
):
    """
    Analisa um lote de comentários.

    **Respostas:**

    - 200: `{"success": true, "data": <relatório premium>}`
    - 400: `{"success": false, "error": "No comments"}` (lista ausente ou vazia)
    - 500: `{"success": false, "error": "<mensagem>"}` (falha no modelo ou síntese inválida)

    Os percentuais do relatório (positivePercentage, negativePercentage,
    neutralPercentage) são sempre as médias arredondadas dos chunks,
    nunca os valores sugeridos pelo modelo na síntese.

    Example:
        ```bash
        curl -X POST http://localhost:3000/analyze \\
          -H "Content-Type: application/json" \\
          -d '{"comments": ["Amei o vídeo!", "Áudio ruim no final"]}'
        ```
    """
    start_time = time.time()
    request_id = getattr(request.state, "request_id", "-")
    comments = body.comments if body is not None else None

    if not comments:
        logger.warning(f"[{request_id}] POST /analyze rejeitado | motivo=no_comments")
        record_api_error("no_comments", status.HTTP_400_BAD_REQUEST)
        return error_response(status.HTTP_400_BAD_REQUEST, "No comments")

    logger.info(f"[{request_id}] POST /analyze received | comments={len(comments)}")

    try:
        report = await run_analysis_pipeline(comments, llm_client, request_id=request_id)

    except Exception as e:
        logger.error(
            f"[ERROR] [{request_id}] ❌ ANALYSIS ERROR | "
            f"type={type(e).__name__} | "
            f"duration={time.time() - start_time:.2f}s | "
            f"error={str(e)[:200]}"
        )
        record_api_error(type(e).__name__, status.HTTP_500_INTERNAL_SERVER_ERROR)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))

    logger.info(
        f"[{request_id}] Análise concluída com sucesso | "
        f"duration={time.time() - start_time:.2f}s | "
        f"positive={report.get('positivePercentage')} | "
        f"negative={report.get('negativePercentage')} | "
        f"neutral={report.get('neutralPercentage')}"
    )
    return AnalyzeResponse(data=report)
