"""
Premium Synthesizer: relatório final a partir do agregado dos chunks.

Diferente da etapa de chunk, aqui não existe substituto razoável para uma
resposta inválida: a falha de parse propaga como SynthesisParseError.

Depois do parse, os três percentuais do relatório são SEMPRE sobrescritos
com as médias locais arredondadas. Os números que o modelo devolve nesses
campos são descartados; os demais campos (inclusive actionableInsight_premium)
são repassados sem alteração.
"""

import math
import logging
from typing import Any, Dict

from app.analyzers.prompts import build_premium_prompt
from app.errors import ModelOutputParseError, SynthesisParseError
from app.metrics.collectors import record_synthesis_parse_failure
from app.models.schemas_analyze import PERCENTAGE_FIELDS, REPORT_FIELDS
from app.models.schemas_common import Aggregate
from llm.gemini_client import LLMClient
from utils import parse_model_json_object, sanitize_for_log


logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """
    Arredonda .5 para cima (2.5 -> 3, -2.5 -> -2), sem o arredondamento bancário do round().

    Compara a parte fracionária com 0.5 em vez de somar 0.5 antes do floor,
    pois a soma arredonda valores como 0.49999999999999994 para 1.0.
    Valores não finitos viram 0, como na coerção dos percentuais dos chunks.
    """
    if not math.isfinite(value):
        return 0
    floor = math.floor(value)
    return int(floor + 1 if value - floor >= 0.5 else floor)


def apply_aggregate_percentages(report: Dict[str, Any], aggregate: Aggregate) -> Dict[str, Any]:
    """Sobrescreve os percentuais do relatório com as médias arredondadas dos chunks."""
    averages = (aggregate.pos_avg, aggregate.neg_avg, aggregate.neu_avg)
    for field, average in zip(PERCENTAGE_FIELDS, averages):
        report[field] = round_half_up(average)
    return report


async def synthesize_report(
    aggregate: Aggregate,
    llm_client: LLMClient,
    request_id: str = "-"
    ) -> Dict[str, Any]:
    """
    Gera o relatório premium.

    Args:
        aggregate: Agregado dos resultados parciais
        llm_client: Cliente do modelo (injetado)
        request_id: ID de correlação para logs

    Returns:
        Dict[str, Any]: Relatório do modelo com os percentuais sobrescritos

    Raises:
        SynthesisParseError: Se a resposta não for um objeto JSON válido
        Exception: Erros da chamada ao modelo
    """
    prompt = build_premium_prompt(aggregate)
    logger.info(
        f"[SYNTH] [{request_id}] 🧠 Iniciando síntese premium | "
        f"praise={len(aggregate.praise)} | pain={len(aggregate.pain)} | "
        f"themes={len(aggregate.themes)} | prompt_chars={len(prompt)}"
    )

    raw_output = await llm_client.generate(prompt, request_id=request_id)

    try:
        report = parse_model_json_object(raw_output)
    except ModelOutputParseError as e:
        logger.error(
            f"[SYNTH] [{request_id}] ❌ Resposta da síntese não é JSON válido | "
            f"erro={e} | "
            f"raw={sanitize_for_log(raw_output or '', 300)}"
        )
        logger.debug(f"[SYNTH] [{request_id}] Resposta bruta completa: {raw_output}")
        record_synthesis_parse_failure()
        raise SynthesisParseError(str(e), raw_output=raw_output) from e

    missing = [name for name in REPORT_FIELDS if name not in report]
    if missing:
        logger.warning(f"[SYNTH] [{request_id}] ⚠️ Relatório sem campos esperados | missing={missing}")

    model_percentages = {
        "positive": report.get("positivePercentage"),
        "negative": report.get("negativePercentage"),
        "neutral": report.get("neutralPercentage"),
    }
    apply_aggregate_percentages(report, aggregate)

    logger.info(
        f"[SYNTH] [{request_id}] ✅ Síntese concluída | "
        f"percentuais_modelo={model_percentages} | "
        f"percentuais_finais=({report['positivePercentage']}, "
        f"{report['negativePercentage']}, {report['neutralPercentage']})"
    )
    return report
