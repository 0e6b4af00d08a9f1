"""
Limpeza e parse das respostas JSON do modelo.

O modelo costuma envolver o JSON em blocos de código markdown
(```json ... ``` ou ``` ... ```), mesmo quando instruído a não fazê-lo.
Este módulo remove esses marcadores e interpreta o texto restante.

Não há reparo por LLM nem parse parcial: um JSON malformado é um erro,
e cada etapa do pipeline decide o que fazer com ele.
"""

import json
import re
from typing import Any, Dict

from app.errors import ModelOutputParseError


_JSON_FENCE = re.compile(r"```json", re.IGNORECASE)
_FENCE = "```"


def strip_code_fences(raw_output: str) -> str:
    """
    Remove todos os marcadores ```json (qualquer caixa) e ``` e apara espaços.

    Example:
        >>> strip_code_fences('```JSON\\n{"pos": 1}\\n```')
        '{"pos": 1}'
    """
    without_json_tag = _JSON_FENCE.sub("", raw_output)
    return without_json_tag.replace(_FENCE, "").strip()


def parse_model_json(raw_output: str) -> Any:
    """
    Interpreta a resposta do modelo como JSON após remover os marcadores markdown.

    Args:
        raw_output: Texto bruto retornado pelo modelo

    Returns:
        Any: Valor JSON decodificado

    Raises:
        ModelOutputParseError: Se o texto limpo não for JSON válido
    """
    cleaned = strip_code_fences(raw_output or "")
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ModelOutputParseError(
            f"Invalid JSON in model response: {e}", raw_output=raw_output
        ) from e


def parse_model_json_object(raw_output: str) -> Dict[str, Any]:
    """
    Como parse_model_json, mas exige um objeto JSON no topo.

    Raises:
        ModelOutputParseError: Se não for JSON válido ou não for um objeto
    """
    parsed = parse_model_json(raw_output)
    if not isinstance(parsed, dict):
        raise ModelOutputParseError(
            f"Model response is not a JSON object (got {type(parsed).__name__})",
            raw_output=raw_output,
        )
    return parsed
