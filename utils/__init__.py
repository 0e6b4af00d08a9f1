"""
Utilitários compartilhados para processamento com LLMs.

Módulos:
- common: Funções auxiliares genéricas (logging, tokens, texto da resposta)
- json_repair: Limpeza de blocos markdown e parse do JSON do modelo
"""

from utils.common import (
    sanitize_for_log,
    message_text,
    extract_and_record_token_usage,
)

from utils.json_repair import (
    strip_code_fences,
    parse_model_json,
    parse_model_json_object,
)

__all__ = [
    # Common utilities
    "sanitize_for_log",
    "message_text",
    "extract_and_record_token_usage",

    # JSON parsing
    "strip_code_fences",
    "parse_model_json",
    "parse_model_json_object",
]
