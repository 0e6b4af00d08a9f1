"""
Schemas Pydantic do serviço.

- schemas_common: objetos internos do pipeline (PartialResult, Aggregate)
- schemas_analyze: contrato HTTP do /analyze (AnalyzeRequest, envelopes)
"""

from app.models.schemas_common import (
    PartialResult,
    Aggregate,
)

from app.models.schemas_analyze import (
    AnalyzeRequest,
    AnalyzeResponse,
    ErrorResponse,
    REPORT_FIELDS,
    PERCENTAGE_FIELDS,
)

__all__ = [
    # Pipeline
    "PartialResult",
    "Aggregate",
    # HTTP
    "AnalyzeRequest",
    "AnalyzeResponse",
    "ErrorResponse",
    "REPORT_FIELDS",
    "PERCENTAGE_FIELDS",
]
