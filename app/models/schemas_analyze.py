"""
Schemas do endpoint POST /analyze: requisição e envelopes de resposta.

O relatório premium (`data`) é repassado como um mapeamento JSON: só os três
campos de percentual são reescritos pelo serviço, o resto vem do modelo.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


# Campos que o prompt premium exige do modelo
REPORT_FIELDS = (
    "positivePercentage",
    "negativePercentage",
    "neutralPercentage",
    "sentimentSummary_premium",
    "actionableInsight_premium",
    "topPraise_premium",
    "topPainPoints_premium",
    "strategicOpportunity",
    "audienceDeepProfile",
    "contentIdeas",
    "engagementPatterns",
)

# Campos sobrescritos com as médias locais dos chunks
PERCENTAGE_FIELDS = (
    "positivePercentage",
    "negativePercentage",
    "neutralPercentage",
)


class AnalyzeRequest(BaseModel):
    """
    Corpo da requisição POST /analyze.

    Exemplo:
    ```json
    {"comments": ["Amei o vídeo!", "Áudio muito baixo", "Primeiro!"]}
    ```

    Attributes:
        comments (Optional[List[str]]): Comentários dos usuários. Ausente ou
            vazio resulta em 400 "No comments" (verificado no router).
    """
    comments: Optional[List[str]] = None


class AnalyzeResponse(BaseModel):
    """Envelope de sucesso: `{"success": true, "data": <relatório premium>}`."""
    success: bool = True
    data: Dict[str, Any]


class ErrorResponse(BaseModel):
    """Envelope de erro: `{"success": false, "error": "<mensagem>"}`."""
    success: bool = False
    error: str
    details: Optional[List[Dict[str, Any]]] = Field(
        default=None,
        description="Erros de validação do corpo (apenas em 422)",
    )
