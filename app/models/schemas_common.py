"""
Schemas internos do pipeline: resultado parcial por chunk e agregado.

Estes objetos nunca são expostos diretamente pela API; circulam entre
Chunk Analyzer, Aggregator e Premium Synthesizer dentro de uma requisição.
"""

import json
import math
from typing import Any, List
from pydantic import BaseModel, ConfigDict, Field


def _coerce_percentage(value: Any) -> float:
    """Número da resposta do modelo; ausente ou não numérico vale 0."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip().rstrip("%"))
        except ValueError:
            return 0.0
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def _coerce_list(value: Any) -> List[str]:
    """Lista da resposta do modelo; ausente ou não-lista vale []."""
    if not isinstance(value, list):
        return []
    return [item if isinstance(item, str) else str(item) for item in value]


class PartialResult(BaseModel):
    """
    Extração leve de um chunk: percentuais estimados e listas qualitativas.

    Os percentuais são estimativas do modelo (0-100) e não precisam somar 100.
    Imutável após a criação.

    Attributes:
        pos (float): Percentual positivo estimado.
        neg (float): Percentual negativo estimado.
        neu (float): Percentual neutro estimado.
        praise (List[str]): Elogios curtos.
        pain (List[str]): Pontos de dor curtos.
        themes (List[str]): Temas da audiência.
    """
    model_config = ConfigDict(frozen=True)

    pos: float = 0.0
    neg: float = 0.0
    neu: float = 0.0
    praise: List[str] = Field(default_factory=list)
    pain: List[str] = Field(default_factory=list)
    themes: List[str] = Field(default_factory=list)

    @classmethod
    def fallback(cls) -> "PartialResult":
        """Registro zerado usado quando a resposta do chunk não é JSON válido."""
        return cls()

    @classmethod
    def from_model_output(cls, data: dict) -> "PartialResult":
        """
        Constrói o resultado a partir do JSON do modelo, sem validação de schema.

        Campos ausentes ou de tipo inesperado são tratados como zero / lista vazia.
        """
        return cls(
            pos=_coerce_percentage(data.get("pos")),
            neg=_coerce_percentage(data.get("neg")),
            neu=_coerce_percentage(data.get("neu")),
            praise=_coerce_list(data.get("praise")),
            pain=_coerce_list(data.get("pain")),
            themes=_coerce_list(data.get("themes")),
        )


class Aggregate(BaseModel):
    """
    Fusão dos resultados parciais de todos os chunks de uma requisição.

    Serializado com chaves camelCase (posAvg, negAvg, neuAvg) dentro do prompt premium.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    pos_avg: float = Field(alias="posAvg")
    neg_avg: float = Field(alias="negAvg")
    neu_avg: float = Field(alias="neuAvg")
    praise: List[str] = Field(default_factory=list)
    pain: List[str] = Field(default_factory=list)
    themes: List[str] = Field(default_factory=list)

    def to_prompt_json(self) -> str:
        """JSON compacto com as chaves camelCase, para embutir no prompt."""
        return json.dumps(
            self.model_dump(by_alias=True),
            ensure_ascii=False,
            separators=(",", ":"),
        )
