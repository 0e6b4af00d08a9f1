"""
Aggregator: funde os resultados parciais de todos os chunks.

A média é simples (não ponderada pelo tamanho do chunk): um último chunk
com menos de 100 comentários pesa o mesmo que os demais.
"""

from typing import List, Sequence

from app.models.schemas_common import Aggregate, PartialResult


def _mean(values: List[float]) -> float:
    return sum(values) / len(values)


def aggregate_partials(partials: Sequence[PartialResult]) -> Aggregate:
    """
    Calcula as médias de pos/neg/neu e concatena praise/pain/themes na ordem dos chunks.

    Duplicatas são mantidas.

    Raises:
        ValueError: Se não houver resultados parciais.
    """
    if not partials:
        raise ValueError("aggregate_partials requer ao menos um resultado parcial")

    return Aggregate(
        pos_avg=_mean([p.pos for p in partials]),
        neg_avg=_mean([p.neg for p in partials]),
        neu_avg=_mean([p.neu for p in partials]),
        praise=[item for p in partials for item in p.praise],
        pain=[item for p in partials for item in p.pain],
        themes=[item for p in partials for item in p.themes],
    )
