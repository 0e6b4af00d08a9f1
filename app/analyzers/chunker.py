from typing import List

CHUNK_SIZE = 100


def chunk_comments(comments: List[str], chunk_size: int = CHUNK_SIZE) -> List[List[str]]:
    """
    Divide os comentários em lotes consecutivos de no máximo `chunk_size`.

    A ordem original é preservada e cada comentário aparece em exatamente um
    lote; apenas o último lote pode ser menor. Entrada vazia gera lista vazia.

    Raises:
        ValueError: Se chunk_size < 1.
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size deve ser >= 1, recebido: {chunk_size}")
    return [
        comments[i:i + chunk_size]
        for i in range(0, len(comments), chunk_size)
    ]
