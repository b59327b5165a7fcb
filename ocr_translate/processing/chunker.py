"""
Разбиение размеченного текста на чанки ограниченного размера.

Границы чанков всегда совпадают с разделителями блоков: блок никогда не
режется посередине, чтобы не разорвать маркер PRESERVE или предложение.
"""

from __future__ import annotations
from typing import List

from ocr_translate.core.config import BLOCK_SEPARATOR


def chunk_text(
    marked_text: str, max_length: int, separator: str = BLOCK_SEPARATOR
) -> List[str]:
    """
    Жадно собирает блоки в чанки длиной не более max_length.

    Блок добавляется к текущему чанку, пока длина чанка вместе с разделителем
    не превышает max_length; иначе текущий чанк закрывается и блок начинает
    новый. Блок длиннее max_length становится отдельным чанком.

    separator.join(result) всегда воспроизводит marked_text.

    Args:
        marked_text: Текст с блоками, разделёнными separator
        max_length: Максимальная длина чанка
        separator: Разделитель блоков

    Returns:
        Список чанков
    """
    if max_length <= 0:
        raise ValueError(f"max_length must be positive, got {max_length}")

    if not marked_text:
        return []

    chunks: List[str] = []
    current: List[str] = []
    current_len = 0

    for block in marked_text.split(separator):
        added = len(block) + (len(separator) if current else 0)

        if current and current_len + added > max_length:
            chunks.append(separator.join(current))
            current = [block]
            current_len = len(block)
            continue

        current.append(block)
        current_len += added

    if current:
        chunks.append(separator.join(current))

    return chunks


def count_blocks(chunk: str, separator: str = BLOCK_SEPARATOR) -> int:
    """Количество логических блоков в чанке."""
    return chunk.count(separator) + 1
