"""
Утилиты для геометрических расчётов.

Этот модуль содержит функции для перевода координат между системами
(PDF снизу-вверх, страница сверху-вниз, растр OCR) и сортировки блоков.
"""

from __future__ import annotations
from dataclasses import replace
from typing import List, Sequence, Tuple

from ocr_translate.core.models import TextBlock


def viewport_scale(
    native_size: Tuple[float, float], ocr_size: Tuple[float, float]
) -> Tuple[float, float]:
    """
    Вычисляет коэффициенты перевода координат OCR в координаты страницы.

    Args:
        native_size: (ширина, высота) страницы при масштабе 1.0
        ocr_size: (ширина, высота) области OCR

    Returns:
        (scale_x, scale_y)
    """
    native_w, native_h = native_size
    ocr_w, ocr_h = ocr_size
    if ocr_w <= 0 or ocr_h <= 0:
        raise ValueError(f"OCR viewport must be positive: {ocr_size}")
    return native_w / ocr_w, native_h / ocr_h


def rescale_block(block: TextBlock, scale_x: float, scale_y: float) -> TextBlock:
    """
    Переводит блок из координат растра OCR в координаты страницы.

    Размер шрифта масштабируется по оси Y.
    """
    return replace(
        block,
        x=block.x * scale_x,
        y=block.y * scale_y,
        width=block.width * scale_x,
        height=block.height * scale_y,
        font_size=block.font_size * scale_y,
    )


def rescale_blocks(
    blocks: Sequence[TextBlock],
    native_size: Tuple[float, float],
    ocr_size: Tuple[float, float],
) -> List[TextBlock]:
    """Масштабирует все блоки страницы из растра OCR в координаты страницы."""
    sx, sy = viewport_scale(native_size, ocr_size)
    return [rescale_block(b, sx, sy) for b in blocks]


def pdf_to_top_left_y(
    page_height: float, transform_y: float, run_height: float, scale: float
) -> float:
    """
    Верхняя координата фрагмента текстового слоя.

    Переводит базовую линию из системы PDF (начало снизу слева)
    в верх блока в системе страницы (начало сверху слева).
    """
    return page_height - transform_y - max(run_height, abs(scale))


def baseline_origin(
    block: TextBlock, page_height: float, baseline_ratio: float
) -> Tuple[float, float]:
    """
    Точка отрисовки блока в системе PDF (начало снизу слева).

    Базовая линия смещена на baseline_ratio высоты блока от его верха.
    """
    return block.x, page_height - block.y - block.height * baseline_ratio


def sort_blocks_reading_order(blocks: Sequence[TextBlock]) -> List[TextBlock]:
    """Сортирует блоки в порядке чтения (сверху вниз, слева направо)."""
    return sorted(blocks, key=lambda b: (b.y, b.x))
