"""
Реконструкция переведённого PDF.

Для каждой исходной страницы создаётся страница того же размера, и
переведённый текст каждого блока рисуется в исходной позиции. Исходные
макеты не изменяются: строится новый документ.
"""

from __future__ import annotations
import logging
from typing import Dict, List, Mapping, Sequence

try:
    import pymupdf
except ImportError:
    import fitz as pymupdf  # type: ignore

from ocr_translate.core.config import (
    BASELINE_RATIO,
    FLOW_FONT_SIZE,
    FLOW_MARGIN,
    FONT_SHRINK_FACTOR,
    MIN_FONT_SIZE,
    OUTPUT_FONT,
    OUTPUT_TEXT_COLOR,
)
from ocr_translate.core.exceptions import BlockDrawError
from ocr_translate.core.models import DrawCall, PageDrawPlan, PageLayout, TextBlock
from ocr_translate.utils.geometry import baseline_origin, sort_blocks_reading_order


def resolve_text(block: TextBlock, translation_map: Mapping[str, str]) -> str:
    """Перевод блока по точному совпадению trimmed текста, иначе оригинал."""
    return translation_map.get(block.text.strip(), block.text)


def fit_font_size(font_size: float) -> float:
    """Немного уменьшает шрифт, чтобы перевод реже выходил за рамки блока."""
    return max(MIN_FONT_SIZE, font_size * FONT_SHRINK_FACTOR)


def plan_page_draws(
    layout: PageLayout, translation_map: Mapping[str, str]
) -> PageDrawPlan:
    """
    Строит план отрисовки страницы.

    Пустые (после перевода) блоки пропускаются. Координаты DrawCall -
    в системе PDF (начало снизу слева) с базовой линией на 80% высоты блока.

    Args:
        layout: Исходный макет страницы
        translation_map: Карта оригинал -> перевод

    Returns:
        PageDrawPlan того же размера, что и исходная страница
    """
    plan = PageDrawPlan(width=layout.width, height=layout.height)

    for block in layout.blocks:
        text = resolve_text(block, translation_map)
        if not text.strip():
            continue

        x, y = baseline_origin(block, layout.height, BASELINE_RATIO)
        plan.draws.append(
            DrawCall(text=text, x=x, y=y, size=fit_font_size(block.font_size), font=OUTPUT_FONT)
        )

    return plan


def plan_page_flow(
    layout: PageLayout, translation_map: Mapping[str, str]
) -> List[str]:
    """Переведённые строки страницы в порядке чтения (режим без макета)."""
    lines: List[str] = []
    for block in sort_blocks_reading_order(layout.blocks):
        text = resolve_text(block, translation_map)
        if text.strip():
            lines.append(text.strip())
    return lines


def _draw(page: "pymupdf.Page", draw: DrawCall, page_height: float) -> None:
    try:
        # PyMuPDF использует систему с началом сверху слева
        page.insert_text(
            (draw.x, page_height - draw.y),
            draw.text,
            fontsize=draw.size,
            fontname=draw.font,
            color=OUTPUT_TEXT_COLOR,
        )
    except Exception as e:
        raise BlockDrawError(f"{draw.text[:40]!r}: {e}") from e


def write_pdf(plans: Sequence[PageDrawPlan]) -> bytes:
    """
    Сериализует планы отрисовки в PDF.

    Ошибка отрисовки отдельного блока логируется, блок пропускается.

    Returns:
        Байты PDF
    """
    doc = pymupdf.open()

    try:
        for pno, plan in enumerate(plans, start=1):
            page = doc.new_page(width=plan.width, height=plan.height)

            for draw in plan.draws:
                try:
                    _draw(page, draw, plan.height)
                except BlockDrawError as e:
                    logging.warning("Страница %d: блок пропущен: %s", pno, e)

        return doc.tobytes(garbage=4, deflate=True)

    finally:
        doc.close()


def _write_flow_pdf(layouts: Sequence[PageLayout], translation_map: Mapping[str, str]) -> bytes:
    doc = pymupdf.open()

    try:
        for pno, layout in enumerate(layouts, start=1):
            page = doc.new_page(width=layout.width, height=layout.height)
            lines = plan_page_flow(layout, translation_map)
            if not lines:
                continue

            rect = pymupdf.Rect(
                FLOW_MARGIN, FLOW_MARGIN, layout.width - FLOW_MARGIN, layout.height - FLOW_MARGIN
            )
            rc = page.insert_textbox(
                rect,
                "\n".join(lines),
                fontsize=FLOW_FONT_SIZE,
                fontname=OUTPUT_FONT,
                color=OUTPUT_TEXT_COLOR,
            )
            if rc < 0:
                logging.warning("Страница %d: текст не поместился на страницу", pno)

        return doc.tobytes(garbage=4, deflate=True)

    finally:
        doc.close()


def rebuild_pdf(
    layouts: Sequence[PageLayout],
    translation_map: Dict[str, str],
    preserve_layout: bool = True,
) -> bytes:
    """
    Строит переведённый PDF по исходным макетам.

    Args:
        layouts: Макеты страниц (не изменяются)
        translation_map: Карта оригинал -> перевод
        preserve_layout: Рисовать блоки в исходных позициях; иначе текст
            страницы выводится потоком в порядке чтения

    Returns:
        Байты PDF
    """
    if not preserve_layout:
        return _write_flow_pdf(layouts, translation_map)

    return write_pdf([plan_page_draws(layout, translation_map) for layout in layouts])
