"""
PyMuPDF-based extraction of positioned text blocks.

Для каждой страницы выбирается источник текста: текстовый слой PDF
("родная" страница) или OCR растра (сканированная страница). Оба пути
дают одинаковую модель: PageLayout с TextBlock в координатах страницы.
"""

from __future__ import annotations
import logging
from typing import List, Optional, Sequence, Tuple

try:
    import pymupdf
except ImportError:
    import fitz as pymupdf  # type: ignore

from PIL import Image

from ocr_translate.api.tesseract import OCRSession
from ocr_translate.core.config import (
    DEFAULT_FONT_FAMILY,
    IMAGE_FILETYPES,
    NATIVE_TEXT_MIN_RUNS,
    OCR_FALLBACK_FONT_SIZE,
    OCR_FONT_SIZE_RATIO,
    OCR_QUALITY_PRESETS,
)
from ocr_translate.core.exceptions import DocumentParseError, OCRError
from ocr_translate.core.models import OCRBlock, PageLayout, TextBlock, TextRun
from ocr_translate.core.types import OCRQuality, ProgressCallback
from ocr_translate.processing.preprocess import optimize_for_ocr, upscale
from ocr_translate.utils.geometry import pdf_to_top_left_y, rescale_blocks
from ocr_translate.utils.metrics import Timer, log_metric, report_progress


def open_document(file_bytes: bytes, filetype: str = "pdf") -> "pymupdf.Document":
    """
    Открывает документ из памяти.

    Raises:
        DocumentParseError: Поток не является читаемым документом или пуст
    """
    try:
        doc = pymupdf.open(stream=file_bytes, filetype=filetype)
    except Exception as e:
        raise DocumentParseError(f"Не удалось открыть документ: {e}") from e

    if doc.page_count == 0:
        doc.close()
        raise DocumentParseError("Документ не содержит страниц")

    return doc


def read_text_runs(page: "pymupdf.Page") -> List[TextRun]:
    """
    Читает фрагменты текстового слоя страницы (по одному на span).

    Позиция переводится в систему PDF (начало снизу слева), как в
    матрице текста: (size, 0, 0, size, origin_x, page_height - origin_y).

    Args:
        page: PyMuPDF page объект

    Returns:
        Список TextRun
    """
    page_height = page.rect.height
    text_dict = page.get_text("dict")
    runs: List[TextRun] = []

    for block in text_dict.get("blocks", []):
        if "lines" not in block:
            continue

        for line in block["lines"]:
            for span in line.get("spans", []):
                text = span.get("text", "")
                if not text:
                    continue

                size = float(span.get("size", 0.0))
                ox, oy = span.get("origin", (span["bbox"][0], span["bbox"][3]))
                x0, y0, x1, y1 = span["bbox"]

                runs.append(
                    TextRun(
                        text=text,
                        transform=(size, 0.0, 0.0, size, float(ox), page_height - float(oy)),
                        width=max(0.0, float(x1 - x0)),
                        height=max(0.0, float(y1 - y0)),
                        font_name=span.get("font", "") or "",
                    )
                )

    return runs


def is_native_page(runs: Sequence[TextRun]) -> bool:
    """Эвристика: мало текста в слое - вероятно, скан."""
    return len(runs) > NATIVE_TEXT_MIN_RUNS


def native_blocks(
    runs: Sequence[TextRun], page_height: float, page_number: int
) -> List[TextBlock]:
    """
    Один TextBlock на фрагмент текстового слоя.

    Args:
        runs: Фрагменты текстового слоя
        page_height: Высота страницы
        page_number: Номер страницы (1-based)

    Returns:
        Блоки в координатах страницы (начало сверху слева)
    """
    blocks: List[TextBlock] = []

    for run in runs:
        scale = abs(run.transform[0])
        blocks.append(
            TextBlock(
                text=run.text,
                x=run.transform[4],
                y=pdf_to_top_left_y(page_height, run.transform[5], run.height, scale),
                width=run.width,
                height=run.height or scale,
                font_size=scale,
                font_family=run.font_name or DEFAULT_FONT_FAMILY,
                page_number=page_number,
            )
        )

    return blocks


def ocr_lines_to_blocks(ocr_blocks: Sequence[OCRBlock], page_number: int) -> List[TextBlock]:
    """
    Разворачивает иерархию OCR в один TextBlock на строку.

    Координаты остаются в системе растра OCR.
    """
    out: List[TextBlock] = []

    for block in ocr_blocks:
        for para in block.paragraphs:
            for line in para.lines:
                text = line.text.strip()
                if not text:
                    continue

                height = max(0.0, line.height)
                out.append(
                    TextBlock(
                        text=text,
                        x=line.bbox[0],
                        y=line.bbox[1],
                        width=max(0.0, line.width),
                        height=height,
                        font_size=(
                            height * OCR_FONT_SIZE_RATIO
                            if line.confidence > 0
                            else OCR_FALLBACK_FONT_SIZE
                        ),
                        font_family=DEFAULT_FONT_FAMILY,
                        page_number=page_number,
                    )
                )

    return out


def render_page(page: "pymupdf.Page", scale: float) -> Image.Image:
    """
    Растеризует страницу в PIL изображение.

    Args:
        page: Страница PyMuPDF
        scale: Масштаб относительно 72 DPI

    Returns:
        RGB изображение
    """
    mat = pymupdf.Matrix(scale, scale)
    pix = page.get_pixmap(matrix=mat, alpha=False)
    img = Image.frombytes("RGB", [pix.width, pix.height], pix.samples)
    del pix
    return img


def ocr_page(
    page: "pymupdf.Page",
    page_number: int,
    ocr_session: OCRSession,
    quality: OCRQuality = OCRQuality.MEDIUM,
) -> List[TextBlock]:
    """
    Сканированный путь: растр -> предобработка -> OCR -> координаты страницы.

    Args:
        page: Страница PyMuPDF
        page_number: Номер страницы (1-based)
        ocr_session: Сессия OCR
        quality: Уровень качества OCR

    Returns:
        Блоки в координатах страницы
    """
    preset = OCR_QUALITY_PRESETS[OCRQuality(quality)]

    image = render_page(page, preset["render_scale"])
    if preset["upscale_dpi"]:
        target_dpi, current_dpi = preset["upscale_dpi"]
        rendered = image
        image = upscale(rendered, target_dpi, current_dpi)
        if image is not rendered:
            rendered.close()

    prepared = optimize_for_ocr(image)
    ocr_size = (float(prepared.width), float(prepared.height))
    image.close()

    try:
        ocr_blocks = ocr_session.recognize(prepared)
    finally:
        prepared.close()

    blocks = ocr_lines_to_blocks(ocr_blocks, page_number)
    native_size = (page.rect.width, page.rect.height)
    return rescale_blocks(blocks, native_size, ocr_size)


def extract_layouts(
    file_bytes: bytes,
    filetype: str = "pdf",
    on_progress: Optional[ProgressCallback] = None,
    progress_range: Tuple[int, int] = (0, 100),
    ocr_session: Optional[OCRSession] = None,
    ocr_quality: OCRQuality = OCRQuality.MEDIUM,
) -> List[PageLayout]:
    """
    Извлекает макеты всех страниц документа.

    Страницы обрабатываются последовательно; в памяти одновременно находится
    не более одного растра страницы.

    Args:
        file_bytes: Содержимое файла
        filetype: Тип файла ("pdf" или расширение изображения)
        on_progress: Колбэк прогресса
        progress_range: Поддиапазон общего прогресса
        ocr_session: Сессия OCR (если None - создаётся и освобождается здесь)
        ocr_quality: Уровень качества OCR

    Returns:
        Список PageLayout в порядке страниц

    Raises:
        DocumentParseError: Документ не читается или страница не распознаётся
    """
    filetype = (filetype or "pdf").lower().lstrip(".")
    is_image = filetype in IMAGE_FILETYPES

    doc = open_document(file_bytes, filetype)
    own_session = ocr_session is None
    session = ocr_session or OCRSession()
    layouts: List[PageLayout] = []

    try:
        total = doc.page_count
        for idx in range(total):
            report_progress(on_progress, progress_range, idx, total)
            page_number = idx + 1
            page = doc[idx]
            width, height = page.rect.width, page.rect.height

            t = Timer()
            runs = [] if is_image else read_text_runs(page)

            if is_native_page(runs):
                blocks = native_blocks(runs, height, page_number)
                source = "native"
            else:
                try:
                    blocks = ocr_page(page, page_number, session, ocr_quality)
                except OCRError as e:
                    raise DocumentParseError(
                        f"Страница {page_number}: OCR не удался: {e}"
                    ) from e
                source = "ocr"

            logging.info(
                "Страница %d/%d: %s, %d блоков", page_number, total, source, len(blocks)
            )
            log_metric("extract", page=page_number, sub=source, duration_ms=t.ms(), count=len(blocks))

            layouts.append(PageLayout(width=width, height=height, blocks=blocks))

        report_progress(on_progress, progress_range, total, total)
        return layouts

    finally:
        doc.close()
        if own_session:
            session.release()
