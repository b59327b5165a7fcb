"""
Конвейер перевода документа.

Этапы выполняются строго последовательно, каждый зависит от полного
результата предыдущего:
1. Проверка размера файла
2. Извлечение макетов страниц (текстовый слой или OCR)
3. Агрегация и дедупликация текста
4. Перевод чанками
5. Реконструкция PDF
"""

from __future__ import annotations
import os
import logging
from typing import List, Optional

from ocr_translate.api.lmstudio import LMStudioTranslator
from ocr_translate.api.tesseract import OCRSession
from ocr_translate.core.config import (
    CHUNK_SIZE,
    MAX_FILE_SIZE_MB,
    PROGRESS_EXTRACT_END,
    PROGRESS_REBUILD,
    PROGRESS_START,
    PROGRESS_TRANSLATE_END,
)
from ocr_translate.core.exceptions import (
    DocumentParseError,
    OversizeInputError,
    TranslationError,
)
from ocr_translate.core.models import PageLayout, ProcessedDocument, TranslationOptions
from ocr_translate.core.types import ChunkTranslator, DocumentStatus, ProgressCallback
from ocr_translate.export.docx import export_docx
from ocr_translate.export.pdf import rebuild_pdf
from ocr_translate.export.text import export_text
from ocr_translate.processing.extractors.pymupdf import extract_layouts
from ocr_translate.processing.translation import collect_unique_texts, translate_all
from ocr_translate.utils.metrics import Timer, init_metrics, log_metric, reset_metrics


def check_file_size(size_bytes: int, max_file_size_mb: float = MAX_FILE_SIZE_MB) -> None:
    """
    Отклоняет файлы больше допустимого размера.

    Raises:
        OversizeInputError: Файл превышает лимит
    """
    limit = int(max_file_size_mb * 1024 * 1024)
    if size_bytes > limit:
        raise OversizeInputError(
            f"File too large: maximum {max_file_size_mb:g}MB "
            f"({size_bytes} bytes > {limit} bytes)"
        )


def filetype_from_name(name: str) -> str:
    """Тип файла для PyMuPDF по расширению имени (по умолчанию pdf)."""
    ext = os.path.splitext(name)[1].lower().lstrip(".")
    return ext or "pdf"


class _Progress:
    """Запоминает последнее отправленное значение прогресса."""

    def __init__(self, callback: Optional[ProgressCallback] = None):
        self.callback = callback
        self.value = 0

    def __call__(self, value: int) -> None:
        value = max(self.value, min(100, int(value)))
        self.value = value
        if self.callback is not None:
            self.callback(value)


def run_pipeline(
    file_bytes: bytes,
    name: str,
    options: Optional[TranslationOptions] = None,
    translate: Optional[ChunkTranslator] = None,
    on_progress: Optional[ProgressCallback] = None,
    ocr_session: Optional[OCRSession] = None,
    max_file_size_mb: float = MAX_FILE_SIZE_MB,
    max_chunk_length: int = CHUNK_SIZE,
) -> ProcessedDocument:
    """
    Переводит документ целиком.

    Ошибки чтения, перевода и превышения размера не выбрасываются, а
    переводят результат в состояние ERROR с сообщением; прогресс замирает
    на последнем значении.

    Args:
        file_bytes: Содержимое файла (PDF или изображение)
        name: Имя исходного файла
        options: Параметры перевода
        translate: Переводчик одного чанка (по умолчанию LM Studio)
        on_progress: Колбэк прогресса 0..100
        ocr_session: Сессия OCR; если не задана, экстрактор создаёт и
            освобождает её сам
        max_file_size_mb: Лимит размера файла
        max_chunk_length: Лимит длины чанка для переводчика

    Returns:
        ProcessedDocument в состоянии COMPLETED или ERROR
    """
    options = options or TranslationOptions()
    progress = _Progress(on_progress)
    layouts: List[PageLayout] = []

    try:
        check_file_size(len(file_bytes), max_file_size_mb)
        progress(PROGRESS_START)

        translate = translate or LMStudioTranslator(
            tgt_lang=options.target_language, max_input_chars=max_chunk_length
        )

        logging.info("Шаг 1/3: анализ структуры документа %s...", name)
        t = Timer()
        layouts = extract_layouts(
            file_bytes,
            filetype=filetype_from_name(name),
            on_progress=progress,
            progress_range=(PROGRESS_START, PROGRESS_EXTRACT_END),
            ocr_session=ocr_session,
            ocr_quality=options.ocr_quality,
        )
        log_metric("extract", duration_ms=t.ms(), count=len(layouts), size_bytes=len(file_bytes))

        unique_texts = collect_unique_texts(layouts)
        logging.info("Подготовлено %d уникальных блоков текста", len(unique_texts))

        logging.info("Шаг 2/3: перевод (%s)...", options.target_language)
        t = Timer()
        translation_map = translate_all(
            unique_texts,
            options,
            translate,
            max_chunk_length=max_chunk_length,
            on_progress=progress,
            progress_range=(PROGRESS_EXTRACT_END, PROGRESS_TRANSLATE_END),
        )
        log_metric("translate", duration_ms=t.ms(), count=len(unique_texts))

        logging.info("Шаг 3/3: реконструкция PDF...")
        progress(PROGRESS_REBUILD)
        t = Timer()
        pdf_bytes = rebuild_pdf(layouts, translation_map, preserve_layout=options.preserve_layout)
        log_metric("rebuild", duration_ms=t.ms(), count=len(layouts), size_bytes=len(pdf_bytes))

    except (OversizeInputError, DocumentParseError, TranslationError) as e:
        logging.error("Ошибка обработки %s: %s", name, e)
        return ProcessedDocument(
            name=name,
            pages=layouts,
            status=DocumentStatus.ERROR,
            progress=progress.value,
            error=str(e),
        )

    progress(100)
    logging.info("Готово: %s", name)

    return ProcessedDocument(
        name=name,
        original_text="\n".join(unique_texts),
        translated_text="\n".join(translation_map[text] for text in unique_texts),
        translations=translation_map,
        pages=layouts,
        status=DocumentStatus.COMPLETED,
        progress=progress.value,
        output_pdf=pdf_bytes,
    )


def translate_file(
    input_path: str,
    out_pdf: Optional[str] = None,
    out_txt: Optional[str] = None,
    out_docx: Optional[str] = None,
    options: Optional[TranslationOptions] = None,
    translate: Optional[ChunkTranslator] = None,
    on_progress: Optional[ProgressCallback] = None,
    max_file_size_mb: float = MAX_FILE_SIZE_MB,
    metrics: bool = False,
) -> ProcessedDocument:
    """
    Переводит файл с диска и сохраняет результаты.

    Размер проверяется до чтения файла. По умолчанию PDF сохраняется рядом
    с исходным файлом как translated_<имя>.

    Args:
        input_path: Путь к PDF или изображению
        out_pdf: Путь к выходному PDF (опционально)
        out_txt: Путь к текстовому экспорту (опционально)
        out_docx: Путь к DOCX экспорту (опционально)
        options: Параметры перевода
        translate: Переводчик одного чанка
        on_progress: Колбэк прогресса
        max_file_size_mb: Лимит размера файла
        metrics: Писать CSV метрики рядом с выходным PDF

    Returns:
        ProcessedDocument
    """
    name = os.path.basename(input_path)

    try:
        check_file_size(os.path.getsize(input_path), max_file_size_mb)
    except OversizeInputError as e:
        logging.error("Файл отклонён: %s", e)
        return ProcessedDocument(name=name, status=DocumentStatus.ERROR, error=str(e))

    document = ProcessedDocument(name=name)
    out_pdf = out_pdf or os.path.join(os.path.dirname(input_path), document.output_name)

    # Метрики пишутся только для этого прогона
    if metrics:
        init_metrics(out_pdf)
    else:
        reset_metrics()

    try:
        with open(input_path, "rb") as f:
            file_bytes = f.read()

        document = run_pipeline(
            file_bytes,
            name,
            options=options,
            translate=translate,
            on_progress=on_progress,
            max_file_size_mb=max_file_size_mb,
        )

        if document.status != DocumentStatus.COMPLETED:
            return document

        with open(out_pdf, "wb") as f:
            f.write(document.output_pdf or b"")
        logging.info("PDF сохранён: %s", out_pdf)

        if out_txt:
            export_text(document, out_txt)
            logging.info("Текст сохранён: %s", out_txt)

        if out_docx:
            export_docx(document.pages, document.translations, out_docx, title=name)
            logging.info("DOCX сохранён: %s", out_docx)

        return document
    finally:
        reset_metrics()
