"""
Модуль processing: извлечение, перевод и сборка документа.
"""

from ocr_translate.processing.pipeline import (
    run_pipeline,
    translate_file,
    check_file_size,
)
from ocr_translate.processing.translation import collect_unique_texts, translate_all
from ocr_translate.processing.chunker import chunk_text
from ocr_translate.processing.keywords import mark_keywords, unmark_keywords
from ocr_translate.processing.preprocess import optimize_for_ocr, upscale
from ocr_translate.processing.extractors.pymupdf import extract_layouts

__all__ = [
    "run_pipeline",
    "translate_file",
    "check_file_size",
    "collect_unique_texts",
    "translate_all",
    "chunk_text",
    "mark_keywords",
    "unmark_keywords",
    "optimize_for_ocr",
    "upscale",
    "extract_layouts",
]
