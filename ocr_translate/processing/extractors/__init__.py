"""
Экстракторы текстовых блоков.
"""

from ocr_translate.processing.extractors.pymupdf import (
    extract_layouts,
    open_document,
    read_text_runs,
    native_blocks,
    ocr_lines_to_blocks,
    ocr_page,
)

__all__ = [
    "extract_layouts",
    "open_document",
    "read_text_runs",
    "native_blocks",
    "ocr_lines_to_blocks",
    "ocr_page",
]
