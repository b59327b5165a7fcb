"""
Модуль export: экспорт результатов.
"""

from ocr_translate.export.docx import export_docx
from ocr_translate.export.pdf import plan_page_draws, rebuild_pdf, write_pdf
from ocr_translate.export.text import export_text

__all__ = [
    "export_docx",
    "plan_page_draws",
    "rebuild_pdf",
    "write_pdf",
    "export_text",
]
