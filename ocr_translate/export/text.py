"""
Экспорт переведённого текста в обычный текстовый файл.
"""

from __future__ import annotations
import logging
from typing import Optional

from ocr_translate.core.exceptions import ExportError
from ocr_translate.core.models import ProcessedDocument


def export_text(document: ProcessedDocument, out_txt: Optional[str] = None) -> str:
    """
    Возвращает переведённый текст документа и, если задан путь, сохраняет его.

    Args:
        document: Результат обработки
        out_txt: Путь к выходному .txt (опционально)

    Returns:
        Переведённый текст
    """
    text = document.translated_text

    if out_txt:
        try:
            with open(out_txt, "w", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            logging.error(f"Не удалось сохранить текст {out_txt}: {e}")
            raise ExportError(f"Cannot write {out_txt}: {e}") from e

    return text
