"""
Экспорт в DOCX формат: оригинал и перевод блоков бок о бок.
"""

from __future__ import annotations
import logging
import re
from typing import Mapping, Optional, Sequence

from docx import Document
from docx.shared import Pt, Inches
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml.ns import qn

from ocr_translate.core.exceptions import ExportError
from ocr_translate.core.models import PageLayout
from ocr_translate.utils.geometry import sort_blocks_reading_order

_ILLEGAL_XML_CHARS_RE = re.compile(
    "["
    "\x00-\x08"  # C0 control codes
    "\x0b\x0c"  # Vertical tab, form feed
    "\x0e-\x1f"  # More control codes
    "\x7f-\x84"  # Delete + C1 controls
    "\x86-\x9f"  # More C1 controls
    "]"
)


def _sanitize_for_xml(text: str) -> str:
    """Удаляет несовместимые с XML символы."""
    if not isinstance(text, str):
        return ""
    return _ILLEGAL_XML_CHARS_RE.sub("", text)


def _soft_wrap_tokens(t: str, max_token: int = 40, insert_every: int = 20) -> str:
    """Вставляет мягкие переносы (zero-width space) в длинные слова."""
    out_parts = []
    for tok in t.split():
        if len(tok) <= max_token:
            out_parts.append(tok)
        else:
            chunks = [
                tok[i : i + insert_every] for i in range(0, len(tok), insert_every)
            ]
            out_parts.append("\u200b".join(chunks))
    return " ".join(out_parts)


def _font_size_for_block(font_size: float) -> int:
    return int(max(8.0, min(18.0, float(font_size or 11.0))))


def export_docx(
    pages: Sequence[PageLayout],
    translation_map: Mapping[str, str],
    out_docx: str,
    title: Optional[str] = None,
) -> None:
    """
    Экспортирует страницы с переводами в DOCX.

    Для каждой страницы - заголовок и таблица "Original / Translation"
    в порядке чтения. Пустые блоки пропускаются.

    Raises:
        ExportError: Файл не удалось сохранить
    """
    doc = Document()

    doc.styles["Normal"].font.name = "Times New Roman"
    doc.styles["Normal"]._element.rPr.rFonts.set(qn("w:eastAsia"), "Times New Roman")
    doc.styles["Normal"].font.size = Pt(11)

    if title:
        p = doc.add_paragraph(_sanitize_for_xml(title))
        p.style = doc.styles["Title"]
        p.alignment = WD_ALIGN_PARAGRAPH.CENTER

    for pno, layout in enumerate(pages, start=1):
        h = doc.add_paragraph(f"Page {pno}")
        h.style = doc.styles["Heading 1"]

        table = doc.add_table(rows=1, cols=2)
        table.allow_autofit = False

        hdr_cells = table.rows[0].cells
        hdr_cells[0].text = "Original"
        hdr_cells[1].text = "Translation"

        col_widths = [Inches(3.5), Inches(3.5)]
        for col, w in zip(table.columns, col_widths):
            for cell in col.cells:
                cell.width = w

        for block in sort_blocks_reading_order(layout.blocks):
            original = block.text.strip()
            if not original:
                continue

            row = table.add_row().cells
            row[0].paragraphs[0].add_run(_soft_wrap_tokens(_sanitize_for_xml(original)))

            tr_text = translation_map.get(original, original)
            run = row[1].paragraphs[0].add_run(_soft_wrap_tokens(_sanitize_for_xml(tr_text)))
            run.font.size = Pt(_font_size_for_block(block.font_size))

    try:
        doc.save(out_docx)
    except Exception as e:
        logging.error(f"Не удалось сохранить DOCX файл {out_docx}: {e}")
        raise ExportError(f"Cannot write {out_docx}: {e}") from e
