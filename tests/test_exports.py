# tests/test_exports.py
"""
Text and DOCX export tests.
"""

import pytest

from docx import Document

from ocr_translate.core.exceptions import ExportError
from ocr_translate.core.models import PageLayout, ProcessedDocument
from ocr_translate.core.types import DocumentStatus
from ocr_translate.export.docx import export_docx
from ocr_translate.export.text import export_text


@pytest.fixture
def document(simple_layout):
    return ProcessedDocument(
        name="doc.pdf",
        original_text="Hello world\nSecond line",
        translated_text="Olá mundo\nLinha dois",
        pages=[simple_layout],
        status=DocumentStatus.COMPLETED,
        progress=100,
        translations={"Hello world": "Olá mundo", "Second line": "Linha dois"},
    )


class TestTextExport:
    def test_returns_translated_text(self, document):
        assert export_text(document) == "Olá mundo\nLinha dois"

    def test_writes_file(self, document, tmp_path):
        out = tmp_path / "doc.txt"

        export_text(document, str(out))

        assert out.read_text(encoding="utf-8") == "Olá mundo\nLinha dois"

    def test_unwritable_path(self, document, tmp_path):
        with pytest.raises(ExportError):
            export_text(document, str(tmp_path / "missing" / "doc.txt"))


class TestDocxExport:
    """Original and translation side by side, one table per page"""

    def test_table_rows(self, document, tmp_path):
        out = tmp_path / "doc.docx"

        export_docx(document.pages, document.translations, str(out), title="doc.pdf")

        docx = Document(str(out))
        (table,) = docx.tables
        rows = [[c.text for c in row.cells] for row in table.rows]
        assert rows[0] == ["Original", "Translation"]
        assert rows[1:] == [
            ["Hello world", "Olá mundo"],
            ["Second line", "Linha dois"],
            ["Hello world", "Olá mundo"],
        ]
        assert any(p.text == "Page 1" for p in docx.paragraphs)

    def test_blank_blocks_skipped(self, block_factory, tmp_path):
        layout = PageLayout(100, 100, [block_factory("  "), block_factory("Only")])
        out = tmp_path / "doc.docx"

        export_docx([layout], {}, str(out))

        (table,) = Document(str(out)).tables
        assert [c.text for c in table.rows[1].cells] == ["Only", "Only"]
        assert len(table.rows) == 2

    def test_unwritable_path(self, document, tmp_path):
        with pytest.raises(ExportError):
            export_docx(document.pages, {}, str(tmp_path / "missing" / "doc.docx"))
