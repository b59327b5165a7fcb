from __future__ import annotations

import sys
from pathlib import Path

import pytest


# Project root must be importable when pytest runs from its entrypoint
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from ocr_translate.core.models import PageLayout, TextBlock  # noqa: E402
from ocr_translate.utils.metrics import reset_metrics  # noqa: E402


def make_block(text, x=0.0, y=0.0, width=100.0, height=12.0, font_size=12.0, page_number=1):
    return TextBlock(
        text=text,
        x=x,
        y=y,
        width=width,
        height=height,
        font_size=font_size,
        font_family="Helvetica",
        page_number=page_number,
    )


@pytest.fixture(autouse=True)
def _no_metrics():
    """Metrics CSV is never written unless a test enables it"""
    reset_metrics()
    yield
    reset_metrics()


@pytest.fixture
def block_factory():
    return make_block


@pytest.fixture
def simple_layout():
    """A4 page with two blocks, one repeated"""
    return PageLayout(
        width=595.0,
        height=842.0,
        blocks=[
            make_block("Hello world", x=50, y=50, height=20, font_size=12),
            make_block("Second line", x=50, y=80, height=20, font_size=12),
            make_block("Hello world", x=50, y=110, height=20, font_size=12),
        ],
    )


def make_pdf(lines, width=595.0, height=842.0, pages=1):
    """PDF bytes with one inserted text line per entry on each page"""
    try:
        import pymupdf
    except ImportError:
        import fitz as pymupdf

    doc = pymupdf.open()
    for _ in range(pages):
        page = doc.new_page(width=width, height=height)
        for i, text in enumerate(lines):
            page.insert_text((72, 72 + i * 20), text, fontsize=11, fontname="helv")
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def native_pdf():
    """Single page with 25 text lines (native text layer)"""
    return make_pdf([f"Line {i}" for i in range(25)])


@pytest.fixture
def blank_pdf():
    """Single blank page, treated as a scan"""
    return make_pdf([], width=100.0, height=200.0)


@pytest.fixture
def multipage_pdf():
    """Three pages with the same 25 text lines"""
    return make_pdf([f"Line {i}" for i in range(25)], pages=3)
