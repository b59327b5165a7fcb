# tests/test_utils.py
"""
Text, metrics and progress utility tests.
"""

import csv

import pytest

from ocr_translate.utils import metrics
from ocr_translate.utils.metrics import init_metrics, log_metric, report_progress
from ocr_translate.utils.text import (
    clean_text_inplace,
    sanitize_model_content,
    split_separated,
    unique_non_blank,
)


class TestText:
    @pytest.mark.parametrize("raw,expected", [
        ("```Olá```", "Olá"),
        ("Tradução: Olá", "Olá"),
        ("**Olá", "Olá"),
        ("  Olá  ", "Olá"),
    ])
    def test_sanitize_model_content(self, raw, expected):
        assert sanitize_model_content(raw) == expected

    def test_clean_text(self):
        assert clean_text_inplace("hy\u00adphen and   spaces ") == "hyphen and spaces"

    def test_unique_non_blank(self):
        assert unique_non_blank([" a", "b", "a ", "", "  ", "c"]) == ["a", "b", "c"]

    def test_split_separated_on_own_line(self):
        """Only a token on its own line separates blocks"""
        text = "a\n  --BLOCK--\t\nb --BLOCK--c"

        assert split_separated(text, "--BLOCK--") == ["a", "b --BLOCK--c"]

    def test_split_separated_anywhere(self):
        text = "a\n--BLOCK--\nb --BLOCK--c"

        assert split_separated(text, "--BLOCK--", line_only=False) == ["a", "b", "c"]


class TestProgress:
    def test_maps_into_range(self):
        values = []

        report_progress(values.append, (50, 90), 1, 4)

        assert values == [60]

    def test_zero_total_reports_end(self):
        assert report_progress(None, (5, 50), 0, 0) == 50


class TestMetrics:
    """CSV metrics beside the output file"""

    def test_metrics_written_when_enabled(self, tmp_path):
        path = init_metrics(str(tmp_path / "out.pdf"))

        log_metric("extract", page=1, sub="ocr", duration_ms=12, count=3)

        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert path.endswith("out.metrics.csv")
        assert rows[0][1] == "stage"
        assert rows[1][1:6] == ["extract", "1", "ocr", "12", "3"]

    def test_disabled_by_default(self, tmp_path):
        assert metrics.METRICS_PATH is None

        log_metric("extract", count=1)

        assert list(tmp_path.iterdir()) == []
