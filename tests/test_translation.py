# tests/test_translation.py
"""
Translation orchestration tests: dedupe, chunk alignment, error propagation.
"""

import pytest
from unittest.mock import Mock

from ocr_translate.core.config import BLOCK_SEPARATOR, BLOCK_SEPARATOR_TOKEN
from ocr_translate.core.exceptions import ChunkTranslationError
from ocr_translate.core.models import PageLayout, TranslationOptions
from ocr_translate.processing.translation import (
    align_segments,
    collect_unique_texts,
    translate_all,
)


def _upper_translator(chunk):
    """Fake translator: uppercases each segment, keeps separators"""
    parts = chunk.split(BLOCK_SEPARATOR)
    return BLOCK_SEPARATOR.join(p.upper() for p in parts)


# --- Fixtures ---

@pytest.fixture
def plain_options():
    return TranslationOptions(preserve_keywords=False)


# --- Aggregation ---

class TestCollectUniqueTexts:
    """Unique non-blank block texts across all pages"""

    def test_dedupes_and_trims(self, block_factory):
        make_block = block_factory
        layouts = [
            PageLayout(595, 842, [make_block("Hello "), make_block("World"), make_block("  ")]),
            PageLayout(595, 842, [make_block("Hello"), make_block("Again", page_number=2)]),
        ]

        assert collect_unique_texts(layouts) == ["Hello", "World", "Again"]

    def test_no_blocks(self):
        assert collect_unique_texts([PageLayout(100, 100)]) == []


# --- Alignment ---

class TestAlignSegments:
    """Segments of a translated chunk map back to its originals by position"""

    def test_exact_alignment(self):
        result = align_segments(["a", "b"], f"A{BLOCK_SEPARATOR}B")

        assert result == ["A", "B"]

    def test_tolerates_whitespace_around_separator(self):
        result = align_segments(["a", "b", "c"], f"A {BLOCK_SEPARATOR_TOKEN} B{BLOCK_SEPARATOR_TOKEN}C")

        assert result == ["A", "B", "C"]

    def test_missing_segments_fall_back_to_original(self):
        result = align_segments(["a", "b", "c"], "A")

        assert result == ["A", "b", "c"]

    def test_blank_segment_falls_back_to_original(self):
        result = align_segments(["a", "b"], f"A{BLOCK_SEPARATOR}   ")

        assert result == ["A", "b"]

    def test_extra_segments_dropped(self):
        result = align_segments(["a"], f"A{BLOCK_SEPARATOR}B{BLOCK_SEPARATOR}C")

        assert result == ["A"]

    def test_leftover_preserve_tags_removed(self):
        result = align_segments(["def x"], "<PRESERVE>def</PRESERVE> x")

        assert result == ["def x"]

    def test_separator_token_inside_block_text(self):
        """Block text that contains the token does not add segments"""
        chunk = BLOCK_SEPARATOR.join(["a --BLOCK-- b", "c ---BLOCK--- d", "e"])

        result = align_segments(["a --BLOCK-- b", "c ---BLOCK--- d", "e"], chunk)

        assert result == ["a --BLOCK-- b", "c ---BLOCK--- d", "e"]


# --- translate_all ---

class TestTranslateAll:
    """Map completeness, ordering and errors"""

    def test_one_entry_per_unique_text(self, plain_options):
        texts = ["first", "second", "third"]

        result = translate_all(texts, plain_options, _upper_translator)

        assert result == {"first": "FIRST", "second": "SECOND", "third": "THIRD"}

    def test_identity_translator_with_token_in_text(self, plain_options):
        """Returning the chunk unchanged maps every text to itself"""
        texts = ["a --BLOCK-- b", "c", "x--BLOCK--y", "d"]

        result = translate_all(texts, plain_options, lambda chunk: chunk)

        assert result == {t: t for t in texts}

    def test_empty_input_skips_translator(self, plain_options):
        translate = Mock()

        assert translate_all([], plain_options, translate) == {}
        translate.assert_not_called()

    def test_chunks_sent_in_order(self, plain_options):
        texts = [f"block {i:02d} " + "x" * 30 for i in range(6)]
        seen = []

        def translate(chunk):
            seen.append(chunk)
            return chunk

        translate_all(texts, plain_options, translate, max_chunk_length=100)

        assert len(seen) > 1
        assert BLOCK_SEPARATOR.join(seen) == BLOCK_SEPARATOR.join(texts)

    def test_misaligned_chunk_does_not_shift_others(self, plain_options):
        """A chunk that drops a segment only affects its own blocks"""
        texts = ["aaaa", "bbbb", "cccc", "dddd"]

        def translate(chunk):
            parts = chunk.split(BLOCK_SEPARATOR)
            if parts[0] == "aaaa":
                return parts[0].upper()
            return BLOCK_SEPARATOR.join(p.upper() for p in parts)

        result = translate_all(texts, plain_options, translate, max_chunk_length=20)

        assert result == {"aaaa": "AAAA", "bbbb": "bbbb", "cccc": "CCCC", "dddd": "DDDD"}

    def test_keywords_marked_before_translation(self):
        options = TranslationOptions(preserve_keywords=True)
        seen = []

        def translate(chunk):
            seen.append(chunk)
            return chunk.replace("foo", "bar")

        result = translate_all(["def foo(): pass"], options, translate)

        assert "<PRESERVE>def</PRESERVE>" in seen[0]
        assert result == {"def foo(): pass": "def bar(): pass"}

    def test_keywords_not_marked_when_disabled(self, plain_options):
        seen = []

        def translate(chunk):
            seen.append(chunk)
            return chunk

        translate_all(["def foo(): pass"], plain_options, translate)

        assert "PRESERVE" not in seen[0]

    def test_translator_failure_raises_chunk_error(self, plain_options):
        texts = ["aaaa", "bbbb"]
        translate = Mock(side_effect=["AAAA", RuntimeError("connection refused")])

        with pytest.raises(ChunkTranslationError) as exc_info:
            translate_all(texts, plain_options, translate, max_chunk_length=5)

        assert exc_info.value.chunk_index == 1
        assert "connection refused" in str(exc_info.value)

    def test_chunk_error_passes_through(self, plain_options):
        translate = Mock(side_effect=ChunkTranslationError("empty response"))

        with pytest.raises(ChunkTranslationError) as exc_info:
            translate_all(["aaaa"], plain_options, translate)

        assert exc_info.value.chunk_index == 0

    def test_progress_within_range(self, plain_options):
        values = []

        translate_all(
            ["aaaa", "bbbb", "cccc"],
            plain_options,
            _upper_translator,
            max_chunk_length=5,
            on_progress=values.append,
            progress_range=(50, 90),
        )

        assert values[0] == 50
        assert values[-1] == 90
        assert values == sorted(values)
