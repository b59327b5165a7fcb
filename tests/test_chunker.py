# tests/test_chunker.py
"""
Chunking tests: size bound, block boundaries and reconstruction.
"""

import pytest

from ocr_translate.core.config import BLOCK_SEPARATOR
from ocr_translate.processing.chunker import chunk_text, count_blocks


def _blocks(n, size):
    return [chr(ord("a") + i % 26) * size for i in range(n)]


class TestChunkText:
    """chunk_text groups whole blocks into bounded chunks"""

    def test_chunks_respect_max_length(self):
        """~5000 chars of 400-char blocks with max 1000"""
        blocks = _blocks(12, 400)
        text = BLOCK_SEPARATOR.join(blocks)
        assert len(text) > 4800

        chunks = chunk_text(text, 1000)

        assert all(len(c) <= 1000 for c in chunks)
        # Two 400-char blocks plus one separator fit, three do not
        assert [count_blocks(c) for c in chunks] == [2] * 6

    def test_chunks_end_on_block_boundary(self):
        blocks = _blocks(12, 400)
        text = BLOCK_SEPARATOR.join(blocks)

        chunks = chunk_text(text, 1000)

        rebuilt_blocks = [b for c in chunks for b in c.split(BLOCK_SEPARATOR)]
        assert rebuilt_blocks == blocks

    def test_join_reconstructs_input(self):
        text = BLOCK_SEPARATOR.join(["alpha", "beta", "gamma", "delta", "epsilon"])

        chunks = chunk_text(text, 20)

        assert BLOCK_SEPARATOR.join(chunks) == text

    def test_single_chunk_when_everything_fits(self):
        text = BLOCK_SEPARATOR.join(["one", "two"])

        assert chunk_text(text, 1000) == [text]

    def test_oversized_block_gets_own_chunk(self):
        text = BLOCK_SEPARATOR.join(["short", "x" * 50, "tail"])

        chunks = chunk_text(text, 20)

        assert chunks == ["short", "x" * 50, "tail"]

    def test_no_empty_chunks(self):
        text = BLOCK_SEPARATOR.join(["x" * 30, "y" * 30])

        chunks = chunk_text(text, 10)

        assert all(chunks)
        assert len(chunks) == 2

    def test_empty_input(self):
        assert chunk_text("", 100) == []

    @pytest.mark.parametrize("max_length", [0, -5])
    def test_invalid_max_length(self, max_length):
        with pytest.raises(ValueError):
            chunk_text("text", max_length)


class TestCountBlocks:
    def test_count_blocks(self):
        assert count_blocks("a") == 1
        assert count_blocks(BLOCK_SEPARATOR.join(["a", "b", "c"])) == 3
