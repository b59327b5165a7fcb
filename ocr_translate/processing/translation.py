"""
Оркестрация перевода: агрегация, дедупликация, разметка, чанки, сопоставление.

Переводчику отправляются только уникальные тексты; все повторы блока в
документе получают одно и то же значение из карты перевода.
"""

from __future__ import annotations
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from ocr_translate.core.config import BLOCK_SEPARATOR, BLOCK_SEPARATOR_TOKEN, CHUNK_SIZE
from ocr_translate.core.exceptions import ChunkTranslationError
from ocr_translate.core.models import PageLayout, TranslationOptions
from ocr_translate.core.types import ChunkTranslator, ProgressCallback
from ocr_translate.processing.chunker import chunk_text, count_blocks
from ocr_translate.processing.keywords import mark_keywords, unmark_keywords
from ocr_translate.utils.metrics import Timer, log_metric, report_progress
from ocr_translate.utils.text import split_separated, unique_non_blank


def collect_unique_texts(layouts: Sequence[PageLayout]) -> List[str]:
    """
    Уникальные непустые тексты блоков всего документа (после trim).

    Порядок - порядок первого появления по страницам и блокам.
    """
    return unique_non_blank(b.text for layout in layouts for b in layout.blocks)


def align_segments(
    originals: Sequence[str], translated_chunk: str, chunk_index: int = 0
) -> List[str]:
    """
    Сопоставляет сегменты ответа переводчика исходным текстам чанка.

    Сегмент i соответствует originals[i]. Недостающие и пустые сегменты
    заменяются исходным текстом, лишние отбрасываются.

    Args:
        originals: Исходные тексты, вошедшие в чанк
        translated_chunk: Ответ переводчика
        chunk_index: Номер чанка (для логов)

    Returns:
        Переводы в порядке originals
    """
    segments = split_separated(translated_chunk, BLOCK_SEPARATOR_TOKEN)

    # Модель могла склеить разделитель с соседними строками; свободное
    # деление принимается, только если оно даёт ровно нужное число сегментов
    if len(segments) != len(originals):
        loose = split_separated(translated_chunk, BLOCK_SEPARATOR_TOKEN, line_only=False)
        if len(loose) == len(originals):
            segments = loose

    if len(segments) != len(originals):
        logging.warning(
            "Чанк %d: ожидалось %d сегментов, получено %d - сопоставление по позиции",
            chunk_index,
            len(originals),
            len(segments),
        )

    out: List[str] = []
    for i, original in enumerate(originals):
        seg = unmark_keywords(segments[i]).strip() if i < len(segments) else ""
        out.append(seg or original)
    return out


def translate_all(
    unique_texts: Sequence[str],
    options: TranslationOptions,
    translate: ChunkTranslator,
    max_chunk_length: int = CHUNK_SIZE,
    on_progress: Optional[ProgressCallback] = None,
    progress_range: Tuple[int, int] = (50, 90),
) -> Dict[str, str]:
    """
    Переводит уникальные тексты и строит карту оригинал -> перевод.

    Чанки переводятся строго последовательно; результат i-го чанка
    сопоставляется только с блоками этого чанка.

    Args:
        unique_texts: Уникальные непустые тексты
        options: Параметры перевода
        translate: Переводчик одного чанка
        max_chunk_length: Максимальная длина чанка
        on_progress: Колбэк прогресса
        progress_range: Поддиапазон прогресса для этапа

    Returns:
        Карта перевода (ровно одна запись на уникальный текст)

    Raises:
        ChunkTranslationError: Переводчик упал на одном из чанков
    """
    texts = unique_non_blank(unique_texts)
    if not texts:
        report_progress(on_progress, progress_range, 1, 1)
        return {}

    joined = BLOCK_SEPARATOR.join(texts)
    if options.preserve_keywords:
        joined = mark_keywords(joined)

    chunks = chunk_text(joined, max_chunk_length)
    logging.info(
        "Перевод: %d уникальных блоков в %d чанках (лимит %d символов)",
        len(texts),
        len(chunks),
        max_chunk_length,
    )

    translated: List[str] = []
    offset = 0

    for i, chunk in enumerate(chunks):
        report_progress(on_progress, progress_range, i, len(chunks))
        logging.info("Перевод чанка %d/%d (%d символов)...", i + 1, len(chunks), len(chunk))

        t = Timer()
        try:
            result = translate(chunk)
        except ChunkTranslationError as e:
            e.chunk_index = i
            raise
        except Exception as e:
            raise ChunkTranslationError(
                f"Chunk {i + 1}/{len(chunks)} failed: {e}", chunk_index=i
            ) from e
        log_metric("translate", sub=f"chunk{i + 1}", duration_ms=t.ms(), count=len(chunk))

        n = count_blocks(chunk)
        translated.extend(align_segments(texts[offset : offset + n], result, i))
        offset += n

    report_progress(on_progress, progress_range, len(chunks), len(chunks))

    return dict(zip(texts, translated))
