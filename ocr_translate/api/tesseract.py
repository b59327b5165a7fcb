"""
Сессия OCR поверх Tesseract (pytesseract).

Сессия создаётся лениво при первом распознавании, переиспользуется для всех
сканированных страниц прогона и должна быть явно освобождена (release или
выход из контекстного менеджера).
"""

from __future__ import annotations
import logging
from collections import OrderedDict
from typing import Any, Dict, List, Optional, Tuple

import pytesseract
from PIL import Image

from ocr_translate.core.config import OCR_LANGUAGES, TESSERACT_CMD, TESSERACT_CONFIG
from ocr_translate.core.exceptions import OCRError
from ocr_translate.core.models import OCRBlock, OCRLine, OCRParagraph
from ocr_translate.utils.text import clean_text_inplace

# Уровень "слово" в выводе image_to_data
WORD_LEVEL = 5


def _to_float(value: Any, default: float = -1.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def parse_tesseract_data(data: Dict[str, List[Any]]) -> List[OCRBlock]:
    """
    Собирает иерархию блок -> абзац -> строка из вывода image_to_data.

    Слова одной строки объединяются пробелом, bbox строки - объединение bbox
    слов, уверенность строки - средняя уверенность её слов.

    Args:
        data: Словарь pytesseract.Output.DICT

    Returns:
        Список OCRBlock в порядке распознавания
    """
    lines: "OrderedDict[Tuple[int, int, int], List[int]]" = OrderedDict()
    texts = data.get("text", [])

    for i, raw in enumerate(texts):
        if int(data["level"][i]) != WORD_LEVEL:
            continue
        if not str(raw or "").strip():
            continue
        key = (int(data["block_num"][i]), int(data["par_num"][i]), int(data["line_num"][i]))
        lines.setdefault(key, []).append(i)

    blocks: "OrderedDict[int, OrderedDict[int, List[OCRLine]]]" = OrderedDict()

    for (block_num, par_num, _), idxs in lines.items():
        words = [str(texts[i]).strip() for i in idxs]
        x0 = min(float(data["left"][i]) for i in idxs)
        y0 = min(float(data["top"][i]) for i in idxs)
        x1 = max(float(data["left"][i]) + float(data["width"][i]) for i in idxs)
        y1 = max(float(data["top"][i]) + float(data["height"][i]) for i in idxs)

        confs = [_to_float(data["conf"][i]) for i in idxs]
        valid = [c for c in confs if c >= 0]
        confidence = sum(valid) / len(valid) if valid else 0.0

        line = OCRLine(
            text=clean_text_inplace(" ".join(words)),
            bbox=(x0, y0, x1, y1),
            confidence=confidence,
        )
        blocks.setdefault(block_num, OrderedDict()).setdefault(par_num, []).append(line)

    return [
        OCRBlock(paragraphs=[OCRParagraph(lines=ls) for ls in pars.values()])
        for pars in blocks.values()
    ]


class OCRSession:
    """
    Явный дескриптор OCR движка.

    Example:
        with OCRSession() as ocr:
            blocks = ocr.recognize(image)
    """

    def __init__(
        self,
        languages: str = OCR_LANGUAGES,
        config: str = TESSERACT_CONFIG,
        tesseract_cmd: Optional[str] = TESSERACT_CMD,
    ):
        self.languages = languages
        self.config = config
        self.tesseract_cmd = tesseract_cmd
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def acquire(self) -> "OCRSession":
        """Инициализирует движок (проверяет доступность Tesseract)."""
        if self._active:
            return self

        if self.tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = self.tesseract_cmd

        try:
            version = pytesseract.get_tesseract_version()
        except pytesseract.TesseractNotFoundError as e:
            raise OCRError(f"Tesseract не найден: {e}") from e

        self._active = True
        logging.info("OCR сессия запущена (Tesseract %s, языки %s)", version, self.languages)
        return self

    def release(self) -> None:
        """Освобождает движок. Повторный вызов ничего не делает."""
        if not self._active:
            return
        self._active = False
        logging.info("OCR сессия остановлена")

    def recognize(self, image: Image.Image) -> List[OCRBlock]:
        """
        Распознаёт изображение.

        Args:
            image: Подготовленное изображение страницы

        Returns:
            Иерархия блоков/абзацев/строк в координатах изображения

        Raises:
            OCRError: Движок недоступен или упал при распознавании
        """
        self.acquire()

        try:
            data = pytesseract.image_to_data(
                image,
                lang=self.languages,
                config=self.config,
                output_type=pytesseract.Output.DICT,
            )
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError) as e:
            raise OCRError(f"Ошибка распознавания: {e}") from e

        return parse_tesseract_data(data)

    def __enter__(self) -> "OCRSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
