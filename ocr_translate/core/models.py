"""
Модели данных для OCR-Translate.

Этот модуль содержит все dataclass модели, используемые в приложении.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ocr_translate.core.config import DEFAULT_TARGET_LANGUAGE, OUTPUT_PREFIX
from ocr_translate.core.types import BBox, DocumentStatus, OCRQuality, Transform


@dataclass(frozen=True)
class TextBlock:
    """
    Строка/фрагмент текста в абсолютной позиции на странице.

    Координаты в системе страницы: начало в левом верхнем углу, Y вниз.

    Attributes:
        text: Текстовое содержимое
        x: Левая координата
        y: Верхняя координата
        width: Ширина блока
        height: Высота блока
        font_size: Размер шрифта
        font_family: Название шрифта
        page_number: Номер страницы (1-based)
    """

    text: str
    x: float
    y: float
    width: float
    height: float
    font_size: float
    font_family: str
    page_number: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"TextBlock size must be non-negative: {self.width}x{self.height}"
            )
        if self.page_number < 1:
            raise ValueError(f"page_number must be >= 1, got {self.page_number}")


@dataclass
class ImageInfo:
    """Встроенное изображение страницы (ядром не используется)."""

    data: bytes
    x: float
    y: float
    width: float
    height: float


@dataclass
class PageLayout:
    """
    Макет одной страницы: размеры и блоки текста в порядке извлечения.

    Attributes:
        width: Ширина страницы
        height: Высота страницы
        blocks: Блоки текста
        images: Встроенные изображения
    """

    width: float
    height: float
    blocks: List[TextBlock] = field(default_factory=list)
    images: List[ImageInfo] = field(default_factory=list)


@dataclass(frozen=True)
class TextRun:
    """
    Фрагмент текстового слоя PDF.

    transform задан в системе PDF (начало в левом нижнем углу):
    (a, b, c, d, e, f), где a - горизонтальный масштаб, (e, f) - позиция.
    """

    text: str
    transform: Transform
    width: float
    height: float
    font_name: str = ""


@dataclass(frozen=True)
class OCRLine:
    """Распознанная строка OCR в координатах растра."""

    text: str
    bbox: BBox  # (x0, y0, x1, y1)
    confidence: float

    @property
    def width(self) -> float:
        return self.bbox[2] - self.bbox[0]

    @property
    def height(self) -> float:
        return self.bbox[3] - self.bbox[1]


@dataclass
class OCRParagraph:
    lines: List[OCRLine] = field(default_factory=list)


@dataclass
class OCRBlock:
    paragraphs: List[OCRParagraph] = field(default_factory=list)


@dataclass(frozen=True)
class DrawCall:
    """
    Команда отрисовки текста.

    Координаты в системе выходного PDF: начало в левом нижнем углу.
    """

    text: str
    x: float
    y: float
    size: float
    font: str


@dataclass
class PageDrawPlan:
    """План отрисовки одной выходной страницы."""

    width: float
    height: float
    draws: List[DrawCall] = field(default_factory=list)


@dataclass(frozen=True)
class TranslationOptions:
    """
    Параметры перевода.

    Attributes:
        preserve_layout: Сохранять позиции блоков
        preserve_keywords: Защищать технические термины от перевода
        ocr_quality: Качество OCR для сканированных страниц
        target_language: Целевой язык
    """

    preserve_layout: bool = True
    preserve_keywords: bool = True
    ocr_quality: OCRQuality = OCRQuality.MEDIUM
    target_language: str = DEFAULT_TARGET_LANGUAGE


@dataclass
class ProcessedDocument:
    """
    Итог обработки документа (терминальное состояние).

    Attributes:
        name: Имя исходного файла
        original_text: Уникальные исходные тексты, по строке на блок
        translated_text: Переведённые тексты в том же порядке
        pages: Макеты страниц
        status: Статус обработки
        progress: Последний достигнутый прогресс (0..100)
        error: Сообщение об ошибке (для status=ERROR)
        output_pdf: Байты восстановленного PDF
        translations: Карта оригинал -> перевод
    """

    name: str
    original_text: str = ""
    translated_text: str = ""
    pages: List[PageLayout] = field(default_factory=list)
    status: DocumentStatus = DocumentStatus.IDLE
    progress: int = 0
    error: Optional[str] = None
    output_pdf: Optional[bytes] = None
    translations: Dict[str, str] = field(default_factory=dict)

    @property
    def output_name(self) -> str:
        return f"{OUTPUT_PREFIX}{self.name}"
