"""
Типы данных и enums для OCR-Translate.

Этот модуль содержит базовые типы и константы, используемые во всём приложении.
"""

from __future__ import annotations
from enum import Enum
from typing import Callable, Tuple


class OCRQuality(str, Enum):
    """Уровень качества OCR (компромисс качество/скорость)."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class DocumentStatus(str, Enum):
    """Состояние обработки документа."""

    IDLE = "idle"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


# Type aliases для улучшения читаемости
BBox = Tuple[float, float, float, float]  # (x0, y0, x1, y1)
Transform = Tuple[float, float, float, float, float, float]  # (a, b, c, d, e, f)

# Колбэк прогресса: получает процент 0..100
ProgressCallback = Callable[[int], None]

# Переводчик одного чанка: текст -> перевод
ChunkTranslator = Callable[[str], str]
