"""
Модуль core: базовые модели, типы и конфигурация.
"""

from ocr_translate.core.models import (
    TextBlock,
    ImageInfo,
    PageLayout,
    TextRun,
    OCRLine,
    OCRParagraph,
    OCRBlock,
    DrawCall,
    PageDrawPlan,
    TranslationOptions,
    ProcessedDocument,
)
from ocr_translate.core.types import OCRQuality, DocumentStatus, BBox, Transform
from ocr_translate.core.config import (
    DEFAULT_LMSTUDIO_BASE,
    LMSTUDIO_MODEL,
    BLOCK_SEPARATOR,
    CHUNK_SIZE,
    MAX_FILE_SIZE_MB,
    MAX_RETRIES,
    TIMEOUT,
)
from ocr_translate.core.exceptions import (
    OCRTranslateError,
    DocumentParseError,
    OversizeInputError,
    TranslationError,
    ChunkTranslationError,
    BlockDrawError,
    OCRError,
    ExportError,
)

__all__ = [
    # Models
    "TextBlock",
    "ImageInfo",
    "PageLayout",
    "TextRun",
    "OCRLine",
    "OCRParagraph",
    "OCRBlock",
    "DrawCall",
    "PageDrawPlan",
    "TranslationOptions",
    "ProcessedDocument",
    # Types
    "OCRQuality",
    "DocumentStatus",
    "BBox",
    "Transform",
    # Config
    "DEFAULT_LMSTUDIO_BASE",
    "LMSTUDIO_MODEL",
    "BLOCK_SEPARATOR",
    "CHUNK_SIZE",
    "MAX_FILE_SIZE_MB",
    "MAX_RETRIES",
    "TIMEOUT",
    # Exceptions
    "OCRTranslateError",
    "DocumentParseError",
    "OversizeInputError",
    "TranslationError",
    "ChunkTranslationError",
    "BlockDrawError",
    "OCRError",
    "ExportError",
]
