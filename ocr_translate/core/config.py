"""
Конфигурация приложения OCR-Translate.

Этот модуль содержит все константы конфигурации и настройки окружения.
"""

import os
from typing import Optional

from ocr_translate.core.types import OCRQuality


# ============================================================================
# LM Studio Configuration (OpenAI-compatible translator)
# ============================================================================

DEFAULT_LMSTUDIO_BASE = os.environ.get("DEFAULT_LMSTUDIO_BASE", "http://127.0.0.1:1234")
LMSTUDIO_CHAT_PATH = "v1/chat/completions"
LMSTUDIO_MODEL = os.environ.get("LMSTUDIO_MODEL", "google/gemma-3-4b")
LMSTUDIO_API_KEY = os.environ.get("LMS_API_KEY", "lm-studio")


# ============================================================================
# HTTP Configuration
# ============================================================================

# Запросы перевода не повторяются: упавший прогон перезапускается целиком
MAX_RETRIES = int(os.environ.get("OCRT_HTTP_MAX_RETRIES", "0"))
TIMEOUT = 180
BACKOFF_FACTOR = 0.8


# ============================================================================
# Translation Configuration
# ============================================================================

DEFAULT_TARGET_LANGUAGE = os.environ.get("OCRT_TARGET_LANGUAGE", "pt-BR")
DEFAULT_CONTENT_TYPE = "software development"
DEFAULT_TEMPERATURE = 0.2
DEFAULT_TOP_P = 0.8
DEFAULT_MAX_TOKENS = 4096
DEFAULT_TRANSLATION_TIMEOUT = 180

# Максимальный размер одного запроса к переводчику (символы)
CHUNK_SIZE = int(os.environ.get("OCRT_CHUNK_SIZE", "3500"))

BLOCK_SEPARATOR = "\n--BLOCK--\n"
BLOCK_SEPARATOR_TOKEN = "--BLOCK--"

PRESERVE_OPEN = "<PRESERVE>"
PRESERVE_CLOSE = "</PRESERVE>"


# ============================================================================
# Input Configuration
# ============================================================================

MAX_FILE_SIZE_MB = float(os.environ.get("OCRT_MAX_FILE_SIZE_MB", "20"))

IMAGE_FILETYPES = ("png", "jpg", "jpeg", "tif", "tiff", "bmp")


# ============================================================================
# Extraction Configuration
# ============================================================================

# Больше этого числа текстовых фрагментов - страница считается "родной"
NATIVE_TEXT_MIN_RUNS = 20

# 3.5 * 72 DPI ~ 300 DPI
OCR_RENDER_SCALE = 3.5

OCR_FALLBACK_FONT_SIZE = 12.0
OCR_FONT_SIZE_RATIO = 0.8
DEFAULT_FONT_FAMILY = "Helvetica"

OCR_LANGUAGES = os.environ.get("OCRT_OCR_LANGUAGES", "eng+por")
TESSERACT_CMD: Optional[str] = os.environ.get("TESSERACT_CMD")
TESSERACT_CONFIG = "--oem 1 --psm 3"

# render_scale: масштаб растеризации страницы
# upscale_dpi: (target, current) для дополнительного апскейла или None
OCR_QUALITY_PRESETS = {
    OCRQuality.LOW: {"render_scale": 2.0, "upscale_dpi": None},
    OCRQuality.MEDIUM: {"render_scale": OCR_RENDER_SCALE, "upscale_dpi": None},
    OCRQuality.HIGH: {"render_scale": OCR_RENDER_SCALE, "upscale_dpi": (450, 300)},
}


# ============================================================================
# Reconstruction Configuration
# ============================================================================

BASELINE_RATIO = 0.8
FONT_SHRINK_FACTOR = 0.9
MIN_FONT_SIZE = 4.0
OUTPUT_FONT = "helv"
OUTPUT_TEXT_COLOR = (0, 0, 0)

# Для режима без сохранения макета
FLOW_MARGIN = 36.0
FLOW_FONT_SIZE = 11.0

OUTPUT_PREFIX = "translated_"


# ============================================================================
# Progress Configuration
# ============================================================================

PROGRESS_START = 5
PROGRESS_EXTRACT_END = 50
PROGRESS_TRANSLATE_END = 90
PROGRESS_REBUILD = 95

