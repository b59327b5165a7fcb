"""
Модуль api: клиенты внешних сервисов.
"""

from ocr_translate.api.base import get_http_session, post_json, HTTP
from ocr_translate.api.lmstudio import (
    build_system_prompt,
    lmstudio_translate_chunk,
    LMStudioTranslator,
)
from ocr_translate.api.tesseract import OCRSession, parse_tesseract_data

__all__ = [
    # Base
    "get_http_session",
    "HTTP",
    "post_json",
    # LM Studio
    "build_system_prompt",
    "lmstudio_translate_chunk",
    "LMStudioTranslator",
    # Tesseract
    "OCRSession",
    "parse_tesseract_data",
]
