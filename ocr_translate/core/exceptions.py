"""
Кастомные исключения для OCR-Translate.

Этот модуль содержит специфичные для приложения исключения.
"""


class OCRTranslateError(Exception):
    """Базовое исключение для всех ошибок OCR-Translate."""

    pass


class DocumentParseError(OCRTranslateError):
    """Документ не удалось открыть или прочитать."""

    pass


class OversizeInputError(OCRTranslateError):
    """Файл превышает допустимый размер."""

    pass


class TranslationError(OCRTranslateError):
    """Ошибка при переводе текста."""

    pass


class ChunkTranslationError(TranslationError):
    """Ошибка перевода отдельного чанка."""

    def __init__(self, message: str, chunk_index: int = -1):
        super().__init__(message)
        self.chunk_index = chunk_index


class BlockDrawError(OCRTranslateError):
    """Не удалось отрисовать блок при реконструкции PDF."""

    pass


class OCRError(OCRTranslateError):
    """Ошибка OCR движка (Tesseract)."""

    pass


class ExportError(OCRTranslateError):
    """Ошибка при экспорте результатов."""

    pass
