"""
Точка входа для OCR-Translate.

Переводит PDF или изображение через LM Studio с сохранением макета страниц.
"""

from __future__ import annotations
import sys
import logging
import argparse

from ocr_translate.api.lmstudio import LMStudioTranslator
from ocr_translate.core.config import (
    CHUNK_SIZE,
    DEFAULT_LMSTUDIO_BASE,
    DEFAULT_TARGET_LANGUAGE,
    LMSTUDIO_MODEL,
    MAX_FILE_SIZE_MB,
)
from ocr_translate.core.models import TranslationOptions
from ocr_translate.core.types import DocumentStatus, OCRQuality
from ocr_translate.processing.pipeline import translate_file


def setup_logging(verbose: bool = False):
    """Настройка логирования."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ocr-translate",
        description="Перевод PDF/изображений с OCR и сохранением макета",
    )
    parser.add_argument("input", metavar="INPUT", help="PDF или изображение")
    parser.add_argument("-o", "--output", help="Выходной PDF (по умолчанию translated_<имя>)")
    parser.add_argument("--txt", help="Сохранить переведённый текст")
    parser.add_argument("--docx", help="Сохранить DOCX с оригиналом и переводом")
    parser.add_argument("--lang", default=DEFAULT_TARGET_LANGUAGE, help="Целевой язык")
    parser.add_argument(
        "--ocr-quality",
        choices=[q.value for q in OCRQuality],
        default=OCRQuality.MEDIUM.value,
        help="Качество OCR для сканированных страниц",
    )
    parser.add_argument(
        "--no-keywords", action="store_true", help="Не защищать технические термины"
    )
    parser.add_argument(
        "--no-layout", action="store_true", help="Не сохранять позиции блоков"
    )
    parser.add_argument("--lms-base", default=DEFAULT_LMSTUDIO_BASE, help="Адрес LM Studio")
    parser.add_argument("--lms-model", default=LMSTUDIO_MODEL, help="Модель LM Studio")
    parser.add_argument(
        "--max-size-mb", type=float, default=MAX_FILE_SIZE_MB, help="Лимит размера файла"
    )
    parser.add_argument("--metrics", action="store_true", help="Писать CSV метрики")
    parser.add_argument("-v", "--verbose", action="store_true", help="Подробный лог")
    return parser


def main(argv=None):
    """Главная функция запуска приложения."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    options = TranslationOptions(
        preserve_layout=not args.no_layout,
        preserve_keywords=not args.no_keywords,
        ocr_quality=OCRQuality(args.ocr_quality),
        target_language=args.lang,
    )
    translator = LMStudioTranslator(
        tgt_lang=args.lang,
        model=args.lms_model,
        base_url=args.lms_base,
        max_input_chars=CHUNK_SIZE,
    )

    try:
        document = translate_file(
            args.input,
            out_pdf=args.output,
            out_txt=args.txt,
            out_docx=args.docx,
            options=options,
            translate=translator,
            on_progress=lambda p: logging.debug("Прогресс: %d%%", p),
            max_file_size_mb=args.max_size_mb,
            metrics=args.metrics,
        )
    except Exception as e:
        logging.error(f"Ошибка при обработке {args.input}: {e}")
        sys.exit(1)

    if document.status == DocumentStatus.ERROR:
        logging.error(f"Перевод не выполнен: {document.error}")
        sys.exit(1)

    return 0


if __name__ == "__main__":
    main()
