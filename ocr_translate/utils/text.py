"""
Утилиты для обработки текста.

Этот модуль содержит функции для очистки ответов модели и нормализации текста.
"""

from __future__ import annotations
import re
from typing import Iterable, List


def sanitize_model_content(s: str) -> str:
    """
    Очищает ответ модели от лишних префиксов и форматирования.

    Args:
        s: Текст ответа модели

    Returns:
        Очищенный текст
    """
    s = s.strip()

    # Удаляем типичные префиксы
    bad_prefixes = [
        "```",
        "**",
        "Translation:",
        "TRANSLATION:",
        "Tradução:",
        "TRADUÇÃO:",
        "Here is the translation:",
    ]

    for bp in bad_prefixes:
        if s.lower().startswith(bp.lower()):
            s = s[len(bp) :].lstrip()

    # Удаляем закрывающие тройные кавычки
    if s.endswith("```"):
        s = s[:-3].strip()

    return s


def clean_text_inplace(text: str) -> str:
    """
    Очищает текст от мягких переносов и лишних пробелов.

    Args:
        text: Исходный текст

    Returns:
        Очищенный текст
    """
    if not text:
        return text

    # Удаляем мягкий перенос (U+00AD) и неразрывный пробел (U+00A0)
    text = text.replace("\u00ad", "").replace("\u00a0", " ")

    # Нормализуем пробелы (заменяем множественные на один)
    return " ".join(text.split())


def unique_non_blank(texts: Iterable[str]) -> List[str]:
    """
    Уникальные непустые строки (после trim) в порядке первого появления.

    Args:
        texts: Исходные строки

    Returns:
        Список уникальных строк
    """
    seen = set()
    out: List[str] = []
    for t in texts:
        key = t.strip()
        if not key or key in seen:
            continue
        seen.add(key)
        out.append(key)
    return out


def split_separated(text: str, token: str, line_only: bool = True) -> List[str]:
    """
    Делит текст по разделителю блоков.

    При line_only=True разделителем считается только токен на отдельной
    строке (пробелы вокруг допускаются): тот же токен внутри текста блока
    текст не режет. При line_only=False токен режет текст в любом месте.
    """
    if line_only:
        pattern = re.compile(r"\s*\n[ \t]*" + re.escape(token) + r"[ \t]*\n\s*")
    else:
        pattern = re.compile(r"\s*" + re.escape(token) + r"\s*")
    return [part.strip() for part in pattern.split(text)]
