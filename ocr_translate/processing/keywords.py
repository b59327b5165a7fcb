"""
Защита технических терминов от перевода.

Ключевые слова языков программирования, SQL и общие технические термины
оборачиваются в <PRESERVE>...</PRESERVE>, чтобы переводчик оставил их как есть.
"""

from __future__ import annotations
import re
from typing import Dict, Iterable, List, Pattern

from ocr_translate.core.config import PRESERVE_CLOSE, PRESERVE_OPEN


PROGRAMMING_KEYWORDS: Dict[str, List[str]] = {
    "python": [
        "def", "class", "import", "from", "__init__", "self", "lambda", "yield",
        "async", "await", "with", "as", "try", "except", "finally", "raise",
        "assert", "pass", "return", "break", "continue", "if", "elif", "else",
        "for", "while", "in", "is", "not", "and", "or", "True", "False", "None",
        "print", "len", "range", "enumerate", "zip", "map", "filter", "list",
        "dict", "set", "tuple", "str", "int", "float", "bool",
    ],
    "javascript": [
        "function", "const", "let", "var", "class", "extends", "import", "export",
        "default", "async", "await", "promise", "then", "catch", "finally", "if",
        "else", "switch", "case", "for", "while", "do", "break", "continue",
        "return", "new", "this", "typeof", "instanceof", "delete", "void", "yield",
        "true", "false", "null", "undefined", "console", "log", "require",
        "module", "exports", "prototype", "constructor",
    ],
    "java": [
        "public", "private", "protected", "class", "interface", "extends",
        "implements", "abstract", "final", "static", "synchronized", "volatile",
        "transient", "native", "strictfp", "package", "import", "if", "else",
        "switch", "case", "for", "while", "do", "break", "continue", "return",
        "try", "catch", "finally", "throw", "throws", "new", "this", "super",
        "void", "int", "long", "double", "float", "boolean", "char", "byte",
        "short", "true", "false", "null",
    ],
    "sql": [
        "SELECT", "FROM", "WHERE", "JOIN", "INNER", "LEFT", "RIGHT", "OUTER", "ON",
        "GROUP BY", "ORDER BY", "HAVING", "INSERT", "UPDATE", "DELETE", "CREATE",
        "ALTER", "DROP", "TABLE", "INDEX", "VIEW", "PROCEDURE", "FUNCTION",
        "TRIGGER", "PRIMARY KEY", "FOREIGN KEY", "UNIQUE", "NOT NULL", "DEFAULT",
        "CHECK", "AND", "OR", "NOT", "IN", "LIKE", "BETWEEN", "IS NULL",
        "IS NOT NULL", "AS", "DISTINCT", "COUNT", "SUM", "AVG", "MIN", "MAX",
    ],
    "common_terms": [
        "API", "HTTP", "HTTPS", "GET", "POST", "PUT", "DELETE", "REST", "JSON",
        "XML", "HTML", "CSS", "URL", "URI", "CRUD", "MVC", "OOP", "async", "sync",
        "callback", "promise", "array", "object", "string", "integer", "boolean",
        "float", "double", "char", "byte", "null", "undefined", "void", "true",
        "false", "debug", "error", "exception", "stack", "heap", "queue", "tree",
        "hash", "algorithm", "complexity", "O(n)", "O(1)", "O(log n)",
    ],
}

# Без повторов, в порядке первого появления
ALL_KEYWORDS: List[str] = list(
    dict.fromkeys(kw for group in PROGRAMMING_KEYWORDS.values() for kw in group)
)

_UNMARK_RE = re.compile(re.escape(PRESERVE_OPEN) + r"(.*?)" + re.escape(PRESERVE_CLOSE))


def build_keyword_pattern(keywords: Iterable[str]) -> Pattern[str]:
    """
    Единое регулярное выражение-альтернатива для всех ключевых слов.

    Длинные слова идут первыми, чтобы "IS NOT NULL" не перекрывался "IS".
    Границы слова заданы через (?<!\\w) / (?!\\w): для обычных слов это то же,
    что \\b, но работает и для терминов вида "O(n)".
    """
    ordered = sorted(set(keywords), key=len, reverse=True)
    if not ordered:
        raise ValueError("keyword list is empty")
    alternation = "|".join(re.escape(kw) for kw in ordered)
    return re.compile(r"(?<!\w)(" + alternation + r")(?!\w)")


_DEFAULT_PATTERN = build_keyword_pattern(ALL_KEYWORDS)


def mark_keywords(text: str, pattern: Pattern[str] = _DEFAULT_PATTERN) -> str:
    """
    Оборачивает все вхождения ключевых слов в маркеры PRESERVE.

    Сравнение чувствительно к регистру, размечаются все вхождения.

    Args:
        text: Исходный текст
        pattern: Скомпилированный шаблон (по умолчанию - полный словарь)

    Returns:
        Размеченный текст
    """
    if not text:
        return text
    return pattern.sub(PRESERVE_OPEN + r"\1" + PRESERVE_CLOSE, text)


def unmark_keywords(text: str) -> str:
    """Удаляет маркеры PRESERVE, оставляя сами термины."""
    if not text:
        return text
    return _UNMARK_RE.sub(r"\1", text)
