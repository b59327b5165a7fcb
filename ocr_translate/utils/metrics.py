"""
Утилиты для сбора метрик и профилирования.

Этот модуль содержит инструменты для измерения времени выполнения и логирования метрик.
"""

from __future__ import annotations
import os
import time
import csv
from typing import Callable, Optional, Tuple

# Путь к CSV текущего прогона; None - метрики выключены
METRICS_PATH: Optional[str] = None

METRICS_COLUMNS = ("ts", "stage", "page", "sub", "duration_ms", "count", "size_bytes", "info")


def _append_row(path: str, row, mode: str = "a") -> None:
    with open(path, mode, newline="", encoding="utf-8") as f:
        csv.writer(f).writerow(row)


class Timer:
    """
    Простой таймер для измерения времени выполнения.

    Example:
        timer = Timer()
        # ... код ...
        duration_ms = timer.ms()
    """

    def __init__(self) -> None:
        self.t0 = time.perf_counter()

    def ms(self) -> int:
        """Возвращает прошедшее время в миллисекундах."""
        return int((time.perf_counter() - self.t0) * 1000)


def init_metrics(out_path: str) -> str:
    """
    Инициализирует файл метрик рядом с выходным файлом.

    Создаёт CSV файл с именем {base}.metrics.csv и записывает заголовок.

    Args:
        out_path: Путь к выходному PDF файлу

    Returns:
        Путь к файлу метрик
    """
    global METRICS_PATH

    base, _ = os.path.splitext(out_path)
    METRICS_PATH = f"{base}.metrics.csv"

    _append_row(METRICS_PATH, METRICS_COLUMNS, mode="w")

    return METRICS_PATH


def reset_metrics() -> None:
    """Отключает запись метрик."""
    global METRICS_PATH
    METRICS_PATH = None


def log_metric(
    stage: str,
    page: Optional[int] = None,
    sub: str = "",
    duration_ms: Optional[int] = None,
    count: Optional[int] = None,
    size_bytes: Optional[int] = None,
    info: str = "",
) -> None:
    """Дописывает строку метрики; без init_metrics ничего не делает."""
    if not METRICS_PATH:
        return

    values = (page, sub, duration_ms, count, size_bytes, info)
    _append_row(
        METRICS_PATH,
        [time.strftime("%Y-%m-%d %H:%M:%S"), stage] + ["" if v is None else v for v in values],
    )


def report_progress(
    on_progress: Optional[Callable[[int], None]],
    progress_range: Tuple[int, int],
    done: int,
    total: int,
) -> int:
    """
    Сообщает прогресс этапа, отображённый в поддиапазон общего прогресса.

    Args:
        on_progress: Колбэк прогресса (может быть None)
        progress_range: (начало, конец) поддиапазона в процентах
        done: Завершено шагов
        total: Всего шагов

    Returns:
        Отправленное значение прогресса
    """
    lo, hi = progress_range
    fraction = done / total if total > 0 else 1.0
    value = int(round(lo + (hi - lo) * min(1.0, fraction)))
    if on_progress is not None:
        on_progress(value)
    return value
