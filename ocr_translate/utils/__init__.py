"""
Модуль utils: вспомогательные утилиты.
"""

from ocr_translate.utils.text import (
    sanitize_model_content,
    clean_text_inplace,
    unique_non_blank,
    split_separated,
)
from ocr_translate.utils.geometry import (
    viewport_scale,
    rescale_block,
    rescale_blocks,
    pdf_to_top_left_y,
    baseline_origin,
    sort_blocks_reading_order,
)
from ocr_translate.utils.metrics import (
    Timer,
    init_metrics,
    reset_metrics,
    log_metric,
    report_progress,
)

__all__ = [
    # Text utilities
    "sanitize_model_content",
    "clean_text_inplace",
    "unique_non_blank",
    "split_separated",
    # Geometry utilities
    "viewport_scale",
    "rescale_block",
    "rescale_blocks",
    "pdf_to_top_left_y",
    "baseline_origin",
    "sort_blocks_reading_order",
    # Metrics utilities
    "Timer",
    "init_metrics",
    "reset_metrics",
    "log_metric",
    "report_progress",
]
