"""
Предобработка растра страницы перед OCR.

Оттенки серого, растяжение контраста, глобальная бинаризация по середине
диапазона яркости и опциональный апскейл. Порог глобальный (не Otsu и не
адаптивный): для набранных технических документов этого достаточно.
"""

from __future__ import annotations
import math
from typing import List, Tuple

from PIL import Image


def to_grayscale(image: Image.Image) -> Image.Image:
    """
    Яркость по формуле 0.299R + 0.587G + 0.114B.

    Режим "L" в Pillow использует именно эти коэффициенты (ITU-R 601-2).
    """
    if image.mode == "L":
        return image
    return image.convert("RGB").convert("L")


def stretch_lut(lo: int, hi: int) -> List[float]:
    """Таблица линейного растяжения [lo, hi] -> [0, 255]."""
    rng = (hi - lo) or 1
    return [(g - lo) / rng * 255.0 for g in range(256)]


def contrast_stretch(gray: Image.Image) -> Tuple[Image.Image, int, int]:
    """
    Растягивает контраст серого изображения на весь диапазон.

    Returns:
        (растянутое изображение, min, max) - min/max исходной яркости
    """
    lo, hi = gray.getextrema()
    lut = [min(255, max(0, int(round(v)))) for v in stretch_lut(lo, hi)]
    return gray.point(lut), lo, hi


def binarize(gray: Image.Image, threshold: float) -> Image.Image:
    """Пиксели выше порога становятся белыми (255), остальные чёрными (0)."""
    lut = [255 if g > threshold else 0 for g in range(256)]
    return gray.point(lut)


def optimize_for_ocr(image: Image.Image) -> Image.Image:
    """
    Готовит изображение к OCR: серый, растяжение контраста, бинаризация.

    Порог глобальный: середина наблюдаемого диапазона яркости,
    min + 0.5 * (max - min). Результат записывается одинаково во все три
    канала; альфа-канал (если есть) сохраняется без изменений.

    Args:
        image: Исходное изображение страницы

    Returns:
        Новое бинаризованное изображение (RGB или RGBA)
    """
    stretched, lo, hi = contrast_stretch(to_grayscale(image))

    if hi == lo:
        # Однотонная страница: переднего плана нет
        binary = Image.new("L", image.size, 255)
    else:
        # Порог в единицах растянутой шкалы
        threshold = lo + 0.5 * (hi - lo)
        cut = (threshold - lo) / (hi - lo) * 255.0
        binary = binarize(stretched, cut)

    if image.mode == "RGBA":
        alpha = image.getchannel("A")
        return Image.merge("RGBA", (binary, binary, binary, alpha))

    return Image.merge("RGB", (binary, binary, binary))


def upscale(
    image: Image.Image, target_dpi: float = 300, current_dpi: float = 72
) -> Image.Image:
    """
    Увеличивает изображение с высококачественной интерполяцией.

    Чисто геометрическое масштабирование, без повышения резкости.
    Если коэффициент <= 1, изображение возвращается как есть.
    """
    scale = target_dpi / current_dpi
    if scale <= 1:
        return image

    size = (math.floor(image.width * scale), math.floor(image.height * scale))
    return image.resize(size, Image.Resampling.LANCZOS)
