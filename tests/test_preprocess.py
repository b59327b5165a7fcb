# tests/test_preprocess.py
"""
Raster preprocessing tests: grayscale, contrast stretch, binarization, upscale.
"""

from PIL import Image

from ocr_translate.processing.preprocess import (
    binarize,
    contrast_stretch,
    optimize_for_ocr,
    to_grayscale,
    upscale,
)


def _two_tone(mode="RGB", dark=(60, 60, 60), light=(180, 180, 180), size=(4, 2)):
    """Left half dark, right half light"""
    img = Image.new(mode, size, light if mode == "RGB" else light + (255,))
    for x in range(size[0] // 2):
        for y in range(size[1]):
            img.putpixel((x, y), dark if mode == "RGB" else dark + (128,))
    return img


class TestGrayscale:
    def test_luminance_weights(self):
        img = Image.new("RGB", (1, 1), (255, 0, 0))

        assert to_grayscale(img).getpixel((0, 0)) == 76  # 0.299 * 255

    def test_gray_input_unchanged(self):
        img = Image.new("L", (2, 2), 100)

        assert to_grayscale(img) is img


class TestContrastStretch:
    def test_stretch_to_full_range(self):
        gray = to_grayscale(_two_tone())

        stretched, lo, hi = contrast_stretch(gray)

        assert (lo, hi) == (60, 180)
        assert stretched.getextrema() == (0, 255)

    def test_binarize_threshold(self):
        gray = Image.new("L", (2, 1))
        gray.putpixel((0, 0), 100)
        gray.putpixel((1, 0), 101)

        binary = binarize(gray, 100)

        assert binary.getpixel((0, 0)) == 0
        assert binary.getpixel((1, 0)) == 255


class TestOptimizeForOcr:
    """Binarization at the midpoint of the observed luminance range"""

    def test_output_is_black_and_white(self):
        result = optimize_for_ocr(_two_tone())

        assert result.mode == "RGB"
        assert result.getpixel((0, 0)) == (0, 0, 0)
        assert result.getpixel((3, 0)) == (255, 255, 255)

    def test_low_contrast_scan(self):
        """Faint text on a gray page still separates"""
        result = optimize_for_ocr(_two_tone(dark=(120, 120, 120), light=(140, 140, 140)))

        assert result.getpixel((0, 1)) == (0, 0, 0)
        assert result.getpixel((3, 1)) == (255, 255, 255)

    def test_alpha_preserved(self):
        img = _two_tone(mode="RGBA")

        result = optimize_for_ocr(img)

        assert result.mode == "RGBA"
        assert result.getpixel((0, 0)) == (0, 0, 0, 128)
        assert result.getpixel((3, 0)) == (255, 255, 255, 255)

    def test_uniform_page_is_white(self):
        result = optimize_for_ocr(Image.new("RGB", (3, 3), (200, 200, 200)))

        assert result.getextrema() == ((255, 255), (255, 255), (255, 255))

    def test_input_not_modified(self):
        img = _two_tone()

        optimize_for_ocr(img)

        assert img.getpixel((0, 0)) == (60, 60, 60)


class TestUpscale:
    def test_upscale_size(self):
        img = Image.new("RGB", (100, 50))

        result = upscale(img, target_dpi=450, current_dpi=300)

        assert result.size == (150, 75)

    def test_integer_scale(self):
        img = Image.new("RGB", (144, 72))

        assert upscale(img, target_dpi=216, current_dpi=72).size == (432, 216)

    def test_no_downscale(self):
        img = Image.new("RGB", (100, 50))

        assert upscale(img, target_dpi=200, current_dpi=300) is img
