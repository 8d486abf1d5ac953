import pytest

from batch_ocr.services.errors import PreprocessingError
from batch_ocr.services.preprocess import normalize_image


@pytest.mark.parametrize("builder", ["build_png_bytes", "build_jpeg_bytes"])
def test_normalize_image_greyscale_full_range(docs, builder):
    img = normalize_image(getattr(docs, builder)())

    assert img.mode == "L"
    assert img.size == (120, 40)
    lo, hi = img.getextrema()
    # autocontrast stretches the 90..180 input to the full range
    assert lo == 0
    assert hi == 255


def test_normalize_image_rejects_garbage(docs):
    with pytest.raises(PreprocessingError):
        normalize_image(docs.build_broken_png_bytes())


def test_normalize_image_rejects_non_image():
    with pytest.raises(PreprocessingError):
        normalize_image(b"definitely not pixels")


def test_normalize_image_rejects_decompression_bombs(docs, monkeypatch):
    from PIL import Image

    # 120x40 = 4800 pixels, more than twice the lowered limit
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)

    with pytest.raises(PreprocessingError, match="Could not decode image"):
        normalize_image(docs.build_png_bytes())
