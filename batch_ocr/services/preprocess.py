import io
import logging

from PIL import Image, ImageOps, UnidentifiedImageError

from .errors import PreprocessingError

logger = logging.getLogger("batch_ocr.preprocess")


def normalize_image(data: bytes) -> Image.Image:
    """
    Decode image bytes and prepare them for recognition.

    The image is converted to greyscale and its histogram stretched to the
    full 0-255 range. The result stays in memory.
    """
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise PreprocessingError(f"Could not decode image: {e}") from e

    try:
        img = ImageOps.exif_transpose(img)
        grey = ImageOps.grayscale(img)
        out = ImageOps.autocontrast(grey)
    except (OSError, ValueError) as e:
        raise PreprocessingError(f"Could not normalize image: {e}") from e

    logger.debug("normalize_image: size=%sx%s mode=%s", out.width, out.height, out.mode)
    return out
