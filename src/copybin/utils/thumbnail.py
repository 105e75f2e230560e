import io
import logging

from PIL import Image, UnidentifiedImageError

from copybin.exceptions import ImageDecodeError

logger = logging.getLogger(__name__)

DEFAULT_MAX_DIMENSION = 360
DEFAULT_QUALITY = 0.65


def make_thumbnail(
    data: bytes,
    max_dimension: int = DEFAULT_MAX_DIMENSION,
    quality: float = DEFAULT_QUALITY,
) -> bytes:
    """Downscale ``data`` so its longer edge fits ``max_dimension`` and
    re-encode it as JPEG.

    Images already within bounds keep their size. ``quality`` is a 0-1
    factor. Raises ``ImageDecodeError`` when the bytes are not an image
    Pillow can read.
    """
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise ImageDecodeError(f"Cannot decode image ({len(data)} bytes): {exc}") from exc

    if image.mode == "P" and "transparency" in image.info:
        image = image.convert("RGBA")

    if image.mode in ("RGBA", "LA"):
        background = Image.new("RGB", image.size, (255, 255, 255))
        background.paste(image, mask=image.split()[-1])
        image = background
    elif image.mode != "RGB":
        image = image.convert("RGB")

    original_size = image.size
    image.thumbnail((max_dimension, max_dimension))

    output = io.BytesIO()
    image.save(output, format="JPEG", quality=int(round(quality * 100)))
    thumbnail = output.getvalue()
    logger.debug("Thumbnail %sx%s -> %sx%s, %d -> %d bytes",
                 original_size[0], original_size[1], image.size[0], image.size[1],
                 len(data), len(thumbnail))
    return thumbnail
