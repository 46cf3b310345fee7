import logging
import warnings
from pathlib import Path
from typing import Tuple, Union

import PIL.Image

from annotation_format_converter.errors import ImageAccessError

logger = logging.getLogger(__name__)


def get_image_dimensions(image_path: Union[str, Path]) -> Tuple[int, int]:
    """
    Reads the width and height of an image.

    Pillow only decodes the header on open, so the pixel data is never loaded.
    Because of that the decompression bomb limit is lifted while opening, large aerial/satellite tiles are fine.
    The file handle is closed before returning, on success and on failure.

    :raises ImageAccessError: the file doesn't exist or isn't an image Pillow can identify
    """
    image_path = Path(image_path)
    max_pixels = PIL.Image.MAX_IMAGE_PIXELS
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", PIL.Image.DecompressionBombWarning)
            PIL.Image.MAX_IMAGE_PIXELS = None
            with PIL.Image.open(image_path) as image:
                width, height = image.size
    except FileNotFoundError as e:
        raise ImageAccessError(image_path, "file not found") from e
    except PIL.UnidentifiedImageError as e:
        raise ImageAccessError(image_path, "unrecognized image format") from e
    except (OSError, PIL.Image.DecompressionBombError) as e:
        raise ImageAccessError(image_path, str(e)) from e
    finally:
        PIL.Image.MAX_IMAGE_PIXELS = max_pixels
    logger.debug(f"{image_path} is {width}x{height}")
    return width, height
