import logging
from pathlib import Path
from typing import Dict, Union

from annotation_format_converter.errors import DanglingReferenceError, InvalidPathError, WriteError
from annotation_format_converter.formats.coco import COCOAnnotation, COCOCategory, COCODataset, COCOImage
from annotation_format_converter.util import ensure_extension

logger = logging.getLogger(__name__)


class CocoLookup:
    """
    Id -> image/category index of a COCO dataset, used when converting out of COCO.
    """

    def __init__(self, dataset: COCODataset):
        self.images: Dict[int, COCOImage] = {image.id: image for image in dataset.images}
        self.categories: Dict[int, COCOCategory] = {category.id: category for category in dataset.categories}

    def image_of(self, annotation: COCOAnnotation) -> COCOImage:
        image = self.images.get(annotation.image_id)
        if image is None:
            raise DanglingReferenceError("image", annotation.image_id, annotation.id)
        return image

    def category_of(self, annotation: COCOAnnotation) -> COCOCategory:
        category = self.categories.get(annotation.category_id)
        if category is None:
            raise DanglingReferenceError("category", annotation.category_id, annotation.id)
        return category


def read_annotation_file(path: Union[str, Path], extension: str) -> bytes:
    path = ensure_extension(path, extension)
    if not path.is_file():
        raise InvalidPathError(path, "does not exist")
    logger.debug(f"Reading {path}")
    try:
        return path.read_bytes()
    except OSError as e:
        raise InvalidPathError(path, f"couldn't be read: {e}") from e


def write_file(path: Path, content: bytes) -> Path:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            f.write(content)
    except OSError as e:
        raise WriteError(path, str(e)) from e
    logger.debug(f"Wrote {path}")
    return path
