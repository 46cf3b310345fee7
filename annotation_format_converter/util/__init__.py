from .image import get_image_dimensions
from .path import get_extension, has_extension, ensure_extension, replace_extension, annotation_path_for_image

__all__ = [
    "get_image_dimensions",
    "get_extension",
    "has_extension",
    "ensure_extension",
    "replace_extension",
    "annotation_path_for_image",
]
