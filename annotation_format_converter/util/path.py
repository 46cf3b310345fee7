from pathlib import Path
from typing import Optional, Union

from annotation_format_converter.errors import InvalidPathError


def get_extension(path: Path) -> Optional[str]:
    name = path.name
    ext_dot_index = name.rfind(".")
    if ext_dot_index == -1:
        return None
    return name[ext_dot_index:]


def has_extension(path: Union[str, Path], extension: str) -> bool:
    """Case-insensitive check of the last extension of the path"""
    ext = get_extension(Path(path))
    return ext is not None and ext.lower() == extension.lower()


def ensure_extension(path: Union[str, Path], extension: str) -> Path:
    path = Path(path)
    if not has_extension(path, extension):
        raise InvalidPathError(path, f"is not a valid {extension.lstrip('.')} file path")
    return path


def replace_extension(filename: str, new_extension: str) -> str:
    """
    Returns the basename of ``filename`` with its extension swapped for ``new_extension``.
    Any folders in ``filename`` are dropped.

    ``images/a.jpg`` -> ``a.xml``
    """
    name = Path(filename).name
    ext = get_extension(Path(name))
    if ext is None or ext == name:
        return name + new_extension
    return name[: -len(ext)] + new_extension


def annotation_path_for_image(image_filename: str, new_extension: str) -> Path:
    """
    Relative path of the annotation file for an image, keeping the image's folders.

    ``images/a.jpg`` -> ``images/a.xml``

    Absolute paths and paths going up with ``..`` would land outside the output directory,
    only the file name is kept for those.
    """
    image_path = Path(image_filename)
    name = replace_extension(image_path.name, new_extension)
    if image_path.is_absolute() or ".." in image_path.parts:
        return Path(name)
    return image_path.parent / name
