from pathlib import Path
from typing import Callable

import PIL.Image
import pytest

ImageFactory = Callable[..., Path]


@pytest.fixture
def make_image(tmp_path) -> ImageFactory:
    """Creates a blank image of the given size. Relative names are placed in ``tmp_path``"""

    def _make(name: str, width: int, height: int, directory: Path = tmp_path) -> Path:
        path = directory / name
        path.parent.mkdir(parents=True, exist_ok=True)
        PIL.Image.new("RGB", (width, height)).save(path)
        return path

    return _make
