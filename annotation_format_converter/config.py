import datetime
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict

from annotation_format_converter.util import ensure_extension


class DatasetFormat(str, Enum):
    COCO = "coco"
    VOC = "voc"
    CREATEML = "createml"


OUTPUT_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


class ConversionConfig(BaseModel):
    """
    Everything a single conversion needs to know.

    Built once (usually by the CLI) and never changed afterwards.
    """

    model_config = ConfigDict(frozen=True)

    input_format: DatasetFormat
    output_format: DatasetFormat
    source_path: Path
    """COCO/CreateML .json file, or a directory with VOC .xml files"""
    output_path: Optional[Path] = None
    """Output file (COCO/CreateML) or directory (VOC). Generated next to the source if not set"""

    @property
    def data_dir(self) -> Path:
        """Directory the source annotations live in"""
        if self.input_format == DatasetFormat.VOC:
            return self.source_path
        return self.source_path.parent

    def resolve_output_path(self, now: Optional[datetime.datetime] = None) -> Path:
        """
        Returns where the conversion result should be written.

        If ``output_path`` isn't set:

        - VOC: the directory containing the source
        - COCO/CreateML: ``_annotations.<format>.<YYYYMMDDHHMMSS>.json`` in the directory of the source annotations

        :raises InvalidPathError: explicit COCO/CreateML output path doesn't have a .json extension
        """
        if self.output_format == DatasetFormat.VOC:
            if self.output_path is not None:
                return self.output_path
            return self.source_path.parent

        if self.output_path is not None:
            return ensure_extension(self.output_path, ".json")

        if now is None:
            now = datetime.datetime.now()
        return self.data_dir / f"_annotations.{self.output_format.value}.{now.strftime(OUTPUT_TIMESTAMP_FORMAT)}.json"
