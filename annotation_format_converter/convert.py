import logging
from pathlib import Path
from typing import Callable, Dict, List, Union

from annotation_format_converter.config import ConversionConfig, DatasetFormat
from annotation_format_converter.converters.coco import (
    coco_from_createml,
    coco_from_voc,
    export_to_coco_file,
    load_coco_from_file,
)
from annotation_format_converter.converters.createml import (
    createml_from_coco,
    createml_from_voc,
    export_to_createml_file,
    load_createml_from_file,
)
from annotation_format_converter.converters.voc import (
    export_to_voc_dir,
    load_voc_from_dir,
    voc_from_coco,
    voc_from_createml,
)
from annotation_format_converter.errors import InvalidPathError
from annotation_format_converter.formats.coco import COCODataset
from annotation_format_converter.formats.createml import CreateMLDataset
from annotation_format_converter.formats.voc import VOCAnnotation

logger = logging.getLogger(__name__)


def load_as_coco(config: ConversionConfig) -> COCODataset:
    if config.input_format == DatasetFormat.COCO:
        return load_coco_from_file(config.source_path)
    if config.input_format == DatasetFormat.VOC:
        return coco_from_voc(load_voc_from_dir(config.source_path))
    return coco_from_createml(load_createml_from_file(config.source_path), config.data_dir)


def load_as_voc(config: ConversionConfig) -> List[VOCAnnotation]:
    if config.input_format == DatasetFormat.VOC:
        return load_voc_from_dir(config.source_path)
    if config.input_format == DatasetFormat.COCO:
        return voc_from_coco(load_coco_from_file(config.source_path))
    return voc_from_createml(load_createml_from_file(config.source_path), config.data_dir)


def load_as_createml(config: ConversionConfig) -> CreateMLDataset:
    if config.input_format == DatasetFormat.CREATEML:
        return load_createml_from_file(config.source_path)
    if config.input_format == DatasetFormat.VOC:
        return createml_from_voc(load_voc_from_dir(config.source_path))
    return createml_from_coco(load_coco_from_file(config.source_path))


def _convert_to_coco(config: ConversionConfig, output_path: Path) -> Path:
    return export_to_coco_file(load_as_coco(config), output_path)


def _convert_to_voc(config: ConversionConfig, output_path: Path) -> Path:
    export_to_voc_dir(load_as_voc(config), output_path)
    return output_path


def _convert_to_createml(config: ConversionConfig, output_path: Path) -> Path:
    return export_to_createml_file(load_as_createml(config), output_path)


ConvertFunction = Callable[[ConversionConfig, Path], Path]

converters: Dict[DatasetFormat, ConvertFunction] = {
    DatasetFormat.COCO: _convert_to_coco,
    DatasetFormat.VOC: _convert_to_voc,
    DatasetFormat.CREATEML: _convert_to_createml,
}


def convert(config: ConversionConfig) -> Path:
    """
    Runs a single conversion: reads the source annotations, converts them and writes the result.

    The output path is checked before anything is read, so an invalid output path never leaves a file behind.
    Any error aborts the conversion. For VOC output, files written before the error aren't removed.

    :return: Path of the written file (COCO/CreateML) or directory (VOC)
    """
    if not config.source_path.exists():
        raise InvalidPathError(config.source_path, "does not exist")

    output_path = config.resolve_output_path()
    logger.debug(
        f"Converting {config.source_path} ({config.input_format.value}) "
        f"to {output_path} ({config.output_format.value})"
    )
    return converters[config.output_format](config, output_path)


def convert_dataset(
    input_format: Union[str, DatasetFormat],
    output_format: Union[str, DatasetFormat],
    source_path: Union[str, Path],
    output_path: Union[str, Path, None] = None,
) -> Path:
    """Shortcut for building a :class:`ConversionConfig` and running :func:`convert`"""
    config = ConversionConfig(
        input_format=DatasetFormat(input_format),
        output_format=DatasetFormat(output_format),
        source_path=Path(source_path),
        output_path=Path(output_path) if output_path is not None else None,
    )
    return convert(config)
