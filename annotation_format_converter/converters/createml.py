import logging
from pathlib import Path
from typing import Dict, List, Sequence, Union

from annotation_format_converter.converters.common import CocoLookup, read_annotation_file, write_file
from annotation_format_converter.formats.coco import COCODataset
from annotation_format_converter.formats.createml import (
    CreateMLAnnotation,
    CreateMLAnnotationItem,
    CreateMLCoordinates,
    CreateMLDataset,
    parse_createml,
    serialize_createml,
)
from annotation_format_converter.formats.voc import VOCAnnotation
from annotation_format_converter.util import ensure_extension

logger = logging.getLogger(__name__)


def load_createml_from_file(path: Union[str, Path]) -> CreateMLDataset:
    content = read_annotation_file(path, ".json")
    return parse_createml(content, source=str(path))


def load_createml_from_json_string(json_str: str) -> CreateMLDataset:
    return parse_createml(json_str)


def createml_from_voc(annotations: Sequence[VOCAnnotation]) -> CreateMLDataset:
    entries: List[CreateMLAnnotation] = []
    for voc_annotation in annotations:
        items = []
        for obj in voc_annotation.objects:
            box = obj.bndbox
            items.append(
                CreateMLAnnotationItem(
                    label=obj.name,
                    coordinates=CreateMLCoordinates(
                        x=box.xmin,
                        y=box.ymin,
                        width=box.xmax - box.xmin,
                        height=box.ymax - box.ymin,
                    ),
                )
            )
        entries.append(CreateMLAnnotation(image=voc_annotation.filename, annotations=items))

    logger.info(f"Converted {len(entries)} VOC annotations into CreateML entries")
    return CreateMLDataset(entries)


def createml_from_coco(dataset: COCODataset) -> CreateMLDataset:
    """
    Converts a COCO dataset to CreateML.

    The result has one entry per COCO image, in the order of ``dataset.images``.
    Box coordinates are copied over as is, both formats use [x, y, width, height] from the top-left corner.

    :raises DanglingReferenceError: an annotation points to an image or category id that isn't in the dataset
    """
    lookup = CocoLookup(dataset)

    entries: List[CreateMLAnnotation] = []
    by_image_id: Dict[int, CreateMLAnnotation] = {}
    for image in dataset.images:
        entry = CreateMLAnnotation(image=image.file_name, annotations=[])
        entries.append(entry)
        by_image_id[image.id] = entry

    for coco_annotation in dataset.annotations:
        image = lookup.image_of(coco_annotation)
        category = lookup.category_of(coco_annotation)
        x, y, width, height = coco_annotation.bbox
        by_image_id[image.id].annotations.append(
            CreateMLAnnotationItem(
                label=category.name,
                coordinates=CreateMLCoordinates(x=x, y=y, width=width, height=height),
            )
        )

    logger.info(f"Converted {len(dataset.annotations)} COCO annotations into {len(entries)} CreateML entries")
    return CreateMLDataset(entries)


def export_to_createml_file(dataset: CreateMLDataset, output_path: Union[str, Path]) -> Path:
    """
    Writes the dataset to a .json file. The parent directories are created if needed.

    :raises InvalidPathError: ``output_path`` doesn't have a .json extension. Nothing is written in that case
    :raises WriteError: the file couldn't be written
    """
    output_path = ensure_extension(output_path, ".json")
    return write_file(output_path, serialize_createml(dataset))
