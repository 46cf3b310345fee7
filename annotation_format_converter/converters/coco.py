import logging
from pathlib import Path
from typing import Optional, Sequence, Union

from annotation_format_converter.converters.common import read_annotation_file, write_file
from annotation_format_converter.formats.coco import (
    COCOAnnotation,
    COCODataset,
    COCOImage,
    CocoContext,
    make_export_info,
    make_export_license,
    parse_coco,
    serialize_coco,
)
from annotation_format_converter.formats.coco.context import EXPORT_LICENSE_ID
from annotation_format_converter.formats.createml import CreateMLDataset
from annotation_format_converter.formats.voc import VOCAnnotation
from annotation_format_converter.util import ensure_extension, get_image_dimensions

logger = logging.getLogger(__name__)

Number = Union[int, float]


def load_coco_from_file(path: Union[str, Path]) -> COCODataset:
    content = read_annotation_file(path, ".json")
    return parse_coco(content, source=str(path))


def load_coco_from_json_string(json_str: str) -> COCODataset:
    return parse_coco(json_str)


def _new_dataset() -> COCODataset:
    return COCODataset(info=make_export_info(), licenses=[make_export_license()])


def _box_annotation(
    dataset: COCODataset,
    context: CocoContext,
    image_id: int,
    label: str,
    x: Number,
    y: Number,
    width: Number,
    height: Number,
) -> COCOAnnotation:
    category = context.get_or_create(label)
    return COCOAnnotation(
        # Running count of the emitted annotations, so the ids go 0, 1, 2... over the whole dataset
        id=len(dataset.annotations),
        image_id=image_id,
        category_id=category.id,
        bbox=[x, y, width, height],
        area=width * height,
        segmentation=[],
        iscrowd=0,
    )


def coco_from_voc(annotations: Sequence[VOCAnnotation], context: Optional[CocoContext] = None) -> COCODataset:
    """
    Builds a COCO dataset out of Pascal VOC annotations.

    Every VOC annotation becomes one image, with ids starting at 1 in the input order.
    Categories get ids in the order their labels are first encountered.

    :param annotations: Parsed VOC annotations, one per image
    :param context: Categories to start from. A new context is created if not provided
    """
    context = context if context is not None else CocoContext()
    dataset = _new_dataset()

    for index, voc_annotation in enumerate(annotations):
        image = COCOImage(
            id=index + 1,
            license=EXPORT_LICENSE_ID,
            file_name=voc_annotation.filename,
            height=voc_annotation.size.height,
            width=voc_annotation.size.width,
            date_captured="",
        )
        dataset.images.append(image)

        for obj in voc_annotation.objects:
            box = obj.bndbox
            dataset.annotations.append(
                _box_annotation(
                    dataset,
                    context,
                    image.id,
                    obj.name,
                    box.xmin,
                    box.ymin,
                    box.xmax - box.xmin,
                    box.ymax - box.ymin,
                )
            )

    dataset.categories = list(context.categories)
    logger.info(
        f"Converted {len(dataset.images)} VOC annotations into {len(dataset.annotations)} COCO annotations "
        f"with {len(dataset.categories)} categories"
    )
    return dataset


def coco_from_createml(
    createml: CreateMLDataset,
    base_path: Union[str, Path],
    context: Optional[CocoContext] = None,
) -> COCODataset:
    """
    Builds a COCO dataset out of CreateML annotations.

    CreateML doesn't store image dimensions, so every image is opened to read them.

    :param createml: Parsed CreateML annotations
    :param base_path: Directory the image paths in the CreateML file are relative to
    :param context: Categories to start from. A new context is created if not provided
    :raises ImageAccessError: one of the images is missing or can't be decoded
    """
    base_path = Path(base_path)
    context = context if context is not None else CocoContext()
    dataset = _new_dataset()

    for index, entry in enumerate(createml):
        width, height = get_image_dimensions(base_path / entry.image)
        image = COCOImage(
            id=index + 1,
            license=EXPORT_LICENSE_ID,
            file_name=entry.image,
            height=height,
            width=width,
            date_captured="",
        )
        dataset.images.append(image)

        for item in entry.annotations:
            coords = item.coordinates
            dataset.annotations.append(
                _box_annotation(
                    dataset, context, image.id, item.label, coords.x, coords.y, coords.width, coords.height
                )
            )

    dataset.categories = list(context.categories)
    logger.info(
        f"Converted {len(dataset.images)} CreateML entries into {len(dataset.annotations)} COCO annotations "
        f"with {len(dataset.categories)} categories"
    )
    return dataset


def export_to_coco_file(dataset: COCODataset, output_path: Union[str, Path]) -> Path:
    """
    Writes the dataset to a .json file. The parent directories are created if needed.

    :raises InvalidPathError: ``output_path`` doesn't have a .json extension. Nothing is written in that case
    :raises WriteError: the file couldn't be written
    """
    output_path = ensure_extension(output_path, ".json")
    return write_file(output_path, serialize_coco(dataset))
