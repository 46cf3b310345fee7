import logging
from pathlib import Path
from typing import Dict, List, Sequence, Union

from annotation_format_converter.converters.common import CocoLookup, read_annotation_file, write_file
from annotation_format_converter.errors import EmptyDirectoryError, InvalidPathError, WriteError
from annotation_format_converter.formats.coco import COCODataset
from annotation_format_converter.formats.createml import CreateMLDataset
from annotation_format_converter.formats.voc import (
    DEFAULT_DATABASE,
    DEFAULT_DEPTH,
    VOCAnnotation,
    VOCBndbox,
    VOCObject,
    VOCPose,
    VOCSize,
    VOCSource,
    parse_voc,
    serialize_voc,
)
from annotation_format_converter.util import annotation_path_for_image, get_image_dimensions, has_extension

logger = logging.getLogger(__name__)


def load_voc_from_file(path: Union[str, Path]) -> VOCAnnotation:
    content = read_annotation_file(path, ".xml")
    return parse_voc(content, source=str(path))


def load_voc_from_dir(path: Union[str, Path]) -> List[VOCAnnotation]:
    """
    Loads every .xml file directly inside the directory (subdirectories aren't visited).
    Files are read in the order of their names.

    :raises InvalidPathError: ``path`` is not a directory
    :raises EmptyDirectoryError: the directory has no .xml files
    :raises MalformedDocumentError: one of the files couldn't be parsed. Loading stops at that file
    """
    path = Path(path)
    if not path.is_dir():
        raise InvalidPathError(path, "is not a directory")

    xml_files = sorted(p for p in path.iterdir() if p.is_file() and has_extension(p, ".xml"))
    if len(xml_files) == 0:
        raise EmptyDirectoryError(path)

    annotations = [load_voc_from_file(xml_file) for xml_file in xml_files]
    logger.info(f"Loaded {len(annotations)} VOC annotations from {path}")
    return annotations


def _annotation_shell(filename: str, width: int, height: int) -> VOCAnnotation:
    return VOCAnnotation(
        folder="",
        filename=filename,
        path=filename,
        source=VOCSource(database=DEFAULT_DATABASE),
        size=VOCSize(width=width, height=height, depth=DEFAULT_DEPTH),
        segmented=0,
        objects=[],
    )


def _box_object(label: str, x: float, y: float, width: float, height: float) -> VOCObject:
    # int() truncates, it doesn't round
    return VOCObject(
        name=label,
        pose=VOCPose.UNSPECIFIED,
        truncated=0,
        difficult=0,
        occluded=0,
        bndbox=VOCBndbox(xmin=int(x), ymin=int(y), xmax=int(x + width), ymax=int(y + height)),
    )


def voc_from_coco(dataset: COCODataset) -> List[VOCAnnotation]:
    """
    Splits a COCO dataset into per-image VOC annotations.

    The result has one annotation per COCO image, in the order of ``dataset.images``,
    including the images that have no annotations.

    :raises DanglingReferenceError: an annotation points to an image or category id that isn't in the dataset
    """
    lookup = CocoLookup(dataset)

    # Built in input order, indexed by the image id
    annotations: List[VOCAnnotation] = []
    by_image_id: Dict[int, VOCAnnotation] = {}
    for image in dataset.images:
        voc_annotation = _annotation_shell(image.file_name, image.width, image.height)
        annotations.append(voc_annotation)
        by_image_id[image.id] = voc_annotation

    for coco_annotation in dataset.annotations:
        image = lookup.image_of(coco_annotation)
        category = lookup.category_of(coco_annotation)
        x, y, width, height = coco_annotation.bbox
        by_image_id[image.id].objects.append(_box_object(category.name, x, y, width, height))

    logger.info(f"Converted {len(dataset.annotations)} COCO annotations into {len(annotations)} VOC annotations")
    return annotations


def voc_from_createml(createml: CreateMLDataset, base_path: Union[str, Path]) -> List[VOCAnnotation]:
    """
    Converts CreateML annotations to VOC, one VOC annotation per CreateML entry, in the same order.

    :param createml: Parsed CreateML annotations
    :param base_path: Directory the image paths in the CreateML file are relative to
    :raises ImageAccessError: one of the images is missing or can't be decoded
    """
    base_path = Path(base_path)
    annotations: List[VOCAnnotation] = []

    for entry in createml:
        width, height = get_image_dimensions(base_path / entry.image)
        voc_annotation = _annotation_shell(entry.image, width, height)
        for item in entry.annotations:
            coords = item.coordinates
            voc_annotation.objects.append(_box_object(item.label, coords.x, coords.y, coords.width, coords.height))
        annotations.append(voc_annotation)

    logger.info(f"Converted {len(annotations)} CreateML entries into VOC annotations")
    return annotations


def export_to_voc_dir(annotations: Sequence[VOCAnnotation], output_dir: Union[str, Path]) -> List[Path]:
    """
    Writes every annotation into its own .xml file in ``output_dir``.
    The file is named after the image and keeps its folders, ``images/a.jpg`` is saved as ``images/a.xml``.

    The directories are created if they don't exist.

    :raises WriteError: two annotations would be written to the same file (checked before anything is written),
        or a file couldn't be written. Files written before the failing one stay on disk.
    :return: Paths of the written files
    """
    output_dir = Path(output_dir)

    targets: Dict[Path, str] = {}
    for annotation in annotations:
        xml_path = output_dir / annotation_path_for_image(annotation.filename, ".xml")
        if xml_path in targets:
            raise WriteError(
                xml_path, f"images {targets[xml_path]} and {annotation.filename} map to the same annotation file"
            )
        targets[xml_path] = annotation.filename

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise WriteError(output_dir, str(e)) from e

    written: List[Path] = []
    for xml_path, annotation in zip(targets, annotations):
        written.append(write_file(xml_path, serialize_voc(annotation)))

    logger.info(f"Saved {len(written)} VOC annotations to {output_dir}")
    return written
