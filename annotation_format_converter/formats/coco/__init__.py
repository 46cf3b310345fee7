from annotation_format_converter.formats.coco.context import CocoContext, make_export_info, make_export_license
from annotation_format_converter.formats.coco.schema import (
    COCOAnnotation,
    COCOCategory,
    COCODataset,
    COCOImage,
    COCOInfo,
    COCOLicense,
    parse_coco,
    serialize_coco,
)

__all__ = [
    "CocoContext",
    "make_export_info",
    "make_export_license",
    "COCOAnnotation",
    "COCOCategory",
    "COCODataset",
    "COCOImage",
    "COCOInfo",
    "COCOLicense",
    "parse_coco",
    "serialize_coco",
]
