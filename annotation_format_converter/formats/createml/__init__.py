from annotation_format_converter.formats.createml.schema import (
    CreateMLAnnotation,
    CreateMLAnnotationItem,
    CreateMLCoordinates,
    CreateMLDataset,
    parse_createml,
    serialize_createml,
)

__all__ = [
    "CreateMLAnnotation",
    "CreateMLAnnotationItem",
    "CreateMLCoordinates",
    "CreateMLDataset",
    "parse_createml",
    "serialize_createml",
]
