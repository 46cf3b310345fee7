from annotation_format_converter.formats.voc.schema import (
    DEFAULT_DATABASE,
    DEFAULT_DEPTH,
    VOCAnnotation,
    VOCBndbox,
    VOCObject,
    VOCPose,
    VOCSize,
    VOCSource,
    build_voc_xml,
    parse_voc,
    serialize_voc,
)

__all__ = [
    "DEFAULT_DATABASE",
    "DEFAULT_DEPTH",
    "VOCAnnotation",
    "VOCBndbox",
    "VOCObject",
    "VOCPose",
    "VOCSize",
    "VOCSource",
    "build_voc_xml",
    "parse_voc",
    "serialize_voc",
]
