import logging
from enum import Enum
from typing import List, Optional, Union

from lxml import etree
from lxml.etree import ElementBase
from pydantic import BaseModel, Field

from annotation_format_converter.errors import MalformedDocumentError

logger = logging.getLogger(__name__)

DEFAULT_DATABASE = "annotation-format-converter"
DEFAULT_DEPTH = 3


class VOCPose(str, Enum):
    FRONT = "front"
    REAR = "rear"
    LEFT = "left"
    RIGHT = "right"
    UNSPECIFIED = "unspecified"


class VOCSource(BaseModel):
    database: str = ""
    annotation: str = ""
    image: str = ""


class VOCSize(BaseModel):
    width: int
    height: int
    depth: int = DEFAULT_DEPTH


class VOCBndbox(BaseModel):
    xmin: int
    ymin: int
    xmax: int
    ymax: int


class VOCObject(BaseModel):
    name: str
    pose: VOCPose = VOCPose.UNSPECIFIED
    truncated: int = 0
    difficult: int = 0
    occluded: int = 0
    bndbox: VOCBndbox


class VOCAnnotation(BaseModel):
    """
    Annotation of a single image in the Pascal VOC format.
    One of these is stored in every .xml file of a VOC dataset.
    """

    folder: str = ""
    filename: str
    path: str = ""
    source: VOCSource = Field(default_factory=VOCSource)
    size: VOCSize
    segmented: int = 0
    objects: List[VOCObject] = []


# ======== Parsing ======== #


def _text(elem: Optional[ElementBase], tag: str, default: Optional[str] = None) -> Optional[str]:
    if elem is None:
        return default
    child = elem.find(tag)
    if child is None or child.text is None:
        return default
    return child.text.strip()


def _required_text(elem: Optional[ElementBase], tag: str, source: str) -> str:
    value = _text(elem, tag)
    if value is None:
        raise MalformedDocumentError(source, f"missing required element <{tag}>")
    return value


def _to_int(value: Optional[str], tag: str, source: str, default: Optional[int] = None) -> int:
    if value is None or value == "":
        if default is None:
            raise MalformedDocumentError(source, f"missing required element <{tag}>")
        return default
    try:
        # Some tools write the box corners as decimals, those are truncated
        return int(float(value))
    except (ValueError, OverflowError) as e:
        raise MalformedDocumentError(source, f"<{tag}> has a non-numeric or non-finite value {value!r}") from e


def _parse_pose(value: Optional[str], source: str) -> VOCPose:
    if value is None or value == "":
        return VOCPose.UNSPECIFIED
    try:
        return VOCPose(value.lower())
    except ValueError:
        logger.warning(f"{source}: unknown pose {value!r}, using {VOCPose.UNSPECIFIED.value!r}")
        return VOCPose.UNSPECIFIED


def parse_object(elem: ElementBase, source: str) -> VOCObject:
    bndbox = elem.find("bndbox")
    if bndbox is None:
        raise MalformedDocumentError(source, "an <object> has no <bndbox>")
    return VOCObject(
        name=_required_text(elem, "name", source),
        pose=_parse_pose(_text(elem, "pose"), source),
        truncated=_to_int(_text(elem, "truncated"), "truncated", source, default=0),
        difficult=_to_int(_text(elem, "difficult"), "difficult", source, default=0),
        occluded=_to_int(_text(elem, "occluded"), "occluded", source, default=0),
        bndbox=VOCBndbox(
            xmin=_to_int(_text(bndbox, "xmin"), "xmin", source),
            ymin=_to_int(_text(bndbox, "ymin"), "ymin", source),
            xmax=_to_int(_text(bndbox, "xmax"), "xmax", source),
            ymax=_to_int(_text(bndbox, "ymax"), "ymax", source),
        ),
    )


def parse_voc(xml_text: Union[str, bytes], source: str = "<xml>") -> VOCAnnotation:
    """
    Parses the contents of a single Pascal VOC .xml file.

    :param xml_text: XML content of the file
    :param source: Name of the source, used in the error and warning messages
    :raises MalformedDocumentError: content is not well-formed XML or misses required VOC elements
    """
    if isinstance(xml_text, str):
        xml_text = xml_text.encode("utf-8")
    try:
        root = etree.fromstring(xml_text)
    except etree.XMLSyntaxError as e:
        raise MalformedDocumentError(source, f"invalid XML ({e})") from e
    if root.tag != "annotation":
        raise MalformedDocumentError(source, f"root element is <{root.tag}>, expected <annotation>")

    size = root.find("size")
    if size is None:
        raise MalformedDocumentError(source, "missing required element <size>")
    source_elem = root.find("source")

    return VOCAnnotation(
        folder=_text(root, "folder", ""),
        filename=_required_text(root, "filename", source),
        path=_text(root, "path", ""),
        source=VOCSource(
            database=_text(source_elem, "database", ""),
            annotation=_text(source_elem, "annotation", ""),
            image=_text(source_elem, "image", ""),
        ),
        size=VOCSize(
            width=_to_int(_text(size, "width"), "width", source),
            height=_to_int(_text(size, "height"), "height", source),
            depth=_to_int(_text(size, "depth"), "depth", source, default=DEFAULT_DEPTH),
        ),
        segmented=_to_int(_text(root, "segmented"), "segmented", source, default=0),
        objects=[parse_object(obj, source) for obj in root.findall("object")],
    )


# ======== Serialization ======== #


def _add_text(parent: ElementBase, tag: str, value) -> ElementBase:
    elem = etree.SubElement(parent, tag)
    elem.text = str(value)
    return elem


def export_object(obj: VOCObject, parent: ElementBase) -> ElementBase:
    obj_elem = etree.SubElement(parent, "object")
    _add_text(obj_elem, "name", obj.name)
    _add_text(obj_elem, "pose", obj.pose.value)
    _add_text(obj_elem, "truncated", obj.truncated)
    _add_text(obj_elem, "difficult", obj.difficult)
    _add_text(obj_elem, "occluded", obj.occluded)
    bndbox = etree.SubElement(obj_elem, "bndbox")
    _add_text(bndbox, "xmin", obj.bndbox.xmin)
    _add_text(bndbox, "ymin", obj.bndbox.ymin)
    _add_text(bndbox, "xmax", obj.bndbox.xmax)
    _add_text(bndbox, "ymax", obj.bndbox.ymax)
    return obj_elem


def build_voc_xml(annotation: VOCAnnotation) -> ElementBase:
    root = etree.Element("annotation")
    _add_text(root, "folder", annotation.folder)
    _add_text(root, "filename", annotation.filename)
    _add_text(root, "path", annotation.path)

    source = etree.SubElement(root, "source")
    _add_text(source, "database", annotation.source.database)
    _add_text(source, "annotation", annotation.source.annotation)
    _add_text(source, "image", annotation.source.image)

    size = etree.SubElement(root, "size")
    _add_text(size, "width", annotation.size.width)
    _add_text(size, "height", annotation.size.height)
    _add_text(size, "depth", annotation.size.depth)

    _add_text(root, "segmented", annotation.segmented)

    for obj in annotation.objects:
        export_object(obj, root)

    return root


def serialize_voc(annotation: VOCAnnotation) -> bytes:
    return etree.tostring(build_voc_xml(annotation), pretty_print=True, encoding="utf-8", xml_declaration=True)
