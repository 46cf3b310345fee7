import json
from typing import Any, List, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from annotation_format_converter.errors import MalformedDocumentError


class COCOInfo(BaseModel):
    """Free-text metadata. Exporters disagree on the types, e.g. COCO 2017 stores the year as a number"""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    year: str = ""
    version: str = ""
    description: str = ""
    contributor: str = ""
    url: str = ""
    date_created: str = ""


class COCOLicense(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: int
    url: str = ""
    name: str = ""


class COCOCategory(BaseModel):
    id: int
    name: str
    supercategory: str = ""


class COCOImage(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: int
    license: int = 0
    file_name: str
    height: int
    width: int
    date_captured: str = ""


class COCOAnnotation(BaseModel):
    id: int
    image_id: int
    category_id: int
    bbox: List[Union[int, float]] = Field(min_length=4, max_length=4)  # [x, y, width, height]
    area: Union[int, float] = 0
    segmentation: List[Any] = []  # Always empty for exported boxes
    iscrowd: int = 0


class COCODataset(BaseModel):
    info: COCOInfo = Field(default_factory=COCOInfo)
    licenses: List[COCOLicense] = []
    categories: List[COCOCategory] = []
    images: List[COCOImage] = []
    annotations: List[COCOAnnotation] = []


def parse_coco(content: Union[str, bytes], source: str = "<json>") -> COCODataset:
    """
    Parses the contents of a COCO annotation file.

    :param content: JSON text of the file
    :param source: Name of the source, used in the error messages
    :raises MalformedDocumentError: content is not valid JSON or misses required COCO fields
    """
    try:
        data = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedDocumentError(source, f"invalid JSON ({e})") from e
    if not isinstance(data, dict):
        raise MalformedDocumentError(source, "a COCO document has to be a JSON object")
    try:
        return COCODataset.model_validate(data)
    except ValidationError as e:
        raise MalformedDocumentError(source, str(e)) from e


def serialize_coco(dataset: COCODataset) -> bytes:
    return json.dumps(dataset.model_dump(mode="json"), indent=4, ensure_ascii=False).encode("utf-8")
