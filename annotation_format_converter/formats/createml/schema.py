import json
from typing import List, Union

from pydantic import AliasChoices, BaseModel, Field, RootModel, ValidationError

from annotation_format_converter.errors import MalformedDocumentError


class CreateMLCoordinates(BaseModel):
    """Box in pixels, (x, y) is the top-left corner"""

    x: float
    y: float
    width: float
    # Files written by older tools have the key capitalized
    height: float = Field(validation_alias=AliasChoices("height", "Height"))


class CreateMLAnnotationItem(BaseModel):
    label: str
    coordinates: CreateMLCoordinates


class CreateMLAnnotation(BaseModel):
    image: str
    annotations: List[CreateMLAnnotationItem] = []


class CreateMLDataset(RootModel[List[CreateMLAnnotation]]):
    root: List[CreateMLAnnotation] = []

    def __iter__(self):
        return iter(self.root)

    def __len__(self):
        return len(self.root)

    def __getitem__(self, item):
        return self.root[item]


def parse_createml(content: Union[str, bytes], source: str = "<json>") -> CreateMLDataset:
    """
    Parses the contents of a CreateML annotation file.

    :param content: JSON text of the file
    :param source: Name of the source, used in the error messages
    :raises MalformedDocumentError: content is not valid JSON or isn't a list of CreateML entries
    """
    try:
        data = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedDocumentError(source, f"invalid JSON ({e})") from e
    if not isinstance(data, list):
        raise MalformedDocumentError(source, "a CreateML document has to be a JSON array")
    try:
        return CreateMLDataset.model_validate(data)
    except ValidationError as e:
        raise MalformedDocumentError(source, str(e)) from e


def serialize_createml(dataset: CreateMLDataset) -> bytes:
    return json.dumps(dataset.model_dump(mode="json"), indent=4, ensure_ascii=False).encode("utf-8")
