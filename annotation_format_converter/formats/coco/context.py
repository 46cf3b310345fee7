import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, PrivateAttr

from annotation_format_converter.formats.coco.schema import COCOCategory, COCOInfo, COCOLicense

EXPORT_DESCRIPTION = "Exported by annotation-format-converter"
EXPORT_CONTRIBUTOR = "annotation-format-converter"
EXPORT_LICENSE_ID = 1
EXPORT_LICENSE_NAME = "annotation-format-converter"


class CocoContext(BaseModel):
    """
    Context for COCO export.

    Keeps the categories in the order they were first seen, so that the ids are 1..N in that order.
    """

    categories: List[COCOCategory] = Field(default_factory=list)
    _by_name: Dict[str, COCOCategory] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context) -> None:
        for category in self.categories:
            self._by_name.setdefault(category.name, category)

    def get(self, name: str) -> Optional[COCOCategory]:
        return self._by_name.get(name)

    def get_or_create(self, name: str) -> COCOCategory:
        category = self._by_name.get(name)
        if category is None:
            category = COCOCategory(id=len(self.categories) + 1, name=name)
            self.categories.append(category)
            self._by_name[name] = category
        return category

    def __len__(self):
        return len(self.categories)


def make_export_info(now: Optional[datetime.datetime] = None) -> COCOInfo:
    if now is None:
        now = datetime.datetime.now(datetime.timezone.utc)
    return COCOInfo(
        year=str(now.year),
        version="1",
        description=EXPORT_DESCRIPTION,
        contributor=EXPORT_CONTRIBUTOR,
        url="",
        date_created=now.strftime("%Y-%m-%dT%H:%M:%S+00:00"),
    )


def make_export_license() -> COCOLicense:
    return COCOLicense(id=EXPORT_LICENSE_ID, url="", name=EXPORT_LICENSE_NAME)
