from pathlib import Path

import pytest

from annotation_format_converter.converters.coco import load_coco_from_file
from annotation_format_converter.converters.createml import load_createml_from_json_string
from annotation_format_converter.converters.voc import voc_from_coco, voc_from_createml
from annotation_format_converter.errors import DanglingReferenceError, ImageAccessError
from annotation_format_converter.formats.coco import COCOAnnotation, COCOCategory, COCODataset, COCOImage
from annotation_format_converter.formats.voc import DEFAULT_DATABASE, VOCBndbox, VOCPose

COCO_RES = Path(__file__).parent.parent / "coco" / "res"


@pytest.fixture
def coco_dataset() -> COCODataset:
    return load_coco_from_file(COCO_RES / "annotations.json")


def test_coco_to_voc(coco_dataset):
    annotations = voc_from_coco(coco_dataset)

    # Same order as the images in the COCO file, including the image without annotations
    assert [ann.filename for ann in annotations] == ["images/b.jpg", "images/a.jpg", "c.png"]
    b, a, c = annotations

    assert a.path == "images/a.jpg"
    assert a.folder == ""
    assert a.source.database == DEFAULT_DATABASE
    assert (a.size.width, a.size.height, a.size.depth) == (100, 80, 3)
    assert a.segmented == 0
    assert [obj.name for obj in a.objects] == ["cat", "dog"]
    assert a.objects[0].bndbox == VOCBndbox(xmin=10, ymin=20, xmax=40, ymax=60)
    # [5.7, 10.2, 10.6, 20.9] is truncated, not rounded
    assert a.objects[1].bndbox == VOCBndbox(xmin=5, ymin=10, xmax=16, ymax=31)
    for obj in a.objects:
        assert obj.pose == VOCPose.UNSPECIFIED
        assert (obj.truncated, obj.difficult, obj.occluded) == (0, 0, 0)

    assert [obj.name for obj in b.objects] == ["cat"]
    assert b.objects[0].bndbox == VOCBndbox(xmin=1, ymin=2, xmax=4, ymax=6)
    assert c.objects == []


def _dataset_with_annotation(image_id: int, category_id: int) -> COCODataset:
    return COCODataset(
        images=[COCOImage(id=1, file_name="a.jpg", width=10, height=10)],
        categories=[COCOCategory(id=1, name="cat")],
        annotations=[COCOAnnotation(id=7, image_id=image_id, category_id=category_id, bbox=[0, 0, 1, 1])],
    )


def test_missing_image():
    with pytest.raises(DanglingReferenceError) as exc_info:
        voc_from_coco(_dataset_with_annotation(image_id=2, category_id=1))
    assert exc_info.value.kind == "image"
    assert exc_info.value.referenced_id == 2
    assert exc_info.value.annotation_id == 7


def test_missing_category():
    with pytest.raises(DanglingReferenceError) as exc_info:
        voc_from_coco(_dataset_with_annotation(image_id=1, category_id=5))
    assert exc_info.value.kind == "category"


def test_createml_to_voc(make_image, tmp_path):
    make_image("b.jpg", 300, 200)
    createml = load_createml_from_json_string(
        '[{"image":"b.jpg","annotations":[{"label":"dog","coordinates":{"x":5,"y":5,"width":20,"height":30}}]}]'
    )

    annotations = voc_from_createml(createml, tmp_path)

    assert len(annotations) == 1
    ann = annotations[0]
    assert ann.filename == "b.jpg"
    assert ann.path == "b.jpg"
    assert (ann.size.width, ann.size.height, ann.size.depth) == (300, 200, 3)
    assert len(ann.objects) == 1
    assert ann.objects[0].name == "dog"
    assert ann.objects[0].pose == VOCPose.UNSPECIFIED
    assert ann.objects[0].bndbox == VOCBndbox(xmin=5, ymin=5, xmax=25, ymax=35)


def test_createml_to_voc_keeps_order_and_truncates(make_image, tmp_path):
    make_image("z.png", 10, 10)
    make_image("a.png", 20, 20)
    createml = load_createml_from_json_string(
        '[{"image":"z.png","annotations":[]},'
        '{"image":"a.png","annotations":[{"label":"cat","coordinates":{"x":1.9,"y":2.5,"width":3.3,"height":0.4}}]}]'
    )

    annotations = voc_from_createml(createml, tmp_path)

    assert [ann.filename for ann in annotations] == ["z.png", "a.png"]
    assert annotations[1].objects[0].bndbox == VOCBndbox(xmin=1, ymin=2, xmax=5, ymax=2)


def test_createml_to_voc_missing_image(tmp_path):
    createml = load_createml_from_json_string('[{"image":"missing.jpg","annotations":[]}]')

    with pytest.raises(ImageAccessError):
        voc_from_createml(createml, tmp_path)
