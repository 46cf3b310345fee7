from pathlib import Path

import pytest

from annotation_format_converter.converters.voc import load_voc_from_dir, load_voc_from_file
from annotation_format_converter.errors import EmptyDirectoryError, InvalidPathError, MalformedDocumentError
from annotation_format_converter.formats.voc import (
    VOCAnnotation,
    VOCBndbox,
    VOCObject,
    VOCPose,
    VOCSize,
    VOCSource,
    parse_voc,
)

RES = Path(__file__).parent / "res"


def test_voc_import():
    annotation = load_voc_from_file(RES / "a.xml")

    assert annotation == VOCAnnotation(
        folder="images",
        filename="a.jpg",
        path="/data/images/a.jpg",
        source=VOCSource(database="Unknown"),
        size=VOCSize(width=300, height=200, depth=3),
        segmented=0,
        objects=[
            VOCObject(
                name="cat",
                pose=VOCPose.UNSPECIFIED,
                truncated=0,
                difficult=0,
                occluded=0,
                bndbox=VOCBndbox(xmin=10, ymin=10, xmax=60, ymax=80),
            )
        ],
    )


def test_voc_import_full_document():
    annotation = load_voc_from_file(RES / "b.xml")

    assert annotation.source == VOCSource(database="test", annotation="manual", image="camera")
    assert annotation.size == VOCSize(width=640, height=480, depth=1)
    assert [obj.name for obj in annotation.objects] == ["dog", "cat", "bird"]

    dog, cat, bird = annotation.objects
    assert dog.pose == VOCPose.LEFT
    assert (dog.truncated, dog.difficult, dog.occluded) == (1, 0, 1)
    assert dog.bndbox == VOCBndbox(xmin=5, ymin=6, xmax=100, ymax=120)
    # Unknown pose falls back to unspecified
    assert cat.pose == VOCPose.UNSPECIFIED
    assert bird.pose == VOCPose.UNSPECIFIED
    assert (bird.truncated, bird.difficult, bird.occluded) == (0, 0, 0)


def test_load_dir_is_sorted_and_not_recursive(tmp_path):
    (tmp_path / "b.xml").write_bytes((RES / "b.xml").read_bytes())
    (tmp_path / "A.XML").write_bytes((RES / "a.xml").read_bytes())
    (tmp_path / "notes.txt").write_text("not an annotation")
    nested = tmp_path / "nested"
    nested.mkdir()
    (nested / "c.xml").write_text("<broken")

    annotations = load_voc_from_dir(tmp_path)

    assert [ann.filename for ann in annotations] == ["a.jpg", "b.png"]


def test_empty_dir(tmp_path):
    (tmp_path / "readme.txt").write_text("nothing to see")

    with pytest.raises(EmptyDirectoryError):
        load_voc_from_dir(tmp_path)


def test_dir_path_is_a_file():
    with pytest.raises(InvalidPathError):
        load_voc_from_dir(RES / "a.xml")


def test_dir_aborts_on_malformed_file(tmp_path):
    (tmp_path / "a.xml").write_bytes((RES / "a.xml").read_bytes())
    (tmp_path / "b.xml").write_text("<annotation><filename>b.jpg</filename>")

    with pytest.raises(MalformedDocumentError):
        load_voc_from_dir(tmp_path)


def test_wrong_extension(tmp_path):
    path = tmp_path / "a.txt"
    path.write_bytes((RES / "a.xml").read_bytes())

    with pytest.raises(InvalidPathError):
        load_voc_from_file(path)


@pytest.mark.parametrize(
    "content",
    [
        "",
        "<annotation>",
        "<root><filename>a.jpg</filename></root>",
        "<annotation><size><width>1</width><height>1</height></size></annotation>",
        "<annotation><filename>a.jpg</filename></annotation>",
        "<annotation><filename>a.jpg</filename><size><width>wide</width><height>1</height></size></annotation>",
        "<annotation><filename>a.jpg</filename><size><width>1</width><height>1</height></size>"
        "<object><name>cat</name></object></annotation>",
        "<annotation><filename>a.jpg</filename><size><width>1</width><height>1</height></size>"
        "<object><name>cat</name><bndbox><xmin>1</xmin><ymin>1</ymin><xmax>2</xmax></bndbox></object></annotation>",
        # Parse as floats but have no integer value
        "<annotation><filename>a.jpg</filename><size><width>inf</width><height>1</height></size></annotation>",
        "<annotation><filename>a.jpg</filename><size><width>1</width><height>1</height></size>"
        "<object><name>cat</name><bndbox><xmin>1e400</xmin><ymin>1</ymin><xmax>2</xmax><ymax>2</ymax></bndbox>"
        "</object></annotation>",
        "<annotation><filename>a.jpg</filename><size><width>1</width><height>1</height></size>"
        "<object><name>cat</name><bndbox><xmin>nan</xmin><ymin>1</ymin><xmax>2</xmax><ymax>2</ymax></bndbox>"
        "</object></annotation>",
    ],
)
def test_malformed_document(content):
    with pytest.raises(MalformedDocumentError):
        parse_voc(content)
