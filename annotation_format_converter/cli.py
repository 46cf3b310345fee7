import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from annotation_format_converter.config import ConversionConfig, DatasetFormat
from annotation_format_converter.convert import convert
from annotation_format_converter.errors import ConversionError

cli_logger = logging.getLogger("annotation_format_converter.cli")

FORMAT_CHOICES = [f.value for f in DatasetFormat]


def existing_path(value: str) -> Path:
    path = Path(value)
    if not path.exists():
        raise argparse.ArgumentTypeError(f"the dataset path {value} does not exist")
    return path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="annotation-convert",
        description="Convert object detection annotations between COCO, Pascal VOC and CreateML.",
        epilog="Formats: coco - COCO (.json), voc - Pascal VOC (directory of .xml), createml - CreateML (.json)",
    )
    parser.add_argument("-i", "--input-format", required=True, choices=FORMAT_CHOICES,
                        help="The format of the source dataset")
    parser.add_argument("-o", "--output-format", required=True, choices=FORMAT_CHOICES,
                        help="The format of the converted dataset")
    parser.add_argument("-p", "--output-path", type=Path, default=None,
                        help="The path of the converted dataset, a .json file or a directory for voc. "
                             "Generated next to the source if omitted")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("dataset_path", type=existing_path,
                        help="Source dataset, a .json file or a directory of .xml files for voc")
    return parser


def config_from_args(args: argparse.Namespace) -> ConversionConfig:
    return ConversionConfig(
        input_format=DatasetFormat(args.input_format),
        output_format=DatasetFormat(args.output_format),
        source_path=args.dataset_path,
        output_path=args.output_path,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s: %(message)s")

    config = config_from_args(args)
    try:
        output = convert(config)
    except ConversionError as e:
        cli_logger.error(str(e), exc_info=args.verbose)
        return 1

    cli_logger.info(f"Saved {config.output_format.value} annotations to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
