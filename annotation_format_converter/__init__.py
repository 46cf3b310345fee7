from annotation_format_converter.config import ConversionConfig, DatasetFormat
from annotation_format_converter.convert import convert, convert_dataset

__all__ = [
    "ConversionConfig",
    "DatasetFormat",
    "convert",
    "convert_dataset",
]
