import sys

from annotation_format_converter.cli import main

sys.exit(main())
