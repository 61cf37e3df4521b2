from go_include.core.transform import GENERATED_HEADER, transform, transform_file
from go_include.errors import (
    FormatError,
    IncludeError,
    ParseError,
    ReadError,
    UnsupportedArgumentError,
    UnsupportedFunctionError,
)
from go_include.models import DEFAULT_BUILD_TAG, Options

__all__ = [
    "DEFAULT_BUILD_TAG",
    "GENERATED_HEADER",
    "FormatError",
    "IncludeError",
    "Options",
    "ParseError",
    "ReadError",
    "UnsupportedArgumentError",
    "UnsupportedFunctionError",
    "transform",
    "transform_file",
]
