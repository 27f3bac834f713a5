"""Common utilities shared across the toolkit."""

from __future__ import annotations

from .errors import (
    ErrorKind,
    ConversionError,
    ValidationError,
    DataError,
    InvalidInputType,
    IndexOutOfRange,
    InvalidRange,
    InvalidDimensions,
    JobInProgressError,
    DecodeFailure,
    EncodeFailure,
)
from .path_utils import output_stem, range_filename, page_filename

__all__ = [
    # errors
    "ErrorKind",
    "ConversionError",
    "ValidationError",
    "DataError",
    "InvalidInputType",
    "IndexOutOfRange",
    "InvalidRange",
    "InvalidDimensions",
    "JobInProgressError",
    "DecodeFailure",
    "EncodeFailure",
    # naming
    "output_stem",
    "range_filename",
    "page_filename",
]
