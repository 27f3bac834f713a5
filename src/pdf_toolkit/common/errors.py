"""
Module: common.errors

Purpose:
    Error kinds raised by the conversion core. Validation errors are
    caller mistakes (retrying with the same input is pointless); data
    errors come from decoding or encoding and may succeed with other input.

Key Classes:
    - ErrorKind: Enum naming each error kind (carried in notifications)
    - ConversionError: Base class for every toolkit error
    - ValidationError / DataError: The two error families

Used By:
    - Every core module; controller maps them to job notifications
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """
    Discrete error kinds reported to the notification collaborator.
    
    Example:
        >>> ErrorKind.INVALID_RANGE.value
        'InvalidRange'
    """
    
    INVALID_INPUT_TYPE = "InvalidInputType"
    INDEX_OUT_OF_RANGE = "IndexOutOfRange"
    INVALID_RANGE = "InvalidRange"
    INVALID_DIMENSIONS = "InvalidDimensions"
    JOB_IN_PROGRESS = "JobInProgress"
    DECODE_FAILURE = "DecodeFailure"
    ENCODE_FAILURE = "EncodeFailure"


class ConversionError(Exception):
    """Base class for all conversion errors."""
    
    kind: ErrorKind
    is_retryable: bool = False


class ValidationError(ConversionError):
    """Caller supplied input that can never succeed as given."""


class DataError(ConversionError):
    """A buffer could not be decoded or a result could not be encoded."""
    
    is_retryable = True


class InvalidInputType(ValidationError):
    """Intake buffer is tagged with the wrong media type."""
    
    kind = ErrorKind.INVALID_INPUT_TYPE


class IndexOutOfRange(ValidationError, IndexError):
    """A unit set position lies outside [0, length)."""
    
    kind = ErrorKind.INDEX_OUT_OF_RANGE


class InvalidRange(ValidationError, ValueError):
    """A page range violates 1 <= from <= to <= page_count."""
    
    kind = ErrorKind.INVALID_RANGE


class InvalidDimensions(ValidationError, ValueError):
    """Natural width or height is non-positive or unavailable."""
    
    kind = ErrorKind.INVALID_DIMENSIONS


class JobInProgressError(ValidationError):
    """A job was started while another job is still running."""
    
    kind = ErrorKind.JOB_IN_PROGRESS


class DecodeFailure(DataError):
    """Source buffer cannot be parsed as its declared format."""
    
    kind = ErrorKind.DECODE_FAILURE


class EncodeFailure(DataError):
    """Finished document cannot be serialized to bytes."""
    
    kind = ErrorKind.ENCODE_FAILURE
