"""
Error kinds raised by the telemetry decoding pipeline.

Every per-row and per-field failure is a TelemetryDecodeError subclass carrying
an ErrorKind, so the row loop can record *why* a row was skipped without
inspecting exception types.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    COLUMN_NOT_FOUND = "ColumnNotFound"
    MALFORMED_HEX = "MalformedHex"
    INVALID_LENGTH = "InvalidLength"
    UNKNOWN_FIELD_TYPE = "UnknownFieldType"
    EMPTY_PAYLOAD = "EmptyPayload"
    MALFORMED_VALUE = "MalformedValue"
    ARITY_MISMATCH = "ArityMismatch"
    MISSING_FIELD = "MissingField"
    MALFORMED_INTEGER = "MalformedInteger"
    NO_POSITION_FIELD = "NoPositionField"
    MALFORMED_POSITION = "MalformedPosition"


class TelemetryDecodeError(Exception):
    """Base class for all decoding failures."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return f"{self.kind.value}: {self.message}"


class ColumnNotFound(TelemetryDecodeError):
    kind = ErrorKind.COLUMN_NOT_FOUND

    def __init__(self, message: str, column: Optional[str] = None):
        super().__init__(message)
        self.column = column


class MalformedHex(TelemetryDecodeError):
    kind = ErrorKind.MALFORMED_HEX


class InvalidLength(TelemetryDecodeError):
    kind = ErrorKind.INVALID_LENGTH


class UnknownFieldType(TelemetryDecodeError):
    kind = ErrorKind.UNKNOWN_FIELD_TYPE

    def __init__(self, code: str):
        super().__init__(f"unsupported type code {code!r}")
        self.code = code


class EmptyPayload(TelemetryDecodeError):
    kind = ErrorKind.EMPTY_PAYLOAD


class MalformedValue(TelemetryDecodeError):
    kind = ErrorKind.MALFORMED_VALUE


class ArityMismatch(TelemetryDecodeError):
    kind = ErrorKind.ARITY_MISMATCH

    def __init__(self, code: str, expected: int, actual: int):
        super().__init__(
            f"type {code!r} expects {expected} value(s), got {actual}"
        )
        self.code = code
        self.expected = expected
        self.actual = actual


class MissingField(TelemetryDecodeError):
    kind = ErrorKind.MISSING_FIELD

    def __init__(self, field_name: str):
        super().__init__(f"<{field_name}> is missing or empty")
        self.field_name = field_name


class MalformedInteger(TelemetryDecodeError):
    kind = ErrorKind.MALFORMED_INTEGER

    def __init__(self, field_name: str, value: str):
        super().__init__(f"<{field_name}> is not an integer: {value!r}")
        self.field_name = field_name
        self.value = value


class NoPositionField(TelemetryDecodeError):
    kind = ErrorKind.NO_POSITION_FIELD


class MalformedPosition(TelemetryDecodeError):
    kind = ErrorKind.MALFORMED_POSITION
