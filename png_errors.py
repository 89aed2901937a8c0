from enum import Enum


class ErrorKind(Enum):
    INVALID_SIGNATURE = "invalid signature"
    TOO_SHORT = "too short"
    INVALID_LENGTH = "invalid length"
    INVALID_BYTE = "invalid byte"
    INVALID_FORMAT = "invalid format"
    INVALID_TYPE = "invalid type"
    CRC_MISMATCH = "crc mismatch"
    NOT_FOUND = "not found"
    INVALID_UTF8 = "invalid utf-8"


class PngError(ValueError):
    """Raised for malformed PNG input or a failed chunk operation.

    `kind` is one of `ErrorKind`, so callers can branch on what went wrong
    without parsing the message.
    """

    def __init__(self, kind, message):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __str__(self):
        return self.message
