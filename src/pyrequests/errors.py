"""Exception hierarchy for pyrequests.

Every error carries an ``ErrorKind`` so callers can branch on the failure
category without matching on message text. Wrapped errors keep the original
exception as ``__cause__``.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Category of a pyrequests failure."""

    FORMAT = "format"
    REQUEST = "request"
    OCR = "ocr"


class RequestsError(RuntimeError):
    """Base class for all pyrequests failures."""

    kind: ErrorKind = ErrorKind.REQUEST


class FormatError(RequestsError, ValueError):
    """Raised when URL, parameter, cookie or header text is malformed."""

    kind = ErrorKind.FORMAT


class RequestError(RequestsError):
    """Raised when connecting, sending or receiving fails."""

    kind = ErrorKind.REQUEST


class OCRError(RequestsError):
    """Raised when the OCR token exchange or recognition call fails."""

    kind = ErrorKind.OCR
