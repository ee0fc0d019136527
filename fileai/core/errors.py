"""Failure taxonomy for a single file analysis.

Every failure the pipeline can hit is a `FileAIError` subclass carrying a
`FailureReason`, so the CLI can report one descriptive message and exit
non-zero without inspecting exception types. Lower-level exceptions are
chained with `raise ... from err`.
"""

from enum import Enum


class FailureReason(Enum):
    READ_ERROR = "read_error"
    UNSUPPORTED_TYPE = "unsupported_type"
    CONTENT_TOO_LARGE = "content_too_large"
    IMAGE_PROCESSING_ERROR = "image_processing_error"
    GATEWAY_ERROR = "gateway_error"
    MISSING_CREDENTIAL = "missing_credential"
    CONFIG_ERROR = "config_error"


class GatewayErrorKind(Enum):
    TRANSPORT = "transport"
    DECODE = "decode"
    API_REPORTED = "api_reported"
    EMPTY_RESPONSE = "empty_response"


class FileAIError(Exception):
    """Base class for all pipeline failures."""

    reason: FailureReason


class ReadError(FileAIError):
    reason = FailureReason.READ_ERROR


class UnsupportedTypeError(FileAIError):
    reason = FailureReason.UNSUPPORTED_TYPE


class ContentTooLargeError(FileAIError):
    reason = FailureReason.CONTENT_TOO_LARGE


class ImageProcessingError(FileAIError):
    reason = FailureReason.IMAGE_PROCESSING_ERROR


class MissingCredentialError(FileAIError):
    reason = FailureReason.MISSING_CREDENTIAL


class ConfigError(FileAIError):
    reason = FailureReason.CONFIG_ERROR


class GatewayError(FileAIError):
    """Gateway call failed.

    Attributes:
        kind: Which stage failed (transport, decode, provider-reported, empty).
        message: Human-readable detail; for `API_REPORTED` this is the
            provider's own message, surfaced verbatim.
    """

    reason = FailureReason.GATEWAY_ERROR

    def __init__(self, kind: GatewayErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __str__(self) -> str:
        if self.kind is GatewayErrorKind.API_REPORTED:
            return f"error from API: {self.message}"
        return self.message
