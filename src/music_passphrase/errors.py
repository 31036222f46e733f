from enum import Enum


class FailureKind(str, Enum):
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    UPSTREAM = "upstream"
    EMPTY_RESULT = "empty_result"
    INTERNAL = "internal"


class PassphraseError(Exception):
    kind = FailureKind.INTERNAL


class ValidationError(PassphraseError):
    """Keywords were blank; raised before any network call."""

    kind = FailureKind.VALIDATION


class ConfigurationError(PassphraseError):
    kind = FailureKind.CONFIGURATION


class UpstreamError(PassphraseError):
    """The completion service failed or returned no content."""

    kind = FailureKind.UPSTREAM


class EmptyResultError(PassphraseError):
    """Nothing usable survived normalization of the completion text."""

    kind = FailureKind.EMPTY_RESULT
