"""Custom exceptions for outcome-map."""


class OutcomeMapError(Exception):
    """Base exception for outcome-map."""

    pass


class ConfigurationError(OutcomeMapError, ValueError):
    """Raised when a parser option has an unsupported value."""

    pass


class EncodingError(OutcomeMapError):
    """Raised when input bytes cannot be decoded."""

    pass


class EmptyInputError(OutcomeMapError):
    """Raised when the CSV contains no data rows at all."""

    pass


class EmptyDatasetError(OutcomeMapError):
    """Raised when every row was dropped before the map could be built."""

    pass


class MalformedCSVError(OutcomeMapError):
    """Raised when the decoded text cannot be read as CSV."""

    pass
