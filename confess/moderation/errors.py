"""Exceptions raised by the moderation engine."""


class ModerationError(Exception):
    """Base class for moderation errors."""


class InputValidationError(ModerationError, ValueError):
    """Submitted content is missing, mistyped, or over its length limit.

    Recoverable by the caller; surfaced as a 400 response.
    """


class InternalScanError(ModerationError, RuntimeError):
    """Unexpected fault while scanning. Surfaced as a generic 500."""


class ConfigError(ModerationError, ValueError):
    """A moderation policy file is malformed."""
