# src/xcstream/exceptions.py

"""
Custom exceptions for xcstream.
"""


class XcstreamError(Exception):
    """Base class for all xcstream errors."""

    def __init__(self, message: str, details: Exception | None = None):
        self.details = details
        super().__init__(message)
        if details and hasattr(self, "add_note"):
            self.add_note(f"Original error: {type(details).__name__}: {details}")


class ConfigurationError(XcstreamError):
    """Raised when configuration, dialect selection or version input is invalid."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: Exception | None = None,
    ):
        self.path = path
        full_message = message
        if path:
            full_message += f" (Config: '{path}')"
        super().__init__(full_message, details=details)


# 🔼⚙️
