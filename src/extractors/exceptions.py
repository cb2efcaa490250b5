"""
Exceptions for extractor modules.
"""


class ExtractorError(Exception):
    """Base exception for extractor errors."""
    pass


class ConfigurationError(ExtractorError):
    """Raised when configuration is invalid."""
    pass


class RegistryAccessError(ExtractorError):
    """Raised when a registry key cannot be opened or enumerated."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        message = f"Registry key not accessible: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class DecodeError(ExtractorError):
    """Base exception for failures decoding a raw artifact buffer."""
    pass


class UnsupportedTypeError(DecodeError):
    """Raised when a registry value type tag is not recognized by the decoder."""

    def __init__(self, type_tag: int):
        self.type_tag = type_tag
        super().__init__(f"Unsupported registry value type: {type_tag}")


class TruncatedValueError(DecodeError):
    """Raised when a buffer is shorter than the decoder's minimum requirement."""

    def __init__(self, what: str, required: int, actual: int):
        self.what = what
        self.required = required
        self.actual = actual
        super().__init__(f"{what} requires at least {required} bytes, got {actual}")


class ShortcutParseError(DecodeError):
    """Raised when a Shell Link or internet shortcut cannot be parsed."""
    pass
