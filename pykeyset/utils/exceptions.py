class KeysetError(Exception):
    """Base exception for all pykeyset errors."""


class CursorError(KeysetError, ValueError):
    """Raised when an opaque cursor cannot be decoded."""


class InvalidEncoding(CursorError):
    """Raised when a cursor is not valid unpadded base64url."""


class InvalidLength(CursorError):
    """Raised when a decoded cursor has the wrong byte length for its shape."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"invalid cursor length: expected {expected} bytes, got {actual}"
        )
        self.expected = expected
        self.actual = actual


class InvalidOrder(KeysetError):
    """Raised when a value that is not an Order reaches the order algebra."""


class InvalidDirection(KeysetError):
    """Raised when a value that is not a Direction reaches the order algebra."""
