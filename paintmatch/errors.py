"""
Error types raised by the paint matching engine.
All of them are caller-correctable input problems.
"""


class PaintMatchError(ValueError):
    """Base class for invalid input handed to the matching engine."""
    pass


class InvalidColorFormat(PaintMatchError):
    """Raised when a color string is not exactly '#' followed by 6 hex digits."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid color format: {value!r} (expected '#RRGGBB')")


class InvalidTopK(PaintMatchError):
    """Raised when the requested number of matches is not a positive integer."""

    def __init__(self, k):
        self.k = k
        super().__init__(f"Number of matches must be a positive integer, got {k!r}")


class InvalidCatalogRecord(PaintMatchError):
    """Raised when a raw catalog record cannot be turned into a CatalogEntry."""
    pass
