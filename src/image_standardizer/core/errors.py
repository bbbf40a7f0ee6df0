"""
Error kinds raised by the standardization pipeline.

Every per-image failure derives from StandardizeError. The `kind` attribute is
the stable name recorded as an item's failure reason.
"""


class StandardizeError(Exception):
    """Base class for failures of a single image standardization."""

    kind = "StandardizeError"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.kind)
        self.message = message or self.kind

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


class DecodeFailed(StandardizeError):
    """Input bytes are not a decodable image."""

    kind = "DecodeFailed"


class InfeasiblePaddingError(StandardizeError):
    """Padding consumes the full canvas on at least one axis."""

    kind = "InfeasiblePaddingError"


class DegenerateBoundingBoxError(StandardizeError):
    """The bounding box has zero area after clamping to the source bounds."""

    kind = "DegenerateBoundingBoxError"


class EncodeFailed(StandardizeError):
    """The output grid could not be encoded."""

    kind = "EncodeFailed"


class SettingsError(ValueError):
    """Invalid or unreadable run settings."""
