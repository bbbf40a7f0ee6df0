"""
models.py: Value types shared by the detector, compositor, standardizer and
batch orchestrator.
"""

import enum
from dataclasses import dataclass, field
from typing import Optional, Union

import numpy as np
from PIL import Image

Number = Union[int, float]


@dataclass(frozen=True)
class PixelGrid:
    """Rectangular grid of 8-bit RGBA samples, row-major."""
    width: int
    height: int
    samples: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"PixelGrid dimensions must be positive, got {self.width}x{self.height}")
        expected = self.width * self.height * 4
        if len(self.samples) != expected:
            raise ValueError(
                f"PixelGrid buffer has {len(self.samples)} bytes, expected {expected} "
                f"for {self.width}x{self.height} RGBA"
            )

    @classmethod
    def from_image(cls, img: Image.Image) -> "PixelGrid":
        if img.mode != "RGBA":
            img = img.convert("RGBA")
        w, h = img.size
        return cls(w, h, img.tobytes())

    def to_image(self) -> Image.Image:
        """Return a new Pillow RGBA image holding a copy of the samples."""
        return Image.frombytes("RGBA", (self.width, self.height), self.samples)

    def as_array(self) -> np.ndarray:
        """Read-only (height, width, 4) uint8 view of the samples."""
        return np.frombuffer(self.samples, dtype=np.uint8).reshape(self.height, self.width, 4)

    def pixel(self, x: int, y: int) -> tuple:
        idx = (y * self.width + x) * 4
        return tuple(self.samples[idx:idx + 4])


@dataclass(frozen=True)
class Rectangle:
    x: Number
    y: Number
    width: Number
    height: Number

    def __post_init__(self) -> None:
        for name in ("x", "y", "width", "height"):
            if getattr(self, name) < 0:
                raise ValueError(f"Rectangle.{name} must be >= 0, got {getattr(self, name)}")

    @property
    def right(self) -> Number:
        return self.x + self.width

    @property
    def bottom(self) -> Number:
        return self.y + self.height

    def as_tuple(self) -> tuple:
        return (self.x, self.y, self.width, self.height)


@dataclass(frozen=True)
class PaddingSpec:
    """Inset in pixels from each canvas edge that content may not cross."""
    top: int = 150
    bottom: int = 150
    left: int = 150
    right: int = 150

    def __post_init__(self) -> None:
        for name in ("top", "bottom", "left", "right"):
            if getattr(self, name) < 0:
                raise ValueError(f"padding {name} must be >= 0, got {getattr(self, name)}")

    @classmethod
    def uniform(cls, value: int) -> "PaddingSpec":
        return cls(value, value, value, value)


@dataclass(frozen=True)
class CanvasSpec:
    """Target canvas size plus the padding that defines its safe zone.

    Infeasible padding is accepted here and reported per image by the
    compositor, so a bad setting fails items rather than the whole run.
    """
    width: int = 2000
    height: int = 2000
    padding: PaddingSpec = field(default_factory=PaddingSpec)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"canvas dimensions must be positive, got {self.width}x{self.height}")

    @property
    def safe_zone_width(self) -> int:
        return self.width - self.padding.left - self.padding.right

    @property
    def safe_zone_height(self) -> int:
        return self.height - self.padding.top - self.padding.bottom

    @property
    def is_feasible(self) -> bool:
        return self.safe_zone_width > 0 and self.safe_zone_height > 0


class Lifecycle(enum.Enum):
    """Processing state of a queue item."""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (Lifecycle.COMPLETED, Lifecycle.FAILED)


@dataclass(frozen=True)
class StandardizedImage:
    """Encoded output of one standardization, always canvas-sized."""
    data: bytes = field(repr=False)
    width: int
    height: int
    format: str = "JPEG"


@dataclass
class QueueItem:
    """One accepted source file and its processing state.

    Only the batch orchestrator changes `lifecycle`, `result` and
    `failure_reason`.
    """
    id: str
    name: str
    source: bytes = field(repr=False)
    lifecycle: Lifecycle = Lifecycle.PENDING
    result: Optional[StandardizedImage] = field(default=None, repr=False)
    failure_reason: Optional[str] = None

    @property
    def output_size(self) -> Optional[tuple]:
        """(width, height) of the result, or None unless completed."""
        if self.lifecycle is Lifecycle.COMPLETED and self.result is not None:
            return self.result.width, self.result.height
        return None
