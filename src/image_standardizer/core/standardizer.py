"""
standardizer.py: Decode, detect, composite and encode one image.
"""

from dataclasses import dataclass
from typing import Optional

from .compositor import composite
from .detector import detect
from .errors import StandardizeError
from .models import CanvasSpec, StandardizedImage
from .pixels import OUTPUT_FORMAT, decode, encode
from ..utils.log_utils import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class StandardizeResult:
    """Either a standardized image or the error that stopped the pipeline."""
    image: Optional[StandardizedImage] = None
    error: Optional[StandardizeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.image is not None


def standardize_image(raw: bytes, canvas: CanvasSpec) -> StandardizedImage:
    """
    Run the full pipeline and return the encoded, canvas-sized image.

    Raises:
        StandardizeError: The first pipeline stage failure.
    """
    source = decode(raw)
    box = detect(source)
    logger.debug("Detected box %s in %dx%d source", box.as_tuple(), source.width, source.height)
    output = composite(source, box, canvas)
    data = encode(output, OUTPUT_FORMAT)
    return StandardizedImage(data=data, width=canvas.width, height=canvas.height, format=OUTPUT_FORMAT)


def standardize(raw: bytes, canvas: CanvasSpec) -> StandardizeResult:
    """Run the pipeline, returning failures as values instead of raising."""
    try:
        return StandardizeResult(image=standardize_image(raw, canvas))
    except StandardizeError as err:
        return StandardizeResult(error=err)
