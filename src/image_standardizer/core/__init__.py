"""
Core standardization pipeline and batch orchestration.
"""

from .compositor import Placement, composite, compute_placement
from .detector import ALPHA_BACKGROUND_THRESHOLD, WHITE_THRESHOLD, detect
from .errors import (
    DecodeFailed,
    DegenerateBoundingBoxError,
    EncodeFailed,
    InfeasiblePaddingError,
    SettingsError,
    StandardizeError,
)
from .models import (
    CanvasSpec,
    Lifecycle,
    PaddingSpec,
    PixelGrid,
    QueueItem,
    Rectangle,
    StandardizedImage,
)
from .pixels import decode, encode
from .queue import BatchQueue
from .standardizer import StandardizeResult, standardize, standardize_image
from .workers import BatchOrchestrator, ItemOutcome, standardize_batch

__all__ = [
    "ALPHA_BACKGROUND_THRESHOLD",
    "WHITE_THRESHOLD",
    "BatchOrchestrator",
    "BatchQueue",
    "CanvasSpec",
    "DecodeFailed",
    "DegenerateBoundingBoxError",
    "EncodeFailed",
    "InfeasiblePaddingError",
    "ItemOutcome",
    "Lifecycle",
    "PaddingSpec",
    "PixelGrid",
    "Placement",
    "QueueItem",
    "Rectangle",
    "SettingsError",
    "StandardizeError",
    "StandardizeResult",
    "StandardizedImage",
    "composite",
    "compute_placement",
    "decode",
    "detect",
    "encode",
    "standardize",
    "standardize_batch",
    "standardize_image",
]
