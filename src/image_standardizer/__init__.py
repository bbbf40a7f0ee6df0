"""
Image Standardizer

Centers product photos on uniform white canvases for catalog export.
"""

__version__ = "0.1.0"

from .core import (
    BatchOrchestrator,
    BatchQueue,
    CanvasSpec,
    Lifecycle,
    PaddingSpec,
    StandardizeError,
    standardize,
    standardize_batch,
)
from .settings import Settings, load_settings

__all__ = [
    "BatchOrchestrator",
    "BatchQueue",
    "CanvasSpec",
    "Lifecycle",
    "PaddingSpec",
    "Settings",
    "StandardizeError",
    "load_settings",
    "standardize",
    "standardize_batch",
]
