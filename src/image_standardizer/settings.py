"""
settings.py: Run settings for a standardization batch.

Settings can be read from a JSON file such as:

    {
        "canvas": {"width": 2000, "height": 2000},
        "padding": {"top": 150, "bottom": 150, "left": 150, "right": 150},
        "concurrency": 4,
        "output_format": "jpeg"
    }

Every key is optional; missing keys keep their defaults.
"""

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional

from .core.errors import SettingsError
from .core.export import OUTPUT_FORMATS
from .core.models import CanvasSpec, PaddingSpec
from .core.workers import DEFAULT_CONCURRENCY
from .utils.log_utils import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Settings:
    canvas: CanvasSpec = field(default_factory=CanvasSpec)
    concurrency: int = DEFAULT_CONCURRENCY
    output_format: str = "jpeg"

    def __post_init__(self) -> None:
        if not isinstance(self.concurrency, int) or self.concurrency < 1:
            raise SettingsError(f"concurrency must be a positive integer, got {self.concurrency!r}")
        if self.output_format not in OUTPUT_FORMATS:
            raise SettingsError(
                f"output_format must be one of {sorted(OUTPUT_FORMATS)}, got {self.output_format!r}"
            )

    def with_overrides(
        self,
        width: Optional[int] = None,
        height: Optional[int] = None,
        padding: Optional[PaddingSpec] = None,
        concurrency: Optional[int] = None,
        output_format: Optional[str] = None,
    ) -> "Settings":
        """Return a copy with every non-None argument applied."""
        try:
            canvas = CanvasSpec(
                width=self.canvas.width if width is None else width,
                height=self.canvas.height if height is None else height,
                padding=self.canvas.padding if padding is None else padding,
            )
        except ValueError as e:
            raise SettingsError(str(e)) from e
        return replace(
            self,
            canvas=canvas,
            concurrency=self.concurrency if concurrency is None else concurrency,
            output_format=self.output_format if output_format is None else output_format.lower(),
        )


def settings_from_dict(data: Dict[str, Any]) -> Settings:
    """Build Settings from a parsed JSON mapping."""
    if not isinstance(data, dict):
        raise SettingsError("settings must be a JSON object")
    canvas_data = data.get("canvas", {})
    padding_data = data.get("padding", {})
    if not isinstance(canvas_data, dict) or not isinstance(padding_data, dict):
        raise SettingsError("'canvas' and 'padding' must be JSON objects")
    try:
        padding = PaddingSpec(**padding_data)
        canvas = CanvasSpec(
            width=int(canvas_data.get("width", CanvasSpec.width)),
            height=int(canvas_data.get("height", CanvasSpec.height)),
            padding=padding,
        )
    except (TypeError, ValueError) as e:
        raise SettingsError(f"invalid canvas settings: {e}") from e
    return Settings(
        canvas=canvas,
        concurrency=data.get("concurrency", DEFAULT_CONCURRENCY),
        output_format=str(data.get("output_format", "jpeg")).lower(),
    )


def load_settings(path: Path) -> Settings:
    """Load settings from a JSON file."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise SettingsError(f"cannot read settings file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SettingsError(f"settings file {path} is not valid JSON: {e}") from e
    logger.debug("Loaded settings from %s", path)
    return settings_from_dict(data)
