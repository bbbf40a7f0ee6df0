#!/usr/bin/env python3
"""
export.py: Hand finished batches to the outside world.

Export: completed items, re-encoded into the requested format and packed into
a zip archive. Reporting: one CSV row per item whatever its state.
"""

import csv
import io
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from PIL import Image

from .models import Lifecycle, QueueItem
from ..utils.log_utils import get_logger

logger = get_logger(__name__)

OUTPUT_FORMATS = {
    "jpeg": ("JPEG", "jpg"),
    "png": ("PNG", "png"),
    "webp": ("WEBP", "webp"),
}
EXPORT_QUALITY = 92

REPORT_HEADER = ["ID", "Filename", "Width", "Height", "Status", "Reason"]


@dataclass(frozen=True)
class ReportRow:
    id: str
    name: str
    width: Optional[int]
    height: Optional[int]
    status: str
    reason: Optional[str] = None


def export_entries(items: Iterable[QueueItem]) -> Iterator[Tuple[str, bytes]]:
    """Yield (display name, encoded bytes) for every completed item."""
    for item in items:
        if item.lifecycle is Lifecycle.COMPLETED and item.result is not None:
            yield item.name, item.result.data


def convert_format(data: bytes, fmt: str) -> bytes:
    """Re-encode image bytes as jpeg, png or webp, flattened onto white."""
    try:
        pil_format, _ = OUTPUT_FORMATS[fmt.lower()]
    except KeyError:
        raise ValueError(f"Unsupported output format '{fmt}', expected one of {sorted(OUTPUT_FORMATS)}")

    with Image.open(io.BytesIO(data)) as img:
        img = img.convert("RGBA")
        flat = Image.new("RGB", img.size, (255, 255, 255))
        flat.paste(img, mask=img.getchannel("A"))

    buffer = io.BytesIO()
    if pil_format == "PNG":
        flat.save(buffer, format=pil_format)
    else:
        flat.save(buffer, format=pil_format, quality=EXPORT_QUALITY)
    return buffer.getvalue()


def archive_name(name: str, fmt: str, taken: set) -> str:
    """File name for `name` inside the archive, unique within `taken`."""
    _, ext = OUTPUT_FORMATS[fmt.lower()]
    stem = Path(name).stem or "image"
    candidate = f"{stem}.{ext}"
    counter = 1
    while candidate in taken:
        candidate = f"{stem}_{counter}.{ext}"
        counter += 1
    taken.add(candidate)
    return candidate


def write_archive(items: Iterable[QueueItem], path: Path, fmt: str = "jpeg") -> int:
    """
    Write all completed items into a zip archive at `path`.

    Returns:
        Number of images written.
    """
    taken: set = set()
    written = 0
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, data in export_entries(items):
            entry = archive_name(name, fmt, taken)
            logger.debug("Adding '%s' to archive", entry)
            zf.writestr(entry, convert_format(data, fmt))
            written += 1
    logger.info(f"Wrote {written} images to {path}")
    return written


def report_rows(items: Iterable[QueueItem]) -> List[ReportRow]:
    rows = []
    for item in items:
        size = item.output_size
        rows.append(ReportRow(
            id=item.id,
            name=item.name,
            width=size[0] if size else None,
            height=size[1] if size else None,
            status=item.lifecycle.value,
            reason=item.failure_reason,
        ))
    return rows


def write_report(items: Iterable[QueueItem], path: Path) -> int:
    """Write a CSV report with one row per item. Returns the row count."""
    rows = report_rows(items)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(REPORT_HEADER)
        for row in rows:
            writer.writerow([
                row.id,
                row.name,
                "" if row.width is None else row.width,
                "" if row.height is None else row.height,
                row.status,
                row.reason or "",
            ])
    logger.info(f"Wrote report with {len(rows)} rows to {path}")
    return len(rows)
