import math
import os
from pathlib import Path
from typing import Iterator

IMAGE_EXTS = {'.jpg', '.jpeg', '.png', '.webp', '.bmp', '.gif', '.tif', '.tiff', '.heic', '.heif'}


def iter_files(root: Path) -> Iterator[Path]:
    """
    Recursively yield file paths under `root` using os.scandir for speed.
    """
    stack = [root]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as it:
                for entry in it:
                    if entry.is_dir(follow_symlinks=False):
                        stack.append(Path(entry.path))
                    elif entry.is_file(follow_symlinks=False):
                        yield Path(entry.path)
        except PermissionError:
            continue


def iter_image_files(root: Path) -> Iterator[Path]:
    """
    Yield image files under `root` in a stable (sorted) order.

    A single file is yielded as-is when it has an image extension.
    macOS metadata files are skipped.
    """
    if root.is_file():
        if root.suffix.lower() in IMAGE_EXTS:
            yield root
        return
    for path in sorted(iter_files(root)):
        if path.name.startswith("._") or path.name == ".DS_Store":
            continue
        if path.suffix.lower() in IMAGE_EXTS:
            yield path


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))
