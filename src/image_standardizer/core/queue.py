"""
queue.py: The batch of accepted source images, addressed by stable id.

Items keep their insertion order. Listeners attached to `on_change` are told
about additions and removals; lifecycle changes are reported by the
orchestrator that owns them.
"""

import uuid
from collections import Counter
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Union

from .models import Lifecycle, QueueItem
from ..utils.log_utils import get_logger

logger = get_logger(__name__)


class BatchQueue:
    """Ordered collection of QueueItems."""

    def __init__(self) -> None:
        self._items: Dict[str, QueueItem] = {}
        # on_change(event, item) with event in {"added", "removed"}
        self.on_change: Optional[Callable[[str, QueueItem], None]] = None

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[QueueItem]:
        return iter(list(self._items.values()))

    def __contains__(self, item_id: str) -> bool:
        return item_id in self._items

    @property
    def items(self) -> List[QueueItem]:
        return list(self._items.values())

    def get(self, item_id: str) -> QueueItem:
        return self._items[item_id]

    def add(self, name: str, data: bytes) -> QueueItem:
        """Accept one source image. No validation beyond storing the bytes."""
        item = QueueItem(id=uuid.uuid4().hex[:12], name=name, source=bytes(data))
        self._items[item.id] = item
        logger.debug("Queued %s as %s", name, item.id)
        if self.on_change:
            self.on_change("added", item)
        return item

    def add_files(self, paths: Iterable[Union[str, Path]]) -> List[QueueItem]:
        """Read each file and queue it under its file name."""
        return [self.add(Path(p).name, Path(p).read_bytes()) for p in paths]

    def remove(self, item_id: str) -> QueueItem:
        item = self._items.pop(item_id)
        if self.on_change:
            self.on_change("removed", item)
        return item

    def clear(self) -> None:
        for item_id in list(self._items):
            self.remove(item_id)

    def counts(self) -> Counter:
        """Number of items per Lifecycle state."""
        return Counter(item.lifecycle for item in self._items.values())

    def completed(self) -> List[QueueItem]:
        return [item for item in self._items.values() if item.lifecycle is Lifecycle.COMPLETED]
