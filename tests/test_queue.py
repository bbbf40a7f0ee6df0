"""Tests for the batch queue."""

from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

from image_standardizer.core.models import Lifecycle
from image_standardizer.core.queue import BatchQueue


def test_add_keeps_order_and_stable_ids() -> None:
    queue = BatchQueue()

    first = queue.add("a.jpg", b"1")
    second = queue.add("b.jpg", b"2")

    assert [item.name for item in queue] == ["a.jpg", "b.jpg"]
    assert first.id != second.id
    assert queue.get(first.id) is first
    assert first.lifecycle is Lifecycle.PENDING


def test_add_files_uses_file_names(tmp_path: Path) -> None:
    (tmp_path / "shoe.png").write_bytes(b"png-bytes")
    queue = BatchQueue()

    items = queue.add_files([tmp_path / "shoe.png"])

    assert items[0].name == "shoe.png"
    assert items[0].source == b"png-bytes"


def test_remove_and_clear_notify_listeners() -> None:
    events: List[Tuple[str, str]] = []
    queue = BatchQueue()
    queue.on_change = lambda event, item: events.append((event, item.name))
    a = queue.add("a.jpg", b"1")
    queue.add("b.jpg", b"2")

    queue.remove(a.id)
    queue.clear()

    assert a.id not in queue
    assert len(queue) == 0
    assert events == [("added", "a.jpg"), ("added", "b.jpg"), ("removed", "a.jpg"), ("removed", "b.jpg")]


def test_counts_and_completed() -> None:
    queue = BatchQueue()
    done = queue.add("a.jpg", b"1")
    queue.add("b.jpg", b"2")
    done.lifecycle = Lifecycle.COMPLETED

    assert queue.counts()[Lifecycle.COMPLETED] == 1
    assert queue.counts()[Lifecycle.PENDING] == 1
    assert queue.completed() == [done]


def test_add_files_accepts_string_paths(tmp_path: Path) -> None:
    (tmp_path / "bag.jpg").write_bytes(b"jpg-bytes")
    queue = BatchQueue()

    items = queue.add_files([str(tmp_path / "bag.jpg")])

    assert items[0].name == "bag.jpg"
    assert items[0].source == b"jpg-bytes"
