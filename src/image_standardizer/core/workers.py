import asyncio
import time
from concurrent.futures import Executor
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from .errors import StandardizeError
from .models import CanvasSpec, Lifecycle, QueueItem, StandardizedImage
from .standardizer import StandardizeResult, standardize
from ..utils.log_utils import get_logger
from ..utils.utils import round_half_away

logger = get_logger(__name__)

DEFAULT_CONCURRENCY = 4

Transform = Callable[[bytes, CanvasSpec], StandardizeResult]


@dataclass
class ItemOutcome:
    """Result of processing (or skipping) one queue item in a run."""
    item_id: str
    name: str
    lifecycle: Lifecycle
    result: Optional[StandardizedImage] = None
    failure_reason: Optional[str] = None
    processing_time: float = 0.0
    skipped: bool = False


class BatchOrchestrator:
    """
    Runs the standardizer over a batch of queue items in fixed-size windows.

    Each window holds up to `concurrency` items. All items of a window run
    concurrently in an executor and the whole window finishes before the next
    one starts. Workers only return outcomes; queue items are updated on the
    event loop by the orchestrator itself.
    """

    def __init__(
        self,
        concurrency: int = DEFAULT_CONCURRENCY,
        transform: Transform = standardize,
        executor: Optional[Executor] = None,
        on_item_update: Optional[Callable[[QueueItem], None]] = None,
        on_progress: Optional[Callable[[int], None]] = None,
    ) -> None:
        if not isinstance(concurrency, int) or concurrency < 1:
            raise ValueError(f"concurrency must be a positive integer, got {concurrency!r}")
        self.concurrency = concurrency
        self.transform = transform
        self.executor = executor
        self.on_item_update = on_item_update
        self.on_progress = on_progress

        self.progress = 0
        self._cancel_requested = False

    def cancel(self) -> None:
        """Stop dispatching new windows; the running window still completes."""
        self._cancel_requested = True

    async def run(self, items: Sequence[QueueItem], canvas: CanvasSpec) -> List[ItemOutcome]:
        """
        Standardize every item that is not already completed.

        Args:
            items: Queue items in processing order.
            canvas: Target canvas, fixed for the whole run.

        Returns:
            One outcome per item that was processed or skipped, in input order.
            Items left undispatched by cancel() have no outcome.
        """
        items = list(items)
        total = len(items)
        self.progress = 0
        self._cancel_requested = False

        outcomes: Dict[str, ItemOutcome] = {}
        runnable: List[QueueItem] = []
        for item in items:
            if item.lifecycle is Lifecycle.COMPLETED:
                outcomes[item.id] = ItemOutcome(
                    item_id=item.id,
                    name=item.name,
                    lifecycle=item.lifecycle,
                    result=item.result,
                    skipped=True,
                )
            else:
                runnable.append(item)

        terminal = len(outcomes)
        logger.info(
            f"Starting batch of {total} images ({len(runnable)} to process, "
            f"{terminal} already completed) with window size {self.concurrency}"
        )
        self._report_progress(terminal, total)

        loop = asyncio.get_running_loop()
        for start in range(0, len(runnable), self.concurrency):
            if self._cancel_requested:
                logger.warning(f"Batch cancelled with {len(runnable) - start} images not started")
                break
            window = runnable[start:start + self.concurrency]
            by_id = {item.id: item for item in window}

            for item in window:
                item.lifecycle = Lifecycle.PROCESSING
                item.failure_reason = None
                self._notify(item)

            tasks = [
                asyncio.ensure_future(self._process_single(loop, item.id, item.name, item.source, canvas))
                for item in window
            ]
            for finished in asyncio.as_completed(tasks):
                outcome = await finished
                self._apply(by_id[outcome.item_id], outcome)
                outcomes[outcome.item_id] = outcome

            terminal += len(window)
            self._report_progress(terminal, total)

        failed = sum(1 for o in outcomes.values() if o.lifecycle is Lifecycle.FAILED)
        logger.info(f"Completed batch: {len(outcomes) - failed}/{total} standardized, {failed} failed")
        return [outcomes[item.id] for item in items if item.id in outcomes]

    async def _process_single(
        self,
        loop: asyncio.AbstractEventLoop,
        item_id: str,
        name: str,
        source: bytes,
        canvas: CanvasSpec,
    ) -> ItemOutcome:
        """Run the transform for one item in the executor and wrap the result."""
        start_time = time.time()
        logger.debug(f"Standardizing {name}")
        try:
            result = await loop.run_in_executor(self.executor, self.transform, source, canvas)
        except StandardizeError as e:
            result = StandardizeResult(error=e)
        except Exception as e:
            logger.exception(f"Unexpected error while standardizing {name}")
            return ItemOutcome(
                item_id=item_id,
                name=name,
                lifecycle=Lifecycle.FAILED,
                failure_reason=type(e).__name__,
                processing_time=time.time() - start_time,
            )

        processing_time = time.time() - start_time
        if result.ok:
            logger.debug(f"Completed {name} in {processing_time:.2f}s")
            return ItemOutcome(
                item_id=item_id,
                name=name,
                lifecycle=Lifecycle.COMPLETED,
                result=result.image,
                processing_time=processing_time,
            )

        logger.warning(f"Failed to standardize {name}: {result.error}")
        return ItemOutcome(
            item_id=item_id,
            name=name,
            lifecycle=Lifecycle.FAILED,
            failure_reason=result.error.kind if result.error else "StandardizeError",
            processing_time=processing_time,
        )

    def _apply(self, item: QueueItem, outcome: ItemOutcome) -> None:
        item.lifecycle = outcome.lifecycle
        item.result = outcome.result
        item.failure_reason = outcome.failure_reason
        self._notify(item)

    def _notify(self, item: QueueItem) -> None:
        if self.on_item_update:
            self.on_item_update(item)

    def _report_progress(self, terminal: int, total: int) -> None:
        percent = 100 if total == 0 else round_half_away(terminal * 100 / total)
        self.progress = max(self.progress, percent)
        if self.on_progress:
            self.on_progress(self.progress)

    def get_progress(self) -> int:
        """Get the latest progress percentage."""
        return self.progress


# Convenience function for easy usage
async def standardize_batch(
    items: Sequence[QueueItem],
    canvas: CanvasSpec,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> List[ItemOutcome]:
    """
    Convenience function to standardize a batch of queue items.

    Args:
        items: Queue items in processing order.
        canvas: Target canvas.
        concurrency: Window size.

    Returns:
        Outcomes in input order.
    """
    orchestrator = BatchOrchestrator(concurrency=concurrency)
    return await orchestrator.run(items, canvas)
