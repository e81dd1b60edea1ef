"""Bounded concurrent processing of streamed paths."""

from __future__ import annotations

import threading
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Optional, Sequence

from ..logging_config import get_logger
from ..models import SQLSegment

logger = get_logger(__name__)

DEFAULT_WORKERS = 10

Processor = Callable[[str], Sequence[SQLSegment]]


@dataclass(frozen=True)
class ScanResult:
    """Outcome of processing one path: its segments, or the error raised."""

    path: str
    segments: tuple[SQLSegment, ...] = ()
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class WorkerPool:
    """Applies a processor to every path with at most ``concurrency`` in flight.

    Results are yielded as they complete, so their order is not the input
    order. A failing path produces a ``ScanResult`` carrying the error; it
    never stops the pool.
    """

    def __init__(self, processor: Processor, concurrency: int = DEFAULT_WORKERS):
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self.processor = processor
        self.concurrency = concurrency

    def run(
        self, paths: Iterable[str], stop_event: Optional[threading.Event] = None
    ) -> Iterator[ScanResult]:
        """Yield one result per consumed path.

        Once ``stop_event`` is set no new path is dispatched; work already
        submitted is drained and its results are still yielded.
        """
        source = iter(paths)
        pending: set[Future] = set()
        exhausted = False

        try:
            with ThreadPoolExecutor(
                max_workers=self.concurrency, thread_name_prefix="sql-check-worker"
            ) as executor:
                while True:
                    while not exhausted and len(pending) < self.concurrency:
                        if stop_event is not None and stop_event.is_set():
                            logger.debug("Stop requested, draining in-flight work")
                            exhausted = True
                            break
                        try:
                            path = next(source)
                        except StopIteration:
                            exhausted = True
                            break
                        pending.add(executor.submit(self._process, path))

                    if not pending:
                        break

                    done, pending = wait(pending, return_when=FIRST_COMPLETED)
                    for future in done:
                        yield future.result()
        finally:
            close = getattr(source, "close", None)
            if close is not None:
                close()

    def _process(self, path: str) -> ScanResult:
        try:
            segments = self.processor(path)
        except Exception as e:
            logger.warning(f"Skipping {path}: {e}")
            return ScanResult(path=path, error=e)
        return ScanResult(path=path, segments=tuple(segments))
