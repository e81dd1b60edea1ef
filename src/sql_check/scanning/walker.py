"""Directory traversal that streams candidate source files.

The walk runs in a daemon thread and hands paths to the consumer through a
bounded queue, so a slow consumer throttles the traversal instead of the
whole tree being listed up front.
"""

from __future__ import annotations

import os
import queue
import threading
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from ..exceptions import FileSystemError
from ..file_ops import is_hidden, matches_exclude
from ..logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_QUEUE_SIZE = 100

# Poll interval while blocked on a full queue, so a stop request is noticed
_PUT_TIMEOUT = 0.1

_DONE = object()


def normalize_extensions(extensions: Iterable[str]) -> frozenset[str]:
    """Lower-case extensions and strip any leading dot: ``".PY"`` -> ``"py"``."""
    return frozenset(ext.lower().lstrip(".") for ext in extensions if ext.strip("."))


class PathStream:
    """Iterable of absolute file paths produced by a ``FileWalker`` thread.

    Iterating to the end (or abandoning the iteration) stops the producer.
    A traversal error ends the stream early and is kept in ``error``.
    """

    def __init__(self, maxsize: int):
        self._queue: queue.Queue = queue.Queue(maxsize=maxsize)
        self._closed = threading.Event()
        self.error: Optional[FileSystemError] = None

    def __iter__(self) -> Iterator[str]:
        try:
            while True:
                item = self._queue.get()
                if item is _DONE:
                    return
                yield item
        finally:
            self._closed.set()

    def _put(self, item: object, stop_event: Optional[threading.Event] = None) -> bool:
        """Block until ``item`` is queued; False if the walk should stop instead."""
        while not self._closed.is_set():
            if stop_event is not None and stop_event.is_set():
                return False
            try:
                self._queue.put(item, timeout=_PUT_TIMEOUT)
                return True
            except queue.Full:
                continue
        return False


class FileWalker:
    """Finds files with accepted extensions, pruning excluded and hidden entries.

    Args:
        extensions: Accepted extensions, with or without the leading dot.
        exclude_patterns: Exact names or globs matched against each path segment.
        queue_size: Capacity of the hand-off queue.
    """

    def __init__(
        self,
        extensions: Iterable[str],
        exclude_patterns: Iterable[str] = (),
        queue_size: int = DEFAULT_QUEUE_SIZE,
    ):
        if queue_size < 1:
            raise ValueError("queue_size must be at least 1")
        self.extensions = normalize_extensions(extensions)
        self.exclude_patterns = tuple(exclude_patterns)
        self.queue_size = queue_size

    def accepts(self, name: str) -> bool:
        """Whether a file name passes the extension, hidden and exclude filters."""
        if is_hidden(name) or matches_exclude(name, self.exclude_patterns):
            return False
        _, ext = os.path.splitext(name)
        return ext.lower().lstrip(".") in self.extensions

    def prune(self, name: str) -> bool:
        return is_hidden(name) or matches_exclude(name, self.exclude_patterns)

    def walk(
        self, root: Union[str, Path], stop_event: Optional[threading.Event] = None
    ) -> PathStream:
        """Start traversing ``root`` in the background and return the path stream."""
        stream = PathStream(self.queue_size)
        thread = threading.Thread(
            target=self._walk_loop,
            args=(os.path.abspath(root), stream, stop_event),
            name="sql-check-walker",
            daemon=True,
        )
        thread.start()
        return stream

    def _walk_loop(
        self, root: str, stream: PathStream, stop_event: Optional[threading.Event]
    ) -> None:
        def on_error(err: OSError) -> None:
            raise err

        try:
            for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
                if stop_event is not None and stop_event.is_set():
                    logger.debug(f"Walk of {root} stopped")
                    return
                # Prune in place so os.walk never descends into excluded trees
                dirnames[:] = sorted(d for d in dirnames if not self.prune(d))

                for name in sorted(filenames):
                    if not self.accepts(name):
                        continue
                    if not stream._put(os.path.join(dirpath, name), stop_event):
                        logger.debug(f"Walk of {root} stopped")
                        return
        except OSError as e:
            stream.error = FileSystemError(e.filename or root, f"Directory walk failed: {e}")
            logger.error(str(stream.error))
        finally:
            stream._put(_DONE)
