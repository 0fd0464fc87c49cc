"""Delivery wrappers: serialize rendering and sink writes across producer threads.

Two modes behind one protocol:
- SyncDelivery: the caller renders and writes under a lock
- AsyncDelivery: the caller enqueues onto a bounded queue, one worker renders and writes

In both modes a record's lines reach the sink in a single write, so line
groups of different records never interleave.
"""

from __future__ import annotations

import atexit
import logging
import queue
import threading
from typing import Final, Protocol, runtime_checkable

from glogkv.foundation.errors import DeliveryClosedError, DeliveryError, QueueFullError, SinkWriteError

from .glog import GlogRenderer
from .record import Record
from .sink import Sink

logger = logging.getLogger("glogkv.delivery")

DEFAULT_CHAN_SIZE: Final[int] = 128
_STOP: Final = object()


@runtime_checkable
class Delivery(Protocol):
    """Protocol shared by sync and async delivery."""

    @property
    def closed(self) -> bool: ...

    def submit(self, record: Record) -> None:
        """Return once the record is written (sync) or queued (async)."""
        ...

    def flush(self) -> None: ...

    def close(self) -> None:
        """Write everything pending and release the sink. Idempotent."""
        ...


def _write(renderer: GlogRenderer, sink: Sink, record: Record) -> None:
    lines = [line.text for line in renderer.render(record)]
    try:
        sink.write(lines)
    except SinkWriteError:
        raise
    except Exception as e:
        raise SinkWriteError.from_exc(e, "sink write failed") from e


class SyncDelivery:
    """Renders and writes on the calling thread while holding a lock.

    Output order across threads is the order in which they acquire the lock.
    Sink failures are raised to the caller of ``submit``.
    """

    __slots__ = ("renderer", "sink", "_lock", "_closed")

    def __init__(self, renderer: GlogRenderer, sink: Sink) -> None:
        self.renderer, self.sink = renderer, sink
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, record: Record) -> None:
        with self._lock:
            if self._closed:
                raise DeliveryClosedError.create("delivery is closed")
            _write(self.renderer, self.sink, record)

    def flush(self) -> None:
        with self._lock:
            if not self._closed:
                self.sink.flush()

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self.sink.close()


class AsyncDelivery:
    """Bounded queue drained by a single background worker.

    ``submit`` blocks while the queue is full. With ``put_timeout`` set, a
    queue that stays full past the deadline raises QueueFullError rather than
    dropping the record. A failure inside the worker is kept and raised from
    the next ``submit``, ``flush`` or ``close``; the worker keeps consuming.

    Lifetime: the worker thread and an ``atexit`` hook both reference the
    instance, so an unclosed delivery lives until interpreter exit, where the
    hook drains it. Call ``close`` (or close the owning Logger / guard) to
    stop the worker and drop the hook once the delivery is no longer needed.

    Args:
        renderer: Renders each record on the worker thread
        sink: Receives one write per record
        chan_size: Queue capacity
        put_timeout: Seconds to wait on a full queue (None = wait forever)
    """

    __slots__ = ("renderer", "sink", "chan_size", "put_timeout", "_queue", "_enqueue_lock",
                 "_error_lock", "_error", "_closed", "_worker")

    def __init__(
        self,
        renderer: GlogRenderer,
        sink: Sink,
        chan_size: int | None = None,
        put_timeout: float | None = None,
    ) -> None:
        self.renderer, self.sink = renderer, sink
        self.chan_size = chan_size or DEFAULT_CHAN_SIZE
        self.put_timeout = put_timeout
        self._queue: queue.Queue[Record | object] = queue.Queue(maxsize=self.chan_size)
        self._enqueue_lock = threading.Lock()  # orders enqueues against close()
        self._error_lock = threading.Lock()
        self._error: DeliveryError | None = None
        self._closed = False
        self._worker = threading.Thread(target=self._run, name="glogkv-async", daemon=True)
        self._worker.start()
        atexit.register(self.close)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending(self) -> int:
        """Approximate number of queued records."""
        return self._queue.qsize()

    def submit(self, record: Record) -> None:
        self._raise_pending()
        with self._enqueue_lock:
            if self._closed:
                raise DeliveryClosedError.create("delivery is closed")
            try:
                self._queue.put(record, timeout=self.put_timeout)
            except queue.Full as e:
                raise QueueFullError.create(
                    f"log queue still full after {self.put_timeout}s",
                    details=f"chan_size={self.chan_size}",
                ) from e

    def flush(self) -> None:
        """Block until every record queued so far has been written."""
        self._queue.join()
        self._raise_pending()
        self.sink.flush()

    def close(self) -> None:
        with self._enqueue_lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put(_STOP)
        self._worker.join()
        atexit.unregister(self.close)
        try:
            self.sink.close()
        finally:
            self._raise_pending()

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                _write(self.renderer, self.sink, item)  # type: ignore[arg-type]
            except DeliveryError as e:
                self._store(e)
            except Exception as e:
                self._store(DeliveryError.from_exc(e, "render failed"))
            finally:
                self._queue.task_done()

    def _store(self, error: DeliveryError) -> None:
        logger.warning("log delivery failed: %s", error.error)
        with self._error_lock:
            if self._error is None:
                self._error = error

    def _raise_pending(self) -> None:
        with self._error_lock:
            error, self._error = self._error, None
        if error is not None:
            raise error
