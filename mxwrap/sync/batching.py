"""
Batching adapter: coalesce bursts of emitted events into series actions.

The first emission into an idle adapter schedules one flush interval_ms
later. Emissions arriving before it fires join the same buffer and do not
move the deadline. The flush swaps the buffer out and dispatches a single
SeriesAction in emission order, so each buffered event is dispatched
exactly once. An empty buffer dispatches nothing.

Runs on one asyncio loop. attach() must be called from that loop and the
source must emit on it.
"""

import asyncio
import logging
from typing import Any, Callable, List, Optional

from ..config import DEFAULT_DEBOUNCE_MS, Settings
from ..core.actions import EmittedType, EventAction, SeriesAction
from ..metrics import SERIES_FLUSHED, SERIES_SIZE
from .projections import create_event_action, create_series_action
from .wrap import EventSource, Listener, Listeners, subscribe_all, unsubscribe_all

logger = logging.getLogger(__name__)


class BatchingAdapter:
    """
    Usage:
        adapter = BatchingAdapter(client, store.dispatch, interval_ms=50)
        adapter.attach()
        ...
        adapter.close()
    """

    def __init__(
        self,
        source: EventSource,
        dispatch: Callable[[Any], Any],
        interval_ms: int = DEFAULT_DEBOUNCE_MS,
    ) -> None:
        if interval_ms < 0:
            raise ValueError("interval_ms must be >= 0")
        self.source = source
        self.dispatch = dispatch
        self.interval_ms = interval_ms
        self._buffer: List[EventAction] = []
        self._flush_task: Optional[asyncio.Task] = None
        self._listeners: Listeners = {}
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    @classmethod
    def from_settings(
        cls, source: EventSource, dispatch: Callable[[Any], Any], settings: Settings
    ) -> "BatchingAdapter":
        return cls(source, dispatch, interval_ms=settings.debounce_ms)

    @property
    def pending(self) -> int:
        """Number of buffered event actions awaiting a flush."""
        return len(self._buffer)

    @property
    def attached(self) -> bool:
        return bool(self._listeners)

    def attach(self) -> None:
        """Subscribe to every emitted type on the source (idempotent)."""
        if self._listeners:
            return
        self._loop = asyncio.get_running_loop()
        self._listeners = subscribe_all(self.source, self._make_listener)
        logger.debug("Batching adapter attached (interval_ms=%d)", self.interval_ms)

    def _make_listener(self, kind: EmittedType) -> Listener:
        def listener(*native_args: Any) -> None:
            self._on_emit(kind, native_args)
        return listener

    def _on_emit(self, kind: EmittedType, native_args: Any) -> None:
        if not self._listeners:
            # Closed, but the source could not drop our listeners
            return
        self._buffer.append(create_event_action(kind.value, native_args))
        if self._flush_task is None:
            self._flush_task = self._loop.create_task(self._flush_later())

    async def _flush_later(self) -> None:
        try:
            await asyncio.sleep(self.interval_ms / 1000.0)
        except asyncio.CancelledError:
            return
        self._flush_task = None
        try:
            self._drain()
        except Exception:
            # No caller to propagate to from the timer; the batch is already drained.
            logger.exception("Dispatching series action failed")

    def flush(self) -> Optional[SeriesAction]:
        """
        Drain the buffer now and cancel the pending timer.

        Returns:
            The dispatched series action, or None if the buffer was empty
        """
        if self._flush_task is not None:
            self._flush_task.cancel()
            self._flush_task = None
        return self._drain()

    def _drain(self) -> Optional[SeriesAction]:
        if not self._buffer:
            return None
        batch, self._buffer = self._buffer, []
        series = create_series_action(batch)
        SERIES_FLUSHED.inc()
        SERIES_SIZE.observe(len(batch))
        logger.debug("Flushing series of %d event actions", len(batch))
        self.dispatch(series)
        return series

    def close(self) -> Optional[SeriesAction]:
        """Detach from the source and flush whatever is still buffered."""
        if self._listeners:
            unsubscribe_all(self.source, self._listeners)
            self._listeners = {}
        return self.flush()
