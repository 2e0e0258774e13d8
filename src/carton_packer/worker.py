"""
Background packing worker.

Runs the engine on a daemon thread behind a small message protocol:

    -> "ready"                                   once, when the thread starts
    <- {"type": "pack", "input": {...}}          a request
    -> {"type": "timing", "data": <ms>}          then
    -> {"type": "pack_result", "data": {...}}    or, on failure,
    -> {"type": "error", "data": "<message>"}

Requests are served one at a time in arrival order. There are no request ids
and no cancellation: callers that need correlation must keep a single request
in flight.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from typing import Any, Callable

from carton_packer.config import Settings, get_settings
from carton_packer.errors import PackingError, PackingRequestError, WorkerUnavailableError
from carton_packer.io.schemas import PackRequest, PackResult
from carton_packer.packing.engine import DEFAULT_SIMPLE_THRESHOLD, pack

logger = logging.getLogger(__name__)

READY = "ready"
_STOP = object()

Message = Any


class PackingWorker:
    def __init__(
        self,
        on_message: Callable[[Message], None] | None = None,
        simple_threshold: int = DEFAULT_SIMPLE_THRESHOLD,
        request_timeout: float | None = None,
    ) -> None:
        self.outbox: queue.Queue = queue.Queue()
        self._inbox: queue.Queue = queue.Queue()
        self._on_message = on_message
        self._simple_threshold = simple_threshold
        self.request_timeout = request_timeout
        self._thread: threading.Thread | None = None
        self._request_lock = threading.Lock()
        # requests that timed out whose answers are still to come
        self._abandoned = 0

    @classmethod
    def from_settings(
        cls, settings: Settings | None = None, on_message: Callable[[Message], None] | None = None
    ) -> PackingWorker:
        settings = settings or get_settings()
        return cls(
            on_message=on_message,
            simple_threshold=settings.simple_threshold,
            request_timeout=settings.worker_timeout,
        )

    @property
    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> PackingWorker:
        if self.is_alive:
            return self
        self._thread = threading.Thread(target=self._run, name="packing-worker", daemon=True)
        self._thread.start()
        return self

    def stop(self, timeout: float | None = None) -> None:
        if not self.is_alive:
            return
        self._inbox.put(_STOP)
        self._thread.join(timeout)

    def submit(self, message: Message) -> None:
        if not self.is_alive:
            raise WorkerUnavailableError("packing worker is not running")
        self._inbox.put(message)

    def request(self, payload: dict[str, Any], timeout: float | None = None) -> tuple[float, dict[str, Any]]:
        """
        Submit one pack request and block for its answer.

        Returns (timing_ms, result). Only valid when messages go to `outbox`.
        `timeout` defaults to the worker's `request_timeout`.
        Answers still owed to requests that timed out earlier are discarded
        before this request's answer is accepted.
        """
        if self._on_message is not None:
            raise PackingError("request() reads the outbox; this worker delivers to a callback")

        if timeout is None:
            timeout = self.request_timeout

        with self._request_lock:
            self.submit({"type": "pack", "input": payload})
            deadline = None if timeout is None else time.monotonic() + timeout
            timing = 0.0
            while True:
                remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
                try:
                    message = self.outbox.get(timeout=remaining)
                except queue.Empty:
                    self._abandoned += 1
                    raise WorkerUnavailableError(f"no answer from packing worker within {timeout}s") from None

                if message == READY:
                    continue
                kind = message.get("type")
                if kind == "timing":
                    timing = float(message["data"])
                elif kind in ("pack_result", "error") and self._abandoned:
                    # answer to a request that already timed out
                    self._abandoned -= 1
                    timing = 0.0
                elif kind == "pack_result":
                    return timing, message["data"]
                elif kind == "error":
                    raise PackingRequestError(message["data"])

    def _emit(self, message: Message) -> None:
        if self._on_message is None:
            self.outbox.put(message)
        else:
            self._on_message(message)

    def _run(self) -> None:
        self._emit(READY)
        while True:
            message = self._inbox.get()
            if message is _STOP:
                break
            self._handle(message)
        logger.debug("packing worker stopped")

    def _handle(self, message: Message) -> None:
        if not isinstance(message, dict) or message.get("type") != "pack":
            logger.debug(f"ignoring message {message!r}")
            return

        try:
            start = time.perf_counter()
            request = PackRequest.model_validate(message.get("input"))
            result = pack(request, simple_threshold=self._simple_threshold)
            elapsed_ms = (time.perf_counter() - start) * 1000.0
            data = PackResult.from_result(result).to_wire()
        except Exception as e:
            # The thread must outlive a bad request; the failure goes back as a message.
            logger.warning(f"pack request failed: {e}")
            self._emit({"type": "error", "data": str(e)})
            return

        self._emit({"type": "timing", "data": elapsed_ms})
        self._emit({"type": "pack_result", "data": data})
