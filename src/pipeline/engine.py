"""
Polling driver for the navigation assistant.

Every interval, while running, the driver reads one frame, runs the
detector on it and hands the detections to the announce stage. Ticks never
overlap: the next tick is only scheduled after the current one (and the
fixed delay) has finished. A failing tick is logged and the loop carries on.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import numpy as np

from models.config import PollingConfig
from models.detection import Detection
from pipeline.stages.announce import AnnounceStage
from runtime.context import RuntimeContext


class FrameUnavailableError(RuntimeError):
    """Raised when the frame source returns no frame for a tick."""


class InferenceTimeoutError(RuntimeError):
    """Raised when the detector does not answer within inference_timeout_s."""


@dataclass
class DriverStats:
    """Runtime statistics for the polling loop."""
    tick_count: int = 0
    success_count: int = 0
    failure_count: int = 0
    last_tick_ts: Optional[float] = None
    last_tick_duration_s: Optional[float] = None
    last_error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tick_count": self.tick_count,
            "success_count": self.success_count,
            "failure_count": self.failure_count,
            "last_tick_ts": self.last_tick_ts,
            "last_tick_duration_s": self.last_tick_duration_s,
            "last_error": self.last_error,
        }


class PollingDriver:
    """
    Self-rescheduling detection loop running on one background thread.

    Each start() creates a fresh cancel token for the new loop; stop() clears
    the context's running flag and sets the token, which wakes the loop out
    of its delay. A tick already in flight still finishes, no further tick
    starts. Ticks are serialized by a lock, so even a loop restarted while the
    previous one is finishing its last tick never runs detection concurrently.

    Example:
        driver = PollingDriver(ctx, PollingConfig(interval_s=3.0), announce)
        driver.start()
        ...
        driver.stop()
    """

    def __init__(self, ctx: RuntimeContext, config: PollingConfig, announce: AnnounceStage):
        self.ctx = ctx
        self.config = config
        self._announce = announce
        self.stats = DriverStats()
        self._thread: Optional[threading.Thread] = None
        self._cancel: Optional[threading.Event] = None
        self._tick_lock = threading.Lock()
        self._control_lock = threading.Lock()
        self._executor: Optional[ThreadPoolExecutor] = None

    @property
    def is_running(self) -> bool:
        return self.ctx.is_running

    def start(self) -> bool:
        """Start the loop. Returns False if it is already running."""
        with self._control_lock:
            if self.ctx.is_running:
                return False

            cancel = threading.Event()
            self._cancel = cancel
            self.ctx.running.set()
            self._thread = threading.Thread(
                target=self._run, args=(cancel,), name="polling-driver", daemon=True
            )
            self._thread.start()
        logging.info(f"Polling driver started: interval={self.config.interval_s}s")
        return True

    def stop(self) -> None:
        """Signal the loop to stop; the in-flight tick, if any, still completes."""
        with self._control_lock:
            self.ctx.running.clear()
            if self._cancel is not None:
                self._cancel.set()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the loop thread to exit. Returns True if it has exited."""
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def close(self) -> None:
        """Stop the loop and release the inference worker."""
        self.stop()
        self.join(timeout=self.config.interval_s)
        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None

    def _run(self, cancel: threading.Event) -> None:
        while not cancel.is_set() and self.ctx.is_running:
            self.tick()
            if cancel.wait(self.config.interval_s):
                break
        logging.info("Polling driver stopped")

    def tick(self) -> Optional[List[Detection]]:
        """
        Run one acquire -> detect -> announce cycle.

        Returns the detections, or None if the tick failed. Failures are
        logged and recorded in stats, never raised.
        """
        with self._tick_lock:
            start = time.time()
            self.stats.tick_count += 1
            self.stats.last_tick_ts = start
            try:
                frame_data = self.ctx.source.read()
                if frame_data is None:
                    raise FrameUnavailableError("No frame available from source")

                detections = self._detect(frame_data.frame)
                self.ctx.set_detections(detections, ts=time.time())
                self._announce.process(detections)
                self.stats.success_count += 1
                return detections
            except Exception as e:
                self.stats.failure_count += 1
                self.stats.last_error = str(e)
                logging.error(f"Tick {self.stats.tick_count} failed: {e}")
                return None
            finally:
                self.stats.last_tick_duration_s = time.time() - start
                logging.debug(
                    f"[TICK] n={self.stats.tick_count} duration={self.stats.last_tick_duration_s:.3f}s"
                )

    def _detect(self, frame: np.ndarray) -> List[Detection]:
        timeout = self.config.inference_timeout_s
        if timeout is None:
            return self.ctx.detector.detect(frame)

        if self._executor is None:
            # One worker: a hung call is abandoned for this tick, later calls queue behind it.
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="inference")
        future = self._executor.submit(self.ctx.detector.detect, frame)
        try:
            return future.result(timeout=timeout)
        except FutureTimeoutError:
            future.cancel()
            raise InferenceTimeoutError(f"Inference did not finish within {timeout}s")
