import threading
import time
from typing import Dict, Optional

from narration.phrases import ENGLISH, Phrasebook


class WebPresentationState:
    """
    Presentation sink backed by in-memory state read by the web API.

    The polling thread writes, request handlers read; every access goes
    through one lock and readers get copies.
    """

    def __init__(self, phrases: Phrasebook = ENGLISH):
        self.phrases = phrases
        self._lock = threading.Lock()
        self._status = ""
        self._status_ts: Optional[float] = None
        self._objects: Dict[str, int] = {}
        self._objects_ts: Optional[float] = None
        self.start_time = time.time()

    def show_objects(self, counts: Dict[str, int]) -> None:
        with self._lock:
            self._objects = dict(counts)
            self._objects_ts = time.time()

    def show_status(self, text: str) -> None:
        with self._lock:
            self._status = text
            self._status_ts = time.time()

    def get_status(self) -> str:
        with self._lock:
            return self._status

    def get_objects(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._objects)

    def snapshot(self) -> Dict[str, object]:
        """Return a consistent copy of everything the UI renders."""
        with self._lock:
            return {
                "status": self._status,
                "status_ts": self._status_ts,
                "objects": dict(self._objects),
                "objects_ts": self._objects_ts,
                "uptime_seconds": int(time.time() - self.start_time),
            }
