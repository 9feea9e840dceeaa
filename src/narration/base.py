"""
Narration sink interface.

speak() is fire-and-forget: callers never wait for speech to finish, and
whether overlapping requests queue or interrupt is up to the sink.
"""

from __future__ import annotations

import logging
from typing import Protocol


class NarrationSink(Protocol):
    def speak(self, text: str) -> None:
        ...

    def close(self) -> None:
        ...


class LogNarrationSink:
    """Narration sink for headless or muted runs; writes utterances to the log."""

    def speak(self, text: str) -> None:
        logging.info(f"[SPEAK] {text}")

    def close(self) -> None:
        pass
