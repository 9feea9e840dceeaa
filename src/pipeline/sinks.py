"""
Presentation sink interface.

The polling loop pushes two things to whatever renders its output: the
per-class object counts for the latest tick, and short status lines.
"""

from __future__ import annotations

import logging
from typing import Dict, Protocol


class PresentationSink(Protocol):
    def show_objects(self, counts: Dict[str, int]) -> None:
        ...

    def show_status(self, text: str) -> None:
        ...


class LogPresentationSink:
    """Presentation sink for headless runs."""

    def __init__(self, empty_text: str = "No objects detected", count_unit: str = "pcs"):
        self.empty_text = empty_text
        self.count_unit = count_unit

    def show_objects(self, counts: Dict[str, int]) -> None:
        if not counts:
            logging.info(f"[OBJECTS] {self.empty_text}")
            return
        summary = ", ".join(f"{name}: {n} {self.count_unit}" for name, n in counts.items())
        logging.info(f"[OBJECTS] {summary}")

    def show_status(self, text: str) -> None:
        logging.info(f"[STATUS] {text}")
