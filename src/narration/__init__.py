"""
Narration layer: speech output and localized phrases.
"""

from __future__ import annotations

from typing import Any, Dict

from .base import LogNarrationSink, NarrationSink
from .phrases import ENGLISH, RUSSIAN, PHRASEBOOKS, Phrasebook, get_phrasebook
from .pyttsx3_sink import Pyttsx3Config, Pyttsx3NarrationSink


def create_narration_sink(narration_cfg: Dict[str, Any]) -> NarrationSink:
    """Build the narration sink selected by narration.backend ("pyttsx3" or "log")."""
    backend = narration_cfg.get("backend", "pyttsx3")
    if backend == "log":
        return LogNarrationSink()
    if backend == "pyttsx3":
        language = narration_cfg.get("language", "en")
        return Pyttsx3NarrationSink(
            Pyttsx3Config(
                language=get_phrasebook(language).speech_locale,
                rate=narration_cfg.get("rate", 0.9),
            )
        )
    raise ValueError(f"Unsupported narration backend: {backend}")


__all__ = [
    "NarrationSink",
    "LogNarrationSink",
    "Pyttsx3Config",
    "Pyttsx3NarrationSink",
    "Phrasebook",
    "ENGLISH",
    "RUSSIAN",
    "PHRASEBOOKS",
    "get_phrasebook",
    "create_narration_sink",
]
