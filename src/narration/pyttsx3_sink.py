"""
Offline text-to-speech narration using pyttsx3.

pyttsx3's runAndWait() blocks until an utterance is finished, so speech is
handed to a single worker thread through a queue; speak() returns
immediately and utterances play in order.
"""

from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Pyttsx3Config:
    language: str = "en"
    rate: float = 0.9


def _voice_matches(voice: Any, language: str) -> bool:
    lang = language.lower().split("-")[0].split("_")[0]
    for raw in getattr(voice, "languages", None) or []:
        code = raw.decode("utf-8", errors="ignore") if isinstance(raw, bytes) else str(raw)
        if code.lower().lstrip("\x05").startswith(lang):
            return True
    ident = f"{getattr(voice, 'id', '')} {getattr(voice, 'name', '')}".lower()
    return f"{lang}_" in ident or f"{lang}-" in ident or ident.endswith(f"/{lang}")


class Pyttsx3NarrationSink:
    def __init__(self, cfg: Pyttsx3Config):
        self.cfg = cfg
        try:
            import pyttsx3  # type: ignore
        except Exception as e:  # pragma: no cover
            raise ImportError(
                "pyttsx3 is not installed. Install with `pip install pyttsx3` "
                "or set narration.backend to 'log'."
            ) from e

        self._engine = pyttsx3.init()
        self._configure_engine()

        self._queue: "queue.Queue[Optional[str]]" = queue.Queue()
        self._worker = threading.Thread(target=self._run, name="narration", daemon=True)
        self._worker.start()

    def _configure_engine(self) -> None:
        base_rate = self._engine.getProperty("rate")
        if base_rate:
            self._engine.setProperty("rate", int(base_rate * self.cfg.rate))

        voices = self._engine.getProperty("voices") or []
        for voice in voices:
            if _voice_matches(voice, self.cfg.language):
                self._engine.setProperty("voice", voice.id)
                logging.info(f"Narration voice: {voice.id}")
                return
        logging.warning(f"No voice found for language '{self.cfg.language}', using engine default")

    def _run(self) -> None:
        while True:
            text = self._queue.get()
            try:
                if text is None:
                    break
                self._engine.say(text)
                self._engine.runAndWait()
            except Exception as e:
                logging.warning(f"Speech synthesis failed: {e}")
            finally:
                self._queue.task_done()

    def speak(self, text: str) -> None:
        if not text:
            return
        self._queue.put(text)

    def close(self, timeout: float = 5.0) -> None:
        if not self._worker.is_alive():
            return
        self._queue.put(None)
        self._worker.join(timeout=timeout)
