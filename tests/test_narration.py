"""
Tests for phrasebooks and narration sinks.
"""

import logging
import sys
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from models.detection import DistanceLevel
from narration import create_narration_sink
from narration.base import LogNarrationSink
from narration.phrases import ENGLISH, PHRASEBOOKS, RUSSIAN, get_phrasebook
from narration.pyttsx3_sink import Pyttsx3Config, Pyttsx3NarrationSink, _voice_matches


def _fake_pyttsx3(voices=()):
    engine = MagicMock()
    props = {"rate": 200, "voices": list(voices)}
    engine.getProperty.side_effect = lambda name: props.get(name)
    module = MagicMock()
    module.init.return_value = engine
    return module, engine


class TestPhrasebook:
    def test_detected_message(self):
        assert ENGLISH.detected(3) == "Detected 3 objects"
        assert RUSSIAN.detected(3) == "Обнаружено 3 объектов"

    def test_error_message(self):
        assert ENGLISH.error("camera busy") == "Error: camera busy"

    def test_every_book_labels_every_distance(self):
        for book in PHRASEBOOKS.values():
            assert set(book.distance_labels) == set(DistanceLevel)

    @pytest.mark.parametrize("code,expected", [
        ("en", ENGLISH),
        ("ru", RUSSIAN),
        ("ru-RU", RUSSIAN),
        ("EN_us", ENGLISH),
    ])
    def test_get_phrasebook(self, code, expected):
        assert get_phrasebook(code) is expected

    def test_unknown_language_falls_back_to_english(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert get_phrasebook("de") is ENGLISH
        assert "falling back" in caplog.text


class TestVoiceMatching:
    def test_matches_language_list(self):
        voice = SimpleNamespace(id="v1", name="Voice", languages=[b"\x05ru"])
        assert _voice_matches(voice, "ru-RU")

    def test_matches_identifier(self):
        voice = SimpleNamespace(id="HKEY\\Voices\\TTS_MS_EN-US_ZIRA", name="Zira", languages=[])
        assert _voice_matches(voice, "en-US")

    def test_no_match(self):
        voice = SimpleNamespace(id="german", name="Hedda", languages=["de_DE"])
        assert not _voice_matches(voice, "en")


class TestPyttsx3NarrationSink:
    def test_speaks_queued_text_in_order(self):
        module, engine = _fake_pyttsx3()

        with patch.dict(sys.modules, {"pyttsx3": module}):
            sink = Pyttsx3NarrationSink(Pyttsx3Config(language="en-US", rate=0.9))
        sink.speak("Navigation activated")
        sink.speak("Detected 2 objects")
        sink.close()

        said = [c.args[0] for c in engine.say.call_args_list]
        assert said == ["Navigation activated", "Detected 2 objects"]
        assert engine.runAndWait.call_count == 2

    def test_rate_scaled(self):
        module, engine = _fake_pyttsx3()

        with patch.dict(sys.modules, {"pyttsx3": module}):
            sink = Pyttsx3NarrationSink(Pyttsx3Config(rate=0.9))
        sink.close()

        engine.setProperty.assert_any_call("rate", 180)

    def test_selects_matching_voice(self):
        voices = [
            SimpleNamespace(id="en-voice", name="English", languages=["en_US"]),
            SimpleNamespace(id="ru-voice", name="Russian", languages=["ru_RU"]),
        ]
        module, engine = _fake_pyttsx3(voices)

        with patch.dict(sys.modules, {"pyttsx3": module}):
            sink = Pyttsx3NarrationSink(Pyttsx3Config(language="ru-RU"))
        sink.close()

        engine.setProperty.assert_any_call("voice", "ru-voice")

    def test_empty_text_ignored(self):
        module, engine = _fake_pyttsx3()

        with patch.dict(sys.modules, {"pyttsx3": module}):
            sink = Pyttsx3NarrationSink(Pyttsx3Config())
        sink.speak("")
        sink.close()

        engine.say.assert_not_called()

    def test_engine_failure_does_not_stop_worker(self):
        module, engine = _fake_pyttsx3()
        engine.runAndWait.side_effect = [RuntimeError("audio device lost"), None]

        with patch.dict(sys.modules, {"pyttsx3": module}):
            sink = Pyttsx3NarrationSink(Pyttsx3Config())
        sink.speak("first")
        sink.speak("second")
        sink.close()

        assert engine.runAndWait.call_count == 2

    def test_close_is_idempotent(self):
        module, _ = _fake_pyttsx3()

        with patch.dict(sys.modules, {"pyttsx3": module}):
            sink = Pyttsx3NarrationSink(Pyttsx3Config())
        sink.close()
        sink.close()


class TestCreateNarrationSink:
    def test_log_backend(self):
        assert isinstance(create_narration_sink({"backend": "log"}), LogNarrationSink)

    def test_pyttsx3_backend_uses_speech_locale(self):
        module, _ = _fake_pyttsx3()

        with patch.dict(sys.modules, {"pyttsx3": module}):
            sink = create_narration_sink({"backend": "pyttsx3", "language": "ru", "rate": 1.0})
        sink.close()

        assert isinstance(sink, Pyttsx3NarrationSink)
        assert sink.cfg.language == "ru-RU"

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            create_narration_sink({"backend": "espeak"})

    def test_log_sink_writes_utterance(self, caplog):
        with caplog.at_level(logging.INFO):
            LogNarrationSink().speak("Navigation stopped")
        assert "[SPEAK] Navigation stopped" in caplog.text
