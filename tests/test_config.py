"""
Smoke tests for configuration loading and validation.
"""

import os
import pytest

from main import disable_speech, load_config, validate_config
from models.config import Config, DEFAULT_CLASSES


class TestValidateConfig:
    """Tests for validate_config function."""

    def test_valid_config_passes(self, valid_config):
        """A complete valid config passes validation."""
        is_valid, error = validate_config(valid_config)

        assert is_valid is True
        assert error is None

    @pytest.mark.parametrize("section", ["camera", "detector", "polling", "narration", "log_path", "log_level"])
    def test_missing_required_section(self, valid_config, section):
        del valid_config[section]

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert section in error

    def test_invalid_device_id_type(self, valid_config):
        """device_id with invalid type fails."""
        valid_config["camera"]["device_id"] = [1, 2, 3]

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "device_id" in error.lower()

    def test_negative_device_id(self, valid_config):
        """Negative integer device_id fails."""
        valid_config["camera"]["device_id"] = -1

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "non-negative" in error.lower()

    def test_url_device_id_passes(self, valid_config):
        """A phone IP-webcam URL is a valid device_id."""
        valid_config["camera"]["device_id"] = "http://192.168.1.20:8080/video"

        is_valid, _ = validate_config(valid_config)

        assert is_valid is True

    def test_bool_device_id_fails(self, valid_config):
        valid_config["camera"]["device_id"] = True

        is_valid, _ = validate_config(valid_config)

        assert is_valid is False

    def test_unknown_camera_backend(self, valid_config):
        valid_config["camera"]["backend"] = "picamera2"

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "backend" in error

    def test_invalid_resolution(self, valid_config):
        valid_config["camera"]["resolution"] = [640]

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "resolution" in error

    def test_invalid_rotate(self, valid_config):
        valid_config["camera"]["rotate"] = 45

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "rotate" in error

    def test_missing_model_path(self, valid_config):
        valid_config["detector"]["model"] = ""

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "detector.model" in error

    def test_non_positive_anchor_count(self, valid_config):
        valid_config["detector"]["anchor_count"] = 0

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "anchor_count" in error

    @pytest.mark.parametrize("value", [1.0, -0.1, "0.3", True])
    def test_invalid_threshold(self, valid_config, value):
        valid_config["detector"]["objectness_threshold"] = value

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "objectness_threshold" in error

    def test_empty_classes(self, valid_config):
        valid_config["detector"]["classes"] = []

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "classes" in error

    def test_non_positive_interval(self, valid_config):
        valid_config["polling"]["interval_s"] = 0

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "interval_s" in error

    def test_null_inference_timeout_passes(self, valid_config):
        """inference_timeout_s: null disables the timeout."""
        valid_config["polling"]["inference_timeout_s"] = None

        is_valid, _ = validate_config(valid_config)

        assert is_valid is True

    def test_negative_inference_timeout(self, valid_config):
        valid_config["polling"]["inference_timeout_s"] = -1

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "inference_timeout_s" in error

    def test_unknown_narration_backend(self, valid_config):
        valid_config["narration"]["backend"] = "espeak"

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "narration.backend" in error

    def test_invalid_narration_rate(self, valid_config):
        valid_config["narration"]["rate"] = 0

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "rate" in error

    def test_invalid_log_level(self, valid_config):
        """Invalid log_level fails."""
        valid_config["log_level"] = "VERBOSE"

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "log_level" in error


class TestLoadConfig:
    """Tests for layered config loading."""

    def test_loads_default_only(self, temp_config_dir):
        """Without local overrides, default.yaml is returned."""
        config = load_config(str(temp_config_dir / "config.yaml"))

        assert config["polling"]["interval_s"] == 3.0
        assert config["narration"]["backend"] == "log"

    def test_local_overrides_merge(self, temp_config_dir):
        """config.yaml overrides individual keys, keeps the rest."""
        (temp_config_dir / "config.yaml").write_text("""
polling:
  interval_s: 1.5
narration:
  language: "ru"
""")
        config = load_config(str(temp_config_dir / "config.yaml"))

        assert config["polling"]["interval_s"] == 1.5
        assert config["polling"]["inference_timeout_s"] == 10.0
        assert config["narration"]["language"] == "ru"
        assert config["narration"]["backend"] == "log"

    def test_explicit_path_applied_last(self, temp_config_dir):
        (temp_config_dir / "config.yaml").write_text("log_level: DEBUG\n")
        explicit = temp_config_dir / "field.yaml"
        explicit.write_text("log_level: WARNING\ncamera:\n  device_id: 1\n")

        config = load_config(str(explicit))

        assert config["log_level"] == "WARNING"
        assert config["camera"]["device_id"] == 1
        assert config["camera"]["fps"] == 30

    def test_missing_directory_gives_empty_config(self, tmp_path):
        config = load_config(str(tmp_path / "nowhere" / "config.yaml"))

        assert config == {}

    def test_repo_default_config_is_valid(self):
        """The checked-in default.yaml passes validation."""
        repo_root = os.path.join(os.path.dirname(__file__), "..")
        config = load_config(os.path.join(repo_root, "config", "default.yaml"))

        is_valid, error = validate_config(config)

        assert is_valid, error
        assert config["detector"]["classes"] == DEFAULT_CLASSES


class TestConfigModel:
    def test_from_dict_defaults(self):
        cfg = Config.from_dict({})

        assert cfg.detector.anchor_count == 8400
        assert cfg.detector.class_count == 80
        assert cfg.detector.classes == DEFAULT_CLASSES
        assert cfg.polling.interval_s == 3.0
        assert cfg.narration.backend == "pyttsx3"

    def test_round_trip_keeps_values(self, valid_config):
        cfg = Config.from_dict(valid_config)
        again = Config.from_dict(cfg.to_dict())

        assert again == cfg
        assert again.narration.backend == "log"

    def test_null_rotate_becomes_zero(self):
        cfg = Config.from_dict({"camera": {"rotate": None}})

        assert cfg.camera.rotate == 0


class TestDisableSpeech:
    def test_switches_backend_to_log(self, valid_config):
        valid_config["narration"]["backend"] = "pyttsx3"

        config = disable_speech(valid_config)

        assert config["narration"] == {"backend": "log", "language": "en"}

    def test_bare_narration_key(self, temp_config_dir):
        """`narration:` with no value loads as None and must not break --no-speech."""
        (temp_config_dir / "config.yaml").write_text("narration:\n")
        config = load_config(str(temp_config_dir / "config.yaml"))
        assert config["narration"] is None

        disable_speech(config)

        assert config["narration"] == {"backend": "log"}

    def test_missing_narration_section(self):
        assert disable_speech({})["narration"] == {"backend": "log"}
