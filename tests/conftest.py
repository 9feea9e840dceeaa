"""
Pytest configuration and shared fixtures.
"""

import os
import sys

import numpy as np
import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

ANCHORS = 8400
CLASSES = 80


@pytest.fixture
def temp_config_dir(tmp_path):
    """Create a temporary config directory with default.yaml."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()

    default_yaml = config_dir / "default.yaml"
    default_yaml.write_text("""
camera:
  backend: "opencv"
  device_id: 0
  resolution: [640, 480]
  fps: 30

detector:
  model: "models/yolov8n.onnx"
  input_size: 320

polling:
  interval_s: 3.0
  inference_timeout_s: 10.0

narration:
  backend: "log"
  language: "en"

log_path: "logs/test.log"
log_level: "INFO"
""")

    return config_dir


@pytest.fixture
def valid_config():
    """Return a valid configuration dictionary."""
    return {
        "camera": {
            "backend": "opencv",
            "device_id": 0,
            "resolution": [640, 480],
            "fps": 30,
        },
        "detector": {
            "model": "models/yolov8n.onnx",
            "input_size": 320,
            "anchor_count": ANCHORS,
            "class_count": CLASSES,
            "objectness_threshold": 0.3,
            "confidence_threshold": 0.4,
        },
        "polling": {
            "interval_s": 3.0,
            "inference_timeout_s": 10.0,
        },
        "narration": {
            "backend": "log",
            "language": "en",
        },
        "log_path": "logs/test.log",
        "log_level": "INFO",
    }


@pytest.fixture
def empty_tensor():
    """A zeroed raw output buffer with the default layout."""
    return np.zeros((5 + CLASSES) * ANCHORS, dtype=np.float32)


def set_anchor(tensor, anchor, objectness, class_probs, bbox=(0.5, 0.5, 0.1, 0.1), anchors=ANCHORS):
    """Write one anchor's values into a flat raw output buffer."""
    for plane, value in enumerate(bbox):
        tensor[plane * anchors + anchor] = value
    tensor[4 * anchors + anchor] = objectness
    for class_id, prob in class_probs.items():
        tensor[(5 + class_id) * anchors + anchor] = prob
    return tensor
