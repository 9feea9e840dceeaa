"""
Typed configuration models matching the YAML config structure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


DEFAULT_CLASSES: List[str] = [
    "person",
    "bicycle",
    "car",
    "motorcycle",
    "bus",
    "truck",
    "traffic light",
    "cat",
    "dog",
    "bird",
]


@dataclass
class CameraConfig:
    """Camera configuration."""
    backend: str = "opencv"
    device_id: Union[int, str] = 0
    resolution: List[int] = field(default_factory=lambda: [640, 480])
    fps: int = 30
    max_retries: int = 3
    flush_frames: int = 4
    rotate: int = 0
    mirror: bool = False

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CameraConfig":
        """Adapter: Create from config dictionary."""
        return cls(
            backend=d.get("backend", "opencv"),
            device_id=d.get("device_id", 0),
            resolution=d.get("resolution", [640, 480]),
            fps=d.get("fps", 30),
            max_retries=d.get("max_retries", 3),
            flush_frames=d.get("flush_frames", 4),
            rotate=d.get("rotate", 0) or 0,
            mirror=d.get("mirror", False),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "backend": self.backend,
            "device_id": self.device_id,
            "resolution": self.resolution,
            "fps": self.fps,
            "max_retries": self.max_retries,
            "flush_frames": self.flush_frames,
            "rotate": self.rotate,
            "mirror": self.mirror,
        }


@dataclass
class DetectorConfig:
    """Object detector (model + decoder) configuration."""
    model: str = "models/yolov8n.onnx"
    input_size: int = 320
    anchor_count: int = 8400
    class_count: int = 80
    objectness_threshold: float = 0.3
    confidence_threshold: float = 0.4
    classes: List[str] = field(default_factory=lambda: list(DEFAULT_CLASSES))
    execution_providers: List[str] = field(default_factory=lambda: ["CPUExecutionProvider"])
    output_name: str = "output0"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "DetectorConfig":
        return cls(
            model=d.get("model", "models/yolov8n.onnx"),
            input_size=d.get("input_size", 320),
            anchor_count=d.get("anchor_count", 8400),
            class_count=d.get("class_count", 80),
            objectness_threshold=d.get("objectness_threshold", 0.3),
            confidence_threshold=d.get("confidence_threshold", 0.4),
            classes=list(d.get("classes") or DEFAULT_CLASSES),
            execution_providers=list(d.get("execution_providers") or ["CPUExecutionProvider"]),
            output_name=d.get("output_name", "output0"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "model": self.model,
            "input_size": self.input_size,
            "anchor_count": self.anchor_count,
            "class_count": self.class_count,
            "objectness_threshold": self.objectness_threshold,
            "confidence_threshold": self.confidence_threshold,
            "classes": self.classes,
            "execution_providers": self.execution_providers,
            "output_name": self.output_name,
        }


@dataclass
class PollingConfig:
    """Polling loop cadence. inference_timeout_s=None waits on the model indefinitely."""
    interval_s: float = 3.0
    inference_timeout_s: Optional[float] = 10.0

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "PollingConfig":
        return cls(
            interval_s=d.get("interval_s", 3.0),
            inference_timeout_s=d.get("inference_timeout_s", 10.0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "interval_s": self.interval_s,
            "inference_timeout_s": self.inference_timeout_s,
        }


@dataclass
class NarrationConfig:
    """Speech output configuration."""
    backend: str = "pyttsx3"
    language: str = "en"
    rate: float = 0.9
    announce_nearest: bool = True

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "NarrationConfig":
        return cls(
            backend=d.get("backend", "pyttsx3"),
            language=d.get("language", "en"),
            rate=d.get("rate", 0.9),
            announce_nearest=d.get("announce_nearest", True),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "backend": self.backend,
            "language": self.language,
            "rate": self.rate,
            "announce_nearest": self.announce_nearest,
        }


@dataclass
class WebConfig:
    """Web control surface configuration."""
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "WebConfig":
        return cls(
            host=d.get("host", "127.0.0.1"),
            port=d.get("port", 8000),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"host": self.host, "port": self.port}


@dataclass
class Config:
    """
    Complete application configuration.

    This is a typed representation of the YAML config structure.
    """
    camera: CameraConfig = field(default_factory=CameraConfig)
    detector: DetectorConfig = field(default_factory=DetectorConfig)
    polling: PollingConfig = field(default_factory=PollingConfig)
    narration: NarrationConfig = field(default_factory=NarrationConfig)
    web: WebConfig = field(default_factory=WebConfig)
    log_path: str = "logs/nav_assist.log"
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Config":
        """Adapter: Create Config from raw dictionary (e.g., from load_config)."""
        return cls(
            camera=CameraConfig.from_dict(d.get("camera", {}) or {}),
            detector=DetectorConfig.from_dict(d.get("detector", {}) or {}),
            polling=PollingConfig.from_dict(d.get("polling", {}) or {}),
            narration=NarrationConfig.from_dict(d.get("narration", {}) or {}),
            web=WebConfig.from_dict(d.get("web", {}) or {}),
            log_path=d.get("log_path", "logs/nav_assist.log"),
            log_level=d.get("log_level", "INFO"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to dictionary (for saving or passing to existing code)."""
        return {
            "camera": self.camera.to_dict(),
            "detector": self.detector.to_dict(),
            "polling": self.polling.to_dict(),
            "narration": self.narration.to_dict(),
            "web": self.web.to_dict(),
            "log_path": self.log_path,
            "log_level": self.log_level,
        }
