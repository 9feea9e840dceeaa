"""
Camera frame source backed by cv2.VideoCapture.

device_id may be a camera index (0 = built-in/USB webcam), a stream URL
(a phone running an IP-webcam app works well as a chest-mounted camera) or
a path to a recorded walk for offline runs.

The assistant samples one frame every few seconds, so for live cameras the
capture buffer is drained before each read; otherwise the frame narrated
would be whatever the driver queued seconds ago.
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union
from urllib.parse import urlsplit, urlunsplit

import cv2
import numpy as np

from models.frame import FrameData
from .base import ObservationConfig, ObservationSource

_ROTATIONS = {
    90: cv2.ROTATE_90_CLOCKWISE,
    180: cv2.ROTATE_180,
    270: cv2.ROTATE_90_COUNTERCLOCKWISE,
}


def redact_url(device_id: Union[int, str]) -> str:
    """Hide credentials embedded in a camera URL before logging it."""
    if not isinstance(device_id, str) or "://" not in device_id:
        return str(device_id)
    parts = urlsplit(device_id)
    if parts.username is None and parts.password is None:
        return device_id
    host = parts.hostname or ""
    if parts.port:
        host = f"{host}:{parts.port}"
    return urlunsplit((parts.scheme, f"***@{host}", parts.path, parts.query, parts.fragment))


@dataclass
class OpenCVSourceConfig(ObservationConfig):
    """
    Attributes:
        device_id: Camera index, stream URL or video file path.
        max_retries: Attempts when opening (or reopening) the device.
        flush_frames: Buffered frames discarded before each live read.
        rotate: Clockwise rotation in degrees (0, 90, 180, 270), for a phone
            worn in portrait orientation.
        mirror: Flip left/right (front-facing phone cameras).
    """
    device_id: Union[int, str] = 0
    max_retries: int = 3
    flush_frames: int = 4
    rotate: int = 0
    mirror: bool = False

    @classmethod
    def from_camera_config(cls, camera_cfg: Dict[str, Any], source_id: str = "camera") -> "OpenCVSourceConfig":
        resolution = camera_cfg.get("resolution")
        return cls(
            source_id=source_id,
            resolution=tuple(resolution) if resolution else None,
            fps=camera_cfg.get("fps"),
            device_id=camera_cfg.get("device_id", 0),
            max_retries=camera_cfg.get("max_retries", 3),
            flush_frames=camera_cfg.get("flush_frames", 4),
            rotate=camera_cfg.get("rotate") or 0,
            mirror=bool(camera_cfg.get("mirror", False)),
        )


class OpenCVSource(ObservationSource):
    """
    Example:
        with OpenCVSource(OpenCVSourceConfig(device_id="http://192.168.1.20:8080/video")) as cam:
            frame_data = cam.read()
    """

    def __init__(self, config: OpenCVSourceConfig):
        super().__init__(config)
        self.cfg = config
        self._cap: Optional[cv2.VideoCapture] = None

    @property
    def device_id(self) -> Union[int, str]:
        return self.cfg.device_id

    @property
    def is_file(self) -> bool:
        device = self.cfg.device_id
        return isinstance(device, str) and "://" not in device and os.path.exists(device)

    def open(self) -> None:
        if self._is_open:
            return

        self._connect()
        self._is_open = True
        self._frame_index = 0
        logging.info(
            f"Camera opened: {redact_url(self.device_id)} "
            f"(source_id={self.source_id}, resolution={self.cfg.resolution})"
        )

    def _connect(self) -> None:
        """(Re)create the capture, backing off between failed attempts."""
        attempts = max(1, self.cfg.max_retries)
        for attempt in range(1, attempts + 1):
            self._release()
            if attempt > 1:
                delay = min(2 ** (attempt - 1), 10)
                logging.info(f"Camera retry {attempt}/{attempts} in {delay}s")
                time.sleep(delay)

            cap = cv2.VideoCapture(self.device_id)
            if cap.isOpened():
                self._cap = cap
                self._apply_capture_settings(cap)
                return
            cap.release()
            logging.warning(f"Camera {redact_url(self.device_id)} did not open")

        raise RuntimeError(
            f"Failed to open device {redact_url(self.device_id)} after {attempts} attempts"
        )

    def _apply_capture_settings(self, cap: cv2.VideoCapture) -> None:
        # Only local devices honour capture properties; streams and files ignore them.
        if not isinstance(self.device_id, int):
            return
        if self.cfg.resolution:
            width, height = self.cfg.resolution
            cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
            cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
        if self.cfg.fps:
            cap.set(cv2.CAP_PROP_FPS, self.cfg.fps)

    def _release(self) -> None:
        if self._cap is not None:
            self._cap.release()
            self._cap = None

    def _grab_latest(self) -> Optional[np.ndarray]:
        if not self.is_file:
            for _ in range(self.cfg.flush_frames):
                if not self._cap.grab():
                    break
        ok, frame = self._cap.read()
        return frame if ok else None

    def read(self) -> Optional[FrameData]:
        if not self._is_open or self._cap is None:
            return None

        frame = self._grab_latest()
        if frame is None:
            if self.is_file:
                logging.info(f"Video file finished: {self.device_id}")
                return None
            logging.warning("Camera read failed, reconnecting")
            try:
                self._connect()
            except RuntimeError as e:
                logging.error(f"Camera reconnect failed: {e}")
                return None
            frame = self._grab_latest()
            if frame is None:
                return None

        self._frame_index += 1
        return FrameData.from_numpy(
            self._orient(frame),
            timestamp=time.time(),
            frame_index=self._frame_index,
            source=self.source_id,
        )

    def _orient(self, frame: np.ndarray) -> np.ndarray:
        rotation = _ROTATIONS.get(self.cfg.rotate)
        if rotation is not None:
            frame = cv2.rotate(frame, rotation)
        if self.cfg.mirror:
            frame = cv2.flip(frame, 1)
        return frame

    def close(self) -> None:
        self._release()
        if self._is_open:
            logging.info(f"Camera closed: source_id={self.source_id}")
        self._is_open = False


def create_source_from_config(camera_cfg: Dict[str, Any], source_id: str = "camera") -> ObservationSource:
    """Build the frame source selected by camera.backend."""
    backend = camera_cfg.get("backend", "opencv")
    if backend != "opencv":
        raise ValueError(f"Unsupported camera backend: {backend}")
    return OpenCVSource(OpenCVSourceConfig.from_camera_config(camera_cfg, source_id=source_id))
