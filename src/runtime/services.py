from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional

from detection.detector import ObstacleDetector
from models.config import DetectorConfig, NarrationConfig, PollingConfig
from narration import create_narration_sink
from narration.base import NarrationSink
from narration.phrases import get_phrasebook
from observation import create_source_from_config
from pipeline.engine import PollingDriver
from pipeline.sinks import PresentationSink
from pipeline.stages.announce import AnnounceStage, AnnounceStageConfig
from runtime.context import RuntimeContext


class NavigationService:
    """
    Owns the assistant lifecycle: setup, start/stop of the polling loop, shutdown.

    Setup failures (model or camera unavailable) are reported once as a
    status message and leave the service not ready; start() then refuses.
    """

    def __init__(
        self,
        ctx: RuntimeContext,
        polling: PollingConfig,
        announce: Optional[AnnounceStageConfig] = None,
    ):
        self.ctx = ctx
        self.announce = AnnounceStage(ctx.presentation, ctx.narration, ctx.phrases, announce)
        self.driver = PollingDriver(ctx, polling, self.announce)
        self.setup_error: Optional[str] = None
        # start/stop arrive from web worker threads
        self._control_lock = threading.Lock()

    @property
    def is_ready(self) -> bool:
        return self.ctx.ready

    @property
    def is_running(self) -> bool:
        return self.ctx.is_running

    def init(self) -> bool:
        """Load the model and open the camera. Returns False on setup failure."""
        phrases = self.ctx.phrases
        self.ctx.presentation.show_status(phrases.status_loading)
        try:
            self.ctx.detector.load()
            self.ctx.source.open()
        except Exception as e:
            self.ctx.ready = False
            self.setup_error = str(e)
            logging.error(f"Setup failed: {e}")
            self.ctx.presentation.show_status(phrases.error(str(e)))
            return False

        self.ctx.ready = True
        self.setup_error = None
        self.ctx.presentation.show_status(phrases.status_ready)
        logging.info("Navigation assistant ready")
        return True

    def start(self) -> bool:
        """Start scanning. Returns False if not ready or already running."""
        phrases = self.ctx.phrases
        with self._control_lock:
            if not self.ctx.ready:
                logging.warning("Start requested but setup has not completed")
                self.ctx.presentation.show_status(phrases.status_not_ready)
                return False
            if self.ctx.is_running:
                return False

            self.ctx.presentation.show_status(phrases.status_scanning)
            self.ctx.narration.speak(phrases.navigation_started)
            return self.driver.start()

    def stop(self) -> bool:
        """Stop scanning. Returns False if the loop was not running."""
        phrases = self.ctx.phrases
        with self._control_lock:
            if not self.ctx.is_running:
                return False

            self.driver.stop()
            self.ctx.presentation.show_status(phrases.status_stopped)
            self.ctx.narration.speak(phrases.navigation_stopped)
            return True

    def shutdown(self) -> None:
        """Stop the loop and release camera and speech resources."""
        self.stop()
        self.driver.close()
        try:
            self.ctx.source.close()
        except Exception as e:
            logging.warning(f"Error closing source: {e}")
        try:
            self.ctx.narration.close()
        except Exception as e:
            logging.warning(f"Error closing narration: {e}")
        logging.info("Navigation assistant shut down")


def create_service_from_config(
    config: Dict[str, Any],
    presentation: PresentationSink,
    narration: Optional[NarrationSink] = None,
) -> NavigationService:
    """
    Factory: build a NavigationService from the app config dict.

    Args:
        config: Full application config dict.
        presentation: Where counts and status lines are rendered.
        narration: Speech sink; built from narration config when omitted.
    """
    narration_cfg = NarrationConfig.from_dict(config.get("narration", {}) or {})
    if narration is None:
        narration = create_narration_sink(narration_cfg.to_dict())

    ctx = RuntimeContext(
        config=config,
        source=create_source_from_config(config.get("camera", {}) or {}, source_id="main-camera"),
        detector=ObstacleDetector(DetectorConfig.from_dict(config.get("detector", {}) or {})),
        presentation=presentation,
        narration=narration,
        phrases=get_phrasebook(narration_cfg.language),
    )
    return NavigationService(
        ctx,
        PollingConfig.from_dict(config.get("polling", {}) or {}),
        AnnounceStageConfig(announce_nearest=narration_cfg.announce_nearest),
    )
