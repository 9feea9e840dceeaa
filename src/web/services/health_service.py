from __future__ import annotations

import os
import platform
import time
from dataclasses import dataclass
from typing import Any, Dict

from runtime.services import NavigationService


@dataclass
class HealthService:
    service: NavigationService

    def get_health_summary(self) -> Dict[str, Any]:
        ctx = self.service.ctx
        model_path = (ctx.config.get("detector", {}) or {}).get("model", "")
        return {
            "timestamp": time.time(),
            "platform": platform.platform(),
            "python": platform.python_version(),
            "model_path": model_path,
            "model_exists": bool(model_path) and os.path.exists(model_path),
            "camera_open": bool(getattr(ctx.source, "is_open", False)),
            "ready": ctx.ready,
            "setup_error": self.service.setup_error,
        }
