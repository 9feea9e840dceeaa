from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class DriverStatsModel(BaseModel):
    tick_count: int = 0
    success_count: int = 0
    failure_count: int = 0
    last_tick_ts: Optional[float] = None
    last_tick_duration_s: Optional[float] = None
    last_error: Optional[str] = None


class StatusResponse(BaseModel):
    """
    Status payload polled by the control page.
    """
    ready: bool = Field(..., description="Model loaded and camera open")
    running: bool = Field(..., description="Polling loop active")
    status: str = Field("", description="Latest status line")
    objects: Dict[str, int] = Field(default_factory=dict, description="Class label -> count for the latest tick")
    empty_text: str = Field("", description="Text to render when objects is empty")
    count_unit: str = Field("", description="Unit suffix for counts")
    setup_error: Optional[str] = None
    uptime_seconds: int = 0
    driver: DriverStatsModel = Field(default_factory=DriverStatsModel)


class DistanceModel(BaseModel):
    level: str
    label: str


class DetectionItem(BaseModel):
    class_name: str = Field(..., alias="class")
    confidence: float
    bbox: List[float] = Field(..., description="[cx, cy, w, h], normalized")
    distance: DistanceModel

    model_config = {"populate_by_name": True}


class DetectionsResponse(BaseModel):
    timestamp: Optional[float]
    count: int
    detections: List[DetectionItem]


class ControlResponse(BaseModel):
    ok: bool
    running: bool
    status: str


class HealthResponse(BaseModel):
    timestamp: float
    platform: str
    python: str
    model_path: str
    model_exists: bool
    camera_open: bool
    ready: bool
    setup_error: Optional[str] = None
