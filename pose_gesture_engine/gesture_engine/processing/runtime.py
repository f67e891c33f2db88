# pose_gesture_engine/gesture_engine/processing/runtime.py
from dataclasses import dataclass, field
from typing import List, Optional
from ..common.enums import PoseGesture, TrackingTier

@dataclass
class GestureRuntime:
    """
    Mutable per-session state of the detection loop.
    Owned by a single GestureEngine and replaced wholesale on disable/enable.
    """
    # Calibration
    baseline: Optional[float] = None
    calibration_buffer: List[float] = field(default_factory=list)
    recalibrating: bool = False
    drift_frames: int = 0
    idle_frames: int = 0

    # Classification and debounce
    stable_gesture: PoseGesture = PoseGesture.IDLE
    pending_gesture: Optional[PoseGesture] = None
    pending_since: float = 0.0
    last_signal: Optional[float] = None
    last_signal_at: Optional[float] = None

    # Tracking
    missing_frames: int = 0
    tracking_tier: TrackingTier = TrackingTier.FULL
    last_detect_at: Optional[float] = None

    @property
    def calibrated(self) -> bool:
        return self.baseline is not None and not self.recalibrating
