# pose_gesture_engine/gesture_engine/processing/occlusion.py
import logging
from .runtime import GestureRuntime

logger = logging.getLogger(__name__)

class OcclusionTracker:
    """Counts consecutive frames without a usable signal."""

    def __init__(self, max_missing_frames: int):
        self.max_missing_frames = max_missing_frames

    def record_miss(self, runtime: GestureRuntime) -> bool:
        """Registers a frame without signal. Returns True once the person counts as gone."""
        runtime.missing_frames += 1
        runtime.last_signal = None
        runtime.last_signal_at = None
        # A candidate must be sustained over consecutive signal frames
        runtime.pending_gesture = None
        if runtime.missing_frames == self.max_missing_frames + 1:
            logger.info("No person for %d consecutive frames", runtime.missing_frames)
        return self.is_occluded(runtime)

    def record_hit(self, runtime: GestureRuntime) -> None:
        if self.is_occluded(runtime):
            logger.info("Person reacquired after %d missing frames", runtime.missing_frames)
        runtime.missing_frames = 0

    def is_occluded(self, runtime: GestureRuntime) -> bool:
        return runtime.missing_frames > self.max_missing_frames
