# pose_gesture_engine/gesture_engine/processing/debouncer.py
from ..common.enums import PoseGesture
from .runtime import GestureRuntime

class Debouncer:
    """Commits a candidate gesture only after it has been sustained for debounce_ms."""

    def __init__(self, debounce_ms: float):
        self.debounce_ms = debounce_ms

    def update(self, runtime: GestureRuntime, candidate: PoseGesture, now: float) -> PoseGesture:
        if candidate == runtime.stable_gesture:
            runtime.pending_gesture = None
            return runtime.stable_gesture

        if runtime.pending_gesture != candidate:
            runtime.pending_gesture = candidate
            runtime.pending_since = now
            return runtime.stable_gesture

        if now - runtime.pending_since >= self.debounce_ms:
            runtime.stable_gesture = candidate
            runtime.pending_gesture = None

        return runtime.stable_gesture
