# pose_gesture_engine/gesture_engine/processing/classifier.py
from typing import Optional
from ..common.config import GestureConfig
from ..common.enums import PoseGesture

def rise_velocity(last_signal: Optional[float], signal: float,
                  elapsed_ms: Optional[float] = None, reference_ms: Optional[float] = None) -> float:
    """
    One-step backward difference of the signal; positive when the body rises.
    When both elapsed_ms and reference_ms are given, the difference is
    rescaled to a reference_ms frame interval.
    """
    if last_signal is None:
        return 0.0
    velocity = last_signal - signal
    if elapsed_ms and reference_ms:
        velocity *= reference_ms / elapsed_ms
    return velocity

def classify(baseline: float, signal: float, velocity: float, multiplier: float,
             config: GestureConfig) -> PoseGesture:
    """Raw per-frame gesture candidate. The y axis grows downward, so a jump lowers the signal."""
    jump_delta = baseline - signal
    duck_delta = signal - baseline

    if jump_delta > config.jump_threshold * multiplier:
        return PoseGesture.JUMP
    # A fast rise is accepted with a smaller displacement
    if (jump_delta > config.quick_jump_threshold * multiplier
            and velocity > config.quick_jump_velocity * multiplier):
        return PoseGesture.JUMP
    if duck_delta > config.duck_threshold * multiplier:
        return PoseGesture.DUCK
    return PoseGesture.IDLE
