# pose_gesture_engine/gesture_engine/processing/tier_signal.py
import numpy as np
from enum import IntEnum
from typing import List, Optional, Sequence
from ..common.config import GestureConfig
from ..common.enums import TrackingTier
from ..common.models import LandmarkPoint, TierResult

class PoseLandmarkIndex(IntEnum):
    """Indices of the 33-point pose scheme read by the tier extractor."""
    NOSE = 0
    LEFT_EAR = 7
    RIGHT_EAR = 8
    LEFT_SHOULDER = 11
    RIGHT_SHOULDER = 12

HEAD_INDICES = (PoseLandmarkIndex.NOSE, PoseLandmarkIndex.LEFT_EAR, PoseLandmarkIndex.RIGHT_EAR)

def _usable(landmarks: Sequence[LandmarkPoint], index: int, min_visibility: float) -> Optional[LandmarkPoint]:
    if index >= len(landmarks):
        return None
    point = landmarks[index]
    if point is None or point.visibility < min_visibility:
        return None
    return point

def compute_tier_signal(landmarks: Sequence[LandmarkPoint], config: GestureConfig) -> Optional[TierResult]:
    """
    Reduces one landmark set to a scale-normalized vertical signal.

    Tiers are tried in priority order (full, head-only, shoulder-only). The
    vertical position is divided by a horizontal span so the signal stays
    roughly invariant to the subject's distance from the camera.
    Returns None when no tier qualifies.
    """
    head: List[LandmarkPoint] = [
        p for p in (_usable(landmarks, i, config.min_visibility) for i in HEAD_INDICES) if p is not None
    ]
    left_shoulder = _usable(landmarks, PoseLandmarkIndex.LEFT_SHOULDER, config.min_visibility)
    right_shoulder = _usable(landmarks, PoseLandmarkIndex.RIGHT_SHOULDER, config.min_visibility)
    has_shoulders = left_shoulder is not None and right_shoulder is not None

    if has_shoulders:
        shoulder_mid_y = (left_shoulder.y + right_shoulder.y) / 2
        shoulder_span = max(config.min_shoulder_span, abs(right_shoulder.x - left_shoulder.x))

    # Tier 1: both shoulders + at least one head point
    if has_shoulders and head:
        head_y = float(np.mean([p.y for p in head]))
        signal = (head_y * config.head_weight + shoulder_mid_y * config.shoulder_weight) / shoulder_span
        return TierResult(tier=TrackingTier.FULL, signal=signal,
                          threshold_multiplier=config.full_multiplier)

    # Tier 2: two or more head points, no shoulders
    if len(head) >= 2:
        head_y = float(np.mean([p.y for p in head]))
        head_xs = np.array([p.x for p in head])
        head_span = max(config.min_head_span, float(head_xs.max() - head_xs.min()))
        return TierResult(tier=TrackingTier.HEAD_ONLY, signal=head_y / head_span,
                          threshold_multiplier=config.head_only_multiplier)

    # Tier 3: both shoulders, no head
    if has_shoulders:
        return TierResult(tier=TrackingTier.SHOULDER_ONLY, signal=shoulder_mid_y / shoulder_span,
                          threshold_multiplier=config.shoulder_only_multiplier)

    return None
