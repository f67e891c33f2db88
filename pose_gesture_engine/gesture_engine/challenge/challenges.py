# pose_gesture_engine/gesture_engine/challenge/challenges.py
from typing import Optional, Tuple
from ..common.enums import PoseGesture, TrackingStatus
from ..common.models import MatchResult, PoseChallenge

DEFAULT_CHALLENGES: Tuple[PoseChallenge, ...] = (
    PoseChallenge(
        id=1,
        instruction="Stand still!",
        target_gesture=PoseGesture.IDLE,
        hold_ms=2000,
        timeout_ms=6000,
        success_text="Great job!",
        timeout_text="Nice try!",
    ),
    PoseChallenge(
        id=2,
        instruction="Jump!",
        target_gesture=PoseGesture.JUMP,
        hold_ms=0,
        timeout_ms=8000,
        success_text="What a jump!",
        timeout_text="Well done!",
    ),
    PoseChallenge(
        id=3,
        instruction="Duck down!",
        target_gesture=PoseGesture.DUCK,
        hold_ms=0,
        timeout_ms=8000,
        success_text="So quick!",
        timeout_text="Keep it up!",
    ),
)

def check_pose_match(challenge: PoseChallenge, gesture: PoseGesture, status: TrackingStatus,
                     hold_start: Optional[float], now: float) -> MatchResult:
    """Matches the published gesture against a challenge; only a tracked gesture counts."""
    if status != TrackingStatus.TRACKING or gesture != challenge.target_gesture:
        return MatchResult(matched=False, hold_progress=0.0)

    if challenge.hold_ms == 0:
        return MatchResult(matched=True, hold_progress=1.0)

    if hold_start is None:
        return MatchResult(matched=False, hold_progress=0.0)

    progress = min(1.0, max(0.0, (now - hold_start) / challenge.hold_ms))
    return MatchResult(matched=progress >= 1.0, hold_progress=progress)
