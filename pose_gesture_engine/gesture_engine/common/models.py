# pose_gesture_engine/gesture_engine/common/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from .enums import ChallengeOutcome, ChallengePhase, ErrorKind, PoseGesture, TrackingStatus, TrackingTier

class LandmarkPoint(BaseModel):
    """A normalized 2D body keypoint with its visibility confidence."""
    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    visibility: float = 1.0

class TierResult(BaseModel):
    """Scale-normalized vertical signal computed from a single landmark set."""
    model_config = ConfigDict(frozen=True)

    tier: TrackingTier
    signal: float
    threshold_multiplier: float

class PublishedState(BaseModel):
    """The only view of the engine consumers ever observe."""
    model_config = ConfigDict(frozen=True)

    gesture: PoseGesture = PoseGesture.IDLE
    status: TrackingStatus = TrackingStatus.IDLE
    calibration_progress: float = Field(default=0.0, ge=0.0, le=1.0)
    error_message: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    tracking_tier: TrackingTier = TrackingTier.FULL

class PoseChallenge(BaseModel):
    """One scripted entry of the pose-matching sequence."""
    model_config = ConfigDict(frozen=True)

    id: int
    instruction: str
    target_gesture: PoseGesture
    hold_ms: float = Field(default=0.0, ge=0.0)  # 0 = instant
    timeout_ms: float = Field(gt=0.0)
    success_text: str
    timeout_text: str

class MatchResult(BaseModel):
    matched: bool
    hold_progress: float = 0.0

class ChallengeUpdate(BaseModel):
    """Snapshot of the challenge matcher after one update."""
    phase: ChallengePhase
    index: int
    challenge: Optional[PoseChallenge] = None
    hold_progress: float = 0.0
    feedback_text: Optional[str] = None
    resolved: Optional[ChallengeOutcome] = None  # set on the resolving update only
