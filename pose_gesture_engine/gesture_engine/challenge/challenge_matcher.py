# pose_gesture_engine/gesture_engine/challenge/challenge_matcher.py
import logging
from typing import Optional, Sequence
from ..common.config import ChallengeConfig
from ..common.enums import ChallengeOutcome, ChallengePhase, PoseGesture, TrackingStatus
from ..common.models import ChallengeUpdate, PoseChallenge
from .challenges import DEFAULT_CHALLENGES, check_pose_match

logger = logging.getLogger(__name__)

PRESENT_STATUSES = (TrackingStatus.CALIBRATING, TrackingStatus.TRACKING)

class ChallengeMatcher:
    """
    Walks a scripted sequence of pose challenges using the engine's published
    gesture and status.

    Phases: DETECT (wait for a person to be present for presence_confirm_ms),
    ACTIVE (match or time out the current challenge), FEEDBACK (show the
    result for feedback_ms), COMPLETE (after the last challenge).
    Timeouts never block the sequence.
    """

    def __init__(self, challenges: Sequence[PoseChallenge] = DEFAULT_CHALLENGES,
                 presence_confirm_ms: float = 2000.0, feedback_ms: float = 1200.0):
        if not challenges:
            raise ValueError("ChallengeMatcher needs at least one challenge")
        self.challenges = tuple(challenges)
        self.presence_confirm_ms = presence_confirm_ms
        self.feedback_ms = feedback_ms
        self.reset()

    @classmethod
    def from_config(cls, config: ChallengeConfig) -> "ChallengeMatcher":
        return cls(config.sequence or DEFAULT_CHALLENGES,
                   presence_confirm_ms=config.presence_confirm_ms,
                   feedback_ms=config.feedback_ms)

    def reset(self) -> None:
        self.phase = ChallengePhase.DETECT
        self.index = 0
        self.presence_since: Optional[float] = None
        self.challenge_started_at: Optional[float] = None
        self.hold_start: Optional[float] = None
        self.hold_progress = 0.0
        self.feedback_text: Optional[str] = None
        self.feedback_until: Optional[float] = None

    @property
    def current(self) -> Optional[PoseChallenge]:
        if self.index < len(self.challenges):
            return self.challenges[self.index]
        return None

    @property
    def complete(self) -> bool:
        return self.phase == ChallengePhase.COMPLETE

    def update(self, gesture: PoseGesture, status: TrackingStatus, now: float) -> ChallengeUpdate:
        if self.phase == ChallengePhase.DETECT:
            self._update_presence(status, now)

        if self.phase == ChallengePhase.FEEDBACK and now >= self.feedback_until:
            self._advance(now)

        if self.phase == ChallengePhase.ACTIVE:
            return self._update_active(gesture, status, now)

        return self._snapshot()

    def _update_presence(self, status: TrackingStatus, now: float) -> None:
        if status not in PRESENT_STATUSES:
            self.presence_since = None
            return
        if self.presence_since is None:
            self.presence_since = now
        if now - self.presence_since >= self.presence_confirm_ms:
            logger.info("Person detected, starting %d challenges", len(self.challenges))
            self.phase = ChallengePhase.ACTIVE
            self.challenge_started_at = now

    def _update_active(self, gesture: PoseGesture, status: TrackingStatus, now: float) -> ChallengeUpdate:
        challenge = self.current
        if now - self.challenge_started_at > challenge.timeout_ms:
            return self._resolve(ChallengeOutcome.TIMEOUT, challenge.timeout_text, now)

        if status == TrackingStatus.TRACKING and gesture == challenge.target_gesture:
            if self.hold_start is None:
                self.hold_start = now
        else:
            # The hold must be unbroken
            self.hold_start = None

        result = check_pose_match(challenge, gesture, status, self.hold_start, now)
        self.hold_progress = result.hold_progress
        if result.matched:
            return self._resolve(ChallengeOutcome.MATCHED, challenge.success_text, now)
        return self._snapshot()

    def _resolve(self, outcome: ChallengeOutcome, text: str, now: float) -> ChallengeUpdate:
        challenge = self.current
        logger.info("Challenge %d (%s) resolved: %s", challenge.id, challenge.target_gesture.value, outcome.value)
        self.phase = ChallengePhase.FEEDBACK
        self.feedback_text = text
        self.feedback_until = now + self.feedback_ms
        if self.feedback_ms <= 0:
            self._advance(now)
        return self._snapshot(resolved=outcome, feedback_text=text)

    def _advance(self, now: float) -> None:
        self.index += 1
        self.hold_start = None
        self.hold_progress = 0.0
        self.feedback_text = None
        self.feedback_until = None
        if self.index >= len(self.challenges):
            logger.info("All challenges complete")
            self.phase = ChallengePhase.COMPLETE
            self.challenge_started_at = None
        else:
            self.phase = ChallengePhase.ACTIVE
            self.challenge_started_at = now

    def _snapshot(self, resolved: Optional[ChallengeOutcome] = None, feedback_text: Optional[str] = None) -> ChallengeUpdate:
        return ChallengeUpdate(
            phase=self.phase,
            index=self.index,
            challenge=self.current,
            hold_progress=self.hold_progress,
            feedback_text=feedback_text if feedback_text is not None else self.feedback_text,
            resolved=resolved,
        )
