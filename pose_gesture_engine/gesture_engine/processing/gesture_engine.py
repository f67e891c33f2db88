# pose_gesture_engine/gesture_engine/processing/gesture_engine.py
import logging
from typing import Any, Callable, List, Optional, Sequence
from ..common.config import GestureConfig
from ..common.enums import ErrorKind, PoseGesture, TrackingStatus
from ..common.models import LandmarkPoint, PublishedState
from ..landmarks.base import LandmarkSource, LandmarkSourceFactory
from .calibration import CalibrationManager
from .classifier import classify, rise_velocity
from .debouncer import Debouncer
from .occlusion import OcclusionTracker
from .runtime import GestureRuntime
from .tier_signal import compute_tier_signal

logger = logging.getLogger(__name__)

StateListener = Callable[[PublishedState], None]

class GestureEngine:
    """
    Orchestrates landmark detection, calibration, classification and
    debouncing into a published jump/duck/idle signal.

    The caller drives the engine with tick(frame, now_ms) from its own loop;
    the engine rate-limits detection and never renders anything.
    """

    def __init__(self, config: GestureConfig, source_factory: LandmarkSourceFactory):
        self.config = config
        self._source_factory = source_factory
        self._source: Optional[LandmarkSource] = None

        self.calibration = CalibrationManager(config)
        self.debouncer = Debouncer(config.debounce_ms)
        self.occlusion = OcclusionTracker(config.max_missing_frames)

        self.runtime = GestureRuntime()
        self.enabled = False
        self._state = PublishedState()
        self.last_landmarks: Optional[Sequence[LandmarkPoint]] = None
        self._listeners: List[StateListener] = []

    @property
    def state(self) -> PublishedState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Registers a listener called on every published change. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def enable(self) -> None:
        """Starts a fresh session: new runtime, initial calibration, status loading."""
        self.enabled = True
        self.runtime = GestureRuntime()
        logger.info("Gesture engine enabled")
        self._publish(PublishedState(status=TrackingStatus.LOADING))

    def disable(self) -> None:
        """Stops detection and discards all runtime state."""
        self.enabled = False
        self.runtime = GestureRuntime()
        self.last_landmarks = None
        logger.info("Gesture engine disabled")
        self._publish(PublishedState())

    def close(self) -> None:
        self.disable()
        if self._source is not None and hasattr(self._source, 'close'):
            self._source.close()
        self._source = None

    def tick(self, frame: Any, now: float) -> PublishedState:
        """
        Scheduler tick. Runs at most one detection per detection interval;
        earlier ticks are no-ops returning the current published state.
        """
        if not self.enabled or self._state.error_kind == ErrorKind.FATAL:
            return self._state

        runtime = self.runtime
        if runtime.last_detect_at is not None and now - runtime.last_detect_at < self.config.detection_interval_ms:
            return self._state
        runtime.last_detect_at = now

        try:
            source = self._ensure_source()
        except Exception as e:
            logger.exception("Landmark source initialization failed")
            self._publish_error(str(e) or "Pose landmarker initialization failed", ErrorKind.FATAL)
            return self._state

        try:
            landmarks = source.detect(frame, now)
        except Exception as e:
            logger.warning("Detection failed at %.1f ms: %s", now, e)
            self._publish_error(str(e) or type(e).__name__, ErrorKind.TRANSIENT)
            return self._state

        self.last_landmarks = landmarks
        self._publish(self.process_landmarks(landmarks, now))
        return self._state

    def process_landmarks(self, landmarks: Optional[Sequence[LandmarkPoint]], now: float) -> PublishedState:
        """Runs one detection step on the runtime and returns the state to publish."""
        runtime = self.runtime
        tier_result = compute_tier_signal(landmarks, self.config) if landmarks is not None else None

        if tier_result is None:
            if self.occlusion.record_miss(runtime):
                return PublishedState(
                    gesture=PoseGesture.IDLE,
                    status=TrackingStatus.NO_PERSON,
                    calibration_progress=self.calibration.progress(runtime),
                    tracking_tier=runtime.tracking_tier,
                )
            # Brief gaps hold the published status
            return self._state.model_copy(update={'gesture': PoseGesture.IDLE})

        self.occlusion.record_hit(runtime)
        runtime.tracking_tier = tier_result.tier
        signal = tier_result.signal

        if self.config.normalize_velocity and runtime.last_signal_at is not None:
            velocity = rise_velocity(runtime.last_signal, signal,
                                     now - runtime.last_signal_at, self.config.detection_interval_ms)
        else:
            velocity = rise_velocity(runtime.last_signal, signal)
        runtime.last_signal = signal
        runtime.last_signal_at = now

        if self.calibration.update(runtime, signal):
            return self._session_state(PoseGesture.IDLE)

        candidate = classify(runtime.baseline, signal, velocity, tier_result.threshold_multiplier, self.config)
        gesture = self.debouncer.update(runtime, candidate, now)
        logger.debug("tier=%d signal=%.4f baseline=%.4f candidate=%s stable=%s",
                     tier_result.tier, signal, runtime.baseline, candidate.value, gesture.value)
        return self._session_state(gesture)

    def _session_state(self, gesture: PoseGesture) -> PublishedState:
        runtime = self.runtime
        return PublishedState(
            gesture=gesture,
            status=TrackingStatus.TRACKING if runtime.calibrated else TrackingStatus.CALIBRATING,
            calibration_progress=self.calibration.progress(runtime),
            tracking_tier=runtime.tracking_tier,
        )

    def _ensure_source(self) -> LandmarkSource:
        if self._source is None:
            logger.info("Initializing landmark source")
            self._source = self._source_factory()
        return self._source

    def _publish_error(self, message: str, kind: ErrorKind) -> None:
        self._publish(PublishedState(
            gesture=PoseGesture.IDLE,
            status=TrackingStatus.ERROR,
            calibration_progress=0.0,
            error_message=message,
            error_kind=kind,
        ))

    def _publish(self, next_state: PublishedState) -> bool:
        """Replaces the published state unless every field is unchanged."""
        if next_state == self._state:
            return False
        if next_state.status != self._state.status:
            logger.info("Status %s -> %s", self._state.status.value, next_state.status.value)
        self._state = next_state
        for listener in list(self._listeners):
            listener(next_state)
        return True
