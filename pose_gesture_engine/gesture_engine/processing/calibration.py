# pose_gesture_engine/gesture_engine/processing/calibration.py
import logging
import statistics
from ..common.config import GestureConfig
from ..common.enums import PoseGesture
from .runtime import GestureRuntime

logger = logging.getLogger(__name__)

class CalibrationManager:
    """
    Owns the neutral-position baseline of a GestureRuntime.

    Runs the initial calibration, adapts the baseline while the subject is
    idle, and re-runs a shorter calibration when the signal drifts away from
    the baseline for too long.
    """

    def __init__(self, config: GestureConfig):
        self.config = config

    def required_frames(self, runtime: GestureRuntime) -> int:
        return self.config.recalibration_frames if runtime.recalibrating else self.config.calibration_frames

    def progress(self, runtime: GestureRuntime) -> float:
        if runtime.calibrated:
            return 1.0
        return min(1.0, len(runtime.calibration_buffer) / self.required_frames(runtime))

    def update(self, runtime: GestureRuntime, signal: float) -> bool:
        """
        Feeds one frame's signal. Returns True when the frame was consumed by
        (re)calibration, in which case the published gesture must be IDLE.
        """
        if not runtime.calibrated:
            self._accumulate(runtime, signal)
            return True

        self._adapt(runtime, signal)
        return self._check_drift(runtime, signal)

    def _accumulate(self, runtime: GestureRuntime, signal: float) -> None:
        runtime.calibration_buffer.append(signal)
        if len(runtime.calibration_buffer) < self.required_frames(runtime):
            return

        mode = "Recalibration" if runtime.recalibrating else "Calibration"
        runtime.baseline = statistics.mean(runtime.calibration_buffer)
        runtime.calibration_buffer = []
        runtime.recalibrating = False
        runtime.drift_frames = 0
        runtime.idle_frames = 0
        logger.info("%s complete, baseline=%.4f", mode, runtime.baseline)

    def _adapt(self, runtime: GestureRuntime, signal: float) -> None:
        if runtime.stable_gesture != PoseGesture.IDLE:
            runtime.idle_frames = 0
            return

        runtime.idle_frames += 1
        # Standing still longer tracks slow postural drift faster
        if runtime.idle_frames > self.config.idle_acceleration_frames:
            smoothing = self.config.idle_smoothing
        else:
            smoothing = self.config.baseline_smoothing
        runtime.baseline = runtime.baseline * smoothing + signal * (1 - smoothing)

    def _check_drift(self, runtime: GestureRuntime, signal: float) -> bool:
        drift = abs(signal - runtime.baseline)
        if runtime.stable_gesture != PoseGesture.IDLE or drift <= self.config.recalibration_drift_threshold:
            runtime.drift_frames = 0
            return False

        runtime.drift_frames += 1
        if runtime.drift_frames < self.config.drift_trigger_frames:
            return False

        logger.info("Baseline drift %.4f sustained for %d frames, recalibrating", drift, runtime.drift_frames)
        runtime.recalibrating = True
        runtime.calibration_buffer = [signal]
        runtime.drift_frames = 0
        return True
