# pose_gesture_engine/gesture_engine/visualization/visualizer.py
import cv2
import numpy as np
from typing import List, Optional, Sequence
from ..common.enums import ChallengePhase, PoseGesture, TrackingStatus
from ..common.models import ChallengeUpdate, LandmarkPoint, PublishedState

GESTURE_COLORS = {
    PoseGesture.IDLE: (240, 240, 240),
    PoseGesture.JUMP: (80, 220, 80),
    PoseGesture.DUCK: (60, 160, 255),
}

class Visualizer:
    """Draws the published gesture state and challenge progress as a text HUD."""

    def __init__(self, config: dict):
        self.config = config
        self.font = cv2.FONT_HERSHEY_SIMPLEX
        self.min_visibility = config.get('min_visibility', 0.18)

    def render(self, frame: np.ndarray, state: PublishedState, current_fps: float,
               landmarks: Optional[Sequence[LandmarkPoint]] = None,
               challenge: Optional[ChallengeUpdate] = None) -> np.ndarray:
        output_frame = frame.copy()

        # Adaptive Level of Detail (LOD): skip keypoints on low performance
        lod_reduced = self.config.get('adaptive_lod', False) and current_fps < self.config.get('lod_threshold_fps', 15)

        if landmarks and self.config.get('draw_landmarks', True) and not lod_reduced:
            self._draw_landmarks(output_frame, landmarks)

        if self.config.get('draw_hud', True):
            self._draw_hud(output_frame, self.hud_lines(state, current_fps, challenge, lod_reduced),
                           GESTURE_COLORS[state.gesture])

        return output_frame

    def hud_lines(self, state: PublishedState, fps: float,
                  challenge: Optional[ChallengeUpdate] = None, lod_reduced: bool = False) -> List[str]:
        lines = [
            f"FPS: {fps:.1f}",
            f"Status: {state.status.value}",
            f"Gesture: {state.gesture.value}",
            f"Tier: {int(state.tracking_tier)}",
        ]
        if state.status == TrackingStatus.CALIBRATING:
            lines.append(f"Calibrating: {state.calibration_progress:.0%}")
        if state.status == TrackingStatus.ERROR and state.error_message:
            lines.append(f"Error ({state.error_kind.value if state.error_kind else 'unknown'}): {state.error_message}")
        if challenge is not None:
            if challenge.feedback_text:
                lines.append(challenge.feedback_text)
            elif challenge.challenge is not None and challenge.phase == ChallengePhase.ACTIVE:
                lines.append(f"{challenge.challenge.instruction} {challenge.hold_progress:.0%}")
            else:
                lines.append(f"Challenges: {challenge.phase.value}")
        if lod_reduced:
            lines.append("LOD: REDUCED")
        return lines

    def _draw_hud(self, frame: np.ndarray, lines: List[str], gesture_color):
        for i, text in enumerate(lines):
            color = gesture_color if text.startswith("Gesture") else (240, 240, 240)
            cv2.putText(frame, text, (10, 30 + i * 30), self.font, 0.7, color, 2, cv2.LINE_AA)

    def _draw_landmarks(self, frame: np.ndarray, landmarks: Sequence[LandmarkPoint]):
        height, width = frame.shape[:2]
        for point in landmarks:
            if point.visibility < self.min_visibility:
                continue
            cv2.circle(frame, (int(point.x * width), int(point.y * height)), 3, (0, 255, 0), -1)
