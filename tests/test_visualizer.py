"""
Test cases for the HUD visualizer.
"""
import unittest

import numpy as np

from gesture_engine.common.enums import ChallengePhase, ErrorKind, PoseGesture, TrackingStatus
from gesture_engine.common.models import ChallengeUpdate, PublishedState
from gesture_engine.challenge.challenges import DEFAULT_CHALLENGES
from gesture_engine.visualization.visualizer import Visualizer

from landmark_fixtures import shoulder_landmarks


class TestVisualizer(unittest.TestCase):

    def setUp(self):
        self.visualizer = Visualizer({'draw_landmarks': True, 'draw_hud': True})

    def test_render_keeps_input_frame(self):
        frame = np.zeros((240, 320, 3), dtype=np.uint8)
        state = PublishedState(gesture=PoseGesture.JUMP, status=TrackingStatus.TRACKING, calibration_progress=1.0)
        output = self.visualizer.render(frame, state, 30.0, shoulder_landmarks(2.5))

        self.assertEqual(output.shape, frame.shape)
        self.assertFalse(frame.any())
        self.assertTrue(output.any())

    def test_hud_lines(self):
        state = PublishedState(status=TrackingStatus.CALIBRATING, calibration_progress=0.4)
        lines = self.visualizer.hud_lines(state, 30.0)

        self.assertIn("Status: calibrating", lines)
        self.assertIn("Gesture: IDLE", lines)
        self.assertIn("Calibrating: 40%", lines)

    def test_hud_shows_error_and_challenge(self):
        state = PublishedState(status=TrackingStatus.ERROR, error_message="boom", error_kind=ErrorKind.TRANSIENT)
        update = ChallengeUpdate(phase=ChallengePhase.ACTIVE, index=0, challenge=DEFAULT_CHALLENGES[0],
                                 hold_progress=0.5)
        lines = self.visualizer.hud_lines(state, 30.0, update)

        self.assertIn("Error (transient): boom", lines)
        self.assertIn("Stand still! 50%", lines)


if __name__ == '__main__':
    unittest.main()
