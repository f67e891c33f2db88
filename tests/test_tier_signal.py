"""
Test cases for tier selection and signal extraction.
"""
import unittest

from gesture_engine.common.config import GestureConfig
from gesture_engine.common.enums import TrackingTier
from gesture_engine.processing.tier_signal import PoseLandmarkIndex, compute_tier_signal

from landmark_fixtures import head_only_landmarks, make_landmarks

NOSE = PoseLandmarkIndex.NOSE
LEFT_EAR = PoseLandmarkIndex.LEFT_EAR
RIGHT_EAR = PoseLandmarkIndex.RIGHT_EAR
LEFT_SHOULDER = PoseLandmarkIndex.LEFT_SHOULDER
RIGHT_SHOULDER = PoseLandmarkIndex.RIGHT_SHOULDER


class TestTierSelection(unittest.TestCase):
    """Test the full -> head-only -> shoulder-only fallback."""

    def setUp(self):
        self.config = GestureConfig()

    def test_full_tier_signal(self):
        """Head and shoulders visible: weighted mean divided by shoulder span."""
        landmarks = make_landmarks({
            NOSE: (0.5, 0.3, 0.9),
            LEFT_SHOULDER: (0.4, 0.5, 0.9),
            RIGHT_SHOULDER: (0.6, 0.5, 0.9),
        })
        result = compute_tier_signal(landmarks, self.config)

        self.assertEqual(result.tier, TrackingTier.FULL)
        self.assertEqual(result.threshold_multiplier, 1.0)
        # (0.52 * 0.3 + 0.48 * 0.5) / 0.2
        self.assertAlmostEqual(result.signal, 1.98)

    def test_full_tier_averages_visible_head_points(self):
        landmarks = make_landmarks({
            NOSE: (0.5, 0.2, 0.9),
            LEFT_EAR: (0.45, 0.4, 0.9),
            RIGHT_EAR: (0.55, 0.4, 0.05),  # not usable
            LEFT_SHOULDER: (0.4, 0.5, 0.9),
            RIGHT_SHOULDER: (0.6, 0.5, 0.9),
        })
        result = compute_tier_signal(landmarks, self.config)

        self.assertEqual(result.tier, TrackingTier.FULL)
        self.assertAlmostEqual(result.signal, (0.52 * 0.3 + 0.48 * 0.5) / 0.2)

    def test_shoulder_span_is_clamped(self):
        """A narrow shoulder span falls back to the 0.09 minimum."""
        landmarks = make_landmarks({
            NOSE: (0.5, 0.3, 0.9),
            LEFT_SHOULDER: (0.48, 0.5, 0.9),
            RIGHT_SHOULDER: (0.52, 0.5, 0.9),
        })
        result = compute_tier_signal(landmarks, self.config)

        self.assertAlmostEqual(result.signal, (0.52 * 0.3 + 0.48 * 0.5) / 0.09)

    def test_head_only_tier(self):
        """Shoulders hidden, three head points: head y over head span."""
        result = compute_tier_signal(head_only_landmarks(), self.config)

        self.assertEqual(result.tier, TrackingTier.HEAD_ONLY)
        self.assertEqual(result.threshold_multiplier, 1.2)
        self.assertAlmostEqual(result.signal, ((0.3 + 0.32 + 0.32) / 3) / 0.1)

    def test_head_span_is_clamped(self):
        landmarks = make_landmarks({
            LEFT_EAR: (0.49, 0.3, 0.9),
            RIGHT_EAR: (0.51, 0.3, 0.9),
        })
        result = compute_tier_signal(landmarks, self.config)

        self.assertEqual(result.tier, TrackingTier.HEAD_ONLY)
        self.assertAlmostEqual(result.signal, 0.3 / 0.06)

    def test_single_head_point_without_shoulders_fails(self):
        landmarks = make_landmarks({NOSE: (0.5, 0.3, 0.9)})

        self.assertIsNone(compute_tier_signal(landmarks, self.config))

    def test_shoulder_only_tier(self):
        landmarks = make_landmarks({
            LEFT_SHOULDER: (0.4, 0.5, 0.9),
            RIGHT_SHOULDER: (0.6, 0.6, 0.9),
        })
        result = compute_tier_signal(landmarks, self.config)

        self.assertEqual(result.tier, TrackingTier.SHOULDER_ONLY)
        self.assertEqual(result.threshold_multiplier, 0.85)
        self.assertAlmostEqual(result.signal, 0.55 / 0.2)

    def test_one_shoulder_and_one_head_point_fails(self):
        landmarks = make_landmarks({
            NOSE: (0.5, 0.3, 0.9),
            LEFT_SHOULDER: (0.4, 0.5, 0.9),
        })

        self.assertIsNone(compute_tier_signal(landmarks, self.config))

    def test_visibility_threshold_is_inclusive(self):
        landmarks = make_landmarks({
            LEFT_SHOULDER: (0.4, 0.5, 0.18),
            RIGHT_SHOULDER: (0.6, 0.5, 0.18),
        })

        self.assertIsNotNone(compute_tier_signal(landmarks, self.config))

    def test_truncated_landmark_list(self):
        """Missing indices count as unusable."""
        landmarks = make_landmarks({
            NOSE: (0.5, 0.3, 0.9),
            LEFT_EAR: (0.45, 0.32, 0.9),
        }, count=10)
        result = compute_tier_signal(landmarks, self.config)

        self.assertEqual(result.tier, TrackingTier.HEAD_ONLY)
        self.assertIsNone(compute_tier_signal([], self.config))

    def test_extraction_is_pure(self):
        """Identical landmarks give identical results regardless of history."""
        landmarks = head_only_landmarks()
        first = compute_tier_signal(landmarks, self.config)
        compute_tier_signal(make_landmarks({NOSE: (0.1, 0.9, 0.9)}), self.config)
        second = compute_tier_signal(landmarks, self.config)

        self.assertEqual(first, second)


if __name__ == '__main__':
    unittest.main()
