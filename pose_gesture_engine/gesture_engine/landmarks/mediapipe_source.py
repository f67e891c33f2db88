# pose_gesture_engine/gesture_engine/landmarks/mediapipe_source.py
import logging
import cv2
import mediapipe as mp
import numpy as np
from pathlib import Path
from typing import List, Optional
from mediapipe.tasks import python as mp_tasks
from mediapipe.tasks.python import vision
from ..common.models import LandmarkPoint

logger = logging.getLogger(__name__)

class MediaPipePoseSource:
    """Single-person landmark source backed by the MediaPipe Tasks PoseLandmarker."""

    def __init__(self, config: dict):
        self.config = config
        model_path = Path(config['model_asset_path'])
        if not model_path.exists():
            raise IOError(f"Pose landmarker model not found: {model_path}")

        delegate = mp_tasks.BaseOptions.Delegate[config.get('delegate', 'CPU').upper()]
        options = vision.PoseLandmarkerOptions(
            base_options=mp_tasks.BaseOptions(model_asset_path=str(model_path), delegate=delegate),
            running_mode=vision.RunningMode.VIDEO,
            num_poses=1,
            min_pose_detection_confidence=config.get('min_detection_confidence', 0.4),
            min_pose_presence_confidence=config.get('min_presence_confidence', 0.4),
            min_tracking_confidence=config.get('min_tracking_confidence', 0.4),
        )
        self.landmarker = vision.PoseLandmarker.create_from_options(options)
        self._last_timestamp_ms = -1
        logger.info("PoseLandmarker loaded from %s (%s)", model_path, delegate.name)

    def detect(self, frame: np.ndarray, timestamp_ms: float) -> Optional[List[LandmarkPoint]]:
        """Detects one pose in a BGR frame. VIDEO mode needs strictly increasing timestamps."""
        frame_rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        image = mp.Image(image_format=mp.ImageFormat.SRGB, data=frame_rgb)

        ts = max(int(timestamp_ms), self._last_timestamp_ms + 1)
        self._last_timestamp_ms = ts
        result = self.landmarker.detect_for_video(image, ts)

        if not result.pose_landmarks:
            return None
        return [
            LandmarkPoint(x=lm.x, y=lm.y, visibility=lm.visibility if lm.visibility is not None else 0.0)
            for lm in result.pose_landmarks[0]
        ]

    def close(self):
        self.landmarker.close()
