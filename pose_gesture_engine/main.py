# pose_gesture_engine/main.py
import cv2
import time
import yaml
import logging
import numpy as np
from collections import deque

from gesture_engine.common.config import (load_config, gesture_config_from, challenge_config_from,
                                          configure_logging)
from gesture_engine.challenge.challenge_matcher import ChallengeMatcher
from gesture_engine.processing.gesture_engine import GestureEngine
from gesture_engine.visualization.visualizer import Visualizer

logger = logging.getLogger(__name__)

def main():
    """
    Webcam demo loop.
    Feeds camera frames to the GestureEngine, runs the pose challenges on its
    output and shows the HUD. Keys: 'q' quits, 'e' toggles the engine, 'r'
    restarts the challenges.
    """
    cap = None
    engine = None
    try:
        config = load_config('config.yaml')
        configure_logging(config)

        camera_config = config['camera']
        cap = cv2.VideoCapture(camera_config['source'])
        if not cap.isOpened():
            raise IOError(f"Cannot open camera source: {camera_config['source']}")
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, camera_config['resolution'][0])
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, camera_config['resolution'][1])

        def source_factory():
            # Imported lazily so the engine itself never depends on MediaPipe
            from gesture_engine.landmarks.mediapipe_source import MediaPipePoseSource
            return MediaPipePoseSource(config['landmarker'])

        engine = GestureEngine(gesture_config_from(config), source_factory)
        matcher = ChallengeMatcher.from_config(challenge_config_from(config))
        visualizer = Visualizer(config.get('visualization', {}))
        fps_history = deque(maxlen=100)

        engine.enable()
        while True:
            frame_start_time = time.perf_counter()
            grabbed, frame = cap.read()
            if not grabbed:
                logger.warning("Failed to read frame from camera")
                break

            # --- Core Processing Pipeline ---
            now_ms = frame_start_time * 1000.0
            state = engine.tick(frame, now_ms)
            challenge = matcher.update(state.gesture, state.status, now_ms) if engine.enabled else None
            if challenge is not None and challenge.resolved:
                logger.info("Challenge %s: %s", challenge.resolved.value, challenge.feedback_text)

            # --- FPS Calculation ---
            latency = time.perf_counter() - frame_start_time
            fps_history.append(1.0 / latency if latency > 0 else 0)
            avg_fps = np.mean(fps_history)

            # --- Visualization ---
            output_frame = visualizer.render(frame, state, avg_fps, engine.last_landmarks, challenge)
            cv2.imshow('Pose Gesture Engine', output_frame)

            key = cv2.waitKey(1) & 0xFF
            if key == ord('q'):
                logger.info("Shutdown signal received.")
                break
            if key == ord('e'):
                if engine.enabled:
                    engine.disable()
                else:
                    engine.enable()
                matcher.reset()
            if key == ord('r'):
                matcher.reset()

    except (IOError, yaml.YAMLError) as e:
        logger.error("Failed to initialize. %s", e)
    finally:
        if engine is not None:
            engine.close()
        if cap is not None:
            cap.release()
        cv2.destroyAllWindows()
        logger.info("Application terminated.")

if __name__ == "__main__":
    main()
