# pose_gesture_engine/gesture_engine/landmarks/base.py
from typing import Any, Callable, Optional, Protocol, Sequence, runtime_checkable
from ..common.models import LandmarkPoint

@runtime_checkable
class LandmarkSource(Protocol):
    """Opaque frame -> landmarks function used by the GestureEngine."""

    def detect(self, frame: Any, timestamp_ms: float) -> Optional[Sequence[LandmarkPoint]]:
        """Returns the keypoints of at most one person, or None when nobody is found."""
        ...

LandmarkSourceFactory = Callable[[], LandmarkSource]
