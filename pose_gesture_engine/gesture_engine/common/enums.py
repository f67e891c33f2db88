# pose_gesture_engine/gesture_engine/common/enums.py
from enum import Enum, IntEnum

class PoseGesture(str, Enum):
    """The three-way gesture signal published to consumers."""
    IDLE = "IDLE"
    JUMP = "JUMP"
    DUCK = "DUCK"

class TrackingStatus(str, Enum):
    """Defines the operational state of the GestureEngine."""
    IDLE = "idle"
    LOADING = "loading"
    CALIBRATING = "calibrating"
    TRACKING = "tracking"
    NO_PERSON = "no-person"
    ERROR = "error"

class TrackingTier(IntEnum):
    """Degradation level of the landmarks used for the current signal."""
    FULL = 1
    HEAD_ONLY = 2
    SHOULDER_ONLY = 3

class ErrorKind(str, Enum):
    """FATAL needs an explicit re-enable, TRANSIENT is retried on the next detection."""
    FATAL = "fatal"
    TRANSIENT = "transient"

class ChallengePhase(str, Enum):
    DETECT = "detect"
    ACTIVE = "active"
    FEEDBACK = "feedback"
    COMPLETE = "complete"

class LogLevel(str, Enum):
    """Defines logging levels for structured logging."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"

class ChallengeOutcome(str, Enum):
    """How an active challenge was resolved."""
    MATCHED = "matched"
    TIMEOUT = "timeout"
