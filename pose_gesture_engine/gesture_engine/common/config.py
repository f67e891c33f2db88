# pose_gesture_engine/gesture_engine/common/config.py
import logging
import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field
from .enums import LogLevel
from .models import PoseChallenge

class GestureConfig(BaseModel):
    """Named tunables of the gesture classification pipeline."""
    model_config = ConfigDict(frozen=True)

    detection_interval_ms: float = Field(default=34.0, ge=0.0)
    min_visibility: float = Field(default=0.18, ge=0.0, le=1.0)

    # Tier signal formulas
    head_weight: float = 0.52
    shoulder_weight: float = 0.48
    min_shoulder_span: float = Field(default=0.09, gt=0.0)
    min_head_span: float = Field(default=0.06, gt=0.0)
    full_multiplier: float = 1.0
    head_only_multiplier: float = 1.2
    shoulder_only_multiplier: float = 0.85

    # Classification thresholds, scaled by the tier multiplier
    jump_threshold: float = 0.10
    quick_jump_threshold: float = 0.065
    quick_jump_velocity: float = 0.010
    duck_threshold: float = 0.09
    normalize_velocity: bool = False

    # Calibration
    calibration_frames: int = Field(default=15, ge=1)
    recalibration_frames: int = Field(default=10, ge=1)
    drift_trigger_frames: int = Field(default=15, ge=1)
    recalibration_drift_threshold: float = 0.35
    baseline_smoothing: float = Field(default=0.85, ge=0.0, le=1.0)
    idle_smoothing: float = Field(default=0.75, ge=0.0, le=1.0)
    idle_acceleration_frames: int = Field(default=60, ge=0)

    # Stabilization
    debounce_ms: float = Field(default=90.0, ge=0.0)
    max_missing_frames: int = Field(default=20, ge=0)

class ChallengeConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    presence_confirm_ms: float = Field(default=2000.0, ge=0.0)
    feedback_ms: float = Field(default=1200.0, ge=0.0)
    sequence: Optional[List[PoseChallenge]] = None

def load_config(path: Union[str, Path] = 'config.yaml') -> Dict[str, Any]:
    """Reads the YAML config into a dict of per-component sections."""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f) or {}
    return config

def gesture_config_from(config: Dict[str, Any]) -> GestureConfig:
    return GestureConfig(**(config.get('gesture') or {}))

def challenge_config_from(config: Dict[str, Any]) -> ChallengeConfig:
    return ChallengeConfig(**(config.get('challenges') or {}))

def configure_logging(config: Dict[str, Any]) -> None:
    """Applies the `logging` section (level, format) to the root logger."""
    section = config.get('logging') or {}
    level = LogLevel(str(section.get('level', LogLevel.INFO.value)).upper())
    logging.basicConfig(
        level=getattr(logging, level.value),
        format=section.get('format', '%(asctime)s %(levelname)s %(name)s: %(message)s'),
    )
