from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple


class CaptureState(Enum):
    IDLE = "idle"
    STROKING = "stroking"


@dataclass
class Stroke:
    """One continuous pointer-down-to-up path in canvas-local coordinates."""
    color: str  # Any color string QColor accepts, e.g. "#000000"
    width: float

    points: List[Tuple[float, float]] = field(default_factory=list)
