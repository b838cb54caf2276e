from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Vector3:
    x: float
    y: float
    z: float


@dataclass(frozen=True)
class RelativeDisplacement:
    range_m: float
    drop_m: float


@dataclass
class FiringInput:
    range_m: float
    drop_m: float
    drag: float
    velocity: float
    gravity: float


@dataclass(frozen=True)
class Pair:
    """Direct (low arc) and indirect (high arc) values; None means no solution."""
    direct: Optional[float] = None
    indirect: Optional[float] = None

    @property
    def empty(self) -> bool:
        return self.direct is None and self.indirect is None


@dataclass
class FiringSolution:
    yaw: Optional[float]
    critical: Optional[float]
    pitch: Pair
    # never computed by the solver, kept for the result panels
    flight_time: Pair = field(default_factory=Pair)
    impact_angle: Pair = field(default_factory=Pair)

    @property
    def reachable(self) -> bool:
        return not self.pitch.empty
