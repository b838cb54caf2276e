import math
import re
from typing import List, Optional, Tuple

from config import TAU
from models import FiringSolution, RelativeDisplacement, Vector3

SIGNED_FLOAT_PREFIX = re.compile(r"^-?[0-9]*\.?[0-9]*")


def reduce_displacement(origin: Vector3, target: Vector3) -> Tuple[RelativeDisplacement, float]:
    dx = target.x - origin.x
    dy = target.y - origin.y
    dz = target.z - origin.z
    return RelativeDisplacement(range_m=math.hypot(dx, dz), drop_m=dy), yaw_from_offsets(dx, dz)


def yaw_from_offsets(dx: float, dz: float) -> float:
    #           -X (90°)
    #              ^
    # -Z (180°) <--O--> +Z (0°)
    #              v
    #           +X (270°)
    yaw = math.atan2(-dx, dz)
    if yaw < 0.0:
        yaw += TAU
    if yaw >= TAU:
        # tiny negative angles round up to a full turn
        yaw = 0.0
    return yaw + 0.0


def compute_yaw(origin: Vector3, target: Vector3) -> float:
    return yaw_from_offsets(target.x - origin.x, target.z - origin.z)


def sanitize_signed_float(s: str) -> str:
    """Keep the leading signed-decimal part of an edit field, e.g. '-12.5m' -> '-12.5'."""
    m = SIGNED_FLOAT_PREFIX.match(s or "")
    return m.group(0) if m else ""


def parse_float_field(s: str, field_name: str, default: Optional[float] = None) -> float:
    text = (s or "").strip()
    if not text or text in ("-", ".", "-."):
        if default is not None:
            return float(default)
        raise ValueError(f"{field_name} is empty")
    try:
        value = float(text)
    except ValueError as e:
        raise ValueError(f"{field_name} is not a number: {text!r}") from e
    if not math.isfinite(value):
        raise ValueError(f"{field_name} must be finite, got {text!r}")
    return value


def _fmt_optional(value: Optional[float], fmt: str, suffix: str) -> str:
    if value is None:
        return "—"
    return format(value, fmt) + suffix


def format_shot(sol: FiringSolution, direct: bool) -> List[str]:
    """Lines for one result panel: yaw, then pitch/flight time/impact angle or OUT OF RANGE."""
    pitch = sol.pitch.direct if direct else sol.pitch.indirect
    time = sol.flight_time.direct if direct else sol.flight_time.indirect
    impact = sol.impact_angle.direct if direct else sol.impact_angle.indirect
    yaw = None if sol.yaw is None else math.degrees(sol.yaw)
    lines = [f"Yaw: {_fmt_optional(yaw, '.4f', '°')}"]
    if pitch is None:
        lines.append("OUT OF RANGE")
        return lines
    lines.append(f"Pitch: {math.degrees(pitch):.4f}°")
    lines.append(f"Flight time: {_fmt_optional(time, '.4f', 's')}")
    lines.append(f"Impact angle: {_fmt_optional(None if impact is None else math.degrees(impact), '.4f', '°')}")
    return lines
