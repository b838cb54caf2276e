import logging
import math
from typing import Optional, Tuple

import numpy as np

from ammo import AmmoProfile
from ballistics import (
    SolverError, domain_edge, false_position, find_critical_point, in_domain, residual,
)
from config import (
    MAX_EDGE_BISECTIONS, PROBE_BIAS_RAD, QUARTER_TURN, REACH_TOLERANCE, ROOT_TOLERANCE,
    WALK_STEP_RAD,
)
from models import FiringInput, FiringSolution, Pair, Vector3
from utils import compute_yaw, reduce_displacement

log = logging.getLogger(__name__)

LOW_ARC, HIGH_ARC = 0, 1

__all__ = [
    "LOW_ARC", "HIGH_ARC", "SolverError", "compute_yaw", "find_angles",
    "solve_between", "solve_firing_solution", "validate_input",
]


def _bisect_edge(f, range_m: float, drag: float, velocity: float,
                 outside: float, inside: float) -> Optional[Tuple[float, float]]:
    # narrow negative band between the domain edge and a positive probe
    for _ in range(MAX_EDGE_BISECTIONS):
        mid = 0.5 * (outside + inside)
        if mid == outside or mid == inside:
            break
        if not in_domain(range_m, drag, velocity, mid):
            outside = mid
            continue
        fm = f(mid)
        if not math.isfinite(fm):
            outside = mid
        elif fm < 0.0:
            return mid, fm
        else:
            inside = mid
    return None


def _bracket(f, branch: int, range_m: float, drag: float, velocity: float,
             critical: float) -> Optional[Tuple[float, float]]:
    """Probe from the vertical on the branch's side toward ``critical`` until
    the residual turns negative inside the domain."""
    if branch == LOW_ARC:
        start, side = -PROBE_BIAS_RAD - QUARTER_TURN, -1.0
    else:
        start, side = -PROBE_BIAS_RAD + QUARTER_TURN, 1.0
    outside = side * domain_edge(range_m, drag, velocity)

    steps = int(abs(critical - start) / WALK_STEP_RAD)
    for b in start - side * WALK_STEP_RAD * np.arange(steps + 1):
        b = float(b)
        if side * (b - critical) <= 0.0:
            # start was already past the peak
            break
        if not in_domain(range_m, drag, velocity, b):
            outside = b
            continue
        fb = f(b)
        if not math.isfinite(fb):
            outside = b
            continue
        if fb < 0.0:
            return b, fb
        log.debug("probe %.6f already positive, bisecting toward the domain edge", b)
        return _bisect_edge(f, range_m, drag, velocity, outside, b)
    return _bisect_edge(f, range_m, drag, velocity, outside, critical)


def find_angles(range_m: float, drop_m: float, drag: float, velocity: float, gravity: float,
                critical: float) -> Pair:
    """Direct and indirect pitch for a target ``range_m`` away and ``drop_m`` above the gun.

    ``critical`` comes from :func:`ballistics.find_critical_point`. Returns
    ``Pair(None, None)`` when the target is out of range and a single ``None``
    when only one branch could be bracketed.
    """
    def f(a):
        return residual(range_m, drop_m, drag, velocity, a, gravity)

    peak = f(critical)
    if not math.isfinite(peak) or peak < 0.0:
        log.info("out of range: residual %.3g at critical angle %.6f", peak, critical)
        return Pair()
    if peak < REACH_TOLERANCE:
        return Pair(direct=critical, indirect=critical)

    angles = [None, None]
    for branch in (LOW_ARC, HIGH_ARC):
        found = _bracket(f, branch, range_m, drag, velocity, critical)
        if found is None:
            log.warning("no bracket on %s branch (range=%g, drop=%g)",
                        "low" if branch == LOW_ARC else "high", range_m, drop_m)
            continue
        b, fb = found
        angles[branch] = false_position(f, critical, b, ROOT_TOLERANCE, fa=peak, fb=fb)
        if angles[branch] is None:
            log.warning("secant refinement did not converge on bracket [%.6f, %.6f]", critical, b)
    return Pair(direct=angles[LOW_ARC], indirect=angles[HIGH_ARC])


def validate_input(req: FiringInput) -> None:
    for name in ("range_m", "drop_m", "drag", "velocity", "gravity"):
        value = getattr(req, name)
        if not math.isfinite(value):
            raise ValueError(f"{name} must be finite, got {value!r}")
    if req.velocity <= 0.0:
        raise ValueError(f"muzzle velocity must be positive, got {req.velocity}")
    if req.drag <= 0.0:
        raise ValueError(f"drag must be positive, got {req.drag}")
    if req.gravity <= 0.0:
        raise ValueError(f"gravity must be positive, got {req.gravity}")
    if req.range_m <= 0.0:
        raise ValueError("target is directly above or below the gun (zero horizontal range)")


def solve_firing_solution(req: FiringInput, yaw: Optional[float] = None) -> FiringSolution:
    """Solve a reduced request. ``yaw`` is only carried into the result; without
    one the solution has no bearing (``yaw is None``)."""
    validate_input(req)
    if req.range_m * req.drag >= req.velocity:
        log.info("out of range: drag stops the shot before %g m", req.range_m)
        return FiringSolution(yaw=yaw, critical=None, pitch=Pair())

    critical = find_critical_point(req.range_m, req.drag, req.velocity, req.gravity)
    pitch = find_angles(req.range_m, req.drop_m, req.drag, req.velocity, req.gravity, critical)
    log.debug("range=%g drop=%g critical=%.6f direct=%s indirect=%s",
              req.range_m, req.drop_m, critical, pitch.direct, pitch.indirect)
    return FiringSolution(yaw=yaw, critical=critical, pitch=pitch)


def solve_between(origin: Vector3, target: Vector3, ammo: AmmoProfile, velocity: float,
                  drag: Optional[float] = None) -> FiringSolution:
    rel, yaw = reduce_displacement(origin, target)
    req = FiringInput(range_m=rel.range_m, drop_m=rel.drop_m,
                      drag=ammo.drag if drag is None else drag,
                      velocity=velocity, gravity=ammo.gravity)
    return solve_firing_solution(req, yaw=yaw)
