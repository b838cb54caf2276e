"""Trajectory equation of the linear-drag model and its stationary point.

Launching at pitch ``a`` with muzzle velocity ``v`` under drag ``u`` and
gravity ``g``, the projectile reaches horizontal distance ``x`` at height

    y = (tan a + g / (u v cos a)) x + (g / u^2) ln(1 - u x / (v cos a))

Scaled by ``u^2 / g`` and moved to one side this is :func:`residual`, whose
zeros in ``a`` are the firing angles for a target at ``(x, y)``.
"""
import logging
import math
from typing import Callable, Optional

import numpy as np

from config import (
    ANGLE_RESOLUTION, CRITICAL_TOLERANCE, MAX_COLLAPSE_SCAN, MAX_FALSE_POSITION_ITERATIONS,
    QUARTER_TURN,
)

log = logging.getLogger(__name__)


class SolverError(RuntimeError):
    """Numerical invariant broken inside the solver; never a user input problem."""


def residual(range_m, drop_m, drag, velocity, pitch, gravity):
    """Residual of the firing equation; zero when ``pitch`` hits the target.

    ``pitch`` may be a float or a numpy array. Outside the domain
    (``cos(pitch) <= 0`` or ``range_m * drag >= velocity * cos(pitch)``) the
    result is NaN or -inf rather than an exception; see :func:`in_domain`.
    """
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        p = (range_m * drag) / (velocity * np.cos(pitch))
        k = drag * drag / gravity
        return k * range_m * np.tan(pitch) + p - k * drop_m + np.log1p(-p)


def in_domain(range_m: float, drag: float, velocity: float, pitch: float) -> bool:
    return velocity * math.cos(pitch) > range_m * drag


def domain_edge(range_m: float, drag: float, velocity: float) -> float:
    """Largest |pitch| at which the projectile still covers ``range_m`` horizontally."""
    return math.acos(min(1.0, range_m * drag / velocity))


def critical_equation(range_m: float, drag: float, velocity: float, gravity: float, a: float) -> float:
    # slope condition of residual(); positive above the critical angle
    return gravity * range_m * math.sin(a) + drag * velocity * range_m - velocity * velocity * math.cos(a)


def false_position(func: Callable[[float], float], a: float, b: float, tolerance: float,
                   fa: Optional[float] = None, fb: Optional[float] = None,
                   max_iterations: Optional[int] = None) -> Optional[float]:
    """Refine a sign-changing bracket ``[a, b]`` with the secant update
    ``c = b - f(b)(b - a)/(f(b) - f(a))``, keeping whichever end has the
    opposite sign to ``f(c)``.

    The stored value of an end kept twice in a row is halved (Illinois), which
    stops a flat end from stalling the iteration. Returns the root once
    ``|f(c)| < tolerance``; once the bracket has collapsed to float resolution
    the float inside it with the smallest ``|f|`` is returned instead. Gives
    ``None`` after ``max_iterations`` (``MAX_FALSE_POSITION_ITERATIONS`` unless
    given). Raises :class:`SolverError` when ``f(c)`` has neither end's sign,
    i.e. is NaN.
    """
    if max_iterations is None:
        max_iterations = MAX_FALSE_POSITION_ITERATIONS
    fa = func(a) if fa is None else fa
    fb = func(b) if fb is None else fb
    side = 0
    for i in range(max_iterations):
        c = b - fb * (b - a) / (fb - fa)
        fc = func(c)
        if abs(fc) < tolerance:
            log.debug("false position converged to %.12g after %d iterations", c, i + 1)
            return c
        if np.sign(fc) == np.sign(fa):
            a, fa = c, fc
            if side == -1:
                fb *= 0.5
            side = -1
        elif np.sign(fc) == np.sign(fb):
            b, fb = c, fc
            if side == 1:
                fa *= 0.5
            side = 1
        else:
            raise SolverError(f"f({c!r}) = {fc!r} matches neither bracket end")
        if abs(b - a) <= ANGLE_RESOLUTION:
            best = _closest_float_root(func, a, b, c, fc)
            log.debug("bracket collapsed at %.17g", best)
            return best
    log.debug("false position gave up after %d iterations, bracket [%r, %r]", max_iterations, a, b)
    return None


def _closest_float_root(func, a: float, b: float, c: float, fc: float) -> float:
    # walk the handful of doubles left in the bracket, keep the smallest |f|
    lo, hi = min(a, b), max(a, b)
    best, f_best = c, abs(fc)
    x = lo
    for _ in range(MAX_COLLAPSE_SCAN):
        if x > hi:
            break
        fx = abs(func(x))
        if fx < f_best:
            best, f_best = x, fx
        x = float(np.nextafter(x, np.inf))
    return best


def find_critical_point(range_m: float, drag: float, velocity: float, gravity: float) -> float:
    """Pitch at which :func:`residual` is stationary (its maximum over the domain).

    Found by false position on :func:`critical_equation`, seeded at
    ``atan2(g x, v^2)`` and ``atan2(g x, -v^2)``. When the lower seed is
    already past the root (targets farther than ``v^2 / g``) it is moved a
    quarter turn below the upper one, where the equation is negative as long
    as ``drag * range < velocity``.
    """
    def f(a):
        return critical_equation(range_m, drag, velocity, gravity, a)

    a = math.atan2(gravity * range_m, velocity * velocity)
    b = math.atan2(gravity * range_m, -velocity * velocity)
    fa, fb = f(a), f(b)
    if not (math.isfinite(fa) and math.isfinite(fb)):
        raise SolverError(f"critical point seeds are not finite: f({a!r})={fa!r}, f({b!r})={fb!r}")
    if fa >= 0.0:
        a = b - 2.0 * QUARTER_TURN
        fa = f(a)
        log.debug("lower critical seed moved to %.6f", a)
    if not (fa < 0.0 < fb):
        raise SolverError(f"critical point not bracketed: f({a!r})={fa!r}, f({b!r})={fb!r}")
    if abs(fa) < CRITICAL_TOLERANCE:
        return a

    c = false_position(f, a, b, CRITICAL_TOLERANCE, fa=fa, fb=fb)
    if c is None or not math.isfinite(c):
        raise SolverError(f"critical point did not converge for range={range_m}, velocity={velocity}")
    return c


def critical_point_closed_form(range_m: float, drag: float, velocity: float, gravity: float) -> float:
    v2 = velocity * velocity
    return (math.asin(-(drag * velocity * range_m) / math.hypot(gravity * range_m, v2))
            - math.atan(-v2 / (gravity * range_m)))
