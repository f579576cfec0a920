"""The generic search engine that every event finder is built on.

search() looks for the time at which a function of time crosses zero while ascending (negative at
the start of the bracket, zero or positive at the end). It combines quadratic interpolation through
three samples with bisection, and when the interpolated root looks good it shrinks the bracket
tightly around it. Callers must supply a bracket narrow enough to contain only one ascending
crossing."""

#==============================================================
# Copyright Jody M Sankey 2020
#
# This software may be modified and distributed under the terms
# of the MIT license. See the LICENCE.md file for details.
#==============================================================
# PublicPermissions: True
#==============================================================

import logging
from math import isfinite, sqrt
from typing import Callable, Iterator, NamedTuple, Optional, TypeVar

from .astrotime import SEC_IN_DAY, Instant
from .config import DEFAULT_OPTIONS, SearchOptions
from .errors import InvalidArgumentError, NoBracketError, SearchDidNotConvergeError

logger = logging.getLogger(__name__)

TimeFunction = Callable[[Instant], float]
T = TypeVar('T')


class Bracket(NamedTuple):
    """Two instants and the function values at them."""
    t1: Instant
    f1: float
    t2: Instant
    f2: float


def _evaluate(func: TimeFunction, time: Instant, options: SearchOptions) -> float:
    options.count()
    value = func(time)
    if not isfinite(value):
        raise InvalidArgumentError(f"Search function returned {value} at {time}")
    return value


def quad_interp(tm: float, dt: float, fa: float, fm: float, fb: float):
    """Fits a parabola through (tm-dt, fa), (tm, fm), (tm+dt, fb) and returns a tuple of
    (x, t, df_dt) for its unique root within the interval, where x is the root scaled to
    [-1, +1]. Returns None if there is no unique root in the interval."""
    q = (fb + fa) / 2.0 - fm
    r = (fb - fa) / 2.0
    s = fm
    if q == 0.0:
        # A line, not a parabola.
        if r == 0.0:
            return None
        x = -s / r
        if x < -1.0 or x > 1.0:
            return None
    else:
        u = r * r - 4.0 * q * s
        if u <= 0.0:
            return None
        ru = sqrt(u)
        x1 = (-r + ru) / (2.0 * q)
        x2 = (-r - ru) / (2.0 * q)
        x1_in = -1.0 <= x1 <= 1.0
        x2_in = -1.0 <= x2 <= 1.0
        if x1_in == x2_in:
            # Need exactly one root in the interval.
            return None
        x = x1 if x1_in else x2
    return (x, tm + x * dt, (2.0 * q * x + r) / dt)


def search(func: TimeFunction, t1: Instant, t2: Instant, tolerance_seconds: float = 1.0,
           options: SearchOptions = DEFAULT_OPTIONS) -> Optional[Instant]:
    """Returns the time within [t1, t2] at which func ascends through zero, to within
    tolerance_seconds, or None if there is no ascending zero crossing in the bracket."""
    if not isfinite(tolerance_seconds) or tolerance_seconds <= 0.0:
        raise InvalidArgumentError(f"Invalid search tolerance {tolerance_seconds}")
    dt_days = tolerance_seconds / SEC_IN_DAY
    f1 = _evaluate(func, t1, options)
    f2 = _evaluate(func, t2, options)
    fmid = 0.0
    calc_fmid = True

    for iteration in range(1, options.max_iterations + 1):
        dt = (t2.ut - t1.ut) / 2.0
        tmid = t1.add_days(dt)
        if abs(dt) < dt_days:
            logger.debug("Search converged after %d iterations at %s", iteration, tmid)
            return tmid

        if calc_fmid:
            fmid = _evaluate(func, tmid, options)
        else:
            # Already known from the previous iteration.
            calc_fmid = True

        quad = quad_interp(tmid.ut, t2.ut - tmid.ut, f1, fmid, f2)
        if quad is not None:
            _, q_ut, q_df_dt = quad
            tq = Instant(q_ut)
            fq = _evaluate(func, tq, options)
            if q_df_dt != 0.0:
                dt_guess = abs(fq / q_df_dt)
                if dt_guess < dt_days:
                    logger.debug("Search interpolated after %d iterations to %s", iteration, tq)
                    return tq

                # Try a tighter bracket centered on the interpolated root.
                dt_guess *= 1.2
                if dt_guess < dt / 10.0:
                    tleft = tq.add_days(-dt_guess)
                    tright = tq.add_days(dt_guess)
                    if ((tleft.ut - t1.ut) * (tleft.ut - t2.ut) < 0.0
                            and (tright.ut - t1.ut) * (tright.ut - t2.ut) < 0.0):
                        fleft = _evaluate(func, tleft, options)
                        fright = _evaluate(func, tright, options)
                        if fleft < 0.0 <= fright:
                            t1, f1, t2, f2 = tleft, fleft, tright, fright
                            fmid = fq
                            calc_fmid = False
                            continue

        # Fall back to bisection, keeping whichever half holds the crossing.
        if f1 < 0.0 <= fmid:
            t2, f2 = tmid, fmid
        elif fmid < 0.0 <= f2:
            t1, f1 = tmid, fmid
        else:
            # No ascending crossing, or more than one in the bracket.
            return None

    raise SearchDidNotConvergeError(
        f"Search did not converge within {options.max_iterations} iterations")


def slope(func: TimeFunction, time: Instant, dt_days: float,
          options: SearchOptions = DEFAULT_OPTIONS) -> float:
    """Returns the rate of change of func per day, centered on time."""
    f1 = _evaluate(func, time.add_days(-dt_days / 2.0), options)
    f2 = _evaluate(func, time.add_days(dt_days / 2.0), options)
    return (f2 - f1) / dt_days


def search_minimum(func: TimeFunction, t1: Instant, t2: Instant, dt_days: float,
                   tolerance_seconds: float = 1.0,
                   options: SearchOptions = DEFAULT_OPTIONS) -> Optional[Instant]:
    """Returns the time of the minimum of func within [t1, t2], found as the ascending zero
    crossing of its slope sampled over dt_days, or None if the slope never ascends through zero."""
    return search(lambda t: slope(func, t, dt_days, options), t1, t2, tolerance_seconds, options)


def search_maximum(func: TimeFunction, t1: Instant, t2: Instant, dt_days: float,
                   tolerance_seconds: float = 1.0,
                   options: SearchOptions = DEFAULT_OPTIONS) -> Optional[Instant]:
    """Returns the time of the maximum of func within [t1, t2]."""
    return search_minimum(lambda t: -func(t), t1, t2, dt_days, tolerance_seconds, options)


def step_forward(first: T, advance: Callable[[T], T], max_steps: int) -> Iterator[T]:
    """Yields first and then the candidates produced by repeatedly applying advance to the
    previous one, max_steps candidates in all. Finders walk forward through periodic events
    with this and decide for themselves what running out of candidates means."""
    if max_steps < 1:
        raise InvalidArgumentError(f"Invalid step count {max_steps}")
    candidate = first
    yield candidate
    for _ in range(max_steps - 1):
        candidate = advance(candidate)
        yield candidate


def step_until_sign_change(func: TimeFunction, start: Instant, step_days: float,
                           max_steps: int, options: SearchOptions = DEFAULT_OPTIONS) -> Bracket:
    """Samples func from start in steps of step_days until two consecutive samples differ in sign
    (or one of them is zero), returning those samples. Raises NoBracketError if no change is found
    within max_steps."""
    if step_days <= 0.0 or max_steps < 1:
        raise InvalidArgumentError(f"Invalid step {step_days} or step count {max_steps}")
    t1 = start
    f1 = _evaluate(func, t1, options)
    for t2 in step_forward(start.add_days(step_days), lambda t: t.add_days(step_days), max_steps):
        f2 = _evaluate(func, t2, options)
        if f1 * f2 <= 0.0:
            logger.debug("Bracketed sign change between %s and %s", t1, t2)
            return Bracket(t1, f1, t2, f2)
        t1, f1 = t2, f2
    raise NoBracketError(
        f"No sign change within {max_steps} steps of {step_days} days from {start}")
