"""Finders for relative longitude events (conjunctions and oppositions) between the Earth and
another planet, and for the greatest elongations of Mercury and Venus."""

#==============================================================
# Copyright Jody M Sankey 2020
#
# This software may be modified and distributed under the terms
# of the MIT license. See the LICENCE.md file for details.
#==============================================================
# PublicPermissions: True
#==============================================================

import logging

from .astrotime import SEC_IN_DAY, Instant
from .config import DEFAULT_OPTIONS, SearchOptions
from .errors import InternalError, InvalidArgumentError, SearchDidNotConvergeError
from .observables import (ElongationInfo, angle_from_sun, ecliptic_longitude, elongation,
                          longitude_offset)
from .positions import BODY_INFO, Body, synodic_period
from .search import TimeFunction, search_maximum, search_minimum, slope, step_forward

logger = logging.getLogger(__name__)

# Relative longitude windows known to contain greatest elongations, in degrees.
_ELONGATION_WINDOWS = {
    Body.MERCURY: (50.0, 85.0),
    Body.VENUS: (40.0, 50.0),
}


def _relative_longitude_offset(body: Body, time: Instant, direction: int,
                               target_rel_lon: float) -> float:
    plon = ecliptic_longitude(body, time)
    elon = ecliptic_longitude(Body.EARTH, time)
    return longitude_offset(direction * (elon - plon) - target_rel_lon)


def search_relative_longitude(body: Body, target_rel_lon: float, start: Instant,
                              options: SearchOptions = DEFAULT_OPTIONS) -> Instant:
    """Returns the first time after start when the heliocentric ecliptic longitudes of the Earth
    and a planet differ by target_rel_lon degrees. The difference is measured as Earth minus
    planet for outer planets and planet minus Earth for inner planets, so 0 finds oppositions
    and inferior conjunctions while 180 finds conjunctions and superior conjunctions."""
    if body in (Body.EARTH, Body.SUN, Body.MOON):
        raise InvalidArgumentError(f"Relative longitude is not defined for {body.value}")
    syn = synodic_period(body)
    direction = -1 if BODY_INFO[body].inferior else 1

    # Start with a negative error so we always search forward in time.
    error_angle = _relative_longitude_offset(body, start, direction, target_rel_lon)
    if error_angle > 0.0:
        error_angle -= 360.0

    time = start
    for _ in range(options.relative_longitude_iterations):
        options.count()
        day_adjust = (-error_angle / 360.0) * syn
        time = time.add_days(day_adjust)
        if abs(day_adjust) * SEC_IN_DAY < 1.0:
            return time
        prev_angle = error_angle
        error_angle = _relative_longitude_offset(body, time, direction, target_rel_lon)
        if abs(prev_angle) < 30.0 and prev_angle != error_angle:
            # Rescale the synodic period to the actual speeds in this part of the orbits,
            # which matters for eccentric orbits like Mercury and Mars.
            ratio = prev_angle / (prev_angle - error_angle)
            if 0.5 < ratio < 2.0:
                syn *= ratio
    raise SearchDidNotConvergeError(
        f"Relative longitude search for {body.value} did not converge after {start}")


def _longitude_window(body: Body, start: Instant, s1: float, s2: float,
                      options: SearchOptions):
    """Returns the times bounding the next stretch after start during which the planet's
    heliocentric longitude leads or trails the Earth's by between s1 and s2 degrees."""
    rlon = longitude_offset(ecliptic_longitude(body, start) - ecliptic_longitude(Body.EARTH, start))
    # Slopes have a cusp when rlon is near 0 or 180 degrees, so bracket the event with
    # relative longitudes safely away from those.
    if -s1 <= rlon < s1:
        adjust_days, rlon_lo, rlon_hi = 0.0, s1, s2
    elif rlon > s2 or rlon < -s2:
        adjust_days, rlon_lo, rlon_hi = 0.0, -s2, -s1
    elif rlon >= 0.0:
        # Inside the window already, back up to its start.
        adjust_days, rlon_lo, rlon_hi = -synodic_period(body) / 4.0, s1, s2
    else:
        adjust_days, rlon_lo, rlon_hi = -synodic_period(body) / 4.0, -s2, -s1
    t1 = search_relative_longitude(body, rlon_lo, start.add_days(adjust_days), options)
    t2 = search_relative_longitude(body, rlon_hi, t1, options)
    return t1, t2


def search_longitude_window(body: Body, start: Instant, s1: float, s2: float,
                            func: TimeFunction, dt_days: float, find_max: bool,
                            options: SearchOptions = DEFAULT_OPTIONS) -> Instant:
    """Returns the first extremum of func after start for an inner planet, where the extremum is
    known to occur while the planet's heliocentric longitude leads or trails the Earth's by
    between s1 and s2 degrees."""
    sign = -1.0 if find_max else 1.0
    finder = search_maximum if find_max else search_minimum
    # At most one window holds an event in the past, so two windows always suffice.
    windows = step_forward(_longitude_window(body, start, s1, s2, options),
                           lambda w: _longitude_window(body, w[1].add_days(1.0), s1, s2, options),
                           2)
    for t1, t2 in windows:
        m1 = sign * slope(func, t1, dt_days, options)
        m2 = sign * slope(func, t2, dt_days, options)
        if m1 >= 0.0 or m2 <= 0.0:
            raise InternalError(f"Extremum for {body.value} not bracketed between {t1} and {t2}")
        time = finder(func, t1, t2, dt_days, 10.0, options)
        if time is None:
            raise InternalError(f"Extremum search for {body.value} failed between {t1} and {t2}")
        if time.tt >= start.tt:
            return time
        logger.debug("Extremum at %s precedes %s, trying next window", time, start)
    raise InternalError(f"Extremum search for {body.value} iterated too many times")


def search_max_elongation(body: Body, start: Instant,
                          options: SearchOptions = DEFAULT_OPTIONS) -> ElongationInfo:
    """Returns the first greatest elongation of Mercury or Venus after start."""
    if body not in _ELONGATION_WINDOWS:
        raise InvalidArgumentError("Greatest elongation is only defined for Mercury and Venus")
    s1, s2 = _ELONGATION_WINDOWS[body]
    time = search_longitude_window(body, start, s1, s2, lambda t: angle_from_sun(body, t), 0.1,
                                   True, options)
    return elongation(body, time)
