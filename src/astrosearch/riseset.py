"""Finders for the times a body rises or sets, or reaches a given hour angle, for an observer
on the surface of the Earth."""

#==============================================================
# Copyright Jody M Sankey 2020
#
# This software may be modified and distributed under the terms
# of the MIT license. See the LICENCE.md file for details.
#==============================================================
# PublicPermissions: True
#==============================================================

import logging
from dataclasses import dataclass
from enum import Enum
from math import ceil, degrees, isfinite
from typing import Optional

from .astrotime import Instant
from .config import DEFAULT_OPTIONS, SearchOptions
from .errors import InvalidArgumentError, SearchDidNotConvergeError
from .frames import (KM_PER_AU, REFRACTION_NEAR_HORIZON, Observer, Refraction, Topocentric,
                     horizon, sidereal_time)
from .positions import MOON_EQUATORIAL_RADIUS_KM, SUN_RADIUS_KM, Body, equator
from .search import search, step_forward

logger = logging.getLogger(__name__)

SOLAR_DAYS_PER_SIDEREAL_DAY = 0.9972695717592592

# Radii used to time the first or last glimpse of a body's limb. Planets are treated as points.
_LIMB_RADIUS_KM = {
    Body.SUN: SUN_RADIUS_KM,
    Body.MOON: MOON_EQUATORIAL_RADIUS_KM,
}


class RiseSetDirection(Enum):
    RISE = 1
    SET = -1


@dataclass(frozen=True)
class HourAngleInfo:
    """The time a body reached an hour angle and its apparent position at that time."""
    time: Instant
    hor: Topocentric


def search_hour_angle(body: Body, observer: Observer, hour_angle: float, start: Instant,
                      options: SearchOptions = DEFAULT_OPTIONS) -> HourAngleInfo:
    """Returns the first time after start that a body reaches the given hour angle for the
    observer. An hour angle of 0 is the culmination and 12 is the lowest point."""
    if body == Body.EARTH:
        raise InvalidArgumentError("The Earth has no hour angle seen from the Earth")
    if not isfinite(hour_angle) or hour_angle < 0.0 or hour_angle >= 24.0:
        raise InvalidArgumentError(f"Hour angle {hour_angle} outside [0, 24)")

    time = start
    for iteration in range(options.hour_angle_iterations):
        gast = sidereal_time(time)
        ofdate = equator(body, time, observer, of_date=True, aberration=True, options=options)
        # Sidereal hours needed to bring the body to the requested hour angle.
        delta_hours = ((hour_angle + ofdate.ra - observer.longitude / 15.0) - gast) % 24.0
        if iteration > 0:
            # After the first step, which must go forward, make the smallest adjustment.
            if delta_hours > 12.0:
                delta_hours -= 24.0
        if abs(delta_hours) * 3600.0 < 0.1:
            hor = horizon(time, observer, ofdate.ra, ofdate.dec, Refraction.NORMAL)
            return HourAngleInfo(time, hor)
        time = time.add_days((delta_hours / 24.0) * SOLAR_DAYS_PER_SIDEREAL_DAY)
    raise SearchDidNotConvergeError(
        f"Hour angle search for {body.value} did not converge after {start}")


def _peak_altitude(body: Body, direction: RiseSetDirection, observer: Observer,
                   options: SearchOptions):
    """Returns a function of time giving the altitude of the top of the body's disc, including
    typical horizon refraction, measured upward for rises and downward for sets."""
    radius_au = _LIMB_RADIUS_KM.get(body, 0.0) / KM_PER_AU

    def altitude(time: Instant) -> float:
        ofdate = equator(body, time, observer, of_date=True, aberration=True, options=options)
        hor = horizon(time, observer, ofdate.ra, ofdate.dec, Refraction.NONE)
        return direction.value * (hor.altitude + degrees(radius_au / ofdate.dist)
                                  + REFRACTION_NEAR_HORIZON)
    return altitude


def search_rise_set(body: Body, observer: Observer, direction: RiseSetDirection, start: Instant,
                    limit_days: float,
                    options: SearchOptions = DEFAULT_OPTIONS) -> Optional[Instant]:
    """Returns the first time after start, and within limit_days, that the top of a body's disc
    appears above (RISE) or vanishes below (SET) the horizon. Returns None if that does not happen
    within the limit, for example near the poles."""
    if body == Body.EARTH:
        raise InvalidArgumentError("The Earth does not rise or set")
    if not isfinite(limit_days) or limit_days <= 0.0:
        raise InvalidArgumentError(f"Invalid rise/set search limit {limit_days}")
    if direction == RiseSetDirection.RISE:
        ha_before, ha_after = 12.0, 0.0
    else:
        ha_before, ha_after = 0.0, 12.0
    altitude = _peak_altitude(body, direction, observer, options)
    end = start.add_days(limit_days)

    def following(time_before):
        return search_hour_angle(body, observer, ha_after, time_before, options).time

    def advance(bracket):
        time_before = search_hour_angle(body, observer, ha_before, bracket[1], options).time
        return time_before, following(time_before)

    # Bracket the event between a lowest point and the following culmination (or the
    # reverse for sets), beginning from start itself if the event has not happened yet.
    if altitude(start) > 0.0:
        first_before = search_hour_angle(body, observer, ha_before, start, options).time
    else:
        first_before = start
    # Consecutive brackets are at least half a day apart.
    max_brackets = 2 * ceil(limit_days) + 2
    for time_before, time_after in step_forward((first_before, following(first_before)), advance,
                                                max_brackets):
        if time_before >= end:
            break
        if altitude(time_before) <= 0.0 < altitude(time_after):
            result = search(altitude, time_before, time_after, 1.0, options)
            if result is not None:
                return result if result < end else None
    logger.debug("No %s of %s within %s days of %s", direction.name.lower(), body.value,
                 limit_days, start)
    return None
