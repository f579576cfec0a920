"""Finders for apsides: the closest and farthest points of the Moon's orbit around the Earth and
of the planets' orbits around the Sun."""

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
from math import ceil
from typing import Iterator

from .astrotime import Instant
from .config import DEFAULT_OPTIONS, SearchOptions
from .errors import InternalError, InvalidArgumentError
from .frames import KM_PER_AU
from .positions import MEAN_SYNODIC_MONTH, Body, geo_moon, helio_vector, orbital_period
from .search import TimeFunction, search_maximum, search_minimum, slope, step_until_sign_change

logger = logging.getLogger(__name__)

# Time step used to estimate the rate of change of distance, in days.
SLOPE_DT = 0.001


class ApsisKind(Enum):
    PERICENTER = 0
    APOCENTER = 1


@dataclass(frozen=True)
class ApsisInfo:
    """An apsis event, with the distance between the two bodies at that time."""
    time: Instant
    kind: ApsisKind
    dist_au: float

    @property
    def dist_km(self) -> float:
        return self.dist_au * KM_PER_AU


def _find_apsis(distance: TimeFunction, start: Instant, step_days: float, window_days: float,
                options: SearchOptions) -> ApsisInfo:
    """Steps forward from start until the slope of distance changes sign, then refines the
    apsis inside that step."""
    max_steps = ceil(window_days / step_days)
    t1, m1, t2, m2 = step_until_sign_change(lambda t: slope(distance, t, SLOPE_DT, options),
                                            start, step_days, max_steps, options)
    if m1 < 0.0 or m2 > 0.0:
        kind = ApsisKind.PERICENTER
        time = search_minimum(distance, t1, t2, SLOPE_DT, 1.0, options)
    else:
        kind = ApsisKind.APOCENTER
        time = search_maximum(distance, t1, t2, SLOPE_DT, 1.0, options)
    if time is None:
        raise InternalError(f"Failed to refine {kind.name.lower()} between {t1} and {t2}")
    return ApsisInfo(time, kind, distance(time))


def _check_alternates(previous: ApsisInfo, following: ApsisInfo) -> ApsisInfo:
    if following.kind == previous.kind:
        raise InternalError(f"Found two consecutive {previous.kind.name.lower()} events at "
                            f"{previous.time} and {following.time}")
    return following


def _moon_distance(time: Instant) -> float:
    return geo_moon(time).length()


def search_lunar_apsis(start: Instant, options: SearchOptions = DEFAULT_OPTIONS) -> ApsisInfo:
    """Returns the first lunar perigee or apogee after start."""
    return _find_apsis(_moon_distance, start, 5.0, 2.0 * MEAN_SYNODIC_MONTH, options)


def next_lunar_apsis(previous: ApsisInfo, options: SearchOptions = DEFAULT_OPTIONS) -> ApsisInfo:
    """Returns the lunar apsis following a previous one, which is always of the opposite kind."""
    # Perigee and apogee are separated by 12 to 17 days.
    following = search_lunar_apsis(previous.time.add_days(11.0), options)
    return _check_alternates(previous, following)


def lunar_apsides(start: Instant, options: SearchOptions = DEFAULT_OPTIONS) -> Iterator[ApsisInfo]:
    """Yields an endless sequence of lunar perigees and apogees after start."""
    apsis = search_lunar_apsis(start, options)
    while True:
        yield apsis
        apsis = next_lunar_apsis(apsis, options)


def search_planet_apsis(body: Body, start: Instant,
                        options: SearchOptions = DEFAULT_OPTIONS) -> ApsisInfo:
    """Returns the first perihelion or aphelion of a planet after start."""
    if body in (Body.SUN, Body.MOON):
        raise InvalidArgumentError(f"{body.value} does not have a heliocentric orbit")
    period = orbital_period(body)
    logger.debug("Searching for %s apsis after %s", body.value, start)
    return _find_apsis(lambda t: helio_vector(body, t).length(), start, period / 6.0,
                       2.0 * period, options)


def next_planet_apsis(body: Body, previous: ApsisInfo,
                      options: SearchOptions = DEFAULT_OPTIONS) -> ApsisInfo:
    """Returns the apsis of a planet following a previous one."""
    following = search_planet_apsis(body, previous.time.add_days(0.25 * orbital_period(body)),
                                    options)
    return _check_alternates(previous, following)
