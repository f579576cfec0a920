"""Finder for transits of Mercury and Venus across the face of the Sun, as seen from the center
of the Earth."""

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
from typing import Iterator, Optional

from .astrotime import Instant
from .config import DEFAULT_OPTIONS, SearchOptions
from .elongation import search_relative_longitude
from .errors import InternalError, InvalidArgumentError
from .observables import angle_from_sun
from .positions import BODY_INFO, Body
from .search import search, step_forward
from .shadow import peak_shadow, planet_shadow

logger = logging.getLogger(__name__)

# Largest separation from the Sun at inferior conjunction worth examining, in degrees.
THRESHOLD_ANGLE = 0.4


@dataclass(frozen=True)
class TransitInfo:
    """A transit: when the planet's disc first and last touches the Sun's disc, the time of
    closest approach, and the separation of the centers at that time in arcminutes."""
    start: Instant
    peak: Instant
    finish: Instant
    separation: float


def search_transit(body: Body, start: Instant,
                   options: SearchOptions = DEFAULT_OPTIONS) -> Optional[TransitInfo]:
    """Returns the first transit of Mercury or Venus after start, or None if there is none within
    the number of inferior conjunctions allowed by the options."""
    if body not in (Body.MERCURY, Body.VENUS):
        raise InvalidArgumentError("Transits are only calculated for Mercury and Venus")
    radius_km = BODY_INFO[body].radius_km

    def shadow_at(time):
        return planet_shadow(body, radius_km, time)

    def boundary(t1, t2, direction):
        def outside(time):
            shadow = shadow_at(time)
            return direction * (shadow.r - shadow.p)

        time = search(outside, t1, t2, 1.0, options)
        if time is None:
            raise InternalError(f"Transit boundary of {body.value} not found from {t1} to {t2}")
        return time

    def conjunction_after(time):
        return search_relative_longitude(body, 0.0, time, options)

    for conjunction in step_forward(conjunction_after(start),
                                    lambda c: conjunction_after(c.add_days(10.0)),
                                    options.transit_candidates):
        if angle_from_sun(body, conjunction) < THRESHOLD_ANGLE:
            shadow = peak_shadow(shadow_at, conjunction, 1.0, options)
            # Transit if the planet's penumbra touches the center of the Earth.
            if shadow.r < shadow.p:
                transit_start = boundary(shadow.time.add_days(-1.0), shadow.time, -1)
                transit_finish = boundary(shadow.time, shadow.time.add_days(1.0), 1)
                separation = 60.0 * angle_from_sun(body, shadow.time)
                return TransitInfo(transit_start, shadow.time, transit_finish, separation)
        logger.debug("No transit of %s at inferior conjunction %s", body.value, conjunction)
    return None


def next_transit(body: Body, previous: TransitInfo,
                 options: SearchOptions = DEFAULT_OPTIONS) -> Optional[TransitInfo]:
    return search_transit(body, previous.finish.add_days(100.0), options)


def transits(body: Body, start: Instant,
             options: SearchOptions = DEFAULT_OPTIONS) -> Iterator[TransitInfo]:
    """Yields successive transits of Mercury or Venus after start."""
    transit = search_transit(body, start, options)
    while transit is not None:
        yield transit
        transit = next_transit(body, transit, options)
