"""Scalar quantities observed from the Earth, built from the position model and frame conversions.
These are the functions the event finders search over."""

#==============================================================
# Copyright Jody M Sankey 2020
#
# This software may be modified and distributed under the terms
# of the MIT license. See the LICENCE.md file for details.
#==============================================================
# PublicPermissions: True
#==============================================================

from dataclasses import dataclass
from enum import Enum

from .astrotime import Instant
from .frames import ecliptic_from_equatorial
from .positions import Body, geo_vector, helio_vector
from .vectors import angle_between


class Visibility(Enum):
    """Whether a body is best seen before sunrise or after sunset."""
    MORNING = 'morning'
    EVENING = 'evening'


@dataclass(frozen=True)
class ElongationInfo:
    """How far a body appears from the Sun.

    elongation: angle between the body and the Sun in degrees.
    ecliptic_separation: difference in ecliptic longitude between the body and the Sun, in
        degrees, between 0 and 180."""
    time: Instant
    visibility: Visibility
    elongation: float
    ecliptic_separation: float


def longitude_offset(diff: float) -> float:
    """Wraps an angle in degrees into the range (-180, +180]."""
    offset = diff % 360.0
    if offset > 180.0:
        offset -= 360.0
    return offset


def normalize_longitude(lon: float) -> float:
    """Wraps an angle in degrees into the range [0, 360)."""
    return lon % 360.0


def ecliptic_longitude(body: Body, time: Instant) -> float:
    """Returns the heliocentric ecliptic longitude of a body in degrees, relative to the J2000
    equinox."""
    return ecliptic_from_equatorial(helio_vector(body, time)).elon


def pair_longitude(body1: Body, body2: Body, time: Instant) -> float:
    """Returns the geocentric ecliptic longitude of body1 minus that of body2, in [0, 360)."""
    eclip1 = ecliptic_from_equatorial(geo_vector(body1, time))
    eclip2 = ecliptic_from_equatorial(geo_vector(body2, time))
    return normalize_longitude(eclip1.elon - eclip2.elon)


def moon_phase(time: Instant) -> float:
    """Returns the Moon's phase angle in degrees: 0 new, 90 first quarter, 180 full and 270 last
    quarter."""
    return pair_longitude(Body.MOON, Body.SUN, time)


def angle_from_sun(body: Body, time: Instant) -> float:
    """Returns the angle in degrees between a body and the Sun as seen from the Earth."""
    return angle_between(geo_vector(Body.SUN, time), geo_vector(body, time))


def elongation(body: Body, time: Instant) -> ElongationInfo:
    angle = pair_longitude(body, Body.SUN, time)
    if angle > 180.0:
        visibility, separation = Visibility.MORNING, 360.0 - angle
    else:
        visibility, separation = Visibility.EVENING, angle
    return ElongationInfo(time, visibility, angle_from_sun(body, time), separation)
