"""Apparent brightness and phase of the Sun, Moon and planets as seen from the Earth, plus a finder
for the peak brightness of Venus."""

#==============================================================
# Copyright Jody M Sankey 2020
#
# This software may be modified and distributed under the terms
# of the MIT license. See the LICENCE.md file for details.
#==============================================================
# PublicPermissions: True
#==============================================================

from dataclasses import dataclass
from math import asin, cos, degrees, log10, radians, sin

from .astrotime import Instant
from .config import DEFAULT_OPTIONS, SearchOptions
from .elongation import search_longitude_window
from .errors import InvalidArgumentError
from .frames import KM_PER_AU, ecliptic_from_equatorial
from .positions import Body, earth_vector, geo_moon, helio_vector
from .vectors import ZERO_VECTOR, Vector, angle_between

AU_PER_PARSEC = 206264.80624709636
SUN_MAG_1AU = -0.17 - 5.0 * log10(AU_PER_PARSEC)
MOON_MEAN_DISTANCE_KM = 385000.6

# (c0, c1, c2, c3) in the polynomial of phase angle/100 degrees.
_MAGNITUDE_COEFFICIENTS = {
    Body.MERCURY: (-0.60, 4.98, -4.88, 3.02),
    Body.MARS: (-1.52, 1.60, 0.0, 0.0),
    Body.JUPITER: (-9.40, 0.50, 0.0, 0.0),
    Body.URANUS: (-7.19, 0.25, 0.0, 0.0),
    Body.NEPTUNE: (-6.87, 0.0, 0.0, 0.0),
    Body.PLUTO: (-1.00, 4.00, 0.0, 0.0),
}
_VENUS_COEFFICIENTS = (-4.47, 1.03, 0.57, 0.13)
_VENUS_CRESCENT_COEFFICIENTS = (0.98, -1.02, 0.0, 0.0)


@dataclass(frozen=True)
class IlluminationInfo:
    """Brightness and phase of a body.

    mag: visual magnitude, smaller numbers being brighter.
    phase_angle: angle in degrees between the Sun and the Earth as seen from the body.
    phase_fraction: fraction of the visible disc that is lit, from 0 to 1.
    helio_dist, geo_dist: distances from the Sun and Earth in astronomical units.
    ring_tilt: for Saturn, the tilt in degrees of its rings as seen from Earth, otherwise zero.
    """
    time: Instant
    mag: float
    phase_angle: float
    phase_fraction: float
    helio_dist: float
    geo_dist: float
    ring_tilt: float = 0.0


def _moon_magnitude(phase: float, helio_dist: float, geo_dist: float) -> float:
    rad = radians(phase)
    rad4 = rad ** 4
    mag = -12.717 + 1.49 * abs(rad) + 0.0431 * rad4
    geo_au = geo_dist / (MOON_MEAN_DISTANCE_KM / KM_PER_AU)
    return mag + 5.0 * log10(helio_dist * geo_au)


def _planet_magnitude(body: Body, phase: float, helio_dist: float, geo_dist: float) -> float:
    if body == Body.VENUS:
        coeffs = _VENUS_COEFFICIENTS if phase < 163.6 else _VENUS_CRESCENT_COEFFICIENTS
    else:
        coeffs = _MAGNITUDE_COEFFICIENTS[body]
    c0, c1, c2, c3 = coeffs
    x = phase / 100.0
    mag = c0 + x * (c1 + x * (c2 + x * c3))
    return mag + 5.0 * log10(helio_dist * geo_dist)


def _saturn_magnitude(phase: float, helio_dist: float, geo_dist: float, geo: Vector,
                      time: Instant):
    """Returns a tuple of magnitude and ring tilt, treating the rings as a major contributor."""
    eclip = ecliptic_from_equatorial(geo)
    # Inclination and ascending node of the ring plane on the ecliptic.
    ring_incl = radians(28.06)
    ring_node = radians(169.51 + 3.82e-5 * time.tt)

    lat = radians(eclip.elat)
    lon = radians(eclip.elon)
    tilt = asin(sin(lat) * cos(ring_incl) - cos(lat) * sin(ring_incl) * sin(lon - ring_node))
    sin_tilt = sin(abs(tilt))

    mag = -9.0 + 0.044 * phase
    mag += sin_tilt * (-2.6 + 1.2 * sin_tilt)
    mag += 5.0 * log10(helio_dist * geo_dist)
    return mag, degrees(tilt)


def illumination(body: Body, time: Instant) -> IlluminationInfo:
    """Returns the brightness and phase of a body as seen from the center of the Earth."""
    if body == Body.EARTH:
        raise InvalidArgumentError("Illumination of the Earth is not calculated")
    earth = earth_vector(time)
    if body == Body.SUN:
        geo = -earth
        helio = ZERO_VECTOR
        phase = 0.0
    else:
        if body == Body.MOON:
            geo = geo_moon(time)
            helio = earth + geo
        else:
            helio = helio_vector(body, time)
            geo = helio - earth
        phase = angle_between(geo, helio)

    geo_dist = geo.length()
    helio_dist = helio.length()
    ring_tilt = 0.0
    if body == Body.SUN:
        mag = SUN_MAG_1AU + 5.0 * log10(geo_dist)
    elif body == Body.MOON:
        mag = _moon_magnitude(phase, helio_dist, geo_dist)
    elif body == Body.SATURN:
        mag, ring_tilt = _saturn_magnitude(phase, helio_dist, geo_dist, geo, time)
    else:
        mag = _planet_magnitude(body, phase, helio_dist, geo_dist)

    fraction = (1.0 + cos(radians(phase))) / 2.0
    return IlluminationInfo(time, mag, phase, fraction, helio_dist, geo_dist, ring_tilt)


def search_peak_magnitude(body: Body, start: Instant,
                          options: SearchOptions = DEFAULT_OPTIONS) -> IlluminationInfo:
    """Returns the first time after start when Venus reaches its greatest brightness, which
    happens while it is a crescent either side of inferior conjunction."""
    if body != Body.VENUS:
        raise InvalidArgumentError("Peak magnitude is only calculated for Venus")
    time = search_longitude_window(body, start, 10.0, 30.0, lambda t: illumination(body, t).mag,
                                   0.01, False, options)
    return illumination(body, time)
