"""Positions of the Sun, Moon and planets as cartesian vectors in the EQJ frame.

The Earth comes from the VSOP87 series and the Moon from the ELP based series in the series
module. The other planets use the mean Keplerian elements and rates published by E.M. Standish
(JPL) for 1800 AD to 2050 AD, referred to the J2000 ecliptic. Everything is heliocentric unless
the function name says otherwise."""

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
from math import cos, degrees, pi, radians, sin, sqrt
from typing import Optional, Tuple

from . import series
from .astrotime import Instant
from .config import DEFAULT_OPTIONS, SearchOptions
from .errors import InvalidArgumentError, SearchDidNotConvergeError
from .frames import (KM_PER_AU, Ecliptic, Observer, ecliptic_of_date_to_eqj, nutation_angles,
                     observer_vector, rotation_ecl_eqj, rotation_eqj_eqd)
from .vectors import (ZERO_VECTOR, Equatorial, Spherical, Vector, equator_from_vector,
                      rotate_vector, vector_from_sphere)

# Speed of light in astronomical units per day.
C_AUDAY = 173.1446326846693

SUN_RADIUS_KM = 695700.0
MOON_EQUATORIAL_RADIUS_KM = 1738.1
MOON_MEAN_RADIUS_KM = 1737.4
MOON_POLAR_RADIUS_KM = 1736.0
EARTH_MEAN_RADIUS_KM = 6371.0
MEAN_SYNODIC_MONTH = 29.530588

Elements = Tuple[Tuple[float, float, float, float, float, float],
                 Tuple[float, float, float, float, float, float]]


class Body(Enum):
    """The bodies whose positions can be calculated."""
    SUN = 'Sun'
    MOON = 'Moon'
    MERCURY = 'Mercury'
    VENUS = 'Venus'
    EARTH = 'Earth'
    MARS = 'Mars'
    JUPITER = 'Jupiter'
    SATURN = 'Saturn'
    URANUS = 'Uranus'
    NEPTUNE = 'Neptune'
    PLUTO = 'Pluto'


@dataclass(frozen=True)
class BodyInfo:
    """Physical and orbital constants for a body."""
    radius_km: float
    # Sidereal orbital period around the Sun in days, None for the Sun and Moon.
    orbital_period: Optional[float] = None
    # True for planets orbiting inside the Earth's orbit.
    inferior: bool = False
    # Keplerian (a, e, I, L, long.peri, long.node) at J2000 and their rates per century,
    # in astronomical units and degrees.
    elements: Optional[Elements] = None


BODY_INFO = {
    Body.SUN: BodyInfo(SUN_RADIUS_KM),
    Body.MOON: BodyInfo(MOON_MEAN_RADIUS_KM),
    Body.MERCURY: BodyInfo(2439.7, 87.969, True, (
        (0.38709927, 0.20563593, 7.00497902, 252.25032350, 77.45779628, 48.33076593),
        (0.00000037, 0.00001906, -0.00594749, 149472.67411175, 0.16047689, -0.12534081))),
    Body.VENUS: BodyInfo(6051.8, 224.701, True, (
        (0.72333566, 0.00677672, 3.39467605, 181.97909950, 131.60246718, 76.67984255),
        (0.00000390, -0.00004107, -0.00078890, 58517.81538729, 0.00268329, -0.27769418))),
    Body.EARTH: BodyInfo(EARTH_MEAN_RADIUS_KM, 365.256),
    Body.MARS: BodyInfo(3389.5, 686.980, False, (
        (1.52371034, 0.09339410, 1.84969142, -4.55343205, -23.94362959, 49.55953891),
        (0.00001847, 0.00007882, -0.00813131, 19140.30268499, 0.44441088, -0.29257343))),
    Body.JUPITER: BodyInfo(71492.0, 4332.589, False, (
        (5.20288700, 0.04838624, 1.30439695, 34.39644051, 14.72847983, 100.47390909),
        (-0.00011607, -0.00013253, -0.00183714, 3034.74612775, 0.21252668, 0.20469106))),
    Body.SATURN: BodyInfo(60268.0, 10759.22, False, (
        (9.53667594, 0.05386179, 2.48599187, 49.95424423, 92.59887831, 113.66242448),
        (-0.00125060, -0.00050991, 0.00193609, 1222.49362201, -0.41897216, -0.28867794))),
    Body.URANUS: BodyInfo(25559.0, 30685.4, False, (
        (19.18916464, 0.04725744, 0.77263783, 313.23810451, 170.95427630, 74.01692503),
        (-0.00196176, -0.00004397, -0.00242939, 428.48202785, 0.40805281, 0.04240589))),
    Body.NEPTUNE: BodyInfo(24764.0, 60189.0, False, (
        (30.06992276, 0.00859048, 1.77004347, -55.12002969, 44.96476227, 131.78422574),
        (0.00026291, 0.00005105, 0.00035372, 218.45945325, -0.32241464, -0.00508664))),
    Body.PLUTO: BodyInfo(1188.3, 90560.0, False, (
        (39.48211675, 0.24882730, 17.14001206, 238.92903833, 224.06891629, 110.30393684),
        (-0.00031596, 0.00005170, 0.00004818, 145.20780515, -0.04062942, -0.01183482))),
}


def orbital_period(body: Body) -> float:
    """Returns the sidereal orbital period of a planet in days."""
    period = BODY_INFO[body].orbital_period
    if period is None:
        raise InvalidArgumentError(f"{body.value} does not orbit the Sun")
    return period


def synodic_period(body: Body) -> float:
    """Returns the mean time in days between successive conjunctions of a body with the Sun."""
    if body == Body.MOON:
        return MEAN_SYNODIC_MONTH
    if body in (Body.SUN, Body.EARTH):
        raise InvalidArgumentError(f"{body.value} has no synodic period")
    earth_period = orbital_period(Body.EARTH)
    return abs(earth_period / (earth_period / orbital_period(body) - 1.0))


def _planet_vector(body: Body, time: Instant) -> Vector:
    """Solves Kepler's equation for the mean elements at the supplied time."""
    base, rates = BODY_INFO[body].elements
    T = time.tt / 36525.0  # pylint: disable=invalid-name
    a, e, incl, mean_lon, peri_lon, node = (b + r * T for b, r in zip(base, rates))

    arg_peri = radians(peri_lon - node)
    incl = radians(incl)
    node = radians(node)
    mean_anomaly = radians((mean_lon - peri_lon + 180.0) % 360.0 - 180.0)
    ecc_anomaly = mean_anomaly + e * sin(mean_anomaly)
    for _ in range(30):
        delta = ((mean_anomaly - (ecc_anomaly - e * sin(ecc_anomaly)))
                 / (1.0 - e * cos(ecc_anomaly)))
        ecc_anomaly += delta
        if abs(delta) < 1.0e-12:
            break

    # Position in the orbital plane, x toward perihelion.
    xp = a * (cos(ecc_anomaly) - e)
    yp = a * sqrt(1.0 - e * e) * sin(ecc_anomaly)

    cw, sw = cos(arg_peri), sin(arg_peri)
    cn, sn = cos(node), sin(node)
    ci, si = cos(incl), sin(incl)
    ecliptic = Vector((cw * cn - sw * sn * ci) * xp + (-sw * cn - cw * sn * ci) * yp,
                      (cw * sn + sw * cn * ci) * xp + (-sw * sn + cw * cn * ci) * yp,
                      (sw * si) * xp + (cw * si) * yp)
    return rotate_vector(rotation_ecl_eqj(), ecliptic)


def earth_vector(time: Instant) -> Vector:
    """Returns the heliocentric position of the Earth in EQJ."""
    lon, lat, dist = series.earth_heliocentric(time.tt)
    ecliptic = vector_from_sphere(Spherical(degrees(lat), degrees(lon), dist))
    return ecliptic_of_date_to_eqj(ecliptic, time)


def geo_moon(time: Instant) -> Vector:
    """Returns the geocentric position of the Moon in EQJ."""
    lon, lat, dist_km = series.moon_geocentric(time.tt)
    ecliptic = vector_from_sphere(Spherical(degrees(lat), degrees(lon), dist_km / KM_PER_AU))
    return ecliptic_of_date_to_eqj(ecliptic, time)


def moon_ecliptic_latitude(time: Instant) -> float:
    """Returns the Moon's geocentric ecliptic latitude of date in degrees."""
    return degrees(series.moon_geocentric(time.tt)[1])


def helio_vector(body: Body, time: Instant) -> Vector:
    """Returns the heliocentric position of a body in EQJ, in astronomical units."""
    if body == Body.SUN:
        return ZERO_VECTOR
    if body == Body.EARTH:
        return earth_vector(time)
    if body == Body.MOON:
        return earth_vector(time) + geo_moon(time)
    return _planet_vector(body, time)


def geo_vector(body: Body, time: Instant, aberration: bool = True,
               options: SearchOptions = DEFAULT_OPTIONS) -> Vector:
    """Returns the geocentric position of a body in EQJ, corrected for light travel time. When
    aberration is requested the Earth's position is backdated along with the body's, which
    approximates the aberration caused by the Earth's motion."""
    if body == Body.EARTH:
        return ZERO_VECTOR
    if body == Body.MOON:
        return geo_moon(time)

    earth = earth_vector(time)
    ltime = time
    for _ in range(options.light_time_iterations):
        helio = helio_vector(body, ltime)
        if aberration:
            earth = earth_vector(ltime)
        # The body's position at the earlier time is paired with the observation time.
        geo = helio - earth
        ltime2 = time.add_days(-geo.length() / C_AUDAY)
        if abs(ltime2.tt - ltime.tt) < 1.0e-9:
            return geo
        ltime = ltime2
    raise SearchDidNotConvergeError(f"Light travel time did not converge for {body.value}")


def equator(body: Body, time: Instant, observer: Optional[Observer] = None, of_date: bool = True,
            aberration: bool = True, options: SearchOptions = DEFAULT_OPTIONS) -> Equatorial:
    """Returns the equatorial coordinates of a body seen from an observer (or the center of the
    Earth if no observer is supplied), referred to the equator of date or J2000."""
    vec = geo_vector(body, time, aberration, options)
    if observer is not None:
        vec = vec - observer_vector(time, observer)
    if of_date:
        vec = rotate_vector(rotation_eqj_eqd(time), vec)
    return equator_from_vector(vec)


def sun_position(time: Instant) -> Ecliptic:
    """Returns the apparent geocentric ecliptic coordinates of the Sun, referred to the true
    equinox of date and including aberration."""
    # pp166 Astronomical Algorithms
    earth_lon, earth_lat, dist = series.earth_heliocentric(time.tt)
    T = time.tt / 36525.0  # pylint: disable=invalid-name
    longitude = earth_lon + pi
    latitude = -earth_lat

    # Convert to FK5.
    lambda_dash = longitude - radians(1.397 * T + 0.00031 * T * T)
    longitude -= radians(0.09033 / 3600.0)
    latitude += radians(0.03916 / 3600.0) * (cos(lambda_dash) - sin(lambda_dash))

    # Correct for nutation and aberration.
    delta_psi = nutation_angles(time.tt)[0]
    longitude += radians((delta_psi - 20.4898 / dist) / 3600.0)

    elon = degrees(longitude) % 360.0
    elat = degrees(latitude)
    return Ecliptic(vector_from_sphere(Spherical(elat, elon, dist)), elat, elon)
