"""Conversions between the reference frames used by the package:

  EQJ: equatorial coordinates referred to the mean equator and equinox of J2000.
  EQD: equatorial coordinates referred to the true equator and equinox of date.
  ECL: ecliptic coordinates referred to the mean ecliptic and equinox of J2000.
  HOR: horizontal coordinates for an observer, x pointing north, y west, z toward the zenith.

Precession follows the IAU 2006 model and nutation the leading terms of IAU 2000B. The
refraction model (Saemundsson's formula as used by JPL Horizons) is applied to altitudes only."""

#==============================================================
# Copyright Jody M Sankey 2020
#
# This software may be modified and distributed under the terms
# of the MIT license. See the LICENCE.md file for details.
#==============================================================
# PublicPermissions: True
#==============================================================

from collections import namedtuple
from dataclasses import dataclass
from enum import Enum
from math import atan2, cos, degrees, hypot, isfinite, radians, sin, sqrt, tan

from .astrotime import Instant
from .config import DEFAULT_OPTIONS, SearchOptions
from .errors import InvalidArgumentError, SearchDidNotConvergeError
from .vectors import (RotationMatrix, Spherical, Vector, combine_rotation, inverse_rotation,
                      rotate_vector, sphere_from_vector, vector_from_sphere)

# pylint: disable=invalid-name

KM_PER_AU = 1.4959787069098932e+8
ASEC_TO_RAD = radians(1.0 / 3600.0)
ASEC_360 = 1296000.0
EARTH_EQUATORIAL_RADIUS_KM = 6378.1366
EARTH_FLATTENING = 0.996647180302104
# Mean obliquity of the J2000 ecliptic, in degrees.
OBLIQUITY_J2000 = 23.4392911
# Typical refraction at the horizon, in degrees.
REFRACTION_NEAR_HORIZON = 34.0 / 60.0


class Refraction(Enum):
    """Atmospheric refraction options for horizontal coordinates."""
    NONE = 0
    # Saemundsson's formula, tapered to zero below the horizon.
    NORMAL = 1
    # Saemundsson's formula with no taper, matching JPL Horizons.
    JPLHOR = 2


class Direction(Enum):
    """The direction of a precession or nutation conversion."""
    FROM_2000 = 0
    INTO_2000 = 1


@dataclass(frozen=True)
class Observer:
    """A geographic location: latitude and longitude in degrees (north and east positive) and
    height above sea level in meters."""
    latitude: float
    longitude: float
    height: float = 0.0

    def __post_init__(self):
        if not (isfinite(self.latitude) and isfinite(self.longitude) and isfinite(self.height)):
            raise InvalidArgumentError(f"Non-finite observer {self}")
        if not -90.0 <= self.latitude <= 90.0:
            raise InvalidArgumentError(f"Latitude {self.latitude} out of range")


@dataclass(frozen=True)
class Topocentric:
    """Apparent horizontal position: azimuth eastward from north and altitude in degrees, plus the
    equatorial coordinates adjusted for any refraction."""
    azimuth: float
    altitude: float
    ra: float
    dec: float


@dataclass(frozen=True)
class Ecliptic:
    """Ecliptic coordinates: cartesian vector plus latitude and longitude in degrees."""
    vec: Vector
    elat: float
    elon: float


EarthTilt = namedtuple('EarthTilt', ['dpsi', 'deps', 'ee', 'mobl', 'tobl'])


def mean_obliquity(tt: float) -> float:
    """Returns the mean obliquity of the ecliptic in degrees at a terrestrial time in days."""
    T = tt / 36525.0
    asec = (((((-0.0000000434 * T - 0.000000576) * T + 0.00200340) * T - 0.0001831) * T
             - 46.836769) * T + 84381.406)
    return asec / 3600.0


def nutation_angles(tt: float):
    """Returns the nutation in longitude and obliquity (delta_psi, delta_epsilon) in arcseconds."""
    T = tt / 36525.0
    # Fundamental arguments of the lunisolar nutation.
    elp = ((1287104.79305 + T * 129596581.0481) % ASEC_360) * ASEC_TO_RAD
    F = ((335779.526232 + T * 1739527262.8478) % ASEC_360) * ASEC_TO_RAD
    D = ((1072260.70369 + T * 1602961601.2090) % ASEC_360) * ASEC_TO_RAD
    omega = ((450160.398036 - T * 6962890.5431) % ASEC_360) * ASEC_TO_RAD

    # The five largest terms of IAU 2000B, coefficients in units of 0.1 microarcseconds.
    terms = (
        (omega,                (-172064161.0, -174666.0, 33386.0), (92052331.0, 9086.0, 15377.0)),
        (2.0 * (F - D + omega), (-13170906.0, -1675.0, -13696.0), (5730336.0, -3015.0, -4587.0)),
        (2.0 * (F + omega),    (-2276413.0, -234.0, 2796.0),      (978459.0, -485.0, 1374.0)),
        (2.0 * omega,          (2074554.0, 207.0, -698.0),        (-897492.0, 470.0, -291.0)),
        (elp,                  (1475877.0, -3633.0, 11817.0),     (73871.0, -184.0, -1924.0)),
    )
    dp = de = 0.0
    for arg, lon, obl in terms:
        dp += (lon[0] + lon[1] * T) * sin(arg) + lon[2] * cos(arg)
        de += (obl[0] + obl[1] * T) * cos(arg) + obl[2] * sin(arg)
    # Constant offsets account for the omitted planetary terms.
    return (-0.000135 + dp * 1.0e-7, 0.000388 + de * 1.0e-7)


def earth_tilt(time: Instant) -> EarthTilt:
    """Returns nutation (arcseconds), equation of the equinoxes (seconds of time) and the mean and
    true obliquity (degrees) at the supplied time."""
    dpsi, deps = nutation_angles(time.tt)
    mobl = mean_obliquity(time.tt)
    tobl = mobl + deps / 3600.0
    ee = dpsi * cos(radians(mobl)) / 15.0
    return EarthTilt(dpsi, deps, ee, mobl, tobl)


def earth_rotation_angle(time: Instant) -> float:
    """Returns the Earth rotation angle in degrees."""
    thet1 = 0.7790572732640 + 0.00273781191135448 * time.ut
    thet3 = time.ut % 1.0
    return 360.0 * ((thet1 + thet3) % 1.0)


def sidereal_time(time: Instant) -> float:
    """Returns Greenwich apparent sidereal time in hours, in the range [0, 24)."""
    T = time.tt / 36525.0
    eqeq = 15.0 * earth_tilt(time).ee
    theta = earth_rotation_angle(time)
    st = (eqeq + 0.014506 +
          ((((-0.0000000368 * T - 0.000029956) * T - 0.00000044) * T + 1.3915817) * T
           + 4612.156534) * T)
    return ((st / 3600.0 + theta) % 360.0) / 15.0


def _orient(rows, direction: Direction) -> RotationMatrix:
    matrix = RotationMatrix(rows)
    return matrix if direction == Direction.FROM_2000 else inverse_rotation(matrix)


def precession_rotation(time: Instant, direction: Direction) -> RotationMatrix:
    """Returns the IAU 2006 precession matrix between J2000 and the mean equator of date."""
    T = time.tt / 36525.0
    eps0 = 84381.406
    psia = (((((-0.0000000951 * T + 0.000132851) * T - 0.00114045) * T - 1.0790069) * T
             + 5038.481507) * T)
    omegaa = (((((0.0000003337 * T - 0.000000467) * T - 0.00772503) * T + 0.0512623) * T
               - 0.025754) * T + eps0)
    chia = (((((-0.0000000560 * T + 0.000170663) * T - 0.00121197) * T - 2.3814292) * T
             + 10.556403) * T)

    sa = sin(eps0 * ASEC_TO_RAD)
    ca = cos(eps0 * ASEC_TO_RAD)
    sb = sin(-psia * ASEC_TO_RAD)
    cb = cos(-psia * ASEC_TO_RAD)
    sc = sin(-omegaa * ASEC_TO_RAD)
    cc = cos(-omegaa * ASEC_TO_RAD)
    sd = sin(chia * ASEC_TO_RAD)
    cd = cos(chia * ASEC_TO_RAD)

    xx = cd * cb - sb * sd * cc
    yx = cd * sb * ca + sd * cc * cb * ca - sa * sd * sc
    zx = cd * sb * sa + sd * cc * cb * sa + ca * sd * sc
    xy = -sd * cb - sb * cd * cc
    yy = -sd * sb * ca + cd * cc * cb * ca - sa * cd * sc
    zy = -sd * sb * sa + cd * cc * cb * sa + ca * cd * sc
    xz = sb * sc
    yz = -sc * cb * ca - sa * cc
    zz = -sc * cb * sa + cc * ca
    return _orient(((xx, yx, zx), (xy, yy, zy), (xz, yz, zz)), direction)


def nutation_rotation(time: Instant, direction: Direction) -> RotationMatrix:
    """Returns the nutation matrix between the mean and true equator of date."""
    tilt = earth_tilt(time)
    oblm = radians(tilt.mobl)
    oblt = radians(tilt.tobl)
    psi = tilt.dpsi * ASEC_TO_RAD
    cobm, sobm = cos(oblm), sin(oblm)
    cobt, sobt = cos(oblt), sin(oblt)
    cpsi, spsi = cos(psi), sin(psi)

    xx = cpsi
    yx = -spsi * cobm
    zx = -spsi * sobm
    xy = spsi * cobt
    yy = cpsi * cobm * cobt + sobm * sobt
    zy = cpsi * sobm * cobt - cobm * sobt
    xz = spsi * sobt
    yz = cpsi * cobm * sobt - sobm * cobt
    zz = cpsi * sobm * sobt + cobm * cobt
    return _orient(((xx, yx, zx), (xy, yy, zy), (xz, yz, zz)), direction)


def _obliquity_rotation(obliquity: float) -> RotationMatrix:
    """Returns the matrix converting equatorial to ecliptic coordinates for an obliquity in
    degrees."""
    c = cos(radians(obliquity))
    s = sin(radians(obliquity))
    return RotationMatrix(((1.0, 0.0, 0.0), (0.0, c, s), (0.0, -s, c)))


def ecliptic_of_date_to_eqj(vec: Vector, time: Instant) -> Vector:
    """Converts a vector in the mean ecliptic and equinox of date to EQJ."""
    mean_equator = rotate_vector(inverse_rotation(_obliquity_rotation(mean_obliquity(time.tt))),
                                 vec)
    return rotate_vector(precession_rotation(time, Direction.INTO_2000), mean_equator)


def rotation_eqj_eqd(time: Instant) -> RotationMatrix:
    return combine_rotation(precession_rotation(time, Direction.FROM_2000),
                            nutation_rotation(time, Direction.FROM_2000))


def rotation_eqd_eqj(time: Instant) -> RotationMatrix:
    return combine_rotation(nutation_rotation(time, Direction.INTO_2000),
                            precession_rotation(time, Direction.INTO_2000))


def rotation_eqj_ecl() -> RotationMatrix:
    return _obliquity_rotation(OBLIQUITY_J2000)


def rotation_ecl_eqj() -> RotationMatrix:
    return inverse_rotation(_obliquity_rotation(OBLIQUITY_J2000))


def rotation_eqd_hor(time: Instant, observer: Observer) -> RotationMatrix:
    """Returns the matrix converting EQD vectors to HOR for the observer."""
    sinlat = sin(radians(observer.latitude))
    coslat = cos(radians(observer.latitude))
    sinlon = sin(radians(observer.longitude))
    coslon = cos(radians(observer.longitude))
    # Unit vectors toward the zenith, north and west in Earth-fixed coordinates.
    uze = Vector(coslat * coslon, coslat * sinlon, sinlat)
    une = Vector(-sinlat * coslon, -sinlat * sinlon, coslat)
    uwe = Vector(sinlon, -coslon, 0.0)
    # Spin them into the equator of date.
    spin = _z_rotation(15.0 * sidereal_time(time))
    uz = rotate_vector(spin, uze)
    un = rotate_vector(spin, une)
    uw = rotate_vector(spin, uwe)
    return RotationMatrix(((un.x, un.y, un.z), (uw.x, uw.y, uw.z), (uz.x, uz.y, uz.z)))


def _z_rotation(angle: float) -> RotationMatrix:
    """Counterclockwise rotation of a vector by angle degrees about the z axis."""
    c = cos(radians(angle))
    s = sin(radians(angle))
    return RotationMatrix(((c, -s, 0.0), (s, c, 0.0), (0.0, 0.0, 1.0)))


def rotation_hor_eqd(time: Instant, observer: Observer) -> RotationMatrix:
    return inverse_rotation(rotation_eqd_hor(time, observer))


def rotation_eqj_hor(time: Instant, observer: Observer) -> RotationMatrix:
    return combine_rotation(rotation_eqj_eqd(time), rotation_eqd_hor(time, observer))


def rotation_hor_eqj(time: Instant, observer: Observer) -> RotationMatrix:
    return combine_rotation(rotation_hor_eqd(time, observer), rotation_eqd_eqj(time))


def rotation_eqd_ecl(time: Instant) -> RotationMatrix:
    return combine_rotation(rotation_eqd_eqj(time), rotation_eqj_ecl())


def rotation_ecl_eqd(time: Instant) -> RotationMatrix:
    return inverse_rotation(rotation_eqd_ecl(time))


def rotation_ecl_hor(time: Instant, observer: Observer) -> RotationMatrix:
    return combine_rotation(rotation_ecl_eqd(time), rotation_eqd_hor(time, observer))


def rotation_hor_ecl(time: Instant, observer: Observer) -> RotationMatrix:
    return inverse_rotation(rotation_ecl_hor(time, observer))


def ecliptic_from_equatorial(eqj: Vector) -> Ecliptic:
    """Converts an EQJ vector to ecliptic coordinates of J2000."""
    ecl = rotate_vector(rotation_eqj_ecl(), eqj)
    xyproj = hypot(ecl.x, ecl.y)
    elon = 0.0
    if xyproj > 0.0:
        elon = degrees(atan2(ecl.y, ecl.x)) % 360.0
    return Ecliptic(ecl, degrees(atan2(ecl.z, xyproj)), elon)


def refraction_angle(refraction: Refraction, altitude: float) -> float:
    """Returns the refraction in degrees to add to a true altitude to get the apparent one."""
    if not isfinite(altitude):
        raise InvalidArgumentError(f"Non-finite altitude {altitude}")
    if altitude < -90.0 or altitude > 90.0 or refraction == Refraction.NONE:
        return 0.0
    hd = max(altitude, -1.0)
    refr = (1.02 / tan(radians(hd + 10.3 / (hd + 5.11)))) / 60.0
    if refraction == Refraction.NORMAL and altitude < -1.0:
        # Fade the refraction out toward the nadir so the function stays continuous.
        refr *= (altitude + 90.0) / 89.0
    return refr


def inverse_refraction_angle(refraction: Refraction, bent_altitude: float,
                             options: SearchOptions = DEFAULT_OPTIONS) -> float:
    """Returns the (normally negative) correction to add to an apparent altitude to get the true
    altitude."""
    if not isfinite(bent_altitude):
        raise InvalidArgumentError(f"Non-finite altitude {bent_altitude}")
    if bent_altitude < -90.0 or bent_altitude > 90.0:
        return 0.0
    altitude = bent_altitude - refraction_angle(refraction, bent_altitude)
    last_diff = None
    for _ in range(options.refraction_iterations):
        diff = (altitude + refraction_angle(refraction, altitude)) - bent_altitude
        if abs(diff) < 1.0e-14 or (last_diff is not None and abs(diff) >= abs(last_diff)):
            return altitude - bent_altitude
        altitude -= diff
        last_diff = diff
    raise SearchDidNotConvergeError(f"Inverse refraction did not converge for {bent_altitude}")


def _toggle_azimuth(azimuth: float) -> float:
    """Converts between a longitude measured toward the west and an azimuth toward the east."""
    azimuth = 360.0 - azimuth
    if azimuth >= 360.0:
        azimuth -= 360.0
    elif azimuth < 0.0:
        azimuth += 360.0
    return azimuth


def horizon_from_vector(vec: Vector, refraction: Refraction) -> Spherical:
    """Converts a HOR vector to altitude (lat), azimuth (lon) and distance, where the altitude
    includes refraction."""
    sphere = sphere_from_vector(vec)
    return Spherical(sphere.lat + refraction_angle(refraction, sphere.lat),
                     _toggle_azimuth(sphere.lon), sphere.dist)


def vector_from_horizon(sphere: Spherical, refraction: Refraction) -> Vector:
    """Converts an apparent altitude (lat), azimuth (lon) and distance to a HOR vector."""
    lat = sphere.lat + inverse_refraction_angle(refraction, sphere.lat)
    return vector_from_sphere(Spherical(lat, _toggle_azimuth(sphere.lon), sphere.dist))


def terra(observer: Observer, st: float) -> Vector:
    """Returns the observer's geocentric position in EQD, in AU, for sidereal time st hours."""
    df2 = EARTH_FLATTENING**2
    phi = radians(observer.latitude)
    sinphi = sin(phi)
    cosphi = cos(phi)
    c = 1.0 / sqrt(cosphi**2 + df2 * sinphi**2)
    s = df2 * c
    ht_km = observer.height / 1000.0
    ach = EARTH_EQUATORIAL_RADIUS_KM * c + ht_km
    ash = EARTH_EQUATORIAL_RADIUS_KM * s + ht_km
    stlocl = radians(15.0 * st + observer.longitude)
    return Vector(ach * cosphi * cos(stlocl) / KM_PER_AU,
                  ach * cosphi * sin(stlocl) / KM_PER_AU,
                  ash * sinphi / KM_PER_AU)


def observer_vector(time: Instant, observer: Observer, of_date: bool = False) -> Vector:
    """Returns the observer's geocentric position in EQD if of_date, otherwise EQJ."""
    pos = terra(observer, sidereal_time(time))
    if of_date:
        return pos
    return rotate_vector(rotation_eqd_eqj(time), pos)


def horizon(time: Instant, observer: Observer, ra: float, dec: float,
            refraction: Refraction = Refraction.NONE) -> Topocentric:
    """Converts equatorial coordinates of date (ra in hours, dec in degrees) to the azimuth and
    altitude seen by an observer."""
    sinlat = sin(radians(observer.latitude))
    coslat = cos(radians(observer.latitude))
    sinlon = sin(radians(observer.longitude))
    coslon = cos(radians(observer.longitude))
    sindc = sin(radians(dec))
    cosdc = cos(radians(dec))
    sinra = sin(radians(ra * 15.0))
    cosra = cos(radians(ra * 15.0))

    spin = _z_rotation(15.0 * sidereal_time(time))
    uz = rotate_vector(spin, Vector(coslat * coslon, coslat * sinlon, sinlat))
    un = rotate_vector(spin, Vector(-sinlat * coslon, -sinlat * sinlon, coslat))
    uw = rotate_vector(spin, Vector(sinlon, -coslon, 0.0))

    p = Vector(cosdc * cosra, cosdc * sinra, sindc)
    pz = p.dot(uz)
    pn = p.dot(un)
    pw = p.dot(uw)

    proj = hypot(pn, pw)
    az = 0.0
    if proj > 0.0:
        az = -degrees(atan2(pw, pn)) % 360.0
    zd = degrees(atan2(proj, pz))
    hor_ra = ra
    hor_dec = dec

    if refraction != Refraction.NONE:
        zd0 = zd
        refr = refraction_angle(refraction, 90.0 - zd)
        zd -= refr
        if refr > 0.0 and zd > 3.0e-4:
            # Bend the direction toward the zenith and recompute the equatorial coordinates.
            sinzd, coszd = sin(radians(zd)), cos(radians(zd))
            sinzd0, coszd0 = sin(radians(zd0)), cos(radians(zd0))
            pr = [((pj - coszd0 * uj) / sinzd0) * sinzd + uj * coszd
                  for pj, uj in zip((p.x, p.y, p.z), (uz.x, uz.y, uz.z))]
            proj = hypot(pr[0], pr[1])
            hor_ra = (degrees(atan2(pr[1], pr[0])) / 15.0) % 24.0 if proj > 0.0 else 0.0
            hor_dec = degrees(atan2(pr[2], proj))
    return Topocentric(az, 90.0 - zd, hor_ra, hor_dec)
