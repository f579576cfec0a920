"""Finders for lunar eclipses, solar eclipses anywhere on the Earth, and solar eclipses seen from
a particular place.

Every finder walks through consecutive full or new moons, skipping any where the Moon is too far
from the ecliptic for an eclipse to be possible, then finds when the shadow axis passes closest to
its target and classifies the eclipse from the shadow radii at that time."""

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
from math import atan, atan2, degrees, sqrt
from typing import Callable, Iterator, Optional

from .astrotime import Instant
from .config import DEFAULT_OPTIONS, SearchOptions
from .errors import InternalError
from .frames import (EARTH_EQUATORIAL_RADIUS_KM, EARTH_FLATTENING, KM_PER_AU, Observer,
                     Refraction, horizon, rotation_eqj_eqd, sidereal_time)
from .moonphase import search_moon_phase
from .positions import (EARTH_MEAN_RADIUS_KM, MOON_MEAN_RADIUS_KM, MOON_POLAR_RADIUS_KM, Body,
                        equator, moon_ecliptic_latitude)
from .search import search, step_forward
from .shadow import (ShadowInfo, calc_shadow, earth_shadow, local_moon_shadow, moon_shadow,
                     peak_shadow)
from .vectors import Vector, inverse_rotation, rotate_vector

logger = logging.getLogger(__name__)

# No eclipse is possible when the Moon is farther than this from the ecliptic, in degrees.
PRUNE_LATITUDE = 1.8
# Umbra radius in kilometers above which an eclipse at the shadow axis is total rather than
# annular.
TOTAL_UMBRA_THRESHOLD_KM = 0.014


class EclipseKind(Enum):
    PENUMBRAL = 'penumbral'
    PARTIAL = 'partial'
    ANNULAR = 'annular'
    TOTAL = 'total'


@dataclass(frozen=True)
class LunarEclipseInfo:
    """A lunar eclipse. The semi-durations are half the length of each phase in minutes, zero
    for phases the eclipse does not reach."""
    kind: EclipseKind
    peak: Instant
    sd_penum: float
    sd_partial: float
    sd_total: float


@dataclass(frozen=True)
class GlobalSolarEclipseInfo:
    """A solar eclipse seen from somewhere on the Earth.

    distance: distance in kilometers between the shadow axis and the center of the Earth at
        the peak.
    latitude, longitude: where the shadow axis meets the Earth at the peak, or None when the
        axis misses the Earth (a partial eclipse)."""
    kind: EclipseKind
    peak: Instant
    distance: float
    latitude: Optional[float] = None
    longitude: Optional[float] = None


@dataclass(frozen=True)
class EclipseEvent:
    """A moment during a local solar eclipse, with the Sun's apparent altitude in degrees."""
    time: Instant
    altitude: float


@dataclass(frozen=True)
class LocalSolarEclipseInfo:
    """A solar eclipse seen by an observer. The total phase times are None for partial
    eclipses, and for annular eclipses they bound the annular phase."""
    kind: EclipseKind
    partial_begin: EclipseEvent
    total_begin: Optional[EclipseEvent]
    peak: EclipseEvent
    total_end: Optional[EclipseEvent]
    partial_end: EclipseEvent


def _eclipse_candidates(target_phase: float, start: Instant, max_candidates: int,
                        options: SearchOptions) -> Iterator[Instant]:
    """Yields the new or full moons among the first max_candidates after start at which the Moon
    is close enough to the ecliptic for an eclipse."""
    def find_phase(time):
        moon = search_moon_phase(target_phase, time, 40.0, options)
        if moon is None:
            raise InternalError(f"Failed to find the lunar phase {target_phase} after {time}")
        return moon

    for moon in step_forward(find_phase(start), lambda m: find_phase(m.add_days(10.0)),
                             max_candidates):
        if abs(moon_ecliptic_latitude(moon)) < PRUNE_LATITUDE:
            yield moon
        else:
            logger.debug("Skipping lunar phase %s at %s, too far from the ecliptic",
                         target_phase, moon)


def _shadow_semi_duration(center: Instant, radius_limit: float, window_minutes: float,
                          options: SearchOptions) -> float:
    """Returns half the time in minutes for which the Moon's center is within radius_limit
    kilometers of the Earth's shadow axis."""
    window = window_minutes / (24.0 * 60.0)
    t1 = search(lambda t: radius_limit - earth_shadow(t).r, center.add_days(-window), center,
                1.0, options)
    t2 = search(lambda t: earth_shadow(t).r - radius_limit, center, center.add_days(window),
                1.0, options)
    if t1 is None or t2 is None:
        raise InternalError(f"Failed to find the shadow semi-duration around {center}")
    return (t2 - t1) * (24.0 * 60.0) / 2.0


def search_lunar_eclipse(start: Instant,
                         options: SearchOptions = DEFAULT_OPTIONS) -> Optional[LunarEclipseInfo]:
    """Returns the first lunar eclipse of any kind after start, or None if there is none within
    the number of full moons allowed by the options."""
    for full_moon in _eclipse_candidates(180.0, start, options.lunar_eclipse_candidates, options):
        shadow = peak_shadow(earth_shadow, full_moon, 0.03, options)
        if shadow.r >= shadow.p + MOON_MEAN_RADIUS_KM:
            continue
        kind = EclipseKind.PENUMBRAL
        sd_partial = sd_total = 0.0
        sd_penum = _shadow_semi_duration(shadow.time, shadow.p + MOON_MEAN_RADIUS_KM, 200.0,
                                         options)
        if shadow.r < shadow.k + MOON_MEAN_RADIUS_KM:
            kind = EclipseKind.PARTIAL
            sd_partial = _shadow_semi_duration(shadow.time, shadow.k + MOON_MEAN_RADIUS_KM,
                                               sd_penum, options)
            if shadow.r + MOON_MEAN_RADIUS_KM < shadow.k:
                kind = EclipseKind.TOTAL
                sd_total = _shadow_semi_duration(shadow.time, shadow.k - MOON_MEAN_RADIUS_KM,
                                                 sd_partial, options)
        return LunarEclipseInfo(kind, shadow.time, sd_penum, sd_partial, sd_total)
    logger.debug("No lunar eclipse within %d full moons of %s", options.lunar_eclipse_candidates,
                 start)
    return None


def next_lunar_eclipse(previous: LunarEclipseInfo,
                       options: SearchOptions = DEFAULT_OPTIONS) -> Optional[LunarEclipseInfo]:
    return search_lunar_eclipse(previous.peak.add_days(10.0), options)


def lunar_eclipses(start: Instant,
                   options: SearchOptions = DEFAULT_OPTIONS) -> Iterator[LunarEclipseInfo]:
    """Yields the lunar eclipses after start, ending if none is found within the candidate
    limit."""
    eclipse = search_lunar_eclipse(start, options)
    while eclipse is not None:
        yield eclipse
        eclipse = next_lunar_eclipse(eclipse, options)


def _geoid_intersect(shadow: ShadowInfo) -> GlobalSolarEclipseInfo:
    """Finds where the Moon's shadow axis meets the Earth's surface and classifies the eclipse
    seen there."""
    # Work in the equator of date so the Earth's rotation axis is z, and stretch z so the
    # flattened Earth becomes a sphere (Montenbruck & Pfleger, p184).
    rot = rotation_eqj_eqd(shadow.time)
    v = rotate_vector(rot, shadow.dir)
    e = rotate_vector(rot, shadow.target)
    v = Vector(v.x * KM_PER_AU, v.y * KM_PER_AU, v.z * KM_PER_AU / EARTH_FLATTENING)
    e = Vector(e.x * KM_PER_AU, e.y * KM_PER_AU, e.z * KM_PER_AU / EARTH_FLATTENING)

    a = v.dot(v)
    b = -2.0 * v.dot(e)
    c = e.dot(e) - EARTH_EQUATORIAL_RADIUS_KM**2
    radic = b * b - 4.0 * a * c
    if radic <= 0.0:
        return GlobalSolarEclipseInfo(EclipseKind.PARTIAL, shadow.time, shadow.r)

    # The nearer intersection is on the day side of the Earth.
    u = (-b - sqrt(radic)) / (2.0 * a)
    px = u * v.x - e.x
    py = u * v.y - e.y
    pz = (u * v.z - e.z) * EARTH_FLATTENING

    proj = sqrt(px * px + py * py) * EARTH_FLATTENING**2
    if proj == 0.0:
        latitude = 90.0 if pz > 0.0 else -90.0
    else:
        latitude = degrees(atan(pz / proj))
    longitude = (degrees(atan2(py, px)) - 15.0 * sidereal_time(shadow.time)) % 360.0
    if longitude > 180.0:
        longitude -= 360.0

    # Measure the umbra at the surface point, seen from the Moon.
    surface_point = rotate_vector(inverse_rotation(rot),
                                  Vector(px / KM_PER_AU, py / KM_PER_AU, pz / KM_PER_AU))
    surface = calc_shadow(MOON_POLAR_RADIUS_KM, shadow.time, surface_point + shadow.target,
                          shadow.dir)
    if not 0.0 <= surface.r <= 1.0e-6:
        raise InternalError(f"Geoid intersection is {surface.r} km from the shadow axis")
    kind = EclipseKind.TOTAL if surface.k > TOTAL_UMBRA_THRESHOLD_KM else EclipseKind.ANNULAR
    return GlobalSolarEclipseInfo(kind, shadow.time, shadow.r, latitude, longitude)


def search_global_solar_eclipse(start: Instant, options: SearchOptions = DEFAULT_OPTIONS
                                ) -> Optional[GlobalSolarEclipseInfo]:
    """Returns the first solar eclipse visible anywhere on the Earth after start, or None if
    there is none within the number of new moons allowed by the options."""
    for new_moon in _eclipse_candidates(0.0, start, options.solar_eclipse_candidates, options):
        shadow = peak_shadow(moon_shadow, new_moon, 0.03, options)
        if shadow.r < shadow.p + EARTH_MEAN_RADIUS_KM:
            return _geoid_intersect(shadow)
    logger.debug("No solar eclipse within %d new moons of %s", options.solar_eclipse_candidates,
                 start)
    return None


def next_global_solar_eclipse(previous: GlobalSolarEclipseInfo,
                              options: SearchOptions = DEFAULT_OPTIONS
                              ) -> Optional[GlobalSolarEclipseInfo]:
    return search_global_solar_eclipse(previous.peak.add_days(10.0), options)


def global_solar_eclipses(start: Instant, options: SearchOptions = DEFAULT_OPTIONS
                          ) -> Iterator[GlobalSolarEclipseInfo]:
    """Yields the solar eclipses visible somewhere on the Earth, ending if none is found within
    the candidate limit."""
    eclipse = search_global_solar_eclipse(start, options)
    while eclipse is not None:
        yield eclipse
        eclipse = next_global_solar_eclipse(eclipse, options)


def sun_altitude(time: Instant, observer: Observer) -> float:
    """Returns the apparent altitude of the Sun's center in degrees, including refraction."""
    ofdate = equator(Body.SUN, time, observer, of_date=True, aberration=True)
    return horizon(time, observer, ofdate.ra, ofdate.dec, Refraction.NORMAL).altitude


def _eclipse_event(observer: Observer, time: Instant) -> EclipseEvent:
    return EclipseEvent(time, sun_altitude(time, observer))


def _local_transition(observer: Observer, func: Callable[[ShadowInfo], float], t1: Instant,
                      t2: Instant, options: SearchOptions) -> EclipseEvent:
    time = search(lambda t: func(local_moon_shadow(t, observer)), t1, t2, 1.0, options)
    if time is None:
        raise InternalError(f"Local eclipse transition not found between {t1} and {t2}")
    return _eclipse_event(observer, time)


def _local_eclipse(shadow: ShadowInfo, observer: Observer,
                   options: SearchOptions) -> LocalSolarEclipseInfo:
    partial_window = 0.2
    total_window = 0.01
    peak = shadow.time

    # The partial phase lasts while the observer is inside the penumbra.
    partial_begin = _local_transition(observer, lambda s: s.p - s.r,
                                      peak.add_days(-partial_window), peak, options)
    partial_end = _local_transition(observer, lambda s: s.r - s.p,
                                    peak, peak.add_days(partial_window), options)
    total_begin = total_end = None
    kind = EclipseKind.PARTIAL
    # The umbra radius is negative for annular eclipses.
    if shadow.r < abs(shadow.k):
        total_begin = _local_transition(observer, lambda s: abs(s.k) - s.r,
                                        peak.add_days(-total_window), peak, options)
        total_end = _local_transition(observer, lambda s: s.r - abs(s.k),
                                      peak, peak.add_days(total_window), options)
        kind = EclipseKind.TOTAL if shadow.k > 0.0 else EclipseKind.ANNULAR
    return LocalSolarEclipseInfo(kind, partial_begin, total_begin, _eclipse_event(observer, peak),
                                 total_end, partial_end)


def search_local_solar_eclipse(start: Instant, observer: Observer,
                               options: SearchOptions = DEFAULT_OPTIONS
                               ) -> Optional[LocalSolarEclipseInfo]:
    """Returns the first solar eclipse after start that is visible to the observer while the Sun
    is above the horizon at its beginning or end. Returns None if there is no such eclipse within
    the number of new moons allowed by the options."""
    for new_moon in _eclipse_candidates(0.0, start, options.local_eclipse_candidates, options):
        shadow = peak_shadow(lambda t: local_moon_shadow(t, observer), new_moon, 0.2, options)
        if shadow.r >= shadow.p:
            continue
        eclipse = _local_eclipse(shadow, observer, options)
        if eclipse.partial_begin.altitude > 0.0 or eclipse.partial_end.altitude > 0.0:
            return eclipse
        logger.debug("Skipping eclipse at %s, the Sun is below the horizon", shadow.time)
    return None


def next_local_solar_eclipse(previous: LocalSolarEclipseInfo, observer: Observer,
                             options: SearchOptions = DEFAULT_OPTIONS
                             ) -> Optional[LocalSolarEclipseInfo]:
    return search_local_solar_eclipse(previous.peak.time.add_days(10.0), observer, options)


def local_solar_eclipses(start: Instant, observer: Observer,
                         options: SearchOptions = DEFAULT_OPTIONS
                         ) -> Iterator[LocalSolarEclipseInfo]:
    """Yields the solar eclipses visible to an observer, ending if none is found within the
    candidate limit."""
    eclipse = search_local_solar_eclipse(start, observer, options)
    while eclipse is not None:
        yield eclipse
        eclipse = next_local_solar_eclipse(eclipse, observer, options)
