"""Shadow geometry shared by the eclipse and transit finders.

Each shadow is described by a body casting a shadow along the direction of sunlight (dir) and a
target whose distance from the shadow axis is measured. All positions are in EQJ astronomical units
and the derived distances are in kilometers."""

#==============================================================
# Copyright Jody M Sankey 2020
#
# This software may be modified and distributed under the terms
# of the MIT license. See the LICENCE.md file for details.
#==============================================================
# PublicPermissions: True
#==============================================================

from dataclasses import dataclass
from typing import Callable

from .astrotime import SEC_IN_DAY, Instant
from .config import DEFAULT_OPTIONS, SearchOptions
from .errors import InternalError
from .frames import KM_PER_AU, Observer, observer_vector
from .positions import (EARTH_MEAN_RADIUS_KM, MOON_MEAN_RADIUS_KM, SUN_RADIUS_KM, Body,
                        earth_vector, geo_moon, geo_vector)
from .search import search_minimum
from .vectors import Vector

# The Earth's shadow is enlarged by its atmosphere.
EARTH_ATMOSPHERE_KM = 88.0
EARTH_ECLIPSE_RADIUS_KM = EARTH_MEAN_RADIUS_KM + EARTH_ATMOSPHERE_KM

# Step used to measure how the shadow distance changes, in days.
_SHADOW_SLOPE_DT = 2.0 / SEC_IN_DAY


@dataclass(frozen=True)
class ShadowInfo:
    """The position of a target relative to a shadow cone.

    u: distance of the target along the shadow axis, in units of the caster's distance from
        the Sun.
    r: distance of the target from the shadow axis in kilometers.
    k: umbra radius at the target in kilometers, negative beyond the umbra's tip (antumbra).
    p: penumbra radius at the target in kilometers."""
    time: Instant
    u: float
    r: float
    k: float
    p: float
    target: Vector
    dir: Vector


def calc_shadow(body_radius_km: float, time: Instant, target: Vector,
                direction: Vector) -> ShadowInfo:
    u = direction.dot(target) / direction.dot(direction)
    r = KM_PER_AU * (u * direction - target).length()
    k = SUN_RADIUS_KM - (1.0 + u) * (SUN_RADIUS_KM - body_radius_km)
    p = -SUN_RADIUS_KM + (1.0 + u) * (SUN_RADIUS_KM + body_radius_km)
    return ShadowInfo(time, u, r, k, p, target, direction)


def earth_shadow(time: Instant) -> ShadowInfo:
    """The Moon relative to the Earth's shadow."""
    sunlight = -geo_vector(Body.SUN, time, aberration=True)
    return calc_shadow(EARTH_ECLIPSE_RADIUS_KM, time, geo_moon(time), sunlight)


def moon_shadow(time: Instant) -> ShadowInfo:
    """The center of the Earth relative to the Moon's shadow."""
    moon = geo_moon(time)
    return calc_shadow(MOON_MEAN_RADIUS_KM, time, -moon, earth_vector(time) + moon)


def local_moon_shadow(time: Instant, observer: Observer) -> ShadowInfo:
    """An observer on the Earth's surface relative to the Moon's shadow."""
    moon = geo_moon(time)
    return calc_shadow(MOON_MEAN_RADIUS_KM, time, observer_vector(time, observer) - moon,
                       earth_vector(time) + moon)


def planet_shadow(body: Body, planet_radius_km: float, time: Instant) -> ShadowInfo:
    """The center of the Earth relative to a planet's shadow."""
    planet = geo_vector(body, time, aberration=False)
    sun = geo_vector(Body.SUN, time, aberration=False)
    return calc_shadow(planet_radius_km, time, -planet, planet - sun)


def peak_shadow(shadow_func: Callable[[Instant], ShadowInfo], center: Instant, window_days: float,
                options: SearchOptions = DEFAULT_OPTIONS) -> ShadowInfo:
    """Returns the shadow at the time the target comes closest to the shadow axis, within
    window_days of center."""
    time = search_minimum(lambda t: shadow_func(t).r, center.add_days(-window_days),
                          center.add_days(window_days), _SHADOW_SLOPE_DT, 1.0, options)
    if time is None:
        raise InternalError(f"Failed to find the closest approach to a shadow axis near {center}")
    return shadow_func(time)
