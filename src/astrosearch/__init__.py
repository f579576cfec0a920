#==============================================================
# Copyright Jody M Sankey 2020
#
# This software may be modified and distributed under the terms
# of the MIT license. See the LICENCE.md file for details.
#==============================================================
# PublicPermissions: True
#==============================================================

__all__ = ["apsis", "astrotime", "config", "eclipses", "elongation", "errors", "frames",
           "illumination", "moonphase", "observables", "positions", "riseset", "search",
           "seasons", "series", "shadow", "transit", "vectors"]

from .errors import (AstroError, InvalidDateError, InvalidArgumentError, SearchDidNotConvergeError,
                     NoBracketError, InternalError)
from .config import SearchOptions, EvalCounter, DEFAULT_OPTIONS
from .astrotime import Instant
from .vectors import Vector, Spherical, Equatorial, RotationMatrix
from .frames import Observer, Refraction, Topocentric, Ecliptic, horizon
from .positions import Body, equator, geo_vector, helio_vector, sun_position
from .search import search, search_minimum, search_maximum
from .observables import Visibility, ElongationInfo, moon_phase, angle_from_sun, elongation
from .moonphase import MoonQuarter, search_moon_phase, search_moon_quarter, next_moon_quarter
from .seasons import SeasonsInfo, seasons, search_sun_longitude
from .apsis import ApsisKind, ApsisInfo, search_lunar_apsis, next_lunar_apsis
from .riseset import RiseSetDirection, HourAngleInfo, search_hour_angle, search_rise_set
from .elongation import search_relative_longitude, search_max_elongation
from .illumination import IlluminationInfo, illumination, search_peak_magnitude
from .eclipses import (EclipseKind, LunarEclipseInfo, GlobalSolarEclipseInfo, EclipseEvent,
                       LocalSolarEclipseInfo, search_lunar_eclipse, next_lunar_eclipse,
                       search_global_solar_eclipse, next_global_solar_eclipse,
                       search_local_solar_eclipse, next_local_solar_eclipse)
from .transit import TransitInfo, search_transit, next_transit
