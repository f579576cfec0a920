"""Finders for the equinoxes and solstices."""

#==============================================================
# Copyright Jody M Sankey 2020
#
# This software may be modified and distributed under the terms
# of the MIT license. See the LICENCE.md file for details.
#==============================================================
# PublicPermissions: True
#==============================================================

from dataclasses import dataclass
from typing import Optional

from .astrotime import Instant
from .config import DEFAULT_OPTIONS, SearchOptions
from .errors import InternalError
from .observables import longitude_offset
from .positions import sun_position
from .search import search


@dataclass(frozen=True)
class SeasonsInfo:
    """The equinoxes and solstices of one calendar year."""
    mar_equinox: Instant
    jun_solstice: Instant
    sep_equinox: Instant
    dec_solstice: Instant


def search_sun_longitude(target_lon: float, start: Instant, limit_days: float,
                         options: SearchOptions = DEFAULT_OPTIONS) -> Optional[Instant]:
    """Returns the time when the Sun's apparent ecliptic longitude of date reaches target_lon
    degrees, searching between start and limit_days later."""
    def offset(time):
        return longitude_offset(sun_position(time).elon - target_lon)
    return search(offset, start, start.add_days(limit_days), 0.01, options)


def _find_season(target_lon: float, year: int, month: int, day: int,
                 options: SearchOptions) -> Instant:
    start = Instant.make(year, month, day)
    time = search_sun_longitude(target_lon, start, 4.0, options)
    if time is None:
        raise InternalError(f"Cannot find season change for {target_lon} in {year}")
    return time


def seasons(year: int, options: SearchOptions = DEFAULT_OPTIONS) -> SeasonsInfo:
    """Returns the equinoxes and solstices for a calendar year."""
    return SeasonsInfo(
        _find_season(0.0, year, 3, 19, options),
        _find_season(90.0, year, 6, 19, options),
        _find_season(180.0, year, 9, 21, options),
        _find_season(270.0, year, 12, 20, options))
