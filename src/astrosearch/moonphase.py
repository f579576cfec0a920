"""Finders for lunar phases and quarters."""

#==============================================================
# Copyright Jody M Sankey 2020
#
# This software may be modified and distributed under the terms
# of the MIT license. See the LICENCE.md file for details.
#==============================================================
# PublicPermissions: True
#==============================================================

from dataclasses import dataclass
from math import floor
from typing import Iterator, Optional

from .astrotime import Instant
from .config import DEFAULT_OPTIONS, SearchOptions
from .errors import InternalError
from .observables import longitude_offset, moon_phase
from .positions import MEAN_SYNODIC_MONTH
from .search import search

QUARTER_NAMES = ('new moon', 'first quarter', 'full moon', 'last quarter')


@dataclass(frozen=True)
class MoonQuarter:
    """A lunar quarter: 0=new moon, 1=first quarter, 2=full moon, 3=last quarter."""
    quarter: int
    time: Instant

    @property
    def name(self) -> str:
        return QUARTER_NAMES[self.quarter]


def search_moon_phase(target_lon: float, start: Instant, limit_days: float,
                      options: SearchOptions = DEFAULT_OPTIONS) -> Optional[Instant]:
    """Returns the first time after start when the Moon reaches the phase angle target_lon in
    degrees, or None if that does not happen within limit_days."""
    def offset(time):
        return longitude_offset(moon_phase(time) - target_lon)

    # The Moon's motion is not uniform so search a window around the estimated time.
    uncertainty = 1.5
    ya = offset(start)
    if ya > 0.0:
        ya -= 360.0
    est_dt = -(MEAN_SYNODIC_MONTH * ya) / 360.0
    dt1 = est_dt - uncertainty
    if dt1 > limit_days:
        return None
    dt2 = min(est_dt + uncertainty, limit_days)
    return search(offset, start.add_days(dt1), start.add_days(dt2), 1.0, options)


def search_moon_quarter(start: Instant, options: SearchOptions = DEFAULT_OPTIONS) -> MoonQuarter:
    """Returns the first lunar quarter after start."""
    quarter = (1 + floor(moon_phase(start) / 90.0)) % 4
    time = search_moon_phase(90.0 * quarter, start, 10.0, options)
    if time is None:
        raise InternalError(f"No moon quarter found within 10 days of {start}")
    return MoonQuarter(quarter, time)


def next_moon_quarter(previous: MoonQuarter,
                      options: SearchOptions = DEFAULT_OPTIONS) -> MoonQuarter:
    """Returns the lunar quarter following a previous one."""
    # Quarters are at least six days apart.
    quarter = search_moon_quarter(previous.time.add_days(6.0), options)
    if quarter.quarter != (previous.quarter + 1) % 4:
        raise InternalError(f"Expected quarter {(previous.quarter + 1) % 4} after "
                            f"{previous.time}, found {quarter.quarter}")
    return quarter


def moon_quarters(start: Instant,
                  options: SearchOptions = DEFAULT_OPTIONS) -> Iterator[MoonQuarter]:
    """Yields an endless sequence of lunar quarters after start."""
    quarter = search_moon_quarter(start, options)
    while True:
        yield quarter
        quarter = next_moon_quarter(quarter, options)
