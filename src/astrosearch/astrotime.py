"""The Instant type used throughout the package, along with the correction between universal time
and terrestrial (dynamical) time.

An Instant stores two coordinates, both measured in days from noon UTC on 2000-01-01:
  ut: universal time, tracking the rotation of the Earth.
  tt: terrestrial time, the uniform time scale used by the position series.
The two differ by DeltaT, which is estimated from the polynomial fits published by Espenak and
Meeus for the years -1999 to +3000."""

#==============================================================
# Copyright Jody M Sankey 2020
#
# This software may be modified and distributed under the terms
# of the MIT license. See the LICENCE.md file for details.
#==============================================================
# PublicPermissions: True
#==============================================================

from datetime import date, datetime, timedelta
from functools import total_ordering
from math import isfinite

from dateutil import tz

from .errors import InvalidArgumentError, InvalidDateError, SearchDidNotConvergeError

SEC_IN_DAY = 86400.0
DAYS_PER_TROPICAL_YEAR = 365.24217
# Supported range of the DeltaT polynomials, in years.
MIN_YEAR = -1999.0
MAX_YEAR = 3000.0

EPOCH = datetime(2000, 1, 1, 12, 0, 0, tzinfo=tz.UTC)
_EPOCH_ORDINAL = EPOCH.date().toordinal()


def time_correction(year: float) -> float:
    """Returns DeltaT (TT - UT) in seconds for a fractional calendar year."""
    if not isfinite(year) or year < MIN_YEAR or year > MAX_YEAR:
        raise InvalidDateError(f"Year {year} outside supported range {MIN_YEAR} to {MAX_YEAR}")
    # pylint: disable=invalid-name,too-many-return-statements
    y = year
    if y < -500:
        u = (y - 1820) / 100
        return -20 + 32 * u**2
    if y < 500:
        u = y / 100
        return (10583.6 - 1014.41*u + 33.78311*u**2 - 5.952053*u**3 - 0.1798452*u**4
                + 0.022174192*u**5 + 0.0090316521*u**6)
    if y < 1600:
        u = (y - 1000) / 100
        return (1574.2 - 556.01*u + 71.23472*u**2 + 0.319781*u**3 - 0.8503463*u**4
                - 0.005050998*u**5 + 0.0083572073*u**6)
    if y < 1700:
        u = y - 1600
        return 120 - 0.9808*u - 0.01532*u**2 + u**3/7129.0
    if y < 1800:
        u = y - 1700
        return 8.83 + 0.1603*u - 0.0059285*u**2 + 0.00013336*u**3 - u**4/1174000
    if y < 1860:
        u = y - 1800
        return (13.72 - 0.332447*u + 0.0068612*u**2 + 0.0041116*u**3 - 0.00037436*u**4
                + 0.0000121272*u**5 - 0.0000001699*u**6 + 0.000000000875*u**7)
    if y < 1900:
        u = y - 1860
        return (7.62 + 0.5737*u - 0.251754*u**2 + 0.01680668*u**3 - 0.0004473624*u**4
                + u**5/233174)
    if y < 1920:
        u = y - 1900
        return -2.79 + 1.494119*u - 0.0598939*u**2 + 0.0061966*u**3 - 0.000197*u**4
    if y < 1941:
        u = y - 1920
        return 21.20 + 0.84493*u - 0.076100*u**2 + 0.0020936*u**3
    if y < 1961:
        u = y - 1950
        return 29.07 + 0.407*u - u**2/233 + u**3/2547
    if y < 1986:
        u = y - 1975
        return 45.45 + 1.067*u - u**2/260 - u**3/718
    if y < 2005:
        u = y - 2000
        return (63.86 + 0.3345*u - 0.060374*u**2 + 0.0017275*u**3 + 0.000651814*u**4
                + 0.00002373599*u**5)
    if y < 2050:
        u = y - 2000
        return 62.92 + 0.32217*u + 0.005589*u**2
    if y < 2150:
        u = (y - 1820) / 100
        return -20 + 32*u**2 - 0.5628*(2150 - y)
    u = (y - 1820) / 100
    return -20 + 32*u**2


def _ut_to_tt(ut: float) -> float:
    year = 2000.0 + (ut - 14.0) / DAYS_PER_TROPICAL_YEAR
    return ut + time_correction(year) / SEC_IN_DAY


@total_ordering
class Instant:
    """An immutable point in time. Construct directly from a universal time in days since the
    J2000 epoch, or use one of the make/from_datetime/from_terrestrial class methods."""

    __slots__ = ('_ut', '_tt')

    def __init__(self, ut: float) -> None:
        if not isfinite(ut):
            raise InvalidArgumentError(f"Universal time must be finite, got {ut}")
        self._ut = ut
        self._tt = _ut_to_tt(ut)

    @property
    def ut(self) -> float:
        """Universal time in days since noon UTC on 2000-01-01."""
        return self._ut

    @property
    def tt(self) -> float:
        """Terrestrial time in days since noon TT on 2000-01-01."""
        return self._tt

    @classmethod
    def make(cls, year: int, month: int, day: int,
             hour: int = 0, minute: int = 0, second: float = 0.0) -> 'Instant':
        """Creates an instant from UTC calendar fields, where second may be fractional."""
        if not (0 <= hour < 24 and 0 <= minute < 60 and 0.0 <= second < 60.0):
            raise InvalidDateError(f"Invalid time of day {hour}:{minute}:{second}")
        try:
            ordinal = date(year, month, day).toordinal()
        except ValueError as ex:
            raise InvalidDateError(f"Invalid date {year}-{month}-{day}: {ex}") from ex
        fraction = (hour * 3600.0 + minute * 60.0 + second) / SEC_IN_DAY
        return cls((ordinal - _EPOCH_ORDINAL) - 0.5 + fraction)

    @classmethod
    def from_datetime(cls, value: datetime) -> 'Instant':
        """Creates an instant from a datetime, assuming UTC if the datetime is naive."""
        if value.tzinfo is None:
            value = value.replace(tzinfo=tz.UTC)
        return cls((value.astimezone(tz.UTC) - EPOCH) / timedelta(days=1))

    @classmethod
    def from_terrestrial(cls, tt: float, max_iterations: int = 10) -> 'Instant':
        """Creates an instant from a terrestrial time in days since J2000."""
        ut = tt
        for _ in range(max_iterations):
            instant = cls(ut)
            err = instant.tt - tt
            if abs(err) < 1.0e-12:
                return instant
            ut -= err
        raise SearchDidNotConvergeError(f"Terrestrial time {tt} did not converge")

    def to_datetime(self) -> datetime:
        """Returns the instant as a UTC datetime, rounded to the nearest microsecond."""
        try:
            return EPOCH + timedelta(days=self._ut)
        except OverflowError as ex:
            raise InvalidDateError(f"Instant {self._ut} cannot be expressed as a datetime") from ex

    def add_days(self, days: float) -> 'Instant':
        """Returns a new instant offset by a (possibly fractional or negative) number of days."""
        return Instant(self._ut + days)

    def __sub__(self, other: 'Instant') -> float:
        """The difference between two instants in days."""
        return self._ut - other._ut

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self._ut == other._ut

    def __lt__(self, other: 'Instant') -> bool:
        return self._ut < other._ut

    def __hash__(self) -> int:
        return hash(self._ut)

    def __repr__(self) -> str:
        return f"Instant({self._ut!r})"

    def __str__(self) -> str:
        return self.to_datetime().strftime('%Y-%m-%dT%H:%M:%S.%f')[:-3] + 'Z'
