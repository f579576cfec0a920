"""Overridable limits for the iterative searches, plus an optional evaluation counter that lets
callers measure how much work a search performed."""

#==============================================================
# Copyright Jody M Sankey 2020
#
# This software may be modified and distributed under the terms
# of the MIT license. See the LICENCE.md file for details.
#==============================================================
# PublicPermissions: True
#==============================================================

from dataclasses import dataclass, replace
from typing import Optional


class EvalCounter:
    """Counts calls to the functions being searched. Pass one in through SearchOptions."""

    def __init__(self) -> None:
        self.count = 0

    def increment(self) -> None:
        self.count += 1

    def reset(self) -> None:
        self.count = 0


@dataclass(frozen=True)
class SearchOptions:
    """Iteration caps for every search loop in the package."""
    # Quadratic/bisection refinement in search().
    max_iterations: int = 20
    # Hour angle refinement in the rise/set finders.
    hour_angle_iterations: int = 50
    # Secant iteration for relative longitude.
    relative_longitude_iterations: int = 100
    # Full moons considered when looking for a lunar eclipse.
    lunar_eclipse_candidates: int = 12
    # New moons considered when looking for a solar eclipse.
    solar_eclipse_candidates: int = 12
    # New moons considered when looking for an eclipse seen by one observer.
    local_eclipse_candidates: int = 1000
    # Inferior conjunctions considered when looking for a transit.
    transit_candidates: int = 1000
    # Iterations allowed when inverting refraction.
    refraction_iterations: int = 100
    # Iterations of the light travel time correction.
    light_time_iterations: int = 10

    counter: Optional[EvalCounter] = None

    def with_counter(self) -> 'SearchOptions':
        """Returns a copy of these options bound to a new counter."""
        return replace(self, counter=EvalCounter())

    def count(self) -> None:
        if self.counter is not None:
            self.counter.increment()


DEFAULT_OPTIONS = SearchOptions()
