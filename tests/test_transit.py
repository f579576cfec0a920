#!/usr/bin/python3

import unittest
from itertools import islice

from astrosearch.astrotime import Instant
from astrosearch.config import SearchOptions
from astrosearch.errors import InvalidArgumentError
from astrosearch.positions import Body
from astrosearch.transit import next_transit, search_transit, transits

# pylint: disable=missing-function-docstring

def minutes_apart(actual, expected):
    return abs(actual - expected) * 24.0 * 60.0


class TestTransit(unittest.TestCase):
    """Unit tests covering the transit module."""

    def assertTransit(self, transit, start, peak, finish, separation, minutes=20.0):
        self.assertLess(minutes_apart(transit.start, start), minutes)
        self.assertLess(minutes_apart(transit.peak, peak), minutes)
        self.assertLess(minutes_apart(transit.finish, finish), minutes)
        self.assertAlmostEqual(transit.separation, separation, delta=1.5)

    def test_mercury(self):
        transit = search_transit(Body.MERCURY, Instant.make(2016, 1, 1))
        self.assertTransit(transit, Instant.make(2016, 5, 9, 11, 12),
                           Instant.make(2016, 5, 9, 14, 57), Instant.make(2016, 5, 9, 18, 42),
                           5.31)
        transit = next_transit(Body.MERCURY, transit)
        self.assertTransit(transit, Instant.make(2019, 11, 11, 12, 35),
                           Instant.make(2019, 11, 11, 15, 20), Instant.make(2019, 11, 11, 18, 4),
                           1.27)

    def test_venus(self):
        transit = search_transit(Body.VENUS, Instant.make(2012, 1, 1))
        self.assertTransit(transit, Instant.make(2012, 6, 5, 22, 9),
                           Instant.make(2012, 6, 6, 1, 29), Instant.make(2012, 6, 6, 4, 49),
                           9.24, minutes=30.0)

    def test_stream(self):
        first, second = islice(transits(Body.MERCURY, Instant.make(2016, 1, 1)), 2)
        self.assertLess(first.finish, second.start)
        for transit in (first, second):
            self.assertLess(transit.start, transit.peak)
            self.assertLess(transit.peak, transit.finish)
            # Mercury takes several hours to cross the Sun.
            self.assertGreater(transit.finish - transit.start, 0.1)

    def test_candidate_limit(self):
        # The next transit of Venus is not until 2117.
        options = SearchOptions(transit_candidates=3)
        self.assertIsNone(search_transit(Body.VENUS, Instant.make(2013, 1, 1), options))

    def test_invalid_body(self):
        with self.assertRaises(InvalidArgumentError):
            search_transit(Body.MARS, Instant.make(2020, 1, 1))


if __name__ == '__main__':
    unittest.main()
