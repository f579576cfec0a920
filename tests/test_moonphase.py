#!/usr/bin/python3

import unittest
from itertools import islice

from astrosearch.astrotime import Instant
from astrosearch.moonphase import (MoonQuarter, moon_quarters, next_moon_quarter, search_moon_phase,
                                   search_moon_quarter)
from astrosearch.seasons import search_sun_longitude, seasons

# pylint: disable=missing-function-docstring

def minutes_apart(actual, expected):
    return abs(actual - expected) * 24.0 * 60.0


class TestMoonPhase(unittest.TestCase):
    """Unit tests covering the moonphase module."""

    def test_quarters(self):
        expected = [
            (0, Instant.make(2019, 1, 6, 1, 28)),
            (1, Instant.make(2019, 1, 14, 6, 45)),
            (2, Instant.make(2019, 1, 21, 5, 16)),
            (3, Instant.make(2019, 1, 27, 21, 10)),
            (0, Instant.make(2019, 2, 4, 21, 4)),
        ]
        quarter = search_moon_quarter(Instant.make(2019, 1, 1))
        for number, time in expected:
            self.assertEqual(quarter.quarter, number)
            self.assertLess(minutes_apart(quarter.time, time), 2.0)
            quarter = next_moon_quarter(quarter)

    def test_quarter_names(self):
        self.assertEqual(MoonQuarter(2, Instant(0.0)).name, 'full moon')
        self.assertEqual(search_moon_quarter(Instant.make(2019, 1, 1)).name, 'new moon')

    def test_quarter_stream(self):
        quarters = list(islice(moon_quarters(Instant.make(2019, 1, 1)), 10))
        self.assertEqual([q.quarter for q in quarters], [0, 1, 2, 3, 0, 1, 2, 3, 0, 1])
        for previous, following in zip(quarters, quarters[1:]):
            self.assertGreater(following.time - previous.time, 6.8)
            self.assertLess(following.time - previous.time, 8.6)

    def test_phase(self):
        full_moon = search_moon_phase(180.0, Instant.make(2019, 2, 1), 40.0)
        self.assertLess(minutes_apart(full_moon, Instant.make(2019, 2, 19, 15, 54)), 2.0)

    def test_phase_beyond_limit(self):
        self.assertIsNone(search_moon_phase(180.0, Instant.make(2019, 2, 1), 10.0))


class TestSeasons(unittest.TestCase):
    """Unit tests covering the seasons module."""

    def test_seasons(self):
        info = seasons(2019)
        self.assertLess(minutes_apart(info.mar_equinox, Instant.make(2019, 3, 20, 21, 58)), 2.0)
        self.assertLess(minutes_apart(info.jun_solstice, Instant.make(2019, 6, 21, 15, 54)), 2.0)
        self.assertLess(minutes_apart(info.sep_equinox, Instant.make(2019, 9, 23, 7, 50)), 2.0)
        self.assertLess(minutes_apart(info.dec_solstice, Instant.make(2019, 12, 22, 4, 19)), 2.0)

    def test_sun_longitude(self):
        # There is no equinox in early February.
        self.assertIsNone(search_sun_longitude(0.0, Instant.make(2019, 2, 1), 10.0))


if __name__ == '__main__':
    unittest.main()
