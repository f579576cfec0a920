#!/usr/bin/python3

import unittest

from astrosearch.astrotime import Instant
from astrosearch.errors import InvalidArgumentError
from astrosearch.frames import Observer
from astrosearch.positions import Body
from astrosearch.riseset import RiseSetDirection, search_hour_angle, search_rise_set

# pylint: disable=missing-function-docstring

# San Francisco
OBSERVER = Observer(37.7667, -122.4167)

def minutes_apart(actual, expected):
    return abs(actual - expected) * 24.0 * 60.0


class TestRiseSet(unittest.TestCase):
    """Unit tests covering the riseset module."""

    def test_sun_events(self):
        # Verified this data to the minute level with NOAA ESRL sunrise/sunset calculator.
        start = Instant.make(2020, 7, 1, 13)
        sunset = search_rise_set(Body.SUN, OBSERVER, RiseSetDirection.SET, start, 2.0)
        self.assertLess(minutes_apart(sunset, Instant.make(2020, 7, 2, 3, 35, 26)), 1.0)
        sunrise = search_rise_set(Body.SUN, OBSERVER, RiseSetDirection.RISE, start, 2.0)
        self.assertLess(minutes_apart(sunrise, Instant.make(2020, 7, 2, 12, 52, 16)), 1.0)

        sunset = search_rise_set(Body.SUN, OBSERVER, RiseSetDirection.SET, sunset.add_days(0.01),
                                 2.0)
        self.assertLess(minutes_apart(sunset, Instant.make(2020, 7, 3, 3, 35, 19)), 1.0)
        sunrise = search_rise_set(Body.SUN, OBSERVER, RiseSetDirection.RISE,
                                  sunrise.add_days(0.01), 2.0)
        self.assertLess(minutes_apart(sunrise, Instant.make(2020, 7, 3, 12, 52, 47)), 1.0)

    def test_culmination(self):
        info = search_hour_angle(Body.SUN, OBSERVER, 0.0, Instant.make(2020, 7, 2))
        self.assertLess(minutes_apart(info.time, Instant.make(2020, 7, 2, 20, 13, 53)), 1.0)
        # Noon altitude is the colatitude plus the declination.
        self.assertAlmostEqual(info.hor.altitude, 90.0 - 37.7667 + 23.0, delta=0.2)
        self.assertAlmostEqual(info.hor.azimuth, 180.0, delta=0.5)

    def test_moon_rises(self):
        start = Instant.make(2020, 7, 1)
        rise = search_rise_set(Body.MOON, OBSERVER, RiseSetDirection.RISE, start, 2.0)
        following = search_rise_set(Body.MOON, OBSERVER, RiseSetDirection.RISE,
                                    rise.add_days(0.01), 2.0)
        # The Moon rises later each day.
        self.assertGreater(following - rise, 1.0)
        self.assertLess(following - rise, 1.1)

    def test_midnight_sun(self):
        observer = Observer(89.0, 0.0)
        start = Instant.make(2020, 6, 1)
        self.assertIsNone(search_rise_set(Body.SUN, observer, RiseSetDirection.SET, start, 10.0))
        self.assertIsNone(search_rise_set(Body.SUN, observer, RiseSetDirection.RISE, start, 10.0))

    def test_limit(self):
        # Sunset is more than six hours after the start.
        start = Instant.make(2020, 7, 1, 20)
        self.assertIsNone(search_rise_set(Body.SUN, OBSERVER, RiseSetDirection.SET, start, 0.25))

    def test_full_year_mid_latitude(self):
        observer = Observer(29.0, -81.0)
        start = Instant.make(2020, 1, 1)
        for body in (Body.SUN, Body.MOON):
            with self.subTest(body=body):
                rise = search_rise_set(body, observer, RiseSetDirection.RISE, start, 366.0)
                setting = search_rise_set(body, observer, RiseSetDirection.SET, start, 366.0)
                self.assertIsNotNone(rise)
                self.assertIsNotNone(setting)
                self.assertGreaterEqual(rise, start)
                self.assertGreaterEqual(setting, start)
                self.assertLess(abs(rise - setting), 31.0)

    def test_repeatable(self):
        start = Instant.make(2020, 7, 1, 13)
        first = search_rise_set(Body.MOON, OBSERVER, RiseSetDirection.RISE, start, 2.0)
        second = search_rise_set(Body.MOON, OBSERVER, RiseSetDirection.RISE, start, 2.0)
        self.assertEqual(first, second)
        self.assertEqual(search_hour_angle(Body.SUN, OBSERVER, 0.0, start),
                         search_hour_angle(Body.SUN, OBSERVER, 0.0, start))

    def test_invalid_arguments(self):
        with self.assertRaises(InvalidArgumentError):
            search_rise_set(Body.EARTH, OBSERVER, RiseSetDirection.RISE, Instant.make(2020, 1, 1),
                            1.0)
        with self.assertRaises(InvalidArgumentError):
            search_hour_angle(Body.SUN, OBSERVER, 24.0, Instant.make(2020, 1, 1))
        with self.assertRaises(InvalidArgumentError):
            search_rise_set(Body.SUN, OBSERVER, RiseSetDirection.RISE, Instant.make(2020, 1, 1),
                            0.0)


if __name__ == '__main__':
    unittest.main()
