#!/usr/bin/python3

import unittest
from itertools import islice

from astrosearch.apsis import (ApsisKind, lunar_apsides, next_lunar_apsis, next_planet_apsis,
                               search_lunar_apsis, search_planet_apsis)
from astrosearch.astrotime import Instant
from astrosearch.errors import InvalidArgumentError
from astrosearch.positions import Body

# pylint: disable=missing-function-docstring

def days_apart(actual, expected):
    return abs(actual - expected)


class TestApsis(unittest.TestCase):
    """Unit tests covering the apsis module."""

    def test_lunar_apsides(self):
        perigee = search_lunar_apsis(Instant.make(2001, 1, 1))
        self.assertEqual(perigee.kind, ApsisKind.PERICENTER)
        self.assertLess(days_apart(perigee.time, Instant.make(2001, 1, 10, 8, 59)), 1.0 / 24.0)
        self.assertAlmostEqual(perigee.dist_km, 357132.0, delta=50.0)

        apogee = next_lunar_apsis(perigee)
        self.assertEqual(apogee.kind, ApsisKind.APOCENTER)
        self.assertLess(days_apart(apogee.time, Instant.make(2001, 1, 24, 19, 2)), 1.0 / 24.0)
        self.assertAlmostEqual(apogee.dist_km, 406565.0, delta=50.0)

    def test_lunar_apsis_stream(self):
        apsides = list(islice(lunar_apsides(Instant.make(2001, 1, 1)), 6))
        for previous, following in zip(apsides, apsides[1:]):
            self.assertNotEqual(previous.kind, following.kind)
            self.assertGreater(following.time - previous.time, 11.0)
            self.assertLess(following.time - previous.time, 18.0)
            if following.kind == ApsisKind.PERICENTER:
                self.assertLess(following.dist_km, 371000.0)
            else:
                self.assertGreater(following.dist_km, 403000.0)

    def test_earth_apsides(self):
        perihelion = search_planet_apsis(Body.EARTH, Instant.make(2019, 12, 1))
        self.assertEqual(perihelion.kind, ApsisKind.PERICENTER)
        self.assertLess(days_apart(perihelion.time, Instant.make(2020, 1, 5, 7, 48)), 1.5)
        self.assertAlmostEqual(perihelion.dist_au, 0.983243, places=4)

        aphelion = next_planet_apsis(Body.EARTH, perihelion)
        self.assertEqual(aphelion.kind, ApsisKind.APOCENTER)
        self.assertLess(days_apart(aphelion.time, Instant.make(2020, 7, 4, 11, 35)), 2.0)
        self.assertAlmostEqual(aphelion.dist_au, 1.016694, places=4)

    def test_mars_perihelion(self):
        perihelion = search_planet_apsis(Body.MARS, Instant.make(2018, 1, 1))
        self.assertEqual(perihelion.kind, ApsisKind.PERICENTER)
        self.assertLess(days_apart(perihelion.time, Instant.make(2018, 9, 16)), 5.0)
        self.assertAlmostEqual(perihelion.dist_au, 1.3814, delta=0.003)

    def test_invalid_body(self):
        with self.assertRaises(InvalidArgumentError):
            search_planet_apsis(Body.MOON, Instant.make(2020, 1, 1))


if __name__ == '__main__':
    unittest.main()
