#!/usr/bin/python3

import unittest
from math import degrees

from astrosearch import series
from astrosearch.astrotime import Instant
from astrosearch.errors import InvalidArgumentError
from astrosearch.frames import KM_PER_AU, Observer
from astrosearch.illumination import illumination
from astrosearch.observables import (Visibility, angle_from_sun, elongation, longitude_offset,
                                     moon_phase, normalize_longitude, pair_longitude)
from astrosearch.positions import (Body, equator, geo_moon, geo_vector, helio_vector,
                                   moon_ecliptic_latitude, orbital_period, sun_position,
                                   synodic_period)
from astrosearch.vectors import angle_between

# pylint: disable=missing-function-docstring

def deg_min_sec(degrees_, minutes, seconds):
    assert(degrees_ >= 0 and minutes >= 0 and seconds >= 0)
    return degrees_ + minutes/60.0 + seconds/3600.0


class TestSeries(unittest.TestCase):
    """Unit tests covering the series module."""

    def test_earth_heliocentric(self):
        # Example from pp219.
        lon, lat, dist = series.earth_heliocentric(2448908.5 - 2451545.0)
        self.assertAlmostEqual(degrees(lon), 19.907372, places=5)
        self.assertAlmostEqual(degrees(lat), -0.000179, places=5)
        self.assertAlmostEqual(dist, 0.99760775, places=7)

    def test_moon_geocentric(self):
        # Example from pp343.
        lon, lat, dist = series.moon_geocentric(2448724.5 - 2451545.0)
        self.assertAlmostEqual(degrees(lon), 133.162655, places=4)
        self.assertAlmostEqual(degrees(lat), -deg_min_sec(3, 13, 44.855109), places=6)
        self.assertAlmostEqual(dist, 368409.6848161265, places=3)


class TestPositions(unittest.TestCase):
    """Unit tests covering the positions module."""

    def test_sun_position(self):
        # Example from pp169.
        time = Instant.from_terrestrial(2448908.5 - 2451545.0)
        ecliptic = sun_position(time)
        self.assertAlmostEqual(ecliptic.elon, deg_min_sec(199, 54, 21.818), places=3)
        self.assertAlmostEqual(ecliptic.elat, deg_min_sec(0, 0, 0.62), places=4)

    def test_moon_vector(self):
        time = Instant.from_terrestrial(2448724.5 - 2451545.0)
        self.assertAlmostEqual(geo_moon(time).length() * KM_PER_AU, 368409.6848161265, places=3)
        self.assertAlmostEqual(moon_ecliptic_latitude(time), -deg_min_sec(3, 13, 44.855109),
                               places=6)

    def test_moon_equator(self):
        # Example from pp343, which uses the true equator of date.
        time = Instant.from_terrestrial(2448724.5 - 2451545.0)
        equatorial = equator(Body.MOON, time)
        self.assertAlmostEqual(equatorial.ra * 15.0, 134.688470, delta=0.003)
        self.assertAlmostEqual(equatorial.dec, 13.768368, delta=0.003)

    def test_planet_distances(self):
        time = Instant.make(2020, 1, 1)
        self.assertAlmostEqual(helio_vector(Body.MERCURY, time).length(), 0.39, delta=0.09)
        self.assertAlmostEqual(helio_vector(Body.VENUS, time).length(), 0.72, delta=0.01)
        self.assertAlmostEqual(helio_vector(Body.JUPITER, time).length(), 5.2, delta=0.3)
        self.assertAlmostEqual(helio_vector(Body.NEPTUNE, time).length(), 29.9, delta=0.5)
        self.assertEqual(helio_vector(Body.SUN, time).length(), 0.0)
        self.assertEqual(geo_vector(Body.EARTH, time).length(), 0.0)

    def test_topocentric_parallax(self):
        # The Moon is displaced by up to a degree for an observer on the surface.
        time = Instant.make(2020, 1, 1)
        geocentric = equator(Body.MOON, time)
        topocentric = equator(Body.MOON, time, Observer(0.0, 0.0))
        shift = angle_between(geocentric.vec, topocentric.vec)
        self.assertGreater(shift, 0.1)
        self.assertLess(shift, 1.0)

    def test_periods(self):
        self.assertAlmostEqual(orbital_period(Body.EARTH), 365.256, delta=0.01)
        self.assertAlmostEqual(synodic_period(Body.MARS), 779.9, delta=0.5)
        self.assertAlmostEqual(synodic_period(Body.VENUS), 583.9, delta=0.5)
        self.assertAlmostEqual(synodic_period(Body.MOON), 29.530588)
        with self.assertRaises(InvalidArgumentError):
            orbital_period(Body.SUN)
        with self.assertRaises(InvalidArgumentError):
            synodic_period(Body.EARTH)


class TestObservables(unittest.TestCase):
    """Unit tests covering the observables module."""

    def test_longitude_wrapping(self):
        self.assertAlmostEqual(longitude_offset(190.0), -170.0)
        self.assertAlmostEqual(longitude_offset(-190.0), 170.0)
        self.assertAlmostEqual(longitude_offset(180.0), 180.0)
        self.assertAlmostEqual(longitude_offset(-180.0), 180.0)
        self.assertAlmostEqual(normalize_longitude(-10.0), 350.0)
        self.assertAlmostEqual(normalize_longitude(725.0), 5.0)

    def test_moon_phase(self):
        self.assertAlmostEqual(moon_phase(Instant.make(2019, 1, 21, 5, 16)), 180.0, delta=0.1)
        self.assertAlmostEqual(longitude_offset(moon_phase(Instant.make(2019, 1, 6, 1, 28))),
                               0.0, delta=0.1)

    def test_pair_longitude(self):
        time = Instant.make(2018, 7, 27, 5, 7)
        # Mars at opposition.
        self.assertAlmostEqual(pair_longitude(Body.MARS, Body.SUN, time), 180.0, delta=0.2)
        self.assertGreater(angle_from_sun(Body.MARS, time), 170.0)

    def test_elongation(self):
        info = elongation(Body.VENUS, Instant.make(2010, 8, 20, 3, 19))
        self.assertEqual(info.visibility, Visibility.EVENING)
        self.assertAlmostEqual(info.elongation, 46.0, delta=0.2)
        info = elongation(Body.MERCURY, Instant.make(2010, 1, 27, 5, 22))
        self.assertEqual(info.visibility, Visibility.MORNING)
        self.assertAlmostEqual(info.elongation, 24.8, delta=0.2)


class TestIllumination(unittest.TestCase):
    """Unit tests covering the illumination module."""

    def test_sun(self):
        info = illumination(Body.SUN, Instant.make(2020, 1, 5))
        self.assertAlmostEqual(info.mag, -26.7, delta=0.1)
        self.assertEqual(info.phase_angle, 0.0)
        self.assertEqual(info.phase_fraction, 1.0)
        self.assertEqual(info.helio_dist, 0.0)
        self.assertAlmostEqual(info.geo_dist, 0.9833, places=3)

    def test_full_moon(self):
        info = illumination(Body.MOON, Instant.make(2019, 1, 21, 5, 16))
        self.assertLess(info.phase_angle, 2.0)
        self.assertGreater(info.phase_fraction, 0.999)
        self.assertAlmostEqual(info.mag, -12.8, delta=0.4)

    def test_planets(self):
        time = Instant.make(2018, 6, 15)
        jupiter = illumination(Body.JUPITER, time)
        self.assertAlmostEqual(jupiter.mag, -2.3, delta=0.3)
        self.assertLess(jupiter.phase_angle, 12.0)
        saturn = illumination(Body.SATURN, time)
        self.assertGreater(abs(saturn.ring_tilt), 20.0)
        self.assertLess(abs(saturn.ring_tilt), 28.1)
        self.assertAlmostEqual(saturn.mag, 0.1, delta=0.4)
        self.assertEqual(jupiter.ring_tilt, 0.0)

    def test_earth_not_allowed(self):
        with self.assertRaises(InvalidArgumentError):
            illumination(Body.EARTH, Instant.make(2020, 1, 1))


if __name__ == '__main__':
    unittest.main()
