#!/usr/bin/python3

import unittest

from astrosearch.astrotime import Instant
from astrosearch.errors import InvalidArgumentError
from astrosearch.frames import (Observer, Refraction, earth_tilt, ecliptic_from_equatorial,
                                horizon, horizon_from_vector, inverse_refraction_angle,
                                mean_obliquity, refraction_angle, rotation_ecl_eqd,
                                rotation_ecl_eqj, rotation_ecl_hor, rotation_eqd_ecl,
                                rotation_eqd_eqj, rotation_eqd_hor, rotation_eqj_ecl,
                                rotation_eqj_eqd, rotation_eqj_hor, rotation_hor_ecl,
                                rotation_hor_eqd, rotation_hor_eqj, sidereal_time,
                                vector_from_horizon)
from astrosearch.vectors import (Spherical, Vector, combine_rotation, equator_from_vector,
                                 inverse_rotation, rotate_vector, vector_from_sphere)

# pylint: disable=missing-function-docstring

def deg_min_sec(degrees, minutes, seconds):
    assert(degrees >= 0 and minutes >= 0 and seconds >= 0)
    return degrees + minutes/60.0 + seconds/3600.0

def hr_min_sec(hours, minutes, seconds):
    return hours + minutes/60.0 + seconds/3600.0

SAN_FRANCISCO = Observer(37.7667, -122.4167)

def all_rotations(time, observer):
    """Returns every rotation between the frames, keyed by (from, to)."""
    return {
        ('EQJ', 'EQD'): rotation_eqj_eqd(time),
        ('EQD', 'EQJ'): rotation_eqd_eqj(time),
        ('EQJ', 'ECL'): rotation_eqj_ecl(),
        ('ECL', 'EQJ'): rotation_ecl_eqj(),
        ('EQJ', 'HOR'): rotation_eqj_hor(time, observer),
        ('HOR', 'EQJ'): rotation_hor_eqj(time, observer),
        ('EQD', 'ECL'): rotation_eqd_ecl(time),
        ('ECL', 'EQD'): rotation_ecl_eqd(time),
        ('EQD', 'HOR'): rotation_eqd_hor(time, observer),
        ('HOR', 'EQD'): rotation_hor_eqd(time, observer),
        ('ECL', 'HOR'): rotation_ecl_hor(time, observer),
        ('HOR', 'ECL'): rotation_hor_ecl(time, observer),
    }


class TestFrames(unittest.TestCase):
    """Unit tests covering the frames module."""

    def assertMatrixClose(self, actual, expected, tolerance):
        for actual_row, expected_row in zip(actual.rows, expected.rows):
            for actual_value, expected_value in zip(actual_row, expected_row):
                self.assertLessEqual(abs(actual_value - expected_value), tolerance)

    def assertVectorClose(self, actual, expected, tolerance):
        self.assertLessEqual((actual - expected).length(), tolerance)

    def test_ecliptic_to_equatorial(self):
        # Example from pp95.
        ecliptic = vector_from_sphere(Spherical(6.684170, 113.215630, 1.0))
        equatorial = equator_from_vector(rotate_vector(rotation_ecl_eqj(), ecliptic))
        self.assertAlmostEqual(equatorial.ra * 15.0, 116.328942507, places=6)
        self.assertAlmostEqual(equatorial.dec, 28.026183126, places=6)

        ecliptic = ecliptic_from_equatorial(equatorial.vec)
        self.assertAlmostEqual(ecliptic.elat, 6.684170, places=9)
        self.assertAlmostEqual(ecliptic.elon, 113.215630, places=9)

    def test_obliquity_and_nutation(self):
        # Example of nutation from pp148, with tolerances allowing for the newer IAU models.
        time = Instant.from_terrestrial(2446895.5 - 2451545.0)
        self.assertAlmostEqual(mean_obliquity(time.tt), deg_min_sec(23, 26, 27.407), places=4)
        tilt = earth_tilt(time)
        self.assertAlmostEqual(tilt.dpsi, -3.788, delta=0.3)
        self.assertAlmostEqual(tilt.deps, 9.443, delta=0.2)
        self.assertAlmostEqual(tilt.tobl, deg_min_sec(23, 26, 36.850), places=4)

    def test_greenwich_sidereal_time(self):
        # Example from pp88
        time = Instant(2446895.5 - 2451545.0)
        self.assertAlmostEqual(sidereal_time(time), hr_min_sec(13, 10, 46.1351), places=4)
        # Example from pp89
        time = time.add_days(hr_min_sec(19, 21, 0) / 24.0)
        self.assertAlmostEqual(sidereal_time(time), hr_min_sec(8, 34, 56.853), places=4)

    def test_rotation_round_trips(self):
        time = Instant.make(2021, 3, 14, 8, 30)
        vec = Vector(0.3, -0.5, 0.8)
        for (source, target), rotation in all_rotations(time, SAN_FRANCISCO).items():
            with self.subTest(source=source, target=target):
                result = rotate_vector(inverse_rotation(rotation), rotate_vector(rotation, vec))
                self.assertVectorClose(result, vec, 1.0e-14)
                # The separately built reverse rotation must undo this one too.
                reverse = all_rotations(time, SAN_FRANCISCO)[(target, source)]
                result = rotate_vector(reverse, rotate_vector(rotation, vec))
                self.assertVectorClose(result, vec, 1.0e-14)

    def test_rotation_triangles(self):
        # Going through any intermediate frame must agree with the direct conversion.
        time = Instant.make(1995, 8, 1, 22)
        rotations = all_rotations(time, SAN_FRANCISCO)
        frames = ('EQJ', 'EQD', 'ECL', 'HOR')
        for a in frames:
            for b in frames:
                for c in frames:
                    if len({a, b, c}) < 3:
                        continue
                    with self.subTest(path=(a, b, c)):
                        combined = combine_rotation(rotations[(a, b)], rotations[(b, c)])
                        self.assertMatrixClose(combined, rotations[(a, c)], 2.0e-15)

    def test_precession_drift(self):
        # Over 50 years precession moves a star at 0h/0d by about 46"/yr in RA and 20"/yr in dec.
        time = Instant.make(2050, 1, 1, 12)
        equatorial = equator_from_vector(rotate_vector(rotation_eqj_eqd(time),
                                                       Vector(1.0, 0.0, 0.0)))
        self.assertAlmostEqual(equatorial.ra * 15.0 * 3600.0 / 50.0, 46.1, delta=1.0)
        self.assertAlmostEqual(equatorial.dec * 3600.0 / 50.0, 20.0, delta=1.0)

    def test_horizon_matches_rotation(self):
        time = Instant.make(2020, 7, 2, 20)
        ra, dec = 7.5, 20.0
        hor = horizon(time, SAN_FRANCISCO, ra, dec, Refraction.NONE)
        eqd = vector_from_sphere(Spherical(dec, ra * 15.0, 1.0))
        sphere = horizon_from_vector(rotate_vector(rotation_eqd_hor(time, SAN_FRANCISCO), eqd),
                                     Refraction.NONE)
        self.assertAlmostEqual(sphere.lat, hor.altitude, places=9)
        self.assertAlmostEqual(sphere.lon, hor.azimuth, places=9)
        self.assertAlmostEqual(hor.ra, ra, places=9)
        self.assertAlmostEqual(hor.dec, dec, places=9)

    def test_horizon_refraction(self):
        time = Instant.make(2020, 7, 2, 20)
        plain = horizon(time, SAN_FRANCISCO, 7.5, 20.0, Refraction.NONE)
        bent = horizon(time, SAN_FRANCISCO, 7.5, 20.0, Refraction.NORMAL)
        self.assertAlmostEqual(bent.azimuth, plain.azimuth, places=9)
        self.assertAlmostEqual(bent.altitude - plain.altitude,
                               refraction_angle(Refraction.NORMAL, plain.altitude), places=9)

    def test_horizon_vector_round_trip(self):
        sphere = Spherical(30.0, 150.0, 1.0)
        vec = vector_from_horizon(sphere, Refraction.JPLHOR)
        result = horizon_from_vector(vec, Refraction.JPLHOR)
        self.assertAlmostEqual(result.lat, 30.0, places=10)
        self.assertAlmostEqual(result.lon, 150.0, places=10)
        # The true direction is below the apparent one.
        self.assertLess(vec.z, 0.5)

    def test_refraction_round_trip(self):
        for refraction in (Refraction.NORMAL, Refraction.JPLHOR):
            for step in range(721):
                altitude = -90.0 + step / 4.0
                bent = altitude + refraction_angle(refraction, altitude)
                corrected = bent + inverse_refraction_angle(refraction, bent)
                self.assertLessEqual(abs(corrected - altitude), 2.0e-14)

    def test_refraction_values(self):
        self.assertEqual(refraction_angle(Refraction.NONE, 10.0), 0.0)
        self.assertEqual(refraction_angle(Refraction.NORMAL, 95.0), 0.0)
        # Roughly half a degree at the horizon, nothing at the zenith.
        self.assertAlmostEqual(refraction_angle(Refraction.NORMAL, 0.0), 0.48, delta=0.02)
        self.assertAlmostEqual(refraction_angle(Refraction.NORMAL, 90.0), 0.0, places=4)
        # The normal model fades out below the horizon, the JPL one does not.
        self.assertLess(refraction_angle(Refraction.NORMAL, -45.0),
                        refraction_angle(Refraction.JPLHOR, -45.0))

    def test_observer_validation(self):
        with self.assertRaises(InvalidArgumentError):
            Observer(91.0, 0.0)
        with self.assertRaises(InvalidArgumentError):
            Observer(0.0, float('nan'))


if __name__ == '__main__':
    unittest.main()
