"""Periodic series for the geometric positions of the Earth and the Moon.

The Earth uses the truncated VSOP87 theory (heliocentric, mean ecliptic and equinox of date) and
the Moon uses the ELP-2000/82 based series in chapter 47 of "Astronomical Algorithms" by Jean
Meeus (geocentric, mean ecliptic and equinox of date). Both take a terrestrial time in days since
J2000."""

#==============================================================
# Copyright Jody M Sankey 2020
#
# This software may be modified and distributed under the terms
# of the MIT license. See the LICENCE.md file for details.
#==============================================================
# PublicPermissions: True
#==============================================================

from math import cos, radians, sin, tau as TWO_PI

# Many of the names follow the book and the coefficient tables are aligned in columns.
# pylint: disable=invalid-name

# Coefficients typed in originally by PJ Naughter (www.naughter.com).

# Earth: rows of (A, B, C) for terms A * cos(B + C * tau), tau in Julian millennia.

L0 = (
    (175347046, 0, 0),
    (3341656, 4.6692568, 6283.0758500),
    (34894, 4.62610, 12566.15170),
    (3497, 2.7441, 5753.3849),
    (3418, 2.8289, 3.5231),
    (3136, 3.6277, 77713.7715),
    (2676, 4.4181, 7860.4194),
    (2343, 6.1352, 3930.2097),
    (1324, 0.7425, 11506.7698),
    (1273, 2.0371, 529.6910),
    (1199, 1.1096, 1577.3435),
    (990, 5.233, 5884.927),
    (902, 2.045, 26.298),
    (857, 3.508, 398.149),
    (780, 1.179, 5223.694),
    (753, 2.533, 5507.553),
    (505, 4.583, 18849.228),
    (492, 4.205, 775.523),
    (357, 2.920, 0.067),
    (317, 5.849, 11790.629),
    (284, 1.899, 796.288),
    (271, 0.315, 10977.079),
    (243, 0.345, 5486.778),
    (206, 4.806, 2544.314),
    (205, 1.869, 5573.143),
    (202, 2.458, 6069.777),
    (156, 0.833, 213.299),
    (132, 3.411, 2942.463),
    (126, 1.083, 20.775),
    (115, 0.645, 0.980),
    (103, 0.636, 4694.003),
    (102, 0.976, 15720.839),
    (102, 4.267, 7.114),
    (99, 6.21, 2146.17),
    (98, 0.68, 155.42),
    (86, 5.98, 161000.69),
    (85, 1.30, 6275.96),
    (85, 3.67, 71430.70),
    (80, 1.81, 17260.15),
    (79, 3.04, 12036.46),
    (75, 1.76, 5088.63),
    (74, 3.50, 3154.69),
    (74, 4.68, 801.82),
    (70, 0.83, 9437.76),
    (62, 3.98, 8827.39),
    (61, 1.82, 7084.90),
    (57, 2.78, 6286.60),
    (56, 4.39, 14143.50),
    (56, 3.47, 6279.55),
    (52, 0.19, 12139.55),
    (52, 1.33, 1748.02),
    (51, 0.28, 5856.48),
    (49, 0.49, 1194.45),
    (41, 5.37, 8429.24),
    (41, 2.40, 19651.05),
    (39, 6.17, 10447.39),
    (37, 6.04, 10213.29),
    (37, 2.57, 1059.38),
    (36, 1.71, 2352.87),
    (36, 1.78, 6812.77),
    (33, 0.59, 17789.85),
    (30, 0.44, 83996.85),
    (30, 2.74, 1349.87),
    (25, 3.16, 4690.48))

L1 = (
    (628331966747.0, 0, 0),
    (206059, 2.678235, 6283.075850),
    (4303, 2.6351, 12566.1517),
    (425, 1.590, 3.523),
    (119, 5.796, 26.298),
    (109, 2.966, 1577.344),
    (93, 2.59, 18849.23),
    (72, 1.14, 529.69),
    (68, 1.87, 398.15),
    (67, 4.41, 5507.55),
    (59, 2.89, 5223.69),
    (56, 2.17, 155.42),
    (45, 0.40, 796.30),
    (36, 0.47, 775.52),
    (29, 2.65, 7.11),
    (21, 5.43, 0.98),
    (19, 1.85, 5486.78),
    (19, 4.97, 213.30),
    (17, 2.99, 6275.96),
    (16, 0.03, 2544.31),
    (16, 1.43, 2146.17),
    (15, 1.21, 10977.08),
    (12, 2.83, 1748.02),
    (12, 3.26, 5088.63),
    (12, 5.27, 1194.45),
    (12, 2.08, 4694.00),
    (11, 0.77, 553.57),
    (10, 1.30, 6286.60),
    (10, 4.24, 1349.87),
    (9, 2.70, 242.73),
    (9, 5.64, 951.72),
    (8, 5.30, 2352.87),
    (6, 2.65, 9437.76),
    (6, 4.67, 4690.48))

L2 = (
    (52919, 0, 0),
    (8720, 1.0721, 6283.0758),
    (309, 0.867, 12566.152),
    (27, 0.05, 3.52),
    (16, 5.19, 26.30),
    (16, 3.68, 155.42),
    (10, 0.76, 18849.23),
    (9, 2.06, 77713.77),
    (7, 0.83, 775.52),
    (5, 4.66, 1577.34),
    (4, 1.03, 7.11),
    (4, 3.44, 5573.14),
    (3, 5.14, 796.30),
    (3, 6.05, 5507.55),
    (3, 1.19, 242.73),
    (3, 6.12, 529.69),
    (3, 0.31, 398.15),
    (3, 2.28, 553.57),
    (2, 4.38, 5223.69),
    (2, 3.75, 0.98))

L3 = (
    (289, 5.844, 6283.076),
    (35, 0, 0),
    (17, 5.49, 12566.15),
    (3, 5.20, 155.42),
    (1, 4.72, 3.52),
    (1, 5.30, 18849.23),
    (1, 5.97, 242.73))

L4 = (
    (114, 3.142, 0),
    (8, 4.13, 6283.08),
    (1, 3.84, 12566.15))

L5 = (
    (1, 3.14, 0),)

B0 = (
    (280, 3.199, 84334.662),
    (102, 5.422, 5507.553),
    (80, 3.88, 5223.69),
    (44, 3.70, 2352.87),
    (32, 4.00, 1577.34))

B1 = (
    (9, 3.90, 5507.55),
    (6, 1.73, 5223.69))

B2 = (
    (22378, 3.38509, 10213.28555),
    (282, 0, 0),
    (173, 5.256, 20426.571),
    (27, 3.87, 30639.86))

B3 = (
    (647, 4.992, 10213.286),
    (20, 3.14, 0),
    (6, 0.77, 20426.57),
    (3, 5.44, 30639.86))

B4 = (
    (14, 0.32, 10213.29),)

R0 = (
    (100013989, 0, 0),
    (1670700, 3.0984635, 6283.0758500),
    (13956, 3.05525, 12566.15170),
    (3084, 5.1985, 77713.7715),
    (1628, 1.1739, 5753.3849),
    (1576, 2.8469, 7860.4194),
    (925, 5.453, 11506.770),
    (542, 4.564, 3930.210),
    (472, 3.661, 5884.927),
    (346, 0.964, 5507.553),
    (329, 5.900, 5223.694),
    (307, 0.299, 5573.143),
    (243, 4.273, 11790.629),
    (212, 5.847, 1577.344),
    (186, 5.022, 10977.079),
    (175, 3.012, 18849.228),
    (110, 5.055, 5486.778),
    (98, 0.89, 6069.78),
    (86, 5.69, 15720.84),
    (86, 1.27, 161000.69),
    (65, 0.27, 17260.15),
    (63, 0.92, 529.69),
    (57, 2.01, 83996.85),
    (56, 5.24, 71430.70),
    (49, 3.25, 2544.31),
    (47, 2.58, 775.52),
    (45, 5.54, 9437.76),
    (43, 6.01, 6275.96),
    (39, 5.36, 4694.00),
    (38, 2.39, 8827.39),
    (37, 0.83, 19651.05),
    (37, 4.90, 12139.55),
    (36, 1.67, 12036.46),
    (35, 1.84, 2942.46),
    (33, 0.24, 7084.90),
    (32, 0.18, 5088.63),
    (32, 1.78, 398.15),
    (28, 1.21, 6286.60),
    (28, 1.90, 6279.55),
    (26, 4.59, 10447.39)
)

R1 = (
    (103019, 1.107490, 6283.075850),
    (1721, 1.0644, 12566.1517),
    (702, 3.142, 0),
    (32, 1.02, 18849.23),
    (31, 2.84, 5507.55),
    (25, 1.32, 5223.69),
    (18, 1.42, 1577.34),
    (10, 5.91, 10977.08),
    (9, 1.42, 6275.96),
    (9, 0.27, 5486.78))

R2 = (
    (4359, 5.7846, 6283.0758),
    (124, 5.579, 12566.152),
    (12, 3.14, 0),
    (9, 3.63, 77713.77),
    (6, 1.87, 5573.14),
    (3, 5.47, 18849.23))

R3 = (
    (145, 4.273, 6283.076),
    (7, 3.92, 12566.15))

R4 = (
    (4, 2.56, 6283.08),)

EARTH_LONGITUDE = (L0, L1, L2, L3, L4, L5)
EARTH_LATITUDE = (B0, B1, B2, B3, B4)
EARTH_DISTANCE = (R0, R1, R2, R3, R4)

# Moon: multiples of (D, M, M', F) and the matching sine/cosine coefficients.

MOON_ARGUMENTS_LR = (
    (0, 0, 1, 0),
    (2, 0, -1, 0),
    (2, 0, 0, 0),
    (0, 0, 2, 0),
    (0, 1, 0, 0),
    (0, 0, 0, 2),
    (2, 0, -2, 0),
    (2, -1, -1, 0),
    (2, 0, 1, 0),
    (2, -1, 0, 0),
    (0, 1, -1, 0),
    (1, 0, 0, 0),
    (0, 1, 1, 0),
    (2, 0, 0, -2),
    (0, 0, 1, 2),
    (0, 0, 1, -2),
    (4, 0, -1, 0),
    (0, 0, 3, 0),
    (4, 0, -2, 0),
    (2, 1, -1, 0),
    (2, 1, 0, 0),
    (1, 0, -1, 0),
    (1, 1, 0, 0),
    (2, -1, 1, 0),
    (2, 0, 2, 0),
    (4, 0, 0, 0),
    (2, 0, -3, 0),
    (0, 1, -2, 0),
    (2, 0, -1, 2),
    (2, -1, -2, 0),
    (1, 0, 1, 0),
    (2, -2, 0, 0),
    (0, 1, 2, 0),
    (0, 2, 0, 0),
    (2, -2, -1, 0),
    (2, 0, 1, -2),
    (2, 0, 0, 2),
    (4, -1, -1, 0),
    (0, 0, 2, 2),
    (3, 0, -1, 0),
    (2, 1, 1, 0),
    (4, -1, -2, 0),
    (0, 2, -1, 0),
    (2, 2, -1, 0),
    (2, 1, -2, 0),
    (2, -1, 0, -2),
    (4, 0, 1, 0),
    (0, 0, 4, 0),
    (4, -1, 0, 0),
    (1, 0, -2, 0),
    (2, 1, 0, -2),
    (0, 0, 2, -2),
    (1, 1, 1, 0),
    (3, 0, -2, 0),
    (4, 0, -3, 0),
    (2, -1, 2, 0),
    (0, 2, 1, 0),
    (1, 1, -1, 0),
    (2, 0, 3, 0),
    (2, 0, -1, -2)
)

MOON_COEFFICIENTS_LR = (
    (6288774, -20905355),
    (1274027, -3699111),
    (658314, -2955968),
    (213618, -569925),
    (-185116, 48888),
    (-114332, -3149),
    (58793, 246158),
    (57066, -152138),
    (53322, -170733),
    (45758, -204586),
    (-40923, -129620),
    (-34720, 108743),
    (-30383, 104755),
    (15327, 10321),
    (-12528, 0),
    (10980, 79661),
    (10675, -34782),
    (10034, -23210),
    (8548, -21636),
    (-7888, 24208),
    (-6766, 30824),
    (-5163, -8379),
    (4987, -16675),
    (4036, -12831),
    (3994, -10445),
    (3861, -11650),
    (3665, 14403),
    (-2689, -7003),
    (-2602, 0),
    (2390, 10056),
    (-2348, 6322),
    (2236, -9884),
    (-2120, 5751),
    (-2069, 0),
    (2048, -4950),
    (-1773, 4130),
    (-1595, 0),
    (1215, -3958),
    (-1110, 0),
    (-892, 3258),
    (-810, 2616),
    (759, -1897),
    (-713, -2117),
    (-700, 2354),
    (691, 0),
    (596, 0),
    (549, -1423),
    (537, -1117),
    (520, -1571),
    (-487, -1739),
    (-399, 0),
    (-381, -4421),
    (351, 0),
    (-340, 0),
    (330, 0) ,
    (327, 0),
    (-323, 1165),
    (299, 0),
    (294, 0),
    (0, 8752)
)

MOON_ARGUMENTS_B = (
    (0, 0, 0, 1),
    (0, 0, 1, 1),
    (0, 0, 1, -1),
    (2, 0, 0, -1),
    (2, 0, -1, 1),
    (2, 0, -1, -1),
    (2, 0, 0, 1),
    (0, 0, 2, 1),
    (2, 0, 1, -1),
    (0, 0, 2, -1),
    (2, -1, 0, -1),
    (2, 0, -2, -1),
    (2, 0, 1, 1),
    (2, 1, 0, -1),
    (2, -1, -1, 1),
    (2, -1, 0, 1),
    (2, -1, -1, -1),
    (0, 1, -1, -1),
    (4, 0, -1, -1) ,
    (0, 1, 0, 1),
    (0, 0, 0, 3),
    (0, 1, -1, 1),
    (1, 0, 0, 1),
    (0, 1, 1, 1,),
    (0, 1, 1, -1),
    (0, 1, 0, -1),
    (1, 0, 0, -1),
    (0, 0, 3, 1),
    (4, 0, 0, -1),
    (4, 0, -1, 1,),
    (0, 0, 1, -3),
    (4, 0, -2, 1),
    (2, 0, 0, -3),
    (2, 0, 2, -1),
    (2, -1, 1, -1),
    (2, 0, -2, 1),
    (0, 0, 3, -1),
    (2, 0, 2, 1),
    (2, 0, -3, -1),
    (2, 1, -1, 1),
    (2, 1, 0, 1),
    (4, 0, 0, 1),
    (2, -1, 1, 1),
    (2, -2, 0, -1),
    (0, 0, 1, 3),
    (2, 1, 1, -1),
    (1, 1, 0, -1),
    (1, 1, 0, 1),
    (0, 1, -2, -1),
    (2, 1, -1, -1),
    (1, 0, 1, 1),
    (2, -1, -2, -1),
    (0, 1, 2, 1),
    (4, 0, -2, -1),
    (4, -1, -1, -1),
    (1, 0, 1, -1),
    (4, 0, 1, -1),
    (1, 0, -1, -1),
    (4, -1, 0, -1),
    (2, -2, 0, 1),
)

MOON_COEFFICIENTS_B = (
    5128122, 280602, 277693, 173237, 55413, 46271, 32573, 17198, 9266, 8822,
    8216, 4324, 4200, -3359, 2463, 2211, 2065, -1870, 1828, -1794,
    -1749, -1565, -1491, -1475, -1410, -1344, -1335, 1107, 1021, 833,
    777, 671, 607, 596, 491, -451, 439, 422, 421, -366,
    -351, 331, 315, 302, -283, -229, 223, 223, -220, -220,
    -185, 181, -177, 176, 166, -164, 132, -119, 115, 107,
)


def _vsop_sum(series, tau):
    """Sums one VSOP87 coordinate, multiplying each order's series by the power of tau."""
    total = 0.0
    for order, terms in enumerate(series):
        total += sum(a * cos(b + c * tau) for a, b, c in terms) * tau**order
    return total / 1e8


def earth_heliocentric(tt: float):
    """Returns the Earth's heliocentric (longitude, latitude, radius) in radians and astronomical
    units, referred to the mean ecliptic and equinox of date."""
    # pp218 Astronomical Algorithms
    tau = tt / 365250.0
    return (_vsop_sum(EARTH_LONGITUDE, tau) % TWO_PI,
            _vsop_sum(EARTH_LATITUDE, tau),
            _vsop_sum(EARTH_DISTANCE, tau))


def moon_geocentric(tt: float):
    """Returns the Moon's geocentric (longitude, latitude, distance) in radians and kilometers,
    referred to the mean ecliptic and equinox of date."""
    # pp338 Astronomical Algorithms
    T = tt / 36525.0
    # Moon's mean longitude.
    Ldash = radians(218.3164477 + 481267.88123421 * T - 0.0015786 * T**2 + T**3 / 538841.0
                    - T**4 / 65194000.0) % TWO_PI
    # Mean elongation of the moon.
    D = radians(297.8501921 + 445267.1114034 * T - 0.0018819 * T**2 + T**3 / 545868.0
                - T**4 / 113065000.0) % TWO_PI
    # Sun's mean anomaly
    M = radians(357.5291092 + 35999.0502909 * T - 0.0001536 * T**2
                + T**3 / 24490000.0) % TWO_PI
    # Moon's mean anomaly
    Mdash = radians(134.9633964 + 477198.8675055 * T + 0.0087414 * T**2
                    + T**3 / 69699.0 - T**4 / 14712000.0) % TWO_PI
    # Moon's argument of latitude
    F = radians(93.2720950 + 483202.0175233 * T - 0.0036539 * T**2
                - T**3 / 3526000.0 + T**4 / 863310000.0) % TWO_PI
    # Eccentricity of earth's orbit
    E = 1.0 - 0.002516 * T - 0.0000074 * T**2

    sigmaL = sigmaR = 0.0
    for (d, m, mdash, f), (coef_l, coef_r) in zip(MOON_ARGUMENTS_LR, MOON_COEFFICIENTS_LR):
        arg = d * D + m * M + mdash * Mdash + f * F
        coef_fac = E**abs(m)
        sigmaL += coef_fac * coef_l * sin(arg)
        sigmaR += coef_fac * coef_r * cos(arg)

    sigmaB = 0.0
    for (d, m, mdash, f), coef_b in zip(MOON_ARGUMENTS_B, MOON_COEFFICIENTS_B):
        arg = d * D + m * M + mdash * Mdash + f * F
        sigmaB += E**abs(m) * coef_b * sin(arg)

    # Additive terms for Venus, Jupiter and the flattening of the Earth.
    a1 = radians(119.75 + 131.849 * T) % TWO_PI
    a2 = radians(53.09 + 479264.290 * T) % TWO_PI
    a3 = radians(313.45 + 481266.484 * T) % TWO_PI
    sigmaL += 3958.0 * sin(a1) + 1962.0 * sin(Ldash - F) + 318.0 * sin(a2)
    sigmaB += (-2235.0 * sin(Ldash) + 382.0 * sin(a3) + 175.0 * sin(a1 - F)
               + 175.0 * sin(a1 + F) + 127.0 * sin(Ldash - Mdash) - 115.0 * sin(Ldash + Mdash))

    longitude = (Ldash + radians(sigmaL / 1000000.0)) % TWO_PI
    latitude = radians(sigmaB / 1000000.0)
    return (longitude, latitude, 385000.56 + sigmaR / 1000.0)
