"""Cartesian vectors, spherical coordinates and rotation matrices.

Vectors do not record which frame they are expressed in, that is the responsibility of whichever
function produced them. Rotation matrices are stored row-major and applied to column vectors, so
rotate_vector(m, v)[i] = sum(m[i][j] * v[j])."""

#==============================================================
# Copyright Jody M Sankey 2020
#
# This software may be modified and distributed under the terms
# of the MIT license. See the LICENCE.md file for details.
#==============================================================
# PublicPermissions: True
#==============================================================

from dataclasses import dataclass
from math import acos, atan2, cos, degrees, isfinite, radians, sin, sqrt
from typing import Tuple

from .errors import InvalidArgumentError

Rows = Tuple[Tuple[float, float, float], Tuple[float, float, float], Tuple[float, float, float]]


@dataclass(frozen=True)
class Vector:
    """A cartesian vector, normally in astronomical units."""
    x: float
    y: float
    z: float

    def __post_init__(self):
        if not (isfinite(self.x) and isfinite(self.y) and isfinite(self.z)):
            raise InvalidArgumentError(f"Non-finite vector ({self.x}, {self.y}, {self.z})")

    def length(self) -> float:
        return sqrt(self.x**2 + self.y**2 + self.z**2)

    def dot(self, other: 'Vector') -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def __add__(self, other: 'Vector') -> 'Vector':
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: 'Vector') -> 'Vector':
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> 'Vector':
        return Vector(-self.x, -self.y, -self.z)

    def __mul__(self, scale: float) -> 'Vector':
        return Vector(scale * self.x, scale * self.y, scale * self.z)

    __rmul__ = __mul__


ZERO_VECTOR = Vector(0.0, 0.0, 0.0)


@dataclass(frozen=True)
class Spherical:
    """Spherical coordinates: latitude and longitude in degrees, distance in astronomical units."""
    lat: float
    lon: float
    dist: float


@dataclass(frozen=True)
class Equatorial:
    """Equatorial coordinates: right ascension in sidereal hours, declination in degrees,
    distance in astronomical units, plus the cartesian vector these were derived from."""
    ra: float
    dec: float
    dist: float
    vec: Vector


@dataclass(frozen=True)
class RotationMatrix:
    """A 3x3 orthonormal matrix converting vectors from one frame to another."""
    rows: Rows

    def __post_init__(self):
        if any(not isfinite(value) for row in self.rows for value in row):
            raise InvalidArgumentError(f"Non-finite rotation matrix {self.rows}")


def identity_matrix() -> RotationMatrix:
    return RotationMatrix(((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)))


def rotate_vector(rotation: RotationMatrix, vec: Vector) -> Vector:
    """Applies the rotation to a vector."""
    r = rotation.rows
    return Vector(
        r[0][0] * vec.x + r[0][1] * vec.y + r[0][2] * vec.z,
        r[1][0] * vec.x + r[1][1] * vec.y + r[1][2] * vec.z,
        r[2][0] * vec.x + r[2][1] * vec.y + r[2][2] * vec.z)


def inverse_rotation(rotation: RotationMatrix) -> RotationMatrix:
    """Returns the inverse of an orthonormal matrix, i.e. its transpose."""
    r = rotation.rows
    return RotationMatrix(tuple(tuple(r[j][i] for j in range(3)) for i in range(3)))


def combine_rotation(first: RotationMatrix, second: RotationMatrix) -> RotationMatrix:
    """Returns a single matrix equivalent to applying first and then second. Since matrices
    apply to column vectors this is the matrix product second * first."""
    a = first.rows
    b = second.rows
    return RotationMatrix(tuple(
        tuple(sum(b[i][k] * a[k][j] for k in range(3)) for j in range(3))
        for i in range(3)))


def pivot(rotation: RotationMatrix, axis: int, angle: float) -> RotationMatrix:
    """Returns the rotation followed by a counterclockwise rotation of angle degrees about the
    given axis (0=x, 1=y, 2=z), counterclockwise when viewed from the positive end of the axis."""
    if axis not in (0, 1, 2):
        raise InvalidArgumentError(f"Invalid axis {axis}")
    if not isfinite(angle):
        raise InvalidArgumentError(f"Non-finite angle {angle}")
    c = cos(radians(angle))
    s = sin(radians(angle))
    # i, j, k keep the right hand rule for whichever axis was chosen.
    i = (axis + 1) % 3
    j = (axis + 2) % 3
    k = axis
    turn = [[0.0] * 3 for _ in range(3)]
    turn[i][i] = c
    turn[i][j] = -s
    turn[j][i] = s
    turn[j][j] = c
    turn[k][k] = 1.0
    return combine_rotation(rotation, RotationMatrix(tuple(tuple(row) for row in turn)))


def angle_between(a: Vector, b: Vector) -> float:
    """Returns the angle between two vectors in degrees."""
    r = a.length() * b.length()
    if r < 1.0e-8:
        raise InvalidArgumentError("Cannot find the angle involving a zero length vector")
    dot = a.dot(b) / r
    if dot <= -1.0:
        return 180.0
    if dot >= 1.0:
        return 0.0
    return degrees(acos(dot))


def vector_from_sphere(sphere: Spherical) -> Vector:
    lat = radians(sphere.lat)
    lon = radians(sphere.lon)
    rcoslat = sphere.dist * cos(lat)
    return Vector(rcoslat * cos(lon), rcoslat * sin(lon), sphere.dist * sin(lat))


def sphere_from_vector(vec: Vector) -> Spherical:
    """Converts a vector to spherical coordinates with longitude in [0, 360)."""
    xyproj = vec.x**2 + vec.y**2
    dist = sqrt(xyproj + vec.z**2)
    if xyproj == 0.0:
        if vec.z == 0.0:
            raise InvalidArgumentError("Zero length vector has no direction")
        return Spherical(-90.0 if vec.z < 0.0 else 90.0, 0.0, dist)
    lon = degrees(atan2(vec.y, vec.x))
    if lon < 0.0:
        lon += 360.0
    return Spherical(degrees(atan2(vec.z, sqrt(xyproj))), lon, dist)


def equator_from_vector(vec: Vector) -> Equatorial:
    sphere = sphere_from_vector(vec)
    return Equatorial(sphere.lon / 15.0, sphere.lat, sphere.dist, vec)
