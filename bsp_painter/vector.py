"""
Vector kernel for 3D points and directions.

Every vector is a read-only float64 array of shape (3,). The functions here
never modify their arguments and always hand back a fresh read-only array.
"""

from typing import Sequence

import numpy as np

Vec3 = np.ndarray


def _frozen(values) -> Vec3:
    v = np.array(values, dtype=np.float64)
    v.setflags(write=False)
    return v


def vec3(x: float, y: float, z: float) -> Vec3:
    return _frozen((x, y, z))


def as_vec3(values: Sequence[float] | np.ndarray) -> Vec3:
    v = np.asarray(values, dtype=np.float64)
    if v.shape != (3,):
        raise ValueError(f"Expected a 3-component vector, got shape {v.shape}")
    if v is values and not v.flags.writeable:
        return v
    return _frozen(v)


def subtract(a: Vec3, b: Vec3) -> Vec3:
    return _frozen(np.subtract(a, b))


def cross(a: Vec3, b: Vec3) -> Vec3:
    return _frozen(np.cross(a, b))


def dot(a: Vec3, b: Vec3) -> float:
    return float(np.dot(a, b))


def scale(a: Vec3, s: float) -> Vec3:
    return _frozen(np.multiply(a, s))


def lerp(a: Vec3, b: Vec3, t: float) -> Vec3:
    """(1 - t) * a + t * b"""
    return _frozen((1.0 - t) * np.asarray(a) + t * np.asarray(b))


def length(a: Vec3) -> float:
    return float(np.sqrt(dot(a, a)))


def normalize(a: Vec3) -> Vec3:
    """
    Scale `a` to unit length.

    A zero vector produces inf/nan components; callers that can see
    degenerate input check `length` first.
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        return scale(a, np.float64(1.0) / np.float64(length(a)))
