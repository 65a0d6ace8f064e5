"""Vector helpers and whole-model geometric operations.

Triangle indices are 1-based, as in the OBJ file: index ``i`` refers to
``vertices[i - 1]``, ``normals[i - 1]`` and so on.
"""

from __future__ import annotations

import math
from typing import Sequence

from faceview.model import ObjModel


def dot(u: Sequence[float], v: Sequence[float]) -> float:
    """Return the dot product of two 3-vectors."""
    return u[0] * v[0] + u[1] * v[1] + u[2] * v[2]


def cross(u: Sequence[float], v: Sequence[float]) -> list[float]:
    """Return the cross product of two 3-vectors."""
    return [
        u[1] * v[2] - u[2] * v[1],
        u[2] * v[0] - u[0] * v[2],
        u[0] * v[1] - u[1] * v[0],
    ]


def normalize(v: Sequence[float]) -> list[float]:
    """Return ``v`` scaled to unit length.

    Raises ValueError for a zero-length vector.
    """
    length = math.sqrt(dot(v, v))
    if length == 0.0:
        raise ValueError("cannot normalize a zero-length vector")
    return [c / length for c in v]


def _unit_or_nan(v: Sequence[float]) -> list[float]:
    try:
        return normalize(v)
    except ValueError:
        return [math.nan, math.nan, math.nan]


def unitize(model: ObjModel) -> float:
    """Centre the model on the origin and scale it to fit a 2-unit cube.

    Returns the scale factor used, or 0.0 if the model has no vertices.
    """
    if not model.vertices:
        return 0.0
    columns = list(zip(*model.vertices))
    lows = [min(c) for c in columns]
    highs = [max(c) for c in columns]
    centre = [(hi + lo) / 2.0 for lo, hi in zip(lows, highs)]
    largest = max(hi - lo for lo, hi in zip(lows, highs))
    factor = 2.0 / largest if largest else math.inf
    model.vertices = [
        [(c - m) * factor for c, m in zip(vertex, centre)]
        for vertex in model.vertices
    ]
    return factor


def facet_normals(model: ObjModel) -> None:
    """Compute one normal per triangle, assuming counter-clockwise winding."""
    if not model.vertices:
        return
    normals = []
    for number, triangle in enumerate(model.triangles, start=1):
        triangle.findex = number
        a, b, c = (model.vertices[i - 1] for i in triangle.vindices)
        u = [q - p for p, q in zip(a, b)]
        v = [q - p for p, q in zip(a, c)]
        normals.append(_unit_or_nan(cross(u, v)))
    model.facetnorms = normals


def vertex_normals(model: ObjModel, angle: float) -> None:
    """Compute one smooth normal per vertex from the facet normals.

    A vertex's normal averages the facet normals of its triangles that lie
    within ``angle`` degrees of the facet normal of the last triangle using
    it. Each triangle's normal indices are set to its vertex indices.
    Does nothing if facet normals have not been computed.
    """
    if not model.facetnorms:
        return
    cos_angle = math.cos(math.radians(angle))

    members: list[list[int]] = [[] for _ in model.vertices]
    for index, triangle in enumerate(model.triangles):
        for vertex in triangle.vindices:
            members[vertex - 1].insert(0, index)

    def facet(index: int) -> list[float]:
        return model.facetnorms[model.triangles[index].findex - 1]

    normals: list[list[float]] = []
    for number, users in enumerate(members, start=1):
        if not users:
            normals.append([0.0, 0.0, 0.0])
            continue
        reference = facet(users[0])
        average = [0.0, 0.0, 0.0]
        averaged = False
        for index in users:
            normal = facet(index)
            if dot(normal, reference) > cos_angle:
                average = [a + n for a, n in zip(average, normal)]
                averaged = True
        normals.append(_unit_or_nan(average) if averaged else list(reference))

        for index in users:
            triangle = model.triangles[index]
            slot = triangle.vindices.index(number)
            triangle.nindices[slot] = number
    model.normals = normals


def scale(model: ObjModel, factor: float) -> None:
    """Multiply every vertex coordinate by ``factor``."""
    model.vertices = [[c * factor for c in vertex] for vertex in model.vertices]


def _wrap_degrees(value: float) -> float:
    while value > 180:
        value -= 360
    while value <= -180:
        value += 360
    return value


def _spin(x: float, y: float, ang: float) -> tuple[float, float]:
    r = math.hypot(x, y)
    theta = math.atan2(y, x)
    return r * math.cos(theta + ang), r * math.sin(theta + ang)


def rotate(model: ObjModel, rotx: float, roty: float, rotz: float) -> None:
    """Rotate the model about the origin by angles in degrees, x then y then z."""
    angx = math.radians(_wrap_degrees(rotx))
    angy = math.radians(_wrap_degrees(roty))
    angz = math.radians(_wrap_degrees(rotz))
    rotated = []
    for x, y, z in model.vertices:
        y, z = _spin(y, z, angx)
        z, x = _spin(z, x, angy)
        x, y = _spin(x, y, angz)
        rotated.append([x, y, z])
    model.vertices = rotated


def linear_texture(model: ObjModel) -> None:
    """Give every vertex a texture coordinate projected from its x and z.

    Each triangle's texture indices are set to its vertex indices.
    """
    largest = max(model.dimensions())
    factor = 2.0 / largest if largest else math.inf
    model.texcoords = [
        [(x * factor + 1.0) / 2.0, (z * factor + 1.0) / 2.0]
        for x, _, z in model.vertices
    ]
    for group in model.groups.values():
        for index in group.triangles:
            triangle = model.triangles[index]
            triangle.tindices = list(triangle.vindices)