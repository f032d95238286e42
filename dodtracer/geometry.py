"""
Primitive geometry and intersection results.

The scene stores these as index-aligned lists (structure-of-arrays): each
primitive's geometry, shading data and material live at the same index in
separate lists.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

from .vec3 import Vec3, Point3
from .materials import Material


class Sphere:
    """A sphere defined by centre and radius."""

    __slots__ = ('centre', 'radius', 'radius_squared')

    def __init__(self, centre: Point3, radius: float):
        if radius <= 0:
            raise ValueError(f"Sphere radius must be positive, got {radius}")
        self.centre = centre
        self.radius = radius
        self.radius_squared = radius * radius

    def __repr__(self) -> str:
        return f"Sphere(centre={self.centre}, radius={self.radius})"


class TriangleVertices:
    """Triangle geometry with pre-computed edges and face normal."""

    __slots__ = ('vertices', 'u_vector', 'v_vector', 'face_normal')

    def __init__(self, v0: Point3, v1: Point3, v2: Point3):
        self.vertices = (v0, v1, v2)
        self.u_vector = v1 - v0
        self.v_vector = v2 - v0
        self.face_normal = self.u_vector.cross(self.v_vector).normalize()

    def vertex(self, index: int) -> Point3:
        return self.vertices[index]

    def __repr__(self) -> str:
        return "TriangleVertices({}, {}, {})".format(*self.vertices)


@dataclass(frozen=True)
class TriangleNormals:
    """Per-vertex shading normals of a triangle."""
    normals: Tuple[Vec3, Vec3, Vec3]

    @classmethod
    def flat(cls, face_normal: Vec3) -> TriangleNormals:
        """All three vertices share the face normal."""
        return cls((face_normal, face_normal, face_normal))

    def __getitem__(self, index: int) -> Vec3:
        return self.normals[index]


@dataclass
class Hit:
    """Where and how a ray struck a surface.

    Attributes:
        distance: Ray parameter at the intersection
        inside: True if the ray struck the surface from inside/behind
        position: Intersection point in world space
        normal: Unit normal, always facing the incoming ray
        u, v: Barycentric coordinates for triangle hits (0 for spheres)
    """
    distance: float
    inside: bool
    position: Point3
    normal: Vec3
    u: float = 0.0
    v: float = 0.0


@dataclass
class IntersectionRecord:
    """A hit paired with the struck primitive's material.

    The material is a reference into the owning scene and is only meaningful
    while that scene is alive and unchanged.
    """
    hit: Hit
    material: Material
