"""
Direction sampling helpers for the path tracer.

Provides:
- A small orthonormal basis type for local shading frames
- Cosine-weighted hemisphere sampling for diffuse bounces
- Cone sampling for glossy reflections

All samplers are deterministic functions of the (u, v) values passed in;
the caller owns the random stream.
"""

from __future__ import annotations
import math
from dataclasses import dataclass

from .vec3 import Vec3

# Guards every surface-origin comparison against self-intersection.
EPSILON = 1e-4


@dataclass(frozen=True)
class OrthoNormalBasis:
    """A right-handed orthonormal frame (x, y, z)."""
    x: Vec3
    y: Vec3
    z: Vec3

    @classmethod
    def from_z(cls, z: Vec3) -> OrthoNormalBasis:
        """Build a frame whose z axis is the given unit vector."""
        up = Vec3(0, 1, 0) if abs(z.y) < 0.999 else Vec3(1, 0, 0)
        x = up.cross(z).normalize()
        y = z.cross(x)
        return cls(x, y, z)

    def transform(self, local: Vec3) -> Vec3:
        """Map local (x, y, z) coordinates into world space."""
        return self.x * local.x + self.y * local.y + self.z * local.z


def hemisphere_sample(basis: OrthoNormalBasis, u: float, v: float) -> Vec3:
    """Sample a direction over the hemisphere around ``basis.z``.

    Directions are cosine weighted, so a diffuse bounce can be estimated as
    ``albedo * incoming`` without an explicit cosine/pdf factor.
    """
    theta = 2.0 * math.pi * u
    radius = math.sqrt(v)
    local = Vec3(math.cos(theta) * radius,
                 math.sin(theta) * radius,
                 math.sqrt(1.0 - v))
    return basis.transform(local).normalize()


def cone_sample(direction: Vec3, cone_angle: float, u: float, v: float) -> Vec3:
    """Sample a direction within ``cone_angle`` radians of ``direction``.

    A zero (or negligible) angle returns ``direction`` unchanged, giving a
    perfect mirror.
    """
    if cone_angle < EPSILON:
        return direction
    theta = cone_angle * (1.0 - (2.0 * math.acos(u) / math.pi))
    radius = math.sin(theta)
    z_scale = math.cos(theta)
    phi = v * 2.0 * math.pi
    basis = OrthoNormalBasis.from_z(direction)
    local = Vec3(math.cos(phi) * radius, math.sin(phi) * radius, z_scale)
    return basis.transform(local).normalize()
