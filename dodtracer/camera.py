"""
Camera module for generating primary rays.

Supports:
- Perspective projection with a configurable vertical field of view
- Arbitrary positioning via look-at
- Depth of field (thin lens) when the aperture is non-zero
- Per-pixel jitter for anti-aliasing

All randomness is drawn from the random stream passed to random_ray, so the
order of draws is owned by the render loop.
"""

from __future__ import annotations
import math

import numpy as np

from .vec3 import Vec3, Point3
from .ray import Ray


class Camera:
    """A pinhole or thin-lens camera producing randomized per-pixel rays."""

    def __init__(
        self,
        look_from: Point3,
        look_at: Point3,
        up: Vec3 = Vec3(0, 1, 0),
        width: int = 256,
        height: int = 256,
        vertical_fov: float = 40.0,
        aperture: float = 0.0,
        focus_distance: float = 1.0
    ):
        """Create a camera.

        Args:
            look_from: Camera position in world space
            look_at: Point the camera is looking at
            up: World up vector (usually (0, 1, 0))
            width, height: Image resolution the pixel coordinates refer to
            vertical_fov: Vertical field of view in degrees
            aperture: Lens diameter for depth of field (0 = pinhole)
            focus_distance: Distance to the plane in perfect focus
        """
        self.width = width
        self.height = height

        theta = math.radians(vertical_fov)
        viewport_height = 2.0 * math.tan(theta / 2)
        viewport_width = viewport_height * width / height

        # Orthonormal camera basis
        self.w = (look_from - look_at).normalize()  # Points backward from camera
        self.u = up.cross(self.w).normalize()        # Points right
        self.v = self.w.cross(self.u)                # Points up

        self.origin = look_from
        self.horizontal = self.u * viewport_width * focus_distance
        self.vertical = self.v * viewport_height * focus_distance
        self.upper_left_corner = (
            self.origin
            - self.horizontal / 2
            + self.vertical / 2
            - self.w * focus_distance
        )

        self.lens_radius = aperture / 2

    def random_ray(self, x: int, y: int, rng: np.random.Generator) -> Ray:
        """Generate a jittered ray through pixel (x, y).

        Row 0 is the top of the image. Draws two values for the pixel
        jitter, then two more for the lens position when the aperture is
        open.

        Args:
            x: Pixel column
            y: Pixel row
            rng: The render's random stream

        Returns:
            A normalized ray from the lens through the pixel
        """
        s = (x + rng.random()) / self.width
        t = (y + rng.random()) / self.height

        if self.lens_radius > 0:
            # Uniform point on the lens disk
            r = self.lens_radius * math.sqrt(rng.random())
            phi = 2.0 * math.pi * rng.random()
            offset = self.u * (r * math.cos(phi)) + self.v * (r * math.sin(phi))
        else:
            offset = Vec3(0, 0, 0)

        target = self.upper_left_corner + self.horizontal * s - self.vertical * t
        direction = target - self.origin - offset
        return Ray(self.origin + offset, direction.normalize())

    def __repr__(self) -> str:
        return f"Camera(origin={self.origin}, resolution={self.width}x{self.height})"
