"""
Scene storage, ray intersection and the path tracing integrator.

The scene keeps its primitives in index-aligned lists (structure-of-arrays)
and intersects them with a brute-force linear scan. Radiance is estimated by
recursive Monte Carlo sampling: each bounce randomly chooses between a
specular (cone) reflection and a diffuse (hemisphere) bounce.
"""

from __future__ import annotations
import logging
import math
from typing import Callable, List, Optional

import numpy as np

from .vec3 import Vec3, Point3, Color
from .ray import Ray
from .camera import Camera
from .geometry import Hit, IntersectionRecord, Sphere, TriangleNormals, TriangleVertices
from .materials import Material
from .output import ArrayOutput
from .renderer import RenderSettings
from .samples import EPSILON, OrthoNormalBasis, cone_sample, hemisphere_sample

logger = logging.getLogger(__name__)


class Scene:
    """Append-only store of spheres, triangles and their materials.

    Build the scene with the add_* methods, then render it. Intersection
    results reference materials owned by the scene, so the scene must not be
    mutated while a render is running.
    """

    def __init__(self):
        self._spheres: List[Sphere] = []
        self._sphere_materials: List[Material] = []
        self._triangle_verts: List[TriangleVertices] = []
        self._triangle_normals: List[TriangleNormals] = []
        self._triangle_materials: List[Material] = []
        self._environment = Color(0, 0, 0)

    # Construction

    def add_sphere(self, centre: Point3, radius: float, material: Material) -> None:
        self._spheres.append(Sphere(centre, radius))
        self._sphere_materials.append(material)

    def add_triangle(self, v0: Point3, v1: Point3, v2: Point3, material: Material) -> None:
        """Add a flat-shaded triangle (all vertex normals = face normal)."""
        verts = TriangleVertices(v0, v1, v2)
        self._triangle_verts.append(verts)
        self._triangle_normals.append(TriangleNormals.flat(verts.face_normal))
        self._triangle_materials.append(material)

    def add_smooth_triangle(
        self,
        v0: Point3, v1: Point3, v2: Point3,
        n0: Vec3, n1: Vec3, n2: Vec3,
        material: Material
    ) -> None:
        """Add a triangle with explicit per-vertex shading normals."""
        self._triangle_verts.append(TriangleVertices(v0, v1, v2))
        self._triangle_normals.append(
            TriangleNormals((n0.normalize(), n1.normalize(), n2.normalize()))
        )
        self._triangle_materials.append(material)

    def set_environment_color(self, color: Color) -> None:
        self._environment = color

    @property
    def environment_color(self) -> Color:
        return self._environment

    @property
    def sphere_count(self) -> int:
        return len(self._spheres)

    @property
    def triangle_count(self) -> int:
        return len(self._triangle_verts)

    def __len__(self) -> int:
        return self.sphere_count + self.triangle_count

    # Intersection

    def intersect_spheres(self, ray: Ray, nearer_than: float) -> Optional[IntersectionRecord]:
        """Find the nearest sphere hit strictly closer than ``nearer_than``.

        Solves t^2 (d.d) + 2t (o-c).d + (o-c).(o-c) - r^2 = 0 for a unit
        direction d. The nearer root is used unless it lies behind the
        origin, in which case the ray started inside and the far root is used.
        """
        nearest_dist = nearer_than
        nearest_index = None
        origin = ray.origin
        direction = ray.direction
        for index, sphere in enumerate(self._spheres):
            op = sphere.centre - origin
            b = op.dot(direction)
            determinant = b * b - op.length_squared() + sphere.radius_squared
            if determinant < 0:
                continue

            determinant = math.sqrt(determinant)
            minus_t = b - determinant
            plus_t = b + determinant
            if minus_t < EPSILON and plus_t < EPSILON:
                continue

            t = minus_t if minus_t > EPSILON else plus_t
            if t < nearest_dist:
                nearest_index = index
                nearest_dist = t

        if nearest_index is None:
            return None

        position = ray.at(nearest_dist)
        normal = (position - self._spheres[nearest_index].centre).normalize()
        inside = normal.dot(direction) > 0
        if inside:
            normal = -normal
        return IntersectionRecord(
            Hit(nearest_dist, inside, position, normal),
            self._sphere_materials[nearest_index]
        )

    def intersect_triangles(self, ray: Ray, nearer_than: float) -> Optional[IntersectionRecord]:
        """Find the nearest triangle hit strictly closer than ``nearer_than``.

        Uses the Moller-Trumbore determinant test. The shading normal blends
        the vertex normals as n0 + u(n1 - n0) + v(n2 - n0).
        """
        nearest_dist = nearer_than
        nearest = None  # (index, backfacing, u, v)
        origin = ray.origin
        direction = ray.direction
        for index, tv in enumerate(self._triangle_verts):
            p_vec = direction.cross(tv.v_vector)
            det = tv.u_vector.dot(p_vec)
            # Ray is parallel to the triangle's plane
            if abs(det) < EPSILON:
                continue

            inv_det = 1.0 / det
            t_vec = origin - tv.vertex(0)
            u = t_vec.dot(p_vec) * inv_det
            if u < 0.0 or u > 1.0:
                continue

            q_vec = t_vec.cross(tv.u_vector)
            v = direction.dot(q_vec) * inv_det
            if v < 0.0 or u + v > 1.0:
                continue

            t = tv.v_vector.dot(q_vec) * inv_det
            if EPSILON < t < nearest_dist:
                nearest = (index, det < EPSILON, u, v)
                nearest_dist = t

        if nearest is None:
            return None

        index, backfacing, u, v = nearest
        tn = self._triangle_normals[index]
        normal = (tn[0] + (tn[1] - tn[0]) * u + (tn[2] - tn[0]) * v).normalize()
        if backfacing:
            normal = -normal
        return IntersectionRecord(
            Hit(nearest_dist, backfacing, ray.at(nearest_dist), normal, u, v),
            self._triangle_materials[index]
        )

    def intersect(self, ray: Ray) -> Optional[IntersectionRecord]:
        """Nearest hit across all spheres and triangles, or None."""
        sphere_rec = self.intersect_spheres(ray, math.inf)
        triangle_rec = self.intersect_triangles(
            ray, sphere_rec.hit.distance if sphere_rec else math.inf
        )
        return triangle_rec if triangle_rec else sphere_rec

    # Light transport

    def radiance(
        self,
        rng: np.random.Generator,
        ray: Ray,
        depth: int,
        settings: RenderSettings
    ) -> Color:
        """Estimate the radiance arriving along ``ray``.

        Primary rays (depth 0) are stratified over a U x V grid; every deeper
        bounce takes a single sample, so recursion below depth 0 is a chain.

        Args:
            rng: The render's random stream
            ray: The ray to trace
            depth: Current bounce count (0 for camera rays)
            settings: Render configuration

        Returns:
            The radiance estimate as a linear colour
        """
        if depth >= settings.max_depth:
            return Color(0, 0, 0)

        record = self.intersect(ray)
        if record is None:
            return self._environment

        mat = record.material
        hit = record.hit
        if settings.preview:
            return mat.diffuse

        if hit.inside:
            ior_from, ior_to = mat.index_of_refraction, 1.0
        else:
            ior_from, ior_to = 1.0, mat.index_of_refraction
        if mat.uses_fresnel:
            reflectivity = hit.normal.reflectance(ray.direction, ior_from, ior_to)
        else:
            reflectivity = mat.reflectivity

        num_u = settings.first_bounce_u_samples if depth == 0 else 1
        num_v = settings.first_bounce_v_samples if depth == 0 else 1
        basis = OrthoNormalBasis.from_z(hit.normal)
        result = Color(0, 0, 0)

        for u_sample in range(num_u):
            for v_sample in range(num_v):
                u = (u_sample + rng.random()) / num_u
                v = (v_sample + rng.random()) / num_v
                p = rng.random()

                if p < reflectivity:
                    direction = cone_sample(
                        ray.direction.reflect(hit.normal),
                        mat.reflection_cone_angle, u, v
                    )
                    incoming = self.radiance(rng, Ray(hit.position, direction), depth + 1, settings)
                    result = result + mat.emission + incoming
                else:
                    direction = hemisphere_sample(basis, u, v)
                    incoming = self.radiance(rng, Ray(hit.position, direction), depth + 1, settings)
                    result = result + mat.emission + mat.diffuse * incoming

        return result / (num_u * num_v)

    # Rendering

    def render(
        self,
        camera: Camera,
        settings: RenderSettings,
        update_func: Optional[Callable[[ArrayOutput], None]] = None
    ) -> ArrayOutput:
        """Render the scene progressively.

        Every pass adds one sample to each pixel (rows outer, columns inner)
        and then hands the accumulator to ``update_func``. A single random
        stream seeded from ``settings.seed`` is used throughout, so a render
        is reproducible as long as the order of draws is unchanged.

        Args:
            camera: Source of per-pixel rays
            settings: Render configuration
            update_func: Called with the accumulator after each pass

        Returns:
            The accumulator holding the final image
        """
        width = settings.width
        height = settings.height
        output = ArrayOutput(width, height)
        rng = np.random.default_rng(settings.seed)

        logger.info(
            "Rendering %dx%d, %d passes, %dx%d first bounce samples, depth %d, seed %d%s",
            width, height, settings.samples_per_pixel,
            settings.first_bounce_u_samples, settings.first_bounce_v_samples,
            settings.max_depth, settings.seed,
            " (preview)" if settings.preview else ""
        )

        for sample in range(settings.samples_per_pixel):
            for y in range(height):
                for x in range(width):
                    ray = camera.random_ray(x, y, rng)
                    output.add_samples(x, y, self.radiance(rng, ray, 0, settings), 1)
            logger.debug("Completed pass %d/%d", sample + 1, settings.samples_per_pixel)
            if update_func:
                update_func(output)

        return output

    def __repr__(self) -> str:
        return f"Scene(spheres={self.sphere_count}, triangles={self.triangle_count})"
