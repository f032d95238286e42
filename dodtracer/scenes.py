"""
Built-in demo scenes.

Each factory returns a (scene, camera) pair sized for the requested output
resolution.
"""

from __future__ import annotations
from typing import Tuple

from .vec3 import Vec3, Point3, Color
from .camera import Camera
from .materials import Material
from .scene import Scene


def add_quad(scene: Scene, a: Point3, b: Point3, c: Point3, d: Point3, material: Material) -> None:
    """Add a planar quad a-b-c-d (counter-clockwise) as two triangles."""
    scene.add_triangle(a, b, c, material)
    scene.add_triangle(a, c, d, material)


def create_cornell_box(width: int, height: int) -> Tuple[Scene, Camera]:
    """Cornell box built from triangles, lit by an emissive ceiling panel."""
    scene = Scene()

    red = Material.diffuse_surface(Color(0.75, 0.25, 0.25))
    green = Material.diffuse_surface(Color(0.25, 0.75, 0.25))
    white = Material.diffuse_surface(Color(0.75, 0.75, 0.75))
    light = Material.light(Color(1, 1, 1), 12.0)

    # Box spans [-1, 1] in x, [0, 2] in y and [-1, 1] in z; open towards +z.
    # Every wall is wound so its face normal points into the box.
    x0, x1 = -1.0, 1.0
    y0, y1 = 0.0, 2.0
    z0, z1 = -1.0, 1.0

    # Floor
    add_quad(scene, Point3(x0, y0, z1), Point3(x1, y0, z1),
             Point3(x1, y0, z0), Point3(x0, y0, z0), white)
    # Ceiling
    add_quad(scene, Point3(x0, y1, z0), Point3(x1, y1, z0),
             Point3(x1, y1, z1), Point3(x0, y1, z1), white)
    # Back wall
    add_quad(scene, Point3(x0, y0, z0), Point3(x1, y0, z0),
             Point3(x1, y1, z0), Point3(x0, y1, z0), white)
    # Left wall
    add_quad(scene, Point3(x0, y0, z1), Point3(x0, y0, z0),
             Point3(x0, y1, z0), Point3(x0, y1, z1), red)
    # Right wall
    add_quad(scene, Point3(x1, y0, z0), Point3(x1, y0, z1),
             Point3(x1, y1, z1), Point3(x1, y1, z0), green)

    # Ceiling light, just below the ceiling and facing down
    ly = y1 - 0.001
    add_quad(scene, Point3(-0.3, ly, -0.3), Point3(0.3, ly, -0.3),
             Point3(0.3, ly, 0.3), Point3(-0.3, ly, 0.3), light)

    scene.add_sphere(Point3(-0.45, 0.4, -0.35), 0.4, Material.mirror())
    scene.add_sphere(Point3(0.45, 0.4, 0.3), 0.4,
                     Material.glass(Color(0.9, 0.9, 0.9), ior=1.5))

    camera = Camera(
        look_from=Point3(0, 1, 3.8),
        look_at=Point3(0, 1, 0),
        up=Vec3(0, 1, 0),
        width=width,
        height=height,
        vertical_fov=40
    )
    return scene, camera


def create_sphere_showcase(width: int, height: int) -> Tuple[Scene, Camera]:
    """Spheres of each material type on a triangle floor under a blue sky."""
    scene = Scene()
    scene.set_environment_color(Color(0.5, 0.7, 1.0))

    floor = Material.diffuse_surface(Color(0.5, 0.5, 0.5))
    add_quad(scene, Point3(-20, 0, 20), Point3(20, 0, 20),
             Point3(20, 0, -20), Point3(-20, 0, -20), floor)

    scene.add_sphere(Point3(-2.2, 1, 0), 1.0,
                     Material.diffuse_surface(Color(0.8, 0.3, 0.1)))
    scene.add_sphere(Point3(0, 1, 0), 1.0,
                     Material.glass(Color(0.1, 0.2, 0.8), ior=1.6))
    scene.add_sphere(Point3(2.2, 1, 0), 1.0,
                     Material.glossy(Color(0.7, 0.6, 0.5), 0.8, cone_degrees=10))
    scene.add_sphere(Point3(0, 4, -3), 1.0, Material.light(Color(1, 0.9, 0.8), 4.0))

    camera = Camera(
        look_from=Point3(0, 2.5, 8),
        look_at=Point3(0, 1, 0),
        up=Vec3(0, 1, 0),
        width=width,
        height=height,
        vertical_fov=35,
        aperture=0.05,
        focus_distance=8.0
    )
    return scene, camera


SCENES = {
    'cornell': create_cornell_box,
    'spheres': create_sphere_showcase,
}
