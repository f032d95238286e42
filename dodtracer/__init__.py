"""
dodtracer - A data-oriented Monte Carlo path tracer

An offline renderer featuring:
- Brute-force ray intersection against spheres and triangles
- Probabilistic diffuse/specular light transport with Fresnel reflectance
- Glossy reflections via cone sampling
- Stratified primary-ray sampling
- Progressive, deterministic multi-pass rendering
"""

__version__ = "0.1.0"

from .vec3 import Vec3, Point3, Color
from .ray import Ray
from .samples import EPSILON, OrthoNormalBasis, hemisphere_sample, cone_sample
from .materials import Material, FRESNEL_REFLECTIVITY
from .geometry import Sphere, TriangleVertices, TriangleNormals, Hit, IntersectionRecord
from .camera import Camera
from .output import ArrayOutput
from .renderer import RenderSettings
from .scene import Scene
from .scenes import SCENES, create_cornell_box, create_sphere_showcase
