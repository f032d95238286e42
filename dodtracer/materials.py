"""
Surface materials.

A single material record drives both light transport branches of the
radiance estimator:
- Diffuse colour and emission
- Reflectivity (fixed, or computed per bounce from the Fresnel equations)
- Glossiness, as the half-angle of the reflection cone
- Index of refraction used by the Fresnel term
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field

from .vec3 import Color

# Reflectivity sentinel: compute reflectivity per bounce via Fresnel.
FRESNEL_REFLECTIVITY = -1.0


@dataclass(frozen=True)
class Material:
    """Material parameters for a primitive.

    Attributes:
        diffuse: Albedo for diffuse bounces (RGB, each component 0-1)
        emission: Emitted radiance added at every bounce off this surface
        reflectivity: Probability of a specular bounce in [0, 1], or
            FRESNEL_REFLECTIVITY to derive it from the incidence angle
        reflection_cone_angle: Half-angle in radians of the glossy cone
            (0 = perfect mirror)
        index_of_refraction: Used for the Fresnel term
    """
    diffuse: Color = field(default_factory=lambda: Color(0, 0, 0))
    emission: Color = field(default_factory=lambda: Color(0, 0, 0))
    reflectivity: float = 0.0
    reflection_cone_angle: float = 0.0
    index_of_refraction: float = 1.0

    def __post_init__(self):
        if not (0.0 <= self.reflectivity <= 1.0
                or self.reflectivity == FRESNEL_REFLECTIVITY):
            raise ValueError(
                f"Reflectivity must be in [0, 1] or {FRESNEL_REFLECTIVITY}, "
                f"got {self.reflectivity}"
            )
        if self.index_of_refraction <= 0:
            raise ValueError(
                f"Index of refraction must be positive, got {self.index_of_refraction}"
            )

    @property
    def uses_fresnel(self) -> bool:
        return self.reflectivity == FRESNEL_REFLECTIVITY

    @classmethod
    def diffuse_surface(cls, color: Color) -> Material:
        """Matte (Lambertian) surface."""
        return cls(diffuse=color)

    @classmethod
    def light(cls, color: Color, intensity: float = 1.0) -> Material:
        """Emissive surface that does not reflect."""
        return cls(emission=color * intensity)

    @classmethod
    def mirror(cls, reflectivity: float = 1.0) -> Material:
        """Perfectly sharp mirror."""
        return cls(diffuse=Color(1, 1, 1), reflectivity=reflectivity)

    @classmethod
    def glossy(cls, color: Color, reflectivity: float, cone_degrees: float) -> Material:
        """Diffuse base with a blurred specular layer."""
        return cls(
            diffuse=color,
            reflectivity=reflectivity,
            reflection_cone_angle=math.radians(cone_degrees)
        )

    @classmethod
    def glass(cls, color: Color, ior: float = 1.5) -> Material:
        """Shiny dielectric coating whose reflectivity follows Fresnel."""
        return cls(
            diffuse=color,
            reflectivity=FRESNEL_REFLECTIVITY,
            index_of_refraction=ior
        )
