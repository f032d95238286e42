"""
Render configuration.

The render loop itself lives on Scene.render; this module holds the settings
object shared by the loop, the radiance estimator and the command line.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class RenderSettings:
    """Configuration for a render.

    Attributes:
        width, height: Output resolution in pixels
        samples_per_pixel: Number of full passes over the image
        first_bounce_u_samples, first_bounce_v_samples: Stratification grid
            for primary rays; deeper bounces always take one sample
        max_depth: Recursion cutoff; radiance at this depth is zero
        seed: Seed of the single random stream used for the whole render
        preview: Return the struck material's diffuse colour with no lighting
    """
    width: int = 256
    height: int = 256
    samples_per_pixel: int = 40
    first_bounce_u_samples: int = 6
    first_bounce_v_samples: int = 6
    max_depth: int = 5
    seed: int = 0
    preview: bool = False

    @property
    def first_bounce_samples(self) -> int:
        return self.first_bounce_u_samples * self.first_bounce_v_samples
