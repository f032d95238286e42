"""Tests for the ArrayOutput accumulator."""

import numpy as np
from PIL import Image

from dodtracer.vec3 import Color
from dodtracer.output import ArrayOutput


class TestArrayOutput:
    """Test weighted accumulation."""

    def test_starts_empty(self):
        output = ArrayOutput(3, 2)
        assert output.image().shape == (2, 3, 3)
        assert not output.image().any()
        assert output.weight(2, 1) == 0.0
        assert output.pixel(2, 1) == Color(0, 0, 0)

    def test_running_average(self):
        output = ArrayOutput(2, 2)
        output.add_samples(1, 0, Color(1, 0, 0), 1)
        output.add_samples(1, 0, Color(0, 1, 0), 1)
        assert output.weight(1, 0) == 2.0
        assert output.pixel(1, 0) == Color(0.5, 0.5, 0)
        assert np.allclose(output.image()[0, 1], [0.5, 0.5, 0])
        # Other pixels untouched
        assert output.image()[1, 1].tolist() == [0.0, 0.0, 0.0]

    def test_weighted_average(self):
        output = ArrayOutput(1, 1)
        output.add_samples(0, 0, Color(1, 1, 1), 3)
        output.add_samples(0, 0, Color(0, 0, 0), 1)
        assert output.pixel(0, 0) == Color(0.75, 0.75, 0.75)

    def test_image_is_a_copy(self):
        output = ArrayOutput(1, 1)
        output.add_samples(0, 0, Color(1, 1, 1), 1)
        snapshot = output.image()
        output.add_samples(0, 0, Color(0, 0, 0), 1)
        assert snapshot[0, 0, 0] == 1.0
        assert output.image()[0, 0, 0] == 0.5

    def test_to_ldr(self):
        output = ArrayOutput(2, 1)
        output.add_samples(0, 0, Color(1, 4, -1), 1)
        ldr = output.to_ldr()
        assert ldr.dtype == np.uint8
        assert ldr[0, 0].tolist() == [255, 255, 0]
        assert ldr[0, 1].tolist() == [0, 0, 0]

    def test_save_png(self, tmp_path):
        output = ArrayOutput(4, 3)
        output.add_samples(0, 0, Color(1, 1, 1), 1)
        path = tmp_path / "render.png"
        output.save(path)

        with Image.open(path) as image:
            assert image.size == (4, 3)
            assert image.getpixel((0, 0)) == (255, 255, 255)
            assert image.getpixel((1, 0)) == (0, 0, 0)
