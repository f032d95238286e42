"""Tests for the radiance estimator."""

import pytest
import math
from collections import Counter

import numpy as np

from dodtracer.vec3 import Vec3, Point3, Color
from dodtracer.ray import Ray
from dodtracer.materials import Material, FRESNEL_REFLECTIVITY
from dodtracer.renderer import RenderSettings
from dodtracer.scene import Scene


def count_radiance_calls(scene):
    """Wrap scene.radiance so every call (including recursion) is recorded by depth."""
    depths = Counter()
    original = scene.radiance

    def wrapper(rng, ray, depth, settings):
        depths[depth] += 1
        return original(rng, ray, depth, settings)

    scene.radiance = wrapper
    return depths


def enclosed_scene(material):
    """A ray starting at the origin always hits this sphere from inside."""
    scene = Scene()
    scene.add_sphere(Point3(0, 0, 0), 10.0, material)
    return scene


class TestRadianceTermination:
    """Test depth cutoff and misses."""

    @pytest.mark.parametrize("depth,max_depth", [(0, 0), (3, 3), (5, 2)])
    def test_depth_cutoff_returns_zero(self, depth, max_depth):
        scene = enclosed_scene(Material.light(Color(5, 5, 5)))
        scene.set_environment_color(Color(1, 1, 1))
        settings = RenderSettings(max_depth=max_depth)
        result = scene.radiance(
            np.random.default_rng(0), Ray(Point3(0, 0, 0), Vec3(0, 0, -1)), depth, settings
        )
        assert result.to_tuple() == (0.0, 0.0, 0.0)

    def test_depth_cutoff_draws_no_randomness(self):
        scene = enclosed_scene(Material.diffuse_surface(Color(1, 1, 1)))
        rng = np.random.default_rng(5)
        scene.radiance(rng, Ray(Point3(0, 0, 0), Vec3(0, 0, -1)), 4, RenderSettings(max_depth=4))
        assert rng.random() == np.random.default_rng(5).random()

    def test_miss_returns_environment(self):
        scene = Scene()
        env = Color(0.1, 0.2, 0.3)
        scene.set_environment_color(env)
        scene.add_sphere(Point3(0, 0, -5), 1.0, Material.diffuse_surface(Color(1, 1, 1)))
        result = scene.radiance(
            np.random.default_rng(0), Ray(Point3(0, 0, 0), Vec3(0, 0, 1)), 0, RenderSettings()
        )
        assert result.to_tuple() == env.to_tuple()

    def test_empty_scene_default_environment_is_black(self):
        result = Scene().radiance(
            np.random.default_rng(0), Ray(Point3(0, 0, 0), Vec3(0, 1, 0)), 0, RenderSettings()
        )
        assert result.to_tuple() == (0.0, 0.0, 0.0)


class TestRadiancePreview:
    """Test preview (diffuse colour only) mode."""

    def test_returns_diffuse_without_recursion(self):
        diffuse = Color(0.2, 0.4, 0.6)
        scene = enclosed_scene(Material(diffuse=diffuse, emission=Color(9, 9, 9)))
        depths = count_radiance_calls(scene)
        result = scene.radiance(
            np.random.default_rng(0), Ray(Point3(0, 0, 0), Vec3(1, 0, 0)), 0,
            RenderSettings(preview=True)
        )
        assert result.to_tuple() == diffuse.to_tuple()
        assert depths == Counter({0: 1})


class TestRadianceSampling:
    """Test stratification and recursion structure."""

    def test_only_primary_ray_is_stratified(self):
        scene = enclosed_scene(Material.diffuse_surface(Color(0.5, 0.5, 0.5)))
        depths = count_radiance_calls(scene)
        settings = RenderSettings(first_bounce_u_samples=3, first_bounce_v_samples=2, max_depth=3)
        scene.radiance(np.random.default_rng(0), Ray(Point3(0, 0, 0), Vec3(0, 0, 1)), 0, settings)
        # One chain per primary sub-sample below depth 0
        assert depths == Counter({0: 1, 1: 6, 2: 6, 3: 6})

    def test_three_draws_per_sub_sample(self):
        scene = Scene()
        scene.add_sphere(Point3(0, 0, -3), 1.0, Material.diffuse_surface(Color(1, 1, 1)))
        settings = RenderSettings(first_bounce_u_samples=2, first_bounce_v_samples=2, max_depth=5)
        rng = np.random.default_rng(9)
        scene.radiance(rng, Ray(Point3(0, 0, 0), Vec3(0, 0, -1)), 0, settings)
        # Bounces off a convex sphere escape, so each sub-sample draws u, v and p once
        reference = np.random.default_rng(9)
        reference.random(12)
        assert rng.random() == reference.random()


class TestRadianceTransport:
    """Test the diffuse and specular branches."""

    def test_emission_only(self):
        scene = enclosed_scene(Material.light(Color(2, 1, 0.5)))
        settings = RenderSettings(first_bounce_u_samples=2, first_bounce_v_samples=2, max_depth=1)
        result = scene.radiance(
            np.random.default_rng(0), Ray(Point3(0, 0, 0), Vec3(0, 1, 0)), 0, settings
        )
        assert result.to_tuple() == (2.0, 1.0, 0.5)

    def test_emission_accumulates_per_bounce(self):
        scene = enclosed_scene(Material(
            diffuse=Color(0.5, 0.5, 0.5), emission=Color(1, 1, 1)
        ))
        settings = RenderSettings(first_bounce_u_samples=1, first_bounce_v_samples=1, max_depth=3)
        result = scene.radiance(
            np.random.default_rng(0), Ray(Point3(0, 0, 0), Vec3(0, 1, 0)), 0, settings
        )
        # 1 + 0.5 * (1 + 0.5 * 1)
        assert result == Color(1.75, 1.75, 1.75)

    def test_diffuse_convex_sphere_under_sky(self):
        scene = Scene()
        env = Color(0.5, 0.25, 1.0)
        scene.set_environment_color(env)
        scene.add_sphere(Point3(0, 0, -3), 1.0, Material.diffuse_surface(Color(0.5, 0.5, 0.5)))
        settings = RenderSettings(first_bounce_u_samples=1, first_bounce_v_samples=1, max_depth=4)
        result = scene.radiance(
            np.random.default_rng(4), Ray(Point3(0, 0, 0), Vec3(0, 0, -1)), 0, settings
        )
        assert result.to_tuple() == (0.25, 0.125, 0.5)

    def test_mirror_reflects_environment(self):
        scene = Scene()
        env = Color(0.3, 0.5, 0.7)
        scene.set_environment_color(env)
        scene.add_triangle(Point3(-10, 0, 10), Point3(10, 0, 10), Point3(0, 0, -10),
                           Material(reflectivity=1.0))
        settings = RenderSettings(first_bounce_u_samples=3, first_bounce_v_samples=3, max_depth=2)
        ray = Ray(Point3(0, 1, 1), Vec3(0, -1, -1).normalize())
        result = scene.radiance(np.random.default_rng(0), ray, 0, settings)
        assert result == env

    def test_fresnel_total_internal_reflection(self):
        scene = Scene()
        env = Color(0.3, 0.6, 0.9)
        scene.set_environment_color(env)
        glass = Material(reflectivity=FRESNEL_REFLECTIVITY, index_of_refraction=1.5)
        scene.add_triangle(Point3(-10, -10, 0), Point3(10, -10, 0), Point3(0, 10, 0), glass)
        theta = math.radians(60)
        # From the back side, past the critical angle: always reflected
        ray = Ray(Point3(-1, 0, -1), Vec3(math.sin(theta), 0, math.cos(theta)))
        settings = RenderSettings(first_bounce_u_samples=1, first_bounce_v_samples=1, max_depth=2)
        for seed in range(5):
            result = scene.radiance(np.random.default_rng(seed), ray, 0, settings)
            assert result == env

    def test_fresnel_front_side_mostly_transmits(self):
        scene = Scene()
        scene.set_environment_color(Color(1, 1, 1))
        glass = Material(reflectivity=FRESNEL_REFLECTIVITY, index_of_refraction=1.5)
        scene.add_triangle(Point3(-10, -10, 0), Point3(10, -10, 0), Point3(0, 10, 0), glass)
        # Normal incidence reflects ~4%; the diffuse branch is black
        ray = Ray(Point3(0, 0, 1), Vec3(0, 0, -1))
        settings = RenderSettings(first_bounce_u_samples=20, first_bounce_v_samples=20, max_depth=2)
        result = scene.radiance(np.random.default_rng(1), ray, 0, settings)
        assert 0.0 < result.x < 0.15
