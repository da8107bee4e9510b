"""Tests for the frame renderer and moon geometry."""

import numpy as np
import pytest
from starry_skyline.render.frame_renderer import (
    SkylineRenderer, MOON_LIGHT, MOON_DARK, MOON_OUTLINE
)
from starry_skyline.render.raster import RasterSurface
from starry_skyline.render.recording import RecordingSurface
from starry_skyline.scene.buildings import Building, BUILDING_STYLES
from starry_skyline.scene.points import Color
from starry_skyline.scene.skyline import Skyline
from starry_skyline.sky.snapshots import FlasherSnapshot, MoonSnapshot

LIGHT = MOON_LIGHT.as_rgb()
DARK = MOON_DARK.as_rgb()


def make_renderer(seed=0, width=100, height=100):
    skyline = Skyline(width, height, building_count=10, rng=np.random.default_rng(seed))
    return SkylineRenderer(skyline)


def interior_pixels(cx, cy, r, margin=2.0):
    """Pixels whose centers sit well inside the disc, away from the outline."""
    for j in range(int(cy - r), int(cy + r) + 1):
        for i in range(int(cx - r), int(cx + r) + 1):
            dx = i + 0.5 - cx
            dy = j + 0.5 - cy
            if dx * dx + dy * dy <= (r - margin) ** 2:
                yield i, j, dx


def draw_moon(fraction, waxing=True, cx=50, cy=50, r=20):
    renderer = make_renderer()
    surface = RasterSurface(100, 100)
    moon = MoonSnapshot(center_x=cx, center_y=cy, radius=r,
                        illuminated_fraction=fraction, waxing=waxing)
    assert renderer.draw_moon(surface, moon)
    return surface


@pytest.mark.parametrize("fraction", [0.0, 0.004, -0.3])
def test_new_moon_is_dark(fraction):
    """Test that a new moon is a uniformly dark disc."""
    surface = draw_moon(fraction)
    for i, j, _ in interior_pixels(50, 50, 20):
        assert np.allclose(surface.pixel(i, j), DARK)


@pytest.mark.parametrize("fraction", [1.0, 0.996, 1.7])
def test_full_moon_is_light(fraction):
    """Test that a full moon is a uniformly light disc."""
    surface = draw_moon(fraction)
    for i, j, _ in interior_pixels(50, 50, 20):
        assert np.allclose(surface.pixel(i, j), LIGHT)


@pytest.mark.parametrize("waxing", [True, False])
def test_half_moon_split_at_vertical_diameter(waxing):
    """Test that f = 0.5 lights exactly the half matching the waxing flag."""
    surface = draw_moon(0.5, waxing=waxing)
    for i, j, dx in interior_pixels(50, 50, 20):
        on_right = dx > 0
        expected = LIGHT if on_right == waxing else DARK
        assert np.allclose(surface.pixel(i, j), expected)


def test_waxing_crescent():
    """Test crescent lit region lies outside the terminator on the right."""
    surface = draw_moon(0.25, waxing=True)
    # Terminator half-width is 20 * |1 - 2 * 0.25| = 10
    assert np.allclose(surface.pixel(65, 50), LIGHT)
    assert np.allclose(surface.pixel(55, 50), DARK)
    assert np.allclose(surface.pixel(44, 50), DARK)
    assert np.allclose(surface.pixel(34, 50), DARK)


def test_waning_crescent():
    """Test that a waning crescent is lit on the left."""
    surface = draw_moon(0.25, waxing=False)
    assert np.allclose(surface.pixel(34, 50), LIGHT)
    assert np.allclose(surface.pixel(44, 50), DARK)
    assert np.allclose(surface.pixel(65, 50), DARK)


def test_waxing_gibbous():
    """Test that the dark sliver of a gibbous moon is opposite the lit side."""
    surface = draw_moon(0.75, waxing=True)
    assert np.allclose(surface.pixel(34, 50), DARK)
    assert np.allclose(surface.pixel(45, 50), LIGHT)
    assert np.allclose(surface.pixel(55, 50), LIGHT)
    assert np.allclose(surface.pixel(65, 50), LIGHT)


def test_moon_outline():
    """Test the mid-gray limb stroke."""
    surface = draw_moon(0.3)
    assert np.allclose(surface.pixel(50, 69), MOON_OUTLINE.as_rgb())
    assert np.allclose(surface.pixel(50, 30), MOON_OUTLINE.as_rgb())


def test_moon_erase_removes_previous_disc():
    """Test that a moved moon leaves no trail."""
    renderer = make_renderer()
    surface = RasterSurface(100, 100)
    first = MoonSnapshot(30, 50, 10, 0.8, True)
    second = MoonSnapshot(70, 50, 10, 0.8, True)

    renderer.draw_moon(surface, first)
    assert renderer.last_moon_rect == first.bounding_rect()
    renderer.draw_moon(surface, second)

    # First box is x in [20, 40), y in [40, 60); inflated by one unit
    assert np.allclose(surface.buffer[39:61, 19:41], 0.0)
    assert renderer.last_moon_rect == second.bounding_rect()
    assert np.allclose(surface.pixel(70, 50), LIGHT)


def test_moon_erase_first_frame_is_noop():
    """Test that the first frame issues no erase fill."""
    renderer = make_renderer()
    recorder = RecordingSurface()
    renderer.draw_moon(recorder, MoonSnapshot(50, 50, 10, 0.0, True))
    assert recorder.count("fill_rect") == 0

    recorder.reset()
    renderer.draw_moon(recorder, MoonSnapshot(55, 50, 10, 0.0, True))
    assert recorder.commands[2] == ("fill_rect", (39, 39, 22, 22))


def test_absent_moon_erases_stale_disc():
    """Test that a moon that disappears is painted over once."""
    renderer = make_renderer()
    surface = RasterSurface(100, 100)
    renderer.draw_moon(surface, MoonSnapshot(50, 50, 10, 1.0, True))

    assert not renderer.draw_moon(surface, None)
    assert np.allclose(surface.buffer[39:61, 39:61], 0.0)
    assert renderer.last_moon_rect is None


def test_frame_layer_order():
    """Test stars, moon, lights, flasher ordering."""
    renderer = make_renderer()
    calls = []
    renderer.draw_stars = lambda surface, stats: calls.append("stars")
    renderer.draw_moon = lambda surface, moon: calls.append("moon") or True
    renderer.draw_building_lights = lambda surface, stats: calls.append("lights")
    renderer.draw_flasher = lambda surface, flasher: calls.append("flasher") or True

    renderer.draw_single_frame(RecordingSurface())
    assert calls == ["stars", "moon", "lights", "flasher"]


def test_frame_counts_end_to_end():
    """Test inclusive per-frame sample counts on an 800x600 canvas."""
    skyline = Skyline(800, 600, building_count=100, stars_per_update=12,
                      building_lights_per_update=15, rng=np.random.default_rng(1))
    renderer = SkylineRenderer(skyline)
    recorder = RecordingSurface()

    stats = renderer.draw_single_frame(recorder)

    assert stats.stars_attempted == 13
    assert stats.lights_attempted == 16
    assert stats.stars_drawn == 13
    assert stats.lights_drawn == 16
    assert not stats.moon_drawn
    assert not stats.flasher_drawn
    assert recorder.count("fill_rect") == 29
    assert recorder.depth == 0


def test_frame_skips_exhausted_samples():
    """Test that failed samples are counted but not drawn."""
    skyline = Skyline(40, 40, max_sample_attempts=5, rng=np.random.default_rng(0))
    skyline.buildings = (Building(width=40, height=41, start_x=0, start_y=0,
                                  z_coordinate=0, style=BUILDING_STYLES[0]),)
    renderer = SkylineRenderer(skyline)
    recorder = RecordingSurface()

    stats = renderer.draw_single_frame(recorder)
    assert stats.stars_attempted == skyline.stars_per_update + 1
    assert stats.stars_drawn == 0


def test_frame_accumulates_without_clearing():
    """Test that earlier frames stay on the surface."""
    skyline = Skyline(200, 150, building_count=20, rng=np.random.default_rng(4))
    renderer = SkylineRenderer(skyline)
    surface = RasterSurface(200, 150)

    renderer.draw_single_frame(surface)
    lit_after_one = int(np.any(surface.buffer > 0, axis=2).sum())
    for _ in range(20):
        renderer.draw_single_frame(surface)
    lit_after_many = int(np.any(surface.buffer > 0, axis=2).sum())

    assert lit_after_one > 0
    assert lit_after_many > lit_after_one


def test_flasher_drawn_last_as_circle():
    """Test the beacon is a filled circle in its color."""
    renderer = make_renderer()
    surface = RasterSurface(100, 100)
    red = Color(1.0, 0.0, 0.0)
    flasher = FlasherSnapshot(center_x=20, center_y=80, radius=4, color=red)

    stats = renderer.draw_single_frame(surface, flasher=flasher)
    assert stats.flasher_drawn
    assert np.allclose(surface.pixel(20, 80), red.as_rgb())
    assert np.allclose(surface.pixel(17, 79), red.as_rgb())


def test_moon_uses_configured_grays():
    """Test custom lit and shadow colors on a half moon."""
    skyline = Skyline(100, 100, building_count=10, rng=np.random.default_rng(0))
    bright = Color.gray(1.0)
    dark = Color.gray(0.3)
    renderer = SkylineRenderer(skyline, moon_light=bright, moon_dark=dark)
    surface = RasterSurface(100, 100)
    moon = MoonSnapshot(center_x=50, center_y=50, radius=20,
                        illuminated_fraction=0.5, waxing=True)
    renderer.draw_moon(surface, moon)

    assert np.allclose(surface.pixel(60, 50), bright.as_rgb())
    assert np.allclose(surface.pixel(39, 50), dark.as_rgb())
