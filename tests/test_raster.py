"""Tests for the raster and recording surfaces."""

import numpy as np
import pytest
from starry_skyline.errors import ConfigurationError
from starry_skyline.render.raster import RasterSurface
from starry_skyline.render.recording import RecordingSurface
from starry_skyline.scene.points import Color

RED = Color(1.0, 0.0, 0.0)
GREEN = Color(0.0, 1.0, 0.0)


def test_surface_size_validated():
    """Test that empty surfaces are rejected."""
    with pytest.raises(ConfigurationError):
        RasterSurface(0, 10)
    with pytest.raises(ConfigurationError):
        RasterSurface(10, -1)


def test_fill_rect_covers_pixel_centers():
    """Test rectangle coverage with a y-up origin."""
    surface = RasterSurface(20, 20)
    surface.set_fill_color(RED)
    surface.fill_rect(2, 3, 4, 2)

    assert np.allclose(surface.pixel(2, 3), RED.as_rgb())
    assert np.allclose(surface.pixel(5, 4), RED.as_rgb())
    assert np.allclose(surface.pixel(6, 3), 0.0)
    assert np.allclose(surface.pixel(2, 5), 0.0)
    assert np.allclose(surface.pixel(1, 3), 0.0)
    assert int(np.all(surface.buffer == RED.as_rgb(), axis=2).sum()) == 8


def test_capture_frame_is_top_row_first():
    """Test that captured frames put y = 0 on the bottom row."""
    surface = RasterSurface(4, 3)
    surface.set_fill_color(RED)
    surface.fill_rect(0, 0, 1, 1)

    frame = surface.capture_frame()
    assert frame.shape == (3, 4, 3)
    assert frame.dtype == np.uint8
    assert tuple(frame[2, 0]) == (255, 0, 0)
    assert tuple(frame[0, 0]) == (0, 0, 0)


def test_out_of_bounds_drawing_is_clipped():
    """Test that drawing off the surface is silently ignored."""
    surface = RasterSurface(10, 10)
    surface.set_fill_color(RED)
    surface.fill_rect(-20, -20, 5, 5)
    surface.fill_rect(100, 100, 5, 5)
    surface.fill_ellipse(-50, 40, 10, 10)
    assert np.allclose(surface.buffer, 0.0)

    surface.fill_rect(-5, -5, 6, 6)
    assert np.allclose(surface.pixel(0, 0), RED.as_rgb())


def test_fill_ellipse():
    """Test ellipse coverage."""
    surface = RasterSurface(10, 10)
    surface.set_fill_color(GREEN)
    surface.fill_ellipse(0, 0, 10, 10)

    assert np.allclose(surface.pixel(4, 4), GREEN.as_rgb())
    assert np.allclose(surface.pixel(9, 5), GREEN.as_rgb())
    assert np.allclose(surface.pixel(0, 0), 0.0)
    assert np.allclose(surface.pixel(9, 9), 0.0)


def test_zero_width_ellipse_draws_nothing():
    """Test that a degenerate ellipse covers no pixels."""
    surface = RasterSurface(10, 10)
    surface.set_fill_color(GREEN)
    surface.fill_ellipse(5, 0, 0, 10)
    assert np.allclose(surface.buffer, 0.0)


def test_stroke_ellipse_ring():
    """Test that a stroke covers the limb but not the interior."""
    surface = RasterSurface(40, 40)
    surface.set_stroke_color(RED)
    surface.set_line_width(1.0)
    surface.stroke_ellipse(10, 10, 20, 20)

    assert np.allclose(surface.pixel(20, 29), RED.as_rgb())
    assert np.allclose(surface.pixel(20, 10), RED.as_rgb())
    assert np.allclose(surface.pixel(20, 20), 0.0)
    assert np.allclose(surface.pixel(2, 2), 0.0)


def test_clip_and_restore():
    """Test that clips intersect and are undone by restore_state()."""
    surface = RasterSurface(10, 10)
    surface.save_state()
    surface.clip_to_rect(0, 0, 5, 5)
    surface.clip_to_rect(2, 2, 10, 10)
    surface.set_fill_color(RED)
    surface.fill_rect(0, 0, 10, 10)
    surface.restore_state()

    assert np.allclose(surface.pixel(3, 3), RED.as_rgb())
    assert np.allclose(surface.pixel(1, 1), 0.0)
    assert np.allclose(surface.pixel(7, 7), 0.0)

    # Fill color was restored too
    surface.fill_rect(0, 0, 10, 10)
    assert np.allclose(surface.pixel(7, 7), 0.0)

    surface.set_fill_color(GREEN)
    surface.fill_rect(0, 0, 10, 10)
    assert np.allclose(surface.pixel(7, 7), GREEN.as_rgb())


def test_clip_to_ellipse():
    """Test ellipse clipping via the saved_state() context manager."""
    surface = RasterSurface(10, 10)
    with surface.saved_state():
        surface.clip_to_ellipse(0, 0, 10, 10)
        surface.set_fill_color(RED)
        surface.fill_rect(0, 0, 10, 10)

    assert np.allclose(surface.pixel(5, 5), RED.as_rgb())
    assert np.allclose(surface.pixel(0, 9), 0.0)


def test_restore_without_save_raises():
    """Test unbalanced restore detection."""
    with pytest.raises(RuntimeError):
        RasterSurface(5, 5).restore_state()
    with pytest.raises(RuntimeError):
        RecordingSurface().restore_state()


def test_clear_resets_background():
    """Test that clear() paints the background color."""
    surface = RasterSurface(5, 5, background=Color(0.0, 0.0, 0.2))
    surface.set_fill_color(RED)
    surface.fill_rect(0, 0, 5, 5)
    surface.clear()
    assert np.allclose(surface.pixel(2, 2), (0.0, 0.0, 0.2))


def test_recording_replay_matches_direct_drawing():
    """Test that replaying recorded commands reproduces the image."""
    recorder = RecordingSurface()
    with recorder.saved_state():
        recorder.clip_to_ellipse(2, 2, 12, 12)
        recorder.set_fill_color(RED)
        recorder.fill_rect(0, 0, 8, 16)
    recorder.set_stroke_color(GREEN)
    recorder.stroke_ellipse(2, 2, 12, 12)

    assert recorder.count("fill_rect") == 1
    assert recorder.operations()[0] == "save_state"
    assert recorder.depth == 0

    direct = RasterSurface(16, 16)
    with direct.saved_state():
        direct.clip_to_ellipse(2, 2, 12, 12)
        direct.set_fill_color(RED)
        direct.fill_rect(0, 0, 8, 16)
    direct.set_stroke_color(GREEN)
    direct.stroke_ellipse(2, 2, 12, 12)

    replayed = RasterSurface(16, 16)
    recorder.replay(replayed)
    assert np.array_equal(direct.buffer, replayed.buffer)
