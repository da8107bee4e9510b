"""Tests for the command-line interface."""

import json

from starry_skyline.cli.main import build_config, build_parser, main
from starry_skyline.io.frame_io import load_frame


def test_cli_renders_and_saves(tmp_path, capsys):
    """Test a short headless run."""
    out = tmp_path / "final.npz"
    code = main(['--width', '120', '--height', '90', '--buildings', '10',
                 '--frames', '3', '--seed', '7', '--save-frame', str(out)])

    assert code == 0
    frame, metadata = load_frame(str(out))
    assert frame.shape == (90, 120, 3)
    assert metadata["frames"] == 3
    assert "Rendering 3 frames" in capsys.readouterr().out


def test_cli_overrides_config_file(tmp_path):
    """Test that flags win over config file values."""
    path = tmp_path / "skyline.json"
    path.write_text(json.dumps({"width": 300, "height": 200, "building_count": 30}))

    args = build_parser().parse_args(['--config', str(path), '--buildings', '12', '--no-moon'])
    config = build_config(args)

    assert config.width == 300
    assert config.building_count == 12
    assert not config.moon_enabled
    assert config.flasher_enabled


def test_cli_reports_bad_config():
    """Test that invalid settings exit with status 2."""
    assert main(['--width', '0', '--frames', '1']) == 2


def test_cli_exports_gif(tmp_path):
    """Test GIF export from a short run."""
    base = tmp_path / "city"
    code = main(['--width', '64', '--height', '48', '--buildings', '5', '--frames', '4',
                 '--seed', '1', '--export-gif', '--gif-hold', '0.5', '--output', str(base)])

    assert code == 0
    assert (tmp_path / "city.gif").stat().st_size > 0
