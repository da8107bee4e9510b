"""CLI main entry point."""

import argparse
import logging
import sys
from datetime import datetime, timedelta, timezone

from starry_skyline.engine import SkylineEngine
from starry_skyline.errors import ConfigurationError
from starry_skyline.io.frame_io import save_frame
from starry_skyline.io.gif_exporter import GIFExporter
from starry_skyline.io.video_exporter import VideoExporter
from starry_skyline.utils.config import SkylineConfig, load_config
from starry_skyline.utils.log import setup_logging
from starry_skyline.utils.reproducibility import get_seed_info

logger = logging.getLogger(__name__)

# CLI flag -> SkylineConfig field, applied only when the flag is given
OVERRIDES = {
    'width': 'width',
    'height': 'height',
    'buildings': 'building_count',
    'stars_per_update': 'stars_per_update',
    'lights_per_update': 'building_lights_per_update',
    'frames': 'frames',
    'fps': 'fps',
    'seed': 'seed',
    'moon_phase': 'moon_phase_override',
    'moon_bright': 'moon_bright_brightness',
    'moon_dark': 'moon_dark_brightness',
    'output': 'output_path',
}


def build_config(args) -> SkylineConfig:
    """Config file (if any) with command-line overrides applied."""
    config = load_config(args.config) if args.config else SkylineConfig()
    for arg_name, field_name in OVERRIDES.items():
        value = getattr(args, arg_name)
        if value is not None:
            setattr(config, field_name, value)
    if args.no_moon:
        config.moon_enabled = False
    if args.no_flasher:
        config.flasher_enabled = False
    config.validate()
    return config


def run(args) -> int:
    """Render frames as requested by the parsed arguments."""
    config = build_config(args)
    start = datetime.now(timezone.utc)
    engine = SkylineEngine(config, start_time=start)
    logger.debug("generator: %s", get_seed_info(engine.rng, config.seed))

    viewer = None
    if args.show:
        from starry_skyline.render.viewer import SkylineViewer
        viewer = SkylineViewer(target_fps=config.fps)

    gif_exporter = None
    if args.export_gif:
        gif_exporter = GIFExporter(config.output_path + ".gif", fps=config.fps, hold_last=args.gif_hold)
    video_exporter = None
    if args.export_video:
        video_exporter = VideoExporter(config.output_path + ".mp4", fps=config.fps)

    print(f"Rendering {config.frames} frames on a {config.width}x{config.height} canvas "
          f"with {config.building_count} buildings (seed: {config.seed})")

    # Frames are spaced on a simulated clock so output is reproducible.
    frame_step = timedelta(seconds=1.0 / config.fps)
    stars = lights = 0
    try:
        for index in range(config.frames):
            stats = engine.step(start + index * frame_step)
            stars += stats.stars_drawn
            lights += stats.lights_drawn

            if viewer is not None and not viewer.show(engine.surface):
                print("Viewer closed, stopping.")
                break
            if gif_exporter:
                gif_exporter.capture(engine.surface)
            if video_exporter:
                video_exporter.capture(engine.surface)
    except KeyboardInterrupt:
        print("\nRendering interrupted by user")
    finally:
        if viewer is not None:
            viewer.close()

    print(f"Drew {stars} stars and {lights} building lights over {engine.frame_count} frames")

    if gif_exporter and gif_exporter.frames:
        print(f"Exporting GIF to {gif_exporter.output_path}...")
        gif_exporter.export()

    if video_exporter and video_exporter.frames:
        print(f"Exporting video to {video_exporter.output_path}...")
        video_exporter.export()

    if args.save_frame:
        save_frame(engine.capture_frame(), args.save_frame, metadata={
            'frames': engine.frame_count,
            'width': engine.width,
            'height': engine.height,
            'seed': config.seed if config.seed is not None else -1,
        })
        print(f"Frame saved to {args.save_frame}")

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Starry Skyline - procedural night city renderer")

    parser.add_argument('--config', type=str, default=None,
                        help='JSON or YAML config file; flags below override it')

    # Scene
    parser.add_argument('--width', type=int, default=None,
                        help='Canvas width in pixels (default: 800)')
    parser.add_argument('--height', type=int, default=None,
                        help='Canvas height in pixels (default: 600)')
    parser.add_argument('--buildings', type=int, default=None,
                        help='Number of buildings (default: 100)')
    parser.add_argument('--stars-per-update', type=int, default=None,
                        help='Star samples per frame; one extra is always drawn (default: 12)')
    parser.add_argument('--lights-per-update', type=int, default=None,
                        help='Window light samples per frame; one extra is always drawn (default: 15)')

    # Sky
    parser.add_argument('--no-moon', action='store_true',
                        help='Disable the moon')
    parser.add_argument('--no-flasher', action='store_true',
                        help='Disable the beacon on the tallest building')
    parser.add_argument('--moon-phase', type=float, default=None,
                        help='Fixed illuminated fraction in [0, 1] instead of today\'s phase')
    parser.add_argument('--moon-bright', type=float, default=None,
                        help='Gray level of the lit moon, 0.2 to 1.0 (default: 0.85)')
    parser.add_argument('--moon-dark', type=float, default=None,
                        help='Gray level of the moon\'s shadow, 0.0 to 0.9 (default: 0.08)')

    # Output
    parser.add_argument('--frames', type=int, default=None,
                        help='Number of frames to render (default: 200)')
    parser.add_argument('--fps', type=int, default=None,
                        help='Frames per second for the viewer and exports (default: 20)')
    parser.add_argument('--show', action='store_true',
                        help='Show frames in a matplotlib window')
    parser.add_argument('--export-gif', action='store_true',
                        help='Export to animated GIF')
    parser.add_argument('--gif-hold', type=float, default=2.0,
                        help='Seconds to hold the final GIF frame (default: 2.0)')
    parser.add_argument('--export-video', action='store_true',
                        help='Export to MP4 video')
    parser.add_argument('--output', type=str, default=None,
                        help='Output file base name (default: skyline)')
    parser.add_argument('--save-frame', type=str, default=None,
                        help='Save the final frame (.png or .npz)')

    # Reproducibility
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for reproducibility')
    parser.add_argument('--verbose', action='store_true',
                        help='Debug logging')
    return parser


def main(argv=None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        return run(args)
    except ConfigurationError as e:
        logger.error("invalid configuration: %s", e)
        return 2


if __name__ == '__main__':
    sys.exit(main())
