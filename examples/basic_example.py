"""Basic example of drawing a skyline onto a raster surface."""

from starry_skyline import MoonSnapshot, RasterSurface, Skyline, SkylineRenderer
from starry_skyline.io import save_frame
from starry_skyline.utils import make_rng

def main():
    """Accumulate a few hundred frames and save the result."""
    rng = make_rng(42)

    # One skyline per canvas size
    skyline = Skyline(800, 600, building_count=100, rng=rng)
    renderer = SkylineRenderer(skyline, rng=rng)
    surface = RasterSurface(800, 600)

    # A waxing crescent drifting slowly to the right
    print("Drawing frames...")
    for frame in range(300):
        moon = MoonSnapshot(
            center_x=150 + frame * 0.5,
            center_y=420,
            radius=30,
            illuminated_fraction=0.3,
            waxing=True
        )
        stats = renderer.draw_single_frame(surface, moon=moon)
        if frame % 100 == 0:
            print(f"Frame {frame}: {stats.stars_drawn} stars, {stats.lights_drawn} lights")

    save_frame(surface.capture_frame(), "skyline.png")
    print("Saved skyline.png")

if __name__ == "__main__":
    main()
