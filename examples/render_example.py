"""Example with a live matplotlib window."""

from starry_skyline import SkylineEngine
from starry_skyline.render.viewer import SkylineViewer
from starry_skyline.utils import SkylineConfig

def main():
    """Run the engine in real time until the window is closed."""
    config = SkylineConfig(width=640, height=400, building_count=80, seed=123)
    engine = SkylineEngine(config)
    viewer = SkylineViewer(target_fps=config.fps)

    print("Rendering skyline...")
    print("Close the matplotlib window to stop.")

    try:
        while True:
            engine.step()
            if not viewer.show(engine.surface):
                break
    except KeyboardInterrupt:
        print("\nRendering interrupted by user")
    finally:
        viewer.close()
        print(f"Rendered {engine.frame_count} frames")

if __name__ == "__main__":
    main()
