import argparse

# Offset applied to every world query to avoid re-hitting the surface a ray
# just left. Half of it pads triangle boxes and bounds the triangle determinant.
EPSILON = 0.001
MAX_BOUNCES = 5

ASPECT_RATIO = 3.0 / 2.0
DEFAULT_WIDTH = 1200
DEFAULT_SAMPLES = 100
DEFAULT_EXPOSURE = (0.0, 1.0)
DEFAULT_SEED = 0xAA33EBC

SCENE_NAMES = (
    "spheres",
    "perlin",
    "earth",
    "earth_lights",
    "checker",
    "triangle",
    "medium",
    "mesh",
)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Monte-Carlo path tracer")
    parser.add_argument('--scene', choices=SCENE_NAMES, default='spheres', help='Built-in scene to render (default: spheres)')
    parser.add_argument('--width', type=int, default=DEFAULT_WIDTH, help=f'Image width in pixels (default: {DEFAULT_WIDTH})')
    parser.add_argument('--height', type=int, default=None, help='Image height in pixels (default: width / aspect ratio)')
    parser.add_argument('--samples', type=int, default=DEFAULT_SAMPLES, help=f'Samples per pixel (default: {DEFAULT_SAMPLES})')
    parser.add_argument('--max-bounces', type=int, default=MAX_BOUNCES, help=f'Bounce cap per light path (default: {MAX_BOUNCES})')
    parser.add_argument('--workers', type=int, default=None, help='Worker processes; 1 renders single-threaded (default: CPU count)')
    parser.add_argument('--seed', type=int, default=DEFAULT_SEED, help='Seed for the per-row random sources')
    parser.add_argument('--output', type=str, default='render.ppm', help='Output image; .ppm writes a P3 raster, other suffixes go through Pillow')
    parser.add_argument('--preview', action='store_true', help='Open a live window that refines the image progressively')
    parser.add_argument('--mesh', type=str, default=None, help='OBJ file used by the mesh and medium scenes')
    parser.add_argument('--texture', type=str, default=None, help='Image file used by the earth scenes')
    parser.add_argument('--log-level', type=str, default='INFO', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], help='Logging level (default: INFO)')
    args = parser.parse_args(argv)
    if args.height is None:
        args.height = max(1, int(args.width / ASPECT_RATIO))
    if args.width < 2 or args.height < 2:
        parser.error("image must be at least 2x2 pixels")
    if args.samples < 1:
        parser.error("--samples must be positive")
    return args
