# main.py
import logging
import sys
from pathtracer.config import DEFAULT_EXPOSURE, parse_args
from pathtracer.geometry.bvh import build_bvh
from pathtracer.renderer.image import Image, RenderJob
from pathtracer.renderer.preview import run_preview
from pathtracer.renderer.progressive import ProgressiveRenderer
from pathtracer.scenes import build_scene

logger = logging.getLogger("pathtracer")


def render(args):
    aspect_ratio = args.width / args.height
    camera, objects, background = build_scene(args.scene, DEFAULT_EXPOSURE, aspect_ratio,
                                              mesh_path=args.mesh, texture_path=args.texture)
    world = build_bvh(objects, DEFAULT_EXPOSURE)

    if args.preview:
        job = RenderJob(camera, world, background, args.width, args.height, 1,
                        args.max_bounces, args.seed)
        renderer = ProgressiveRenderer(job, workers=args.workers)
        run_preview(renderer, max_passes=args.samples, output=args.output)
        return

    if args.workers == 1:
        image = Image.cast(args.width, args.height, args.samples, camera, world, background,
                           seed=args.seed, max_bounces=args.max_bounces)
    else:
        image = Image.par_cast(args.width, args.height, args.samples, camera, world, background,
                               seed=args.seed, max_bounces=args.max_bounces, workers=args.workers)
    image.save(args.output)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='%(asctime)s %(levelname)s: %(message)s')
    logger.info("Rendering scene %r at %dx%d, %d spp", args.scene, args.width, args.height, args.samples)
    try:
        render(args)
    except (FileNotFoundError, ValueError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
