# scenes.py
"""
Built-in demo scenes. Every builder takes the exposure interval, the aspect
ratio and optional asset paths, and returns (camera, objects, background).
"""
import math
import random
from typing import Callable, Dict, List, Optional, Tuple
from pathtracer.camera.camera import Camera
from pathtracer.config import ASPECT_RATIO, DEFAULT_EXPOSURE, DEFAULT_SEED
from pathtracer.core.transform import Transform
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable
from pathtracer.geometry.medium import ConstantMedium
from pathtracer.geometry.mesh import Mesh, load_obj
from pathtracer.geometry.moving import LinearMove
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.triangle import Triangle
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.isotropic import Isotropic
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.material import Empty
from pathtracer.materials.metal import Metal
from pathtracer.materials.perlin import Perlin
from pathtracer.materials.texture_loader import load_texture
from pathtracer.materials.textures import CheckerTexture, MarbleTexture, SolidTexture, TurbulenceTexture
from pathtracer.renderer.env_map_utils import GradientSky, SolidBackground
from pathtracer.renderer.integrator import Background

Scene = Tuple[Camera, List[Hittable], Background]

UP = Vector3(0.0, 1.0, 0.0)


def _orbit_camera(lookat: Vector3, vfov: float, exposure, aspect_ratio) -> Camera:
    return Camera(Vector3(13.0, 2.0, 3.0), lookat, UP, vfov, aspect_ratio,
                  focal_length=10.0, aperture=0.1, exposure=exposure)


def _wide_camera(lookfrom: Vector3, exposure, aspect_ratio) -> Camera:
    lookat = Vector3(0.0, 0.0, 0.0)
    return Camera(lookfrom, lookat, UP, 30.0, aspect_ratio,
                  focal_length=(lookat - lookfrom).length(), aperture=0.01, exposure=exposure)


def _ground_checker() -> CheckerTexture:
    return CheckerTexture(SolidTexture(Vector3(0.2, 0.3, 0.1)), SolidTexture(Vector3(0.9, 0.9, 0.9)))


def _mesh_transform() -> Transform:
    return Transform.stack([
        Transform.rotate(0.0, -math.pi, 0.0),
        Transform.translate(Vector3(5.0, -5.0, -3.0)),
        Transform.scale(Vector3(8.0, 8.0, 8.0)),
    ])


def _require(path: Optional[str], flag: str, scene: str) -> str:
    if not path:
        raise ValueError(f"The {scene} scene needs an asset file; pass {flag}")
    return path


def spheres_scene(exposure=DEFAULT_EXPOSURE, aspect_ratio=ASPECT_RATIO,
                  mesh_path=None, texture_path=None) -> Scene:
    """Three large spheres among a seeded field of small ones, half of them rising."""
    camera = _orbit_camera(Vector3(0.0, 0.0, 0.0), 20.0, exposure, aspect_ratio)

    objects: List[Hittable] = [
        Sphere(Vector3(0.0, -1000.0, 0.0), 1000.0, Lambertian(_ground_checker())),
        Sphere(Vector3(-4.0, 1.0, 0.0), 1.0, Lambertian(Vector3(0.4, 0.2, 0.1))),
        Sphere(Vector3(0.0, 1.0, 0.0), 1.0, Dielectric(1.5)),
        Sphere(Vector3(4.0, 1.0, 0.0), 1.0, Metal(Vector3(0.7, 0.6, 0.5), 0.0)),
    ]

    rng = random.Random(DEFAULT_SEED)
    clearing = Vector3(4.0, 0.2, 0.0)
    for x in range(-11, 12):
        for z in range(-11, 12):
            choose_mat = rng.random()
            center = Vector3(x + 0.1 + 0.8 * rng.random(), 0.2, z + 0.1 + 0.8 * rng.random())
            if (center - clearing).length() < 0.9:
                continue

            if choose_mat < 0.8:
                albedo = Vector3(rng.random(), rng.random(), rng.random()) * \
                    Vector3(rng.random(), rng.random(), rng.random())
                material = Lambertian(albedo)
            elif choose_mat < 0.95:
                albedo = Vector3(rng.uniform(0.5, 1.0), rng.uniform(0.5, 1.0), rng.uniform(0.5, 1.0))
                material = Metal(albedo, rng.uniform(0.0, 0.5))
            else:
                material = Dielectric(1.5)

            sphere = Sphere(center, 0.2, material)
            if rng.random() > 0.5:
                objects.append(sphere)
            else:
                objects.append(LinearMove(sphere, Vector3(0.0, rng.uniform(0.1, 0.6), 0.0)))

    return camera, objects, GradientSky()


def perlin_scene(exposure=DEFAULT_EXPOSURE, aspect_ratio=ASPECT_RATIO,
                 mesh_path=None, texture_path=None) -> Scene:
    camera = _orbit_camera(Vector3(0.0, 0.0, 0.0), 20.0, exposure, aspect_ratio)
    marble = Lambertian(MarbleTexture(Perlin(DEFAULT_SEED), 4.0))
    objects = [
        Sphere(Vector3(0.0, -1000.0, 0.0), 1000.0, marble),
        Sphere(Vector3(0.0, 2.0, 0.0), 2.0, marble),
    ]
    return camera, objects, GradientSky()


def earth_scene(exposure=DEFAULT_EXPOSURE, aspect_ratio=ASPECT_RATIO,
                mesh_path=None, texture_path=None) -> Scene:
    camera = _orbit_camera(Vector3(0.0, 2.0, 0.0), 30.0, exposure, aspect_ratio)
    earth = load_texture(_require(texture_path, "--texture", "earth"))
    objects = [
        Sphere(Vector3(0.0, -1000.0, 0.0), 1000.0, Lambertian(MarbleTexture(Perlin(DEFAULT_SEED), 4.0))),
        Sphere(Vector3(0.0, 2.0, 0.0), 2.0, Lambertian(earth)),
    ]
    return camera, objects, GradientSky()


def earth_lights_scene(exposure=DEFAULT_EXPOSURE, aspect_ratio=ASPECT_RATIO,
                       mesh_path=None, texture_path=None) -> Scene:
    """The earth scene lit only by a small bright sphere."""
    camera, objects, _ = earth_scene(exposure, aspect_ratio, mesh_path, texture_path)
    objects.append(Sphere(Vector3(6.0, 6.0, 6.0), 0.5, DiffuseLight(Vector3(1.0, 1.0, 1.0), 50.0)))
    return camera, objects, SolidBackground(Vector3(0.0, 0.0, 0.0))


def checker_scene(exposure=DEFAULT_EXPOSURE, aspect_ratio=ASPECT_RATIO,
                  mesh_path=None, texture_path=None) -> Scene:
    camera = _orbit_camera(Vector3(0.0, 0.0, 0.0), 20.0, exposure, aspect_ratio)
    checker = Lambertian(_ground_checker())
    objects = [
        Sphere(Vector3(0.0, -10.0, 0.0), 10.0, checker),
        Sphere(Vector3(0.0, 10.0, 0.0), 10.0, checker),
    ]
    return camera, objects, GradientSky()


def triangle_scene(exposure=DEFAULT_EXPOSURE, aspect_ratio=ASPECT_RATIO,
                   mesh_path=None, texture_path=None) -> Scene:
    camera = Camera(Vector3(0.0, 0.0, -3.0), Vector3(0.0, 0.0, 0.0), UP, 45.0, aspect_ratio,
                    focal_length=10.0, aperture=0.1, exposure=exposure)
    facing = Vector3(0.0, 0.0, -1.0)
    objects = [
        Sphere(Vector3(0.0, -10.5, 0.0), 10.0, Lambertian(Vector3(0.6, 0.4, 0.2))),
        Triangle(Vector3(0.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0), Vector3(1.0, 0.0, 0.0),
                 Lambertian(Vector3(1.0, 0.0, 0.0)), facing, facing, facing),
    ]
    return camera, objects, GradientSky()


def medium_scene(exposure=DEFAULT_EXPOSURE, aspect_ratio=ASPECT_RATIO,
                 mesh_path=None, texture_path=None) -> Scene:
    """A fog sphere over marble ground, plus a fog-filled mesh when one is given."""
    camera = _wide_camera(Vector3(0.0, 3.0, -20.0), exposure, aspect_ratio)
    fog = Isotropic(Vector3(0.2, 0.4, 0.6))
    objects: List[Hittable] = [
        Sphere(Vector3(0.0, -1005.0, 0.0), 1000.0, Lambertian(MarbleTexture(Perlin(DEFAULT_SEED), 4.0))),
        ConstantMedium(Sphere(Vector3(6.0, 0.0, 0.0), 5.0, Empty()), fog, 0.5),
    ]
    if mesh_path:
        boundary = Mesh.load(mesh_path, Empty(), _mesh_transform(), exposure)
        objects.append(ConstantMedium(boundary, fog, 0.5))
    return camera, objects, GradientSky()


def mesh_scene(exposure=DEFAULT_EXPOSURE, aspect_ratio=ASPECT_RATIO,
               mesh_path=None, texture_path=None) -> Scene:
    """A glass model on turbulent ground next to a brushed sphere, lit by two lamps."""
    camera = _wide_camera(Vector3(0.0, -3.0, -20.0), exposure, aspect_ratio)
    objects: List[Hittable] = list(load_obj(_require(mesh_path, "--mesh", "mesh"),
                                            Dielectric(1.5), _mesh_transform()))

    sphere_albedo = load_texture(texture_path) if texture_path else Vector3(0.8, 0.8, 0.8)
    lamp = DiffuseLight(Vector3(1.0, 1.0, 1.0), 40.0)
    objects.extend([
        Sphere(Vector3(0.0, -1005.0, 0.0), 1000.0,
               Lambertian(TurbulenceTexture(Perlin(DEFAULT_SEED), 0.1, 7))),
        Sphere(Vector3(6.0, 0.0, 0.0), 5.0, Metal(sphere_albedo, 0.7)),
        Sphere(Vector3(3.0, 10.0, 5.0), 3.0, lamp),
        Sphere(Vector3(-3.0, 3.5, -7.0), 1.0, lamp),
    ])
    return camera, objects, GradientSky(up_scale=0.2)


SCENES: Dict[str, Callable[..., Scene]] = {
    "spheres": spheres_scene,
    "perlin": perlin_scene,
    "earth": earth_scene,
    "earth_lights": earth_lights_scene,
    "checker": checker_scene,
    "triangle": triangle_scene,
    "medium": medium_scene,
    "mesh": mesh_scene,
}


def build_scene(name: str, exposure=DEFAULT_EXPOSURE, aspect_ratio=ASPECT_RATIO,
                mesh_path: Optional[str] = None, texture_path: Optional[str] = None) -> Scene:
    try:
        builder = SCENES[name]
    except KeyError:
        raise ValueError(f"Unknown scene {name!r}; choose one of {', '.join(SCENES)}") from None
    return builder(exposure, aspect_ratio, mesh_path, texture_path)
