"""Data-parallel renderer for the single-sphere Phong pipeline.

This module runs the same computation as ``phongtracer.core.reference`` in a
Taichi kernel, one thread per pixel. The scene is compiled once from the
Python value types into preallocated Taichi fields:

    - the sphere's inverse transform, computed on the Python side by the
      cofactor-expansion inverse (a singular transform fails here, before
      any kernel runs),
    - the material (color, ambient, diffuse, specular, shininess),
    - the point light (position, intensity).

The kernel then mirrors the reference step for step: transform the camera
ray into object space, solve the unit-sphere quadratic, pick the nearest
non-negative root, carry the normal back with the transposed inverse, and
evaluate the Phong model. Colors are stored unclamped.

Run Taichi with ``default_fp=ti.f64`` for results that match the reference
renderer to floating point precision.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from phongtracer.core.integrator import render_canvas
    >>> from phongtracer.scene.demo import create_sphere_scene
    >>>
    >>> sphere, light, camera = create_sphere_scene(256, 256)
    >>> canvas = render_canvas(sphere, light, camera)
"""

import logging
import time

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from phongtracer.camera.pinhole import PinholeCamera
from phongtracer.core.tuples import BLACK, Tuple
from phongtracer.geometry.sphere import Sphere
from phongtracer.preview.canvas import Canvas
from phongtracer.scene.light import PointLight

logger = logging.getLogger(__name__)

# Type alias for 3D vectors
vec3 = tm.vec3

# =============================================================================
# Scene Fields
# =============================================================================

# World-to-object transform of the sphere
_inverse_transform = ti.Matrix.field(4, 4, dtype=ti.f64, shape=())

# Material: surface color plus (ambient, diffuse, specular, shininess)
_material_color = ti.Vector.field(3, dtype=ti.f64, shape=())
_material_params = ti.Vector.field(4, dtype=ti.f64, shape=())

# Point light
_light_position = ti.Vector.field(3, dtype=ti.f64, shape=())
_light_intensity = ti.Vector.field(3, dtype=ti.f64, shape=())

# Flag to track if a scene has been compiled
_scene_initialized = ti.field(dtype=ti.i32, shape=())


def setup_scene(sphere: Sphere, light: PointLight) -> None:
    """Compile a sphere and a light into the kernel's scene fields.

    Args:
        sphere: The primitive to render. Its transform is inverted here.
        light: The single point light.

    Raises:
        NonInvertibleMatrixError: If the sphere's transform is singular.
    """
    inverse = sphere.inverse_transform
    material = sphere.material

    _inverse_transform[None] = ti.Matrix([list(row) for row in inverse.rows])
    _material_color[None] = list(material.color.as_rgb())
    _material_params[None] = [
        material.ambient,
        material.diffuse,
        material.specular,
        material.shininess,
    ]
    _light_position[None] = [light.position.x, light.position.y, light.position.z]
    _light_intensity[None] = list(light.intensity.as_rgb())
    _scene_initialized[None] = 1


def clear_scene() -> None:
    """Forget the compiled scene."""
    _scene_initialized[None] = 0


def _check_scene_initialized() -> None:
    """Check if a scene is compiled and raise if not."""
    if _scene_initialized[None] == 0:
        raise RuntimeError("Scene not set up. Call setup_scene() first.")


# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 1024
MAX_IMAGE_HEIGHT = 1024

# Image dimensions (actual active size)
_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# Color buffer indexed by (x, y), y = 0 is the top row
_color_buffer = ti.Vector.field(3, dtype=ti.f64, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))

# Flag to track if render target is initialized
_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Initialize the render target buffers.

    Sets the active image dimensions and clears the buffer.

    Args:
        width: Image width in pixels (max MAX_IMAGE_WIDTH).
        height: Image height in pixels (max MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If dimensions are not positive or exceed the maximum.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1

    clear_render_target()


def clear_render_target() -> None:
    """Clear the color buffer to zero."""
    _color_buffer.fill(0.0)


def reset_render_target() -> None:
    """Clear the buffer and mark the render target as not set up."""
    clear_render_target()
    _render_target_initialized[None] = 0


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions.

    Returns:
        Tuple of (width, height).
    """
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


# =============================================================================
# Shading (Taichi functions)
# =============================================================================


@ti.func
def _transform(m, v: vec3, w: ti.f64) -> vec3:
    """Multiply a 4x4 matrix by (v, w) and keep the first three components."""
    result = m @ tm.vec4(v[0], v[1], v[2], w)
    return vec3(result[0], result[1], result[2])


@ti.func
def _reflect(incident: vec3, normal: vec3) -> vec3:
    """Reflect an incident vector about a normal."""
    return incident - 2.0 * tm.dot(incident, normal) * normal


@ti.func
def _normal_at(world_point: vec3) -> vec3:
    """Unit sphere normal at a world-space point.

    The transposed inverse may produce a non-zero fourth component when the
    transform translates; it is dropped before normalizing.
    """
    inverse = _inverse_transform[None]
    object_normal = _transform(inverse, world_point, 1.0)
    world_normal = _transform(inverse.transpose(), object_normal, 0.0)
    return tm.normalize(world_normal)


@ti.func
def _lighting(position: vec3, eye: vec3, normal: vec3) -> vec3:
    """Phong shading with the compiled material and light."""
    params = _material_params[None]
    intensity = _light_intensity[None]

    effective_color = _material_color[None] * intensity
    ambient = effective_color * params[0]

    light_vector = tm.normalize(_light_position[None] - position)
    light_dot_normal = tm.dot(light_vector, normal)

    diffuse = vec3(0.0, 0.0, 0.0)
    specular = vec3(0.0, 0.0, 0.0)

    if light_dot_normal >= 0.0:
        diffuse = effective_color * params[1] * light_dot_normal

        reflect_vector = _reflect(-light_vector, normal)
        reflect_dot_eye = tm.dot(reflect_vector, eye)
        if reflect_dot_eye > 0.0:
            specular = intensity * params[2] * reflect_dot_eye ** params[3]

    return ambient + diffuse + specular


@ti.func
def _shade(origin: vec3, direction: vec3, background: vec3) -> vec3:
    """Color of the visible hit along a ray, or the background on a miss."""
    inverse = _inverse_transform[None]

    # Object space: the sphere is the unit sphere at the origin
    local_origin = _transform(inverse, origin, 1.0)
    local_direction = _transform(inverse, direction, 0.0)

    a = tm.dot(local_direction, local_direction)
    b = 2.0 * tm.dot(local_direction, local_origin)
    c = tm.dot(local_origin, local_origin) - 1.0
    discriminant = b * b - 4.0 * a * c

    result = background

    if discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)
        t1 = (-b - sqrt_d) / (2.0 * a)
        t2 = (-b + sqrt_d) / (2.0 * a)
        t_near = ti.min(t1, t2)
        t_far = ti.max(t1, t2)

        # Nearest root in front of the origin, -1 if both are behind
        t = -1.0
        if t_near >= 0.0:
            t = t_near
        elif t_far >= 0.0:
            t = t_far

        if t >= 0.0:
            position = origin + direction * t
            normal = _normal_at(position)
            result = _lighting(position, -direction, normal)

    return result


@ti.func
def _camera_ray_direction(
    i: ti.i32,
    j: ti.i32,
    eye: vec3,
    pixel_size: ti.f64,
    half_width: ti.f64,
    half_height: ti.f64,
    wall_z: ti.f64,
) -> vec3:
    """Direction from the eye through the top-left corner of pixel (i, j)."""
    world_x = -half_width + pixel_size * i
    world_y = half_height - pixel_size * j
    return tm.normalize(vec3(world_x, world_y, wall_z) - eye)


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_kernel(
    width: ti.i32,
    height: ti.i32,
    eye: vec3,
    pixel_size: ti.f64,
    half_width: ti.f64,
    half_height: ti.f64,
    wall_z: ti.f64,
    background: vec3,
):
    """Shade every pixel of the active region in parallel."""
    for i, j in ti.ndrange(width, height):
        direction = _camera_ray_direction(
            i, j, eye, pixel_size, half_width, half_height, wall_z
        )
        _color_buffer[i, j] = _shade(eye, direction, background)


@ti.kernel
def _render_single_pixel(
    i: ti.i32,
    j: ti.i32,
    eye: vec3,
    pixel_size: ti.f64,
    half_width: ti.f64,
    half_height: ti.f64,
    wall_z: ti.f64,
    background: vec3,
) -> vec3:
    """Shade one pixel. Used for testing and debugging."""
    direction = _camera_ray_direction(
        i, j, eye, pixel_size, half_width, half_height, wall_z
    )
    return _shade(eye, direction, background)


# =============================================================================
# Public Rendering API
# =============================================================================


def _camera_args(camera: PinholeCamera) -> tuple[vec3, float, float, float, float]:
    eye = vec3(camera.eye.x, camera.eye.y, camera.eye.z)
    return eye, camera.pixel_size, camera.half_width, camera.half_height, camera.wall_z


def render_image(camera: PinholeCamera, background: Tuple = BLACK) -> None:
    """Render the compiled scene into the color buffer.

    Args:
        camera: Ray generator. Its dimensions must match the render target.
        background: Color for pixels whose ray misses the sphere.

    Raises:
        RuntimeError: If the scene or render target has not been set up.
        ValueError: If the camera size differs from the render target.
    """
    _check_scene_initialized()
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    if (camera.width, camera.height) != (width, height):
        raise ValueError(
            f"Camera is {camera.width}x{camera.height} but render target is {width}x{height}"
        )

    start_time = time.perf_counter()
    _render_kernel(width, height, *_camera_args(camera), vec3(*background.as_rgb()))
    ti.sync()
    logger.debug(
        "Taichi kernel rendered %dx%d in %.3fs", width, height, time.perf_counter() - start_time
    )


def render_pixel(
    x: int,
    y: int,
    camera: PinholeCamera,
    background: Tuple = BLACK,
) -> tuple[float, float, float]:
    """Shade a single pixel of the compiled scene.

    This is a Python-callable function for testing. For full images use
    render_image(), which processes all pixels in parallel.

    Returns:
        Tuple of (R, G, B) color values.

    Raises:
        RuntimeError: If the scene has not been set up.
    """
    _check_scene_initialized()

    color = _render_single_pixel(x, y, *_camera_args(camera), vec3(*background.as_rgb()))
    return (float(color[0]), float(color[1]), float(color[2]))


def get_image_numpy() -> npt.NDArray[np.float64]:
    """Get the rendered image as a NumPy array.

    Returns the raw, unclamped colors of the active region with shape
    (height, width, 3) and dtype float64; row 0 is the top of the image.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()

    # Full buffer is indexed (x, y); extract the active region
    full_image = _color_buffer.to_numpy()
    image = full_image[:width, :height, :]

    # Transpose from (width, height, 3) to (height, width, 3)
    return np.transpose(image, (1, 0, 2)).astype(np.float64)


def render_canvas(
    sphere: Sphere,
    light: PointLight,
    camera: PinholeCamera,
    *,
    background: Tuple = BLACK,
) -> Canvas:
    """Compile the scene, render it, and return the result as a Canvas.

    Raises:
        NonInvertibleMatrixError: If the sphere's transform is singular.
        ValueError: If the camera exceeds the maximum image size.
    """
    setup_scene(sphere, light)
    setup_render_target(camera.width, camera.height)
    render_image(camera, background)
    return Canvas.from_array(get_image_numpy())
