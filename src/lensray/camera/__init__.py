"""Camera module for view and ray generation.

Components:
    thin_lens: Look-at camera with field of view, anti-aliasing jitter and a
        defocus disk for depth of field

Camera responsibilities:
    - Derive the orthonormal basis and pixel grid from the view parameters
    - Generate jittered, lens-sampled primary rays per pixel
    - Drive the row-major render loop into a pixel sink
"""

from .thin_lens import (
    Camera,
    CameraFrame,
    ProgressCallback,
    build_frame,
    compute_image_height,
    defocus_disk_sample,
    get_ray,
    pixel_sample_square,
    render_frame,
)

__all__ = [
    "Camera",
    "CameraFrame",
    "ProgressCallback",
    "build_frame",
    "compute_image_height",
    "get_ray",
    "pixel_sample_square",
    "defocus_disk_sample",
    "render_frame",
]
