"""CPU ray tracer with thin-lens depth of field.

This package renders still images of 3D scenes with recursive ray tracing,
with support for:
- Stochastic box-filter anti-aliasing
- Thin-lens defocus blur (depth of field)
- Various material models (Lambertian, metal, dielectric)
- Geometric primitives (spheres, quads)
- Streaming PPM output and in-memory image buffers

Subpackages:
    core: Ray, vector utilities, intervals and the ray colour integrator
    geometry: Shape primitives and intersection algorithms
    materials: Material interface and scattering models
    scene: Hit records, hittable lists and demo scenes
    camera: Thin-lens camera with ray generation and the render loop
    output: Pixel sinks (PPM stream, image buffer) and colour quantization
"""

__version__ = "0.1.0"
