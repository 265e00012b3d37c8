"""
PixelTransform - Applies orientation transforms to RGBA pixel buffers.
"""

from PIL import Image

from .orientation import OrientationTransform, Primitive

# Pillow rotates counterclockwise
_TRANSPOSE_METHODS = {
    Primitive.FLIP_HORIZONTAL: Image.Transpose.FLIP_LEFT_RIGHT,
    Primitive.FLIP_VERTICAL: Image.Transpose.FLIP_TOP_BOTTOM,
    Primitive.ROTATE_90_CW: Image.Transpose.ROTATE_270,
    Primitive.ROTATE_180: Image.Transpose.ROTATE_180,
    Primitive.ROTATE_90_CCW: Image.Transpose.ROTATE_90,
}


def to_pixel_buffer(img: Image.Image) -> Image.Image:
    """Return an RGBA copy of a decoded image."""
    if img.mode == 'RGBA':
        return img.copy()
    return img.convert('RGBA')


def apply_primitive(primitive: Primitive, buffer: Image.Image) -> Image.Image:
    """Apply a single primitive, returning a new image."""
    return buffer.transpose(_TRANSPOSE_METHODS[primitive])


def apply(transform: OrientationTransform, buffer: Image.Image) -> Image.Image:
    """
    Apply an orientation transform to a pixel buffer.

    The input is never modified. UPRIGHT returns the input itself; every
    other transform returns a new image.
    """
    result = buffer
    for primitive in transform.primitives:
        result = apply_primitive(primitive, result)
    return result
