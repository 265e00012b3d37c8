"""
Orientation - Decodes the EXIF orientation tag into pixel transforms.
"""

import enum
import logging
from pathlib import Path
from typing import Any, Optional, Tuple, Union

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

# EXIF tag id for Orientation (0x0112)
ORIENTATION_TAG = 0x0112


class Primitive(enum.Enum):
    """Exact pixel permutations a transform is composed of."""

    FLIP_HORIZONTAL = 'flip-horizontal'
    FLIP_VERTICAL = 'flip-vertical'
    ROTATE_90_CW = 'rotate-90-cw'
    ROTATE_180 = 'rotate-180'
    ROTATE_90_CCW = 'rotate-90-ccw'


class OrientationTransform(enum.Enum):
    """
    The eight orientations an EXIF tag can describe.

    Each member's value is (code, primitives). Primitives are applied
    left to right; UPRIGHT has none.
    """

    UPRIGHT = (1, ())
    FLIPPED_HORIZONTAL = (2, (Primitive.FLIP_HORIZONTAL,))
    ROTATED_180 = (3, (Primitive.ROTATE_180,))
    FLIPPED_VERTICAL = (4, (Primitive.FLIP_VERTICAL,))
    TRANSPOSE = (5, (Primitive.FLIP_HORIZONTAL, Primitive.ROTATE_90_CW))
    ROTATED_90_CCW = (6, (Primitive.ROTATE_90_CCW,))
    TRANSVERSE = (7, (Primitive.FLIP_HORIZONTAL, Primitive.ROTATE_90_CCW))
    ROTATED_90_CW = (8, (Primitive.ROTATE_90_CW,))

    @property
    def code(self) -> int:
        return self.value[0]

    @property
    def primitives(self) -> Tuple[Primitive, ...]:
        return self.value[1]

    @property
    def is_identity(self) -> bool:
        return not self.primitives


_BY_CODE = {transform.code: transform for transform in OrientationTransform}


def _parse_code(raw_tag: Any) -> Optional[int]:
    """Parse a raw tag value as an unsigned integer, or return None."""
    if isinstance(raw_tag, bool):
        return None
    if isinstance(raw_tag, int):
        return raw_tag if raw_tag >= 0 else None
    if isinstance(raw_tag, float):
        return int(raw_tag) if raw_tag.is_integer() and raw_tag >= 0 else None
    if isinstance(raw_tag, bytes):
        raw_tag = raw_tag.decode('ascii', errors='replace')
    if isinstance(raw_tag, str):
        text = raw_tag.strip()
        # isdigit() alone accepts characters like '²' that int() rejects
        return int(text) if text.isascii() and text.isdigit() else None
    # Some EXIF readers hand back a one-element tuple
    if isinstance(raw_tag, (tuple, list)) and len(raw_tag) == 1:
        return _parse_code(raw_tag[0])
    return None


def resolve(raw_tag: Any, source: Optional[Union[str, Path]] = None) -> OrientationTransform:
    """
    Map a raw orientation tag value to its transform.

    Missing, malformed or out-of-range values fall back to UPRIGHT with a
    warning; this never raises.

    Args:
        raw_tag: Tag value as read from the file, or None if absent
        source: Optional path, used only in log messages
    """
    where = f" for {source}" if source is not None else ""

    if raw_tag is None:
        logger.debug(f"No orientation tag{where}, assuming upright")
        return OrientationTransform.UPRIGHT

    code = _parse_code(raw_tag)
    if code is None:
        logger.warning(f"Orientation value {raw_tag!r} is broken{where}, assuming upright")
        return OrientationTransform.UPRIGHT

    transform = _BY_CODE.get(code)
    if transform is None:
        logger.warning(f"Invalid orientation value {code}{where}, assuming upright")
        return OrientationTransform.UPRIGHT

    return transform


def read_orientation_tag(path: Union[str, Path]) -> Optional[Any]:
    """
    Read the raw EXIF orientation value from an image file.

    Returns None if the tag is absent or the file's metadata cannot be read.
    """
    try:
        with Image.open(path) as img:
            return img.getexif().get(ORIENTATION_TAG)
    except (OSError, UnidentifiedImageError, SyntaxError, ValueError, TypeError) as e:
        logger.warning(f"Reading orientation tag failed for {path}: {e}")
        return None
