"""
DerivativeGenerator - Writes corrected originals and width-scaled copies.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, Tuple, Union

from PIL import Image, UnidentifiedImageError

from . import pixel_transform
from .errors import DecodeError, EncodeError, UnsupportedFormat
from .orientation import OrientationTransform, read_orientation_tag, resolve
from .source_asset import AssetResult, AssetState, DerivativeAsset, SourceAsset


def target_height(source_size: Tuple[int, int], width: int) -> int:
    """Height that keeps the source aspect ratio at the given width."""
    source_width, source_height = source_size
    return max(1, round(width / (source_width / source_height)))


class DerivativeGenerator:
    """
    Generates the corrected original and scaled derivatives for one asset.

    Targets that already exist are never rewritten, so running the
    generator again over a finished tree does no encoding work.
    """

    OUTPUT_FORMATS = {
        'jpg': 'JPEG',
        'jpeg': 'JPEG',
        'png': 'PNG',
        'gif': 'GIF',
        'webp': 'WEBP',
    }

    def __init__(
        self,
        quality: int = 85,
        orientation_reader: Callable[[Path], Any] = read_orientation_tag,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize derivative generator.

        Args:
            quality: JPEG/WEBP quality for re-encoded output (default: 85)
            orientation_reader: Returns the raw orientation tag for a path
            logger: Optional logger instance
        """
        self.quality = quality
        self.orientation_reader = orientation_reader
        self.logger = logger or logging.getLogger(__name__)

    def generate(
        self,
        asset: SourceAsset,
        widths: Iterable[int],
        output_root: Union[str, Path],
        result: Optional[AssetResult] = None
    ) -> List[DerivativeAsset]:
        """
        Generate the corrected original and all derivatives of an asset.

        Args:
            asset: Source asset
            widths: Target widths, applied in order
            output_root: Root of the output tree
            result: Optional result record updated as processing advances

        Returns:
            One DerivativeAsset for the corrected original, then one per width

        Raises:
            DecodeError: If the source cannot be decoded
            EncodeError: If an output file cannot be written
        """
        output_root = Path(output_root)
        widths = list(widths)
        result = result if result is not None else AssetResult(asset=asset)

        corrected_path = asset.corrected_path(output_root)
        targets = [(w, asset.derivative_path(output_root, w)) for w in widths]

        if corrected_path.exists() and all(path.exists() for _, path in targets):
            self.logger.debug(f"All outputs exist for {asset.path}, skipping")
            result.derivatives.append(DerivativeAsset(asset, None, corrected_path, generated=False))
            result.derivatives.extend(
                DerivativeAsset(asset, w, path, generated=False) for w, path in targets
            )
            result.state = AssetState.COMPLETE
            return result.derivatives

        buffer = self.decode(asset.path)
        result.state = AssetState.DECODED

        transform = resolve(self._read_orientation(asset.path), source=asset.path)
        corrected = pixel_transform.apply(transform, buffer)
        result.state = AssetState.ORIENTATION_CORRECTED
        if not transform.is_identity:
            self.logger.debug(
                f"Corrected {asset.path}: {transform.name} "
                f"{buffer.size[0]}x{buffer.size[1]} -> {corrected.size[0]}x{corrected.size[1]}"
            )

        if corrected_path.exists():
            result.derivatives.append(DerivativeAsset(asset, None, corrected_path, generated=False))
        else:
            size = self._persist_corrected(asset, transform, corrected, corrected_path)
            result.derivatives.append(DerivativeAsset(asset, None, corrected_path, size=size))

        for width, path in targets:
            if path.exists():
                result.derivatives.append(DerivativeAsset(asset, width, path, generated=False))
                continue

            height = target_height(corrected.size, width)
            scaled = corrected.resize((width, height), Image.Resampling.LANCZOS)
            size = self.persist(scaled, path)
            self.logger.debug(f"Wrote {path} ({width}x{height})")
            result.derivatives.append(DerivativeAsset(asset, width, path, size=size))

        result.state = AssetState.COMPLETE
        return result.derivatives

    def decode(self, path: Path) -> Image.Image:
        """Decode an image file into an RGBA pixel buffer."""
        try:
            with Image.open(path) as img:
                img.load()
                return pixel_transform.to_pixel_buffer(img)
        except (OSError, UnidentifiedImageError, Image.DecompressionBombError, SyntaxError, ValueError) as e:
            raise DecodeError(path, str(e)) from e

    def persist(self, buffer: Image.Image, path: Path) -> int:
        """
        Encode a pixel buffer to path, choosing the format by extension.

        Returns:
            Number of bytes written
        """
        output_format = self.get_output_format(path)
        img = self._convert_color_mode(buffer, output_format)

        params = {}
        if output_format in ('JPEG', 'WEBP'):
            params['quality'] = self.quality
        if output_format == 'JPEG':
            params['optimize'] = True

        try:
            return self._write_atomic(path, lambda f: img.save(f, format=output_format, **params))
        except (OSError, ValueError, KeyError) as e:
            raise EncodeError(path, str(e)) from e

    def get_output_format(self, path: Path) -> str:
        """Pillow format name for a target path."""
        ext = Path(path).suffix[1:].lower()
        try:
            return self.OUTPUT_FORMATS[ext]
        except KeyError:
            raise UnsupportedFormat(path, f"no encoder for extension '{ext}'") from None

    def _read_orientation(self, path: Path) -> Any:
        try:
            return self.orientation_reader(path)
        except Exception as e:
            self.logger.warning(f"Reading orientation tag failed for {path}: {e}")
            return None

    def _persist_corrected(
        self,
        asset: SourceAsset,
        transform: OrientationTransform,
        corrected: Image.Image,
        path: Path
    ) -> int:
        """Write the corrected original, copying the source bytes when upright."""
        if transform.is_identity:
            self.get_output_format(path)
            try:
                with open(asset.path, 'rb') as src:
                    return self._write_atomic(path, lambda dst: shutil.copyfileobj(src, dst))
            except OSError as e:
                raise EncodeError(path, str(e)) from e
        return self.persist(corrected, path)

    def _write_atomic(self, path: Path, write: Callable) -> int:
        """Write via a temporary sibling file renamed into place."""
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix='.part')
        try:
            with os.fdopen(fd, 'wb') as f:
                write(f)
            os.replace(tmp_name, path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise
        return path.stat().st_size

    def _convert_color_mode(self, img: Image.Image, output_format: str) -> Image.Image:
        """Convert image to a color mode the output format accepts."""
        if output_format != 'JPEG':
            return img
        if img.mode in ('RGBA', 'LA'):
            background = Image.new('RGB', img.size, (255, 255, 255))
            if img.mode == 'LA':
                img = img.convert('RGBA')
            background.paste(img, mask=img.split()[-1])
            return background
        elif img.mode != 'RGB':
            return img.convert('RGB')
        return img
