"""
SourceAsset - Records for source images, their derivatives and outcomes.
"""

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .asset_classifier import clean_stem


@dataclass(frozen=True)
class SourceAsset:
    """
    An original image discovered under the input root.

    Attributes:
        path: Full path to the source file
        root: Input root the asset was discovered under
    """
    path: Path
    root: Path

    @property
    def filename(self) -> str:
        return self.path.name

    @property
    def stem(self) -> str:
        return self.path.stem

    @property
    def clean_stem(self) -> str:
        """Stem with leading/trailing punctuation trimmed (raw stem if nothing is left)."""
        return clean_stem(self.stem) or self.stem

    @property
    def extension(self) -> str:
        """Lower-case extension without the dot."""
        return self.path.suffix[1:].lower()

    @property
    def relative_dir(self) -> Path:
        """Directory of the asset relative to the input root."""
        return self.path.parent.relative_to(self.root)

    @property
    def output_name(self) -> str:
        return f"{self.clean_stem}.{self.extension}"

    def corrected_path(self, output_root: Path) -> Path:
        """Path of the orientation-corrected copy."""
        return Path(output_root) / self.relative_dir / self.output_name

    def derivative_path(self, output_root: Path, width: int) -> Path:
        """Path of the derivative scaled to a given width."""
        return Path(output_root) / str(width) / self.relative_dir / self.output_name

    def to_dict(self) -> dict:
        return {'path': str(self.path), 'root': str(self.root)}


@dataclass(frozen=True)
class DerivativeAsset:
    """
    One output file produced for a source asset.

    Attributes:
        source: The source asset
        width: Target width, or None for the corrected original
        path: Output path
        generated: False if the file already existed and was skipped
        size: Bytes written (0 when skipped)
    """
    source: SourceAsset
    width: Optional[int]
    path: Path
    generated: bool = True
    size: int = 0

    @property
    def is_corrected_original(self) -> bool:
        return self.width is None


class AssetState(enum.Enum):
    DISCOVERED = 'discovered'
    DECODED = 'decoded'
    ORIENTATION_CORRECTED = 'orientation-corrected'
    COMPLETE = 'complete'
    FAILED = 'failed'


@dataclass
class AssetResult:
    """Outcome of processing one source asset."""
    asset: SourceAsset
    state: AssetState = AssetState.DISCOVERED
    derivatives: List[DerivativeAsset] = field(default_factory=list)
    error: Optional[str] = None
    stage: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.state == AssetState.COMPLETE

    @property
    def generated_count(self) -> int:
        return sum(1 for d in self.derivatives if d.generated)

    @property
    def skipped_count(self) -> int:
        return sum(1 for d in self.derivatives if not d.generated)

    @property
    def bytes_generated(self) -> int:
        return sum(d.size for d in self.derivatives if d.generated)

    def format_status(self) -> str:
        """
        Format a human-readable status line.

        Returns:
            Status string like "a.jpg - 8 generated, 0 skipped (1.2 MB)"
        """
        if self.state == AssetState.FAILED:
            return f"{self.asset.path} - FAILED at {self.stage or 'unknown'}: {self.error}"
        size_str = self._format_bytes(self.bytes_generated)
        return (
            f"{self.asset.path} - {self.generated_count} generated, "
            f"{self.skipped_count} skipped ({size_str})"
        )

    @staticmethod
    def _format_bytes(bytes_val: Optional[int]) -> str:
        """Format bytes as human-readable string."""
        if bytes_val is None:
            return "unknown"
        for unit in ['B', 'KB', 'MB', 'GB']:
            if bytes_val < 1024:
                return f"{bytes_val:.1f} {unit}"
            bytes_val /= 1024
        return f"{bytes_val:.1f} TB"
