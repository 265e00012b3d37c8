"""
PipelineConfig - Configuration for a derivative pipeline run.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, List, Optional, Tuple

from .asset_classifier import (
    DEFAULT_EXTENSIONS,
    DEFAULT_RESERVED_NAMES,
    DEFAULT_WIDTHS,
    AssetClassifier,
)


def parse_widths(value: str) -> Tuple[int, ...]:
    """Parse a comma-separated width list such as '200,400,800'."""
    return tuple(int(part) for part in value.split(',') if part.strip())


@dataclass
class PipelineConfig:
    """
    Configuration for a pipeline run.

    Attributes:
        input_dir: Root of the source tree
        output_root: Root of the output tree (default: <input_dir>/default)
        archive_path: ZIP to write, or None to skip packaging
        widths: Derivative widths, applied in order
        reserved_names: Directory names never walked during discovery
        extensions: Supported source extensions
        workers: Worker threads for generation
        quality: JPEG/WEBP quality for re-encoded output
    """
    input_dir: Path
    output_root: Optional[Path] = None
    archive_path: Optional[Path] = None
    widths: Tuple[int, ...] = DEFAULT_WIDTHS
    reserved_names: FrozenSet[str] = DEFAULT_RESERVED_NAMES
    extensions: FrozenSet[str] = DEFAULT_EXTENSIONS
    workers: int = field(default_factory=lambda: os.cpu_count() or 1)
    quality: int = 85

    DEFAULT_OUTPUT_NAME = 'default'

    def __post_init__(self):
        self.input_dir = Path(self.input_dir)
        if self.output_root is None:
            self.output_root = self.input_dir / self.DEFAULT_OUTPUT_NAME
        self.output_root = Path(self.output_root)
        if self.archive_path is not None:
            self.archive_path = Path(self.archive_path)

    @classmethod
    def from_env(cls, input_dir: Path, **overrides) -> 'PipelineConfig':
        """
        Build a config from PHOTODERIV_* environment variables.

        Keyword overrides that are not None take precedence.

        Raises:
            ValueError: If an environment variable is not a valid number
        """
        values = {}
        if os.environ.get('PHOTODERIV_WIDTHS'):
            values['widths'] = parse_widths(os.environ['PHOTODERIV_WIDTHS'])
        if os.environ.get('PHOTODERIV_WORKERS'):
            values['workers'] = int(os.environ['PHOTODERIV_WORKERS'])
        if os.environ.get('PHOTODERIV_QUALITY'):
            values['quality'] = int(os.environ['PHOTODERIV_QUALITY'])

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(input_dir=input_dir, **values)

    def validate(self) -> List[str]:
        """Return a list of configuration errors (empty if valid)."""
        errors = []
        if not self.input_dir.is_dir():
            errors.append(f"Input directory does not exist: {self.input_dir}")
        elif self.output_root.resolve() == self.input_dir.resolve():
            errors.append(f"Output root must differ from the input directory: {self.output_root}")
        if not self.widths:
            errors.append("At least one derivative width is required")
        if any(w <= 0 for w in self.widths):
            errors.append(f"Derivative widths must be positive: {list(self.widths)}")
        if len(set(self.widths)) != len(self.widths):
            errors.append(f"Derivative widths must be unique: {list(self.widths)}")
        if self.workers < 1:
            errors.append(f"Workers must be at least 1, got {self.workers}")
        if not 1 <= self.quality <= 95:
            errors.append(f"Quality must be between 1 and 95, got {self.quality}")
        return errors

    @property
    def output_inside_input(self) -> bool:
        try:
            self.output_root.resolve().relative_to(self.input_dir.resolve())
        except ValueError:
            return False
        return True

    def build_classifier(self) -> AssetClassifier:
        """Classifier for this config; skips the output root if it is under the input."""
        return AssetClassifier(
            widths=self.widths,
            reserved_names=self.reserved_names,
            extensions=self.extensions,
            reserved_paths=[self.output_root] if self.output_inside_input else (),
        )
