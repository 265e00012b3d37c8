"""
Image derivative pipeline

Three-phase operation:
    1. Scan phase: Walk the input tree and collect original source images
    2. Generate phase: Correct EXIF orientation and write width-scaled copies
    3. Package phase: Store the output tree in a single ZIP archive

Re-runs only write outputs that are missing.
"""

__version__ = "1.0.0"

from .errors import (
    PipelineError,
    DirectoryUnreadable,
    OutputRootUncreatable,
    AssetError,
    DecodeError,
    EncodeError,
    UnsupportedFormat,
    OutputCollision,
)
from .orientation import OrientationTransform, Primitive, resolve, read_orientation_tag
from .asset_classifier import AssetClassifier, AssetKind
from .source_asset import SourceAsset, DerivativeAsset, AssetState, AssetResult
from .config import PipelineConfig
from .scanner_progress import ScannerProgress
from .scanner import Scanner, discover
from .derivative_generator import DerivativeGenerator, target_height
from .generation_stats import GenerationStats
from .generation_progress import GenerationProgress
from .generator import Generator
from .packager import Packager

__all__ = [
    "PipelineError",
    "DirectoryUnreadable",
    "OutputRootUncreatable",
    "AssetError",
    "DecodeError",
    "EncodeError",
    "UnsupportedFormat",
    "OutputCollision",
    "OrientationTransform",
    "Primitive",
    "resolve",
    "read_orientation_tag",
    "AssetClassifier",
    "AssetKind",
    "SourceAsset",
    "DerivativeAsset",
    "AssetState",
    "AssetResult",
    "PipelineConfig",
    "ScannerProgress",
    "Scanner",
    "discover",
    "DerivativeGenerator",
    "target_height",
    "GenerationStats",
    "GenerationProgress",
    "Generator",
    "Packager",
]
