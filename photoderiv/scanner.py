"""
Scanner - Walks the input tree to enumerate original source images.
"""

import logging
import os
import time
from pathlib import Path
from typing import List, Optional, Union

from .asset_classifier import AssetClassifier, AssetKind
from .errors import DirectoryUnreadable
from .scanner_progress import ScannerProgress
from .source_asset import SourceAsset


class Scanner:
    """
    Discovers source assets under a root directory.

    Discovery is read-only: generated output directories and derivative
    file names are skipped by the classifier, so the same tree can be
    scanned again after generation.
    """

    def __init__(
        self,
        classifier: Optional[AssetClassifier] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize scanner.

        Args:
            classifier: Asset classifier (default: preset widths and names)
            logger: Optional logger instance
        """
        self.classifier = classifier or AssetClassifier()
        self.logger = logger or logging.getLogger(__name__)

    def scan(
        self,
        root: Union[str, Path],
        progress: Optional[ScannerProgress] = None
    ) -> List[SourceAsset]:
        """
        Scan a directory tree for source assets.

        Args:
            root: Input root directory
            progress: Optional progress tracker for callbacks

        Returns:
            Source assets sorted by path

        Raises:
            DirectoryUnreadable: If the root or any subdirectory cannot be listed
        """
        start_time = time.time()
        root = Path(root)

        if not root.is_dir():
            raise DirectoryUnreadable(root, 'not a directory')

        self.logger.info(f"Scanning {root}")
        assets = sorted(self._scan_directory(root, root, progress), key=lambda a: a.path)

        self.logger.info(
            f"Scan complete: {len(assets)} source images "
            f"({time.time() - start_time:.1f}s)"
        )
        return assets

    def _scan_directory(
        self,
        directory: Path,
        root: Path,
        progress: Optional[ScannerProgress]
    ) -> List[SourceAsset]:
        """Return the assets under one directory, recursing into subdirectories."""
        if progress:
            progress.on_directory_start(directory)

        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            raise DirectoryUnreadable(directory, e.strerror or str(e)) from e

        found: List[SourceAsset] = []
        for entry in entries:
            path = Path(entry.path)
            try:
                # Symlinked directories are not followed
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False

            kind = self.classifier.classify(path, is_dir=is_dir)

            if kind == AssetKind.DIRECTORY:
                found.extend(self._scan_directory(path, root, progress))
            elif kind == AssetKind.SOURCE_CANDIDATE:
                asset = SourceAsset(path=path, root=root)
                found.append(asset)
                if progress:
                    progress.on_file_scanned(asset)
            else:
                self.logger.debug(f"Ignoring {path}")
                if progress:
                    progress.on_entry_ignored(path, is_dir)

        return found


def discover(
    root: Union[str, Path],
    classifier: Optional[AssetClassifier] = None
) -> List[SourceAsset]:
    """Discover source assets under root. See Scanner.scan."""
    return Scanner(classifier).scan(root)
