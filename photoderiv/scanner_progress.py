"""
ScannerProgress - Tracks and displays scan progress.
"""

import logging
import time
from pathlib import Path
from typing import Optional

from .source_asset import SourceAsset


class ScannerProgress:
    """
    Tracks and displays scan progress with optional per-file output.
    """

    def __init__(
        self,
        show_files: bool = False,
        log_interval: int = 500,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize progress tracker.

        Args:
            show_files: If True, print each file as it's scanned
            log_interval: Log summary progress every N images (when not show_files)
            logger: Optional logger instance
        """
        self.show_files = show_files
        self.log_interval = log_interval
        self.logger = logger or logging.getLogger(__name__)
        self.found = 0
        self.ignored = 0
        self.directories = 0
        self.start_time: Optional[float] = None  # Set when the first directory is listed

    def on_directory_start(self, directory: Path) -> None:
        """Called before a directory is listed."""
        if self.start_time is None:
            self.start_time = time.time()
        self.directories += 1
        if self.show_files:
            print(f"\n=== {directory} ===")

    def on_file_scanned(self, asset: SourceAsset) -> None:
        """
        Called when a source asset is found.

        Args:
            asset: The discovered asset
        """
        if self.start_time is None:
            self.start_time = time.time()

        self.found += 1

        if self.show_files:
            print(f"  [SOURCE] {asset.filename}")
        elif self.found % self.log_interval == 0:
            elapsed = time.time() - self.start_time
            rate = self.found / elapsed if elapsed > 0 else 0
            self.logger.info(
                f"  Progress: {self.found:,} source images in "
                f"{self.directories:,} directories ({rate:.0f}/sec)"
            )

    def on_entry_ignored(self, path: Path, is_dir: bool = False) -> None:
        """Called when an entry is skipped."""
        self.ignored += 1
        if self.show_files:
            kind = "DIR" if is_dir else "SKIP"
            print(f"  [{kind}] {path.name} -> ignored")

    def __call__(self, asset: SourceAsset) -> None:
        """Allow use as callback."""
        self.on_file_scanned(asset)
