"""
GenerationProgress - Tracks and displays generation progress.
"""

import logging
from typing import Optional

from .generation_stats import GenerationStats
from .source_asset import AssetResult, SourceAsset


class GenerationProgress:
    """
    Tracks and displays generation progress with optional per-file output.
    """

    def __init__(
        self,
        show_files: bool = False,
        log_interval: int = 100,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize progress tracker.

        Args:
            show_files: If True, print each asset as it's processed
            log_interval: Log summary progress every N assets (when not show_files)
            logger: Optional logger instance
        """
        self.show_files = show_files
        self.log_interval = log_interval
        self.logger = logger or logging.getLogger(__name__)
        self.last_logged = 0

    def on_asset_processed(self, result: AssetResult) -> None:
        """
        Called when an asset is finished, successfully or not.

        Args:
            result: The asset's outcome
        """
        if not self.show_files:
            return
        if result.succeeded:
            if result.generated_count == 0:
                print(f"  [SKIP] {result.asset.path} -> all outputs exist")
            else:
                size_str = self._format_bytes(result.bytes_generated)
                print(
                    f"  [OK] {result.asset.path} -> {result.generated_count} written, "
                    f"{result.skipped_count} existing ({size_str})"
                )
        else:
            print(f"  [ERROR] {result.asset.path} -> {result.error or 'failed'}")

    def on_progress_update(self, stats: GenerationStats) -> None:
        """
        Called after each asset to report overall progress.

        Args:
            stats: Current generation statistics
        """
        total_done = stats.completed_count

        if not self.show_files and total_done - self.last_logged >= self.log_interval:
            self.last_logged = total_done

            remaining = stats.remaining_count
            eta_minutes = stats.estimated_remaining_seconds / 60

            self.logger.info(
                f"Progress: {stats.processed} done, {stats.errors} errors, "
                f"{stats.files_generated} files written "
                f"({stats.rate_per_minute:.1f}/min, "
                f"~{eta_minutes:.0f}m remaining, {remaining} left)"
            )

    def on_dry_run(self, asset: SourceAsset, missing: int) -> None:
        """Called in dry-run mode."""
        if self.show_files:
            print(f"  [DRY RUN] {asset.path} -> would write {missing} files")

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

    def __call__(self, stats: GenerationStats) -> None:
        """Allow use as callback for stats updates."""
        self.on_progress_update(stats)
