"""
Generator - Runs derivative generation over a set of source assets.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from .derivative_generator import DerivativeGenerator
from .errors import AssetError, OutputCollision, OutputRootUncreatable
from .generation_progress import GenerationProgress
from .generation_stats import GenerationStats
from .source_asset import AssetResult, AssetState, SourceAsset


class Generator:
    """
    Generates derivatives for many assets, optionally in parallel.

    Each asset is processed independently; a failure is recorded against
    that asset and the run continues with the rest.
    """

    def __init__(
        self,
        derivative_generator: DerivativeGenerator,
        widths: Iterable[int],
        output_root: Union[str, Path],
        workers: int = 1,
        dry_run: bool = False,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize generator.

        Args:
            derivative_generator: Per-asset derivative generator
            widths: Target widths, applied in order
            output_root: Root of the output tree
            workers: Number of worker threads (1 runs inline)
            dry_run: If True, only report what would be written
            logger: Optional logger instance
        """
        self.derivative_gen = derivative_generator
        self.widths = list(widths)
        self.output_root = Path(output_root)
        self.workers = max(1, workers)
        self.dry_run = dry_run
        self.logger = logger or logging.getLogger(__name__)
        self.stats = GenerationStats()
        self._stop_requested = False
        self._collisions: Dict[SourceAsset, OutputCollision] = {}

    def stop(self) -> None:
        """Stop scheduling new assets; assets already started finish."""
        self._stop_requested = True

    def generate_all(
        self,
        assets: Iterable[SourceAsset],
        progress: Optional[GenerationProgress] = None,
        limit: Optional[int] = None
    ) -> GenerationStats:
        """
        Generate derivatives for every asset.

        Args:
            assets: Source assets to process
            progress: Optional progress tracker
            limit: Optional limit on number of assets (for testing)

        Returns:
            GenerationStats with results

        Raises:
            OutputRootUncreatable: If the output root cannot be created
        """
        if self._stop_requested:
            self.logger.info("Stop was requested before generation started")
            self.stats = GenerationStats(total_to_process=0)
            return self.stats

        to_process = list(assets)
        if limit is not None:
            to_process = to_process[:max(0, limit)]

        self.stats = GenerationStats(total_to_process=len(to_process))

        mode_str = " [DRY RUN]" if self.dry_run else ""
        limit_str = f" (limited to {limit})" if limit is not None else ""
        self.logger.info(
            f"Starting generation: {len(to_process)} source images, "
            f"widths {self.widths}, {self.workers} worker(s){mode_str}{limit_str}"
        )

        self._collisions = self.find_collisions(to_process)
        if self._collisions:
            self.logger.warning(
                f"{len(self._collisions)} source images share output names with another "
                f"image and will not be processed"
            )

        if self.dry_run:
            for asset in to_process:
                self._dry_run_asset(asset, progress)
        else:
            try:
                self.output_root.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise OutputRootUncreatable(self.output_root, e.strerror or str(e)) from e

            if self.workers == 1:
                self._run_inline(to_process, progress)
            else:
                self._run_pool(to_process, progress)

        self.logger.info(
            f"Generation complete: {self.stats.processed} done, "
            f"{self.stats.files_generated} files written, "
            f"{self.stats.files_skipped} already present, {self.stats.errors} errors "
            f"({self.stats.elapsed_seconds:.1f}s)"
        )

        return self.stats

    def target_paths(self, asset: SourceAsset) -> List[Path]:
        """Every output path an asset writes: corrected original, then one per width."""
        targets = [asset.corrected_path(self.output_root)]
        targets.extend(asset.derivative_path(self.output_root, w) for w in self.widths)
        return targets

    def find_collisions(self, assets: Iterable[SourceAsset]) -> Dict[SourceAsset, OutputCollision]:
        """
        Find assets whose output paths are already claimed by another asset.

        Distinct sources can normalize to the same output name (``a.JPG``
        and ``a.jpg``, ``_a_.jpg`` and ``a.jpg``). A source whose file name
        is already the output name keeps it; otherwise the first in path
        order does. Every other claimant is mapped to the error it fails with.
        """
        owners: Dict[Path, SourceAsset] = {}
        collisions: Dict[SourceAsset, OutputCollision] = {}
        ordered = sorted(assets, key=lambda a: (a.filename != a.output_name, a.path))
        for asset in ordered:
            targets = self.target_paths(asset)
            taken = next((t for t in targets if t in owners), None)
            if taken is not None:
                collisions[asset] = OutputCollision(asset.path, owners[taken].path, taken)
                continue
            for target in targets:
                owners[target] = asset
        return collisions

    def process_asset(self, asset: SourceAsset) -> AssetResult:
        """Process one asset, converting any failure into a FAILED result."""
        result = AssetResult(asset=asset)
        try:
            if asset in self._collisions:
                raise self._collisions[asset]
            self.derivative_gen.generate(asset, self.widths, self.output_root, result=result)
        except AssetError as e:
            result.state = AssetState.FAILED
            result.stage = e.stage
            result.error = str(e)
        except Exception as e:
            result.state = AssetState.FAILED
            result.stage = result.stage or 'process'
            result.error = f"{asset.path}: {e}"
        return result

    def _run_inline(self, assets: List[SourceAsset], progress: Optional[GenerationProgress]) -> None:
        for i, asset in enumerate(assets):
            if self._stop_requested:
                self.logger.info("Stop requested, halting generation")
                self.stats.cancelled += len(assets) - i
                break
            self._record(self.process_asset(asset), progress)

    def _run_pool(self, assets: List[SourceAsset], progress: Optional[GenerationProgress]) -> None:
        executor = ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix='photoderiv')
        try:
            futures: Dict[Future, SourceAsset] = {
                executor.submit(self.process_asset, asset): asset for asset in assets
            }
            for future in as_completed(futures):
                if future.cancelled():
                    continue
                self._record(future.result(), progress)
                if self._stop_requested:
                    self._cancel_pending(futures)
        finally:
            executor.shutdown(wait=True, cancel_futures=True)

    def _cancel_pending(self, futures: Dict[Future, SourceAsset]) -> None:
        cancelled = sum(1 for future in futures if future.cancel())
        if cancelled:
            self.logger.info(f"Stop requested, cancelled {cancelled} pending assets")
            self.stats.cancelled += cancelled

    def _record(self, result: AssetResult, progress: Optional[GenerationProgress]) -> None:
        """Fold one asset's result into the run statistics."""
        self.stats.files_generated += result.generated_count
        self.stats.files_skipped += result.skipped_count
        self.stats.bytes_generated += result.bytes_generated

        if result.succeeded:
            self.stats.processed += 1
            if not progress or not progress.show_files:
                self.logger.debug(
                    f"{result.format_status()} "
                    f"[{self.stats.completed_count}/{self.stats.total_to_process}]"
                )
        else:
            error_msg = f"Error processing {result.asset.path}: {result.error}"
            self.logger.error(error_msg)
            self.stats.errors += 1
            self.stats.error_details.append(error_msg)

        if progress:
            progress.on_asset_processed(result)
            progress.on_progress_update(self.stats)

    def _dry_run_asset(self, asset: SourceAsset, progress: Optional[GenerationProgress]) -> None:
        if asset in self._collisions:
            self._record(self.process_asset(asset), progress)
            return

        targets = self.target_paths(asset)
        missing = sum(1 for path in targets if not path.exists())

        if progress:
            progress.on_dry_run(asset, missing)
        else:
            self.logger.info(f"[DRY RUN] Would write {missing} files for {asset.path}")

        self.stats.processed += 1
        self.stats.files_skipped += len(targets) - missing
