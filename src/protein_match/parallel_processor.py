"""Parallel processing for scoring many records against one query."""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, Future, as_completed
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')


@dataclass
class ProcessingResult:
    """Result of processing an item."""
    index: int
    item: Any
    result: Optional[Any] = None
    error: Optional[Exception] = None
    duration: float = 0.0

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class BatchProcessingStats:
    """Statistics for batch processing."""
    total_items: int = 0
    processed: int = 0
    successful: int = 0
    failed: int = 0
    total_duration: float = 0.0

    @property
    def success_rate(self) -> float:
        return self.successful / self.processed if self.processed > 0 else 0.0

    @property
    def average_duration(self) -> float:
        return self.total_duration / self.processed if self.processed > 0 else 0.0


class ParallelProcessor:
    """Processes items on a thread pool and returns results in input order.

    Items finish in whatever order the pool schedules them, but results are
    always handed back sorted by their position in the input, so callers can
    reduce over them deterministically.
    """

    def __init__(self, max_workers: int = 4):
        """
        Initialize parallel processor.

        Args:
            max_workers: Maximum number of worker threads
        """
        self.max_workers = max_workers

    def process_batch(self,
                      items: List[T],
                      process_func: Callable[[T], R],
                      chunk_size: Optional[int] = None) -> Tuple[List[ProcessingResult], BatchProcessingStats]:
        """
        Process a batch of items in parallel.

        Args:
            items: Items to process
            process_func: Function to process each item
            chunk_size: Process items in chunks (useful for memory management)

        Returns:
            Tuple of (results in input order, statistics)
        """
        if not items:
            return [], BatchProcessingStats()

        stats = BatchProcessingStats(total_items=len(items))
        results: List[ProcessingResult] = []

        if chunk_size and chunk_size < len(items):
            starts = range(0, len(items), chunk_size)

            for n, start in enumerate(starts):
                chunk = items[start:start + chunk_size]
                logger.debug(f"Processing chunk {n + 1}/{len(starts)} ({len(chunk)} items)")
                chunk_results, chunk_stats = self._process_items(chunk, start, process_func)
                results.extend(chunk_results)

                stats.processed += chunk_stats.processed
                stats.successful += chunk_stats.successful
                stats.failed += chunk_stats.failed
                stats.total_duration += chunk_stats.total_duration
        else:
            results, stats = self._process_items(items, 0, process_func)

        results.sort(key=lambda r: r.index)
        return results, stats

    def _process_items(self,
                       items: List[T],
                       offset: int,
                       process_func: Callable[[T], R]) -> Tuple[List[ProcessingResult], BatchProcessingStats]:
        """Process a list of items whose first element sits at ``offset``."""
        stats = BatchProcessingStats(total_items=len(items))
        results = []

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_index: Dict[Future, int] = {
                executor.submit(self._process_single, i, item, process_func): i
                for i, item in enumerate(items, start=offset)
            }

            for future in as_completed(future_to_index):
                result = future.result()
                results.append(result)

                stats.processed += 1
                stats.total_duration += result.duration

                if result.success:
                    stats.successful += 1
                else:
                    stats.failed += 1

        return results, stats

    def _process_single(self, index: int, item: T, process_func: Callable[[T], R]) -> ProcessingResult:
        """Process a single item, capturing any exception on the result."""
        start_time = time.time()

        try:
            result = process_func(item)
            return ProcessingResult(
                index=index,
                item=item,
                result=result,
                duration=time.time() - start_time
            )
        except Exception as e:
            logger.error(f"Error processing item {index}: {e}")
            return ProcessingResult(
                index=index,
                item=item,
                error=e,
                duration=time.time() - start_time
            )
