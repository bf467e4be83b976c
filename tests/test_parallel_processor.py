"""Tests for parallel processor."""

import random
import time

from protein_match.parallel_processor import (
    BatchProcessingStats, ParallelProcessor, ProcessingResult
)


class TestParallelProcessor:
    """Test cases for parallel processor."""

    def test_basic_processing(self):
        """Test basic parallel processing."""
        items = list(range(10))

        def process_func(x):
            return x * 2

        processor = ParallelProcessor(max_workers=3)
        results, stats = processor.process_batch(items, process_func)

        assert len(results) == 10
        assert all(r.success for r in results)
        assert [r.result for r in results] == [x * 2 for x in range(10)]

        assert stats.total_items == 10
        assert stats.successful == 10
        assert stats.failed == 0
        assert stats.success_rate == 1.0

    def test_results_in_input_order(self):
        """Test that results follow input order, not completion order."""
        items = list(range(20))
        rng = random.Random(0)
        delays = {i: rng.uniform(0, 0.02) for i in items}

        def process_func(x):
            time.sleep(delays[x])
            return x

        processor = ParallelProcessor(max_workers=5)
        results, _ = processor.process_batch(items, process_func)

        assert [r.index for r in results] == items
        assert [r.result for r in results] == items

    def test_error_handling(self):
        """Test error handling in parallel processing."""
        items = list(range(5))

        def process_func(x):
            if x == 2:
                raise ValueError(f"Error processing {x}")
            return x * 2

        processor = ParallelProcessor(max_workers=2)
        results, stats = processor.process_batch(items, process_func)

        assert len(results) == 5
        assert sum(1 for r in results if r.success) == 4
        assert not results[2].success
        assert isinstance(results[2].error, ValueError)
        assert str(results[2].error) == "Error processing 2"
        assert results[2].item == 2

        assert stats.successful == 4
        assert stats.failed == 1
        assert stats.success_rate == 0.8

    def test_chunking(self):
        """Test processing in chunks."""
        items = list(range(20))

        processor = ParallelProcessor(max_workers=2)

        results, stats = processor.process_batch(
            items,
            lambda x: x * 2,
            chunk_size=6
        )

        assert [r.index for r in results] == items
        assert [r.result for r in results] == [x * 2 for x in items]
        assert stats.total_items == 20
        assert stats.successful == 20

    def test_empty_batch(self):
        """Test that an empty batch returns nothing."""
        results, stats = ParallelProcessor().process_batch([], lambda x: x)

        assert results == []
        assert stats.total_items == 0
        assert stats.success_rate == 0.0
        assert stats.average_duration == 0.0


class TestProcessingResult:
    """Test cases for result containers."""

    def test_success_flag(self):
        """Test success reflects the error field."""
        assert ProcessingResult(index=0, item="a", result=1).success
        assert not ProcessingResult(index=0, item="a", error=RuntimeError("x")).success

    def test_stats_average(self):
        """Test average duration calculation."""
        stats = BatchProcessingStats(total_items=2, processed=2, successful=2, total_duration=1.0)
        assert stats.average_duration == 0.5
