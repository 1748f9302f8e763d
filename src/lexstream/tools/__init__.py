"""Developer tools for lexstream.

This module provides performance benchmarking for character streams.
"""

from .benchmarks import BenchmarkResult, BenchmarkSuite, CharStreamBenchmark

__all__ = [
    "BenchmarkResult",
    "BenchmarkSuite",
    "CharStreamBenchmark",
]
