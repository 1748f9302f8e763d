"""Performance benchmarking for character streams.

This module measures how fast ``CharStream`` drains typical inputs and how
much process memory it takes while doing so, next to a plain
``StringIO.read(1)`` loop used as a baseline.
"""

import gc
import io
import statistics
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

import psutil

from lexstream.character.stream import CharStream
from lexstream.shared import StreamConfig, get_logger

CHAR_STREAM = "char_stream"
BASELINE = "stringio_read"


@dataclass
class BenchmarkResult:
    """Result of a single benchmark run."""

    reader_name: str
    test_case: str
    processing_time_ms: float
    memory_used_mb: float
    characters_processed: int
    lines_processed: int
    success: bool
    error_message: Optional[str] = None

    @property
    def characters_per_second(self) -> float:
        """Calculate characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms

    @property
    def memory_per_character(self) -> float:
        """Calculate memory usage per character in bytes."""
        if self.characters_processed <= 0:
            return 0.0
        return (self.memory_used_mb * 1024 * 1024) / self.characters_processed


@dataclass
class BenchmarkSuite:
    """Collection of benchmark results with statistical analysis."""

    results: List[BenchmarkResult] = field(default_factory=list)
    suite_name: str = "Character Stream Benchmark"
    timestamp: float = field(default_factory=time.time)

    def add_result(self, result: BenchmarkResult) -> None:
        self.results.append(result)

    def get_results_by_reader(self, reader_name: str) -> List[BenchmarkResult]:
        return [r for r in self.results if r.reader_name == reader_name]

    def get_results_by_test_case(self, test_case: str) -> List[BenchmarkResult]:
        return [r for r in self.results if r.test_case == test_case]

    def get_statistics(self, reader_name: str, metric: str) -> Dict[str, float]:
        """Get statistical analysis of one metric for a reader.

        Args:
            reader_name: Reader whose results are analysed
            metric: ``BenchmarkResult`` attribute or property name

        Returns:
            min/max/mean/median/stdev/count, or an empty dict without data
        """
        values = [
            float(getattr(result, metric))
            for result in self.get_results_by_reader(reader_name)
            if result.success and hasattr(result, metric)
        ]
        if not values:
            return {}

        return {
            "min": min(values),
            "max": max(values),
            "mean": statistics.mean(values),
            "median": statistics.median(values),
            "stdev": statistics.stdev(values) if len(values) > 1 else 0.0,
            "count": len(values)
        }

    def generate_report(self) -> Dict[str, Any]:
        """Generate benchmark report grouped by reader and test case."""
        readers = sorted(set(r.reader_name for r in self.results))
        test_cases = sorted(set(r.test_case for r in self.results))

        report: Dict[str, Any] = {
            "suite_name": self.suite_name,
            "timestamp": self.timestamp,
            "total_results": len(self.results),
            "readers": readers,
            "test_cases": test_cases,
            "summary": {},
            "detailed_results": {}
        }

        for reader in readers:
            reader_results = self.get_results_by_reader(reader)
            successful_results = [r for r in reader_results if r.success]

            report["summary"][reader] = {
                "total_runs": len(reader_results),
                "successful_runs": len(successful_results),
                "success_rate": len(successful_results) / len(reader_results),
                "performance": self.get_statistics(reader, "characters_per_second"),
                "memory": self.get_statistics(reader, "memory_used_mb")
            }

        for test_case in test_cases:
            report["detailed_results"][test_case] = {
                result.reader_name: {
                    "processing_time_ms": result.processing_time_ms,
                    "memory_used_mb": result.memory_used_mb,
                    "characters_per_second": result.characters_per_second,
                    "lines_processed": result.lines_processed,
                    "success": result.success,
                    "error": result.error_message
                }
                for result in self.get_results_by_test_case(test_case)
            }

        return report


class CharStreamBenchmark:
    """Throughput and memory benchmark for ``CharStream``."""

    def __init__(
        self,
        correlation_id: Optional[str] = None,
        warmup_runs: int = 1,
        benchmark_runs: int = 3
    ) -> None:
        """Initialize benchmark.

        Args:
            correlation_id: Optional correlation ID for tracking
            warmup_runs: Number of warmup runs before benchmarking
            benchmark_runs: Number of benchmark runs to average
        """
        if warmup_runs < 0:
            raise ValueError("warmup_runs must be >= 0")
        if benchmark_runs <= 0:
            raise ValueError("benchmark_runs must be > 0")

        self.correlation_id = correlation_id
        self.warmup_runs = warmup_runs
        self.benchmark_runs = benchmark_runs
        self.logger = get_logger(__name__, correlation_id, "benchmark")
        self.stream_config = StreamConfig.quiet().override(correlation_id=correlation_id)

        self.test_cases = self._create_test_cases()

    def _create_test_cases(self) -> Dict[str, str]:
        return {
            "empty": "",
            "short_lines": "".join(f"x = {i}\n" for i in range(2000)),
            "long_lines": "\n".join("token " * 500 for _ in range(20)),
            "crlf_lines": "".join(f"rule_{i} ::= <a> | <b>\r\n" for i in range(1000)),
        }

    def add_test_case(self, name: str, content: str) -> None:
        """Register an additional input to benchmark."""
        if not name:
            raise ValueError("Test case name cannot be empty")
        self.test_cases[name] = content

    def _measure_memory_usage(self) -> float:
        """Get current memory usage in MB."""
        process = psutil.Process()
        return process.memory_info().rss / 1024 / 1024

    def _drain_char_stream(self, content: str) -> Tuple[int, int]:
        stream = CharStream(io.StringIO(content), self.stream_config)
        characters = 0
        while not stream.empty:
            _ = stream.front
            stream.pop_front()
            characters += 1
        return characters, stream.line - 1

    def _drain_baseline(self, content: str) -> Tuple[int, int]:
        source = io.StringIO(content)
        characters = 0
        lines = 0
        last = ""
        char = source.read(1)
        while char:
            characters += 1
            if char == "\n":
                lines += 1
            last = char
            char = source.read(1)
        if last and last != "\n":
            lines += 1
        return characters, lines

    def _run_once(
        self,
        reader_name: str,
        drain: Callable[[str], Tuple[int, int]],
        test_case: str,
        content: str
    ) -> BenchmarkResult:
        gc.collect()
        memory_before = self._measure_memory_usage()
        start_time = time.time()

        try:
            characters, lines = drain(content)
            success = True
            error_message = None
        except Exception as e:
            self.logger.warning(
                f"Benchmark run failed for {reader_name}",
                extra={"test_case": test_case, "error": str(e)}
            )
            characters, lines = 0, 0
            success = False
            error_message = str(e)

        processing_time = (time.time() - start_time) * 1000
        memory_used = max(0.0, self._measure_memory_usage() - memory_before)

        return BenchmarkResult(
            reader_name=reader_name,
            test_case=test_case,
            processing_time_ms=processing_time,
            memory_used_mb=memory_used,
            characters_processed=characters,
            lines_processed=lines,
            success=success,
            error_message=error_message
        )

    def run_benchmark(self, include_baseline: bool = True) -> BenchmarkSuite:
        """Run the benchmark suite.

        Args:
            include_baseline: Whether to benchmark the ``StringIO`` baseline too

        Returns:
            BenchmarkSuite with one averaged result per reader and test case
        """
        suite = BenchmarkSuite()
        readers: Dict[str, Callable[[str], Tuple[int, int]]] = {
            CHAR_STREAM: self._drain_char_stream
        }
        if include_baseline:
            readers[BASELINE] = self._drain_baseline

        self.logger.info(
            "Starting benchmark suite",
            extra={
                "test_cases": len(self.test_cases),
                "readers": list(readers),
                "warmup_runs": self.warmup_runs,
                "benchmark_runs": self.benchmark_runs
            }
        )

        for test_case, content in self.test_cases.items():
            for reader_name, drain in readers.items():
                for _ in range(self.warmup_runs):
                    self._run_once(reader_name, drain, test_case, content)

                run_results = [
                    self._run_once(reader_name, drain, test_case, content)
                    for _ in range(self.benchmark_runs)
                ]
                successful_runs = [r for r in run_results if r.success]

                if successful_runs:
                    suite.add_result(BenchmarkResult(
                        reader_name=reader_name,
                        test_case=test_case,
                        processing_time_ms=statistics.mean(
                            [r.processing_time_ms for r in successful_runs]
                        ),
                        memory_used_mb=statistics.mean(
                            [r.memory_used_mb for r in successful_runs]
                        ),
                        characters_processed=successful_runs[0].characters_processed,
                        lines_processed=successful_runs[0].lines_processed,
                        success=True
                    ))
                else:
                    suite.add_result(run_results[0])

        self.logger.info(
            "Benchmark suite completed",
            extra={"total_results": len(suite.results)}
        )
        return suite
