#!/usr/bin/env python3
"""
Benchmark and cross-check of the DFT engines

This script measures, for each configured power-of-two size:
  1. Forward transform time (ms per call) of each engine
  2. Maximum error of the forward transform against scipy.fft.fft
  3. Maximum round-trip error of idft(fdft(x)) against x

Engines:
  - recursive: dsp_core.dft (Complex128 sequences)
  - numba:     dsp_core.fft (complex128 ndarrays)

Usage:
    dsp-bench [--config CONFIG_PATH] [--sizes N [N ...]] [--output REPORT.json]
    python -m dsp_core.benchmark --config configs/benchmark.yaml
"""

import argparse
import json
import math
import sys
import time
from dataclasses import dataclass, field, asdict, fields
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np
import yaml
from scipy.fft import fft as scipy_fft
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    BarColumn,
    TaskProgressColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from .complex128 import Complex128
from .dft import fdft, idft
from .fft import fdft_array, idft_array
from .utils.logging import setup_logging, get_logger

console = Console()
logger = get_logger(__name__)

ENGINES = ('recursive', 'numba')


@dataclass
class BenchmarkConfig:
    """Benchmark configuration (YAML keys match the field names)."""
    sizes: List[int] = field(default_factory=lambda: [8, 64, 256, 1024])
    repeats: int = 5
    seed: int = 0
    engines: List[str] = field(default_factory=lambda: list(ENGINES))
    # Allowed error per element, multiplied by log2(n)
    tolerance: float = 1e-9
    output: Optional[str] = None

    def __post_init__(self):
        self.tolerance = float(self.tolerance)
        for n in self.sizes:
            if not isinstance(n, int) or n < 1 or n & (n - 1) != 0:
                raise ValueError(f"Benchmark sizes must be powers of two, got {n!r}")
        unknown = [e for e in self.engines if e not in ENGINES]
        if unknown:
            raise ValueError(f"Unknown engines {unknown}; choose from {list(ENGINES)}")
        if self.repeats < 1:
            raise ValueError(f"repeats must be >= 1, got {self.repeats}")


@dataclass
class BenchmarkResult:
    """Timing and accuracy of one engine at one size."""
    engine: str
    n: int
    time_ms: float
    time_std_ms: float
    max_error: float
    roundtrip_error: float
    passed: bool

    def to_dict(self) -> Dict:
        return asdict(self)


def load_config(config_path: str) -> BenchmarkConfig:
    """Load configuration."""
    with open(config_path, 'r') as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Config {config_path} must be a mapping, got {type(raw).__name__}")

    known = {f.name for f in fields(BenchmarkConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"Unknown config keys in {config_path}: {unknown}")

    return BenchmarkConfig(**raw)


def random_signal(n: int, rng: np.random.Generator) -> np.ndarray:
    """Complex Gaussian test signal of length n."""
    return rng.standard_normal(n) + 1j * rng.standard_normal(n)


def _run_recursive(x: np.ndarray, inverse: bool = False) -> np.ndarray:
    signal = [Complex128.from_complex(z) for z in x]
    output = [None] * len(signal)
    (idft if inverse else fdft)(signal, output)
    return np.array([complex(c) for c in output])


def _run_numba(x: np.ndarray, inverse: bool = False) -> np.ndarray:
    out = np.empty(len(x), dtype=np.complex128)
    (idft_array if inverse else fdft_array)(x, out)
    return out


_RUNNERS = {
    'recursive': _run_recursive,
    'numba': _run_numba,
}


def measure_engine(
    engine: str,
    x: np.ndarray,
    repeats: int = 5,
    tolerance: float = 1e-9,
) -> BenchmarkResult:
    """Measure forward-transform time and accuracy of one engine on x."""
    run = _RUNNERS[engine]
    n = len(x)

    # Warm up (compiles the numba kernels on first use)
    X = run(x)

    times = []
    for _ in range(repeats):
        start = time.perf_counter()
        run(x)
        times.append((time.perf_counter() - start) * 1000)  # ms

    reference = scipy_fft(x)
    scale = max(1.0, float(np.abs(reference).max()))
    max_error = float(np.abs(X - reference).max()) / scale
    roundtrip_error = float(np.abs(run(X, inverse=True) - x).max())

    bound = tolerance * max(1.0, math.log2(n))
    return BenchmarkResult(
        engine=engine,
        n=n,
        time_ms=float(np.mean(times)),
        time_std_ms=float(np.std(times)),
        max_error=max_error,
        roundtrip_error=roundtrip_error,
        passed=max_error <= bound and roundtrip_error <= bound,
    )


def run_benchmark(config: BenchmarkConfig, show_progress: bool = False) -> List[BenchmarkResult]:
    """Run every configured engine over every configured size."""
    rng = np.random.default_rng(config.seed)
    signals = {n: random_signal(n, rng) for n in config.sizes}

    logger.info("Benchmark started: sizes=%s engines=%s repeats=%d",
                config.sizes, config.engines, config.repeats)

    results = []
    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(bar_width=30),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        disable=not show_progress,
    ) as progress:
        task = progress.add_task("[cyan]Benchmarking", total=len(config.sizes) * len(config.engines))

        for n, x in signals.items():
            for engine in config.engines:
                progress.update(task, description=f"[cyan]{engine} n={n}")

                result = measure_engine(engine, x, config.repeats, config.tolerance)
                results.append(result)

                logger.info(f"{engine} n={n}: {result.time_ms:.3f}ms, "
                            f"err={result.max_error:.2e}, roundtrip={result.roundtrip_error:.2e}")
                if not result.passed:
                    logger.warning(f"{engine} n={n} exceeded tolerance")

                progress.update(task, advance=1)

    if config.output:
        save_report(results, config, Path(config.output))

    return results


def save_report(results: List[BenchmarkResult], config: BenchmarkConfig, path: Path) -> None:
    """Write the results as a JSON report."""
    path.parent.mkdir(parents=True, exist_ok=True)
    report = {
        'timestamp': datetime.now().isoformat(),
        'config': asdict(config),
        'results': [r.to_dict() for r in results],
    }
    with open(path, 'w') as f:
        json.dump(report, f, indent=2)
    logger.info("Report written to %s", path)


def display_results_table(results: List[BenchmarkResult]):
    """Display benchmark results."""
    table = Table(title="DFT Engine Benchmark", box=box.ROUNDED)
    table.add_column("Engine", style="bold")
    table.add_column("N", justify="right")
    table.add_column("Time (ms)", justify="right")
    table.add_column("Max Error", justify="right")
    table.add_column("Round Trip", justify="right")
    table.add_column("Status", justify="center")

    for r in results:
        table.add_row(
            r.engine,
            str(r.n),
            f"{r.time_ms:.3f}±{r.time_std_ms:.3f}",
            f"{r.max_error:.2e}",
            f"{r.roundtrip_error:.2e}",
            "[green]✓ PASS[/green]" if r.passed else "[red]✗ FAIL[/red]",
        )

    console.print(table)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Benchmark the DFT engines against scipy")
    parser.add_argument('--config', type=str, default=None,
                        help='Path to YAML configuration file')
    parser.add_argument('--sizes', type=int, nargs='+', default=None,
                        help='Transform sizes (powers of two)')
    parser.add_argument('--repeats', type=int, default=None,
                        help='Timed repetitions per engine and size')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for the test signals')
    parser.add_argument('--output', type=str, default=None,
                        help='Write a JSON report to this path')
    parser.add_argument('--log-file', type=str, default=None,
                        help='Append detailed logs to this file')
    parser.add_argument('--verbose', action='store_true',
                        help='Log at DEBUG level')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    setup_logging(log_file=args.log_file, verbose=args.verbose)

    try:
        config = load_config(args.config) if args.config else BenchmarkConfig()
        overrides = {
            'sizes': args.sizes,
            'repeats': args.repeats,
            'seed': args.seed,
            'output': args.output,
        }
        overrides = {k: v for k, v in overrides.items() if v is not None}
        if overrides:
            config = BenchmarkConfig(**{**asdict(config), **overrides})

        console.print(Panel.fit(
            "[bold blue]DFT Engine Benchmark[/bold blue]\n"
            f"Sizes: {config.sizes}  Engines: {', '.join(config.engines)}",
            border_style="blue"
        ))

        results = run_benchmark(config, show_progress=True)
        display_results_table(results)
    except Exception as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        raise

    if config.output:
        console.print(f"\n[green]✓[/green] Report saved to {config.output}")

    return 0 if all(r.passed for r in results) else 1


if __name__ == '__main__':
    sys.exit(main())
