"""
Bandscope transform benchmark + parity validation.

Usage:
    python scripts/benchmark.py [--quick]

Modes:
    default  - buffer sizes up to 2048, 3 warm-up + 5 timed runs per function
    --quick  - buffer sizes up to 1024, 2 warm-up + 3 timed runs (CI-friendly)

Output: timing table + parity report printed to stdout.

Parity check: compares the FFT path (SpectrumAnalyzer.transform) against
the direct-form DFT on the same windowed input.  The two must agree to
within 1e-9 of the peak magnitude; anything looser means the fast path no
longer computes the same transform.
"""

import argparse
import os
import sys
import time
from typing import List

import numpy as np

# Make sure the installed package is on the path when run from repo root
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from bandscope.config import SpectrumConfig
from bandscope.core.analyzer import SpectrumAnalyzer, direct_dft
from bandscope.core.window import apply_window
from bandscope.pipeline import SpectrumPipeline

_SEP = "─" * 72
SAMPLE_RATE = 44100


def _hdr(title: str) -> None:
    print(f"\n{_SEP}")
    print(f"  {title}")
    print(_SEP)


def _timeit(fn, *args, warmup: int = 2, runs: int = 5, **kwargs) -> List[float]:
    """Run fn(*args, **kwargs), discard warmup iterations, return timed samples."""
    for _ in range(warmup):
        fn(*args, **kwargs)
    times = []
    for _ in range(runs):
        t0 = time.perf_counter()
        fn(*args, **kwargs)
        times.append(time.perf_counter() - t0)
    return times


def _stats(times: List[float]) -> str:
    arr = np.array(times)
    return f"mean={arr.mean()*1000:.3f} ms  min={arr.min()*1000:.3f} ms  max={arr.max()*1000:.3f} ms"


def _test_signal(n: int) -> np.ndarray:
    """Two tones plus a little seeded noise."""
    t = np.arange(n) / SAMPLE_RATE
    rng = np.random.RandomState(0)
    return (
        0.6 * np.sin(2 * np.pi * 440.0 * t)
        + 0.3 * np.sin(2 * np.pi * 3000.0 * t)
        + 0.05 * rng.randn(n)
    )


def _parity_report(fast: np.ndarray, reference: np.ndarray) -> dict:
    """Deviation of the FFT magnitudes from the direct DFT, relative to the peak."""
    fast_mag = np.abs(fast)
    ref_mag = np.abs(reference)
    diff = np.abs(fast - reference)
    peak = float(ref_mag.max()) or 1.0
    return {
        "max_diff": float(diff.max()),
        "rel_diff": float(diff.max()) / peak,
        "same_peak": int(np.argmax(fast_mag)) == int(np.argmax(ref_mag)),
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Bandscope transform benchmark")
    parser.add_argument(
        "--quick",
        action="store_true",
        help="Use smaller buffers for fast CI runs",
    )
    args = parser.parse_args()

    if args.quick:
        SIZES = [256, 1024]
        WARMUP, RUNS = 2, 3
        label = "quick mode"
    else:
        SIZES = [256, 512, 1024, 2048]
        WARMUP, RUNS = 3, 5
        label = "full mode"

    print(f"\nBandscope Transform Benchmark  -  {label}")
    print(f"Warm-up runs: {WARMUP}  |  Timed runs: {RUNS}")

    analyzer = SpectrumAnalyzer()
    pipeline = SpectrumPipeline(SpectrumConfig(compression_gamma=0.5))
    results = {}

    # ------------------------------------------------------------------
    # 1. Transform: FFT vs direct DFT
    # ------------------------------------------------------------------
    _hdr("1. transform (FFT vs direct DFT)")
    for n in SIZES:
        x = apply_window(_test_signal(n))
        t_fft = _timeit(analyzer.transform, x, warmup=WARMUP, runs=RUNS)
        t_dft = _timeit(direct_dft, x, warmup=1, runs=2)
        results[f"fft_{n}"] = t_fft
        results[f"dft_{n}"] = t_dft
        speedup = np.mean(t_dft) / np.mean(t_fft)
        print(f"  N={n:<5} FFT: {_stats(t_fft)}")
        print(f"  {'':7} DFT: {_stats(t_dft)}")
        print(f"  {'':7} Speedup: {speedup:.1f}×")

    # ------------------------------------------------------------------
    # 2. Full pipeline
    # ------------------------------------------------------------------
    _hdr("2. full pipeline (window + FFT + filter + compress + bands)")
    for n in SIZES:
        x = _test_signal(n)
        t = _timeit(pipeline.process_samples, x, SAMPLE_RATE, warmup=WARMUP, runs=RUNS)
        results[f"pipeline_{n}"] = t
        print(f"  N={n:<5} {_stats(t)}")

    # ------------------------------------------------------------------
    # Parity validation
    # ------------------------------------------------------------------
    _hdr("Parity validation (FFT vs direct DFT)")
    REL_MAX = 1e-9

    all_ok = True
    print(f"  {'N':<6}  {'max':>10}  {'relative':>10}  peak  status")
    print(f"  {'-'*6}  {'-'*10}  {'-'*10}  ----  ------")
    for n in SIZES:
        x = apply_window(_test_signal(n))
        r = _parity_report(analyzer.transform(x), direct_dft(x))
        ok = r["rel_diff"] <= REL_MAX and r["same_peak"]
        all_ok = all_ok and ok
        print(
            f"  {n:<6}  {r['max_diff']:>10.2e}  {r['rel_diff']:>10.2e}"
            f"  {'yes' if r['same_peak'] else 'NO ':>4}  [{'PASS' if ok else 'FAIL'}]"
        )

    if all_ok:
        print("\n  All parity checks PASSED.")
    else:
        print("\n  !! PARITY FAILURES DETECTED - the FFT path disagrees with the DFT !!")
        sys.exit(1)

    # ------------------------------------------------------------------
    # Summary table
    # ------------------------------------------------------------------
    _hdr("Summary")
    name_w = max(len(name) for name in results) + 2
    print(f"  {'Function':<{name_w}} Time (ms, mean)")
    print(f"  {'-'*name_w} ---------------")
    for name, times in results.items():
        print(f"  {name:<{name_w}} {np.mean(times)*1000:.3f}")

    print(f"\n{_SEP}\n")


if __name__ == "__main__":
    main()
