"""
Command line front end.

Loads an audio file, runs the spectrum pipeline and prints one
``"<hz>Hz => <amplitude>"`` line per retained bin, optionally writing the
full result to JSON or .npz.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import soundfile

from bandscope.config import PRESETS, SpectrumConfig, get_preset
from bandscope.core.source import SampleLoader
from bandscope.errors import SpectrumError
from bandscope.io.exporter import SpectrumExporter
from bandscope.pipeline import SpectrumPipeline


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bandscope",
        description="Analyze the frequency spectrum of an audio file",
    )

    parser.add_argument(
        "audio",
        type=Path,
        help="Input audio file (wav, flac, ogg)",
    )

    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Write the spectrum to a .json or .npz file",
    )

    parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default=None,
        help="Start from a named configuration",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON file with configuration options (applied after --preset)",
    )

    parser.add_argument("--min-freq", type=float, default=None, help="Lower bound in Hz (default: 20)")
    parser.add_argument("--max-freq", type=float, default=None, help="Upper bound in Hz (default: 20000)")
    parser.add_argument("--stride", type=int, default=None, help="Keep every Kth bin (default: 1)")
    parser.add_argument(
        "--gamma",
        type=float,
        default=None,
        help="Amplitude compression exponent in (0, 1] (default: 1.0)",
    )
    parser.add_argument(
        "--no-window",
        action="store_true",
        help="Skip the Hann window before the transform",
    )

    band_group = parser.add_mutually_exclusive_group()
    band_group.add_argument(
        "--bands",
        type=float,
        nargs=2,
        metavar=("LOW", "HIGH"),
        default=None,
        help="Normalized low/mid and mid/high cut points",
    )
    band_group.add_argument(
        "--flat",
        action="store_true",
        help="Do not split the spectrum into bands",
    )

    parser.add_argument("--boost", type=float, default=None, help="Amplitude boost after normalization")
    clamp_group = parser.add_mutually_exclusive_group()
    clamp_group.add_argument("--clamp-max", type=float, default=None, help="Clip amplitudes to this value")
    clamp_group.add_argument("--no-clamp", action="store_true", help="Do not clip boosted amplitudes")

    parser.add_argument(
        "-n", "--max-samples",
        type=int,
        default=2048,
        help="Analyze only the first N samples, 0 for all (default: 2048)",
    )

    parser.add_argument(
        "--offset",
        type=float,
        default=0.0,
        help="Seconds to skip before reading (default: 0)",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Do not print per-bin lines",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    return parser


def config_from_args(args: argparse.Namespace) -> SpectrumConfig:
    """Combine preset, config file and flags, later sources winning."""
    config = get_preset(args.preset) if args.preset else SpectrumConfig()

    if args.config is not None:
        with open(args.config, "r", encoding="utf-8") as f:
            overrides = json.load(f)
        merged = config.to_dict()
        merged.update(overrides)
        config = SpectrumConfig.from_dict(merged)

    changes = {}
    if args.min_freq is not None:
        changes["min_freq"] = args.min_freq
    if args.max_freq is not None:
        changes["max_freq"] = args.max_freq
    if args.stride is not None:
        changes["stride"] = args.stride
    if args.gamma is not None:
        changes["compression_gamma"] = args.gamma
    if args.no_window:
        changes["window_enabled"] = False
    if args.bands is not None:
        changes["band_thresholds"] = tuple(args.bands)
    if args.flat:
        changes["band_thresholds"] = None
    if args.boost is not None:
        changes["amplitude_boost"] = args.boost
    if args.clamp_max is not None:
        changes["clamp_max"] = args.clamp_max
    if args.no_clamp:
        changes["clamp_max"] = None

    return config.replace(**changes).validate()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if not args.audio.exists():
        print(f"Error: Audio file not found: {args.audio}", file=sys.stderr)
        return 1

    max_samples = args.max_samples if args.max_samples > 0 else None

    try:
        config = config_from_args(args)
        loader = SampleLoader(max_samples=max_samples)
        print(f"Audio format: {loader.describe(args.audio)}")

        buffer = loader.load(args.audio, offset=args.offset)
        model = SpectrumPipeline(config).process(buffer)
    except (
        SpectrumError,
        json.JSONDecodeError,
        soundfile.LibsndfileError,
        OSError,
    ) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    exporter = SpectrumExporter()
    if not args.quiet:
        for line in exporter.format_lines(model):
            print(line)

    peak = model.peak()
    print(f"Peak: {peak.frequency_hz:.1f}Hz ({len(model)} bins from {buffer.n_samples} samples)")
    if model.bands is not None:
        counts = model.bands.counts()
        print(f"Bands: low={counts['low']} mid={counts['mid']} high={counts['high']}")

    if args.output is not None:
        if args.output.suffix == ".npz":
            written = exporter.export_numpy(model, args.output)
        else:
            written = exporter.export_json(model, args.output)
        print(f"Wrote {written}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
