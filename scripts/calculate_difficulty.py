"""
Utility script to compute aim and speed difficulty for a beatmap description.

Usage:
    python scripts/calculate_difficulty.py maps/example.json --rate 1.5

    # Save the per-object strain frames as JSON
    python scripts/calculate_difficulty.py maps/example.json --dump out/example_strains.json
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

# Ensure repo root is on sys.path when script is executed from anywhere
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.append(str(REPO_ROOT))

from beatmap_difficulty.engine import DifficultyCalculator, StrainCollector, load_beatmap  # noqa: E402
from beatmap_difficulty.logging_config import setup_logging  # noqa: E402


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Calculate aim and speed strain for a beatmap.")
    parser.add_argument("beatmap", type=Path, help="JSON beatmap description.")
    parser.add_argument("--rate", type=float, default=1.0, help="Playback rate multiplier.")
    parser.add_argument("--dump", type=Path, default=None, help="Write per-object strain frames to this JSON file.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "WARNING")

    if args.rate <= 0:
        print("--rate must be positive", file=sys.stderr)
        return 2

    beatmap = load_beatmap(args.beatmap)
    collector = StrainCollector()
    attributes = DifficultyCalculator(telemetry=collector).calculate(beatmap.hit_objects, args.rate)

    print(f"{beatmap.name}: {len(beatmap.hit_objects)} objects at {args.rate:g}x")
    print(f"  aim   {attributes.aim:.4f}")
    print(f"  speed {attributes.speed:.4f}")

    if args.dump:
        args.dump.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "beatmap": beatmap.name,
            "rate": args.rate,
            "aim": attributes.aim,
            "speed": attributes.speed,
            "frames": [frame.to_dict() for frame in collector.export()],
        }
        args.dump.write_text(json.dumps(payload, indent=2), encoding="utf8")
        print(f"Wrote {len(payload['frames'])} frames to {args.dump}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
