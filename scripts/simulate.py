#!/usr/bin/env python3
"""Print playback-rate tables for an analysis file, or compare slow vs fast songs.

Modes:
  table (default) - rate, instantaneous BPM and beat confidence over time ranges
  compare         - quiet-section vs loud-section rates for a synthetic ballad and EDM track

Usage:
    uv run python scripts/simulate.py data/example.json
    uv run python scripts/simulate.py data/example.json --range 40 50 --range 100 110 --step 200
    uv run python scripts/simulate.py data/example.json --strategy simple --bpm 120
    uv run python scripts/simulate.py --mode compare
"""

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from dancerate.analysis.loader import AnalysisFormatError, load_snapshot
from dancerate.analysis.models import AnalysisSnapshot, BeatState
from dancerate.rate.config import RateConfig, RateStrategy
from dancerate.rate.engine import compute_rate, describe_position
from dancerate.rate.strategies.trap_nation import tempo_intensity
from dancerate.simulation import compare_sections, synthetic_song

DEFAULT_RANGES = [(0.0, 10.0), (40.0, 50.0), (100.0, 110.0)]


def print_table(snapshot: AnalysisSnapshot, ranges: list[tuple[float, float]], step_ms: float, config: RateConfig):
    track = snapshot.track
    if track:
        print(f"Track Duration: {track.duration:.1f}s")
        print(f"Track BPM: {track.tempo:.1f}")
        print(f"Track Loudness: {track.loudness:.1f}")
    print(f"Beats: {len(snapshot.beats or ())}  Sections: {len(snapshot.sections or ())}  "
          f"Segments: {len(snapshot.segments or ())}")
    print(f"Strategy: {config.strategy.value}  Target BPM: {config.target_base_bpm:.0f}")

    for start_s, end_s in ranges:
        print(f"\n--- {start_s:.0f}s - {end_s:.0f}s ---")
        print("Time(s) | Rate  | InstBPM | Conf | State")
        print("-" * 48)
        t = start_s * 1000
        while t < end_s * 1000:
            rate = compute_rate(t, snapshot, config=config)
            ctx = describe_position(t, snapshot)
            bpm = ctx.bpm if ctx.state == BeatState.IN_BEAT else 0.0
            print(f"{t / 1000:<7.1f} | {rate:<5.2f} | {bpm:<7.1f} | {ctx.confidence:<4.2f} | {ctx.state.value}")
            t += step_ms


def print_comparison(config: RateConfig):
    songs = [
        ("SLOW BALLAD", synthetic_song(80, loudness=-8, section_loudness=[-12, -6, -10], confidence=0.8)),
        ("FAST EDM", synthetic_song(128, loudness=-6, section_loudness=[-12, -4, -10], confidence=0.9)),
    ]
    for name, song in songs:
        print("=" * 60)
        print(f"{name} ({song.track.tempo:.0f} BPM)")
        print("=" * 60)
        print(f"Tempo Intensity Factor: {tempo_intensity(song) * 100:.0f}%")
        result = compare_sections(song, (5000, 25000), (35000, 60000), step_ms=500, config=config)
        q, l = result["quiet"], result["loud"]
        print(f"Quiet Section (verse):  Min={q['min']:.2f} Max={q['max']:.2f} Avg={q['mean']:.2f}")
        print(f"Loud Section (hook):    Min={l['min']:.2f} Max={l['max']:.2f} Avg={l['mean']:.2f}")
        print(f"Hook vs Verse ratio:    {result['ratio']:.2f}x\n")


def main():
    parser = argparse.ArgumentParser(description="Simulate dynamic playback rates")
    parser.add_argument("analysis", nargs="?", help="Audio-analysis JSON file")
    parser.add_argument("--mode", choices=["table", "compare"], default="table")
    parser.add_argument("--range", nargs=2, type=float, action="append", metavar=("START", "END"),
                        help="Time range in seconds (repeatable)")
    parser.add_argument("--step", type=float, default=200.0, help="Step in ms (default: 200)")
    parser.add_argument("--bpm", type=float, default=130.0, help="Clip base BPM (default: 130)")
    parser.add_argument("--strategy", choices=[s.value for s in RateStrategy],
                        default=RateStrategy.TRAP_NATION.value)
    args = parser.parse_args()

    config = RateConfig(target_base_bpm=args.bpm, strategy=args.strategy)

    if args.mode == "compare":
        print_comparison(config)
        return

    if not args.analysis:
        parser.error("analysis file is required in table mode")
    try:
        snapshot = load_snapshot(args.analysis)
    except (OSError, AnalysisFormatError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    ranges = [tuple(r) for r in args.range] if args.range else DEFAULT_RANGES
    print_table(snapshot, ranges, args.step, config)


if __name__ == "__main__":
    main()
