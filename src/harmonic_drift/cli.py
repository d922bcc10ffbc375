#!/usr/bin/env python3
"""
harmonic-drift - command-line driver for the evolving drone
Streams raw PCM, traces chord evolution, shows configuration
"""

import argparse
import os
import sys

from rich.console import Console
from rich.table import Table
from rich import box

from .config import get_config, print_config
from .errors import DriftError, EmptyChordError, InvalidIntervalError
from .evolution import EvolutionLoop
from .interval import Interval, format_chord
from .judges import judge_report
from .stream import DroneStream


def parse_seed(text: str):
    """Parse a seed chord like "1/2 1/1 3/2" (commas also accepted)"""
    chord = tuple(Interval.parse(token) for token in text.replace(",", " ").split())
    if not chord:
        raise EmptyChordError("seed chord needs at least 1 note")
    if len(set(chord)) != len(chord):
        raise InvalidIntervalError(f"seed chord repeats a note: {format_chord(chord)}")
    return chord


def make_loop(config, seed=None) -> EvolutionLoop:
    return EvolutionLoop(config.window_length, chord=seed, verbose=config.verbose > 0)


def render(config, windows=None, output=None, seed=None) -> int:
    """Write raw s16le mono PCM to output path or stdout"""
    stream = DroneStream(config, loop=make_loop(config, seed))
    if output:
        with open(output, 'wb') as f:
            written = stream.write_to(f, windows)
        print(f"[harmonic-drift] wrote {written} bytes to {output}", file=sys.stderr)
    else:
        stream.write_to(sys.stdout.buffer, windows)
    return 0


def trace(config, windows: int, seed=None, console: Console = None) -> Table:
    """Evolve windows steps without audio and tabulate each chord"""
    console = console or Console()
    loop = make_loop(config, seed)
    
    table = Table(title="Chord evolution", box=box.SIMPLE_HEAVY)
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Chord", style="bold", no_wrap=True)
    table.add_column("Harmony", justify="right")
    table.add_column("Novelty", justify="right")
    table.add_column("Combined", justify="right", style="green")
    table.add_column("Memory", justify="right", style="dim")
    table.add_column("Total", justify="right", style="dim")
    
    for index in range(windows + 1):
        report = judge_report(loop.chord, loop.memory)
        table.add_row(
            str(index),
            format_chord(loop.chord),
            f"{report.harmony:.4f}",
            f"{report.novelty:.4f}",
            f"{report.combined:.4f}",
            str(len(loop.memory)),
            f"{loop.memory.total_familiarity():.3f}",
        )
        if index < windows:
            loop.advance()
    
    console.print(table)
    return table


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="harmonic-drift",
        description="Evolving just-intonation drone generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  harmonic-drift render | aplay -f S16_LE -r 44100 -c 1   # Play forever
  harmonic-drift render --windows 40 --output drone.raw    # 10 seconds to file
  harmonic-drift trace --windows 16                        # Print chord history
  harmonic-drift trace --seed "1/1 3/2 5/4"                # Start from another chord
  harmonic-drift config                                    # Show configuration

Environment: DRIFT_SAMPLE_RATE, DRIFT_STEPS_PER_SEC, DRIFT_BASE_NOTE, DRIFT_VERBOSE
        """
    )
    
    subparsers = parser.add_subparsers(dest="command", help="Commands")
    
    render_parser = subparsers.add_parser("render", help="Stream raw s16le mono PCM")
    render_parser.add_argument("--windows", type=int, default=None,
                               help="Number of windows to render (default: endless)")
    render_parser.add_argument("--output", "-o", default=None,
                               help="Output file (default: stdout)")
    render_parser.add_argument("--seed", default=None,
                               help="Starting chord, e.g. \"1/2 1/1 3/2\" (default: 1/2 1/1 1/3 1/5 1/7)")
    
    trace_parser = subparsers.add_parser("trace", help="Print chord evolution without audio")
    trace_parser.add_argument("--windows", type=int, default=16,
                              help="Number of evolution steps (default: 16)")
    trace_parser.add_argument("--seed", default=None,
                              help="Starting chord (default: 1/2 1/1 1/3 1/5 1/7)")
    
    subparsers.add_parser("config", help="Show effective configuration")
    
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    
    if not args.command:
        parser.print_help()
        return 0
    
    windows = getattr(args, 'windows', None)
    if windows is not None and windows < 0:
        parser.error("--windows must be >= 0")
    
    try:
        config = get_config()
        seed = getattr(args, "seed", None)
        if seed is not None:
            seed = parse_seed(seed)
        if args.command == "render":
            return render(config, windows, args.output, seed)
        elif args.command == "trace":
            trace(config, windows, seed)
        elif args.command == "config":
            print_config(config)
    except (DriftError, ValueError) as e:
        print(f"[harmonic-drift] error: {e}", file=sys.stderr)
        return 1
    except BrokenPipeError:
        # Reader went away (player closed); silence the flush at exit
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        return 0
    except KeyboardInterrupt:
        print("\n[harmonic-drift] stopped", file=sys.stderr)
        return 0
    
    return 0


if __name__ == "__main__":
    sys.exit(main())
