#!/usr/bin/env python3
"""
Sudoku - Main Entry Point

Usage:
    python -m Sudoku.main solve puzzle.txt
    python -m Sudoku.main score < puzzle.txt
    python -m Sudoku.main generate 3 --difficulty easy --seed 7
    python -m Sudoku.main diagnose puzzle.txt
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from .config import Preferences
from .diagnostics import analyze_puzzle, print_summary
from .generator import GenerateError, generate
from .output import SolutionFormatter
from .puzzle import ParseError, Sudoku
from .solver import Difficulty, SolveError, Solver

# ============================================================================
# CONFIGURATION
# ============================================================================
DEFAULT_TIMEOUT_SECONDS = None
# Wall-clock budget per search; None searches until done

OUTPUT_DIR = "data/solutions"
# Where `solve --output-dir` writes when given without a path
# ============================================================================


def read_puzzle(path: Optional[str]) -> Sudoku:
    """Parse a puzzle from a file, or stdin when no path is given."""
    if path is None:
        text = sys.stdin.read()
    else:
        text = Path(path).read_text()
    return Sudoku.from_str(text)


def solve_puzzle(puzzle: Sudoku, output_dir: Optional[str] = None, verbose: bool = False,
                 timeout_seconds: Optional[float] = DEFAULT_TIMEOUT_SECONDS) -> Sudoku:
    """
    Solve a single puzzle and optionally save results.

    Raises SolveError when the puzzle has no unique solution.
    """
    solver = Solver(puzzle, verbose=verbose, timeout_seconds=timeout_seconds)
    result = solver.solve()

    if output_dir is not None:
        out = Path(output_dir)
        out.mkdir(parents=True, exist_ok=True)
        SolutionFormatter.save_solution(puzzle, result, str(out / "solution.json"))
        SolutionFormatter.save_human_readable(puzzle, result, str(out / "solution.txt"))

    if verbose:
        print_summary(result)

    if not result.unique:
        raise SolveError(f"no unique solution ({result.solutions_found} found)")
    return result.solution


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="ku", description="A sudoku generator/solver/manipulator.")
    sub = ap.add_subparsers(dest="command", required=True)

    def add_common(p):
        p.add_argument("--verbose", "-v", action="store_true", help="Print search progress.")
        p.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT_SECONDS,
                       help="Give up after this many seconds.")

    p = sub.add_parser("solve", help="Solves the given sudoku.")
    p.add_argument("input", nargs="?", help="Input file (defaults to stdin).")
    p.add_argument("--output-dir", nargs="?", const=OUTPUT_DIR, default=None,
                   help=f"Save solution.json/solution.txt (default dir: {OUTPUT_DIR}).")
    add_common(p)

    p = sub.add_parser("score", help="Scores the given sudoku.")
    p.add_argument("input", nargs="?", help="Input file (defaults to stdin).")
    add_common(p)

    p = sub.add_parser("generate", help="Generates a sudoku.")
    p.add_argument("order", nargs="?", type=int, default=None,
                   help="The order of sudoku to be generated (defaults to preferences).")
    p.add_argument("--difficulty", type=Difficulty.parse, default=None,
                   help="unplayable, beginner, easy, intermediate, difficult or advanced.")
    p.add_argument("--dimensions", type=int, default=None)
    p.add_argument("--seed", type=int, default=None, help="RNG seed for reproducibility.")
    p.add_argument("--preferences", default=None, help="Preferences JSON file.")
    add_common(p)

    p = sub.add_parser("diagnose", help="Analyzes the given sudoku.")
    p.add_argument("input", nargs="?", help="Input file (defaults to stdin).")
    add_common(p)

    return ap


def main(argv=None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    try:
        if args.command == "solve":
            puzzle = read_puzzle(args.input)
            solution = solve_puzzle(puzzle, output_dir=args.output_dir,
                                    verbose=args.verbose, timeout_seconds=args.timeout)
            print(solution, end="")

        elif args.command == "score":
            puzzle = read_puzzle(args.input)
            result = Solver(puzzle, verbose=args.verbose, timeout_seconds=args.timeout).solve()
            if result.score is None:
                print("Couldn't score puzzle.")
                return 1
            print(f"Score: {result.score} ({result.difficulty})")

        elif args.command == "generate":
            prefs = Preferences.load(args.preferences) if args.preferences else Preferences()
            defaults = prefs.generation
            puzzle = generate(
                args.order or defaults.default_order,
                args.difficulty if args.difficulty is not None else defaults.default_difficulty,
                dimensions=args.dimensions or defaults.default_dimensions,
                rng=args.seed,
                verbose=args.verbose,
            )
            print(puzzle, end="")

        elif args.command == "diagnose":
            puzzle = read_puzzle(args.input)
            analyze_puzzle(puzzle)
            result = Solver(puzzle, verbose=args.verbose, timeout_seconds=args.timeout).solve()
            print_summary(result)

    except ParseError as e:
        print(f"Error: could not parse puzzle: {e}", file=sys.stderr)
        return 1
    except SolveError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (GenerateError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\n⚠ Interrupted by user (Ctrl+C)", file=sys.stderr)
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
