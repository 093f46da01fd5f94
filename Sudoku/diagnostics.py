"""
Diagnostics: inspect a puzzle's structure and the effort a search took.
"""
from collections import Counter
from typing import Dict

from .constraints import PossibilityMap
from .puzzle import Sudoku
from .solver import SolveResult


def analyze_puzzle(puzzle: Sudoku, verbose: bool = True) -> Dict:
    """Analyze the puzzle structure for potential issues"""
    possibilities = PossibilityMap(puzzle)
    freedoms = Counter(s.freedom() for s in possibilities if s is not None)
    contradictions = [puzzle.layout.points[i] for i in possibilities.contradictions()]
    invalid = puzzle.invalid_groups()

    report = {
        'order': puzzle.order,
        'dimensions': puzzle.dimensions,
        'cells': puzzle.size,
        'empty_cells': puzzle.empty_count(),
        'invalid_groups': [(kind.value, row) for kind, row in invalid],
        'freedom_histogram': dict(sorted(freedoms.items())),
        'contradictions': [tuple(p) for p in contradictions],
    }

    if not verbose:
        return report

    print("\n" + "=" * 70)
    print("PUZZLE STRUCTURE ANALYSIS")
    print("=" * 70)
    print(f"\nOrder: {puzzle.order} ({puzzle.axis} values), {puzzle.dimensions}D")
    print(f"Cells: {puzzle.size} ({puzzle.empty_count()} empty)")

    print("\n--- GROUP ANALYSIS ---")
    if invalid:
        print(f"⚠ WARNING: {len(invalid)} group(s) repeat a value!")
        for kind, row in invalid:
            print(f"  {kind.value} #{row}")
    else:
        print("All groups valid ✓")

    print("\n--- CANDIDATE ANALYSIS ---")
    for freedom, count in sorted(freedoms.items()):
        print(f"  {count:4d} cell(s) with {freedom} candidate(s)")
    if contradictions:
        print(f"⚠ WARNING: {len(contradictions)} empty cell(s) have no candidate left!")
        for point in contradictions:
            print(f"  {tuple(point)}")

    return report


def print_summary(result: SolveResult) -> None:
    """Print how hard the search had to work."""
    print(f"\n{'=' * 70}")
    if result.unique:
        print(f"✓ UNIQUE in {result.duration_ms}ms, score {result.score} ({result.difficulty})")
    elif result.solutions_found:
        print(f"✗ AMBIGUOUS: stopped after {result.solutions_found} solutions")
    else:
        print(f"✗ UNSOLVABLE after {result.duration_ms}ms")

    stats = result.stats
    print(f"\nStats:")
    print(f"  Nodes: {stats.get('nodes', 0)}")
    print(f"  Guesses: {stats.get('guesses', 0)}")
    print(f"  Backtracks: {stats.get('backtracks', 0)}")
    print(f"  Dead ends: {stats.get('dead_ends', 0)}")
    print(f"  Branch difficulty: {result.branch_difficulty}")

    if stats.get('guesses', 0) == 0 and result.solutions_found:
        print("\n💡 No guessing needed - single-candidate cells carried the whole search")
    print(f"{'=' * 70}\n")
