import json
from datetime import datetime
from typing import Dict, Optional

from .puzzle import Sudoku
from .solver import SolveResult


class SolutionFormatter:
    """Formats puzzle solutions for output"""

    @staticmethod
    def format_solution_json(puzzle: Sudoku, result: SolveResult) -> Dict:
        """
        Format solution as JSON
        """
        solution = {
            'puzzle_info': {
                'order': puzzle.order,
                'dimensions': puzzle.dimensions,
                'total_cells': puzzle.size,
                'empty_cells': puzzle.empty_count(),
                'valid': puzzle.is_valid(),
                'timestamp': datetime.now().isoformat()
            },
            'solving_stats': dict(result.stats, duration_ms=result.duration_ms),
            'solutions_found': result.solutions_found,
            'unique': result.unique,
            'branch_difficulty': result.branch_difficulty,
            'score': result.score,
            'difficulty': str(result.difficulty) if result.difficulty is not None else None,
            'puzzle': SolutionFormatter._rows(puzzle),
            'solution': SolutionFormatter._rows(result.solution) if result.solution else None,
        }
        return solution

    @staticmethod
    def _rows(sudoku: Sudoku):
        return [[int(v) or None for v in row] for row in sudoku.elements.reshape(-1, sudoku.axis)]

    @staticmethod
    def format_solution_human_readable(puzzle: Sudoku, result: SolveResult) -> str:
        """
        Format solution as human-readable text
        """
        lines = []
        lines.append("=" * 60)
        lines.append("SUDOKU SOLUTION")
        lines.append("=" * 60)
        lines.append(f"\nOrder {puzzle.order}, {puzzle.dimensions}D, "
                     f"{puzzle.empty_count()}/{puzzle.size} cells empty")

        if result.unique:
            lines.append(f"Score: {result.score} ({result.difficulty})")
        elif result.solutions_found:
            lines.append("Not uniquely solvable (several solutions)")
        else:
            lines.append("No solution")

        lines.append("\nPUZZLE:")
        lines.append(SolutionFormatter.format_grid_visualization(puzzle))
        if result.solution is not None:
            lines.append("\nSOLUTION:")
            lines.append(SolutionFormatter.format_grid_visualization(result.solution))
        lines.append("=" * 60)

        return "\n".join(lines)

    @staticmethod
    def format_grid_visualization(sudoku: Sudoku, empty: str = '·') -> str:
        """
        Create a text-based grid with box rules.
        Grids above two dimensions fall back to the plain text format.
        """
        if sudoku.dimensions != 2:
            return str(sudoku)

        order, axis = sudoku.order, sudoku.axis
        width = len(str(axis))
        rows = sudoku.elements.reshape(axis, axis)

        segment = "-" * (order * width + order - 1)
        rule = "-+-".join([segment] * order)

        lines = []
        for y, row in enumerate(rows):
            if y and y % order == 0:
                lines.append(rule)
            cells = []
            for x, value in enumerate(row):
                if x and x % order == 0:
                    cells.append("|")
                cells.append(str(int(value)).rjust(width) if value else empty.rjust(width))
            lines.append(" ".join(cells))
        return "\n".join(lines)

    @staticmethod
    def save_solution(puzzle: Sudoku, result: SolveResult, output_path: str):
        """
        Save solution to JSON file
        """
        solution = SolutionFormatter.format_solution_json(puzzle, result)

        with open(output_path, 'w') as f:
            json.dump(solution, f, indent=2)

        print(f"\n✓ Solution saved to: {output_path}")

    @staticmethod
    def save_human_readable(puzzle: Sudoku, result: SolveResult, output_path: str,
                            text: Optional[str] = None):
        """
        Save human-readable solution to text file
        """
        if text is None:
            text = SolutionFormatter.format_solution_human_readable(puzzle, result)

        with open(output_path, 'w') as f:
            f.write(text)

        print(f"✓ Human-readable solution saved to: {output_path}")
