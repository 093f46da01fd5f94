"""
N-dimensional Sudoku Package

Constraint-propagation solving with uniqueness detection, difficulty scoring
and randomized puzzle generation.
"""

from .point import Point
from .puzzle import (
    Sudoku, Group, GroupKind,
    ParseError, UnequalDimensions, NonSquareAxis, LargeAxis, LargeValue,
)
from .constraints import PossibilitySet, PossibilityMap
from .solver import Solver, SolveResult, SolveError, SolveTimeout, Difficulty
from .generator import generate, grid, harden, GenerateError, HardenError, MAX_HARDEN_ITERATIONS
from .config import Preferences, Behavior, Generation
from .game import Game
from .output import SolutionFormatter

__version__ = "1.0.0"
__all__ = [
    'Point',
    'Sudoku',
    'Group',
    'GroupKind',
    'ParseError',
    'UnequalDimensions',
    'NonSquareAxis',
    'LargeAxis',
    'LargeValue',
    'PossibilitySet',
    'PossibilityMap',
    'Solver',
    'SolveResult',
    'SolveError',
    'SolveTimeout',
    'Difficulty',
    'generate',
    'grid',
    'harden',
    'GenerateError',
    'HardenError',
    'MAX_HARDEN_ITERATIONS',
    'Preferences',
    'Behavior',
    'Generation',
    'Game',
    'SolutionFormatter',
]
