"""
User-configurable preferences for games and generation.
"""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Dict, Union

from .solver import Difficulty


@dataclass
class Behavior:
    # Whether the player may enter a value that disagrees with the solution.
    allow_incorrect_answers: bool = False


@dataclass
class Generation:
    default_order: int = 3
    default_difficulty: Difficulty = Difficulty.INTERMEDIATE
    default_dimensions: int = 2


@dataclass
class Preferences:
    behavior: Behavior = field(default_factory=Behavior)
    generation: Generation = field(default_factory=Generation)

    def to_dict(self) -> Dict:
        data = asdict(self)
        data['generation']['default_difficulty'] = str(self.generation.default_difficulty)
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> "Preferences":
        behavior = Behavior(**data.get('behavior', {}))
        generation = dict(data.get('generation', {}))
        if 'default_difficulty' in generation:
            generation['default_difficulty'] = Difficulty.parse(generation['default_difficulty'])
        return cls(behavior=behavior, generation=Generation(**generation))

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Preferences":
        with open(path, 'r') as f:
            return cls.from_dict(json.load(f))

    def save(self, path: Union[str, Path]) -> None:
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)
