import json

from Sudoku import Difficulty, Preferences


def test_defaults():
    prefs = Preferences()
    assert prefs.behavior.allow_incorrect_answers is False
    assert prefs.generation.default_order == 3
    assert prefs.generation.default_difficulty == Difficulty.INTERMEDIATE
    assert prefs.generation.default_dimensions == 2


def test_save_and_load(tmp_path):
    prefs = Preferences()
    prefs.behavior.allow_incorrect_answers = True
    prefs.generation.default_difficulty = Difficulty.EASY
    path = tmp_path / "prefs.json"
    prefs.save(path)

    data = json.loads(path.read_text())
    assert data['generation']['default_difficulty'] == "easy"
    assert Preferences.load(path) == prefs


def test_partial_dict_keeps_defaults():
    prefs = Preferences.from_dict({'generation': {'default_order': 2}})
    assert prefs.generation.default_order == 2
    assert prefs.generation.default_difficulty == Difficulty.INTERMEDIATE
    assert prefs.behavior.allow_incorrect_answers is False
