import pytest

import main


@pytest.fixture
def word_files(tmp_path):
    dictionary = tmp_path / "wordlist.txt"
    dictionary.write_text("\n".join(["core", "corner", "stone", "root", "cornerstones"]))
    common = tmp_path / "common_words.txt"
    common.write_text("core\nstone\n")
    return ["--dictionary", str(dictionary), "--common-words", str(common)]


def test_list_mode(capsys):
    assert main.main(["list", "--puzzles", ""]) == 0
    assert "CORNERSTONES" in capsys.readouterr().out


def test_malformed_puzzle_config_exits_cleanly(tmp_path, capsys):
    config = tmp_path / "puzzles.json"
    config.write_text('{"puzzles": ["CORNERSTONES"]}')

    assert main.main(["list", "--puzzles", str(config)]) == 1
    assert "Invalid puzzle configuration" in capsys.readouterr().out


def test_solve_mode(word_files, capsys):
    assert main.main(["solve", "CORNERSTONES", "--puzzles", ""] + word_files) == 0

    out = capsys.readouterr().out
    assert "Found 5 unique words" in out
    assert "Cornerstone words (2)" in out
    assert "Seed word path: 1 -> 5 -> 4" in out


def test_validate_mode(word_files, capsys):
    assert main.main(["validate", "--puzzles", ""] + word_files) == 0
    assert "Working puzzles: 13/13" in capsys.readouterr().out


def test_unknown_puzzle(word_files):
    assert main.main(["solve", "NOPE", "--puzzles", ""] + word_files) == 1


def test_play_mode(word_files, monkeypatch, capsys):
    answers = iter(["core", "14 10 6 2 7", "quit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))

    assert main.main(["play", "CORNERSTONES", "--puzzles", ""] + word_files) == 0

    out = capsys.readouterr().out
    assert "CORE: Cornerstone word found!" in out
    assert "🎉 Puzzle completed!" in out


def test_parse_selection():
    assert main.parse_selection("1 5 4, 9") == [1, 5, 4, 9]
    assert main.parse_selection("core") is None
