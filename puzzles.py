"""
Puzzle configuration for Cornerstones

Static data consumed by the word finder: the adjacency table of the
cross-shaped grid, the table of Hamiltonian paths used to lay out seed
words, and the puzzle name -> (seed word, path index) mapping.

Everything is validated once here, at load time, so the rest of the
code can rely on integer positions and 12-position paths.
"""

import json
import os
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from cross_grid import (
    SEED_LENGTH,
    USABLE_POSITIONS,
    AdjacencyMap,
    CrossGrid,
    InvalidPuzzleConfiguration,
    broken_links,
    place_seed_word,
    validate_path,
)

# ============================================================================
# DEFAULT CONFIGURATION
# ============================================================================

# Orthogonal links plus the diagonals running through the centre block.
DEFAULT_ADJACENCY = {
    1: [2, 4, 5, 6],
    2: [1, 5, 6, 7],
    4: [1, 5, 8, 9],
    5: [1, 2, 4, 6, 8, 9, 10],
    6: [1, 2, 5, 7, 9, 10, 11],
    7: [2, 6, 10, 11],
    8: [4, 5, 9, 13],
    9: [4, 5, 6, 8, 10, 13, 14],
    10: [5, 6, 7, 9, 11, 13, 14],
    11: [6, 7, 10, 14],
    13: [8, 9, 10, 14],
    14: [9, 10, 11, 13],
}

# Every path is a walk under DEFAULT_ADJACENCY. Each comes from the shipped
# game table or its later revision. Slots 1, 5 and 6 differ from the revision:
# shipped path 1 steps 10 -> 2, revised path 5 steps 13 -> 11, and revised
# path 6 already sits in slot 1.
DEFAULT_HAMILTONIAN_PATHS = [
    [1, 5, 4, 8, 9, 13, 14, 10, 6, 2, 7, 11],   # Path 0: shipped and revised
    [14, 13, 8, 9, 4, 5, 1, 2, 7, 6, 11, 10],   # Path 1: revised path 6
    [1, 2, 7, 11, 14, 13, 8, 4, 5, 6, 10, 9],   # Path 2: shipped and revised
    [8, 13, 14, 10, 9, 5, 6, 11, 7, 2, 1, 4],   # Path 3: revised
    [11, 10, 14, 13, 9, 8, 4, 5, 1, 2, 6, 7],   # Path 4: revised
    [8, 4, 5, 1, 6, 2, 7, 11, 14, 10, 9, 13],   # Path 5: shipped
    [9, 5, 4, 8, 13, 14, 10, 6, 1, 2, 7, 11],   # Path 6: shipped
    [14, 13, 9, 10, 11, 7, 6, 2, 1, 5, 4, 8],   # Path 7: shipped and revised
    [2, 1, 4, 5, 9, 8, 13, 14, 11, 10, 6, 7],   # Path 8: shipped and revised
    [7, 11, 10, 14, 9, 13, 8, 4, 5, 1, 2, 6],   # Path 9: shipped and revised
]

# The first ten use the revised path indices; the last three are shipped
# puzzles the revision dropped. UNIVERSITIES and NEIGHBORHOOD therefore sit on
# shipped paths 5 and 6, unlike in either shipped or revised table.
DEFAULT_PUZZLES = {
    "CORNERSTONES": {"seed_word": "CORNERSTONES", "path_index": 0},
    "AVAILABILITY": {"seed_word": "AVAILABILITY", "path_index": 1},
    "EXPERIMENTAL": {"seed_word": "EXPERIMENTAL", "path_index": 2},
    "TECHNOLOGIES": {"seed_word": "TECHNOLOGIES", "path_index": 3},
    "CHAMPIONSHIP": {"seed_word": "CHAMPIONSHIP", "path_index": 4},
    "UNIVERSITIES": {"seed_word": "UNIVERSITIES", "path_index": 5},
    "NEIGHBORHOOD": {"seed_word": "NEIGHBORHOOD", "path_index": 6},
    "THANKSGIVING": {"seed_word": "THANKSGIVING", "path_index": 7},
    "ENCYCLOPEDIA": {"seed_word": "ENCYCLOPEDIA", "path_index": 8},
    "BREAKTHROUGH": {"seed_word": "BREAKTHROUGH", "path_index": 9},
    "DEVELOPMENTS": {"seed_word": "DEVELOPMENTS", "path_index": 2},
    "RELATIONSHIP": {"seed_word": "RELATIONSHIP", "path_index": 0},
    "CONVERSATION": {"seed_word": "CONVERSATION", "path_index": 3},
}


# ============================================================================
# CONFIGURATION TYPES
# ============================================================================

@dataclass(frozen=True)
class Puzzle:
    name: str
    seed_word: str
    path_index: int
    path: Tuple[int, ...]


@dataclass
class PuzzleConfig:
    """Validated adjacency table, path table and puzzle list"""
    adjacency: AdjacencyMap
    paths: List[Tuple[int, ...]]
    puzzles: Dict[str, Puzzle] = field(default_factory=dict)

    def puzzle_names(self) -> List[str]:
        return list(self.puzzles)

    def get_puzzle(self, name: str) -> Puzzle:
        key = name.upper()
        if key not in self.puzzles:
            raise KeyError(f"Unknown puzzle: {name} (available: {', '.join(self.puzzles)})")
        return self.puzzles[key]

    def build_grid(self, name: str) -> CrossGrid:
        """Place a puzzle's seed word along its path"""
        puzzle = self.get_puzzle(name)
        return place_seed_word(puzzle.seed_word, puzzle.path)


# ============================================================================
# LOADING
# ============================================================================

def build_puzzle_config(adjacency, paths, puzzles, strict=True) -> PuzzleConfig:
    """
    Validate raw configuration data

    Args:
        adjacency: position -> neighbor list (int or string keys)
        paths: list of 12-position paths
        puzzles: name -> {"seed_word"/"seedWord", "path_index"/"pathIndex"}
        strict: also require every path to be a walk under the adjacency map

    Returns:
        PuzzleConfig

    Raises:
        InvalidPuzzleConfiguration: on the first problem found
    """
    adjacency_map = adjacency if isinstance(adjacency, AdjacencyMap) else AdjacencyMap.from_dict(adjacency)

    if not isinstance(paths, (list, tuple)):
        raise InvalidPuzzleConfiguration(f"Path table must be a list, got {type(paths).__name__}")
    if not isinstance(puzzles, dict):
        raise InvalidPuzzleConfiguration(
            f"Puzzles must be a mapping of name -> entry, got {type(puzzles).__name__}")

    checked_paths = []
    for index, path in enumerate(paths):
        try:
            positions = validate_path(path)
        except InvalidPuzzleConfiguration as e:
            raise InvalidPuzzleConfiguration(f"Path {index}: {e}") from None

        if strict:
            broken = broken_links(positions, adjacency_map)
            if broken:
                a, b = broken[0]
                raise InvalidPuzzleConfiguration(
                    f"Path {index}: positions {a} and {b} are not adjacent")
        checked_paths.append(positions)

    checked_puzzles = {}
    for name, entry in puzzles.items():
        if not isinstance(name, str) or not name:
            raise InvalidPuzzleConfiguration(f"Puzzle name must be a non-empty string, got {name!r}")
        if not isinstance(entry, dict):
            raise InvalidPuzzleConfiguration(f"Puzzle {name}: entry must be a mapping, got {entry!r}")
        seed_word = entry.get("seed_word", entry.get("seedWord"))
        path_index = entry.get("path_index", entry.get("pathIndex"))

        if not isinstance(seed_word, str) or len(seed_word) != SEED_LENGTH or not seed_word.isalpha():
            raise InvalidPuzzleConfiguration(
                f"Puzzle {name}: seed word must be {SEED_LENGTH} letters, got {seed_word!r}")
        if isinstance(path_index, bool) or not isinstance(path_index, int) \
                or not 0 <= path_index < len(checked_paths):
            raise InvalidPuzzleConfiguration(
                f"Puzzle {name}: invalid path index {path_index!r} "
                f"(must be 0-{len(checked_paths) - 1})")

        key = name.upper()
        checked_puzzles[key] = Puzzle(
            name=key,
            seed_word=seed_word.upper(),
            path_index=path_index,
            path=checked_paths[path_index],
        )

    return PuzzleConfig(adjacency=adjacency_map, paths=checked_paths, puzzles=checked_puzzles)


def load_puzzle_config(json_path=None, strict=True) -> PuzzleConfig:
    """
    Load puzzle configuration

    Args:
        json_path: JSON file with "adjacency", "hamiltonian_paths" and
                   "puzzles" keys. None returns the built-in defaults.
        strict: require every path to be a walk (see build_puzzle_config)

    Returns:
        PuzzleConfig
    """
    if json_path is None:
        return build_puzzle_config(DEFAULT_ADJACENCY, DEFAULT_HAMILTONIAN_PATHS, DEFAULT_PUZZLES, strict)

    if not os.path.exists(json_path):
        raise InvalidPuzzleConfiguration(f"Puzzle config not found: {json_path}")

    with open(json_path, 'r') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidPuzzleConfiguration(f"Puzzle config {json_path} is not valid JSON: {e}") from None

    if not isinstance(data, dict):
        raise InvalidPuzzleConfiguration(f"Puzzle config {json_path} must be a JSON object")

    return build_puzzle_config(
        data.get("adjacency", DEFAULT_ADJACENCY),
        data.get("hamiltonian_paths", data.get("paths", DEFAULT_HAMILTONIAN_PATHS)),
        data.get("puzzles", {}),
        strict,
    )


# ============================================================================
# PUZZLE VALIDATION
# ============================================================================

def unreachable_positions(grid: CrossGrid, adjacency: AdjacencyMap) -> List[int]:
    """Filled positions not reachable from the first filled position"""
    filled = grid.filled_positions()
    if not filled:
        return []

    seen = {filled[0]}
    queue = deque([filled[0]])
    while queue:
        current = queue.popleft()
        for neighbor in adjacency.neighbors(current):
            if neighbor not in seen and grid.is_filled(neighbor):
                seen.add(neighbor)
                queue.append(neighbor)

    return [position for position in filled if position not in seen]


def validate_puzzle(puzzle: Puzzle, config: PuzzleConfig, dictionary=None) -> dict:
    """
    Check a configured puzzle for playability

    Args:
        puzzle: Puzzle to check
        config: PuzzleConfig the puzzle belongs to
        dictionary: optional word set; when given, a seed word missing
                    from it is reported as a warning

    Returns:
        Dict with success, errors, warnings and stats
    """
    # Local import: solver imports this module for its defaults
    from solver import WordFinder

    result = {"success": False, "errors": [], "warnings": [], "stats": {}}

    try:
        grid = place_seed_word(puzzle.seed_word, puzzle.path)
    except InvalidPuzzleConfiguration as e:
        result["errors"].append(str(e))
        return result

    spelled = grid.letters_along(puzzle.path)
    if spelled != puzzle.seed_word:
        result["errors"].append(
            f"Path does not spell seed word: expected '{puzzle.seed_word}', got '{spelled}'")

    for a, b in broken_links(puzzle.path, config.adjacency):
        result["errors"].append(f"Path positions {a} and {b} are not adjacent")

    filled = grid.filled_positions()
    if len(filled) != len(USABLE_POSITIONS):
        result["errors"].append(f"Expected {len(USABLE_POSITIONS)} filled positions, found {len(filled)}")

    unreachable = unreachable_positions(grid, config.adjacency)
    if unreachable:
        result["errors"].append(f"Unreachable grid positions: {', '.join(map(str, unreachable))}")

    finder = WordFinder(dictionary or set(), adjacency=config.adjacency)
    seed_found = finder.find_word_path(grid, puzzle.seed_word) is not None
    result["stats"]["seed_word_found"] = seed_found
    if not seed_found:
        result["errors"].append(f"Seed word '{puzzle.seed_word}' cannot be traced in the grid")

    if dictionary is not None:
        if puzzle.seed_word not in finder.dictionary:
            result["warnings"].append(f"Seed word '{puzzle.seed_word}' is not in the dictionary")

    result["stats"]["path_index"] = puzzle.path_index
    result["success"] = not result["errors"]
    return result


def validate_all_puzzles(config: PuzzleConfig, dictionary=None, verbose=True) -> Dict[str, dict]:
    """Validate every puzzle in the config, printing a line per puzzle"""
    results = {}
    for name, puzzle in config.puzzles.items():
        report = validate_puzzle(puzzle, config, dictionary)
        results[name] = report
        if verbose:
            status = "✓" if report["success"] else "✗"
            print(f"{status} {name:<15} (path {puzzle.path_index})")
            for error in report["errors"]:
                print(f"    ❌ {error}")
            for warning in report["warnings"]:
                print(f"    ⚠️  {warning}")
    return results
