"""
Cross-shaped grid model for Cornerstones

The board is a 4x4 block of 16 cells addressed 0-15 (row-major).
Only the 12 cells forming a plus shape hold letters; the 4 corners
are always empty and never take part in a word.

     .  1  2  .
     4  5  6  7
     8  9 10 11
     . 13 14  .
"""

from typing import Dict, Iterable, List, Sequence, Tuple

# ============================================================================
# CONFIGURATION
# ============================================================================

GRID_SIZE = 4
GRID_CELLS = GRID_SIZE * GRID_SIZE
SEED_LENGTH = 12

USABLE_POSITIONS = (1, 2, 4, 5, 6, 7, 8, 9, 10, 11, 13, 14)
CORNER_POSITIONS = (0, 3, 12, 15)

EMPTY = ''


class InvalidPuzzleConfiguration(ValueError):
    """Raised when a seed word, path or adjacency table is malformed"""


# ============================================================================
# ADJACENCY MAP
# ============================================================================

class AdjacencyMap:
    """
    Directed neighbor table over the 12 usable positions

    The table is authoritative configuration: an entry A -> B does not
    imply B -> A.
    """

    def __init__(self, table: Dict[int, Tuple[int, ...]]):
        self._table = dict(table)

    @classmethod
    def from_dict(cls, raw):
        """
        Build and validate an adjacency map

        Args:
            raw: Mapping of position -> iterable of neighbor positions.
                 Keys may be ints or stringified ints (as read from JSON).

        Returns:
            AdjacencyMap

        Raises:
            InvalidPuzzleConfiguration: keys are not exactly the usable
                positions, or a neighbor is not a usable position
        """
        if not isinstance(raw, dict):
            raise InvalidPuzzleConfiguration(
                f"Adjacency table must be a mapping, got {type(raw).__name__}")

        table = {}
        for key, neighbors in raw.items():
            position = _as_position(key, "adjacency key")
            if position in table:
                raise InvalidPuzzleConfiguration(f"Duplicate adjacency key: {position}")

            if not isinstance(neighbors, (list, tuple, set, frozenset)):
                raise InvalidPuzzleConfiguration(
                    f"Neighbors of position {position} must be a list, got {neighbors!r}")

            cleaned = []
            for neighbor in neighbors:
                neighbor = _as_position(neighbor, f"neighbor of {position}")
                if neighbor not in USABLE_POSITIONS:
                    raise InvalidPuzzleConfiguration(
                        f"Neighbor {neighbor} of position {position} is not a usable position")
                if neighbor not in cleaned:
                    cleaned.append(neighbor)
            table[position] = tuple(cleaned)

        missing = sorted(set(USABLE_POSITIONS) - set(table))
        extra = sorted(set(table) - set(USABLE_POSITIONS))
        if missing or extra:
            raise InvalidPuzzleConfiguration(
                f"Adjacency keys must be the 12 usable positions "
                f"(missing: {missing}, not usable: {extra})")

        return cls(table)

    def neighbors(self, position) -> Tuple[int, ...]:
        """Neighbors of a position; corners and unknown positions have none"""
        return self._table.get(position, ())

    def is_adjacent(self, a, b) -> bool:
        """True if the table lists b as a neighbor of a (directional)"""
        return b in self._table.get(a, ())

    def asymmetric_pairs(self) -> List[Tuple[int, int]]:
        """Pairs (a, b) where a -> b is configured but b -> a is not"""
        pairs = []
        for a in sorted(self._table):
            for b in self._table[a]:
                if not self.is_adjacent(b, a):
                    pairs.append((a, b))
        return pairs

    def positions(self) -> Tuple[int, ...]:
        return tuple(sorted(self._table))

    def to_dict(self) -> Dict[int, List[int]]:
        return {position: list(neighbors) for position, neighbors in sorted(self._table.items())}

    def __contains__(self, position):
        return position in self._table

    def __eq__(self, other):
        if not isinstance(other, AdjacencyMap):
            return NotImplemented
        return self._table == other._table

    def __repr__(self):
        return f"AdjacencyMap({self.to_dict()!r})"


def _as_position(value, what):
    """Coerce an int or stringified int to a grid position"""
    if isinstance(value, bool):
        raise InvalidPuzzleConfiguration(f"Invalid {what}: {value!r}")
    try:
        position = int(value)
    except (TypeError, ValueError):
        raise InvalidPuzzleConfiguration(f"Invalid {what}: {value!r}") from None
    if isinstance(value, float) and value != position:
        raise InvalidPuzzleConfiguration(f"Invalid {what}: {value!r}")
    if not 0 <= position < GRID_CELLS:
        raise InvalidPuzzleConfiguration(f"Invalid {what}: {value!r} (must be 0-{GRID_CELLS - 1})")
    return position


# ============================================================================
# GRID
# ============================================================================

class CrossGrid:
    """Immutable 16-slot letter grid; usable slots hold one uppercase letter"""

    def __init__(self, cells: Sequence[str]):
        if len(cells) != GRID_CELLS:
            raise InvalidPuzzleConfiguration(
                f"Grid must have {GRID_CELLS} cells, got {len(cells)}")
        for position in CORNER_POSITIONS:
            if cells[position]:
                raise InvalidPuzzleConfiguration(
                    f"Corner position {position} must stay empty, got {cells[position]!r}")
        for position in USABLE_POSITIONS:
            cell = cells[position]
            if cell and not (isinstance(cell, str) and len(cell) == 1 and cell.isalpha()):
                raise InvalidPuzzleConfiguration(
                    f"Position {position} must be empty or a single letter, got {cell!r}")
        self.cells = tuple((cell or EMPTY).upper() for cell in cells)

    def __getitem__(self, position):
        return self.cells[position]

    def __len__(self):
        return GRID_CELLS

    def __iter__(self):
        return iter(self.cells)

    def __eq__(self, other):
        if not isinstance(other, CrossGrid):
            return NotImplemented
        return self.cells == other.cells

    def __hash__(self):
        return hash(self.cells)

    def __repr__(self):
        return f"CrossGrid({''.join(cell or '.' for cell in self.cells)!r})"

    def is_filled(self, position) -> bool:
        """True if the position is on the board and holds a letter"""
        return 0 <= position < GRID_CELLS and len(self.cells[position]) == 1

    def filled_positions(self) -> List[int]:
        return [position for position in USABLE_POSITIONS if self.is_filled(position)]

    def letters_along(self, path: Iterable[int]) -> str:
        """Concatenate the letters found at each position of a path"""
        return ''.join(self.cells[position] for position in path)

    def rows(self) -> List[List[str]]:
        return [list(self.cells[r * GRID_SIZE:(r + 1) * GRID_SIZE]) for r in range(GRID_SIZE)]

    def print_grid(self):
        """Print the grid, corners shown as dots"""
        print("\nGrid:")
        for row in self.rows():
            print('  ' + ' '.join(cell or '.' for cell in row))


# ============================================================================
# PLACEMENT
# ============================================================================

def validate_path(path):
    """
    Check that a path is a permutation of the 12 usable positions

    Raises:
        InvalidPuzzleConfiguration: wrong length, corner or out-of-range
            position, or a repeated position
    """
    if not isinstance(path, (list, tuple)):
        raise InvalidPuzzleConfiguration(f"Path must be a list of positions, got {path!r}")

    positions = [_as_position(position, "path position") for position in path]

    if len(positions) != SEED_LENGTH:
        raise InvalidPuzzleConfiguration(
            f"Path must visit {SEED_LENGTH} positions, got {len(positions)}")

    for position in positions:
        if position not in USABLE_POSITIONS:
            raise InvalidPuzzleConfiguration(f"Path position {position} is not a usable position")

    if len(set(positions)) != len(positions):
        raise InvalidPuzzleConfiguration(f"Path repeats a position: {positions}")

    return tuple(positions)


def broken_links(path, adjacency: AdjacencyMap) -> List[Tuple[int, int]]:
    """Consecutive path steps (a, b) the adjacency map does not allow"""
    return [(a, b) for a, b in zip(path, path[1:]) if not adjacency.is_adjacent(a, b)]


def is_walk(path, adjacency: AdjacencyMap) -> bool:
    """True if every consecutive pair of the path is adjacent in that direction"""
    return not broken_links(path, adjacency)


def place_seed_word(seed_word: str, path) -> CrossGrid:
    """
    Lay a seed word along a path to fill the grid

    Args:
        seed_word: 12-letter word
        path: permutation of the 12 usable positions

    Returns:
        CrossGrid with grid[path[i]] == seed_word[i] and empty corners

    Raises:
        InvalidPuzzleConfiguration: lengths differ, path is not a
            permutation of the usable positions, or seed word holds a
            non-letter
    """
    if seed_word is None:
        raise InvalidPuzzleConfiguration("Seed word is missing")
    if not isinstance(seed_word, str):
        raise InvalidPuzzleConfiguration(f"Seed word must be a string, got {seed_word!r}")

    word = seed_word.upper()
    if not isinstance(path, (list, tuple)):
        raise InvalidPuzzleConfiguration(f"Path must be a list of positions, got {path!r}")
    path = list(path)

    if len(word) != len(path):
        raise InvalidPuzzleConfiguration(
            f"Seed word '{word}' has {len(word)} letters but path has {len(path)} positions")

    if not word.isalpha():
        raise InvalidPuzzleConfiguration(f"Seed word '{word}' must contain only letters")

    positions = validate_path(path)

    cells = [EMPTY] * GRID_CELLS
    for position, letter in zip(positions, word):
        cells[position] = letter

    return CrossGrid(cells)
