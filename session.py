"""
Puzzle session

Holds everything one game needs (grid, word sets, discovered words and
the player's finds) so nothing lives in module-level state.
"""

from typing import List, NamedTuple, Optional, Set

from cross_grid import CrossGrid
from solver import MIN_WORD_LENGTH, WordFinder, classify_cornerstones
from word_lists import normalize_words

# Word check statuses
TOO_SHORT = "too_short"
ALREADY_FOUND = "already_found"
CORNERSTONE = "cornerstone"
VALID = "valid"
INVALID = "invalid"
INVALID_PATH = "invalid_path"

MESSAGES = {
    TOO_SHORT: f"Word must be at least {MIN_WORD_LENGTH} letters",
    ALREADY_FOUND: "Already found!",
    CORNERSTONE: "Cornerstone word found!",
    VALID: "Word found!",
    INVALID: "Not a valid word",
    INVALID_PATH: "Letters must be adjacent and used once",
}


class WordCheck(NamedTuple):
    word: str
    status: str
    message: str

    @property
    def accepted(self):
        return self.status in (CORNERSTONE, VALID)


class PuzzleSession:
    """One puzzle being played: grid, word sets and progress"""

    def __init__(self, grid: CrossGrid, dictionary, cornerstone_words, adjacency=None,
                 seed_word=None, name=None):
        """
        Args:
            grid: Filled CrossGrid
            dictionary: Valid words (any case)
            cornerstone_words: Curated common words (any case)
            adjacency: AdjacencyMap; defaults to the game's table
            seed_word: Word the grid was built from, if known
            name: Puzzle name, if known
        """
        self.grid = grid
        self.name = name
        self.seed_word = seed_word.upper() if seed_word else None
        self.cornerstone_set = normalize_words(cornerstone_words or ())
        self.finder = WordFinder(dictionary, adjacency=adjacency)

        self.all_words: Set[str] = set()
        self.cornerstone_words: List[str] = []
        self.regular_words: List[str] = []
        self.found_words: Set[str] = set()
        self._discovered = False

    @classmethod
    def from_puzzle(cls, config, name, dictionary, cornerstone_words):
        """Build a session for a named puzzle of a PuzzleConfig"""
        puzzle = config.get_puzzle(name)
        grid = config.build_grid(puzzle.name)
        return cls(grid, dictionary, cornerstone_words, adjacency=config.adjacency,
                   seed_word=puzzle.seed_word, name=puzzle.name)

    def discover(self, parallel=False):
        """Find and classify every word in the grid (runs once)"""
        if self._discovered:
            return self.all_words

        self.all_words = self.finder.find_all_words(self.grid, parallel=parallel)
        classified = classify_cornerstones(self.all_words, self.cornerstone_set)
        self.cornerstone_words = classified.cornerstone
        self.regular_words = classified.regular
        self._discovered = True
        return self.all_words

    def check_word(self, word: str) -> WordCheck:
        """
        Check a word the player formed and record it if accepted

        Returns:
            WordCheck with one of TOO_SHORT, ALREADY_FOUND, CORNERSTONE,
            VALID or INVALID
        """
        self.discover()
        upper = (word or '').strip().upper()

        if len(upper) < MIN_WORD_LENGTH:
            status = TOO_SHORT
        elif upper in self.found_words:
            status = ALREADY_FOUND
        elif upper not in self.all_words:
            status = INVALID
        else:
            self.found_words.add(upper)
            status = CORNERSTONE if upper in self.cornerstone_set else VALID

        return WordCheck(upper, status, MESSAGES[status])

    def submit_path(self, path) -> WordCheck:
        """Check the word spelled by a selection of grid positions"""
        path = list(path)
        if not self.finder.is_connected_path(self.grid, path):
            word = ''.join(self.grid[p] for p in path if 0 <= p < len(self.grid))
            return WordCheck(word, INVALID_PATH, MESSAGES[INVALID_PATH])
        return self.check_word(self.grid.letters_along(path))

    def remaining_cornerstone_words(self) -> List[str]:
        self.discover()
        return [word for word in self.cornerstone_words if word not in self.found_words]

    @property
    def is_complete(self) -> bool:
        self.discover()
        return not self.remaining_cornerstone_words()

    def progress(self) -> dict:
        self.discover()
        found_cornerstones = [w for w in self.cornerstone_words if w in self.found_words]
        return {
            "found": len(self.found_words),
            "total": len(self.all_words),
            "cornerstone_found": len(found_cornerstones),
            "cornerstone_total": len(self.cornerstone_words),
            "complete": not self.remaining_cornerstone_words(),
        }

    def seed_word_path(self) -> Optional[List[int]]:
        if not self.seed_word:
            return None
        return self.finder.find_word_path(self.grid, self.seed_word)
