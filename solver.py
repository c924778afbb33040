"""
Cornerstones Solver
Finds every dictionary word that can be traced on the cross-shaped grid

ARCHITECTURE:
1. Core Classes (Trie, TrieNode, WordFinder)
2. Word Finding (DFS over the adjacency map)
3. Path Helpers (trace, validate and spell player selections)
4. Cornerstone Classification
5. Statistics
"""

from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, NamedTuple, Optional, Set

from cross_grid import (
    EMPTY,
    GRID_CELLS,
    SEED_LENGTH,
    USABLE_POSITIONS,
    AdjacencyMap,
    CrossGrid,
    InvalidPuzzleConfiguration,
    place_seed_word,
)
from puzzles import DEFAULT_ADJACENCY
from word_lists import normalize_words

# ============================================================================
# CONFIGURATION
# ============================================================================

MIN_WORD_LENGTH = 4
MAX_WORD_LENGTH = SEED_LENGTH

DEFAULT_ADJACENCY_MAP = AdjacencyMap.from_dict(DEFAULT_ADJACENCY)


# ============================================================================
# SECTION 1: CORE DATA STRUCTURES
# ============================================================================

class TrieNode:
    """Node in a Trie for efficient prefix checking"""
    def __init__(self):
        self.children = {}
        self.is_word = False


class Trie:
    """Trie for dictionary storage and prefix validation"""
    def __init__(self, words=()):
        self.root = TrieNode()
        for word in words:
            self.insert(word)

    def insert(self, word):
        """Insert a word into the Trie"""
        node = self.root
        for char in word.upper():
            if char not in node.children:
                node.children[char] = TrieNode()
            node = node.children[char]
        node.is_word = True

    def search(self, word):
        """Check if word exists"""
        node = self._walk(word)
        return node is not None and node.is_word

    def starts_with(self, prefix):
        """Check if any word starts with prefix"""
        return self._walk(prefix) is not None

    def _walk(self, prefix):
        node = self.root
        for char in prefix.upper():
            if char not in node.children:
                return None
            node = node.children[char]
        return node


def _as_adjacency(adjacency):
    if adjacency is None:
        return DEFAULT_ADJACENCY_MAP
    if isinstance(adjacency, AdjacencyMap):
        return adjacency
    return AdjacencyMap.from_dict(adjacency)


class ClassifiedWords(NamedTuple):
    cornerstone: List[str]
    regular: List[str]


# ============================================================================
# SECTION 2: WORD FINDER
# ============================================================================

class WordFinder:
    """Enumerates the words that can be traced on a CrossGrid"""

    def __init__(self, dictionary, adjacency=None, min_length=MIN_WORD_LENGTH,
                 max_length=MAX_WORD_LENGTH, use_prefix_pruning=True, cache_results=True):
        """
        Initialize finder

        Args:
            dictionary: Iterable of valid words (any case)
            adjacency: AdjacencyMap or raw position -> neighbors mapping;
                       defaults to the game's adjacency table
            min_length: Shortest word recorded
            max_length: Longest word considered
            use_prefix_pruning: Stop extending prefixes no word starts with.
                                Does not change the result set.
            cache_results: Remember the words found per grid until the
                           dictionary changes
        """
        self.adjacency = _as_adjacency(adjacency)
        self.min_length = min_length
        self.max_length = max_length
        self.use_prefix_pruning = use_prefix_pruning
        self.cache_results = cache_results
        self.dictionary_version = 0
        self._cache = {}
        self._set_dictionary(normalize_words(dictionary or ()))
        self.stats = {"searches": 0, "cache_hits": 0, "paths_explored": 0, "words_found": 0}

    def _set_dictionary(self, words):
        self.dictionary = frozenset(words)
        self.trie = None
        if self.use_prefix_pruning:
            self.trie = Trie(w for w in self.dictionary
                             if self.min_length <= len(w) <= self.max_length)

    # ------------------------------------------------------------------------
    # DICTIONARY UPDATES AND CACHE
    # ------------------------------------------------------------------------

    def update_dictionary(self, words):
        """Replace the dictionary and drop cached results"""
        self._set_dictionary(normalize_words(words or ()))
        self.dictionary_version += 1
        self.clear_cache()
        print(f"📝 Updated dictionary: {len(self.dictionary)} words (version {self.dictionary_version})")

    def remove_words(self, words):
        """
        Remove words from the dictionary and drop cached results

        Returns:
            Number of words actually removed
        """
        to_remove = normalize_words(words or ())
        original_size = len(self.dictionary)
        self._set_dictionary(self.dictionary - to_remove)
        self.dictionary_version += 1
        self.clear_cache()

        removed = original_size - len(self.dictionary)
        print(f"🗑️  Removed {removed} words ({original_size} -> {len(self.dictionary)})")
        return removed

    def clear_cache(self, reset_stats=False):
        """Forget cached results; optionally zero the counters too"""
        self._cache.clear()
        if reset_stats:
            for key in self.stats:
                self.stats[key] = 0

    @property
    def cache_size(self):
        return len(self._cache)

    # ------------------------------------------------------------------------
    # WORD FINDING (DFS)
    # ------------------------------------------------------------------------

    def start_positions(self, grid: CrossGrid) -> List[int]:
        """Usable positions holding a letter; corners are never starts"""
        return [position for position in USABLE_POSITIONS if grid.is_filled(position)]

    def dfs(self, grid, position, current_word, visited, path, found, word_paths=None):
        """
        Depth-first search from position, extending current_word

        Args:
            grid: CrossGrid being searched
            position: Last position of the current path
            current_word: Letters spelled so far, including position
            visited: Positions on the current path (pushed and popped here)
            path: Current path as a list of positions
            found: Set collecting words
            word_paths: Optional dict collecting word -> list of paths

        Returns:
            Number of paths explored
        """
        explored = 1

        if len(current_word) >= self.min_length and current_word in self.dictionary:
            found.add(current_word)
            if word_paths is not None:
                word_paths[current_word].append(list(path))

        if len(current_word) >= self.max_length:
            return explored

        # Early pruning: stop if prefix doesn't exist
        if self.trie is not None and not self.trie.starts_with(current_word):
            return explored

        for neighbor in self.adjacency.neighbors(position):
            if neighbor in visited or not grid.is_filled(neighbor):
                continue
            visited.add(neighbor)
            path.append(neighbor)
            explored += self.dfs(grid, neighbor, current_word + grid[neighbor],
                                 visited, path, found, word_paths)
            path.pop()
            visited.remove(neighbor)

        return explored

    def _search_from(self, grid, start, word_paths=None):
        found = set()
        explored = self.dfs(grid, start, grid[start], {start}, [start], found, word_paths)
        return found, explored

    def find_all_words(self, grid: CrossGrid, parallel=False, workers=None) -> Set[str]:
        """
        Find all valid words in the grid

        Args:
            grid: CrossGrid to search
            parallel: Search each start position on its own worker thread
            workers: Thread count when parallel (default: one per start)

        Returns:
            Set of uppercase words, each 4-12 letters long
        """
        self.stats["searches"] += 1

        key = grid_cache_key(grid)
        if self.cache_results and key in self._cache:
            self.stats["cache_hits"] += 1
            return set(self._cache[key])

        starts = self.start_positions(grid)
        words = set()
        explored = 0

        if not self.dictionary or not starts:
            return words

        if parallel:
            with ThreadPoolExecutor(max_workers=workers or len(starts)) as executor:
                results = list(executor.map(lambda start: self._search_from(grid, start), starts))
        else:
            results = [self._search_from(grid, start) for start in starts]

        # Merge after join
        for found, count in results:
            words |= found
            explored += count

        self.stats["paths_explored"] += explored
        self.stats["words_found"] += len(words)
        if self.cache_results:
            self._cache[key] = frozenset(words)
        return words

    def find_all_word_paths(self, grid: CrossGrid) -> Dict[str, List[List[int]]]:
        """Map every findable word to all the paths that spell it"""
        word_paths = defaultdict(list)
        for start in self.start_positions(grid):
            self._search_from(grid, start, word_paths)
        return dict(word_paths)

    # ------------------------------------------------------------------------
    # PATH HELPERS
    # ------------------------------------------------------------------------

    def _trace(self, grid, target, position, path, visited, first_only, results):
        if len(path) == len(target):
            results.append(list(path))
            return first_only

        next_letter = target[len(path)]
        for neighbor in self.adjacency.neighbors(position):
            if neighbor in visited or grid[neighbor] != next_letter:
                continue
            visited.add(neighbor)
            path.append(neighbor)
            done = self._trace(grid, target, neighbor, path, visited, first_only, results)
            path.pop()
            visited.remove(neighbor)
            if done:
                return True
        return False

    def _trace_word(self, grid, word, first_only):
        target = word.upper()
        results = []
        if not target or len(target) > self.max_length:
            return results
        for start in self.start_positions(grid):
            if grid[start] != target[0]:
                continue
            if self._trace(grid, target, start, [start], {start}, first_only, results):
                break
        return results

    def find_word_path(self, grid: CrossGrid, word: str) -> Optional[List[int]]:
        """First path that spells word, or None (dictionary not consulted)"""
        paths = self._trace_word(grid, word, first_only=True)
        return paths[0] if paths else None

    def find_all_paths_for_word(self, grid: CrossGrid, word: str) -> List[List[int]]:
        return self._trace_word(grid, word, first_only=False)

    def find_shortest_path(self, grid: CrossGrid, word: str) -> Optional[List[int]]:
        """
        Path using the fewest positions, or None

        Each cell holds one letter, so every path of a word has the same
        length and the first path found wins.
        """
        paths = self.find_all_paths_for_word(grid, word)
        return min(paths, key=len) if paths else None

    def find_longest_path(self, grid: CrossGrid, word: str) -> Optional[List[int]]:
        """Path using the most positions, or None (first path wins ties)"""
        paths = self.find_all_paths_for_word(grid, word)
        return max(paths, key=len) if paths else None

    def get_word_from_path(self, grid: CrossGrid, path) -> str:
        """Letters along a path, skipping empty cells"""
        return ''.join(grid[position] for position in path if grid.is_filled(position))

    def is_connected_path(self, grid: CrossGrid, path) -> bool:
        """Path of filled, non-repeating positions, each adjacent to the previous"""
        if not path or len(set(path)) != len(path):
            return False
        if not all(grid.is_filled(position) for position in path):
            return False
        return all(self.adjacency.is_adjacent(a, b) for a, b in zip(path, path[1:]))

    def is_valid_path(self, grid: CrossGrid, path) -> bool:
        """Check if a specific path spells a valid dictionary word"""
        if not self.is_connected_path(grid, path):
            return False
        word = grid.letters_along(path)
        return self.min_length <= len(word) <= self.max_length and word in self.dictionary

    def validate_word_path(self, grid: CrossGrid, path, expected_word: str) -> bool:
        """Check that a path spells expected_word exactly"""
        if not path or len(path) != len(expected_word):
            return False
        return self.is_connected_path(grid, path) and grid.letters_along(path) == expected_word.upper()

    def validate_seed_word(self, seed_word: str, path) -> bool:
        """
        Check that a seed word laid along path can be traced back

        Returns:
            True if the placed grid contains a path spelling the seed word
        """
        try:
            grid = place_seed_word(seed_word, path)
        except InvalidPuzzleConfiguration as e:
            print(f"⚠️  {e}")
            return False
        return self.find_word_path(grid, seed_word) is not None


def find_all_words(grid: CrossGrid, dictionary, adjacency=None) -> Set[str]:
    """Find every dictionary word traceable on grid"""
    return WordFinder(dictionary, adjacency=adjacency).find_all_words(grid)


def grid_cache_key(grid) -> str:
    """Cache key for a grid: its cells joined with '|'"""
    return '|'.join(cell or EMPTY for cell in grid)


# ============================================================================
# SECTION 3: CORNERSTONE CLASSIFICATION
# ============================================================================

def classify_cornerstones(all_words, cornerstone_set) -> ClassifiedWords:
    """
    Split discovered words into cornerstone and regular words

    Args:
        all_words: Words found in the grid
        cornerstone_set: Curated common words (any case); may be None

    Returns:
        ClassifiedWords(cornerstone, regular), both sorted and disjoint.
        Every input word lands in exactly one list, as given.
    """
    common = normalize_words(cornerstone_set or ())

    cornerstone, regular = [], []
    for word in all_words:
        if word.strip().upper() in common:
            cornerstone.append(word)
        else:
            regular.append(word)
    return ClassifiedWords(sorted(cornerstone), sorted(regular))


# ============================================================================
# SECTION 4: STATISTICS
# ============================================================================

def word_statistics(words) -> dict:
    """Counts, average length and length distribution of a word set"""
    words = list(words)
    stats = {
        "total_words": len(words),
        "average_length": 0,
        "length_distribution": {},
        "shortest_word": 0,
        "longest_word": 0,
        "unique_letters": 0,
    }
    if not words:
        return stats

    lengths = [len(word) for word in words]
    distribution = defaultdict(int)
    for length in lengths:
        distribution[length] += 1

    stats["average_length"] = round(sum(lengths) / len(lengths), 1)
    stats["length_distribution"] = dict(sorted(distribution.items()))
    stats["shortest_word"] = min(lengths)
    stats["longest_word"] = max(lengths)
    stats["unique_letters"] = len(set(''.join(words)))
    return stats


def group_by_length(words) -> Dict[int, List[str]]:
    """Word length -> sorted words of that length"""
    groups = defaultdict(list)
    for word in words:
        groups[len(word)].append(word)
    return {length: sorted(groups[length]) for length in sorted(groups)}


def word_coverage(word_paths) -> dict:
    """
    How much of the grid the discovered words use

    Only the first path recorded for each word is counted.

    Args:
        word_paths: word -> list of paths (from WordFinder.find_all_word_paths)

    Returns:
        Dict with position_usage (16 counts), letter_usage, path_lengths
        and average_path_length
    """
    position_usage = [0] * GRID_CELLS
    letter_usage = defaultdict(int)
    path_lengths = []

    for word, paths in word_paths.items():
        if not paths:
            continue
        path = paths[0]
        for position in path:
            position_usage[position] += 1
        for letter in word:
            letter_usage[letter] += 1
        path_lengths.append(len(path))

    average = round(sum(path_lengths) / len(path_lengths), 1) if path_lengths else 0
    return {
        "position_usage": position_usage,
        "letter_usage": dict(sorted(letter_usage.items())),
        "path_lengths": path_lengths,
        "average_path_length": average,
    }


def print_word_statistics(words):
    """Print statistics about found words"""
    stats = word_statistics(words)

    print("\n" + "="*70)
    print("WORD STATISTICS")
    print("="*70)

    print("\nWord count by length:")
    for length, count in stats["length_distribution"].items():
        print(f"  {length} letters: {count} words")

    max_length = stats["longest_word"]
    longest = group_by_length(words).get(max_length, [])
    if longest:
        print(f"\nLongest words ({max_length} letters): {', '.join(longest)}")
    print(f"Average length: {stats['average_length']}")
