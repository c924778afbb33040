import pytest

from cross_grid import EMPTY, AdjacencyMap, CrossGrid, place_seed_word
from puzzles import DEFAULT_ADJACENCY, load_puzzle_config
from solver import (
    Trie,
    WordFinder,
    classify_cornerstones,
    find_all_words,
    grid_cache_key,
    group_by_length,
    word_coverage,
    word_statistics,
)

CORNERSTONES_PATH = [1, 5, 4, 8, 9, 13, 14, 10, 6, 2, 7, 11]

WORDS = {
    "core", "corn", "corner", "cornerstones", "stone", "stones", "note", "notes",
    "tone", "tones", "root", "roots", "rest", "snore", "one", "toe", "zebra",
}


@pytest.fixture
def grid():
    #  . C N .
    #  R O O E
    #  N E T S
    #  . R S .
    return place_seed_word("CORNERSTONES", CORNERSTONES_PATH)


def test_finds_core_in_cornerstones_grid(grid):
    words = find_all_words(grid, {"CORE", "CORNER", "STONE", "CORNERSTONES"})

    assert words == {"CORE", "CORNER", "STONE", "CORNERSTONES"}


def test_results_are_uppercase_and_within_length_bounds(grid):
    words = WordFinder(WORDS).find_all_words(grid)

    assert "ONE" not in words
    assert "TOE" not in words
    assert "ZEBRA" not in words
    assert all(4 <= len(word) <= 12 for word in words)
    assert all(word == word.upper() for word in words)
    assert len({word.lower() for word in words}) == len(words)


def test_search_is_idempotent(grid):
    finder = WordFinder(WORDS)

    assert finder.find_all_words(grid) == finder.find_all_words(grid)


def test_prefix_pruning_does_not_change_results(grid):
    pruned = WordFinder(WORDS).find_all_words(grid)
    exhaustive = WordFinder(WORDS, use_prefix_pruning=False).find_all_words(grid)

    assert pruned == exhaustive


def test_parallel_search_matches_sequential(grid):
    finder = WordFinder(WORDS, cache_results=False)

    assert finder.find_all_words(grid, parallel=True) == finder.find_all_words(grid)
    assert finder.find_all_words(grid, parallel=True, workers=2) == finder.find_all_words(grid)


def test_empty_dictionary_yields_no_words(grid):
    assert find_all_words(grid, set()) == set()
    assert find_all_words(grid, None) == set()


def test_empty_cells_are_not_traversed():
    # Only C O R E laid out, everything else empty
    cells = [EMPTY] * 16
    cells[1], cells[5], cells[4], cells[9] = "C", "O", "R", "E"
    grid = CrossGrid(cells)

    assert find_all_words(grid, {"CORE", "COREN"}) == {"CORE"}


def test_adjacency_direction_is_honored(grid):
    raw = dict(DEFAULT_ADJACENCY)
    raw[5] = [1, 2, 6, 8, 9, 10]  # 4 -> 5 allowed, 5 -> 4 not
    one_way = AdjacencyMap.from_dict(raw)
    dictionary = {"CORE", "ROOT"}

    # CORE needs O(5) -> R(4); ROOT needs R(4) -> O(5)
    assert find_all_words(grid, dictionary) == {"CORE", "ROOT"}
    assert find_all_words(grid, dictionary, adjacency=one_way) == {"ROOT"}


def test_positions_are_not_reused(grid):
    # COOC would need the single C twice
    finder = WordFinder({"COOC", "COOT"})

    assert finder.find_all_words(grid) == {"COOT"}


def test_word_paths_record_every_route(grid):
    finder = WordFinder({"STONE"})
    paths = finder.find_all_word_paths(grid)

    assert sorted(paths["STONE"]) == [
        [11, 10, 5, 2, 7], [11, 10, 5, 8, 9], [11, 10, 6, 2, 7],
        [14, 10, 5, 2, 7], [14, 10, 5, 8, 9], [14, 10, 6, 2, 7],
    ]
    assert sorted(finder.find_all_paths_for_word(grid, "stone")) == sorted(paths["STONE"])


def test_find_word_path_traces_seed_word(grid):
    finder = WordFinder(set())

    assert finder.find_word_path(grid, "CORNERSTONES") == CORNERSTONES_PATH
    assert finder.find_word_path(grid, "ZEBRA") is None
    assert finder.validate_seed_word("CORNERSTONES", CORNERSTONES_PATH)
    assert not finder.validate_seed_word("CORNERSTONE", CORNERSTONES_PATH)


def test_every_configured_puzzle_contains_its_seed_word():
    config = load_puzzle_config()

    for name, puzzle in config.puzzles.items():
        grid = config.build_grid(name)
        words = find_all_words(grid, {puzzle.seed_word}, adjacency=config.adjacency)
        assert puzzle.seed_word in words, name


def test_path_checks(grid):
    finder = WordFinder(WORDS)

    assert finder.is_valid_path(grid, [1, 5, 4, 9])          # CORE
    assert not finder.is_valid_path(grid, [1, 5, 4])          # COR, too short
    assert not finder.is_valid_path(grid, [1, 5, 9, 4])       # COER
    assert not finder.is_valid_path(grid, [1, 5, 13, 9])      # 5 -> 13 not adjacent
    assert not finder.is_valid_path(grid, [0, 1, 5, 4])       # corner
    assert finder.validate_word_path(grid, [1, 5, 4, 9], "core")
    assert not finder.validate_word_path(grid, [1, 5, 4, 9], "corn")
    assert finder.get_word_from_path(grid, [14, 10, 6, 2, 7]) == "STONE"


def test_trie_prefixes():
    trie = Trie(["core", "corner"])

    assert trie.search("CORE")
    assert trie.starts_with("corn")
    assert not trie.search("corn")
    assert not trie.starts_with("cox")


def test_classify_cornerstones_partitions_words():
    all_words = {"CORE", "CORNER", "STONE", "ROOTS"}
    result = classify_cornerstones(all_words, {"core", "Stone", "zebra"})

    assert result.cornerstone == ["CORE", "STONE"]
    assert result.regular == ["CORNER", "ROOTS"]
    assert len(result.cornerstone) + len(result.regular) == len(all_words)
    assert not set(result.cornerstone) & set(result.regular)


def test_classify_without_cornerstone_set():
    result = classify_cornerstones({"CORE"}, None)

    assert result.cornerstone == []
    assert result.regular == ["CORE"]


def test_word_statistics():
    stats = word_statistics({"CORE", "STONE", "CORNER"})

    assert stats["total_words"] == 3
    assert stats["length_distribution"] == {4: 1, 5: 1, 6: 1}
    assert stats["shortest_word"] == 4
    assert stats["longest_word"] == 6
    assert word_statistics(set())["total_words"] == 0


def test_stats_counters(grid):
    finder = WordFinder(WORDS)
    finder.find_all_words(grid)

    assert finder.stats["searches"] == 1
    assert finder.stats["paths_explored"] > 0


def test_classify_keeps_every_input_word():
    all_words = {"core", "CORE", "Stone"}
    result = classify_cornerstones(all_words, {"CORE"})

    assert result.cornerstone == ["CORE", "core"]
    assert result.regular == ["Stone"]
    assert len(result.cornerstone) + len(result.regular) == len(all_words)


def test_repeated_search_hits_cache(grid):
    finder = WordFinder(WORDS)
    first = finder.find_all_words(grid)
    explored = finder.stats["paths_explored"]

    first.add("ZEBRA")
    second = finder.find_all_words(grid)

    assert "ZEBRA" not in second
    assert finder.stats["searches"] == 2
    assert finder.stats["cache_hits"] == 1
    assert finder.stats["paths_explored"] == explored
    assert finder.cache_size == 1


def test_cache_can_be_disabled(grid):
    finder = WordFinder(WORDS, cache_results=False)
    finder.find_all_words(grid)
    finder.find_all_words(grid)

    assert finder.stats["cache_hits"] == 0
    assert finder.cache_size == 0


def test_clear_cache_resets_stats(grid):
    finder = WordFinder(WORDS)
    finder.find_all_words(grid)

    finder.clear_cache(reset_stats=True)

    assert finder.cache_size == 0
    assert all(count == 0 for count in finder.stats.values())


def test_update_dictionary_invalidates_cache(grid):
    finder = WordFinder({"CORE"})
    assert finder.find_all_words(grid) == {"CORE"}

    finder.update_dictionary({"stone"})

    assert finder.dictionary_version == 1
    assert finder.cache_size == 0
    assert finder.find_all_words(grid) == {"STONE"}
    assert finder.stats["cache_hits"] == 0


def test_remove_words_invalidates_cache(grid):
    finder = WordFinder({"CORE", "STONE"})
    assert finder.find_all_words(grid) == {"CORE", "STONE"}

    removed = finder.remove_words(["stone", "zebra"])

    assert removed == 1
    assert finder.dictionary_version == 1
    assert finder.find_all_words(grid) == {"CORE"}


def test_shortest_and_longest_paths(grid):
    finder = WordFinder(set())
    paths = finder.find_all_paths_for_word(grid, "STONE")

    assert finder.find_shortest_path(grid, "stone") in paths
    assert finder.find_longest_path(grid, "stone") in paths
    assert len(finder.find_shortest_path(grid, "stone")) == 5
    assert finder.find_shortest_path(grid, "ZEBRA") is None
    assert finder.find_longest_path(grid, "ZEBRA") is None


def test_group_by_length():
    groups = group_by_length({"CORE", "STONE", "ROOT", "CORNER"})

    assert groups == {4: ["CORE", "ROOT"], 5: ["STONE"], 6: ["CORNER"]}
    assert group_by_length(set()) == {}


def test_word_coverage(grid):
    word_paths = WordFinder({"CORE", "STONE"}).find_all_word_paths(grid)
    coverage = word_coverage(word_paths)

    # CORE is [1, 5, 4, 9]; STONE's first path is [11, 10, 5, 2, 7]
    assert coverage["position_usage"][5] == 2
    assert coverage["position_usage"][1] == 1
    assert coverage["position_usage"][14] == 0
    assert coverage["position_usage"][0] == 0
    assert coverage["letter_usage"]["O"] == 2
    assert coverage["letter_usage"]["S"] == 1
    assert sorted(coverage["path_lengths"]) == [4, 5]
    assert coverage["average_path_length"] == 4.5
    assert word_coverage({})["average_path_length"] == 0


def test_grid_cache_key(grid):
    assert grid_cache_key(grid) == "|C|N||R|O|O|E|N|E|T|S||R|S|"
