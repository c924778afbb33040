from dotenv import load_dotenv
load_dotenv()  # This must come before using os.environ

import argparse
import os
import sys

from cross_grid import InvalidPuzzleConfiguration
from puzzles import load_puzzle_config, validate_all_puzzles
from session import PuzzleSession
from solver import print_word_statistics
from word_lists import load_cornerstone_words, load_dictionary

# ============================================================================
# CONFIGURATION - EDIT THESE OR SET THEM IN .env
# ============================================================================

DICTIONARY_PATH = os.environ.get("CORNERSTONES_DICTIONARY", "data/wordlist.txt")
COMMON_WORDS_PATH = os.environ.get("CORNERSTONES_COMMON_WORDS", "data/common_words.txt")

# Optional JSON file overriding the built-in adjacency/path/puzzle tables
PUZZLES_PATH = os.environ.get("CORNERSTONES_PUZZLES") or None

DEFAULT_PUZZLE = "CORNERSTONES"

# Search each start position on its own thread
PARALLEL_SEARCH = os.environ.get("CORNERSTONES_PARALLEL", "").lower() in ("1", "true", "yes")

# ============================================================================


def print_word_columns(words, per_row=6):
    for i in range(0, len(words), per_row):
        print("  " + "  ".join(f"{w:<12}" for w in words[i:i + per_row]))


def solve_puzzle(config, name, dictionary, common_words):
    """
    Find and print every word of a puzzle

    Returns:
        PuzzleSession with words discovered
    """
    session = PuzzleSession.from_puzzle(config, name, dictionary, common_words)

    print("="*70)
    print(f"CORNERSTONES - {session.name}")
    print("="*70)
    session.grid.print_grid()

    print("\nSearching for all valid words...")
    words = session.discover(parallel=PARALLEL_SEARCH)

    if not words:
        print("⚠️  No words found! Check dictionary path.")
        return session

    print(f"✓ Found {len(words)} unique words")
    print_word_statistics(words)

    print(f"\n🎯 Cornerstone words ({len(session.cornerstone_words)}):")
    print_word_columns(session.cornerstone_words)
    print(f"\n✅ Other valid words ({len(session.regular_words)}):")
    print_word_columns(session.regular_words)

    seed_path = session.seed_word_path()
    if seed_path:
        print(f"\nSeed word path: {' -> '.join(map(str, seed_path))}")
    else:
        print(f"\n⚠️  Seed word {session.seed_word} cannot be traced in the grid")

    return session


def parse_selection(text):
    """Parse '1 5 4 8' into positions; None if the input is a word"""
    parts = text.replace(',', ' ').split()
    if parts and all(part.isdigit() for part in parts):
        return [int(part) for part in parts]
    return None


def play_puzzle(config, name, dictionary, common_words):
    """Interactive loop: type words or space-separated positions"""
    session = PuzzleSession.from_puzzle(config, name, dictionary, common_words)
    session.discover(parallel=PARALLEL_SEARCH)

    print("="*70)
    print(f"🎮 PLAYING {session.name}")
    print("="*70)
    print("\nEnter a word, or grid positions like '1 5 4 8'. Type 'quit' to stop.")

    if not session.all_words:
        print("⚠️  No words found! Check dictionary path.")
        return session

    while not (session.cornerstone_words and session.is_complete):
        session.grid.print_grid()
        progress = session.progress()
        print(f"\nFound {progress['found']}/{progress['total']} words, "
              f"{progress['cornerstone_found']}/{progress['cornerstone_total']} cornerstones")

        user_input = input("\nWord: ").strip()
        if user_input.lower() in ("quit", "exit", "q"):
            break
        if not user_input:
            continue

        selection = parse_selection(user_input)
        result = session.submit_path(selection) if selection else session.check_word(user_input)

        marker = "✓" if result.accepted else "⚠️ "
        print(f"  {marker} {result.word}: {result.message}")

    if session.cornerstone_words and session.is_complete:
        print("\n🎉 Puzzle completed! Well done!")

    remaining = session.remaining_cornerstone_words()
    if remaining:
        print(f"\nCornerstone words you missed ({len(remaining)}):")
        print_word_columns(remaining)

    return session


def main(argv=None):
    parser = argparse.ArgumentParser(description='Cornerstones word finder')
    parser.add_argument('mode', nargs='?', default='solve',
                        choices=['solve', 'play', 'validate', 'list'],
                        help='What to do (default: solve)')
    parser.add_argument('puzzle', nargs='?', default=DEFAULT_PUZZLE,
                        help=f'Puzzle name (default: {DEFAULT_PUZZLE})')
    parser.add_argument('--dictionary', default=DICTIONARY_PATH,
                        help=f'Dictionary word list (default: {DICTIONARY_PATH})')
    parser.add_argument('--common-words', default=COMMON_WORDS_PATH,
                        help=f'Common word list (default: {COMMON_WORDS_PATH})')
    parser.add_argument('--puzzles', default=PUZZLES_PATH,
                        help='JSON puzzle configuration (default: built-in tables)')
    parser.add_argument('--lenient', action='store_true',
                        help='Load path tables even if a path is not a walk')

    args = parser.parse_args(argv)

    try:
        config = load_puzzle_config(args.puzzles or None, strict=not args.lenient)
    except InvalidPuzzleConfiguration as e:
        print(f"❌ Invalid puzzle configuration: {e}")
        return 1

    if args.mode == 'list':
        print(f"Available puzzles ({len(config.puzzles)}):")
        for i, (name, puzzle) in enumerate(config.puzzles.items(), 1):
            print(f"  {i:2}. {name:<15} (path {puzzle.path_index})")
        return 0

    dictionary = load_dictionary(args.dictionary)

    if args.mode == 'validate':
        results = validate_all_puzzles(config, dictionary or None)
        failed = [name for name, report in results.items() if not report["success"]]
        print(f"\nWorking puzzles: {len(results) - len(failed)}/{len(results)}")
        return 1 if failed else 0

    common_words = load_cornerstone_words(args.common_words)

    try:
        if args.mode == 'play':
            play_puzzle(config, args.puzzle, dictionary, common_words)
        else:
            solve_puzzle(config, args.puzzle, dictionary, common_words)
    except KeyError as e:
        print(f"❌ {e.args[0]}")
        return 1
    except InvalidPuzzleConfiguration as e:
        print(f"❌ Invalid puzzle configuration: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
