"""
Word list loading

Reads the dictionary and the curated common-word (cornerstone) list.
Both are loaded once and treated as read-only afterwards.

Accepted formats:
  - plain text, one word per line ('#' starts a comment line)
  - JSON list of words
  - JSON object with a "words" list (the game's words-database.json)
"""

import json
import os

MIN_CORNERSTONE_LENGTH = 4


def normalize_words(words):
    """Uppercase and strip words, dropping blanks"""
    normalized = set()
    for word in words:
        if not isinstance(word, str):
            continue
        word = word.strip().upper()
        if word:
            normalized.add(word)
    return normalized


def _read_words(path):
    with open(path, 'r', encoding='utf-8') as f:
        if path.lower().endswith('.json'):
            data = json.load(f)
            if isinstance(data, dict):
                data = data.get('words', [])
            if not isinstance(data, list):
                raise ValueError("expected a list of words or an object with a 'words' list")
            return data
        return [line for line in f if not line.lstrip().startswith('#')]


def load_word_set(path, min_length=1, label="Word list", verbose=True):
    """
    Load a set of uppercase words

    Args:
        path: Path to a .txt or .json word list
        min_length: Drop words shorter than this
        label: Name used in status messages
        verbose: Print a status line

    Returns:
        Set of uppercase words; empty if the file is missing or unreadable
    """
    if not path or not os.path.exists(path):
        print(f"⚠️  {label} not found: {path}")
        return set()

    try:
        raw = _read_words(path)
    except (json.JSONDecodeError, ValueError) as e:
        print(f"❌ Error reading {label.lower()} {path}: {e}")
        return set()

    words = {word for word in normalize_words(raw) if len(word) >= min_length}
    if verbose:
        print(f"✓ {label} loaded: {len(words)} words")
    return words


def load_dictionary(path, verbose=True):
    """Load the full dictionary of valid words"""
    return load_word_set(path, label="Dictionary", verbose=verbose)


def load_cornerstone_words(path, verbose=True):
    """Load the common-word list; only words of 4+ letters can be cornerstones"""
    return load_word_set(path, min_length=MIN_CORNERSTONE_LENGTH,
                         label="Common words", verbose=verbose)
