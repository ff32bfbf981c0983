"""
Typo tolerance for guesses.

Names shorter than SHORT_NAME_LENGTH may be off by SHORT_NAME_EDITS edits;
longer names by LONG_NAME_RATIO of their length (rounded up).
"""

import math

import Levenshtein

SHORT_NAME_LENGTH = 10
SHORT_NAME_EDITS = 2
LONG_NAME_RATIO = 0.3


def edit_distance(a, b):
    """Levenshtein distance: fewest insertions, deletions and substitutions turning a into b."""
    return Levenshtein.distance(a, b)


def tolerance(length):
    if length < SHORT_NAME_LENGTH:
        return SHORT_NAME_EDITS
    return math.ceil(length * LONG_NAME_RATIO)


def is_similar_enough(a, b):
    return edit_distance(a, b) <= tolerance(max(len(a), len(b)))
