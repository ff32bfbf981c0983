import pytest

from globe_quiz.fuzzy import edit_distance, is_similar_enough, tolerance


@pytest.mark.parametrize("a, b, expected", [
    ("", "", 0),
    ("", "abc", 3),
    ("abc", "", 3),
    ("germany", "germany", 0),
    ("germny", "germany", 1),
    ("kitten", "sitting", 3),
    ("flaw", "lawn", 2),
])
def test_edit_distance(a, b, expected):
    assert edit_distance(a, b) == expected


def test_edit_distance_is_symmetric():
    assert edit_distance("argentina", "agrentina") == edit_distance("agrentina", "argentina")


def test_tolerance_short_names_allow_two_edits():
    assert tolerance(3) == 2
    assert tolerance(9) == 2


def test_tolerance_long_names_scale_with_length():
    assert tolerance(10) == 3
    assert tolerance(14) == 5
    assert tolerance(20) == 6


def test_small_typo_is_accepted():
    assert is_similar_enough("germny", "germany")
    assert is_similar_enough("untied kingdom", "united kingdom")


def test_large_difference_is_rejected():
    assert not is_similar_enough("xyzabc", "germany")
    assert not is_similar_enough("peru", "portugal")


def test_long_name_uses_longer_length():
    # 32 chars -> 10 edits allowed
    assert is_similar_enough("democratic republic of congo", "democratic republic of the congo")


def test_edit_distance_counts_accented_letters_as_one_edit():
    assert edit_distance("côte d'ivoire", "cote d'ivoire") == 1
