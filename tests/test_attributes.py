from app.forms.attributes import to_mapping, to_mapping_or_none, to_pairs
from app.validation.attribute_rules import duplicate_key_indexes


def test_pairs_and_mapping_round_trip():
    mapping = {"Size": "5L", "Colour": "Grey"}

    pairs = to_pairs(mapping)

    assert pairs == [
        {"key": "Size", "value": "5L"},
        {"key": "Colour", "value": "Grey"},
    ]
    assert to_mapping(pairs) == mapping


def test_to_pairs_of_nothing_is_empty():
    assert to_pairs(None) == []
    assert to_pairs({}) == []


def test_to_mapping_trims_and_drops_blank_rows():
    pairs = [
        {"key": "  Size ", "value": " 5L "},
        {"key": "", "value": "orphan value"},
        {"key": "Colour", "value": "   "},
        {"key": None, "value": None},
    ]

    assert to_mapping(pairs) == {"Size": "5L"}


def test_to_mapping_later_row_wins():
    pairs = [{"key": "Size", "value": "5L"}, {"key": "Size", "value": "10L"}]

    assert to_mapping(pairs) == {"Size": "10L"}


def test_to_mapping_accepts_objects():
    class Pair:
        def __init__(self, key, value):
            self.key = key
            self.value = value

    assert to_mapping([Pair("Grade", "A"), Pair("Pack", 6)]) == {"Grade": "A", "Pack": "6"}


def test_empty_mapping_stored_as_none():
    assert to_mapping_or_none([]) is None
    assert to_mapping_or_none([{"key": "", "value": ""}]) is None
    assert to_mapping_or_none([{"key": "Size", "value": "5L"}]) == {"Size": "5L"}


def test_duplicate_keys_flag_later_occurrence_case_insensitively():
    pairs = [
        {"key": "Size", "value": "5L"},
        {"key": "Colour", "value": "Grey"},
        {"key": " size", "value": "10L"},
        {"key": "", "value": "ignored"},
        {"key": "", "value": "ignored too"},
    ]

    assert duplicate_key_indexes(pairs, limit=10) == [2]


def test_duplicate_keys_beyond_limit_are_not_checked():
    pairs = [{"key": "Size", "value": str(i)} for i in range(5)]

    assert duplicate_key_indexes(pairs, limit=3) == [1, 2]
