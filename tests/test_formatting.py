"""Unit tests for the key/value assembly helper."""
from connstring.builders.formatting import join_pairs


def test_skips_none_values():
    assert join_pairs([("a", "1"), ("b", None), ("c", "3")], delimiter=" ") == "a=1 c=3"

def test_keeps_empty_strings():
    assert join_pairs([("a", "")], delimiter=" ") == "a="

def test_terminator_applied_to_every_token():
    assert join_pairs([("A", "1"), ("B", "2")], delimiter="", terminator=";") == "A=1;B=2;"

def test_nothing_to_render():
    assert join_pairs([("a", None)], delimiter=";", terminator=";") == ""
