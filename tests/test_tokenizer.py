from __future__ import annotations

from services.shared.tokenizer import tokenize


def test_blank_input_yields_no_tokens():
    assert tokenize("") == []
    assert tokenize("   ") == []
    assert tokenize("\t\n") == []


def test_lowercases_and_strips_punctuation():
    assert tokenize("Fees? Admission!!") == ["fees", "admission"]


def test_punctuation_is_a_word_boundary():
    assert tokenize("fees,admission/hostel") == ["fees", "admission", "hostel"]


def test_drops_single_character_tokens():
    assert tokenize("I want a B.Sc degree") == ["want", "sc", "degree"]


def test_keeps_digits_and_underscores():
    assert tokenize("Fees are 50000 in year_1") == ["fees", "are", "50000", "in", "year_1"]


def test_non_ascii_letters_are_boundaries():
    assert tokenize("Café fees") == ["caf", "fees"]
