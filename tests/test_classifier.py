"""Tests for nihilism.classifier."""

import pytest

from nihilism.classifier import KeywordClassifier, classify


@pytest.mark.parametrize("choice_id", [
    "dark_path", "hurt_her", "ignore_call", "embrace_nihilism", "be_cruel", "abandon_ship",
])
def test_dark_id_keywords(choice_id):
    assert classify(choice_id, "") is True


@pytest.mark.parametrize("text", [
    "Kill the lights",
    "Abandon them here",
    "Nothing matters anyway",
    "I don't care",
    "It's all meaningless",
    "Leave them behind",
    "Walk away",
])
def test_dark_text_phrases(text):
    assert classify("option_1", text) is True


def test_match_is_case_insensitive():
    assert classify("DARK_ROAD", "") is True
    assert classify("x", "NOTHING MATTERS") is True


def test_light_when_nothing_matches():
    assert classify("help_stranger", "Offer your coat") is False


def test_empty_inputs_are_light():
    assert classify("", "") is False


def test_text_only_phrase_in_id_is_not_dark():
    # "kill" is a text phrase, not an id keyword
    assert classify("kill", "Wait") is False


def test_id_only_keyword_in_text_is_not_dark():
    assert classify("a", "Ignore the noise") is False


def test_custom_keywords():
    clf = KeywordClassifier(id_keywords=("shadow",), text_phrases=("despair",))
    assert clf("shadow_step", "") is True
    assert clf("x", "Sink into DESPAIR") is True
    assert clf("dark", "kill") is False
