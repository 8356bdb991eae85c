import pytest

from promptsmith.utils.llm_parse import extract_json_object, strip_think_tags
from promptsmith.utils.text import (
    cosine_similarity,
    count_sentences,
    count_words,
    match_percentage,
    round_half_up,
)


class TestCountWords:
    def test_splits_on_whitespace_runs(self):
        assert count_words("  hello   world\n again ") == 3

    def test_empty_text(self):
        assert count_words("") == 0


class TestCountSentences:
    def test_terminal_punctuation(self):
        assert count_sentences("One. Two! Three?") == 3

    def test_punctuation_runs_count_once(self):
        assert count_sentences("Wait... what?!") == 2

    def test_no_terminal_punctuation_is_one_sentence(self):
        assert count_sentences("write a story") == 1

    def test_blank_segments_ignored(self):
        assert count_sentences("") == 0
        assert count_sentences(" ... !! ") == 0


class TestMatchPercentage:
    def test_identical_texts(self):
        assert match_percentage("pirate story", "pirate story") == 100

    def test_case_and_punctuation_ignored(self):
        assert cosine_similarity("The cat!", "the CAT") == pytest.approx(1.0)

    def test_disjoint_texts_map_to_midpoint(self):
        assert match_percentage("alpha beta", "gamma delta") == 50

    def test_empty_response(self):
        assert match_percentage("", "a funny pirate story") == 50

    def test_partial_overlap_between_bounds(self):
        value = match_percentage("a story about a pirate ship", "funny pirate story")
        assert 50 < value < 100


def test_round_half_up():
    assert round_half_up(12.5) == 13
    assert round_half_up(12.49) == 12
    assert round_half_up(0.5) == 1


class TestExtractJsonObject:
    def test_plain_object(self):
        assert extract_json_object('{"a": 1}') == {"a": 1}

    def test_markdown_fences_and_prose(self):
        text = 'Here is my analysis:\n```json\n{"a": {"b": 2}}\n```\nHope it helps!'
        assert extract_json_object(text) == {"a": {"b": 2}}

    def test_think_tags_removed(self):
        text = '<think>maybe {"wrong": true}</think>{"right": true}'
        assert extract_json_object(text) == {"right": True}

    def test_invalid_json(self):
        assert extract_json_object("{not json}") is None

    def test_no_object(self):
        assert extract_json_object("no braces here") is None

    def test_array_is_not_an_object(self):
        assert extract_json_object("[1, 2]") is None


def test_strip_unterminated_think_tag():
    assert strip_think_tags("answer<think>still thinking") == "answer"
