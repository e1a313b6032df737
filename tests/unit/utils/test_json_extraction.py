"""Locate and decode stages of JSON extraction from messy LLM output."""

import pytest

from englearn.utils.exceptions import MalformedJson, NoJsonFound
from englearn.utils.json_parser import decode_json, extract_json, has_braces, has_code_fence, locate_json


def test_locate_array_inside_code_fence():
    raw = 'Sure! ```json\n[{"a": 1}, {"a": 2}]\n```'
    assert locate_json(raw, "array") == '[{"a": 1}, {"a": 2}]'
    assert extract_json(raw, "array") == [{"a": 1}, {"a": 2}]


def test_locate_object_with_preamble_and_trailer():
    raw = 'Here is your JSON:\n{"passage": "x", "questions": []}\nHope this helps!'
    assert extract_json(raw) == {"passage": "x", "questions": []}


def test_nested_braces_use_outermost_pair():
    raw = 'x {"grammar": {"score": 7}} y'
    assert extract_json(raw) == {"grammar": {"score": 7}}


@pytest.mark.parametrize("raw", ["", "No JSON here at all.", "only a closing } brace", "} backwards {"])
def test_missing_bounds_is_no_json_found(raw):
    with pytest.raises(NoJsonFound) as exc_info:
        locate_json(raw)
    assert exc_info.value.stage == "locate"


def test_text_without_brackets_is_no_json_found_for_arrays():
    with pytest.raises(NoJsonFound):
        extract_json("I cannot help with that.", "array")


def test_trailing_commas_are_malformed():
    with pytest.raises(MalformedJson) as exc_info:
        extract_json('{"a": 1,}')
    assert exc_info.value.stage == "decode"


def test_truncated_reply_is_malformed():
    with pytest.raises(MalformedJson):
        decode_json('{"passage": "cut off here"')


def test_unknown_shape_is_a_programming_error():
    with pytest.raises(ValueError):
        locate_json("{}", "tuple")


def test_fence_and_brace_detection():
    assert has_code_fence("```json\n{}\n```")
    assert not has_code_fence('{"a": 1}')
    assert has_braces('{"a": 1}')
    assert not has_braces("plain text")
