"""Tests for request normalization."""

from __future__ import annotations

import pytest

from src.intent.normalize import normalize_request


def test_lowercases_and_trims() -> None:
    assert normalize_request("  UPDATE Phone  ") == "update phone"


def test_strips_ascii_and_unicode_possessives() -> None:
    assert normalize_request("Change John's phone") == "change john phone"
    assert normalize_request("change Mary’s email") == "change mary email"


def test_keeps_apostrophe_s_inside_words() -> None:
    assert normalize_request("it'sy bitsy") == "it'sy bitsy"


def test_leaves_punctuation_and_inner_spaces() -> None:
    assert normalize_request("update  email, please!") == "update  email, please!"


def test_none_and_empty() -> None:
    assert normalize_request(None) == ""
    assert normalize_request("   ") == ""


@pytest.mark.parametrize(
    "text",
    [
        "Update John's Name to Jane",
        "  delete Bob’s account for user 7  ",
        "'s's 's",
        "insert ('a', 'b')",
        "",
    ],
)
def test_normalize_is_idempotent(text: str) -> None:
    once = normalize_request(text)
    assert normalize_request(once) == once
