"""Tests for inline span tokenizing."""

import time

import pytest

from codeful.markdown.nodes import (
    Bold,
    BoldItalic,
    InlineCode,
    Italic,
    PlainText,
    Underline,
)
from codeful.markdown.tokenizer import tokenize_inline


def test_inline_empty():
    assert tokenize_inline("") == []


def test_inline_plain_only():
    assert tokenize_inline("nothing special here") == [PlainText("nothing special here")]


def test_inline_bold_after_text():
    assert tokenize_inline("Hello **world**") == [PlainText("Hello "), Bold("world")]


@pytest.mark.parametrize("text, expected", [
    ("`x = 1`", [InlineCode("x = 1")]),
    ("***both***", [BoldItalic("both")]),
    ("___both___", [BoldItalic("both")]),
    ("**strong**", [Bold("strong")]),
    ("__strong__", [Bold("strong")]),
    ("*soft*", [Italic("soft")]),
    ("_soft_", [Italic("soft")]),
    ("<u>under</u>", [Underline("under")]),
])
def test_inline_each_construct(text, expected):
    assert tokenize_inline(text) == expected


def test_inline_text_between_and_after_matches():
    assert tokenize_inline("a **b** c *d* e") == [
        PlainText("a "),
        Bold("b"),
        PlainText(" c "),
        Italic("d"),
        PlainText(" e"),
    ]


def test_inline_leftmost_match_wins():
    """Italic starting earlier beats bold starting later."""
    assert tokenize_inline("*one* **two**") == [
        Italic("one"),
        PlainText(" "),
        Bold("two"),
    ]


def test_inline_code_contents_not_reinterpreted():
    assert tokenize_inline("`**not bold**`") == [InlineCode("**not bold**")]


def test_inline_bold_contents_not_reinterpreted():
    assert tokenize_inline("**use `x` here**") == [Bold("use `x` here")]


def test_inline_code_has_priority_at_same_position():
    assert tokenize_inline("`a` and <u>`b`</u>") == [
        InlineCode("a"),
        PlainText(" and "),
        Underline("`b`"),
    ]


@pytest.mark.parametrize("text", [
    "**dangling",
    "dangling**",
    "*",
    "2 * 3 * 4",
    "a ` b",
    "<u>never closed",
    "snake_case_name",
    "__init",
])
def test_inline_unmatched_delimiters_are_literal(text):
    assert tokenize_inline(text) == [PlainText(text)]


def test_inline_underscores_inside_words_are_literal():
    assert tokenize_inline("call my_func_name now") == [PlainText("call my_func_name now")]


def test_inline_emphasis_does_not_cross_lines():
    assert tokenize_inline("**start\nend**") == [PlainText("**start\nend**")]


def test_inline_spans_per_line():
    assert tokenize_inline("**a**\n*b*") == [Bold("a"), PlainText("\n"), Italic("b")]


def test_inline_spans_cover_source_text():
    text = "Mix `c` with **b**, *i*, ***bi*** and <u>u</u>!"
    spans = tokenize_inline(text)
    assert [type(s) for s in spans] == [
        PlainText, InlineCode, PlainText, Bold, PlainText, Italic,
        PlainText, BoldItalic, PlainText, Underline, PlainText,
    ]
    assert "".join(s.text for s in spans) == "Mix c with b, i, bi and u!"


def test_inline_empty_code_span_is_skipped():
    assert tokenize_inline("``x`") == [PlainText("`"), InlineCode("x")]


def test_inline_first_closer_wins():
    assert tokenize_inline("***a****") == [BoldItalic("a"), PlainText("*")]


def test_inline_closer_after_whitespace_is_skipped():
    assert tokenize_inline("*a *b* c") == [Italic("a *b"), PlainText(" c")]


def test_inline_stray_stars_on_one_long_line_are_fast():
    text = "*a " * 20000
    started = time.perf_counter()
    spans = tokenize_inline(text)
    elapsed = time.perf_counter() - started

    assert spans == [PlainText(text)]
    assert elapsed < 2.0


def test_inline_stray_underscores_and_tags_are_fast():
    text = "_x __y <u>z " * 5000
    started = time.perf_counter()
    spans = tokenize_inline(text)
    elapsed = time.perf_counter() - started

    assert spans == [PlainText(text)]
    assert elapsed < 2.0
