import pytest

from palmbot.services.text_reply_service import (
    DEFAULT_MESSAGE,
    GREETING_MESSAGE,
    HELP_MESSAGE,
    select_text_reply,
)


@pytest.mark.parametrize("text", ["Hello", "hi there", "こんにちは", "はじめまして"])
def test_greeting(text):
    assert select_text_reply(text) == GREETING_MESSAGE


@pytest.mark.parametrize("text", ["help", "HELP me", "使い方を教えて", "ヘルプ"])
def test_help(text):
    assert select_text_reply(text) == HELP_MESSAGE


@pytest.mark.parametrize("text", ["what is this", "thanks", "", None])
def test_default(text):
    assert select_text_reply(text) == DEFAULT_MESSAGE


def test_greeting_wins_over_help():
    assert select_text_reply("hello, help please") == GREETING_MESSAGE


@pytest.mark.parametrize("text, expected", [
    (42, DEFAULT_MESSAGE),
    (["hello"], GREETING_MESSAGE),
    ({"text": "help"}, HELP_MESSAGE),
    (0, DEFAULT_MESSAGE),
])
def test_non_string_text_is_coerced(text, expected):
    assert select_text_reply(text) == expected
