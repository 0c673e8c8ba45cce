"""Tests for word-count trimming."""
from linksaver.services.text import trim_to_words


def test__trim_to_words__short_text_is_unchanged() -> None:
    text = "  A short   description\nwith odd spacing  "
    assert trim_to_words(text) == text


def test__trim_to_words__exactly_at_limit_is_unchanged() -> None:
    text = " ".join(f"w{i}" for i in range(50))
    assert trim_to_words(text) == text


def test__trim_to_words__long_text_is_cut_with_ellipsis() -> None:
    words = [f"w{i}" for i in range(60)]
    text = "\n\t".join(words)

    result = trim_to_words(text)

    assert result == " ".join(words[:50]) + "..."


def test__trim_to_words__custom_limit() -> None:
    assert trim_to_words("one two three four", max_words=2) == "one two..."


def test__trim_to_words__none_and_empty_pass_through() -> None:
    assert trim_to_words(None) is None
    assert trim_to_words("") == ""


def test__trim_to_words__whitespace_only_is_unchanged() -> None:
    assert trim_to_words("   \n ") == "   \n "
