from typing import Optional

DEFAULT_MAX_WORDS = 50
ELLIPSIS = "..."


def trim_to_words(text: Optional[str], max_words: int = DEFAULT_MAX_WORDS) -> Optional[str]:
    """
    Truncate text to at most ``max_words`` whitespace-separated words.

    Text that already fits is returned untouched, whitespace included.
    Longer text is rebuilt from its first ``max_words`` words joined by
    single spaces, followed by ``...``.
    """
    if not text:
        return text
    words = text.split()
    if len(words) <= max_words:
        return text
    return " ".join(words[:max_words]) + ELLIPSIS
