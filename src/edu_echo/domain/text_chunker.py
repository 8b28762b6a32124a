"""Splits long transcripts into bounded chunks."""

from collections.abc import Callable, Iterator

SENTENCE_TERMINATOR = "."


def token_units(text: str) -> int:
    """Approximate model tokens as one per character plus one per word."""
    return len(text) + len(text.split())


def split(text: str, max_chars: int) -> Iterator[str]:
    """
    Yields chunks of at most max_chars characters.

    While the remaining text is longer than one window, each chunk ends at the
    last sentence terminator inside the window, or is cut at max_chars when
    the window has none. Whitespace at a break point is dropped.

    Raises:
        ValueError: If max_chars is smaller than 1.
    """
    if max_chars < 1:
        raise ValueError("max_chars must be at least 1")
    return _split(text, lambda remaining: min(len(remaining), max_chars))


def split_by_tokens(text: str, budget: int) -> Iterator[str]:
    """
    Yields chunks whose token_units fit within budget.

    Same break rules as split(), with the window measured in token units.

    Raises:
        ValueError: If budget is smaller than 1.
    """
    if budget < 1:
        raise ValueError("budget must be at least 1")
    return _split(text, lambda remaining: _token_window(remaining, budget))


def _split(text: str, window_end: Callable[[str], int]) -> Iterator[str]:
    remaining = text
    while remaining:
        end = max(window_end(remaining), 1)
        if end >= len(remaining):
            yield remaining
            return

        window = remaining[:end]
        cut = window.rfind(SENTENCE_TERMINATOR) + 1 or end
        yield remaining[:cut]
        remaining = remaining[cut:].lstrip()


def _token_window(text: str, budget: int) -> int:
    """Returns the length of the longest prefix of text that fits in budget."""
    units = 0
    in_word = False
    for index, char in enumerate(text):
        starts_word = not char.isspace() and not in_word
        cost = 2 if starts_word else 1
        if units + cost > budget:
            return index
        units += cost
        in_word = not char.isspace()
    return len(text)
