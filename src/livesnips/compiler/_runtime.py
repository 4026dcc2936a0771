"""Runtime helpers handed to computed snippet code as ``utils``."""

import random
import string

_MARKER_ALPHABET = string.ascii_letters + string.digits
_MARKER_LENGTH = 10


def _make_marker() -> str:
    token = "".join(random.choices(_MARKER_ALPHABET, k=_MARKER_LENGTH))  # noqa: S311
    return f"[{token}]"


class SnippetUtils:
    """Lets computed code emit secondary tab-stops.

    ``tabstop`` returns an opaque marker for the code to embed in its value;
    ``format`` later swaps every marker for real tab-stop syntax.

    Example:
        >>> utils = SnippetUtils()
        >>> value = f"fn({utils.tabstop(2, 'arg')})"
        >>> utils.format(value)
        'fn(${2:arg})'
    """

    __slots__ = ("_tabstops",)

    def __init__(self) -> None:
        self._tabstops: list[tuple[str, str]] = []

    def tabstop(self, tabstop: int, placeholder: str | None = None) -> str:
        marker = _make_marker()
        text = f"${{{tabstop}:{placeholder}}}" if placeholder else f"${tabstop}"
        self._tabstops.append((marker, text))
        return marker

    def format(self, value: str) -> str:
        for marker, text in self._tabstops:
            value = value.replace(marker, text)
        return value
