from collections.abc import Callable

import pytest

from livesnips.compiler import Template, parse_library
from livesnips.host import MemoryDocument
from livesnips.matching import MatchResult, match_templates
from livesnips.text import Position

type Matcher = Callable[..., MatchResult]


@pytest.fixture
def run_match() -> Matcher:
    """Match a library against text with the cursor at the end of the text."""

    def _run(
        library: str | list[Template],
        text: str,
        *,
        language_id: str = "plaintext",
        **kwargs: object,
    ) -> MatchResult:
        templates = parse_library(library) if isinstance(library, str) else library
        document = MemoryDocument.from_text(text, language_id=language_id)
        last = document.line_count - 1
        position = Position(last, len(document.lines[last]))
        return match_templates(document, position, templates, **kwargs)  # pyright: ignore[reportArgumentType]

    return _run
