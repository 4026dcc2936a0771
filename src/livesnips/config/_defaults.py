"""Default configuration values.

DEFAULT_CONFIG is a plain dict so it can be fed to deep_merge; the merge
functions copy their inputs.
"""

from typing import Any

from livesnips.host import DEFAULT_WORD_PATTERN
from livesnips.matching import DEFAULT_LONG_CONTEXT_LINES

DEFAULT_VISUAL_WINDOW_SECONDS = 5.0

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "snippet_dir": "",
    "long_context_lines": DEFAULT_LONG_CONTEXT_LINES,
    "visual_window_seconds": DEFAULT_VISUAL_WINDOW_SECONDS,
    "word_pattern": DEFAULT_WORD_PATTERN,
    "strict": False,
    "logging": {
        "level": "info",
        "format": "text",
        "file": "",
    },
}
