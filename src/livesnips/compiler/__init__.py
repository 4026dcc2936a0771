"""Snippet library compiler.

Example:
    >>> from livesnips.compiler import parse_library
    >>> [template] = parse_library('snippet hi "Greeting"\\nhello $1\\nendsnippet')
    >>> template.generator([""], [], "", "", None).sections
    ['hello $1']
"""

from ._header import HEADER_PATTERN, SnippetHeader, is_header_line, parse_header
from ._parser import (
    CODE_DELIMITER,
    GLOBAL_LANGUAGE,
    LIBRARY_SUFFIX,
    LibraryLoadResult,
    discover_libraries,
    load_directory,
    load_library,
    parse_library,
)
from ._program import (
    CodeInstruction,
    Generator,
    GlobalEnvironment,
    Instruction,
    LiteralInstruction,
)
from ._runtime import SnippetUtils
from ._template import (
    BlockRef,
    GeneratorFunction,
    GeneratorResult,
    Section,
    Template,
    parse_flags,
    stringify_block,
)

__all__ = [
    "CODE_DELIMITER",
    "GLOBAL_LANGUAGE",
    "HEADER_PATTERN",
    "LIBRARY_SUFFIX",
    "BlockRef",
    "CodeInstruction",
    "Generator",
    "GeneratorFunction",
    "GeneratorResult",
    "GlobalEnvironment",
    "Instruction",
    "LibraryLoadResult",
    "LiteralInstruction",
    "Section",
    "SnippetHeader",
    "SnippetUtils",
    "Template",
    "discover_libraries",
    "is_header_line",
    "load_directory",
    "load_library",
    "parse_flags",
    "parse_header",
    "parse_library",
    "stringify_block",
]
