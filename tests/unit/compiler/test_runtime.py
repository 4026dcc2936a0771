import re

from livesnips.compiler import SnippetUtils, stringify_block


class TestSnippetUtils:
    def test_markers_are_opaque_until_formatted(self) -> None:
        utils = SnippetUtils()

        marker = utils.tabstop(1)

        assert re.fullmatch(r"\[[A-Za-z0-9]{10}\]", marker)
        assert utils.format(f"a{marker}b") == "a$1b"

    def test_placeholder_text_becomes_default(self) -> None:
        utils = SnippetUtils()

        value = f"{utils.tabstop(2, 'x')}, {utils.tabstop(3)}"

        assert utils.format(value) == "${2:x}, $3"

    def test_format_without_markers_is_identity(self) -> None:
        assert SnippetUtils().format("plain") == "plain"


class TestStringifyBlock:
    def test_none_renders_empty(self) -> None:
        assert stringify_block(None) == ""

    def test_values_render_with_str(self) -> None:
        assert stringify_block(3) == "3"
        assert stringify_block("x") == "x"
        assert stringify_block(False) == "False"
