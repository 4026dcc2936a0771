import pytest

from livesnips.compiler import is_header_line, parse_header


class TestParseHeader:
    def test_literal_trigger_with_description_and_flags(self) -> None:
        header = parse_header('snippet fr "Fraction" iA')

        assert header.trigger == "fr"
        assert header.regexp is None
        assert header.description == "Fraction"
        assert header.flags == "iA"

    def test_trigger_only(self) -> None:
        header = parse_header("snippet ->")

        assert header.trigger == "->"
        assert header.description == ""
        assert header.flags == ""

    def test_flags_without_description(self) -> None:
        header = parse_header("snippet dm A")

        assert header.trigger == "dm"
        assert header.flags == "A"

    def test_pattern_trigger_is_anchored_at_end(self) -> None:
        header = parse_header(r'snippet `(\d+)/` "Number fraction" A')

        assert header.trigger == ""
        assert header.regexp is not None
        assert header.regexp.pattern == r"(\d+)/$"

    def test_pattern_ending_in_anchor_is_kept(self) -> None:
        header = parse_header("snippet `foo$`")

        assert header.regexp is not None
        assert header.regexp.pattern == "foo$"

    def test_invalid_pattern_raises(self) -> None:
        with pytest.raises(ValueError, match="Invalid trigger pattern"):
            parse_header("snippet `(unclosed`")

    def test_malformed_header_raises(self) -> None:
        with pytest.raises(ValueError, match="Invalid snippet header"):
            parse_header('snippet "only a description"  extra words here')


class TestIsHeaderLine:
    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("snippet foo", True),
            ("snippet", True),
            ("snippets are fun", False),
            ("  snippet foo", False),
        ],
    )
    def test_detects_header_lines(self, line: str, expected: bool) -> None:
        assert is_header_line(line) is expected
