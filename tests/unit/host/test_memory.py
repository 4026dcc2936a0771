from pytest_mock import MockerFixture

from livesnips.host import MemoryDocument, MemoryEditor, TextDocument, TextEditor
from livesnips.text import ContentChange, Position, Range


class TestMemoryDocument:
    def test_satisfies_document_protocol(self) -> None:
        assert isinstance(MemoryDocument.from_text(""), TextDocument)

    def test_normalizes_line_endings(self) -> None:
        document = MemoryDocument.from_text("a\r\nb")

        assert document.lines == ["a", "b"]
        assert document.line_count == 2

    def test_offsets_round_trip(self) -> None:
        document = MemoryDocument.from_text("ab\ncde\nf")

        assert document.offset_at(Position(1, 2)) == 5
        assert document.position_at(5) == Position(1, 2)
        assert document.position_at(100) == Position(2, 1)

    def test_get_text_of_range(self) -> None:
        document = MemoryDocument.from_text("ab\ncde")

        assert document.get_text(Range.from_coordinates(0, 1, 1, 2)) == "b\ncd"

    def test_line_at_reports_indentation(self) -> None:
        document = MemoryDocument.from_text("x\n    y")

        assert document.line_at(1).first_non_whitespace_character_index == 4

    def test_word_range_uses_word_pattern(self) -> None:
        document = MemoryDocument.from_text("foo-bar", word_pattern=r"[\w-]+")

        assert document.get_word_range_at_position(Position(0, 5)) == (
            Range.from_coordinates(0, 0, 0, 7)
        )

    def test_apply_uses_pre_batch_coordinates(self) -> None:
        document = MemoryDocument.from_text("abcdef")

        document.apply([
            ContentChange(Range.from_coordinates(0, 1, 0, 2), "XX"),
            ContentChange(Range.from_coordinates(0, 4, 0, 5), "Y"),
        ])

        assert document.get_text() == "aXXcdYf"


class TestMemoryEditor:
    def test_satisfies_editor_protocol(self) -> None:
        assert isinstance(MemoryEditor(MemoryDocument()), TextEditor)

    def test_edit_notifies_listeners(self, mocker: MockerFixture) -> None:
        editor = MemoryEditor(MemoryDocument.from_text("abc"))
        listener = mocker.Mock()
        editor.on_did_change_text_document(listener)
        change = ContentChange(Range.from_coordinates(0, 3, 0, 3), "d")

        assert editor.edit([change])

        listener.assert_called_once_with(editor.document, [change])
        assert editor.document.get_text() == "abcd"

    def test_refused_edit_changes_nothing(self, mocker: MockerFixture) -> None:
        editor = MemoryEditor(MemoryDocument.from_text("abc"), refuse_edits=True)
        listener = mocker.Mock()
        editor.on_did_change_text_document(listener)

        assert not editor.edit([ContentChange(Range.from_coordinates(0, 0, 0, 0), "x")])

        listener.assert_not_called()
        assert editor.document.get_text() == "abc"

    def test_empty_edit_succeeds_without_notification(
        self, mocker: MockerFixture
    ) -> None:
        editor = MemoryEditor(MemoryDocument.from_text("abc"))
        listener = mocker.Mock()
        editor.on_did_change_text_document(listener)

        assert editor.edit([])

        listener.assert_not_called()

    def test_insert_snippet_renders_and_indents(self) -> None:
        editor = MemoryEditor(MemoryDocument.from_text("  env"))

        editor.insert_snippet("begin${1:x}\n$0\nend", Range.from_coordinates(0, 2, 0, 5))

        assert editor.document.get_text() == "  beginx\n  \n  end"

    def test_selections_follow_edits(self) -> None:
        editor = MemoryEditor(MemoryDocument.from_text("abcdef"))
        editor.selections = [Range.from_coordinates(0, 4, 0, 4)]

        editor.edit([ContentChange(Range.from_coordinates(0, 0, 0, 0), "12")])

        assert editor.selections == [Range.from_coordinates(0, 6, 0, 6)]

    def test_replace_text_moves_cursor_and_notifies_selection(
        self, mocker: MockerFixture
    ) -> None:
        editor = MemoryEditor(MemoryDocument.from_text("ab"))
        listener = mocker.Mock()
        editor.on_did_change_selection(listener)

        editor.replace_text(Range.from_coordinates(0, 1, 0, 2), "x\nyz")

        assert editor.document.get_text() == "ax\nyz"
        assert editor.cursor == Position(1, 2)
        listener.assert_called_once_with(editor, [Range.from_coordinates(1, 2, 1, 2)])

    def test_type_text_and_backspace(self) -> None:
        editor = MemoryEditor(MemoryDocument.from_text("ab"))
        editor.selections = [Range.from_coordinates(0, 2, 0, 2)]

        editor.type_text("cd")
        editor.backspace(3)

        assert editor.document.get_text() == "a"
        assert editor.cursor == Position(0, 1)

    def test_cursor_defaults_to_document_end(self) -> None:
        editor = MemoryEditor(MemoryDocument.from_text("ab\ncde"))

        assert editor.cursor == Position(1, 3)

    def test_nested_notifications_are_serialized(self) -> None:
        editor = MemoryEditor(MemoryDocument.from_text(""))
        calls: list[str] = []

        def first(document: MemoryDocument, changes: list[ContentChange]) -> None:
            calls.append(f"start {changes[0].text}")
            if changes[0].text == "a":
                editor.edit([ContentChange(Range.from_coordinates(0, 1, 0, 1), "b")])
            calls.append(f"end {changes[0].text}")

        editor.on_did_change_text_document(first)

        editor.type_text("a")

        assert calls == ["start a", "end a", "start b", "end b"]
        assert editor.document.get_text() == "ab"
