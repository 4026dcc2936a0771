from livesnips.session import SelectionMemory


class _Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestSelectionMemory:
    def test_recent_text_within_window(self) -> None:
        clock = _Clock()
        memory = SelectionMemory(window_seconds=5.0, clock=clock)

        memory.record("abc")
        clock.now = 4.9

        assert memory.recent_text() == "abc"

    def test_expires_after_window(self) -> None:
        clock = _Clock()
        memory = SelectionMemory(window_seconds=5.0, clock=clock)

        memory.record("abc")
        clock.now = 5.0

        assert memory.recent_text() == ""

    def test_empty_selection_keeps_previous_text(self) -> None:
        clock = _Clock()
        memory = SelectionMemory(clock=clock)

        memory.record("abc")
        memory.record("")

        assert memory.recent_text() == "abc"

    def test_clear_forgets(self) -> None:
        memory = SelectionMemory()
        memory.record("abc")

        memory.clear()

        assert memory.recent_text() == ""
