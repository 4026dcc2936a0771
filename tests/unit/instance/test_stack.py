from livesnips.compiler import parse_library
from livesnips.enums import InstanceState
from livesnips.host import MemoryDocument, MemoryEditor
from livesnips.instance import InstanceStack, SnippetInstance
from livesnips.text import Position


def _instance() -> SnippetInstance:
    [template] = parse_library("snippet t\nx$1\nendsnippet")
    editor = MemoryEditor(MemoryDocument.from_text(""))
    instance = SnippetInstance(template, editor, Position(0, 0))
    instance.activate()
    return instance


class TestInstanceStack:
    def test_innermost_instance_is_on_top(self) -> None:
        stack = InstanceStack()
        outer, inner = _instance(), _instance()

        stack.push(outer)
        stack.push(inner)

        assert stack.top is inner
        assert list(stack) == [inner, outer]
        assert len(stack) == 2

    def test_pop_abandons_top(self) -> None:
        stack = InstanceStack()
        instance = _instance()
        stack.push(instance)

        assert stack.pop() is instance
        assert instance.state is InstanceState.ABANDONED
        assert not stack
        assert stack.pop() is None

    def test_retain_abandons_rejected_instances(self) -> None:
        stack = InstanceStack()
        keep, drop = _instance(), _instance()
        stack.push(keep)
        stack.push(drop)

        dropped = stack.retain(lambda instance: instance is keep)

        assert dropped == [drop]
        assert drop.state is InstanceState.ABANDONED
        assert list(stack) == [keep]

    def test_clear_abandons_everything(self) -> None:
        stack = InstanceStack()
        instances = [_instance(), _instance()]
        for instance in instances:
            stack.push(instance)

        stack.clear()

        assert stack.top is None
        assert all(i.state is InstanceState.ABANDONED for i in instances)
