"""Stacks of nested snippet expansions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from ._instance import SnippetInstance


class InstanceStack:
    """Active expansions of one document, innermost first.

    Only the top (innermost) instance receives edits; the others are inert
    until it is popped.
    """

    __slots__ = ("_instances",)

    def __init__(self) -> None:
        self._instances: list[SnippetInstance] = []

    @property
    def top(self) -> SnippetInstance | None:
        return self._instances[0] if self._instances else None

    def push(self, instance: SnippetInstance) -> None:
        self._instances.insert(0, instance)

    def pop(self) -> SnippetInstance | None:
        if not self._instances:
            return None
        instance = self._instances.pop(0)
        instance.abandon()
        return instance

    def retain(self, keep: Callable[[SnippetInstance], bool]) -> list[SnippetInstance]:
        """Abandon every instance ``keep`` rejects, preserving order.

        Returns:
            The abandoned instances.
        """
        dropped = [instance for instance in self._instances if not keep(instance)]
        for instance in dropped:
            instance.abandon()
        self._instances = [i for i in self._instances if i not in dropped]
        return dropped

    def clear(self) -> None:
        while self._instances:
            self.pop()

    def __len__(self) -> int:
        return len(self._instances)

    def __bool__(self) -> bool:
        return bool(self._instances)

    def __iter__(self) -> Iterator[SnippetInstance]:
        return iter(list(self._instances))
