from hypothesis import assume, given, strategies as st

from livesnips.host import MemoryDocument
from livesnips.matching import (
    DefaultPolicy,
    InWordPolicy,
    MatchContext,
    longest_trigger_prefix,
)
from livesnips.text import Position

words = st.text(alphabet="ab-", max_size=5)
triggers = st.text(alphabet="ab-", min_size=1, max_size=4)


def _context(text: str) -> MatchContext:
    document = MemoryDocument.from_text(text)
    return MatchContext.derive(document, Position(0, len(text)))


@given(context=words, trigger=triggers)
def test_longest_trigger_prefix_is_maximal(context: str, trigger: str) -> None:
    prefix = longest_trigger_prefix(context, trigger)

    assert trigger.startswith(prefix)
    assert context.endswith(prefix)
    longer = trigger[: len(prefix) + 1]
    if len(longer) > len(prefix):
        assert not context.endswith(longer)


@given(lead=st.sampled_from(["", " ", "x "]), word=words, trigger=triggers)
def test_default_policy_matches_whole_context(lead: str, word: str, trigger: str) -> None:
    ctx = _context(lead + word)
    policy = DefaultPolicy()

    assert (policy.test_exact(trigger, ctx) is not None) == (word == trigger)
    assert (policy.test_partial(trigger, ctx) is not None) == (
        bool(word) and trigger.startswith(word)
    )


@given(lead=words, trigger=triggers)
def test_inword_policy_replaces_exactly_the_trigger(lead: str, trigger: str) -> None:
    text = lead + trigger
    ctx = _context(text)

    range_ = InWordPolicy().test_exact(trigger, ctx)

    assert range_ is not None
    assert ctx.document.get_text(range_) == trigger


@given(lead=words, trigger=triggers)
def test_inword_partial_range_ends_at_cursor(lead: str, trigger: str) -> None:
    assume(longest_trigger_prefix(lead, trigger))
    ctx = _context(lead)

    range_ = InWordPolicy().test_partial(trigger, ctx)

    assert range_ is not None
    assert range_.end == ctx.position
    assert trigger.startswith(ctx.document.get_text(range_))
