import pytest

from tagsig.modules.core.cycle_state import CycleState, call_closed, paren_depth


def test_advance_wraps_forward_and_back() -> None:
    state = CycleState()
    state.load(["a", "b", "c"])
    state.cursor = 3
    assert state.advance(1) == "a"
    assert state.cursor == 1
    assert state.advance(-1) == "c"
    assert state.cursor == 3


def test_advance_accepts_direction_names() -> None:
    state = CycleState()
    state.load(["a", "b"])
    assert state.advance("next") == "b"
    assert state.advance("prev") == "a"


def test_empty_state_is_a_noop() -> None:
    state = CycleState()
    assert state.advance() == ""
    assert state.current() == ""
    assert state.cursor == 1
    assert not state


def test_load_replaces_previous_candidates() -> None:
    state = CycleState()
    state.load(["a", "b"])
    state.advance()
    assert state.load(["x"]) == "x"
    assert state.candidates == ["x"]
    assert state.cursor == 1


def test_reset_when_parens_balance() -> None:
    state = CycleState()
    state.load(["sig"])
    span = "foo(bar(1,2))"
    for i, ch in enumerate(span):
        closed = state.on_typed(ch)
        assert closed == (i == len(span) - 1)
    assert state.candidates == []
    assert state.cursor == 1


def test_parens_inside_literals_do_not_count() -> None:
    state = CycleState()
    state.load(["sig"])
    span = 'f(")", \'(\', "\\")")'
    results = [state.on_typed(ch) for ch in span]
    assert results[-1] is True
    assert not any(results[:-1])


def test_span_started_at_trigger_paren() -> None:
    state = CycleState()
    state.load(["sig"], span="(")
    assert state.on_typed("x, g(y)") is False
    assert state.on_typed(")") is True
    assert not state


def test_on_typed_without_candidates() -> None:
    assert CycleState().on_typed(")") is False


def test_paren_depth() -> None:
    assert paren_depth("a(b)c(") == (2, 1)
    assert paren_depth('("(")') == (1, 1)
    assert call_closed("foo") is False
    assert call_closed("f(x)") is True


@pytest.mark.parametrize("direction", ["sideways", "", 0])
def test_advance_rejects_unknown_direction(direction) -> None:
    state = CycleState()
    state.load(["a", "b"])
    with pytest.raises(ValueError):
        state.advance(direction)
    assert state.cursor == 1
