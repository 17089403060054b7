"""Tests for requirement module."""
import pytest

from conspiracyengine._types import compare, resolve_value
from conspiracyengine.requirement import Req
from conspiracyengine.state import GameState


def _make_state() -> GameState:
    s = GameState()
    s.total_evidence_earned = 500.0
    s.generator_counts["red_string"] = 3
    s.times_ascended = 1
    s.proven_conspiracies.add("moon_landing")
    return s


def test_total_evidence():
    s = _make_state()
    assert Req.total_evidence(">=", 500).evaluate(s)
    assert not Req.total_evidence(">", 500).evaluate(s)


def test_owns_and_count():
    s = _make_state()
    assert Req.owns("red_string").evaluate(s)
    assert Req.owns("red_string", 3).evaluate(s)
    assert not Req.owns("red_string", 4).evaluate(s)
    assert not Req.owns("podcast").evaluate(s)
    assert Req.count("podcast", "==", 0).evaluate(s)


def test_ascensions_and_proven():
    s = _make_state()
    assert Req.ascensions(">=", 1).evaluate(s)
    assert not Req.ascensions(">=", 2).evaluate(s)
    assert Req.proven("moon_landing").evaluate(s)
    assert not Req.proven("flat_earth").evaluate(s)


def test_combinators():
    s = _make_state()
    yes = Req.owns("red_string")
    no = Req.owns("podcast")
    assert not (yes & no).evaluate(s)
    assert (yes | no).evaluate(s)
    assert Req.all(yes, yes).evaluate(s)
    assert not Req.all(yes, no).evaluate(s)
    assert Req.any(no, yes).evaluate(s)
    assert not Req.any(no, no).evaluate(s)


def test_custom():
    s = _make_state()
    assert Req.custom(lambda st: st.times_ascended == 1).evaluate(s)


def test_unknown_operator():
    with pytest.raises(ValueError, match="Unknown operator"):
        Req.total_evidence("=>", 1).evaluate(GameState())


def test_compare():
    assert compare(2, "!=", 3)
    assert compare(3, "<=", 3)
    assert not compare(3, "<", 3)


def test_resolve_value():
    s = _make_state()
    assert resolve_value(2.5, s) == 2.5
    assert resolve_value(lambda st: st.total_evidence_earned / 100, s) == 5.0
