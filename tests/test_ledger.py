"""Tests for ledger module."""
import pytest

from conspiracyengine.ledger import InvariantViolation, ResourceLedger
from conspiracyengine.state import ActiveQuest, GameState


def _make_ledger(strict: bool = True) -> ResourceLedger:
    return ResourceLedger(GameState(), strict=strict)


def test_credit_evidence_updates_all_counters():
    ledger = _make_ledger()
    ledger.credit_evidence(25.0)
    s = ledger.state
    assert s.evidence == 25.0
    assert s.total_evidence_earned == 25.0
    assert s.today_evidence == 25.0


def test_credit_ignores_non_positive():
    ledger = _make_ledger()
    ledger.credit_evidence(0.0)
    ledger.credit_evidence(-5.0)
    ledger.credit_evidence(float("nan"))
    assert ledger.state.evidence == 0.0
    assert ledger.state.total_evidence_earned == 0.0


def test_spend_evidence():
    ledger = _make_ledger()
    ledger.credit_evidence(100.0)
    assert ledger.spend_evidence(40.0)
    assert ledger.state.evidence == pytest.approx(60.0)
    # Lifetime total is never reduced by spending
    assert ledger.state.total_evidence_earned == 100.0


def test_spend_evidence_shortfall_leaves_state():
    ledger = _make_ledger()
    ledger.credit_evidence(10.0)
    assert not ledger.spend_evidence(10.5)
    assert ledger.state.evidence == 10.0


def test_spend_negative_raises():
    ledger = _make_ledger()
    with pytest.raises(ValueError):
        ledger.spend_evidence(-1.0)
    with pytest.raises(ValueError):
        ledger.spend_tinfoil(-1)


def test_spend_floors_at_zero():
    ledger = _make_ledger()
    ledger.state.evidence = 0.30000000000000004
    assert ledger.spend_evidence(0.30000000000000004)
    assert ledger.state.evidence == 0.0


def test_tinfoil():
    ledger = _make_ledger()
    ledger.credit_tinfoil(5)
    assert ledger.spend_tinfoil(3)
    assert not ledger.spend_tinfoil(3)
    assert ledger.state.tinfoil == 2


def test_accrue_tinfoil_carries_fractions():
    ledger = _make_ledger()
    assert ledger.accrue_tinfoil(0.6) == 0
    assert ledger.accrue_tinfoil(0.6) == 1
    assert ledger.state.tinfoil == 1
    assert ledger.state.tinfoil_progress == pytest.approx(0.2)


def test_tokens_track_lifetime():
    ledger = _make_ledger()
    ledger.credit_tokens(10)
    assert ledger.spend_tokens(4)
    assert ledger.state.illuminati_tokens == 6
    assert ledger.state.total_illuminati_tokens_earned == 10
    assert not ledger.spend_tokens(7)


def test_glitch_tokens():
    ledger = _make_ledger()
    ledger.credit_glitch(3)
    assert ledger.spend_glitch(2)
    assert not ledger.spend_glitch(2)
    assert ledger.state.glitch_tokens == 1


class TestBelievers:
    def test_recruited_minus_committed(self):
        ledger = _make_ledger()
        s = ledger.state
        s.active_quests.append(ActiveQuest("q", 0.0, 10.0, believers_sent=30.0))
        ledger.set_recruited_believers(100.0)
        assert s.believers == 100.0
        assert s.available_believers == 70.0

    def test_bonus_and_lost(self):
        ledger = _make_ledger()
        s = ledger.state
        s.bonus_believers = 10.0
        s.believers_lost = 25.0
        ledger.set_recruited_believers(100.0)
        assert s.believers == 85.0

    def test_never_negative(self):
        ledger = _make_ledger()
        ledger.state.believers_lost = 500.0
        ledger.set_recruited_believers(100.0)
        assert ledger.state.believers == 0.0
        assert ledger.state.available_believers == 0.0

    def test_reserve_and_release(self):
        ledger = _make_ledger()
        ledger.set_recruited_believers(50.0)
        assert ledger.reserve_believers(50.0)
        assert not ledger.reserve_believers(1.0)
        ledger.release_believers(50.0)
        assert ledger.state.available_believers == 50.0

    def test_release_never_exceeds_total(self):
        ledger = _make_ledger()
        ledger.set_recruited_believers(50.0)
        ledger.release_believers(20.0)
        assert ledger.state.available_believers == 50.0

    def test_forfeit(self):
        ledger = _make_ledger()
        ledger.set_recruited_believers(50.0)
        ledger.reserve_believers(20.0)
        ledger.forfeit_believers(20.0)
        s = ledger.state
        assert s.believers == 30.0
        assert s.available_believers == 30.0
        assert s.believers_lost == 20.0


class TestInvariants:
    def test_clean_state(self):
        assert _make_ledger().check_invariants() == []

    def test_strict_raises(self):
        ledger = _make_ledger(strict=True)
        ledger.state.available_believers = 5.0
        with pytest.raises(InvariantViolation):
            ledger.check_invariants()

    def test_lenient_clamps(self):
        ledger = _make_ledger(strict=False)
        s = ledger.state
        s.available_believers = 5.0
        s.evidence = -1e-12
        s.combo_meter = 1.5
        problems = ledger.check_invariants()
        assert len(problems) == 3
        assert s.available_believers == 0.0
        assert s.evidence == 0.0
        assert s.combo_meter == 1.0
        assert ledger.check_invariants() == []
