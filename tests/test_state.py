"""Tests for state module."""
import datetime

import pytest

from conspiracyengine.daily import ChallengeType, StoredChallenge
from conspiracyengine.state import ActiveQuest, GameState


def _make_played_state() -> GameState:
    s = GameState()
    s.evidence = 1234.5
    s.total_evidence_earned = 99999.0
    s.tinfoil = 17
    s.illuminati_tokens = 3
    s.generator_counts = {"red_string": 12, "podcast": 1}
    s.purchased_upgrades = {"b", "a"}
    s.unlocked_achievements = {"evidence_100"}
    s.active_quests = [ActiveQuest("recon", 100.0, 220.0, 20.0)]
    s.daily_challenges = [
        StoredChallenge("clicks_50", "Warm Up", "Click 50 times", ChallengeType.CLICK_COUNT, 50, 2,
                        progress=12)
    ]
    s.daily_challenge_date = datetime.date(2025, 1, 15)
    s.golden_eye_active = True
    s.last_save_time = 1_736_899_200.0
    return s


def test_defaults():
    s = GameState()
    assert s.evidence == 0.0
    assert s.generator_count("anything") == 0
    assert s.total_generators() == 0
    assert s.daily_challenge_date is None


def test_total_generators_and_committed_believers():
    s = _make_played_state()
    assert s.total_generators() == 13
    assert s.committed_believers() == 20.0


def test_dict_round_trip():
    s = _make_played_state()
    restored = GameState.from_dict(s.to_dict())
    assert restored.to_dict() == s.to_dict()
    assert restored.purchased_upgrades == {"a", "b"}
    assert restored.active_quests == s.active_quests
    assert restored.daily_challenges == s.daily_challenges
    assert restored.daily_challenge_date == datetime.date(2025, 1, 15)


def test_to_dict_sorts_sets():
    assert _make_played_state().to_dict()["purchased_upgrades"] == ["a", "b"]


def test_from_dict_rejects_wrong_version():
    data = _make_played_state().to_dict()
    data["version"] = 99
    with pytest.raises(ValueError):
        GameState.from_dict(data)


def test_from_dict_missing_key():
    data = _make_played_state().to_dict()
    del data["evidence"]
    with pytest.raises(KeyError):
        GameState.from_dict(data)


def test_reset_fields():
    s = _make_played_state()
    s.reset_fields(("evidence", "generator_counts", "purchased_upgrades"))
    assert s.evidence == 0.0
    assert s.generator_counts == {}
    assert s.purchased_upgrades == set()
    assert s.tinfoil == 17


def test_reset_unknown_field():
    with pytest.raises(ValueError):
        GameState().reset_fields(("nope",))


def test_active_quest_timing():
    q = ActiveQuest("recon", 100.0, 200.0, 5.0)
    assert not q.is_due(199.0)
    assert q.is_due(200.0)
    assert q.progress(150.0) == 0.5
    assert q.remaining(150.0) == 50.0
    assert q.remaining(300.0) == 0.0
