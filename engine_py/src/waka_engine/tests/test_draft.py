"""
Tests for the draft coordinator: barriers and pack rotation.
"""

import pytest

from effect_helpers import broadcasts, unicasts
from waka_engine.constants import (
    DRAFT_AWAITING_PICKS, DRAFT_AWAITING_SUBMISSION, DRAFT_COMPLETE,
    MSG_NEXT_DRAFT_TURN, MSG_UPDATE_SUBMIT_STATUS,
)
from waka_engine.draft import DraftCoordinator
from waka_engine.models import SessionState
from waka_engine.roster import Roster
from waka_engine.rules import create_config
from waka_engine.ws.events import parse_inbound_event


def make_draft(names=("A", "B", "C"), **overrides):
    config = create_config(**overrides)
    roster = Roster(config)
    for name in names:
        roster.join(name, name, accepting=True)
    state = SessionState(player_order=list(names))
    draft = DraftCoordinator(roster, state, config)
    draft.begin()
    return draft, roster


def submit_all(draft, size=3):
    effects = []
    for pid in draft.state.player_order:
        effects = draft.submit_pack(pid, [f"{pid}{i}" for i in range(size)])
    return effects


def test_submission_barrier_waits_for_everyone():
    """No rotation happens until the last pack is in."""
    draft, roster = make_draft()

    effects = draft.submit_pack("A", ["A0", "A1", "A2"])
    assert broadcasts(effects, MSG_UPDATE_SUBMIT_STATUS)[0].data == {"current": 1, "total": 3}
    assert unicasts(effects, MSG_NEXT_DRAFT_TURN) == []
    assert draft.stage == DRAFT_AWAITING_SUBMISSION

    draft.submit_pack("B", ["B0", "B1", "B2"])
    assert roster.get("A").pack == ["A0", "A1", "A2"]

    effects = draft.submit_pack("C", ["C0", "C1", "C2"])
    assert broadcasts(effects, MSG_UPDATE_SUBMIT_STATUS)[0].data == {"current": 3, "total": 3}
    assert draft.stage == DRAFT_AWAITING_PICKS


def test_first_release_rotates_packs():
    """A gets C's pack, B gets A's, C gets B's."""
    draft, roster = make_draft()
    effects = submit_all(draft)

    assert roster.get("A").pack == ["C0", "C1", "C2"]
    assert roster.get("B").pack == ["A0", "A1", "A2"]
    assert roster.get("C").pack == ["B0", "B1", "B2"]

    turns = {u.target: u.data for u in unicasts(effects, MSG_NEXT_DRAFT_TURN)}
    assert set(turns) == {"A", "B", "C"}
    assert turns["A"] == {"pack": ["C0", "C1", "C2"], "hand": [], "from_name": "C"}
    assert turns["B"]["from_name"] == "A"
    assert turns["C"]["from_name"] == "B"


def test_second_submission_is_ignored():
    draft, roster = make_draft()
    draft.submit_pack("A", ["A0"])
    assert draft.submit_pack("A", ["X0", "X1"]) == []
    assert roster.get("A").pack == ["A0"]


def test_empty_and_unknown_submissions_are_ignored():
    draft, roster = make_draft()
    assert draft.submit_pack("A", []) == []
    assert draft.submit_pack("ghost", ["G0"]) == []
    assert "A" not in draft.submitted
    # A can still submit a real pack afterwards
    assert draft.submit_pack("A", ["A0"]) != []


def test_pack_size_is_enforced_when_configured():
    draft, roster = make_draft(pack_size=3)
    assert draft.submit_pack("A", ["A0", "A1"]) == []
    assert draft.submit_pack("A", ["A0", "A1", "A2"]) != []


def test_pick_barrier_and_lockstep_hands():
    """Hands grow by one for everyone only once all picks are in."""
    draft, roster = make_draft()
    submit_all(draft)

    assert draft.pick_card("A", 0) == []
    assert roster.get("A").has_selected
    assert roster.get("A").hand == []
    assert roster.get("A").pack == ["C1", "C2"]

    assert draft.pick_card("B", 1) == []
    effects = draft.pick_card("C", 2)

    assert roster.get("A").hand == ["C0"]
    assert roster.get("B").hand == ["A1"]
    assert roster.get("C").hand == ["B2"]
    for pid in ("A", "B", "C"):
        assert not roster.get(pid).has_selected
        assert roster.get(pid).selected is None

    # packs moved on again
    assert roster.get("A").pack == ["B0", "B1"]
    assert roster.get("B").pack == ["C1", "C2"]
    assert roster.get("C").pack == ["A0", "A2"]
    turns = {u.target: u.data for u in unicasts(effects, MSG_NEXT_DRAFT_TURN)}
    assert turns["A"]["hand"] == ["C0"]


def test_invalid_picks_are_ignored():
    draft, roster = make_draft()
    submit_all(draft)

    assert draft.pick_card("A", 3) == []
    assert draft.pick_card("A", -1) == []
    assert draft.pick_card("ghost", 0) == []
    assert not roster.get("A").has_selected
    assert roster.get("A").pack == ["C0", "C1", "C2"]

    draft.pick_card("A", 0)
    assert draft.pick_card("A", 0) == []
    assert roster.get("A").pack == ["C1", "C2"]
    assert roster.get("A").selected == "C0"


def test_pick_before_release_is_ignored():
    draft, roster = make_draft()
    draft.submit_pack("A", ["A0", "A1"])
    assert draft.pick_card("A", 0) == []
    assert roster.get("A").pack == ["A0", "A1"]


def test_draft_completes_when_packs_run_out():
    draft, roster = make_draft()
    submit_all(draft, size=2)

    for pid in ("A", "B", "C"):
        draft.pick_card(pid, 0)
    assert draft.stage == DRAFT_AWAITING_PICKS

    effects = None
    for pid in ("A", "B", "C"):
        effects = draft.pick_card(pid, 0)

    assert draft.complete
    assert draft.stage == DRAFT_COMPLETE
    assert unicasts(effects, MSG_NEXT_DRAFT_TURN) == []
    for pid in ("A", "B", "C"):
        assert len(roster.get(pid).hand) == 2
        assert roster.get(pid).pack == []


def test_picks_are_a_complete_partition_of_all_cards():
    draft, roster = make_draft(names=("A", "B", "C", "D"))
    submit_all(draft, size=4)
    while not draft.complete:
        for pid in ("A", "B", "C", "D"):
            draft.pick_card(pid, 0)

    picked = sorted(card for pid in "ABCD" for card in roster.get(pid).hand)
    assert picked == sorted(f"{p}{i}" for p in "ABCD" for i in range(4))


def test_rotation_single_step():
    draft, roster = make_draft(names=("A", "B", "C", "D"))
    for pid in "ABCD":
        roster.get(pid).pack = [pid]
    draft.rotate_packs()
    assert [roster.get(pid).pack for pid in "ABCD"] == [["D"], ["A"], ["B"], ["C"]]


def test_rotation_is_noop_for_single_player():
    draft, roster = make_draft(names=("A",), min_players=1)
    roster.get("A").pack = ["x"]
    draft.rotate_packs()
    assert roster.get("A").pack == ["x"]


def test_disconnected_player_stalls_the_barrier():
    """A missing player blocks the round; nothing is released."""
    draft, roster = make_draft()
    submit_all(draft)
    roster.leave("C")

    draft.pick_card("A", 0)
    assert draft.pick_card("B", 0) == []
    assert roster.get("A").hand == []
    assert draft.stage == DRAFT_AWAITING_PICKS


def test_non_integer_picks_are_ignored():
    """A boolean or string index never selects a card."""
    draft, roster = make_draft(names=("A", "B"))
    submit_all(draft, size=2)

    assert draft.pick_card("A", True) == []
    assert draft.pick_card("A", "1") == []
    assert draft.pick_card("A", 1.0) == []
    assert not roster.get("A").has_selected
    assert roster.get("A").pack == ["B0", "B1"]

    with pytest.raises(ValueError):
        parse_inbound_event('{"type": "pick_card", "index": true}')
    event = parse_inbound_event('{"type": "pick_card", "index": 1}')
    draft.pick_card("A", event.index)
    assert roster.get("A").selected == "B1"
