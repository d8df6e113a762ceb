from __future__ import annotations

import random

import pytest

from studysync.config import Settings
from studysync.models.assignment import AssignmentRecord
from studysync.services.assignment_engine import (
    AlreadyAssigned,
    Assigned,
    CapacityError,
    GroupsFullError,
    ValidationError,
    assign,
    eligible_groups,
)


def _config(**overrides) -> Settings:
    values = {"target_groups": [2, 3, 4, 5], "group_max_size": 5, "max_total_students": 50}
    values.update(overrides)
    return Settings(**values)


def _record(name: str, group: int, at: int, sid: str | None = None) -> AssignmentRecord:
    return AssignmentRecord(
        identity=sid or name.lower(),
        full_name=name,
        student_identifier=sid,
        group_number=group,
        assigned_at=at,
    )


def _full_roster(per_group: int = 5) -> list[AssignmentRecord]:
    roster = []
    at = 1
    for g in (2, 3, 4, 5):
        for i in range(per_group):
            roster.append(_record(f"g{g}-s{i}", g, at))
            at += 1
    return roster


def _clock():
    return 1_700_000_000_000


def test_assign_first_student_on_empty_roster():
    outcome = assign([], "Alice", None, _clock, config=_config(), rng=random.Random(1))
    assert isinstance(outcome, Assigned)
    assert outcome.kind == "assigned"
    assert outcome.record.group_number in {2, 3, 4, 5}
    assert outcome.record.full_name == "Alice"
    assert outcome.record.identity == "alice"
    assert outcome.record.student_identifier is None
    assert outcome.record.assigned_at == 1_700_000_000_000


def test_assign_trims_inputs_and_uses_student_id_as_identity():
    outcome = assign([], "  Bob Smith  ", "  S-42 ", _clock, config=_config(), rng=random.Random(2))
    assert isinstance(outcome, Assigned)
    assert outcome.record.full_name == "Bob Smith"
    assert outcome.record.student_identifier == "S-42"
    assert outcome.record.identity == "S-42"


@pytest.mark.parametrize("name", ["", "   ", "\t\n"])
def test_assign_rejects_blank_name(name):
    roster = [_record("Zed", 2, 1)]
    before = list(roster)
    outcome = assign(roster, name, "S-1", _clock, config=_config())
    assert isinstance(outcome, ValidationError)
    assert outcome.message == "Full name is required"
    assert roster == before


def test_assign_rejects_when_global_capacity_reached():
    roster = _full_roster(per_group=2)
    outcome = assign(roster, "Late Student", None, _clock, config=_config(max_total_students=8))
    assert isinstance(outcome, CapacityError)
    assert outcome.message == "Registration is closed. All 8 spots are taken."
    assert len(roster) == 8


def test_assign_rejects_when_every_group_is_full():
    roster = _full_roster(per_group=5)
    outcome = assign(roster, "New Unique Name", None, _clock, config=_config())
    assert isinstance(outcome, GroupsFullError)
    assert outcome.message == "All groups are currently full."
    assert len(roster) == 20


def test_assign_finds_existing_record_case_insensitively():
    existing = _record("alice", 3, 10)
    roster = [existing]
    outcome = assign(roster, "  ALICE ", None, _clock, config=_config())
    assert isinstance(outcome, AlreadyAssigned)
    assert outcome.record is existing
    assert len(roster) == 1


def test_assign_finds_existing_record_by_student_id():
    existing = _record("Carol", 4, 10, sid="S-7")
    outcome = assign([existing], "Caroline Jones", "S-7", _clock, config=_config())
    assert isinstance(outcome, AlreadyAssigned)
    assert outcome.record is existing


def test_assign_blank_student_id_never_matches_records_without_id():
    roster = [_record("Dan", 2, 10)]
    outcome = assign(roster, "Erin", "   ", _clock, config=_config(), rng=random.Random(3))
    assert isinstance(outcome, Assigned)
    assert outcome.record.identity == "erin"


def test_assign_first_match_wins_in_insertion_order():
    first = _record("Frank", 2, 1, sid="S-1")
    second = _record("Grace", 3, 2, sid="S-2")
    outcome = assign([first, second], "Grace", "S-1", _clock, config=_config())
    assert isinstance(outcome, AlreadyAssigned)
    assert outcome.record is first


def test_replaying_a_successful_registration_returns_the_same_record():
    config = _config()
    roster: list[AssignmentRecord] = []
    first = assign(roster, "Heidi", "S-9", _clock, config=config, rng=random.Random(4))
    assert isinstance(first, Assigned)
    roster.append(first.record)

    again = assign(roster, "Heidi", "S-9", _clock, config=config, rng=random.Random(5))
    assert isinstance(again, AlreadyAssigned)
    assert again.record == first.record
    assert len(roster) == 1


def test_assign_only_picks_groups_below_capacity():
    roster = [r for r in _full_roster(per_group=5) if r.group_number != 5]
    config = _config()
    assert eligible_groups(roster, groups=config.target_groups, group_max_size=5) == [5]
    for seed in range(25):
        outcome = assign(roster, f"student {seed}", None, _clock, config=config, rng=random.Random(seed))
        assert isinstance(outcome, Assigned)
        assert outcome.record.group_number == 5


def test_assign_draws_are_independent_and_not_round_robin():
    # Each call is a fresh uniform draw, so repeats of the same group are expected.
    config = _config(group_max_size=1000, max_total_students=1000)
    rng = random.Random(11)
    picks = [
        assign([], f"s{i}", None, _clock, config=config, rng=rng).record.group_number
        for i in range(200)
    ]
    assert set(picks) == {2, 3, 4, 5}
    assert any(a == b for a, b in zip(picks, picks[1:]))


def test_assign_does_not_mutate_roster_on_success():
    roster = [_record("Ivan", 2, 1)]
    snapshot = tuple(roster)
    outcome = assign(roster, "Judy", None, _clock, config=_config(), rng=random.Random(6))
    assert isinstance(outcome, Assigned)
    assert tuple(roster) == snapshot


def test_assign_treats_student_id_matching_an_existing_identity_as_duplicate():
    alice = _record("Alice", 2, 1)
    roster = [alice]
    outcome = assign(roster, "Bob", "alice", _clock, config=_config(), rng=random.Random(8))
    assert isinstance(outcome, AlreadyAssigned)
    assert outcome.record is alice
    assert [r.identity for r in roster] == ["alice"]


def test_assign_treats_name_matching_an_existing_student_id_as_duplicate():
    sid_holder = _record("Carol", 3, 1, sid="dave")
    outcome = assign([sid_holder], "Dave", None, _clock, config=_config(), rng=random.Random(9))
    assert isinstance(outcome, AlreadyAssigned)
    assert outcome.record is sid_holder
