from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import Callable, ClassVar, Optional, Sequence, Union

from studysync.config import Settings
from studysync.models.assignment import AssignmentRecord

Clock = Callable[[], int]


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class Assigned:
    record: AssignmentRecord
    kind: ClassVar[str] = "assigned"

    @property
    def message(self) -> str:
        return f"Hi {self.record.full_name}, you have been assigned to Group {self.record.group_number}."


@dataclass(frozen=True)
class AlreadyAssigned:
    record: AssignmentRecord
    kind: ClassVar[str] = "already_assigned"

    @property
    def message(self) -> str:
        return f"Hi {self.record.full_name}, you are already in Group {self.record.group_number}."


@dataclass(frozen=True)
class ValidationError:
    message: str = "Full name is required"
    kind: ClassVar[str] = "validation_error"


@dataclass(frozen=True)
class CapacityError:
    max_total_students: int
    kind: ClassVar[str] = "capacity_error"

    @property
    def message(self) -> str:
        return f"Registration is closed. All {self.max_total_students} spots are taken."


@dataclass(frozen=True)
class GroupsFullError:
    message: str = "All groups are currently full."
    kind: ClassVar[str] = "groups_full"


Outcome = Union[Assigned, AlreadyAssigned, ValidationError, CapacityError, GroupsFullError]


def identity_for(full_name: str, student_id: str) -> str:
    return student_id if student_id else full_name.lower()


def find_existing(
    roster: Sequence[AssignmentRecord], *, full_name: str, student_id: str
) -> Optional[AssignmentRecord]:
    lowered = full_name.lower()
    identity = identity_for(full_name, student_id)
    for record in roster:
        if student_id and record.student_identifier and record.student_identifier == student_id:
            return record
        if record.full_name.lower() == lowered:
            return record
        # identities must stay unique, e.g. a student ID equal to another student's lowercased name
        if record.identity == identity:
            return record
    return None


def precheck(roster: Sequence[AssignmentRecord], full_name: str, *, config: Settings) -> Optional[Outcome]:
    """Rejections that need no lookup: blank name, registration closed."""
    if not full_name:
        return ValidationError()
    if len(roster) >= config.max_total_students:
        return CapacityError(max_total_students=config.max_total_students)
    return None


def group_counts(roster: Sequence[AssignmentRecord], groups: Sequence[int]) -> dict[int, int]:
    counts = {g: 0 for g in groups}
    for record in roster:
        if record.group_number in counts:
            counts[record.group_number] += 1
    return counts


def eligible_groups(
    roster: Sequence[AssignmentRecord], *, groups: Sequence[int], group_max_size: int
) -> list[int]:
    counts = group_counts(roster, groups)
    return [g for g in groups if counts[g] < group_max_size]


def assign(
    roster: Sequence[AssignmentRecord],
    full_name_input: str,
    student_id_input: Optional[str],
    clock: Clock,
    *,
    config: Settings,
    rng: Optional[random.Random] = None,
) -> Outcome:
    """
    Decide the outcome of one registration against a roster snapshot.

    Never mutates ``roster``; the caller appends ``Assigned.record`` itself.
    Group choice is a fresh uniform draw over the groups still below
    capacity, so short runs are not guaranteed to balance.
    """
    full_name = (full_name_input or "").strip()
    student_id = (student_id_input or "").strip()

    rejected = precheck(roster, full_name, config=config)
    if rejected is not None:
        return rejected

    existing = find_existing(roster, full_name=full_name, student_id=student_id)
    if existing is not None:
        return AlreadyAssigned(record=existing)

    eligible = eligible_groups(
        roster, groups=config.target_groups, group_max_size=config.group_max_size
    )
    if not eligible:
        return GroupsFullError()

    chooser = rng if rng is not None else random
    group_number = chooser.choice(eligible)

    record = AssignmentRecord(
        identity=identity_for(full_name, student_id),
        full_name=full_name,
        student_identifier=student_id or None,
        group_number=group_number,
        assigned_at=clock(),
    )
    return Assigned(record=record)
