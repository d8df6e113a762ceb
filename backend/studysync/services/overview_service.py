from __future__ import annotations

from typing import Sequence

from studysync.config import Settings
from studysync.models.assignment import AssignmentRecord


def serialize_record(record: AssignmentRecord) -> dict:
    return {
        "identity": record.identity,
        "full_name": record.full_name,
        "student_identifier": record.student_identifier,
        "group_number": record.group_number,
        "assigned_at": record.assigned_at,
    }


def serialize_group(group_number: int, members: Sequence[AssignmentRecord], *, config: Settings) -> dict:
    ordered = sorted(members, key=lambda r: r.assigned_at)
    return {
        "group_number": group_number,
        "label": f"Group {group_number}",
        "capacity": config.group_max_size,
        "member_count": len(ordered),
        "is_full": len(ordered) >= config.group_max_size,
        "link": config.whatsapp_links.get(group_number),
        "members": [serialize_record(r) for r in ordered],
    }


def list_groups(roster: Sequence[AssignmentRecord], *, config: Settings) -> list[dict]:
    by_group: dict[int, list[AssignmentRecord]] = {g: [] for g in config.target_groups}
    for record in roster:
        if record.group_number in by_group:
            by_group[record.group_number].append(record)
    return [serialize_group(g, by_group[g], config=config) for g in config.target_groups]


def roster_summary(roster: Sequence[AssignmentRecord], *, config: Settings) -> dict:
    signed_up = len(roster)
    return {
        "signed_up": signed_up,
        "spots_left": max(config.max_total_students - signed_up, 0),
        "max_total_students": config.max_total_students,
    }
