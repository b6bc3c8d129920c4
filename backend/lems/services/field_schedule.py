"""
Field schedule view: group robot-game matches into per-round schedules.

Input is the flat match list of one event plus its published general
schedule, teams and tables. Output is one RoundSchedule per (type, round)
pair, practice rounds first, then ranking rounds. Within a type, rounds
are emitted in ascending round order.

Every match lands in exactly one RoundSchedule. No matches -> no rounds.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from lems.schemas import MatchRead, MatchType, ScheduleEntry, TableRead, TeamRead

FIELD_SCHEDULE_ROLE = "referee"
ROUND_TYPES: Sequence[MatchType] = ("practice", "ranking")


@dataclass(frozen=True)
class RoundSchedule:
    """Render model for a single round of robot-game matches."""
    event_schedule: List[ScheduleEntry]
    round_type: MatchType
    round_number: int
    matches: List[MatchRead]
    tables: List[TableRead]
    teams: List[TeamRead]

    @property
    def key(self) -> str:
        return f"{self.round_type}{self.round_number}"


def referee_general_schedule(
    schedule: Optional[Sequence[ScheduleEntry]],
    show_general_schedule: bool = True,
    role: str = FIELD_SCHEDULE_ROLE,
) -> List[ScheduleEntry]:
    """Schedule entries that apply to *role*; empty when the toggle is off or nothing is published."""
    if not show_general_schedule or not schedule:
        return []
    return [entry for entry in schedule if role in entry.roles]


def round_numbers(matches: Sequence[MatchRead]) -> List[int]:
    """Distinct round numbers, ascending."""
    return sorted({m.round_number for m in matches})


def derive_round_schedules(
    matches: Sequence[MatchRead],
    schedule: Optional[Sequence[ScheduleEntry]],
    teams: Sequence[TeamRead],
    tables: Sequence[TableRead],
    show_general_schedule: bool = True,
) -> List[RoundSchedule]:
    """
    Build the per-round field schedule.

    Pure: the same inputs always give the same grouping. The filtered
    general schedule, tables and teams are shared by every round.
    """
    event_schedule = referee_general_schedule(schedule, show_general_schedule)
    table_list = list(tables)
    team_list = list(teams)

    rounds: List[RoundSchedule] = []
    for round_type in ROUND_TYPES:
        typed = [m for m in matches if m.match_type == round_type]
        for number in round_numbers(typed):
            rounds.append(
                RoundSchedule(
                    event_schedule=event_schedule,
                    round_type=round_type,
                    round_number=number,
                    matches=[m for m in typed if m.round_number == number],
                    tables=table_list,
                    teams=team_list,
                )
            )
    return rounds
