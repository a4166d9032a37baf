"""Room and time conflict detection between weekly slots."""

from typing import Iterable, Optional

from .models import (
    ClassScheduleRequest,
    Conflict,
    ExistingSlot,
    SchedulePeriod,
    TimeRange,
    Weekday,
)


def slots_overlap(
    room_a: str,
    weekday_a: Weekday,
    time_a: TimeRange,
    room_b: str,
    weekday_b: Weekday,
    time_b: TimeRange,
    period_a: Optional[SchedulePeriod] = None,
    period_b: Optional[SchedulePeriod] = None
) -> bool:
    """Return True if two weekly slots collide.

    The arguments are symmetric: swapping the ``a`` and ``b`` sides never
    changes the answer. Periods are compared only when both are given.
    """
    if room_a != room_b or weekday_a != weekday_b:
        return False
    if not time_a.overlaps(time_b):
        return False
    if period_a is not None and period_b is not None:
        return period_a.overlaps(period_b)
    return True


class ConflictChecker:
    """Finds existing weekly slots that collide with a candidate class.

    With ``strict_period_overlap`` enabled, two classes only conflict if
    their calendar periods also overlap; otherwise any two classes sharing
    room, weekday and time conflict regardless of their dates.
    """

    def __init__(self, strict_period_overlap: bool = True) -> None:
        self._strict_period_overlap = strict_period_overlap

    @property
    def strict_period_overlap(self) -> bool:
        return self._strict_period_overlap

    def conflicts_on(
        self,
        weekday: Weekday,
        candidate: ClassScheduleRequest,
        period: SchedulePeriod,
        existing_slots: Iterable[ExistingSlot]
    ) -> list[Conflict]:
        """Return the conflicts of the candidate on a single weekday."""
        conflicts: list[Conflict] = []
        for slot in existing_slots:
            if candidate.exclude_class_id is not None and slot.class_id == candidate.exclude_class_id:
                continue

            if not slots_overlap(
                candidate.room_id, weekday, candidate.time_range,
                slot.room_id, slot.weekday, slot.time_range,
                period if self._strict_period_overlap else None,
                slot.period if self._strict_period_overlap else None
            ):
                continue

            conflicts.append(Conflict(
                weekday=weekday,
                conflicting_class_id=slot.class_id,
                conflicting_time_range=slot.time_range,
                room_id=slot.room_id,
                conflicting_period=slot.period
            ))
        return conflicts

    def find_conflicts(
        self,
        candidate: ClassScheduleRequest,
        period: SchedulePeriod,
        existing_slots: Iterable[ExistingSlot]
    ) -> list[Conflict]:
        """Collect the conflicts of the candidate across all its weekdays.

        Every weekday is checked, so the result lists all problems at once,
        ordered by weekday and then by the order of ``existing_slots``.
        """
        slots = list(existing_slots)
        conflicts: list[Conflict] = []
        for weekday in sorted(candidate.weekdays):
            conflicts.extend(self.conflicts_on(weekday, candidate, period, slots))
        return conflicts
