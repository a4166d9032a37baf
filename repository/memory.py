"""Repository keeping committed slots in memory."""

from typing import Iterable

from scheduling.models import ExistingSlot
from .base import ExistingSlotRepository


class InMemorySlotRepository(ExistingSlotRepository):
    """Slot repository over a plain list, for tests and dry runs."""

    def __init__(self, slots: Iterable[ExistingSlot] = ()) -> None:
        self._slots: list[ExistingSlot] = list(slots)

    def add(self, slot: ExistingSlot) -> None:
        self._slots.append(slot)

    def load(self, room_id: str) -> list[ExistingSlot]:
        return [slot for slot in self._slots if slot.room_id == room_id]
