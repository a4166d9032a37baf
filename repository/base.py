"""Abstract base class for stores of committed weekly slots."""

from abc import ABC, abstractmethod

from scheduling.models import ExistingSlot


class ExistingSlotRepository(ABC):
    """Abstract base class defining how committed class slots are read.

    Extend this class to read slots from other stores (e.g. a remote
    database or a web API).
    """

    @abstractmethod
    def load(self, room_id: str) -> list[ExistingSlot]:
        """Load every weekly slot booked in a room.

        All slots are returned regardless of their dates; filtering by
        period is left to the conflict checker.

        Args:
            room_id: Identifier of the room.

        Returns:
            List of existing slots, one per class and weekday.

        Raises:
            PersistenceError: If the store cannot be read.
        """
        pass
