"""Abstract base class for session calendar transformers."""

from abc import ABC, abstractmethod
from typing import Any

from scheduling.models import ClassScheduleRequest, Resolved


class BaseTransformer(ABC):
    """Abstract base class defining the interface for session calendar transformers.

    Extend this class to export a resolved class schedule to other
    formats (e.g. JSON or a calendar API).
    """

    @abstractmethod
    def transform(
        self,
        request: ClassScheduleRequest,
        resolved: Resolved,
        summary: str
    ) -> Any:
        """Transform the sessions of a resolved class into the target format.

        Args:
            request: The validated class request (room and times).
            resolved: The resolved schedule with every session date.
            summary: Title shown for each session.

        Returns:
            Transformed data in the target format.
        """
        pass

    @abstractmethod
    def save(self, output_path: str) -> None:
        """Save the transformed data to a file.

        Args:
            output_path: Path to the output file.
        """
        pass
