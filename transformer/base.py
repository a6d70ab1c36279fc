"""Abstract base class for schedule transformers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from timetable.models import Course, Semester

ResultT = TypeVar("ResultT")


@dataclass(frozen=True)
class TransformResult(Generic[ResultT]):
    """Outcome of a transform that reports failure instead of raising.

    ``diagnostics["kind"]`` names the error class on failure, e.g.
    ``"InvalidPeriod"`` or ``"InvalidDay"``.
    """

    status: str
    payload: Optional[ResultT] = None
    diagnostics: Optional[dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @property
    def error_kind(self) -> Optional[str]:
        return (self.diagnostics or {}).get("kind")

    def unwrap(self) -> ResultT:
        """Return payload or raise ValueError. Use after checking ok."""
        if self.payload is None:
            msg = (self.diagnostics or {}).get("message", "No payload")
            raise ValueError(msg)
        return self.payload


class BaseTransformer(ABC):
    """Abstract base class defining the interface for schedule transformers.

    Extend this class to implement transformers for different output formats
    (e.g., iCalendar, JSON, etc.).
    """

    @abstractmethod
    def transform(self, courses: list[Course], semester: Semester) -> Any:
        """Transform courses into the target format.

        Args:
            courses: Courses with their weekly schedules.
            semester: Semester the schedules belong to.

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
