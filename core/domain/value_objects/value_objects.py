"""Domain value objects - pure Python immutable types."""

from dataclasses import dataclass
from uuid import UUID, uuid4


@dataclass(frozen=True)
class ExecutionID:
    """Unique identifier for tracing a single inbound command."""

    value: UUID

    @classmethod
    def generate(cls) -> "ExecutionID":
        """Generate a new ExecutionID."""
        return cls(value=uuid4())

    @property
    def short(self) -> str:
        """First block of the UUID, used as a log prefix."""
        return str(self.value).split("-")[0]

    def __str__(self) -> str:
        """Return string representation."""
        return str(self.value)
