from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DependencyType(str, Enum):
    """Known dependency kinds. Only BLOCKS affects the schedule."""
    BLOCKS = "blocks"
    RELATES_TO = "relates_to"


class DependencyEdge(BaseModel):
    """
    A directed relationship between two tasks.

    For a ``blocks`` edge: the blocker must finish before the dependent
    can start (finish-to-start).
    """
    id: str
    blocker_task_id: str = Field(alias="blockerTaskId")  # Must finish first
    dependent_task_id: str = Field(alias="dependentTaskId")  # Waits on blocker
    type: str = DependencyType.BLOCKS.value  # Unknown kinds are kept and ignored

    model_config = ConfigDict(frozen=True, populate_by_name=True, coerce_numbers_to_str=True)

    @property
    def is_blocking(self) -> bool:
        return self.type == DependencyType.BLOCKS.value
