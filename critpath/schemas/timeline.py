from datetime import date
from typing import Literal

from pydantic import BaseModel, Field


class TimelineBar(BaseModel):
    """One task as a bar on the timeline."""
    id: str
    label: str
    start_date: date
    end_date: date
    duration_days: int
    progress_ratio: float = Field(ge=0, le=1)
    parent_id: str | None = None
    is_critical: bool = False


class TimelineLink(BaseModel):
    """A finish-to-start arrow between two bars."""
    id: str
    source_task_id: str  # Blocker
    target_task_id: str  # Dependent
    relation_kind: Literal["finish_to_start"] = "finish_to_start"
    is_critical: bool = False  # Both endpoints on the critical path


class Timeline(BaseModel):
    """Everything the rendering layer needs to draw a schedule."""
    critical_path: list[str]
    bars: list[TimelineBar]
    links: list[TimelineLink]
