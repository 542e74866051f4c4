from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict, Field, field_validator
from uuid import uuid4

from booking.core.enums import Priority


class ChecklistItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    checked: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    priority: Priority = Priority.MEDIUM

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Checklist item name cannot be empty")
        return value


class ChecklistItemProjection(BaseModel):
    name: str
    checked: bool
    priority: Priority


class ChecklistSummary(BaseModel):
    items: list[ChecklistItemProjection]
    completion_ratio: float
    completed_count: int
    total_count: int
    all_checked: bool


def check_unique_ids(items: list[ChecklistItem]) -> list[ChecklistItem]:
    seen: set[str] = set()
    for item in items:
        if item.id in seen:
            raise ValueError(f"Duplicate checklist item id: {item.id}")
        seen.add(item.id)
    return items


class ChecklistSummaryRequest(BaseModel):
    items: list[ChecklistItem] = Field(default_factory=list)

    @field_validator("items")
    @classmethod
    def _unique_ids(cls, items):
        return check_unique_ids(items)
