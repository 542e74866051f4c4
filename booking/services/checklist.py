from typing import Sequence

from booking.core.enums import Priority
from booking.schemas.checklist import ChecklistItem, ChecklistItemProjection, ChecklistSummary


def new_checklist_item(name: str, priority: Priority = Priority.MEDIUM) -> ChecklistItem:
    return ChecklistItem(name=name, priority=priority)


def toggle_item(item: ChecklistItem) -> ChecklistItem:
    return item.model_copy(update={"checked": not item.checked})


def summarize_checklist(items: Sequence[ChecklistItem]) -> ChecklistSummary:
    total = len(items)
    completed = sum(1 for item in items if item.checked)
    return ChecklistSummary(
        items=[
            ChecklistItemProjection(name=item.name, checked=item.checked, priority=item.priority)
            for item in items
        ],
        completion_ratio=completed / total if total else 1.0,
        completed_count=completed,
        total_count=total,
        all_checked=completed == total,
    )
