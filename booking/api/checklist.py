from fastapi import APIRouter

from booking.schemas.checklist import ChecklistSummary, ChecklistSummaryRequest
from booking.services.checklist import summarize_checklist

router = APIRouter(prefix="/checklist", tags=["checklist"])


@router.post("/summary", response_model=ChecklistSummary)
async def checklist_summary(payload: ChecklistSummaryRequest):
    return summarize_checklist(payload.items)
