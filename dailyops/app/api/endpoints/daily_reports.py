"""
Daily Report API endpoints.

Plain collection access (list, lookup, create, merge-update) and the report
lifecycle operations on single task entries.
"""

import datetime as dt
from typing import List, Optional
from fastapi import APIRouter, Depends, Path, Query, Response, status
from dailyops.app.core.dependencies import get_report_lifecycle, get_report_service
from dailyops.app.core.exceptions import ResourceNotFoundError
from dailyops.app.models.daily_report import DailyReport
from dailyops.app.schemas.daily_report import (
    ChecklistItemCreate, ChecklistItemUpdate, DailyReportCreate,
    DailyReportSummary, DailyReportUpdate, TaskNotesUpdate
)
from dailyops.app.services.report_lifecycle import ReportLifecycle
from dailyops.app.services.report_service import ReportService

router = APIRouter(prefix="/daily-reports", tags=["Daily Reports"])


@router.get("", response_model=List[DailyReport])
async def list_reports(
    date: Optional[dt.date] = Query(None, description="Only reports for this date"),
    start: Optional[dt.date] = Query(None, description="Inclusive start date"),
    end: Optional[dt.date] = Query(None, description="Inclusive end date"),
    reports: ReportService = Depends(get_report_service)
):
    return await reports.list_reports(on_date=date, start=start, end=end)


@router.get("/user/{user_id}", response_model=List[DailyReport])
async def list_user_reports(
    user_id: str = Path(..., description="User ID"),
    reports: ReportService = Depends(get_report_service)
):
    return await reports.list_by_user(user_id)


@router.get("/user/{user_id}/date/{date}", response_model=DailyReport)
async def get_user_report_for_date(
    user_id: str = Path(..., description="User ID"),
    date: dt.date = Path(..., description="Report date (YYYY-MM-DD)"),
    reports: ReportService = Depends(get_report_service)
):
    report = await reports.get_by_user_and_date(user_id, date)
    if not report:
        raise ResourceNotFoundError("Daily report")
    return report


@router.post("/user/{user_id}/date/{date}", response_model=DailyReport)
async def open_user_report_for_date(
    response: Response,
    user_id: str = Path(..., description="User ID"),
    date: dt.date = Path(..., description="Report date (YYYY-MM-DD)"),
    lifecycle: ReportLifecycle = Depends(get_report_lifecycle)
):
    """
    Get the user's report for the date, creating it if needed.

    Returns 201 when the report was created, 200 when it already existed.
    """
    report, created = await lifecycle.get_or_create_for_date(user_id, date)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return report


@router.get("/{report_id}", response_model=DailyReport)
async def get_report(
    report_id: str = Path(..., description="Report ID"),
    reports: ReportService = Depends(get_report_service)
):
    report = await reports.get_report(report_id)
    if not report:
        raise ResourceNotFoundError("Daily report", report_id)
    return report


@router.get("/{report_id}/summary", response_model=DailyReportSummary)
async def get_report_summary(
    report_id: str = Path(..., description="Report ID"),
    reports: ReportService = Depends(get_report_service),
    lifecycle: ReportLifecycle = Depends(get_report_lifecycle)
):
    report = await reports.get_report(report_id)
    if not report:
        raise ResourceNotFoundError("Daily report", report_id)
    return await lifecycle.summarize(report)


@router.post("", response_model=DailyReport, status_code=status.HTTP_201_CREATED)
async def create_report(
    report_data: DailyReportCreate,
    reports: ReportService = Depends(get_report_service)
):
    """Insert a report as given. Prefer the get-or-create endpoint for new days."""
    return await reports.create_report(report_data)


@router.put("/{report_id}", response_model=DailyReport)
async def update_report(
    report_data: DailyReportUpdate,
    report_id: str = Path(..., description="Report ID"),
    reports: ReportService = Depends(get_report_service)
):
    """
    Merge the provided fields into the report.

    A provided ``tasks`` list replaces the stored list entirely.
    """
    report = await reports.update_report(report_id, report_data)
    if not report:
        raise ResourceNotFoundError("Daily report", report_id)
    return report


@router.post("/{report_id}/complete", response_model=DailyReport)
async def complete_report(
    report_id: str = Path(..., description="Report ID"),
    lifecycle: ReportLifecycle = Depends(get_report_lifecycle)
):
    return await lifecycle.complete_report(report_id)


@router.post("/{report_id}/reopen", response_model=DailyReport)
async def reopen_report(
    report_id: str = Path(..., description="Report ID"),
    lifecycle: ReportLifecycle = Depends(get_report_lifecycle)
):
    return await lifecycle.reopen_report(report_id)


@router.post("/{report_id}/tasks/{task_id}/start", response_model=DailyReport)
async def start_task(
    report_id: str = Path(..., description="Report ID"),
    task_id: str = Path(..., description="Task ID"),
    lifecycle: ReportLifecycle = Depends(get_report_lifecycle)
):
    """Move a task from not_started to in_progress (409 otherwise)."""
    return await lifecycle.start_task(report_id, task_id)


@router.post("/{report_id}/tasks/{task_id}/complete", response_model=DailyReport)
async def complete_task(
    report_id: str = Path(..., description="Report ID"),
    task_id: str = Path(..., description="Task ID"),
    lifecycle: ReportLifecycle = Depends(get_report_lifecycle)
):
    """Move a task from in_progress to completed (409 otherwise)."""
    return await lifecycle.complete_task(report_id, task_id)


@router.put("/{report_id}/tasks/{task_id}/notes", response_model=DailyReport)
async def save_task_notes(
    notes: TaskNotesUpdate,
    report_id: str = Path(..., description="Report ID"),
    task_id: str = Path(..., description="Task ID"),
    lifecycle: ReportLifecycle = Depends(get_report_lifecycle)
):
    return await lifecycle.save_notes(report_id, task_id, notes.notes)


@router.post(
    "/{report_id}/tasks/{task_id}/checklist",
    response_model=DailyReport,
    status_code=status.HTTP_201_CREATED
)
async def add_checklist_item(
    item_data: ChecklistItemCreate,
    report_id: str = Path(..., description="Report ID"),
    task_id: str = Path(..., description="Task ID"),
    lifecycle: ReportLifecycle = Depends(get_report_lifecycle)
):
    """Append an uncompleted checklist item (blank descriptions are rejected)."""
    report, _ = await lifecycle.add_checklist_item(report_id, task_id, item_data.description)
    return report


@router.patch("/{report_id}/tasks/{task_id}/checklist/{item_id}", response_model=DailyReport)
async def toggle_checklist_item(
    item_data: ChecklistItemUpdate,
    report_id: str = Path(..., description="Report ID"),
    task_id: str = Path(..., description="Task ID"),
    item_id: str = Path(..., description="Checklist item ID"),
    lifecycle: ReportLifecycle = Depends(get_report_lifecycle)
):
    return await lifecycle.toggle_checklist_item(report_id, task_id, item_id, item_data.completed)
