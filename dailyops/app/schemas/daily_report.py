"""
Daily report Pydantic schemas.

Defines request models for whole-report writes and for the per-task
lifecycle operations, and the report summary response.
"""

import datetime as dt
from pydantic import Field
from typing import Dict, List, Optional
from dailyops.app.models.base import CamelModel
from dailyops.app.models.daily_report import TaskProgress


class DailyReportCreate(CamelModel):
    """Schema for POST /api/daily-reports."""
    user_id: str = Field(..., min_length=1)
    date: dt.date
    completed: bool = False
    tasks: List[TaskProgress] = Field(default_factory=list)


class DailyReportUpdate(CamelModel):
    """
    Schema for PUT /api/daily-reports/{id}.

    A provided ``tasks`` list replaces the stored list entirely.
    """
    user_id: Optional[str] = Field(None, min_length=1)
    date: Optional[dt.date] = None
    completed: Optional[bool] = None
    tasks: Optional[List[TaskProgress]] = None


class TaskNotesUpdate(CamelModel):
    notes: Optional[str] = None


class ChecklistItemCreate(CamelModel):
    description: str = Field(..., max_length=1000)


class ChecklistItemUpdate(CamelModel):
    completed: bool


class TaskProgressSummary(CamelModel):
    task_id: str
    status: str
    required: bool
    checklist_total: int
    checklist_completed: int
    duration_seconds: Optional[float] = None


class DailyReportSummary(CamelModel):
    """Aggregated view of one report, as shown on the report details page."""
    report_id: str
    user_id: str
    date: dt.date
    completed: bool
    status_counts: Dict[str, int]
    required_outstanding: List[str]
    checklist_total: int
    checklist_completed: int
    tasks: List[TaskProgressSummary]
