"""
Daily report record with its embedded task progress and checklist items.
"""

import datetime as dt
from typing import List, Optional
from pydantic import Field
from dailyops.app.models.base import CamelModel, Record
from dailyops.app.models.enums import TaskProgressStatus


class ChecklistItem(CamelModel):
    """Manager-authored sub-step of one task progress entry."""
    id: str
    task_id: str
    description: str
    completed: bool = False
    timestamp: dt.datetime


class TaskProgress(CamelModel):
    """Per-report state of one check. Owned by its report."""
    task_id: str
    status: TaskProgressStatus = TaskProgressStatus.NOT_STARTED
    start_time: Optional[dt.datetime] = None
    end_time: Optional[dt.datetime] = None
    checklist_items: List[ChecklistItem] = Field(default_factory=list)
    notes: Optional[str] = None


class DailyReport(Record):
    """
    One manager's progress through the checks of one calendar day.

    At most one report exists per (user_id, date).
    """
    user_id: str
    date: dt.date
    completed: bool = False
    tasks: List[TaskProgress] = Field(default_factory=list)

    def find_task(self, task_id: str) -> Optional[TaskProgress]:
        for progress in self.tasks:
            if progress.task_id == task_id:
                return progress
        return None

    def __repr__(self):
        return f"<DailyReport(id={self.id}, user_id={self.user_id}, date={self.date}, completed={self.completed})>"
