"""
Daily report lifecycle.

Owns the semantics of a report: the per-task status machine, checklist
items, notes, and report completion/reopening.

Task progress moves forward only, and only on an explicit action:

    not_started --(start)--> in_progress --(complete)--> completed

Starting stamps ``startTime``, completing stamps ``endTime``. Notes and
checklist items can be changed in any status, and a report can be
completed with any subset of its tasks done; it can be reopened and
completed again any number of times.
"""

import datetime as dt
import logging
from typing import Callable, Dict, Tuple

from dailyops.app.core.exceptions import (
    InvalidTransitionError,
    ResourceNotFoundError,
    ValidationFailureError,
)
from dailyops.app.core.identity import new_id
from dailyops.app.models.daily_report import ChecklistItem, DailyReport, TaskProgress
from dailyops.app.models.enums import TaskProgressStatus
from dailyops.app.schemas.daily_report import DailyReportSummary, TaskProgressSummary
from dailyops.app.services.report_service import ReportService
from dailyops.app.services.task_service import TaskService
from dailyops.app.services.user_service import UserService

logger = logging.getLogger("dailyops.reports")

NEXT_STATUS: Dict[TaskProgressStatus, TaskProgressStatus] = {
    TaskProgressStatus.NOT_STARTED: TaskProgressStatus.IN_PROGRESS,
    TaskProgressStatus.IN_PROGRESS: TaskProgressStatus.COMPLETED,
}


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def as_utc(value: dt.datetime) -> dt.datetime:
    """Naive timestamps written by clients are taken as UTC."""
    return value if value.tzinfo else value.replace(tzinfo=dt.timezone.utc)


def advance(progress: TaskProgress, target: TaskProgressStatus) -> TaskProgress:
    """
    Move ``progress`` to ``target`` and stamp the matching timestamp.

    Raises:
        InvalidTransitionError: If ``target`` is not the next status
    """
    if NEXT_STATUS.get(progress.status) != target:
        raise InvalidTransitionError(progress.task_id, progress.status.value, target.value)

    progress.status = target
    if target == TaskProgressStatus.IN_PROGRESS:
        progress.start_time = utcnow()
    else:
        progress.end_time = utcnow()
    return progress


class ReportLifecycle:

    def __init__(self, reports: ReportService, tasks: TaskService, users: UserService):
        self.reports = reports
        self.tasks = tasks
        self.users = users

    async def get_or_create_for_date(self, user_id: str, on_date: dt.date) -> Tuple[DailyReport, bool]:
        """
        Return ``(report, created)`` for the user's report on ``on_date``.

        A new report gets one ``not_started`` entry per task defined right
        now, in task order. Tasks added later never appear on it.

        Raises:
            ResourceNotFoundError: If the user does not exist
        """
        if await self.users.get_user(user_id) is None:
            raise ResourceNotFoundError("User", user_id)

        tasks = await self.tasks.list_tasks(ordered=True)

        def new_report():
            return {
                "user_id": user_id,
                "date": on_date,
                "completed": False,
                "tasks": [
                    {"task_id": task.id, "status": TaskProgressStatus.NOT_STARTED, "checklist_items": []}
                    for task in tasks
                ],
            }

        report, created = await self.reports.get_or_create(user_id, on_date, new_report)
        if created:
            logger.info("Created report %s for user %s on %s with %d task(s)",
                        report.id, user_id, on_date, len(report.tasks))
        return report, created

    async def _modify(self, report_id: str, mutate: Callable[[DailyReport], DailyReport]) -> DailyReport:
        report = await self.reports.modify_report(report_id, mutate)
        if report is None:
            raise ResourceNotFoundError("Daily report", report_id)
        return report

    async def update_task_progress(
        self,
        report_id: str,
        task_id: str,
        mutation: Callable[[TaskProgress], TaskProgress],
    ) -> DailyReport:
        """
        Replace one task's progress with ``mutation(progress)`` and persist the report.

        Raises:
            ResourceNotFoundError: If the report or the task entry does not exist
        """
        def apply(report: DailyReport) -> DailyReport:
            progress = report.find_task(task_id)
            if progress is None:
                raise ResourceNotFoundError("Task progress", task_id)
            index = next(i for i, entry in enumerate(report.tasks) if entry is progress)
            report.tasks[index] = mutation(progress)
            return report

        return await self._modify(report_id, apply)

    async def start_task(self, report_id: str, task_id: str) -> DailyReport:
        report = await self.update_task_progress(
            report_id, task_id, lambda progress: advance(progress, TaskProgressStatus.IN_PROGRESS)
        )
        logger.info("Task %s started on report %s", task_id, report_id)
        return report

    async def complete_task(self, report_id: str, task_id: str) -> DailyReport:
        report = await self.update_task_progress(
            report_id, task_id, lambda progress: advance(progress, TaskProgressStatus.COMPLETED)
        )
        logger.info("Task %s completed on report %s", task_id, report_id)
        return report

    async def save_notes(self, report_id: str, task_id: str, notes: str) -> DailyReport:
        def set_notes(progress: TaskProgress) -> TaskProgress:
            progress.notes = notes
            return progress

        return await self.update_task_progress(report_id, task_id, set_notes)

    async def add_checklist_item(self, report_id: str, task_id: str, description: str) -> Tuple[DailyReport, ChecklistItem]:
        """
        Append an uncompleted checklist item to a task.

        Raises:
            ValidationFailureError: If the description is blank
        """
        description = (description or "").strip()
        if not description:
            raise ValidationFailureError("Checklist item description is required", field="description")

        item = ChecklistItem(
            id=new_id(),
            task_id=task_id,
            description=description,
            completed=False,
            timestamp=utcnow(),
        )

        def append(progress: TaskProgress) -> TaskProgress:
            progress.checklist_items.append(item)
            return progress

        report = await self.update_task_progress(report_id, task_id, append)
        return report, item

    async def toggle_checklist_item(self, report_id: str, task_id: str, item_id: str, completed: bool) -> DailyReport:
        def toggle(progress: TaskProgress) -> TaskProgress:
            for item in progress.checklist_items:
                if item.id == item_id:
                    item.completed = completed
                    return progress
            raise ResourceNotFoundError("Checklist item", item_id)

        return await self.update_task_progress(report_id, task_id, toggle)

    async def _set_completed(self, report_id: str, completed: bool) -> DailyReport:
        def apply(report: DailyReport) -> DailyReport:
            report.completed = completed
            return report

        return await self._modify(report_id, apply)

    async def complete_report(self, report_id: str) -> DailyReport:
        """Submit the report. Unfinished tasks, required or not, do not block it."""
        report = await self._set_completed(report_id, True)
        logger.info("Report %s submitted", report_id)
        return report

    async def reopen_report(self, report_id: str) -> DailyReport:
        report = await self._set_completed(report_id, False)
        logger.info("Report %s reopened", report_id)
        return report

    async def summarize(self, report: DailyReport) -> DailyReportSummary:
        """Status counts, outstanding required tasks, checklist totals and durations."""
        required = {task.id: task.required for task in await self.tasks.list_tasks()}
        status_counts = {status.value: 0 for status in TaskProgressStatus}
        task_summaries = []
        outstanding = []

        for progress in report.tasks:
            status_counts[progress.status.value] += 1
            is_required = required.get(progress.task_id, False)
            if is_required and progress.status != TaskProgressStatus.COMPLETED:
                outstanding.append(progress.task_id)

            duration = None
            if progress.start_time and progress.end_time:
                duration = (as_utc(progress.end_time) - as_utc(progress.start_time)).total_seconds()

            task_summaries.append(TaskProgressSummary(
                task_id=progress.task_id,
                status=progress.status.value,
                required=is_required,
                checklist_total=len(progress.checklist_items),
                checklist_completed=sum(1 for item in progress.checklist_items if item.completed),
                duration_seconds=duration,
            ))

        return DailyReportSummary(
            report_id=report.id,
            user_id=report.user_id,
            date=report.date,
            completed=report.completed,
            status_counts=status_counts,
            required_outstanding=outstanding,
            checklist_total=sum(summary.checklist_total for summary in task_summaries),
            checklist_completed=sum(summary.checklist_completed for summary in task_summaries),
            tasks=task_summaries,
        )
