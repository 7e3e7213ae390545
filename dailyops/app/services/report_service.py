"""
Daily Report Service.

Typed access to the daily-reports collection. ``update_report`` is a
shallow merge: a provided ``tasks`` list replaces the stored one entirely.
"""

import datetime as dt
from typing import Any, Callable, Dict, List, Optional, Tuple

from dailyops.app.db.document_store import DocumentStore
from dailyops.app.models.daily_report import DailyReport
from dailyops.app.schemas.daily_report import DailyReportCreate, DailyReportUpdate


class ReportService:

    def __init__(self, store: DocumentStore[DailyReport]):
        self.store = store

    async def list_reports(
        self,
        on_date: Optional[dt.date] = None,
        start: Optional[dt.date] = None,
        end: Optional[dt.date] = None,
    ) -> List[DailyReport]:
        """All reports, optionally limited to one date or an inclusive range."""
        def matches(report: DailyReport) -> bool:
            if on_date is not None and report.date != on_date:
                return False
            if start is not None and report.date < start:
                return False
            if end is not None and report.date > end:
                return False
            return True

        return await self.store.query(matches)

    async def list_by_user(self, user_id: str) -> List[DailyReport]:
        return await self.store.query(lambda report: report.user_id == user_id)

    async def get_report(self, report_id: str) -> Optional[DailyReport]:
        return await self.store.get(report_id)

    async def get_by_user_and_date(self, user_id: str, on_date: dt.date) -> Optional[DailyReport]:
        matches = await self.store.query(
            lambda report: report.user_id == user_id and report.date == on_date
        )
        return matches[0] if matches else None

    async def create_report(self, report_data: DailyReportCreate) -> DailyReport:
        return await self.store.insert(report_data.model_dump())

    async def update_report(self, report_id: str, report_data: DailyReportUpdate) -> Optional[DailyReport]:
        return await self.store.update(report_id, report_data.model_dump(exclude_unset=True))

    async def modify_report(
        self,
        report_id: str,
        mutate: Callable[[DailyReport], DailyReport],
    ) -> Optional[DailyReport]:
        """Apply ``mutate`` to one report atomically; None if it does not exist."""
        return await self.store.modify(report_id, mutate)

    async def get_or_create(
        self,
        user_id: str,
        on_date: dt.date,
        factory: Callable[[], Dict[str, Any]],
    ) -> Tuple[DailyReport, bool]:
        """Return the user's report for ``on_date``, creating it from ``factory`` if absent."""
        return await self.store.get_or_insert(
            lambda report: report.user_id == user_id and report.date == on_date,
            factory,
        )
