"""Protein exchange service."""

import calendar
import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import date, datetime, time
from typing import Protocol
from uuid import UUID

import httpx
from postgrest.exceptions import APIError

from protein_exchange.domain.exchanges import (
    ExchangeRecord,
    ExchangeState,
    MonthSummary,
    MonthView,
    RejectedRecord,
    RejectionReason,
    SubmissionResult,
    UpsertResult,
)
from protein_exchange.domain.menu import Menu
from protein_exchange.domain.proteins import Protein
from protein_exchange.services.activities import ActivityService
from protein_exchange.services.deadline import DEFAULT_CUTOFF, deadline_message
from protein_exchange.services.exchange_rules import (
    build_submission_batch,
    plan_bulk_apply,
    resolve_day,
)
from protein_exchange.services.menu import MenuService

logger = logging.getLogger(__name__)


class ExchangeRepository(Protocol):
    """Persistence interface for a user's exchanges."""

    def list_exchanges(
        self, user_id: UUID, start: date, end: date
    ) -> list[ExchangeRecord]:
        """Return the user's exchanges between start and end, inclusive."""

    def upsert_exchanges(
        self, user_id: UUID, records: list[ExchangeRecord]
    ) -> UpsertResult:
        """Insert or replace exchanges keyed by (user, date)."""


@dataclass
class ExchangeService:
    """Service that applies exchange rules against the menu and the store."""

    menu_service: MenuService
    repository: ExchangeRepository
    activity_service: ActivityService
    clock: Callable[[], datetime]
    cutoff: time = DEFAULT_CUTOFF

    async def month_view(
        self, user_id: UUID, month: date, pending: list[ExchangeRecord]
    ) -> MonthView:
        """Return the rows of the month with saved and pending selections."""
        now = self.clock()
        menu = await self.menu_service.get_month(month)
        start, end = month_bounds(month)
        existing = {
            record.day: record
            for record in self.repository.list_exchanges(user_id, start, end)
        }
        pending_by_day = {record.day: record for record in pending}
        rows = []
        for day in sorted(menu):
            decision = resolve_day(
                day,
                menu,
                existing.get(day),
                pending_by_day.get(day),
                now,
                self.cutoff,
            )
            if decision is not None:
                rows.append(decision)
        summary = MonthSummary(
            saved=sum(1 for row in rows if row.state is ExchangeState.SAVED),
            pending=sum(1 for row in rows if row.state is ExchangeState.PENDING),
            remaining=sum(1 for row in rows if row.state is ExchangeState.NONE),
        )
        return MonthView(
            month=start,
            rows=rows,
            summary=summary,
            deadline_message=deadline_message(now, self.cutoff),
        )

    async def plan_bulk_apply(
        self, month: date, target: Protein
    ) -> list[ExchangeRecord]:
        """Return pending selections applying target to the month's eligible days."""
        now = self.clock()
        menu = await self.menu_service.get_month(month)
        planned = plan_bulk_apply(target, menu.values(), now, self.cutoff)
        return list(planned.values())

    async def submit(
        self, user_id: UUID, pending: list[ExchangeRecord]
    ) -> SubmissionResult:
        """Validate, persist and reward a batch of pending selections."""
        now = self.clock()
        known, missing = await self._attach_menu(pending)
        batch = build_submission_batch(known, now, self.cutoff)
        rejected = missing + batch.rejected
        if not batch.accepted:
            return SubmissionResult(
                inserted_count=0, total_points_awarded=0, rejected=rejected
            )

        result = self.repository.upsert_exchanges(user_id, batch.accepted)
        rejected += [
            RejectedRecord(record=record, reason=RejectionReason.STORE_ERROR)
            for record in result.failed
        ]
        try:
            points = self.activity_service.record_exchanges(user_id, result.stored)
        except (APIError, httpx.HTTPError):
            logger.exception(
                "Failed to award exchange points",
                extra={"user_id": str(user_id), "stored": len(result.stored)},
            )
            points = 0
        logger.info(
            "Stored protein exchanges",
            extra={
                "user_id": str(user_id),
                "stored": len(result.stored),
                "rejected": len(rejected),
            },
        )
        return SubmissionResult(
            inserted_count=len(result.stored),
            total_points_awarded=points,
            rejected=rejected,
        )

    def list_exchanges(
        self, user_id: UUID, start: date, end: date
    ) -> list[ExchangeRecord]:
        """Return persisted exchanges of a user."""
        return self.repository.list_exchanges(user_id, start, end)

    async def _attach_menu(
        self, pending: list[ExchangeRecord]
    ) -> tuple[list[ExchangeRecord], list[RejectedRecord]]:
        """Replace client-sent originals with the menu's default protein."""
        menus: dict[tuple[int, int], Menu] = {}
        known: list[ExchangeRecord] = []
        missing: list[RejectedRecord] = []
        for record in pending:
            key = (record.day.year, record.day.month)
            if key not in menus:
                menus[key] = await self.menu_service.get_month(record.day)
            menu_day = menus[key].get(record.day)
            if menu_day is None:
                missing.append(
                    RejectedRecord(
                        record=record, reason=RejectionReason.NO_MENU_FOR_DATE
                    )
                )
                continue
            known.append(replace(record, original_protein=menu_day.default_protein))
        return known, missing


def month_bounds(month: date) -> tuple[date, date]:
    """Return the first and last day of the month containing ``month``."""
    last = calendar.monthrange(month.year, month.month)[1]
    return month.replace(day=1), month.replace(day=last)
