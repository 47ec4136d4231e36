"""User-facing protein exchange endpoints."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING
from uuid import UUID

import httpx
from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status

from protein_exchange.api.models import (
    ApplyAllRequest,
    BulkSubmitRequest,
    MonthViewRequest,
    parse_month,
)
from protein_exchange.services.deadline import earliest_eligible_date
from protein_exchange.services.menu import EXCHANGE_VARIANT, MENU_VARIANTS

if TYPE_CHECKING:
    from protein_exchange.containers import AppContainer
    from protein_exchange.domain.exchanges import (
        ExchangeDecision,
        ExchangeRecord,
        MonthView,
        SubmissionResult,
    )
    from protein_exchange.domain.menu import MenuDay

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["exchanges"])


async def require_user(x_user_id: str | None = Header(default=None)) -> UUID:
    """Return the user id forwarded by the authenticating gateway."""
    if not x_user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    try:
        return UUID(x_user_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED) from exc


@router.get("/cardapio")
async def get_menu(
    request: Request,
    month: str = Query(...),
    variant: str = EXCHANGE_VARIANT,
) -> dict[str, object]:
    """Return the published menu of a month."""
    container: AppContainer = request.app.state.container
    month_start = _query_month(month)
    if variant not in MENU_VARIANTS:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Unknown variant: {variant}",
        )
    try:
        menu = await container.menu_service.get_month(month_start, variant)
    except httpx.HTTPError as exc:
        raise _feed_unavailable(exc) from exc
    return {"days": [_serialize_menu_day(menu[day]) for day in sorted(menu)]}


@router.get("/trocas-proteina/prazo")
async def get_deadline(request: Request) -> dict[str, object]:
    """Return the earliest date an exchange can be requested for."""
    container: AppContainer = request.app.state.container
    now = container.clock()
    service = container.exchange_service
    return {
        "now": now.isoformat(),
        "earliest_date": earliest_eligible_date(now, service.cutoff).isoformat(),
    }


@router.get("/trocas-proteina")
async def list_exchanges(
    request: Request,
    from_: date = Query(alias="from"),
    to: date = Query(...),
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Return the caller's saved exchanges between two dates."""
    container: AppContainer = request.app.state.container
    records = container.exchange_service.list_exchanges(user_id, from_, to)
    return {"trocas": [_serialize_record(record) for record in records]}


@router.post("/trocas-proteina/view")
async def month_view(
    body: MonthViewRequest,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Return the month table with saved and pending selections."""
    container: AppContainer = request.app.state.container
    pending = [item.to_record() for item in body.pending]
    try:
        view = await container.exchange_service.month_view(
            user_id, parse_month(body.month), pending
        )
    except httpx.HTTPError as exc:
        raise _feed_unavailable(exc) from exc
    return _serialize_month_view(view)


@router.post("/trocas-proteina/apply-all", dependencies=[Depends(require_user)])
async def apply_all(body: ApplyAllRequest, request: Request) -> dict[str, object]:
    """Return the selections that apply one protein to all eligible days."""
    container: AppContainer = request.app.state.container
    try:
        planned = await container.exchange_service.plan_bulk_apply(
            parse_month(body.month), body.protein
        )
    except httpx.HTTPError as exc:
        raise _feed_unavailable(exc) from exc
    return {
        "trocas": [_serialize_record(record) for record in planned],
        "applied": len(planned),
    }


@router.post("/trocas-proteina/bulk")
async def submit_bulk(
    body: BulkSubmitRequest,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Validate and store a batch of selections."""
    container: AppContainer = request.app.state.container
    pending = [item.to_record() for item in body.trocas]
    try:
        result = await container.exchange_service.submit(user_id, pending)
    except httpx.HTTPError as exc:
        raise _feed_unavailable(exc) from exc
    return _serialize_submission(result)


@router.get("/gamificacao/pontos")
async def get_points(
    request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Return the caller's accumulated points."""
    container: AppContainer = request.app.state.container
    return {"total_points": container.activity_service.total_points(user_id)}


def _query_month(value: str) -> date:
    try:
        return parse_month(value)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc


def _feed_unavailable(exc: Exception) -> HTTPException:
    logger.exception("Menu feed unavailable", extra={"error": str(exc)})
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY, detail="Menu feed unavailable"
    )


def _serialize_menu_day(menu_day: MenuDay) -> dict[str, object]:
    return {
        "data": menu_day.day.isoformat(),
        "proteina": menu_day.default_protein,
        "prato": menu_day.dish,
        "descricao": menu_day.description,
        "acompanhamentos": list(menu_day.sides),
        "sobremesa": menu_day.dessert,
    }


def _serialize_record(record: ExchangeRecord) -> dict[str, object]:
    return {
        "data": record.day.isoformat(),
        "proteina_original": record.original_protein,
        "proteina_nova": record.new_protein.value if record.new_protein else None,
    }


def _serialize_decision(decision: ExchangeDecision) -> dict[str, object]:
    return {
        "data": decision.day.isoformat(),
        "proteina_original": decision.original_protein,
        "proteina_efetiva": decision.effective_protein,
        "within_deadline": decision.within_deadline,
        "state": decision.state.value,
    }


def _serialize_month_view(view: MonthView) -> dict[str, object]:
    return {
        "month": view.month.strftime("%Y-%m"),
        "deadline_message": view.deadline_message,
        "summary": {
            "saved": view.summary.saved,
            "pending": view.summary.pending,
            "remaining": view.summary.remaining,
        },
        "rows": [_serialize_decision(row) for row in view.rows],
    }


def _serialize_submission(result: SubmissionResult) -> dict[str, object]:
    return {
        "inserted_count": result.inserted_count,
        "total_points_awarded": result.total_points_awarded,
        "rejected": [
            {"data": rejected.record.day.isoformat(), "reason": rejected.reason.value}
            for rejected in result.rejected
        ],
    }
