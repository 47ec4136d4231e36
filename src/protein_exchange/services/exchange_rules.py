"""Pure decision rules for protein exchanges.

Every function here works on explicit arguments and a single ``now`` sample
taken by the caller, so one rendering or submission pass never straddles the
cutoff.
"""

from collections.abc import Iterable, Mapping
from datetime import date, datetime, time

from protein_exchange.domain.exchanges import (
    ExchangeDecision,
    ExchangeRecord,
    ExchangeState,
    RejectedRecord,
    RejectionReason,
    SubmissionBatch,
)
from protein_exchange.domain.menu import MenuDay
from protein_exchange.domain.proteins import Protein
from protein_exchange.services.deadline import DEFAULT_CUTOFF, is_within_deadline
from protein_exchange.services.proteins import normalize_protein


def resolve_day(  # noqa: PLR0913
    day: date,
    menu: Mapping[date, MenuDay],
    existing: ExchangeRecord | None,
    pending: ExchangeRecord | None,
    now: datetime,
    cutoff: time = DEFAULT_CUTOFF,
) -> ExchangeDecision | None:
    """Return the decision for one date, or None when it has no menu."""
    menu_day = menu.get(day)
    if menu_day is None:
        return None
    original = menu_day.default_protein
    if pending is not None and _is_no_op(pending.new_protein, original):
        pending = None
    if existing is not None and existing.new_protein is None:
        existing = None

    if pending is not None:
        effective = pending.new_protein.value
    elif existing is not None:
        effective = existing.new_protein.value
    else:
        effective = original

    if pending is not None and (
        existing is None or pending.new_protein != existing.new_protein
    ):
        state = ExchangeState.PENDING
    elif existing is not None:
        state = ExchangeState.SAVED
    else:
        state = ExchangeState.NONE

    return ExchangeDecision(
        day=day,
        original_protein=original,
        within_deadline=is_within_deadline(now, day, cutoff),
        effective_protein=effective,
        state=state,
    )


def plan_bulk_apply(
    target: Protein,
    menu: Iterable[MenuDay],
    now: datetime,
    cutoff: time = DEFAULT_CUTOFF,
) -> dict[date, ExchangeRecord]:
    """Return pending selections applying target to every eligible menu day.

    Existing records play no part: eligibility depends only on the deadline
    and on whether the day's default already is the target.
    """
    planned: dict[date, ExchangeRecord] = {}
    for menu_day in sorted(menu, key=lambda entry: entry.day):
        if not is_within_deadline(now, menu_day.day, cutoff):
            continue
        if normalize_protein(menu_day.default_protein) == target:
            continue
        planned[menu_day.day] = ExchangeRecord(
            day=menu_day.day,
            original_protein=menu_day.default_protein,
            new_protein=target,
        )
    return planned


def build_submission_batch(
    pending: Iterable[ExchangeRecord],
    now: datetime,
    cutoff: time = DEFAULT_CUTOFF,
) -> SubmissionBatch:
    """Split pending records into submittable ones and rejections.

    Accepted records are unique per date; a later record for the same date
    replaces an earlier one, and a later rejected record withdraws it.
    """
    accepted: dict[date, ExchangeRecord] = {}
    rejected: list[RejectedRecord] = []
    for record in pending:
        reason = _rejection_reason(record, now, cutoff)
        if reason is not None:
            rejected.append(RejectedRecord(record=record, reason=reason))
            accepted.pop(record.day, None)
            continue
        accepted[record.day] = record
    return SubmissionBatch(accepted=list(accepted.values()), rejected=rejected)


def _rejection_reason(
    record: ExchangeRecord, now: datetime, cutoff: time
) -> RejectionReason | None:
    if record.new_protein is None:
        return RejectionReason.UNRECOGNIZED_PROTEIN
    if not record.original_protein.strip():
        return RejectionReason.MISSING_ORIGINAL
    if _is_no_op(record.new_protein, record.original_protein):
        return RejectionReason.NO_OP_SELECTION
    if not is_within_deadline(now, record.day, cutoff):
        return RejectionReason.DEADLINE_EXPIRED
    return None


def _is_no_op(new_protein: Protein | None, original: str) -> bool:
    if new_protein is None:
        return True
    return (
        new_protein.value == original.strip()
        or normalize_protein(original) == new_protein
    )
