"""Exchange deadline rules."""

from datetime import date, datetime, time, timedelta

DEFAULT_CUTOFF = time(hour=16)


def is_past_cutoff(now: datetime, cutoff: time = DEFAULT_CUTOFF) -> bool:
    """Return True when now is at or after today's cutoff."""
    return now.time() >= cutoff


def earliest_eligible_date(now: datetime, cutoff: time = DEFAULT_CUTOFF) -> date:
    """Return the first date an exchange may still be requested for.

    ``now`` must already be expressed in the cafeteria's local time. Before the
    cutoff the earliest date is tomorrow; from the cutoff on (inclusive) it is
    the day after tomorrow.
    """
    days_ahead = 2 if is_past_cutoff(now, cutoff) else 1
    return now.date() + timedelta(days=days_ahead)


def is_within_deadline(
    now: datetime, target_date: date, cutoff: time = DEFAULT_CUTOFF
) -> bool:
    """Return True when an exchange for target_date may still be submitted."""
    return target_date >= earliest_eligible_date(now, cutoff)


def deadline_message(now: datetime, cutoff: time = DEFAULT_CUTOFF) -> str:
    """Return the banner text describing the rule currently in force."""
    today = now.strftime("%d/%m/%Y")
    clock = now.strftime("%H:%M")
    limit = cutoff.strftime("%H:%M")
    if is_past_cutoff(now, cutoff):
        return (
            f"Hoje {today} às {clock} - Após {limit}: só é possível trocar "
            "proteínas para depois de amanhã"
        )
    return (
        f"Hoje {today} às {clock} - Antes das {limit}: é possível trocar "
        "proteínas para amanhã em diante"
    )
