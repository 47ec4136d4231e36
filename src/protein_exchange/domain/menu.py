"""Domain models for the cafeteria menu."""

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class MenuDay:
    """A calendar date with a published default protein."""

    day: date
    default_protein: str
    dish: str | None = None
    description: str | None = None
    sides: tuple[str, ...] = field(default_factory=tuple)
    dessert: str | None = None


Menu = dict[date, MenuDay]
