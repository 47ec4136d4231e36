"""Protein options offered by the cafeteria."""

from enum import Enum


class Protein(str, Enum):
    """Proteins a menu day can be exchanged to."""

    FRANGO = "Frango"
    OMELETE = "Omelete"
    OVO_FRITO = "Ovo frito"
    OVO_COZIDO = "Ovo cozido"

    @classmethod
    def from_label(cls, label: str | None) -> "Protein | None":
        """Return the option with this exact label, or None."""
        if not label:
            return None
        for option in cls:
            if option.value == label.strip():
                return option
        return None
