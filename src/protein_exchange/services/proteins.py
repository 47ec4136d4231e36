"""Menu text to protein option mapping."""

from protein_exchange.domain.proteins import Protein

# Order matters: "frango frito" is chicken, not a fried egg.
_MARKERS: tuple[tuple[str, Protein], ...] = (
    ("frango", Protein.FRANGO),
    ("omelete", Protein.OMELETE),
    ("frito", Protein.OVO_FRITO),
    ("cozid", Protein.OVO_COZIDO),
)


def normalize_protein(raw: str | None) -> Protein | None:
    """Map free-form menu text to a protein option, or None if unrecognized."""
    text = (raw or "").strip().lower()
    if not text:
        return None
    for marker, protein in _MARKERS:
        if marker in text:
            return protein
    return None
