"""Text normalisation shared by the resolver, search and snippet filters."""

from __future__ import annotations

import unicodedata


def _strip_marks(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalise(value: object) -> str:
    """Return the comparison form of a free-text string.

    Case-folds, drops diacritics and trims surrounding whitespace, so
    ``"Botón"``, ``"BOTÓN"`` and ``" boton "`` all become ``"boton"``.
    Anything that is not a string normalises to ``""``.
    """
    if not isinstance(value, str) or not value:
        return ""
    # Fold before and after decomposition: some code points only reveal
    # their uppercase or combining parts once decomposed (e.g. "İ", "ℌ").
    folded = _strip_marks(value.casefold()).casefold()
    return folded.strip()
