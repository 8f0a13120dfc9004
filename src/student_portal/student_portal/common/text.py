from __future__ import annotations

import unicodedata


def collation_key(value: str) -> tuple[str, str]:
    """Sort key approximating a locale-aware comparison.

    Accents and case are ignored at the first level ("émile" sorts with
    "emile", "bob" before "Carla"); the raw string breaks ties so the order
    stays total.
    """
    decomposed = unicodedata.normalize("NFKD", value)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), value
