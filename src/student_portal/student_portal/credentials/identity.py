from __future__ import annotations

import re
from typing import Any, Optional

# Hyphen, en dash (U+2013) or em dash (U+2014) after the code.
_CODE_WITH_SEPARATOR = re.compile(r"^([A-Za-z]\d{2,})\s*[-–—]\s*", re.ASCII)
_LEADING_CODE = re.compile(r"^([A-Za-z]\d{2,})\b", re.ASCII)


def extract_identity_token(display_text: Any) -> Optional[str]:
    """Leading letter+digits code of a display name ("S022 - Jane Doe" -> "S022").

    Best-effort structural parse; returns None when no code can be found.
    """
    if not isinstance(display_text, str):
        return None
    m = _CODE_WITH_SEPARATOR.match(display_text)
    if m:
        return m.group(1)
    m = _LEADING_CODE.match(display_text)
    if m:
        return m.group(1)
    return None


def resolve_identity_token(display_text: Any, fallback: Any = None) -> Optional[str]:
    """Extracted token, else the explicit identifier field, else None."""
    token = extract_identity_token(display_text)
    if token:
        return token
    if fallback is None or isinstance(fallback, bool):
        return None
    text = str(fallback).strip()
    return text or None
