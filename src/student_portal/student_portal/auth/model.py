from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthResult:
    """What a successful student login returns."""

    alias: str
    identity_token: str
    staff_override: bool = False
