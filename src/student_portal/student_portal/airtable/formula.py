"""Builders for Airtable filter formulas."""

from __future__ import annotations


def quote(value: str) -> str:
    escaped = str(value).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def field_equals(field_name: str, value: str) -> str:
    return f"{{{field_name}}}={quote(value)}"


def field_contains(field_name: str, text: str) -> str:
    return f"FIND({quote(text)}, {{{field_name}}})"
