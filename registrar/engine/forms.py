"""
registrar.engine.forms — Form Parsers
=======================================

Two pure functions that pull structured fields out of raw message text.
Neither raises: a text that does not match the expected shape yields
``None``.

Registration form (registration channel)::

    Name: <text>, Age: <text>

Labels are matched, not positions, so ``Age: 30, Name: Alice`` is accepted
as well.  Exactly one comma is allowed and both labels must be present.

Manual-review form (manual channel)::

    Manual: <text>
"""

from __future__ import annotations

from registrar.constants import AGE_LABEL, MANUAL_LABEL, NAME_LABEL

__all__ = ["parse_registration", "parse_manual_review"]

_REGISTRATION_LABELS = (NAME_LABEL, AGE_LABEL)


def _split_labelled(segment: str) -> tuple[str, str] | None:
    """Return ``(label, value)`` if *segment* starts with a known label."""
    segment = segment.strip()
    for label in _REGISTRATION_LABELS:
        if segment.startswith(label):
            return label, segment[len(label):].strip()
    return None


def parse_registration(text: str) -> tuple[str, str] | None:
    """Parse ``"Name: <name>, Age: <age>"`` into ``(name, age)``.

    Returns ``None`` when the text does not split into exactly two
    comma-separated segments, when a segment lacks a label, when a label
    appears twice, or when either value is empty.  Age is free text.

    >>> parse_registration("Name: Alice, Age: 30")
    ('Alice', '30')
    >>> parse_registration("Name: Alice, Age: 30, Extra: x") is None
    True
    """
    segments = text.split(",")
    if len(segments) != 2:
        return None

    fields: dict[str, str] = {}
    for segment in segments:
        parsed = _split_labelled(segment)
        if parsed is None:
            return None
        label, value = parsed
        if label in fields or not value:
            return None
        fields[label] = value

    return fields[NAME_LABEL], fields[AGE_LABEL]


def parse_manual_review(text: str) -> str | None:
    """Return the trimmed application text after ``Manual:``, or ``None``.

    The label is case-sensitive and must open the message.
    """
    if not text.startswith(MANUAL_LABEL):
        return None
    data = text[len(MANUAL_LABEL):].strip()
    return data or None
