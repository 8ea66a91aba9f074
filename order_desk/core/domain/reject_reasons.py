"""Reject reason codes for status change decisions."""

from __future__ import annotations

from enum import StrEnum


class RejectReason(StrEnum):
    """Why a proposed status change was not (or could not be) applied.

    The first three are produced by local validation. The remaining codes are
    only produced by the submission gate.
    """

    TERMINAL_STATE = "TERMINAL_STATE"
    ROLE_FORBIDDEN = "ROLE_FORBIDDEN"
    INVALID_TRANSITION = "INVALID_TRANSITION"

    REQUEST_IN_FLIGHT = "REQUEST_IN_FLIGHT"
    SERVICE_ERROR = "SERVICE_ERROR"


VALIDATION_REASONS: frozenset[RejectReason] = frozenset(
    {
        RejectReason.TERMINAL_STATE,
        RejectReason.ROLE_FORBIDDEN,
        RejectReason.INVALID_TRANSITION,
    }
)
