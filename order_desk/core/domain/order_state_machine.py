"""
Order status state machine with role-gated transitions.

This module defines the canonical order statuses, the static transition rule
table and the advisory checks built on top of it. It is intentionally
passive and validation-only: the order-service backend remains the source of
truth and may still reject a change approved here.

None of the functions below raise on bad input. Unknown statuses and role
strings are treated as "no edge" and "standard caller" respectively.
"""

from __future__ import annotations

from dataclasses import dataclass

from order_desk.core.domain.reject_reasons import RejectReason
from order_desk.core.domain.roles import normalize_role
from order_desk.core.domain.types import OrderStatus, Role

INITIAL_STATUS: OrderStatus = OrderStatus.ORDERED

# Terminal order statuses: no outgoing transitions.
ORDER_TERMINAL_STATES: frozenset[OrderStatus] = frozenset(
    {
        OrderStatus.DELIVERED,
        OrderStatus.CANCELLED,
    }
)


@dataclass(frozen=True, slots=True)
class TransitionRule:
    from_status: OrderStatus
    to_status: OrderStatus
    allowed_roles: frozenset[Role]


# Allowed status transitions.
#
# Notes:
# - This is the complete table; any pair not listed is illegal.
# - Each (from_status, role) pair has at most one legal successor.
TRANSITION_RULES: tuple[TransitionRule, ...] = (
    TransitionRule(
        OrderStatus.ORDERED,
        OrderStatus.SHIPPED,
        frozenset({Role.ELEVATED}),
    ),
    TransitionRule(
        OrderStatus.ORDERED,
        OrderStatus.CANCELLED,
        frozenset({Role.STANDARD}),
    ),
    TransitionRule(
        OrderStatus.SHIPPED,
        OrderStatus.DELIVERED,
        frozenset({Role.ELEVATED}),
    ),
)

# Successors shown to a role that cannot submit them. Standard callers
# looking at a shipped order still see DELIVERED, greyed out.
_DISABLED_RECOMMENDATIONS: dict[tuple[OrderStatus, Role], OrderStatus] = {
    (OrderStatus.SHIPPED, Role.STANDARD): OrderStatus.DELIVERED,
}

# Reaching these statuses changes stock upstream, so the catalog snapshot
# should be re-supplied afterwards.
_CATALOG_REFRESH_STATES: frozenset[OrderStatus] = frozenset({OrderStatus.CANCELLED})


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Recommendation:
    """Default target status for a selector.

    A recommendation is a presentation hint only. ``submittable=False``
    marks an option that is shown but can never be sent.
    """

    status: OrderStatus
    submittable: bool


@dataclass(frozen=True, slots=True)
class TransitionVerdict:
    reason: RejectReason | None = None

    @property
    def ok(self) -> bool:
        return self.reason is None


@dataclass(frozen=True, slots=True)
class StatusOption:
    status: OrderStatus
    label: str
    enabled: bool


ALLOWED = TransitionVerdict()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _as_status(value: OrderStatus | str | None) -> OrderStatus | None:
    if value is None:
        return None
    try:
        return OrderStatus(value)
    except ValueError:
        return None


def _rules_from(current: OrderStatus) -> list[TransitionRule]:
    return [rule for rule in TRANSITION_RULES if rule.from_status == current]


def _rule_for(current: OrderStatus, target: OrderStatus) -> TransitionRule | None:
    for rule in TRANSITION_RULES:
        if rule.from_status == current and rule.to_status == target:
            return rule
    return None


def _title(status: OrderStatus) -> str:
    return status.value.capitalize()


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def is_valid_status(status: OrderStatus | str) -> bool:
    """Return True if the given value names a known order status."""
    return _as_status(status) is not None


def is_terminal_state(status: OrderStatus | str) -> bool:
    """Return True if the given status is terminal."""
    return _as_status(status) in ORDER_TERMINAL_STATES


def requires_catalog_refresh(status: OrderStatus | str) -> bool:
    """Return True if moving an order into ``status`` changes catalog stock."""
    return _as_status(status) in _CATALOG_REFRESH_STATES


def legal_next_states(current: OrderStatus | str, role: Role | str | None) -> list[OrderStatus]:
    """Return the statuses ``role`` may move an order in ``current`` to."""
    status = _as_status(current)
    if status is None:
        return []
    caller = normalize_role(role)
    return [rule.to_status for rule in _rules_from(status) if caller in rule.allowed_roles]


def recommended_next(current: OrderStatus | str, role: Role | str | None) -> Recommendation | None:
    """Return the default target to pre-select for ``(current, role)``.

    Must not be used as an authorization signal: always ``validate`` before
    submitting.
    """
    legal = legal_next_states(current, role)
    if legal:
        return Recommendation(status=legal[0], submittable=True)

    status = _as_status(current)
    if status is None:
        return None
    disabled = _DISABLED_RECOMMENDATIONS.get((status, normalize_role(role)))
    if disabled is not None:
        return Recommendation(status=disabled, submittable=False)
    return None


def validate(
    current: OrderStatus | str,
    target: OrderStatus | str,
    role: Role | str | None,
) -> TransitionVerdict:
    """Check a proposed transition before it is submitted.

    Reasons are checked in order: terminal current status, then a missing
    edge, then an edge reserved for another role.
    """
    cur = _as_status(current)
    if cur in ORDER_TERMINAL_STATES:
        return TransitionVerdict(RejectReason.TERMINAL_STATE)

    tgt = _as_status(target)
    if cur is None or tgt is None:
        return TransitionVerdict(RejectReason.INVALID_TRANSITION)

    rule = _rule_for(cur, tgt)
    if rule is None:
        return TransitionVerdict(RejectReason.INVALID_TRANSITION)

    if normalize_role(role) not in rule.allowed_roles:
        return TransitionVerdict(RejectReason.ROLE_FORBIDDEN)

    return ALLOWED


# ---------------------------------------------------------------------------
# Selector presentation
# ---------------------------------------------------------------------------


def status_options(current: OrderStatus | str | None, role: Role | str | None) -> list[StatusOption]:
    """Build the entries of the "new status" selector.

    An order whose status is unknown is presented as freshly ORDERED.
    Terminal orders get a single disabled entry naming their final state;
    elevated callers see the raw status code there, others the display name.
    """
    status = _as_status(current) or INITIAL_STATUS

    if status in ORDER_TERMINAL_STATES:
        name = status if normalize_role(role) is Role.ELEVATED else _title(status)
        return [
            StatusOption(
                status=status,
                label=f"{name} (Final state - no transitions)",
                enabled=False,
            )
        ]

    options = [
        StatusOption(
            status=target,
            label=f"{_title(target)} ({status} → {target})",
            enabled=True,
        )
        for target in legal_next_states(status, role)
    ]

    recommendation = recommended_next(status, role)
    if recommendation is not None and not recommendation.submittable:
        target = recommendation.status
        options.append(
            StatusOption(
                status=target,
                label=f"{_title(target)} ({status} → {target}) - Admin only",
                enabled=False,
            )
        )

    return options


def transition_hint(current: OrderStatus | str | None, role: Role | str | None) -> str:
    """Return the helper text displayed under the status selector."""
    status = _as_status(current) or INITIAL_STATUS
    caller = normalize_role(role)
    prefix = "Admin" if caller is Role.ELEVATED else "Current"

    if status in ORDER_TERMINAL_STATES:
        return f"{prefix}: {status} → Final state (no transitions allowed)"

    segments: list[str] = []
    legal = legal_next_states(status, caller)
    if legal == [OrderStatus.CANCELLED]:
        segments.append(f"Can only cancel ({OrderStatus.CANCELLED})")
    elif legal:
        segments.append(f"Can update to: {', '.join(legal)} only")
    else:
        segments.append("Cannot be changed")

    restricted = [
        rule.to_status
        for rule in _rules_from(status)
        if caller not in rule.allowed_roles and Role.ELEVATED in rule.allowed_roles
    ]
    if restricted:
        segments.append(f"Only admin can update to {', '.join(restricted)}")

    return f"{prefix}: {status} → " + ". ".join(segments)
