"""Public API for the order_desk package.

Only symbols imported here are considered part of the stable,
supported external interface.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

# ----------------------------------------------------------------------
# Config API
# ----------------------------------------------------------------------
from order_desk.core.config.desk_config import DeskConfig

# ----------------------------------------------------------------------
# Status transition policy
# ----------------------------------------------------------------------
from order_desk.core.domain.order_state_machine import (
    Recommendation,
    StatusOption,
    TransitionRule,
    TransitionVerdict,
    legal_next_states,
    recommended_next,
    status_options,
    transition_hint,
    validate,
)
from order_desk.core.domain.reject_reasons import RejectReason
from order_desk.core.domain.roles import normalize_role

# ----------------------------------------------------------------------
# Domain types
# ----------------------------------------------------------------------
from order_desk.core.domain.types import (
    STATUS_FILTER_ALL,
    Order,
    OrderHistoryEntry,
    OrderStatus,
    Product,
    Role,
    StatusUpdateResult,
)

# ----------------------------------------------------------------------
# Submission and collaborator boundary
# ----------------------------------------------------------------------
from order_desk.core.gate.status_change_gate import StatusChangeGate, SubmissionOutcome
from order_desk.core.ports.order_service import OrderService, OrderServiceError

# ----------------------------------------------------------------------
# Search
# ----------------------------------------------------------------------
from order_desk.core.search.order_filter import filter_orders
from order_desk.core.search.search_index import SearchIndex, build_index
from order_desk.core.view.orders_view import OrdersView

# ----------------------------------------------------------------------
# Public API definition
# ----------------------------------------------------------------------

__all__ = [
    # Search
    "SearchIndex",
    "build_index",
    "filter_orders",
    "OrdersView",

    # Status policy
    "TransitionRule",
    "TransitionVerdict",
    "Recommendation",
    "StatusOption",
    "legal_next_states",
    "recommended_next",
    "validate",
    "status_options",
    "transition_hint",
    "normalize_role",
    "RejectReason",

    # Submission
    "StatusChangeGate",
    "SubmissionOutcome",
    "OrderService",
    "OrderServiceError",

    # Domain types
    "Order",
    "OrderHistoryEntry",
    "OrderStatus",
    "Product",
    "Role",
    "StatusUpdateResult",
    "STATUS_FILTER_ALL",

    # Config
    "DeskConfig",

    # Version
    "__version__",
]

# ----------------------------------------------------------------------
# Package version
# ----------------------------------------------------------------------

try:
    __version__ = version("order-desk")
except PackageNotFoundError:
    __version__ = "0.0.0"
