from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from order_desk.adapters.in_memory_service import InMemoryOrderService
from order_desk.core.config.desk_config import DeskConfig
from order_desk.core.domain.order_state_machine import (
    recommended_next,
    status_options,
    transition_hint,
)
from order_desk.core.domain.roles import normalize_role
from order_desk.core.domain.types import STATUS_FILTER_ALL
from order_desk.core.events.event_bus import EventBus
from order_desk.core.events.sinks.file_recorder import FileRecorderSink
from order_desk.core.events.sinks.sink_logging import LoggingEventSink
from order_desk.core.events.sinks.sink_metrics import MetricsEventSink
from order_desk.core.gate.status_change_gate import StatusChangeGate
from order_desk.core.view.orders_view import OrdersView
from order_desk.runtime.prometheus_metrics import PrometheusMetricsClient

if TYPE_CHECKING:
    from order_desk.core.domain.types import Order

LOGGER = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _load_json(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(path)
    return json.loads(path.read_text(encoding="utf-8"))


def _build_event_bus(audit_log: Path | None) -> EventBus:
    bus = EventBus([LoggingEventSink(logging.getLogger("order_desk.events"), logging.DEBUG)])
    if audit_log is not None:
        bus.register(FileRecorderSink(audit_log))
    metrics = PrometheusMetricsClient()
    if metrics.is_enabled():
        bus.register(MetricsEventSink(metrics))
    return bus


def _format_order(order: Order, view: OrdersView) -> str:
    product = view.product_for(order)
    product_label = product.name if product is not None else order.product_id
    return f"{order.id}\t{order.current_status}\t{product_label}"


def _require_order(view: OrdersView, order_id: str) -> Order:
    order = view.find_order(order_id)
    if order is None:
        print(f"Error: order {order_id} not found in snapshot.", file=sys.stderr)
        sys.exit(2)
    return order


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _cmd_search(args: argparse.Namespace, view: OrdersView) -> int:
    visible = view.visible_orders(args.status, args.query)
    for order in visible:
        print(_format_order(order, view))
    print(f"{len(visible)} of {len(view.orders)} orders")
    return 0


def _cmd_transitions(args: argparse.Namespace, view: OrdersView, cfg: DeskConfig) -> int:
    order = _require_order(view, args.order_id)
    role = normalize_role(args.role, cfg.elevated_roles)

    print(_format_order(order, view))
    for option in status_options(order.current_status, role):
        marker = " " if option.enabled else "x"
        print(f"  [{marker}] {option.label}")

    recommendation = recommended_next(order.current_status, role)
    if recommendation is not None:
        state = "submittable" if recommendation.submittable else "disabled"
        print(f"Recommended: {recommendation.status} ({state})")
    print(transition_hint(order.current_status, role))
    return 0


def _cmd_submit(
    args: argparse.Namespace,
    view: OrdersView,
    cfg: DeskConfig,
    service: InMemoryOrderService,
    bus: EventBus,
) -> int:
    order = _require_order(view, args.order_id)
    gate = StatusChangeGate(order_service=service, event_bus=bus, config=cfg)

    outcome = gate.submit(order, args.target, args.role)
    if not outcome.ok:
        print(f"Error: {outcome.message}", file=sys.stderr)
        return 1

    print(outcome.message)
    view.refresh(service)
    for entry in view.history(service, order.id):
        print(f"  {entry.updated_at.isoformat()}  {entry.previous_status} -> {entry.new_status}")
    if outcome.catalog_refresh_required:
        print("Catalog changed; products reloaded.")
    return 0


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="order-desk",
        description="Search orders and check status changes against a JSON snapshot.",
    )

    parser.add_argument(
        "--snapshot",
        type=Path,
        required=True,
        help='JSON file with "orders", "products" and optional "history".',
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Optional DeskConfig JSON file.",
    )
    parser.add_argument(
        "--audit-log",
        type=Path,
        default=None,
        help="Append domain events as JSON lines to this file.",
    )
    parser.add_argument("--log-level", default="WARNING")

    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Filter orders by status and text query.")
    search.add_argument("--status", default=STATUS_FILTER_ALL)
    search.add_argument("--query", default="")

    transitions = sub.add_parser("transitions", help="Show status options for one order.")
    transitions.add_argument("--order-id", required=True)
    transitions.add_argument("--role", default="")

    submit = sub.add_parser("submit", help="Validate and apply a status change.")
    submit.add_argument("--order-id", required=True)
    submit.add_argument("--role", default="")
    submit.add_argument("--target", required=True)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    # ------------------------------------------------------------------
    # Load config and snapshot
    # ------------------------------------------------------------------

    cfg = DeskConfig() if args.config is None else DeskConfig.from_json_obj(_load_json(args.config))
    service = InMemoryOrderService.from_json_obj(_load_json(args.snapshot))

    bus = _build_event_bus(args.audit_log)
    try:
        view = OrdersView(event_bus=bus, config=cfg)
        view.refresh(service)

        if args.command == "search":
            return _cmd_search(args, view)
        if args.command == "transitions":
            return _cmd_transitions(args, view, cfg)
        return _cmd_submit(args, view, cfg, service, bus)
    finally:
        bus.close()


if __name__ == "__main__":
    sys.exit(main())
