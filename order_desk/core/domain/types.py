"""Core shared data models and schemas.

This module defines the canonical Pydantic models for the snapshots consumed
from the order-service collaborator: products, orders, order history and the
status update reply. These types mirror the JSON schemas under
``order_desk/core/schemas`` and are treated as read-only snapshots.
"""

# pylint: disable=missing-class-docstring
from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any, Final, Literal

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class OrderStatus(StrEnum):
    ORDERED = "ORDERED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class Role(StrEnum):
    """Caller roles after normalization (see ``roles.normalize_role``)."""

    STANDARD = "STANDARD"
    ELEVATED = "ELEVATED"


# Sentinel accepted by the order filter meaning "no status restriction".
STATUS_FILTER_ALL: Final[str] = "ALL"

StatusFilter = OrderStatus | Literal["ALL"]


# ---------------------------------------------------------------------------
# Catalog models
# ---------------------------------------------------------------------------


class Product(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = ""
    sku: str = ""
    price: float | None = Field(default=None, ge=0)
    metadata: dict[str, Any] | None = None

    # The catalog collaborator sends timestamps and other bookkeeping we do
    # not care about; keep them, never validate them.
    model_config = ConfigDict(extra="allow", frozen=True)


# ---------------------------------------------------------------------------
# Order models
# ---------------------------------------------------------------------------


class Order(BaseModel):
    """
    Read-only order snapshot.

    Notes:
    - current_status is mutated only by the backend; the client proposes
      changes through the status change gate and re-reads the snapshot.
    """

    id: str = Field(..., min_length=1)
    product_id: str = Field(..., min_length=1)
    current_status: OrderStatus = OrderStatus.ORDERED

    user_id: int | None = None
    quantity: int | None = Field(default=None, gt=0)
    metadata: dict[str, Any] | None = None

    model_config = ConfigDict(extra="allow", frozen=True)


class OrderHistoryEntry(BaseModel):
    """One append-only audit record of a status change."""

    # Empty for the creation record on some backends.
    previous_status: OrderStatus | None = None
    new_status: OrderStatus
    updated_by: int | str
    updated_at: datetime

    model_config = ConfigDict(extra="allow", frozen=True)


class StatusUpdateResult(BaseModel):
    order_id: str = Field(..., min_length=1)
    previous_status: OrderStatus
    current_status: OrderStatus
    updated_at: datetime

    model_config = ConfigDict(extra="forbid", frozen=True)
